from collections import deque
from enum import Enum

from roomwright.errors import (
    DuplicateItemError,
    ItemNotFoundError,
    NoConnectionError,
    NoEventsError,
    NoExecutedCommandsError,
)
from roomwright.model import ItemRepository


class CommandKind(Enum):
    HELP = "Help"
    GO = "Go"
    LOOK = "Look"
    EXAMINE = "Examine"
    TAKE = "Take"
    DROP = "Drop"
    UNDO = "Undo"
    QUIT = "Quit"
    OPEN = "Open"
    CLOSE = "Close"
    SAVE = "Save"
    LOAD = "Load"


class Transfer(Enum):
    LOCATION_TO_INVENTORY = "location_to_inventory"
    INVENTORY_TO_LOCATION = "inventory_to_location"


# ==========================================
# COMMAND HISTORY
# ==========================================

class CommandHistory:
    """
    Most recent executed commands, newest last.
    At capacity the oldest entry is evicted before the new one goes in.
    """

    def __init__(self, capacity=1):
        self.capacity = int(capacity)
        self._commands = deque(maxlen=max(self.capacity, 0))

    def record(self, command):
        if self.capacity < 1:
            return
        self._commands.append(command)

    def pop(self):
        if not self._commands:
            raise NoExecutedCommandsError("there is no command to undo")
        return self._commands.pop()

    def clear(self):
        self._commands.clear()

    def is_empty(self):
        return not self._commands

    def __len__(self):
        return len(self._commands)

    def __iter__(self):
        return iter(list(self._commands))


# ==========================================
# WORLD STATE
# ==========================================

class WorldState:
    """
    Everything that changes while playing: where the player is, what they carry,
    whether the session is over, pending events and command counters.
    The WorldModel it wraps is shared; only obstacle status and item placement mutate.
    """

    def __init__(self, world, history_size=1):
        self.world = world
        self.current_location_id = world.initial_location_id
        self.inventory = ItemRepository()
        self.history = CommandHistory(history_size)
        self._ended = False
        self._event = False
        self._events = []
        self._executions = {}
        self._total = 0

    @property
    def current_location(self):
        return self.world.location(self.current_location_id)

    # --- Movement ---

    def has_connection(self, direction):
        return self.world.neighbor(self.current_location, direction) is not None

    def move(self, direction):
        """
        Input: Direction
        Moves the player and fires the exit threshold of the destination, if any.
        """
        destination = self.world.neighbor(self.current_location, direction)
        if destination is None:
            raise NoConnectionError(f"no location {direction.name} of {self.current_location!r}")
        self.current_location_id = destination.id

        if destination.has_exit_threshold() and self.inventory_value() >= destination.exit_threshold:
            self.add_event(destination.exit_message)
            self.end()

    # --- Obstacles (absence is not an error) ---

    def has_obstacle(self, direction):
        return self.current_location.has_obstacle(direction)

    def obstacle_status(self, direction):
        return self.current_location.obstacle_status(direction)

    def obstacle(self, direction):
        return self.current_location.obstacle(direction)

    # --- Items ---

    def transfer_item(self, item, transfer):
        location_items = self.current_location.items
        if transfer is Transfer.LOCATION_TO_INVENTORY:
            source, target = location_items, self.inventory
        else:
            source, target = self.inventory, location_items

        if item not in source:
            raise ItemNotFoundError(f"{item!r} is not where it should be moved from")
        if item in target:
            raise DuplicateItemError(f"{item!r} is already where it should be moved to")
        source.remove(item)
        target.add(item)

    def find_in_inventory(self, name):
        return self.inventory.find(name)

    def find_in_location(self, name):
        return self.current_location.items.find(name)

    def inventory_value(self):
        return self.inventory.total_value

    def inventory_weight(self):
        return self.inventory.total_weight

    # --- Session ---

    def end(self):
        self._ended = True

    def is_ended(self):
        return self._ended

    # --- Events ---

    def add_event(self, message):
        self._events.append(message)
        self._event = True

    def has_events(self):
        return self._event and bool(self._events)

    def report_events(self):
        """Joins every pending event. Reading does not consume them."""
        if not self._events:
            raise NoEventsError("there are no pending events")
        return "\n".join(self._events)

    def clear_events(self):
        self._events.clear()
        self._event = False

    @property
    def events(self):
        return list(self._events)

    # --- Statistics ---

    def record_execution(self, command):
        self._executions[command.kind] = self._executions.get(command.kind, 0) + 1
        self._total += 1

    def executions(self, kind):
        return self._executions.get(kind, 0)

    def total_executions(self):
        return self._total

    def command_percentage(self, kind):
        if self._total == 0:
            raise NoExecutedCommandsError("no command has been executed yet")
        return self.executions(kind) * 100 // self._total

    # --- Snapshot support ---

    def counters(self):
        return {kind.name: count for kind, count in self._executions.items()}

    def set_progress(self, ended, events, counters):
        """Used when restoring a snapshot."""
        self._ended = bool(ended)
        self._events = list(events)
        self._event = bool(self._events)
        self._executions = {CommandKind[name]: int(count) for name, count in counters.items()}
        self._total = sum(self._executions.values())

    def replace_with(self, other):
        """Take over every piece of another state in place. History is forgotten."""
        self.world = other.world
        self.current_location_id = other.current_location_id
        self.inventory = other.inventory
        self._ended = other._ended
        self._event = other._event
        self._events = list(other._events)
        self._executions = dict(other._executions)
        self._total = other._total
        self.history.clear()

    def __repr__(self):
        return f"WorldState[{self.world.title} @ {self.current_location_id}]"
