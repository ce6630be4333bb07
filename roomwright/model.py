from enum import Enum

from roomwright.errors import DuplicateItemError, ItemNotFoundError, NoExitThresholdError


# ==========================================
# DIRECTIONS
# ==========================================

class Direction(Enum):
    NORTH = "n"
    NORTHEAST = "ne"
    EAST = "e"
    SOUTHEAST = "se"
    SOUTH = "s"
    SOUTHWEST = "sw"
    WEST = "w"
    NORTHWEST = "nw"
    UP = "u"
    DOWN = "d"
    IN = "i"
    OUT = "o"

    @property
    def keyword(self):
        return self.value

    def opposite(self):
        return _OPPOSITES[self]

    @classmethod
    def from_keyword(cls, word):
        """Short keyword only ('n', 'sw', ...). Returns None when unknown."""
        for direction in cls:
            if direction.value == word:
                return direction
        return None

    @classmethod
    def lookup(cls, word):
        """Keyword or full name, any case."""
        word = word.lower()
        for direction in cls:
            if direction.value == word or direction.name.lower() == word:
                return direction
        return None


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.NORTHEAST: Direction.SOUTHWEST,
    Direction.EAST: Direction.WEST,
    Direction.SOUTHEAST: Direction.NORTHWEST,
    Direction.SOUTH: Direction.NORTH,
    Direction.SOUTHWEST: Direction.NORTHEAST,
    Direction.WEST: Direction.EAST,
    Direction.NORTHWEST: Direction.SOUTHEAST,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.IN: Direction.OUT,
    Direction.OUT: Direction.IN,
}


# ==========================================
# CORE OBJECT MODEL
# ==========================================

class Item:
    """A portable thing. Two items are the same only if they are the same object."""

    __slots__ = ('_id', '_name', '_description', '_value', '_weight')

    def __init__(self, id, name, description, value, weight):
        if name is None or description is None:
            raise ValueError("an item needs a name and a description")
        self._id = id
        self._name = name
        self._description = description
        self._value = int(value)
        self._weight = int(weight)

    @property
    def id(self):
        return self._id

    @property
    def name(self):
        return self._name

    @property
    def description(self):
        return self._description

    @property
    def value(self):
        return self._value

    @property
    def weight(self):
        return self._weight

    def to_state(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'value': self.value,
            'weight': self.weight
        }

    def __repr__(self):
        return f"Item[{self.name}]"


class ItemRepository:
    """Insertion-ordered set of items, compared by identity."""

    def __init__(self, items=()):
        self._items = {}
        for item in items:
            self.add(item)

    def add(self, item):
        if item is None:
            raise ValueError("cannot store None")
        if item in self._items:
            raise DuplicateItemError(f"{item!r} is already stored here")
        self._items[item] = None

    def remove(self, item):
        if item is None:
            raise ValueError("cannot remove None")
        if item not in self._items:
            raise ItemNotFoundError(f"{item!r} is not stored here")
        del self._items[item]

    def find(self, name):
        """All items called `name`, oldest first."""
        if name is None:
            raise ValueError("name is required")
        return [item for item in self._items if item.name == name]

    @property
    def total_value(self):
        return sum(item.value for item in self._items)

    @property
    def total_weight(self):
        return sum(item.weight for item in self._items)

    def is_empty(self):
        return not self._items

    def __contains__(self, item):
        return item in self._items

    def __iter__(self):
        return iter(list(self._items))

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"ItemRepository[{', '.join(item.name for item in self._items)}]"


class Obstacle:
    def __init__(self, id, name, description, status, error_message, direction):
        if None in (id, name, description, error_message, direction):
            raise ValueError("an obstacle needs id, name, description, error message and direction")
        self.id = id
        self.name = name
        self.description = description
        self.status = bool(status)
        self.error_message = error_message
        self.direction = direction
        self.bounded_items = []
        self.bounded_obstacles = []

    def bind_item(self, item):
        if item is None:
            raise ValueError("cannot bind None")
        self.bounded_items.append(item)

    def bind_obstacle(self, obstacle):
        if obstacle is None:
            raise ValueError("cannot bind None")
        self.bounded_obstacles.append(obstacle)

    def has_bounded_items(self):
        return bool(self.bounded_items)

    def unlocks_with(self, item):
        return any(bound is item for bound in self.bounded_items)

    def toggle(self):
        # Coupled obstacles flip on every toggle, one level deep.
        self.status = not self.status
        for other in self.bounded_obstacles:
            other.status = not other.status

    def to_state(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'status': self.status,
            'error_message': self.error_message,
            'direction': self.direction.name,
            'item_refs': [item.id for item in self.bounded_items],
            'obstacle_refs': [obstacle.id for obstacle in self.bounded_obstacles]
        }

    def __repr__(self):
        return f"Obstacle[{self.name}]"


class Location:
    def __init__(self, id, name, description, exit_threshold=None, exit_message=None):
        if id is None or name is None or description is None:
            raise ValueError("a location needs id, name and description")
        if (exit_threshold is None) != (exit_message is None):
            raise ValueError("exit threshold and exit message go together")
        self.id = id
        self.name = name
        self.description = description
        self._exit_threshold = None if exit_threshold is None else int(exit_threshold)
        self._exit_message = exit_message
        self.items = ItemRepository()
        self.connections = {}  # Direction -> location id
        self.obstacles = {}  # Direction -> Obstacle

    def has_exit_threshold(self):
        return self._exit_threshold is not None

    @property
    def exit_threshold(self):
        if not self.has_exit_threshold():
            raise NoExitThresholdError(f"{self!r} has no exit threshold")
        return self._exit_threshold

    @property
    def exit_message(self):
        if not self.has_exit_threshold():
            raise NoExitThresholdError(f"{self!r} has no exit threshold")
        return self._exit_message

    def connect(self, direction, location_id):
        if direction is None or location_id is None:
            raise ValueError("direction and target are required")
        self.connections[direction] = location_id

    def has_connection(self, direction):
        return direction in self.connections

    def place_obstacle(self, direction, obstacle):
        if direction is None or obstacle is None:
            raise ValueError("direction and obstacle are required")
        self.obstacles[direction] = obstacle

    def remove_obstacle(self, direction):
        self.obstacles.pop(direction, None)

    def obstacle(self, direction):
        return self.obstacles.get(direction)

    def has_obstacle(self, direction):
        return direction in self.obstacles

    def obstacle_status(self, direction):
        obstacle = self.obstacles.get(direction)
        return obstacle.status if obstacle is not None else False

    def to_state(self):
        state = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'items': [item.id for item in self.items],
            'connections': {d.name: target for d, target in self.connections.items()},
            'obstacles': {d.name: obstacle.id for d, obstacle in self.obstacles.items()}
        }
        if self.has_exit_threshold():
            state['exit_threshold'] = self._exit_threshold
            state['exit_message'] = self._exit_message
        return state

    def __repr__(self):
        return f"Location[{self.name}]"


class WorldModel:
    """
    Arena of every entity produced by resolution.
    Locations point at each other by id; `neighbor` turns the id into the object.
    """

    def __init__(self, title="", author="", description="", special_help=None):
        self.title = title
        self.author = author
        self.description = description
        self.special_help = special_help
        self.locations = {}
        self.items = {}
        self.obstacles = {}
        self.initial_location_id = None

    def add_location(self, location):
        self.locations[location.id] = location
        if self.initial_location_id is None:
            self.initial_location_id = location.id

    def location(self, location_id):
        return self.locations[location_id]

    @property
    def initial_location(self):
        return self.locations[self.initial_location_id]

    def neighbor(self, location, direction):
        target = location.connections.get(direction)
        if target is None:
            return None
        return self.locations.get(target)

    def information(self):
        return "\n".join([self.title, self.author, self.description])

    def __repr__(self):
        return f"WorldModel[{self.title}]"
