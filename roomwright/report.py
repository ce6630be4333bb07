"""Text shared by several commands and the turn loop."""

from roomwright.model import Direction
from roomwright.world import CommandKind

CONNECTIONS_HEADER = "The available directions from this location are: "
NO_STATISTICS = "There are no executed commands yet."


def item_line(item, show_value=True, show_weight=True):
    tags = []
    if show_value:
        tags.append(f"Value({item.value})")
    if show_weight:
        tags.append(f"Weight({item.weight})")
    if not tags:
        return item.name
    return f"{item.name} [{' '.join(tags)}]"


def item_listing(items, show_value=True, show_weight=True):
    """One item per line, in repository order."""
    return "\n".join(item_line(item, show_value, show_weight) for item in items)


def connections(location, show_state=True):
    lines = [CONNECTIONS_HEADER]
    # Direction order, not declaration order
    for direction in Direction:
        if not location.has_connection(direction):
            continue
        line = direction.name
        if show_state:
            if not location.has_obstacle(direction):
                line += " [CLEAR]"
            elif location.obstacle_status(direction):
                line += " [CLOSED]"
            else:
                line += " [OPEN]"
        lines.append(line)
    return "\n".join(lines)


def describe_location(location, with_items, without_items, show_items=True,
                      show_value=True, show_weight=True, show_connections=True,
                      show_state=True):
    """
    Input: a Location plus the messages and flags of the asking command.
    Returns: name, description, item listing and exits as one block.
    """
    parts = [location.name, location.description]
    if show_items:
        if location.items.is_empty():
            parts.append("\n" + without_items)
        else:
            listing = item_listing(location.items, show_value, show_weight)
            parts.append("\n" + with_items + "\n" + listing)
    if show_connections:
        parts.append(connections(location, show_state))
    return "\n".join(parts)


def command_statistics(state):
    """Executions and share of every command kind, then the total."""
    total = state.total_executions()
    if total == 0:
        return NO_STATISTICS
    blocks = []
    for kind in CommandKind:
        blocks.append(
            f"{kind.value}Command: \n"
            f"\tExecutions: {state.executions(kind)}\n"
            f"\tPercentage: {state.command_percentage(kind)}"
        )
    blocks.append(f"TOTAL COMMAND NUMBER: {total}")
    return "\n".join(blocks)


def score(state, player_score="Player score: ", game_over="GAME OVER"):
    return f"{player_score}{state.inventory_value()}\n{game_over}"
