"""
Whole-world snapshots as plain JSON.

A snapshot holds every entity field, links as ids, and the play progress
(current location, inventory, ended flag, pending events, command counters).
The command history is not saved.
"""

import json
import logging

from roomwright.errors import RoomwrightError, SnapshotError
from roomwright.model import Direction, Item, Location, Obstacle, WorldModel
from roomwright.world import WorldState

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


def snapshot(state):
    world = state.world
    return {
        'version': SNAPSHOT_VERSION,
        'game': {
            'title': world.title,
            'author': world.author,
            'description': world.description,
            'special_help': world.special_help
        },
        'initial_location': world.initial_location_id,
        'locations': [location.to_state() for location in world.locations.values()],
        'items': [item.to_state() for item in world.items.values()],
        'obstacles': [obstacle.to_state() for obstacle in world.obstacles.values()],
        'current_location': state.current_location_id,
        'inventory': [item.id for item in state.inventory],
        'ended': state.is_ended(),
        'events': state.events,
        'counters': state.counters()
    }


def _rebuild(data, history_size):
    if data.get('version') != SNAPSHOT_VERSION:
        raise SnapshotError(f"unsupported snapshot version {data.get('version')!r}")

    game = data['game']
    world = WorldModel(game['title'], game['author'], game['description'], game.get('special_help'))

    # 1. Items
    items = {}
    for s in data['items']:
        items[s['id']] = Item(s['id'], s['name'], s['description'], s['value'], s['weight'])

    # 2. Obstacles (bindings once all of them exist)
    obstacles = {}
    for s in data['obstacles']:
        obstacles[s['id']] = Obstacle(s['id'], s['name'], s['description'], s['status'],
                                      s['error_message'], Direction[s['direction']])
    for s in data['obstacles']:
        obstacle = obstacles[s['id']]
        for item_id in s['item_refs']:
            obstacle.bind_item(items[item_id])
        for other_id in s['obstacle_refs']:
            obstacle.bind_obstacle(obstacles[other_id])

    # 3. Locations
    for s in data['locations']:
        location = Location(s['id'], s['name'], s['description'],
                            s.get('exit_threshold'), s.get('exit_message'))
        for item_id in s['items']:
            location.items.add(items[item_id])
        for direction, target in s['connections'].items():
            location.connect(Direction[direction], target)
        for direction, obstacle_id in s['obstacles'].items():
            location.place_obstacle(Direction[direction], obstacles[obstacle_id])
        world.add_location(location)

    world.items = items
    world.obstacles = obstacles
    world.initial_location_id = data['initial_location']
    if world.initial_location_id not in world.locations:
        raise SnapshotError(f"unknown initial location '{world.initial_location_id}'")

    # 4. Progress
    state = WorldState(world, history_size)
    if data['current_location'] not in world.locations:
        raise SnapshotError(f"unknown current location '{data['current_location']}'")
    state.current_location_id = data['current_location']
    for item_id in data['inventory']:
        state.inventory.add(items[item_id])
    state.set_progress(data['ended'], data['events'], data['counters'])
    return state


def restore(data, history_size=1):
    """
    Input: a dict produced by snapshot().
    Returns: a fresh WorldState.
    """
    try:
        return _rebuild(data, history_size)
    except SnapshotError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError, RoomwrightError) as e:
        raise SnapshotError(f"broken snapshot: {e!r}") from e


def save_game(state, path):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(snapshot(state), f, indent=2)
    logger.info("Saved '%s' to %s", state.world.title, path)


def load_game(path, history_size=1):
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise SnapshotError(f"{path} is not a saved game: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotError(f"{path} is not a saved game")
    state = restore(data, history_size)
    logger.info("Loaded '%s' from %s", state.world.title, path)
    return state
