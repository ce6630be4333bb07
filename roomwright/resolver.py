"""
Two-phase world resolution.

Phase 1 (declaration) is grammar specific: each grammar walks its source once and
fills a DefinitionTables with fully built entities plus the symbolic ids they refer to.
Phase 2 (linking) is shared: every symbolic id is swapped for the real entity.
The declaration tables themselves live in roomwright.tables.
"""

import io
import logging

from roomwright.errors import (
    InvalidDefinition,
    UnboundItemReference,
    UnboundObstacleReference,
)
from roomwright.model import WorldModel
from roomwright import text_grammar, xml_grammar

logger = logging.getLogger(__name__)


# ==========================================================
# PHASE 2: LINKING
# ==========================================================

def link(tables):
    """
    Input: a DefinitionTables filled by one of the grammars.
    Returns: a WorldModel with every reference installed.
    Raises UnboundItemReference / UnboundObstacleReference for bad obstacle bindings.
    Connections to unknown locations are dropped.
    """
    tables.check_complete()
    world = WorldModel(tables.title, tables.author, tables.description, tables.special_help)

    for location in tables.locations.values():
        world.add_location(location)

    # A. CONNECTIONS
    for location_id, exits in tables.connections.items():
        location = tables.locations[location_id]
        for direction, target_id in exits.items():
            if target_id in tables.locations:
                location.connect(direction, target_id)
            else:
                logger.warning(
                    "Dropping %s exit of '%s': unknown location '%s'",
                    direction.name, location_id, target_id,
                )

    # B. OBSTACLE PLACEMENT
    for obstacle_id, (location_id, direction) in tables.placements.items():
        tables.locations[location_id].place_obstacle(direction, tables.obstacles[obstacle_id])

    # C. BOUNDED ITEMS
    for obstacle_id, refs in tables.item_refs.items():
        obstacle = tables.obstacles[obstacle_id]
        for item_id in refs:
            if item_id not in tables.items:
                raise UnboundItemReference(obstacle_id, item_id)
            obstacle.bind_item(tables.items[item_id])

    # D. BOUNDED OBSTACLES
    for obstacle_id, refs in tables.obstacle_refs.items():
        obstacle = tables.obstacles[obstacle_id]
        for other_id in refs:
            if other_id not in tables.obstacles:
                raise UnboundObstacleReference(obstacle_id, other_id)
            obstacle.bind_obstacle(tables.obstacles[other_id])

    world.items = dict(tables.items)
    world.obstacles = dict(tables.obstacles)
    logger.debug(
        "Resolved '%s': %d locations, %d items, %d obstacles",
        world.title, len(world.locations), len(world.items), len(world.obstacles),
    )
    return world


# ==========================================================
# ENTRY POINT
# ==========================================================

def _read_source(source):
    """Raw definition: str stays str, bytes stay bytes (XML picks its own encoding)."""
    if isinstance(source, (str, bytes)):
        return source
    try:
        return source.read()
    except (OSError, ValueError) as e:
        raise InvalidDefinition(f"could not read the definition: {e}") from e


def _as_text(data):
    # The text grammar is always UTF-8, with or without a BOM
    if isinstance(data, bytes):
        try:
            return data.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise InvalidDefinition(f"the definition is not UTF-8 text: {e}") from e
    return data[1:] if data.startswith('\ufeff') else data


def resolve_definition(source):
    """
    Input: definition text (str/bytes) or a readable stream.
    Returns: WorldModel.
    XML is tried first; whatever goes wrong there, the text grammar gets a turn.
    """
    data = _read_source(source)
    stream = io.BytesIO(data) if isinstance(data, bytes) else io.StringIO(data)

    try:
        tables = xml_grammar.declare(stream)
    except InvalidDefinition as xml_error:
        logger.debug("Not an XML definition (%s), trying the text grammar", xml_error)
        try:
            tables = text_grammar.declare(_as_text(data))
        except InvalidDefinition as text_error:
            error = InvalidDefinition(
                f"not a valid definition. As XML: {xml_error}. As text: {text_error}",
            )
            error.line = text_error.line
            raise error from text_error
    return link(tables)


def load_definition(path):
    with open(path, 'rb') as f:
        return resolve_definition(f)
