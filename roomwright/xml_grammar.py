"""
Declaration pass for the XML definition grammar.

    <game title="..." author="...">What the game is about
      <help>Hints shown by the help command</help>
      <location id="hall" name="Hall" threshold="10" exitMessage="...">A draughty hall.
        <item id="key" name="key" value="1" weight="1">A small brass key.</item>
        <connection dir="n" target="study">
          <obstacle id="door" name="door" status="true" errorMsg="...">An oak door.
            <item-ref id="key"/>
          </obstacle>
        </connection>
      </location>
    </game>
"""

import logging
import xml.sax

from roomwright.errors import InvalidDefinition
from roomwright.model import Direction, Item, Location, Obstacle
from roomwright.tables import DefinitionTables

logger = logging.getLogger(__name__)

# element -> (allowed parent, required attributes)
ELEMENTS = {
    'game': (None, ('title', 'author')),
    'help': ('game', ()),
    'location': ('game', ('id', 'name')),
    'item': ('location', ('id', 'name', 'value', 'weight')),
    'connection': ('location', ('dir', 'target')),
    'obstacle': ('connection', ('id', 'name', 'status', 'errorMsg')),
    'item-ref': ('obstacle', ('id',)),
    'obstacle-ref': ('obstacle', ('id',)),
}


def _normalise(parts):
    return ''.join(parts).replace('\t', '').replace('\n', '')


class _Open:
    """An element whose end tag has not been seen yet."""

    def __init__(self, name, attributes, line):
        self.name = name
        self.attributes = attributes
        self.line = line
        self.text = []


class DefinitionHandler(xml.sax.ContentHandler):
    def __init__(self):
        super().__init__()
        self.tables = DefinitionTables()
        self.stack = []
        self._locator = None
        # children of the location being read, declared once it is complete
        self._items = []
        self._connections = []
        self._obstacles = []
        self._direction = None
        self._refs = ([], [])

    def setDocumentLocator(self, locator):
        self._locator = locator

    @property
    def line(self):
        return self._locator.getLineNumber() if self._locator is not None else None

    def _fail(self, message, line=None):
        raise InvalidDefinition(message, line if line is not None else self.line)

    # ==========================================
    # SAX CALLBACKS
    # ==========================================

    def startElement(self, name, attrs):
        if name not in ELEMENTS:
            self._fail(f"unknown element <{name}>")
        parent, required = ELEMENTS[name]
        actual_parent = self.stack[-1].name if self.stack else None
        if actual_parent != parent:
            where = f"inside <{actual_parent}>" if actual_parent else "as the root"
            self._fail(f"<{name}> is not allowed {where}")
        attributes = dict(attrs.items())
        for key in required:
            if key not in attributes:
                self._fail(f"<{name}> is missing the '{key}' attribute")

        if name == 'connection':
            direction = Direction.from_keyword(attributes['dir'])
            if direction is None:
                self._fail(f"unknown direction keyword '{attributes['dir']}'")
            self._direction = direction
            self._connections.append((direction, attributes['target']))
        elif name == 'obstacle':
            self._refs = ([], [])
        elif name == 'item-ref':
            self._refs[0].append(attributes['id'])
        elif name == 'obstacle-ref':
            self._refs[1].append(attributes['id'])

        self.stack.append(_Open(name, attributes, self.line))

    def characters(self, content):
        if self.stack:
            self.stack[-1].text.append(content)

    def endElement(self, name):
        element = self.stack.pop()
        text = _normalise(element.text)
        attributes = element.attributes

        if name == 'game':
            self.tables.declare_game(attributes['title'], attributes['author'], text)
        elif name == 'help':
            self.tables.special_help = text
        elif name == 'item':
            item = Item(attributes['id'], attributes['name'], text,
                        self._number(attributes, 'value', element.line),
                        self._number(attributes, 'weight', element.line))
            self._items.append((item, element.line))
        elif name == 'obstacle':
            status = attributes['status'].lower() == 'true'
            obstacle = Obstacle(attributes['id'], attributes['name'], text, status,
                                attributes['errorMsg'], self._direction)
            self._obstacles.append((obstacle, self._refs[0], self._refs[1], element.line))
        elif name == 'location':
            self._end_location(element, text)

    def endDocument(self):
        if self.tables.title is None:
            self._fail("the document has no <game> root")

    # ==========================================
    # HELPERS
    # ==========================================

    def _number(self, attributes, key, line):
        try:
            return int(attributes[key])
        except ValueError:
            self._fail(f"'{key}' must be a whole number, found '{attributes[key]}'", line)

    def _end_location(self, element, description):
        attributes = element.attributes
        has_threshold = 'threshold' in attributes
        if has_threshold != ('exitMessage' in attributes):
            self._fail("'threshold' and 'exitMessage' go together", element.line)
        try:
            location = Location(
                attributes['id'], attributes['name'], description,
                self._number(attributes, 'threshold', element.line) if has_threshold else None,
                attributes.get('exitMessage'),
            )
        except ValueError as e:
            self._fail(str(e), element.line)

        location_id = location.id
        self.tables.declare_location(location, element.line)
        for item, line in self._items:
            self.tables.declare_item(location_id, item, line)
        for direction, target in self._connections:
            self.tables.declare_connection(location_id, direction, target)
        for obstacle, item_refs, obstacle_refs, line in self._obstacles:
            self.tables.declare_obstacle(location_id, obstacle, item_refs, obstacle_refs, line)

        self._items, self._connections, self._obstacles = [], [], []


def declare(stream):
    """
    Input: a readable stream holding an XML document.
    Returns: DefinitionTables (nothing linked yet).
    Anything that is not a well formed definition raises InvalidDefinition.
    """
    handler = DefinitionHandler()
    parser = xml.sax.make_parser()
    parser.setFeature(xml.sax.handler.feature_external_ges, False)
    parser.setContentHandler(handler)
    try:
        parser.parse(stream)
    except xml.sax.SAXParseException as e:
        raise InvalidDefinition(e.getMessage(), e.getLineNumber()) from e
    except (xml.sax.SAXException, OSError) as e:
        raise InvalidDefinition(f"could not read the XML definition: {e}") from e

    handler.tables.check_complete()
    logger.debug("XML definition declared %d locations", len(handler.tables.locations))
    return handler.tables
