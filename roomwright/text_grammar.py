"""
Declaration pass for the line/token definition grammar.

    game "Title" "Author" "What the game is about"
    help "Hints shown by the help command"
    location hall "Hall" "A draughty hall." 10 "You escaped with the loot!"
    item key "key" "A small brass key." 1 1
    obstacle door "door" "An oak door." true "The door is locked." itemRef key
    n study
    s garden

Tokens are bare words, integers or quoted strings, "double" or 'single' (one line each).
Everything after '#' on a line is a comment.
"""

import logging
import re
from collections import namedtuple

from roomwright.errors import InvalidDefinition
from roomwright.model import Direction, Item, Location, Obstacle
from roomwright.tables import DefinitionTables

logger = logging.getLogger(__name__)

Token = namedtuple('Token', ['value', 'quoted', 'line'])

TOKEN_PATTERN = re.compile(r'''
    "(?P<quoted>[^"\n]*)"      # quoted string, single line
  | '(?P<squoted>[^'\n]*)'     # same with single quotes
  | (?P<comment>\#[^\n]*)      # comment to end of line
  | (?P<newline>\n)
  | (?P<space>[^\S\n]+)
  | (?P<word>[^\s"'\#]+)
  | (?P<unclosed>["'])
''', re.VERBOSE)

NUMBER = re.compile(r'-?\d+$')


def tokenize(text):
    tokens = []
    line = 1
    for match in TOKEN_PATTERN.finditer(text):
        kind = match.lastgroup
        if kind == 'newline':
            line += 1
        elif kind in ('quoted', 'squoted'):
            tokens.append(Token(match.group(kind), True, line))
        elif kind == 'word':
            tokens.append(Token(match.group('word'), False, line))
        elif kind == 'unclosed':
            raise InvalidDefinition("unterminated quoted string", line)
    return tokens


class _Reader:
    def __init__(self, tokens):
        self.tokens = tokens
        self.position = 0

    @property
    def line(self):
        if self.position < len(self.tokens):
            return self.tokens[self.position].line
        return self.tokens[-1].line if self.tokens else 1

    def peek(self):
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def next(self, what):
        token = self.peek()
        if token is None:
            raise InvalidDefinition(f"definition ends where {what} was expected", self.line)
        self.position += 1
        return token

    def at_keyword(self, *keywords):
        token = self.peek()
        return token is not None and not token.quoted and token.value in keywords

    def text(self, what):
        return self.next(what).value

    def number(self, what):
        token = self.next(what)
        if token.quoted or not NUMBER.match(token.value):
            raise InvalidDefinition(f"{what} must be a whole number, found '{token.value}'", token.line)
        return int(token.value)

    def at_number(self):
        token = self.peek()
        return token is not None and not token.quoted and NUMBER.match(token.value) is not None


def declare(text):
    """
    Input: the whole definition as text.
    Returns: DefinitionTables (nothing linked yet).
    """
    reader = _Reader(tokenize(text))
    tables = DefinitionTables()

    first = reader.peek()
    if first is None:
        raise InvalidDefinition("the definition is empty", 1)
    if first.quoted or first.value != 'game':
        raise InvalidDefinition(f"first token must be 'game', found '{first.value}'", first.line)

    reader.next('game')
    tables.declare_game(reader.text('game title'), reader.text('game author'),
                        reader.text('game description'))

    while reader.peek() is not None:
        if reader.at_keyword('location'):
            _read_location(reader, tables)
        elif reader.at_keyword('help'):
            reader.next('help')
            tables.special_help = reader.text('help text')
        else:
            token = reader.peek()
            raise InvalidDefinition(f"expected 'location' or 'help', found '{token.value}'", token.line)

    tables.check_complete()
    logger.debug("Text definition declared %d locations", len(tables.locations))
    return tables


def _read_location(reader, tables):
    line = reader.next('location').line
    location_id = reader.text('location id')
    name = reader.text('location name')
    description = reader.text('location description')

    # --- Optional exit threshold ---
    if reader.at_number():
        threshold = reader.number('exit threshold')
        location = Location(location_id, name, description, threshold, reader.text('exit message'))
    else:
        location = Location(location_id, name, description)
    tables.declare_location(location, line)

    # --- Items ---
    while reader.at_keyword('item'):
        item_line = reader.next('item').line
        item = Item(
            reader.text('item id'),
            reader.text('item name'),
            reader.text('item description'),
            reader.number('item value'),
            reader.number('item weight'),
        )
        tables.declare_item(location_id, item, item_line)

    # --- Exits, each optionally announced by an obstacle ---
    pending = None
    while reader.peek() is not None and not reader.at_keyword('location', 'help'):
        if reader.at_keyword('obstacle'):
            if pending is not None:
                raise InvalidDefinition("an obstacle must be followed by the exit it blocks", reader.line)
            pending = _read_obstacle(reader)
            continue
        if reader.at_keyword('item'):
            raise InvalidDefinition(
                f"items of '{location_id}' must be declared before its exits", reader.line
            )

        token = reader.next('direction')
        direction = None if token.quoted else Direction.from_keyword(token.value)
        if direction is None:
            raise InvalidDefinition(f"unknown direction keyword '{token.value}'", token.line)
        tables.declare_connection(location_id, direction, reader.text('target location id'))

        if pending is not None:
            fields, item_refs, obstacle_refs, obstacle_line = pending
            obstacle = Obstacle(*fields, direction=direction)
            tables.declare_obstacle(location_id, obstacle, item_refs, obstacle_refs, obstacle_line)
            pending = None

    if pending is not None:
        raise InvalidDefinition("an obstacle must be followed by the exit it blocks", pending[3])


def _read_obstacle(reader):
    line = reader.next('obstacle').line
    fields = (
        reader.text('obstacle id'),
        reader.text('obstacle name'),
        reader.text('obstacle description'),
        reader.text('obstacle status').lower() == 'true',
        reader.text('obstacle error message'),
    )
    item_refs = []
    while reader.at_keyword('itemRef'):
        reader.next('itemRef')
        item_refs.append(reader.text('item reference'))
    obstacle_refs = []
    while reader.at_keyword('obsRef'):
        reader.next('obsRef')
        obstacle_refs.append(reader.text('obstacle reference'))
    return fields, item_refs, obstacle_refs, line
