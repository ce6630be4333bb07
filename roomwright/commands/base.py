import copy

from roomwright import report
from roomwright.config import GameConfig
from roomwright.errors import UnexecutedCommandError, UnparsedCommandError


class Command:
    """
    One player command: parse -> execute -> (maybe) undo.

    Subclasses set `kind`, `key` (the configuration stem, e.g. 'takeCommand')
    and a DEFAULTS table of every configuration key they read. Defaults merge
    down the class hierarchy, so shared keys live on the base classes.
    """

    kind = None
    key = None
    # Whole line must be the keyword ('undo', 'quit')
    bare = False

    DEFAULTS = {
        'message.command.undoSuccess': "Undo success: ",
    }

    def __init__(self, state, config=None, parser=None):
        self.state = state
        self.config = config if config is not None else GameConfig()
        self.parser = parser
        self._parsed = False
        self._executed = False
        self._result = None

    # ==========================================
    # CONFIGURATION
    # ==========================================

    @classmethod
    def defaults(cls):
        merged = {}
        for klass in reversed(cls.__mro__):
            merged.update(vars(klass).get('DEFAULTS', {}))
        return merged

    def setting(self, key):
        return self.config.lookup(key, self.defaults()[key])

    def message(self, name):
        return self.setting(f"message.{self.key}.{name}")

    def keywords(self):
        stem = f"keyword.{self.key}"
        return tuple(self.setting(k).lower() for k in (stem, f"{stem}.abbrev", f"{stem}.alt"))

    # ==========================================
    # LIFECYCLE
    # ==========================================

    def parse(self, line):
        """
        Input: a raw player line.
        Returns: True if this command recognises it (and is now Parsed).
        """
        words = line.split()
        if not words or words[0].lower() not in self.keywords():
            return False
        if self.bare and len(words) != 1:
            return False
        if not self.parse_arguments(words[1:]):
            return False
        self._parsed = True
        return True

    def execute(self):
        if not self._parsed:
            raise UnparsedCommandError(f"{self.kind.value} has not been parsed")
        self._executed = True
        return self.run()

    def undo(self):
        if not self._parsed:
            raise UnparsedCommandError(f"{self.kind.value} has not been parsed")
        if not self._executed:
            raise UnexecutedCommandError(f"{self.kind.value} has not been executed")
        return self.revert()

    def help(self):
        return self.message('help')

    @property
    def result(self):
        if not self._parsed:
            raise UnparsedCommandError(f"{self.kind.value} has not been parsed")
        if not self._executed:
            raise UnexecutedCommandError(f"{self.kind.value} has not been executed")
        return self._result

    def clone(self):
        """Fresh, unparsed copy sharing state, config and parser."""
        twin = copy.copy(self)
        twin._parsed = False
        twin._executed = False
        twin._result = None
        return twin

    # --- Hooks for subclasses ---

    def parse_arguments(self, words):
        return not words

    def run(self):
        raise NotImplementedError

    def revert(self):
        self._result = self.setting('message.command.undoSuccess') + self.kind.value
        return True

    def __repr__(self):
        return f"{type(self).__name__}[parsed={self._parsed}, executed={self._executed}]"


class ItemNameCommand(Command):
    """Commands taking the rest of the line as an item name."""

    def parse_arguments(self, words):
        if not words:
            return False
        self.item_name = " ".join(words)
        return True


class LocationReport:
    """Mixin for commands that show the current location."""

    DEFAULTS = {
        'message.locationWithItems': "This location contains the following items: ",
        'message.locationWithoutItems': "This location has no items.",
        'flag.showLocationItems': True,
        'flag.showItemsValues': True,
        'flag.showItemsWeight': True,
        'flag.showConnections': True,
        'flag.showConnectionsState': True,
    }

    def describe_location(self):
        return report.describe_location(
            self.state.current_location,
            self.setting('message.locationWithItems'),
            self.setting('message.locationWithoutItems'),
            show_items=self.setting('flag.showLocationItems'),
            show_value=self.setting('flag.showItemsValues'),
            show_weight=self.setting('flag.showItemsWeight'),
            show_connections=self.setting('flag.showConnections'),
            show_state=self.setting('flag.showConnectionsState'),
        )
