from roomwright.commands.base import Command, LocationReport
from roomwright.model import Direction
from roomwright.world import CommandKind


def _direction_defaults():
    defaults = {}
    for direction in Direction:
        name = direction.name.lower()
        defaults[f'keyword.goCommand.{name}'] = name
        defaults[f'keyword.goCommand.{name}.abbrev'] = direction.keyword
    return defaults


class GoCommand(LocationReport, Command):
    kind = CommandKind.GO
    key = 'goCommand'

    DEFAULTS = {
        'keyword.goCommand': "go",
        'keyword.goCommand.abbrev': "g",
        'keyword.goCommand.alt': "move",
        'message.goCommand.help': "(go|g|move) <direction>",
        'message.goCommand.failure': "There is no way in that direction.",
        'message.goCommand.undoFailure': "There is no return to the previous location.",
        **_direction_defaults(),
    }

    direction = None

    def direction_for(self, word):
        word = word.lower()
        for direction in Direction:
            stem = f'keyword.goCommand.{direction.name.lower()}'
            if word in (self.setting(stem).lower(), self.setting(f'{stem}.abbrev').lower()):
                return direction
        return None

    def parse_arguments(self, words):
        # Anything after the direction is ignored
        if not words:
            return False
        self.direction = self.direction_for(words[0])
        return self.direction is not None

    def run(self):
        if not self.state.has_connection(self.direction):
            self._result = self.message('failure')
            return False
        if self.state.obstacle_status(self.direction):
            self._result = self.state.obstacle(self.direction).error_message
            return False
        self.state.move(self.direction)
        self._result = self.describe_location()
        return True

    def revert(self):
        back = self.direction.opposite()
        if not self.state.has_connection(back):
            self._result = self.message('undoFailure')
            return False
        self.state.move(back)
        self._result = self.describe_location()
        return True
