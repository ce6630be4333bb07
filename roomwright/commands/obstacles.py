from roomwright.commands.base import Command
from roomwright.model import Direction
from roomwright.world import CommandKind


class ObstacleCommand(Command):
    """
    open/close <direction> [with <item name>]

    Toggles the obstacle on that exit when it is in the state `locks` says
    (True: it must be blocking; False: it must be clear). An obstacle with
    bounded items only moves for one of them, named in the with-clause and
    carried by the player.
    """

    locks = None

    DEFAULTS = {
        'keyword.withCommand': "with",
    }

    direction = None
    item_name = None
    obstacle = None

    def parse_arguments(self, words):
        if not words:
            return False
        self.direction = Direction.lookup(words[0])
        if self.direction is None:
            return False
        rest = words[1:]
        if not rest:
            return True
        if rest[0].lower() != self.setting('keyword.withCommand').lower() or len(rest) < 2:
            return False
        self.item_name = " ".join(rest[1:])
        return True

    def _unlocking_item_ok(self, obstacle):
        if not obstacle.has_bounded_items():
            return True
        if self.item_name is None:
            return False
        carried = self.state.find_in_inventory(self.item_name)
        return bool(carried) and obstacle.unlocks_with(carried[0])

    def run(self):
        state = self.state
        if not state.has_connection(self.direction) or not state.has_obstacle(self.direction):
            self._result = self.message('failure')
            return False
        obstacle = state.obstacle(self.direction)
        if obstacle.status != self.locks or not self._unlocking_item_ok(obstacle):
            self._result = self.message('failure')
            return False

        obstacle.toggle()
        self.obstacle = obstacle
        self._result = self.message('success')
        return True

    def revert(self):
        # The obstacle is remembered, so this works after the player has moved on
        if self.obstacle is None or self.obstacle.status == self.locks:
            self._result = self.message('undoFailure')
            return False
        self.obstacle.toggle()
        self._result = self.message('undoSuccess')
        return True


class OpenCommand(ObstacleCommand):
    kind = CommandKind.OPEN
    key = 'openCommand'
    locks = True

    DEFAULTS = {
        'keyword.openCommand': "open",
        'keyword.openCommand.abbrev': "o",
        'keyword.openCommand.alt': "unlock",
        'message.openCommand.help': "(open|o|unlock) <dir> [WITH <objectName>]",
        'message.openCommand.success': "Obstacle Unlocked",
        'message.openCommand.failure': "Unlock Fail",
        'message.openCommand.undoSuccess': "Obstacle Locked",
        'message.openCommand.undoFailure': "The obstacle cannot be locked",
    }


class CloseCommand(ObstacleCommand):
    kind = CommandKind.CLOSE
    key = 'closeCommand'
    locks = False

    DEFAULTS = {
        'keyword.closeCommand': "close",
        'keyword.closeCommand.abbrev': "c",
        'keyword.closeCommand.alt': "lock",
        'message.closeCommand.help': "(close|c|lock) <dir> [WITH <objectName>]",
        'message.closeCommand.success': "Obstacle Locked",
        'message.closeCommand.failure': "Lock Fail",
        'message.closeCommand.undoSuccess': "Obstacle Unlocked",
        'message.closeCommand.undoFailure': "The obstacle cannot be Unlocked",
    }
