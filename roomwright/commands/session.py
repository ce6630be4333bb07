import logging

from roomwright import persistence, report
from roomwright.commands.base import Command, LocationReport
from roomwright.errors import SnapshotError
from roomwright.world import CommandKind

logger = logging.getLogger(__name__)


class LookCommand(LocationReport, Command):
    kind = CommandKind.LOOK
    key = 'lookCommand'

    DEFAULTS = {
        'keyword.lookCommand': "look",
        'keyword.lookCommand.abbrev': "l",
        'keyword.lookCommand.alt': "search",
        'message.lookCommand.help': "look|l|search",
    }

    def parse_arguments(self, words):
        return True

    def run(self):
        self._result = self.describe_location()
        return True


class HelpCommand(Command):
    kind = CommandKind.HELP
    key = 'helpCommand'

    DEFAULTS = {
        'keyword.helpCommand': "help",
        'keyword.helpCommand.abbrev': "info",
        'keyword.helpCommand.alt': "about",
        'message.helpCommand.help': "help|info|about",
        'message.engineHelp': "These are the available player commands:",
        'message.helpCommand.noConfiguration': "No specific configuration file given.",
        'flag.ShowSpecialHelp': True,
        'flag.ShowHistoryStatistics': True,
        'flag.ShowActiveConfiguration': True,
    }

    def parse_arguments(self, words):
        return True

    def active_configuration(self):
        if self.config.is_empty():
            return self.message('noConfiguration')
        return "\n".join(f"{key}\n\t[{value}]" for key, value in self.config.items())

    def run(self):
        text = self.setting('message.engineHelp') + "\n" + self.parser.report_help()

        special_help = self.state.world.special_help
        if self.setting('flag.ShowSpecialHelp') and special_help:
            text += "\n\nSpecial Help: \n" + special_help
        if self.setting('flag.ShowHistoryStatistics'):
            text += "\n\nCommand Statistics: \n" + report.command_statistics(self.state)
        if self.setting('flag.ShowActiveConfiguration'):
            text += "\n\nActive Game Configuration:\n" + self.active_configuration()

        self._result = text
        return True


class QuitCommand(Command):
    kind = CommandKind.QUIT
    key = 'quitCommand'
    bare = True

    DEFAULTS = {
        'keyword.quitCommand': "quit",
        'keyword.quitCommand.abbrev': "q",
        'keyword.quitCommand.alt': "exit",
        'message.quitCommand.help': "quit|q|exit",
        'message.playerScore': "Player score: ",
        'message.gameOver': "GAME OVER",
    }

    def run(self):
        self._result = report.score(
            self.state, self.setting('message.playerScore'), self.setting('message.gameOver')
        )
        self.state.end()
        return True


class UndoCommand(Command):
    """
    Reverts the newest recorded command. The entry leaves the history even when
    its undo fails, and undo itself is never recorded (always returns False).
    """

    kind = CommandKind.UNDO
    key = 'undoCommand'
    bare = True

    DEFAULTS = {
        'keyword.undoCommand': "undo",
        'keyword.undoCommand.abbrev': "u",
        'keyword.undoCommand.alt': "reverse",
        'message.undoCommand.help': "undo|u|reverse",
        'message.undoCommand.noExecutedCommands': "There is no command that can be undone.",
    }

    def run(self):
        history = self.state.history
        if history.is_empty():
            self._result = self.message('noExecutedCommands')
            return False
        command = history.pop()
        command.undo()
        self._result = command.result
        return False


# ==========================================
# SAVE / LOAD
# ==========================================

class PathCommand(Command):
    path = None

    def parse_arguments(self, words):
        if not words:
            return False
        self.path = " ".join(words)
        return True


class SaveCommand(PathCommand):
    kind = CommandKind.SAVE
    key = 'saveCommand'

    DEFAULTS = {
        'keyword.saveCommand': "save",
        'keyword.saveCommand.abbrev': "s",
        'keyword.saveCommand.alt': "backup",
        'message.saveCommand.help': "(save|s|backup) <file path>",
        'message.saveCommand.success': "Game saved",
        'message.saveCommand.failure': "Unable to save the game",
    }

    def run(self):
        try:
            persistence.save_game(self.state, self.path)
        except (OSError, SnapshotError) as e:
            logger.warning("Could not save to %s: %s", self.path, e)
            self._result = self.message('failure')
            return False
        self._result = self.message('success')
        return True


class LoadCommand(PathCommand):
    kind = CommandKind.LOAD
    key = 'loadCommand'

    DEFAULTS = {
        'keyword.loadCommand': "load",
        'keyword.loadCommand.abbrev': "lo",
        'keyword.loadCommand.alt': "continue",
        'message.loadCommand.help': "(load|lo|continue) <file path>",
        'message.loadCommand.success': "Game loaded",
        'message.loadCommand.failure': "Unable to load the game",
    }

    def run(self):
        try:
            loaded = persistence.load_game(self.path)
        except (OSError, SnapshotError) as e:
            logger.warning("Could not load %s: %s", self.path, e)
            self._result = self.message('failure')
            return False
        self.state.replace_with(loaded)
        self._result = self.message('success')
        return True
