import logging

from rich.console import Console
from rich.theme import Theme

from roomwright import report
from roomwright.config import GameConfig
from roomwright.parser import CommandParser
from roomwright.world import CommandHistory

logger = logging.getLogger(__name__)

ENGINE_INFO = "ROOMWRIGHT - AN ENGINE FOR TEXT ADVENTURES\nVersion 1.0"

# --- THEME ---
custom_theme = Theme({
    "info": "bold #b0d8e3",       # Pale Cyan
    "text": "default",
    "dim": "dim",
    "warning": "bold #ffafaf",    # Soft red
    "success": "bold #a3be8c",    # Soft green
})


class Engine:
    """
    The turn loop: read a line, run the matching command, show what happened.

    Input lines come from the console, or from any iterable of strings
    (scripted play and tests).
    """

    DEFAULTS = {
        'message.prompt': "> ",
        'message.unknownCommand': "Pardon?",
        'message.locationWithItems': "This location contains the following items: ",
        'message.locationWithoutItems': "This location has no items.",
        'message.playerScore': "Player score: ",
        'message.gameOver': "GAME OVER",
        'flag.showEngineInfo': True,
        'flag.showGameInfo': True,
        'flag.autodescribeFirstLocation': True,
        'flag.showLocationItems': True,
        'flag.showItemsValue': True,
        'flag.showItemsWeight': True,
        'flag.showConnections': True,
        'flag.showConnectionsState': True,
        'limit.commandHistorySize': 1,
    }

    def __init__(self, state, config=None, console=None):
        self.state = state
        self.config = config if config is not None else GameConfig()
        self.console = console if console is not None else Console(theme=custom_theme)
        self.parser = CommandParser(state, self.config)
        state.history = CommandHistory(self.setting('limit.commandHistorySize'))

    def setting(self, key):
        return self.config.lookup(key, self.DEFAULTS[key])

    def say(self, text, style=None):
        # Game text is plain: "[CLOSED]" must not be read as markup
        self.console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)

    # ==========================================
    # ONE LINE
    # ==========================================

    def process(self, line):
        """
        Input: raw player line.
        Returns: the executed Command, or None if no command recognised the line.
        Successful commands are counted and recorded for undo.
        """
        command = self.parser.parse(line)
        if command is None:
            logger.debug("Unrecognised line %r", line)
            return None
        if command.execute():
            self.state.record_execution(command)
            self.state.history.record(command)
        return command

    def turn(self, line):
        command = self.process(line)
        if command is None:
            self.say(self.setting('message.unknownCommand'), style="warning")
            return

        self.say(command.result)
        if self.state.has_events():
            self.say(self.state.report_events(), style="success")
            if self.setting('flag.showItemsValue'):
                self.say("\n" + report.score(self.state, self.setting('message.playerScore'),
                                             self.setting('message.gameOver')), style="info")
            else:
                self.say(self.setting('message.gameOver'), style="info")
            self.state.clear_events()

    # ==========================================
    # SESSION
    # ==========================================

    def introduction(self):
        location = self.state.current_location

        if self.setting('flag.showEngineInfo'):
            self.say(ENGINE_INFO, style="info")
            self.say("")
        if self.setting('flag.showGameInfo'):
            self.say(self.state.world.information())
            self.say("")
        if self.setting('flag.autodescribeFirstLocation'):
            self.say(location.name)
            self.say(location.description)
            self.say("")
        if self.setting('flag.showLocationItems'):
            if location.items.is_empty():
                self.say(self.setting('message.locationWithoutItems'))
            else:
                self.say(self.setting('message.locationWithItems') + "\n" + report.item_listing(
                    location.items,
                    self.setting('flag.showItemsValue'),
                    self.setting('flag.showItemsWeight'),
                ))
            self.say("")
        if self.setting('flag.showConnections'):
            self.say(report.connections(location, self.setting('flag.showConnectionsState')))

    def read_line(self, lines):
        prompt = self.setting('message.prompt')
        if lines is None:
            try:
                return self.console.input(prompt, markup=False)
            except EOFError:
                return None
        line = next(lines, None)
        if line is not None:
            line = line.rstrip("\r\n")
            self.say(prompt + line, style="dim")
        return line

    def run(self, lines=None):
        """
        Plays until the session ends or input runs out.
        Input: optional iterable of lines; None reads from the console.
        """
        self.state.history.clear()
        self.state.clear_events()
        self.introduction()

        source = iter(lines) if lines is not None else None
        while not self.state.is_ended():
            line = self.read_line(source)
            if line is None:
                logger.debug("Input exhausted")
                break
            self.turn(line)
