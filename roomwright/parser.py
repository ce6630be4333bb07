from roomwright.commands.items import DropCommand, ExamineCommand, TakeCommand
from roomwright.commands.movement import GoCommand
from roomwright.commands.obstacles import CloseCommand, OpenCommand
from roomwright.commands.session import (
    HelpCommand,
    LoadCommand,
    LookCommand,
    QuitCommand,
    SaveCommand,
    UndoCommand,
)

# Priority order. If configured keywords collide, the earlier command wins.
PROTOTYPES = (
    HelpCommand,
    GoCommand,
    LookCommand,
    ExamineCommand,
    TakeCommand,
    DropCommand,
    UndoCommand,
    QuitCommand,
    OpenCommand,
    CloseCommand,
    SaveCommand,
    LoadCommand,
)


class CommandParser:
    """One prototype per command kind; every line gets fresh clones."""

    def __init__(self, state, config=None, prototypes=PROTOTYPES):
        self.prototypes = [cls(state, config, parser=self) for cls in prototypes]

    def parse(self, line):
        """
        Input: raw player line.
        Returns: a parsed Command ready to execute, or None when nothing matches.
        """
        for prototype in self.prototypes:
            command = prototype.clone()
            if command.parse(line):
                return command
        return None

    def report_help(self):
        return "\n".join(prototype.help() for prototype in self.prototypes)
