import argparse
import contextlib
import logging
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from roomwright.config import load_config
from roomwright.engine import Engine, custom_theme
from roomwright.errors import ConfigError, InvalidDefinition, SnapshotError
from roomwright.persistence import load_game
from roomwright.resolver import load_definition
from roomwright.world import WorldState

logger = logging.getLogger(__name__)


def setup_logging(debug=False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        prog="roomwright",
        description="Play a text adventure from a world definition (text or XML) or a saved game.",
    )
    parser.add_argument("definition", help="World definition file, or a saved game")
    parser.add_argument("-c", "--config", help="YAML file overriding messages, keywords, flags and limits")
    parser.add_argument("-i", "--input", help="Read player commands from this file instead of the keyboard")
    parser.add_argument("-o", "--output", help="Write the transcript to this file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def open_world(path, config):
    """
    Input: path to a definition or a saved game.
    Returns: WorldState ready to play.
    A file that is not a valid definition gets a second chance as a saved game.
    """
    history_size = config.number('limit.commandHistorySize', 1)
    try:
        return WorldState(load_definition(path), history_size)
    except InvalidDefinition as definition_error:
        logger.debug("Not a definition, trying %s as a saved game", path)
        try:
            return load_game(path, history_size)
        except (SnapshotError, OSError):
            raise definition_error from None


def main(argv=None):
    load_dotenv()
    args = parse_arguments(argv)
    setup_logging(args.debug)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error("%s", e)
        return 1

    try:
        state = open_world(args.definition, config)
    except InvalidDefinition as e:
        logger.error("Could not open %s: %s", args.definition, e)
        return 1
    except OSError as e:
        logger.error("Could not read %s: %s", args.definition, e)
        return 1

    with contextlib.ExitStack() as stack:
        console = Console(theme=custom_theme)
        if args.output:
            try:
                transcript = stack.enter_context(open(args.output, "w", encoding="utf-8"))
            except OSError as e:
                logger.error("Could not write %s: %s", args.output, e)
                return 1
            console = Console(file=transcript, theme=custom_theme, color_system=None)
        lines = None
        if args.input:
            try:
                lines = stack.enter_context(open(args.input, "r", encoding="utf-8"))
            except OSError as e:
                logger.error("Could not read %s: %s", args.input, e)
                return 1

        engine = Engine(state, config, console)
        try:
            engine.run(lines)
        except KeyboardInterrupt:
            console.print("\nExiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
