from enum import Enum


class ErrorKind(Enum):
    """What went wrong, independent of which exception class carries it."""

    INVALID_DEFINITION = "invalid_definition"
    UNBOUND_ITEM_REFERENCE = "unbound_item_reference"
    UNBOUND_OBSTACLE_REFERENCE = "unbound_obstacle_reference"
    DUPLICATE_ITEM = "duplicate_item"
    ITEM_NOT_FOUND = "item_not_found"
    NO_CONNECTION = "no_connection"
    NO_EXIT_THRESHOLD = "no_exit_threshold"
    NO_EVENTS = "no_events"
    NO_EXECUTED_COMMANDS = "no_executed_commands"
    UNPARSED_COMMAND = "unparsed_command"
    UNEXECUTED_COMMAND = "unexecuted_command"
    BROKEN_SNAPSHOT = "broken_snapshot"
    BROKEN_CONFIG = "broken_config"


class RoomwrightError(Exception):
    kind = None

    def __init__(self, message=""):
        super().__init__(message or self.kind.value)


# ==========================================================
# (a) DEFINITION ERRORS - fatal, abort resolution
# ==========================================================

class InvalidDefinition(RoomwrightError):
    kind = ErrorKind.INVALID_DEFINITION

    def __init__(self, message="", line=None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class UnboundItemReference(InvalidDefinition):
    kind = ErrorKind.UNBOUND_ITEM_REFERENCE

    def __init__(self, obstacle_id, item_id):
        self.obstacle_id = obstacle_id
        self.item_id = item_id
        super().__init__(f"obstacle '{obstacle_id}' is bound to unknown item '{item_id}'")


class UnboundObstacleReference(InvalidDefinition):
    kind = ErrorKind.UNBOUND_OBSTACLE_REFERENCE

    def __init__(self, obstacle_id, target_id):
        self.obstacle_id = obstacle_id
        self.target_id = target_id
        super().__init__(f"obstacle '{obstacle_id}' is bound to unknown obstacle '{target_id}'")


# ==========================================================
# (b) STATE CONTRACT VIOLATIONS - programming errors
# ==========================================================

class DuplicateItemError(RoomwrightError):
    kind = ErrorKind.DUPLICATE_ITEM


class ItemNotFoundError(RoomwrightError):
    kind = ErrorKind.ITEM_NOT_FOUND


class NoConnectionError(RoomwrightError):
    kind = ErrorKind.NO_CONNECTION


class NoExitThresholdError(RoomwrightError):
    kind = ErrorKind.NO_EXIT_THRESHOLD


class NoEventsError(RoomwrightError):
    kind = ErrorKind.NO_EVENTS


class NoExecutedCommandsError(RoomwrightError):
    kind = ErrorKind.NO_EXECUTED_COMMANDS


class UnparsedCommandError(RoomwrightError):
    kind = ErrorKind.UNPARSED_COMMAND


class UnexecutedCommandError(RoomwrightError):
    kind = ErrorKind.UNEXECUTED_COMMAND


# ==========================================================
# (d) RESOURCE / CONFIGURATION ERRORS
# ==========================================================

class SnapshotError(RoomwrightError):
    kind = ErrorKind.BROKEN_SNAPSHOT


class ConfigError(RoomwrightError):
    kind = ErrorKind.BROKEN_CONFIG
