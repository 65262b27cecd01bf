"""
Log levels and level name parsing.
"""

from enum import IntEnum

from .exceptions import UnknownLevelError


class Level(IntEnum):
    """
    Ordered log severity.

    Only the ordering is meaningful; the integer values are not a stable
    serialization format.
    """

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    def __str__(self) -> str:
        return self.name


# ANSI escape codes used to decorate the level token in text output
RESET = "\033[0m"

LEVEL_COLORS: dict[Level, str] = {
    Level.DEBUG: "\033[36m",  # cyan
    Level.INFO: "\033[32m",  # green
    Level.WARN: "\033[33m",  # yellow
    Level.ERROR: "\033[31m",  # red
    Level.FATAL: "\033[35m",  # magenta
}

_NAME_TO_LEVEL: dict[str, Level] = {level.name: level for level in Level}


def parse_level(name: str | Level) -> Level:
    """
    Parse a level name, case-insensitively.

    Args:
        name: Level name such as "info" or "WARN", or a Level

    Returns:
        The matching Level

    Raises:
        UnknownLevelError: If the name matches no level
    """
    if isinstance(name, Level):
        return name
    level = _NAME_TO_LEVEL.get(str(name).upper())
    if level is None:
        raise UnknownLevelError(name)
    return level
