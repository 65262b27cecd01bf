"""
Process-wide default logger and module-level shortcuts.

The default logger writes text to stdout at DEBUG level and is ready as
soon as the package is imported.
"""

import sys
from collections.abc import Mapping
from typing import Any, TextIO

from .base import Logger
from .levels import Level, parse_level

_default_logger = Logger(sys.stdout, "", Level.DEBUG)


def get_default_logger() -> Logger:
    """Return the process-wide default logger."""
    return _default_logger


def debug(template: str, *args: Any, **fields: Any) -> None:
    _default_logger.debug(template, *args, **fields)


def info(template: str, *args: Any, **fields: Any) -> None:
    _default_logger.info(template, *args, **fields)


def warn(template: str, *args: Any, **fields: Any) -> None:
    _default_logger.warn(template, *args, **fields)


warning = warn


def error(template: str, *args: Any, **fields: Any) -> None:
    _default_logger.error(template, *args, **fields)


def fatal(template: str, *args: Any, **fields: Any) -> None:
    _default_logger.fatal(template, *args, **fields)


def log(level: Level | str, template: str, *args: Any, **fields: Any) -> None:
    _default_logger.log(level, template, *args, **fields)


def with_field(key: str, value: Any) -> Logger:
    return _default_logger.with_field(key, value)


def with_fields(fields: Mapping[str, Any] | None = None, **kwargs: Any) -> Logger:
    return _default_logger.with_fields(fields, **kwargs)


def with_error(err: BaseException) -> Logger:
    return _default_logger.with_error(err)


def set_level(level: Level | str) -> None:
    _default_logger.set_level(level)


def set_output(output: TextIO) -> None:
    _default_logger.set_output(output)


def set_colored(colored: bool) -> None:
    _default_logger.set_colored(colored)


def set_structured(structured: bool) -> None:
    _default_logger.set_structured(structured)


__all__ = [
    "get_default_logger",
    "debug",
    "info",
    "warn",
    "warning",
    "error",
    "fatal",
    "log",
    "with_field",
    "with_fields",
    "with_error",
    "set_level",
    "set_output",
    "set_colored",
    "set_structured",
    "parse_level",
]
