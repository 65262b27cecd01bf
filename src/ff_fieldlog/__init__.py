"""
ff-fieldlog: Leveled, field-aware logging for Fenixflow applications.

Provides thread-safe loggers with text and JSON output using structlog,
plus a process-wide default logger behind module-level functions.
"""

__version__ = "0.1.0"

from .base import Logger
from .config import configure_logging, get_config, get_logger, reset_config
from .default import (
    debug,
    error,
    fatal,
    get_default_logger,
    info,
    log,
    set_colored,
    set_level,
    set_output,
    set_structured,
    warn,
    warning,
    with_error,
    with_field,
    with_fields,
)
from .exceptions import FieldLogError, UnknownLevelError
from .fields import FILTERED, SENSITIVE_KEYS, Fields
from .levels import Level, parse_level

__all__ = [
    "Logger",
    "Level",
    "Fields",
    "FILTERED",
    "SENSITIVE_KEYS",
    "FieldLogError",
    "UnknownLevelError",
    "parse_level",
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
    "configure_logging",
    "get_config",
    "get_logger",
    "reset_config",
]
