"""
Configuration system for ff-fieldlog.

Supports environment variables, config files, and programmatic configuration.
Settings are applied to the default logger and used by get_logger() for new
loggers.
"""

import json
import os
from pathlib import Path
from typing import Any, TextIO

from .base import Logger
from .default import get_default_logger
from .levels import parse_level

_FORMATS = ("text", "json")

_DEFAULT_CONFIG: dict[str, Any] = {
    "level": "DEBUG",
    "format": "text",
    "colors": True,
}

# Global configuration
_GLOBAL_CONFIG: dict[str, Any] = dict(_DEFAULT_CONFIG)


def configure_logging(
    level: str | None = None,
    format: str | None = None,
    colors: bool | None = None,
    output: TextIO | None = None,
    config_file: str | Path | None = None,
    use_env: bool = True,
) -> None:
    """
    Configure global logging settings and apply them to the default logger.

    Priority, lowest to highest: current settings, config file,
    environment variables, explicit arguments.

    Args:
        level: Minimum log level (DEBUG, INFO, WARN, ERROR, FATAL)
        format: Output format (text, json)
        colors: Whether to use colors in text output
        output: Stream for the default logger to write to
        config_file: Path to JSON config file
        use_env: Whether to read from environment variables

    Raises:
        UnknownLevelError: If the resulting level is not a known level
        ValueError: If the resulting format is not text or json
    """
    new_config = dict(_GLOBAL_CONFIG)

    # Load from config file if provided
    if config_file:
        config_path = Path(config_file)
        if config_path.exists():
            with open(config_path) as f:
                new_config.update(json.load(f))

    # Load from environment variables if enabled
    if use_env:
        new_config.update(_load_env_config())

    # Apply explicit arguments (highest priority)
    if level is not None:
        new_config["level"] = level
    if format is not None:
        new_config["format"] = format
    if colors is not None:
        new_config["colors"] = colors

    new_config["level"] = parse_level(new_config["level"]).name
    new_config["format"] = str(new_config["format"]).lower()
    if new_config["format"] not in _FORMATS:
        raise ValueError(f"Unknown log format: {new_config['format']}")

    _GLOBAL_CONFIG.clear()
    _GLOBAL_CONFIG.update(new_config)
    _apply_to_default(output)


def _load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config = {}

    # FF_LOG_LEVEL
    if level := os.getenv("FF_LOG_LEVEL"):
        config["level"] = level.upper()

    # FF_LOG_FORMAT
    if format := os.getenv("FF_LOG_FORMAT"):
        config["format"] = format.lower()

    # FF_LOG_COLORS
    if colors := os.getenv("FF_LOG_COLORS"):
        config["colors"] = colors.lower() in ("true", "1", "yes")

    return config


def _apply_to_default(output: TextIO | None = None) -> None:
    logger = get_default_logger()
    logger.set_level(_GLOBAL_CONFIG["level"])
    logger.set_structured(_GLOBAL_CONFIG["format"] == "json")
    logger.set_colored(bool(_GLOBAL_CONFIG["colors"]))
    if output is not None:
        logger.set_output(output)


def get_logger(prefix: str = "", output: TextIO | None = None, **kwargs: Any) -> Logger:
    """
    Create a new independent logger from the global configuration.

    Args:
        prefix: Text prepended to every line
        output: Output stream (default: sys.stdout)
        **kwargs: Overrides for Logger arguments (level, colored, structured, fields, ...)

    Returns:
        New Logger instance

    Example:
        # Uses global config
        logger = get_logger("[billing] ")

        # Override format
        logger = get_logger(structured=True)
    """
    kwargs.setdefault("level", _GLOBAL_CONFIG["level"])
    kwargs.setdefault("structured", _GLOBAL_CONFIG["format"] == "json")
    kwargs.setdefault("colored", bool(_GLOBAL_CONFIG["colors"]))
    return Logger(output, prefix, **kwargs)


def get_config() -> dict[str, Any]:
    """Get current global configuration."""
    return _GLOBAL_CONFIG.copy()


def reset_config() -> None:
    """Reset configuration to defaults and reapply it to the default logger."""
    _GLOBAL_CONFIG.clear()
    _GLOBAL_CONFIG.update(_DEFAULT_CONFIG)
    _apply_to_default()
