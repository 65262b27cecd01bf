"""
structlog processors that stamp and render ff-fieldlog records.

Every log call produces an event dict of the form::

    {"event": message, "level": Level, "fields": Fields, "timestamp": ns}

which is turned into a single output line by TextRenderer or JSONRenderer.
"""

import json
import numbers
import time
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import structlog

from .levels import LEVEL_COLORS, RESET, Level

# Keys owned by the JSON record itself
RESERVED_KEYS = frozenset({"timestamp", "level", "message"})

# Prefix applied to field keys that collide with RESERVED_KEYS
RESERVED_PREFIX = "x_"

_NANOS_PER_SECOND = 1_000_000_000


def format_message(template: str, args: tuple) -> str:
    """
    Apply printf-style substitution of args into template.

    A bad template never raises; the problem is reported inline instead.

    Args:
        template: Message template, e.g. "user %s logged in"
        args: Positional arguments for the template

    Returns:
        The formatted message
    """
    if not args:
        return str(template)
    # Same convention as the stdlib: a lone mapping feeds %(name)s lookups
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        args = args[0]
    try:
        return str(template) % args
    except Exception as e:
        return f"{template} %!(BADFORMAT: {e}) args={args!r}"


def _local_time(timestamp_ns: int) -> tuple[datetime, int]:
    seconds, fraction = divmod(timestamp_ns, _NANOS_PER_SECOND)
    return datetime.fromtimestamp(seconds).astimezone(), fraction


def format_iso_time(timestamp_ns: int) -> str:
    """Format epoch nanoseconds as ISO-8601 local time with nanoseconds."""
    moment, fraction = _local_time(timestamp_ns)
    offset = moment.strftime("%z")
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{fraction:09d}{offset[:3]}:{offset[3:]}"


def format_text_time(timestamp_ns: int) -> str:
    """Format epoch nanoseconds as "YYYY.MM.DD HH:MM:SS.mmm" local time."""
    moment, fraction = _local_time(timestamp_ns)
    return f"{moment:%Y.%m.%d %H:%M:%S}.{fraction // 1_000_000:03d}"


def _has_custom_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def format_value(value: Any) -> str:
    """
    Render a field value for the text format.

    Strings, exceptions and objects with their own __str__ are quoted.
    Numbers, booleans and None use str(); anything else uses repr().
    """
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, BaseException):
        return _quote(str(value))
    if value is None or isinstance(value, (bool, numbers.Number)):
        return str(value)
    if _has_custom_str(value):
        return _quote(str(value))
    return repr(value)


def _json_default(value: Any) -> Any:
    """Serialize message-bearing and stringable values; reject the rest."""
    if isinstance(value, BaseException) or _has_custom_str(value):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class NanoTimeStamper:
    """
    Add the current time, in epoch nanoseconds, to the event dict.

    Args:
        clock: Callable returning epoch nanoseconds
        key: Event dict key to store the timestamp under
    """

    __slots__ = ("_clock", "key")

    def __init__(self, clock: Callable[[], int] = time.time_ns, key: str = "timestamp"):
        self._clock = clock
        self.key = key

    def __call__(self, logger: Any, name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict[self.key] = self._clock()
        return event_dict


class TextRenderer:
    """
    Render an event dict as one human-readable line.

    Output looks like::

        [INFO]  2026.10.19 14:03:07.512 user logged in user="ann" attempts=2

    Args:
        colors: Wrap the level token in an ANSI color for its level
    """

    def __init__(self, colors: bool = True):
        self.colors = colors

    def __call__(self, logger: Any, name: str, event_dict: dict[str, Any]) -> str:
        level: Level = event_dict["level"]
        token = f"{'[' + level.name + ']':<7}"
        if self.colors:
            token = f"{LEVEL_COLORS[level]}{token}{RESET}"

        parts = [token, format_text_time(event_dict["timestamp"]), event_dict["event"]]
        for key, value in event_dict.get("fields", {}).items():
            parts.append(f"{key}={format_value(value)}")
        return " ".join(parts)


class JSONRenderer:
    """
    Render an event dict as one JSON object.

    Fields become top-level keys. A field named like a reserved key
    (timestamp, level, message) is emitted as x_<key>. Fields already named
    x_<key> keep their name, and the renamed field takes the prefix again
    (x_x_<key>) until its key is free, so no field is dropped whatever the
    insertion order. If any value cannot be serialized, the record is
    rendered by the fallback renderer instead.

    Args:
        fallback: Renderer used when serialization fails
        **dumps_kw: Extra keyword arguments for json.dumps
    """

    def __init__(self, fallback: TextRenderer | None = None, **dumps_kw: Any):
        self.fallback = fallback or TextRenderer(colors=False)
        dumps_kw.setdefault("default", _json_default)
        self._json = structlog.processors.JSONRenderer(**dumps_kw)

    def __call__(self, logger: Any, name: str, event_dict: dict[str, Any]) -> str:
        level: Level = event_dict["level"]
        record: dict[str, Any] = {
            "timestamp": format_iso_time(event_dict["timestamp"]),
            "level": level.name,
            "message": event_dict["event"],
        }
        renamed = []
        for key, value in event_dict.get("fields", {}).items():
            if key in RESERVED_KEYS:
                renamed.append((key, value))
            else:
                record[key] = value
        for key, value in renamed:
            while key in record:
                key = RESERVED_PREFIX + key
            record[key] = value

        try:
            return self._json(logger, name, record)
        except (TypeError, ValueError, OverflowError):
            return self.fallback(logger, name, event_dict)
