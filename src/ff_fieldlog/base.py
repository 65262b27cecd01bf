"""
Leveled logger with immutable field chaining, built on structlog.
"""

import sys
import threading
import time
from collections.abc import Callable, Mapping
from typing import Any, TextIO

import structlog
from structlog.types import Processor

from .fields import Fields
from .levels import Level, parse_level
from .processors import JSONRenderer, NanoTimeStamper, TextRenderer, format_message


class SinkLogger:
    """
    Minimal structlog logger that writes each rendered line to a sink.

    The sink only needs a write(str) method; flush() is called when present.
    Each line goes out in a single write call.
    """

    def __init__(self, file: TextIO | None = None, prefix: str = ""):
        self._file = file if file is not None else sys.stdout
        self.prefix = prefix

    def msg(self, message: str) -> None:
        self._file.write(f"{self.prefix}{message}\n")
        flush = getattr(self._file, "flush", None)
        if flush is not None:
            flush()

    def __repr__(self) -> str:
        return f"<SinkLogger(file={self._file!r}, prefix={self.prefix!r})>"


class Logger:
    """
    Thread-safe leveled logger.

    A Logger owns its level, output stream, color and structured flags, and
    a set of context fields. The setters change the logger in place; the
    with_field()/with_fields()/with_error() methods leave it untouched and
    return a new Logger carrying the extra fields.

    Every render+write happens under the logger's lock, so concurrent
    calls never interleave their lines. Derived loggers share the lock of
    the logger they were derived from.

    Example:
        logger = Logger(sys.stderr, level=Level.INFO)
        request_logger = logger.with_fields(request_id="abc", user="ann")
        request_logger.info("fetched %d rows", 42)
    """

    def __init__(
        self,
        output: TextIO | None = None,
        prefix: str = "",
        level: Level | str = Level.DEBUG,
        *,
        colored: bool = True,
        structured: bool = False,
        fields: Mapping[str, Any] | None = None,
        clock: Callable[[], int] = time.time_ns,
        exit_func: Callable[[int], Any] = sys.exit,
    ):
        """
        Initialize a logger.

        Args:
            output: Stream to write lines to (default: sys.stdout)
            prefix: Text prepended to every line
            level: Minimum level that gets written
            colored: Whether text output colors the level token
            structured: Whether to write JSON instead of text
            fields: Initial context fields
            clock: Callable returning epoch nanoseconds
            exit_func: Called with status 1 after a fatal line is written
        """
        self._lock = threading.Lock()
        self._output = output if output is not None else sys.stdout
        self._prefix = prefix
        self._level = parse_level(level)
        self._colored = colored
        self._structured = structured
        self._fields = fields if isinstance(fields, Fields) else Fields(fields)
        self._clock = clock
        self._exit = exit_func
        self._adapter = self._build_adapter()

    def _get_processors(self) -> list[Processor]:
        text = TextRenderer(colors=self._colored)
        renderer = JSONRenderer(fallback=text) if self._structured else text
        return [NanoTimeStamper(self._clock), renderer]

    def _build_adapter(self) -> structlog.BoundLogger:
        return structlog.BoundLogger(
            SinkLogger(self._output, self._prefix),
            processors=self._get_processors(),
            context={},
        )

    # Configuration

    def set_level(self, level: Level | str) -> None:
        """Set the minimum level that gets written."""
        level = parse_level(level)
        with self._lock:
            self._level = level

    def set_colored(self, colored: bool) -> None:
        """Enable or disable ANSI colors in text output."""
        with self._lock:
            self._colored = colored
            self._adapter = self._build_adapter()

    def set_structured(self, structured: bool) -> None:
        """Switch between JSON (True) and text (False) output."""
        with self._lock:
            self._structured = structured
            self._adapter = self._build_adapter()

    def set_output(self, output: TextIO) -> None:
        """Write subsequent lines to output, keeping the prefix."""
        with self._lock:
            self._output = output
            self._adapter = self._build_adapter()

    @property
    def level(self) -> Level:
        return self._level

    @property
    def output(self) -> TextIO:
        return self._output

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def colored(self) -> bool:
        return self._colored

    @property
    def structured(self) -> bool:
        return self._structured

    @property
    def fields(self) -> Fields:
        return self._fields

    # Field chaining

    def with_fields(self, fields: Mapping[str, Any] | None = None, **kwargs: Any) -> "Logger":
        """
        Return a new logger with additional context fields.

        The new logger starts from a snapshot of this logger's level,
        output, prefix and flags. Changes made to either logger afterwards
        are not seen by the other.

        Args:
            fields: Mapping of fields to add
            **kwargs: More fields, applied after the mapping

        Returns:
            New Logger instance
        """
        with self._lock:
            new_logger = self.__class__(
                self._output,
                self._prefix,
                self._level,
                colored=self._colored,
                structured=self._structured,
                fields=self._fields.with_fields(fields, **kwargs),
                clock=self._clock,
                exit_func=self._exit,
            )
            # Loggers sharing an adapter share its lock so their lines never interleave
            new_logger._adapter = self._adapter
            new_logger._lock = self._lock
        return new_logger

    def with_field(self, key: str, value: Any) -> "Logger":
        """Return a new logger with one additional context field."""
        return self.with_fields({key: value})

    def with_error(self, err: BaseException) -> "Logger":
        """Return a new logger with the error message as the "error" field."""
        return self.with_field("error", str(err))

    # Logging

    def _log(self, level: Level, template: str, args: tuple, fields: dict[str, Any]) -> None:
        # Unlocked read; a concurrent set_level() may or may not apply here
        if level < self._level:
            return

        try:
            with self._lock:
                message = format_message(template, args)
                record_fields = self._fields.with_fields(fields) if fields else self._fields
                self._adapter.msg(message, level=level, fields=record_fields)
        finally:
            # Exit even when the sink failed to write
            if level >= Level.FATAL:
                self._exit(1)

    def debug(self, template: str, *args: Any, **fields: Any) -> None:
        """Log a debug message."""
        self._log(Level.DEBUG, template, args, fields)

    def info(self, template: str, *args: Any, **fields: Any) -> None:
        """Log an info message."""
        self._log(Level.INFO, template, args, fields)

    def warn(self, template: str, *args: Any, **fields: Any) -> None:
        """Log a warning message."""
        self._log(Level.WARN, template, args, fields)

    warning = warn

    def error(self, template: str, *args: Any, **fields: Any) -> None:
        """Log an error message."""
        self._log(Level.ERROR, template, args, fields)

    def fatal(self, template: str, *args: Any, **fields: Any) -> None:
        """
        Log a fatal message, then exit the process with status 1.

        The exit happens after the line is written and cannot be skipped;
        use error() to log without exiting.
        """
        self._log(Level.FATAL, template, args, fields)

    def log(self, level: Level | str, template: str, *args: Any, **fields: Any) -> None:
        """
        Log at a specific level.

        Args:
            level: Level or level name (debug, info, warn, error, fatal)
            template: Message template
            *args: Template arguments
            **fields: Fields for this call only
        """
        self._log(parse_level(level), template, args, fields)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(level={self._level.name}, prefix={self._prefix!r}, "
            f"fields={dict(self._fields)!r})"
        )
