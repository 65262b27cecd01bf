"""
Pytest configuration and fixtures for ff-fieldlog tests.
"""

import io
from unittest.mock import Mock

import pytest
from ff_fieldlog import Level, Logger, get_default_logger, reset_config

# 2023-11-14 22:13:20.123456789 UTC
FIXED_NS = 1_700_000_000_123_456_789


@pytest.fixture
def stream():
    """In-memory output stream."""
    return io.StringIO()


@pytest.fixture
def exit_func():
    """Stand-in for process exit."""
    return Mock()


@pytest.fixture
def make_logger(stream, exit_func):
    """Factory for uncolored loggers writing to the stream fixture."""

    def _make(level=Level.DEBUG, prefix="", **kwargs):
        kwargs.setdefault("colored", False)
        kwargs.setdefault("clock", lambda: FIXED_NS)
        kwargs.setdefault("exit_func", exit_func)
        return Logger(stream, prefix, level, **kwargs)

    return _make


@pytest.fixture
def lines(stream):
    """Return the lines written to the stream fixture so far."""

    def _lines():
        return stream.getvalue().splitlines()

    return _lines


@pytest.fixture
def restore_default_logger():
    """Put the default logger back the way it was after the test."""
    logger = get_default_logger()
    original_output = logger.output
    yield logger
    reset_config()
    logger.set_output(original_output)


@pytest.fixture
def fixed_ns():
    """Epoch nanoseconds returned by the make_logger clock."""
    return FIXED_NS
