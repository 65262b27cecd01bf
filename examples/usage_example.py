#!/usr/bin/env python3
"""
Example usage of ff-fieldlog.

Created by Ben Moag (Fenixflow)
"""

import sys

import ff_fieldlog
from ff_fieldlog import Level, Logger, UnknownLevelError, parse_level


def default_logger_example():
    """Log through the process-wide default logger."""
    ff_fieldlog.info("service starting on port %d", 8080)
    ff_fieldlog.with_fields(user="ann", password="hunter2").info("login attempt")
    # Output: [INFO]  ... login attempt user="ann" password="[FILTERED]"


def instance_example():
    """Create an independent logger writing JSON to stderr."""
    logger = Logger(sys.stderr, "payments: ", Level.INFO)
    logger.set_structured(True)

    request_logger = logger.with_fields({"request_id": "req-67890", "amount": 99.99})
    request_logger.info("charge accepted")
    request_logger.debug("not written, below INFO")

    try:
        raise ConnectionError("gateway timeout")
    except ConnectionError as e:
        request_logger.with_error(e).error("charge failed, retrying later")


def level_from_user_input(name: str) -> Level:
    """Parse a level name, falling back to INFO for bad input."""
    try:
        return parse_level(name)
    except UnknownLevelError as e:
        ff_fieldlog.warn("ignoring bad level %r", e.input)
        return Level.INFO


def main():
    default_logger_example()
    instance_example()
    ff_fieldlog.set_level(level_from_user_input("verbose"))


if __name__ == "__main__":
    main()
