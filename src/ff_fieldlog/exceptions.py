"""
Custom exceptions for the ff-fieldlog package.
"""


class FieldLogError(Exception):
    """Base exception for all ff-fieldlog errors."""

    pass


class UnknownLevelError(FieldLogError, ValueError):
    """Raised when a level name does not match any known level."""

    def __init__(self, input: str):
        self.input = input
        super().__init__(f"Unknown log level: {input!r}")
