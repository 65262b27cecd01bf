"""
Immutable field sets with insertion-time redaction.
"""

from collections.abc import Iterator, Mapping
from typing import Any

# Keys whose values are never stored, compared case-insensitively
SENSITIVE_KEYS = frozenset({"password", "token", "credit_card", "secret"})

FILTERED = "[FILTERED]"


def redact(key: str, value: Any) -> Any:
    """Return the value to store for key, replacing sensitive values."""
    if key.lower() in SENSITIVE_KEYS:
        return FILTERED
    return value


class Fields(Mapping[str, Any]):
    """
    Copy-on-extend mapping of context fields.

    A Fields instance is never modified after construction. Extending it
    with with_field()/with_fields() returns a new instance holding a copy
    of the parent's entries plus the new ones.

    Example:
        base = Fields({"service": "api"})
        request = base.with_fields(request_id="abc", token="s3cr3t")
        request["token"]  # "[FILTERED]"
        "request_id" in base  # False
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Any] | None = None):
        self._entries: dict[str, Any] = {}
        if entries:
            for key, value in entries.items():
                self._entries[key] = redact(key, value)

    def with_field(self, key: str, value: Any) -> "Fields":
        """Return a new Fields with one entry added."""
        return self.with_fields({key: value})

    def with_fields(self, entries: Mapping[str, Any] | None = None, **kwargs: Any) -> "Fields":
        """
        Return a new Fields with every given entry added.

        Args:
            entries: Mapping of entries to add
            **kwargs: More entries, applied after the mapping

        Returns:
            New Fields instance; this instance is left untouched
        """
        new = Fields()
        new._entries = dict(self._entries)
        for source in (entries or {}, kwargs):
            for key, value in source.items():
                new._entries[key] = redact(key, value)
        return new

    def __getitem__(self, key: str) -> Any:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Fields({self._entries!r})"
