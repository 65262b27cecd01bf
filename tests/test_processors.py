"""
Tests for the stamping and rendering processors.
"""

import json
import re

from ff_fieldlog import Fields, Level
from ff_fieldlog.levels import LEVEL_COLORS, RESET
from ff_fieldlog.processors import (
    JSONRenderer,
    NanoTimeStamper,
    TextRenderer,
    format_iso_time,
    format_message,
    format_text_time,
    format_value,
)

TEXT_TIME = r"\d{4}\.\d{2}\.\d{2} \d{2}:\d{2}:\d{2}\.\d{3}"


class Version:
    def __init__(self, major, minor):
        self.major = major
        self.minor = minor

    def __str__(self):
        return f"v{self.major}.{self.minor}"


class Opaque:
    pass


def _event(fixed_ns, fields=None, *, message="hello", level=Level.INFO):
    return {"event": message, "level": level, "fields": Fields(fields), "timestamp": fixed_ns}


class TestFormatMessage:
    """Test printf-style message formatting."""

    def test_substitutes_arguments(self):
        assert format_message("user %s has %d items", ("ann", 3)) == "user ann has 3 items"

    def test_no_arguments_uses_template_verbatim(self):
        assert format_message("100% done", ()) == "100% done"

    def test_mapping_argument(self):
        assert format_message("%(user)s logged in", ({"user": "ann"},)) == "ann logged in"

    def test_bad_template_is_reported_inline(self):
        """Template errors become part of the message instead of raising."""
        message = format_message("%d items", ("many",))

        assert message.startswith("%d items %!(BADFORMAT:")
        assert "'many'" in message

        assert format_message("%d items", (float("inf"),)).startswith("%d items %!(BADFORMAT:")
        assert format_message("%c", (10**10,)).startswith("%c %!(BADFORMAT:")

    def test_argument_count_mismatch(self):
        assert "%!(BADFORMAT:" in format_message("%s and %s", ("one",))
        assert "%!(BADFORMAT:" in format_message("%s", ("one", "two"))


class TestFormatValue:
    """Test text rendering of field values."""

    def test_strings_are_quoted(self):
        assert format_value("ann") == '"ann"'
        assert format_value('say "hi"') == '"say \\"hi\\""'

    def test_exceptions_use_their_message(self):
        assert format_value(ValueError("disk full")) == '"disk full"'

    def test_custom_str_is_quoted(self):
        assert format_value(Version(1, 2)) == '"v1.2"'

    def test_scalars_are_not_quoted(self):
        assert format_value(42) == "42"
        assert format_value(3.5) == "3.5"
        assert format_value(True) == "True"
        assert format_value(None) == "None"

    def test_other_values_use_repr(self):
        assert format_value([1, 2]) == "[1, 2]"
        assert format_value({"a": 1}) == "{'a': 1}"
        assert format_value(Opaque()).startswith("<")


class TestTimestamps:
    """Test timestamp stamping and formatting."""

    def test_stamper_uses_clock(self, fixed_ns):
        stamper = NanoTimeStamper(clock=lambda: fixed_ns)
        assert stamper(None, "msg", {})["timestamp"] == fixed_ns

    def test_iso_time_keeps_nanoseconds(self, fixed_ns):
        iso = format_iso_time(fixed_ns)
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.123456789[+-]\d{2}:\d{2}", iso)

    def test_text_time_has_milliseconds(self, fixed_ns):
        assert re.fullmatch(r"\d{4}\.\d{2}\.\d{2} \d{2}:\d{2}:\d{2}\.123", format_text_time(fixed_ns))


class TestTextRenderer:
    """Test the human-readable line renderer."""

    def test_plain_line(self, fixed_ns):
        event = _event(fixed_ns, {"user": "ann", "attempts": 2})
        line = TextRenderer(colors=False)(None, "msg", event)
        assert re.fullmatch(rf'\[INFO\]  {TEXT_TIME} hello user="ann" attempts=2', line)

    def test_line_without_fields(self, fixed_ns):
        line = TextRenderer(colors=False)(None, "msg", _event(fixed_ns, level=Level.ERROR))
        assert re.fullmatch(rf"\[ERROR\] {TEXT_TIME} hello", line)

    def test_colors_only_wrap_level_token(self, fixed_ns):
        event = _event(fixed_ns, {"user": "ann"}, level=Level.WARN)
        colored = TextRenderer(colors=True)(None, "msg", event)
        plain = TextRenderer(colors=False)(None, "msg", event)

        assert colored.startswith(f"{LEVEL_COLORS[Level.WARN]}[WARN] {RESET} ")
        assert colored.replace(LEVEL_COLORS[Level.WARN], "").replace(RESET, "") == plain

    def test_each_level_has_its_color(self):
        assert LEVEL_COLORS == {
            Level.DEBUG: "\033[36m",
            Level.INFO: "\033[32m",
            Level.WARN: "\033[33m",
            Level.ERROR: "\033[31m",
            Level.FATAL: "\033[35m",
        }


class TestJSONRenderer:
    """Test the structured record renderer."""

    def test_record_shape(self, fixed_ns):
        line = JSONRenderer()(None, "msg", _event(fixed_ns, {"user": "ann", "attempts": 2}))
        record = json.loads(line)

        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["timestamp"] == format_iso_time(fixed_ns)
        assert record["user"] == "ann"
        assert record["attempts"] == 2

    def test_message_bearing_values(self, fixed_ns):
        event = _event(fixed_ns, {"error": ValueError("disk full"), "version": Version(1, 2)})
        record = json.loads(JSONRenderer()(None, "msg", event))

        assert record["error"] == "disk full"
        assert record["version"] == "v1.2"

    def test_reserved_keys_are_namespaced(self, fixed_ns):
        """Fields named like reserved keys do not overwrite them."""
        event = _event(fixed_ns, {"level": "custom", "message": "other", "timestamp": 0})
        record = json.loads(JSONRenderer()(None, "msg", event))

        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["x_level"] == "custom"
        assert record["x_message"] == "other"
        assert record["x_timestamp"] == 0

    def test_prefixed_field_keeps_its_name(self, fixed_ns):
        """A field already named x_<key> is never overwritten by a renamed one."""
        for fields in (
            {"level": "renamed", "x_level": "literal"},
            {"x_level": "literal", "level": "renamed"},
        ):
            record = json.loads(JSONRenderer()(None, "msg", _event(fixed_ns, fields)))

            assert record["level"] == "INFO"
            assert record["x_level"] == "literal"
            assert record["x_x_level"] == "renamed"

    def test_unserializable_value_falls_back_to_text(self, fixed_ns):
        event = _event(fixed_ns, {"blob": Opaque(), "tags": {"a"}})
        line = JSONRenderer(fallback=TextRenderer(colors=False))(None, "msg", event)

        assert line.startswith("[INFO]  ")
        assert "blob=<" in line
        assert "tags={'a'}" in line
