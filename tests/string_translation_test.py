#!/usr/bin/env python3
"""
Tests for string schema translation, including date and binary formats.
"""
from datetime import datetime, timezone

import pytest

# autopep8: off
from utils import setup
setup()
from schema_rules import ErrorCode, ShapeError, translate
from schema_rules.rules import AnyRule, BinaryRule, DateRule, StringRule
# autopep8: on


def test_string_constraints():
    """Test string length and pattern constraints."""
    rule = translate({
        "type": "string",
        "minLength": 3,
        "maxLength": 10
    })

    # Valid - within length constraints
    assert rule.validate("test").valid

    # Invalid - too short
    result = rule.validate("ab")
    assert not result.valid
    assert any("minimum is 3" in error.message for error in result.errors)

    # Invalid - too long
    result = rule.validate("this_is_too_long")
    assert not result.valid
    assert any("maximum is 10" in error.message for error in result.errors)

    # Invalid - empty string is not allowed once minLength is set
    result = rule.validate("")
    assert result.errors[0].code == ErrorCode.STRING_EMPTY

    pattern = translate({"type": "string", "pattern": "^[a-z]+$"})
    assert pattern.validate("abc").valid
    result = pattern.validate("ABC")
    assert result.errors[0].code == ErrorCode.PATTERN_MISMATCH

    # Patterns are searched, not anchored
    assert translate({"type": "string", "pattern": "b"}).validate("abc").valid


def test_empty_string_by_default():
    """Test that the empty string is accepted unless minLength says otherwise."""
    assert translate({"type": "string"}).validate("").valid
    assert translate({"type": "string", "minLength": 0}).validate("").valid
    assert not translate({"type": "string", "minLength": 1}).validate("").valid

    # The allowance is part of the rule
    assert translate({"type": "string"}).describe()["allow"] == [""]


def test_min_length_is_not_mutated():
    """Test that translating leaves the schema node as it was."""
    schema = {"type": "string", "maxLength": 5}
    translate(schema)
    assert schema == {"type": "string", "maxLength": 5}


def test_invalid_pattern():
    """Test that an uncompilable pattern fails translation."""
    with pytest.raises(ShapeError):
        translate({"type": "string", "pattern": "(unclosed"})


def test_enum_short_circuits():
    """Test that a string enum ignores the other string keywords."""
    rule = translate({
        "type": "string",
        "enum": ["red", "green"],
        "minLength": 10,
        "format": "email"
    })

    assert isinstance(rule, AnyRule)
    assert rule.validate("red").valid
    assert not rule.validate("blue").valid


@pytest.mark.parametrize("fmt,valid,invalid", [
    ("email", "a@b.com", "not-an-email"),
    ("hostname", "example.com", "bad_host!"),
    ("ipv4", "10.0.0.1", "10.0.0.256"),
    ("ipv6", "2001:db8::1", "10.0.0.1"),
    ("uri", "https://example.com/a", "no scheme here"),
    ("byte", "aGVsbG8=", "***"),
])
def test_string_formats(fmt, valid, invalid):
    """Test the built-in string formats."""
    rule = translate({"type": "string", "format": fmt})

    assert rule.validate(valid).valid
    result = rule.validate(invalid)
    assert not result.valid
    assert result.errors[0].code == ErrorCode.FORMAT_MISMATCH


def test_format_with_common_constraints():
    """Test that formats still get the common string constraints."""
    rule = translate({"type": "string", "format": "email", "maxLength": 8})

    assert rule.validate("a@b.com").valid
    assert not rule.validate("abc@example.com").valid


def test_unknown_format_is_ignored():
    """Test that unsupported formats translate to plain strings."""
    rule = translate({"type": "string", "format": "color"})

    assert isinstance(rule, StringRule)
    assert rule.validate("anything").valid


class TestDateFormat:
    """Tests for the date and date-time formats."""

    def test_date_time(self):
        """Test date-time conversion."""
        rule = translate({"type": "string", "format": "date-time"})

        assert isinstance(rule, DateRule)
        result = rule.validate("2021-03-04T05:06:07Z")
        assert result.valid
        assert result.value == datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
        assert not rule.validate("yesterday").valid

    def test_date_bounds(self):
        """Test minimum and maximum on dates."""
        rule = translate({
            "type": "string",
            "format": "date",
            "minimum": "2020-01-01",
            "maximum": "2020-12-31",
            "minLength": 50
        })

        assert rule.validate("2020-05-05").valid
        assert rule.validate("2020-01-01").errors == []
        assert rule.validate("2019-05-05").errors[0].code == ErrorCode.DATE_TOO_EARLY
        assert rule.validate("2021-05-05").errors[0].code == ErrorCode.DATE_TOO_LATE

    def test_zero_bound_is_skipped(self):
        """Test that a falsy date bound is not applied."""
        rule = translate({"type": "string", "format": "date", "minimum": 0})

        assert "min" not in rule.describe()
        assert rule.validate("1960-01-01").valid

    def test_invalid_bound(self):
        """Test that an unparseable date bound fails translation."""
        with pytest.raises(ShapeError):
            translate({"type": "string", "format": "date", "maximum": "soon"})

    def test_strict_date(self):
        """Test that strict dates only accept date objects."""
        rule = translate({"type": "string", "format": "date"}, strict_mode=True)

        assert not rule.validate("2020-05-05").valid
        assert rule.validate(datetime(2020, 5, 5)).valid


class TestBinaryFormat:
    """Tests for the binary format."""

    def test_binary(self):
        """Test binary lengths."""
        rule = translate({
            "type": "string",
            "format": "binary",
            "minLength": 2,
            "maxLength": 4
        })

        assert isinstance(rule, BinaryRule)
        assert rule.validate(b"abc").valid
        assert rule.validate(b"a").errors[0].code == ErrorCode.BINARY_TOO_SHORT
        assert rule.validate(b"abcdef").errors[0].code == ErrorCode.BINARY_TOO_LONG

        # Strings are converted to bytes
        assert rule.validate("abc").value == b"abc"

    def test_zero_length_is_skipped(self):
        """Test that a falsy binary length is not applied."""
        rule = translate({"type": "string", "format": "binary", "minLength": 0, "maxLength": 0})

        assert "min" not in rule.describe()
        assert "max" not in rule.describe()
        assert rule.validate(b"any length at all").valid


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
