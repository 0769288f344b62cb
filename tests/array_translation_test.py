#!/usr/bin/env python3
"""
Tests for array schema translation.
"""
import pytest

# autopep8: off
from utils import setup
setup()
from schema_rules import ErrorCode, translate
from schema_rules.rules import ArrayRule
# autopep8: on


class TestArrayTranslation:
    """Tests for array schemas."""

    def test_single_items_schema(self):
        """Test that a single items schema applies to every element."""
        rule = translate({"type": "array", "items": {"type": "integer"}})

        assert isinstance(rule, ArrayRule)
        assert len(rule.item_rules) == 1
        assert rule.ordered_rules == []

        assert rule.validate([1, 2, 3]).valid
        assert rule.validate([]).valid

        result = rule.validate([1, "two", 3])
        assert not result.valid
        assert result.errors[0].path == "/1"

    def test_items_list_is_positional(self):
        """Test that a list of items schemas applies by position."""
        rule = translate({
            "type": "array",
            "items": [{"type": "string"}, {"type": "number"}]
        })

        assert len(rule.ordered_rules) == 2
        assert rule.validate(["a", 1]).valid
        assert rule.validate(["a"]).valid
        assert not rule.validate([1, "a"]).valid

        # Elements past the listed positions are accepted
        assert rule.validate(["a", 1, None]).valid

    def test_additional_items_false(self):
        """Test that additionalItems: false caps the length."""
        rule = translate({
            "type": "array",
            "items": [{"type": "string"}, {"type": "number"}],
            "additionalItems": False
        })

        assert rule.validate(["a", 1]).valid
        result = rule.validate(["a", 1, None])
        assert result.errors[0].code == ErrorCode.ARRAY_TOO_LONG

    def test_tighter_length_cap_wins(self):
        """Test combining additionalItems: false with maxItems."""
        loose_max = translate({
            "type": "array",
            "items": [{"type": "string"}, {"type": "string"}],
            "additionalItems": False,
            "maxItems": 5
        })
        assert loose_max.max_items == 2

        tight_max = translate({
            "type": "array",
            "items": [{"type": "string"}, {"type": "string"}],
            "additionalItems": False,
            "maxItems": 1
        })
        assert tight_max.max_items == 1

    def test_ordered_keyword(self):
        """Test the ordered keyword when items is absent."""
        rule = translate({
            "type": "array",
            "ordered": [{"type": "boolean"}, {"type": "string"}]
        })

        assert len(rule.ordered_rules) == 2
        assert rule.validate([True, "x"]).valid
        assert not rule.validate(["x", True]).valid

        # A single ordered schema is a one-position list
        single = translate({"type": "array", "ordered": {"type": "boolean"}})
        assert len(single.ordered_rules) == 1

    def test_ordered_keyword_rejects_extra_elements(self):
        """Test that an ordered list alone caps the length."""
        rule = translate({"type": "array", "ordered": [{"type": "boolean"}]})

        assert rule.validate([True]).valid
        result = rule.validate([True, "x", 5])
        assert [error.code for error in result.errors] == [ErrorCode.ARRAY_TOO_LONG]

        # A larger maxItems does not loosen the cap
        capped = translate({"type": "array", "ordered": [{"type": "boolean"}], "maxItems": 4})
        assert capped.max_items == 1

        # additionalItems: true lets extra elements through
        open_ended = translate({
            "type": "array",
            "ordered": [{"type": "boolean"}],
            "additionalItems": True
        })
        assert open_ended.validate([True, "x", 5]).valid

    def test_additional_items_schema(self):
        """Test that an additionalItems schema checks elements past the positions."""
        rule = translate({
            "type": "array",
            "items": [{"type": "boolean"}],
            "additionalItems": {"type": "integer"}
        })

        assert rule.max_items is None
        assert rule.validate([True, 1, 2]).valid
        result = rule.validate([True, "x"])
        assert [error.path for error in result.errors] == ["/1"]

    def test_additional_items_with_single_items(self):
        """Test that additionalItems is ignored when items is a single schema."""
        rule = translate({
            "type": "array",
            "items": {"type": "string"},
            "additionalItems": False
        })

        assert rule.max_items is None
        assert rule.validate(["a", "b", "c"]).valid

    def test_length_and_uniqueness(self):
        """Test minItems, maxItems and uniqueItems."""
        rule = translate({
            "type": "array",
            "minItems": 1,
            "maxItems": 3,
            "uniqueItems": True
        })

        assert rule.validate([1, 2]).valid
        assert rule.validate([]).errors[0].code == ErrorCode.ARRAY_TOO_SHORT
        assert rule.validate([1, 2, 3, 4]).errors[0].code == ErrorCode.ARRAY_TOO_LONG
        assert rule.validate([1, 1]).errors[0].code == ErrorCode.ARRAY_ITEMS_NOT_UNIQUE

        # uniqueItems: false is the same as leaving it out
        assert translate({"type": "array", "uniqueItems": False}).validate([1, 1]).valid

    def test_items_are_converted(self):
        """Test that converted elements appear in the result."""
        rule = translate({"type": "array", "items": {"type": "number"}})

        assert rule.validate(["1.5", 2]).value == [1.5, 2]
        assert not translate({"type": "array", "items": {"type": "number"}},
                             strict_mode=True).validate(["1.5"]).valid

    def test_array_of_objects(self):
        """Test nested error paths through arrays."""
        rule = translate({
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"id": {"type": "integer"}},
                "required": ["id"]
            }
        })

        assert rule.validate([{"id": 1}, {"id": 2}]).valid

        result = rule.validate([{"id": 1}, {}])
        assert not result.valid
        assert result.errors[0].path == "/1/id"
        assert result.errors[0].code == ErrorCode.VALUE_REQUIRED


if __name__ == "__main__":
    pytest.main(["-xvs", __file__])
