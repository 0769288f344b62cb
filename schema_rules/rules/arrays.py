"""
Array rule implementation.
"""

import json
from typing import Any, Dict, List, Optional

from .base import Rule, TypeRule, ValidationContext
from ..api import ErrorCode
from ..utils import TypeUtils


class ArrayRule(TypeRule):
    """
    Rule for validating array values.

    ``items`` rules apply to every element (an element must match at least
    one of them); ``ordered`` rules apply by position. Elements past the
    ordered positions are checked against the ``items`` rules when there
    are any, and accepted otherwise.
    """

    rule_type = "array"

    def __init__(self):
        super().__init__()
        self.item_rules: List[Rule] = []
        self.ordered_rules: List[Rule] = []
        self.min_items: Optional[int] = None
        self.max_items: Optional[int] = None
        self.unique_items = False

    def _clone(self) -> "ArrayRule":
        clone = super()._clone()
        clone.item_rules = list(self.item_rules)
        clone.ordered_rules = list(self.ordered_rules)
        return clone

    def items(self, rules: List[Rule]) -> "ArrayRule":
        clone = self._clone()
        clone.item_rules.extend(rules)
        return clone

    def ordered(self, rules: List[Rule]) -> "ArrayRule":
        clone = self._clone()
        clone.ordered_rules.extend(rules)
        return clone

    def min(self, limit: int) -> "ArrayRule":
        return self._set(min_items=limit)

    def max(self, limit: int) -> "ArrayRule":
        return self._set(max_items=limit)

    def unique(self) -> "ArrayRule":
        return self._set(unique_items=True)

    @property
    def json_type(self) -> str:
        return "array"

    def _convert(self, value: Any) -> Any:
        if isinstance(value, str) and value.lstrip().startswith("["):
            try:
                return json.loads(value)
            except ValueError:
                return value
        if isinstance(value, tuple):
            return list(value)
        return value

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, list)

    def _check_type_specific(self, value: Any, context: ValidationContext) -> Any:
        """
        Validate array-specific constraints.

        Args:
            value: The array to validate (guaranteed to be a list)
            context: Validation context

        Returns:
            New list holding the converted elements
        """
        result = []

        for i, item in enumerate(value):
            with context.with_path(i):
                if i < len(self.ordered_rules):
                    item = self.ordered_rules[i].check(item, context)
                elif self.item_rules:
                    item = self._check_item(item, context)
            result.append(item)

        for i in range(len(value), len(self.ordered_rules)):
            if self.ordered_rules[i].is_required:
                with context.with_path(i):
                    self._error(
                        context,
                        ErrorCode.ARRAY_ITEM_MISSING,
                        f"Array is missing the required item at index {i}",
                        value
                    )

        if self.min_items is not None and len(value) < self.min_items:
            self._error(
                context,
                ErrorCode.ARRAY_TOO_SHORT,
                f"Array has {len(value)} items, but minimum is {self.min_items}",
                value
            )

        if self.max_items is not None and len(value) > self.max_items:
            self._error(
                context,
                ErrorCode.ARRAY_TOO_LONG,
                f"Array has {len(value)} items, but maximum is {self.max_items}",
                value
            )

        if self.unique_items and len(result) > 1:
            seen = set()
            for i, item in enumerate(result):
                key = TypeUtils.canonical(item)
                if key in seen:
                    self._error(
                        context,
                        ErrorCode.ARRAY_ITEMS_NOT_UNIQUE,
                        f"Array items must be unique (duplicate at index {i})",
                        value
                    )
                    break
                seen.add(key)

        return result

    def _check_item(self, item: Any, context: ValidationContext) -> Any:
        """Check an element against the items rules; the first match wins."""
        if len(self.item_rules) == 1:
            return self.item_rules[0].check(item, context)

        for rule in self.item_rules:
            valid, converted = rule.attempt(item, context.branch())
            if valid:
                return converted

        self._error(
            context,
            ErrorCode.ARRAY_ITEM_INVALID,
            f"Item {item!r} does not match any of the allowed item rules",
            item
        )
        return item

    def _describe_constraints(self) -> Dict[str, Any]:
        constraints: Dict[str, Any] = {}
        if self.item_rules:
            constraints["items"] = [rule.describe() for rule in self.item_rules]
        if self.ordered_rules:
            constraints["ordered"] = [rule.describe() for rule in self.ordered_rules]
        if self.min_items is not None:
            constraints["min"] = self.min_items
        if self.max_items is not None:
            constraints["max"] = self.max_items
        if self.unique_items:
            constraints["unique"] = True
        return constraints
