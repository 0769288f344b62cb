"""
Boolean rule implementation.
"""

from typing import Any

from .base import TypeRule, ValidationContext


class BooleanRule(TypeRule):
    """
    Rule for validating boolean values.

    Outside strict mode the strings "true" and "false" (in any case) are
    converted to booleans.
    """

    rule_type = "boolean"

    @property
    def json_type(self) -> str:
        return "boolean"

    def _convert(self, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.lower()
            if lowered == "true":
                return True
            if lowered == "false":
                return False
        return value

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, bool)

    def _check_type_specific(self, value: Any, context: ValidationContext) -> Any:
        # No additional constraints for booleans
        return value
