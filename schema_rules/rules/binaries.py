"""
Binary rule implementation.
"""

from typing import Any, Dict, Optional

from .base import TypeRule, ValidationContext
from ..api import ErrorCode


class BinaryRule(TypeRule):
    """
    Rule for validating binary data.

    Outside strict mode strings are converted to their UTF-8 bytes.
    """

    rule_type = "binary"

    def __init__(self):
        super().__init__()
        self.min_length: Optional[int] = None
        self.max_length: Optional[int] = None

    def min(self, limit: int) -> "BinaryRule":
        return self._set(min_length=limit)

    def max(self, limit: int) -> "BinaryRule":
        return self._set(max_length=limit)

    @property
    def json_type(self) -> str:
        return "binary"

    def _convert(self, value: Any) -> Any:
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, (bytes, bytearray, memoryview))

    def _check_type_specific(self, value: Any, context: ValidationContext) -> Any:
        size = len(value)

        if self.min_length is not None and size < self.min_length:
            self._error(
                context,
                ErrorCode.BINARY_TOO_SHORT,
                f"Binary length is {size}, but minimum is {self.min_length}",
                value
            )

        if self.max_length is not None and size > self.max_length:
            self._error(
                context,
                ErrorCode.BINARY_TOO_LONG,
                f"Binary length is {size}, but maximum is {self.max_length}",
                value
            )

        return value

    def _describe_constraints(self) -> Dict[str, Any]:
        constraints: Dict[str, Any] = {}
        if self.min_length is not None:
            constraints["min"] = self.min_length
        if self.max_length is not None:
            constraints["max"] = self.max_length
        return constraints
