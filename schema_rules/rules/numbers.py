"""
Number rule implementation.
"""

from typing import Any, Dict, Optional

from .base import TypeRule, ValidationContext
from ..api import ErrorCode
from ..utils import TypeUtils


class NumberRule(TypeRule):
    """
    Rule for validating numeric values.

    Outside strict mode numeric strings are converted to numbers.
    """

    rule_type = "number"

    def __init__(self):
        super().__init__()
        self.minimum: Optional[float] = None
        self.maximum: Optional[float] = None
        self.exclusive_minimum: Optional[float] = None
        self.exclusive_maximum: Optional[float] = None
        self.multiple_of: Optional[float] = None
        self.integer_only = False

    def integer(self) -> "NumberRule":
        return self._set(integer_only=True)

    def min(self, limit: float) -> "NumberRule":
        """Inclusive lower bound."""
        return self._set(minimum=limit)

    def max(self, limit: float) -> "NumberRule":
        """Inclusive upper bound."""
        return self._set(maximum=limit)

    def greater(self, limit: float) -> "NumberRule":
        """Exclusive lower bound."""
        return self._set(exclusive_minimum=limit)

    def less(self, limit: float) -> "NumberRule":
        """Exclusive upper bound."""
        return self._set(exclusive_maximum=limit)

    def multiple(self, base: float) -> "NumberRule":
        return self._set(multiple_of=base)

    @property
    def json_type(self) -> str:
        return "number"

    def _convert(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value

        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return value

    def _accepts(self, value: Any) -> bool:
        return TypeUtils.is_finite_number(value)

    def _check_type_specific(self, value: Any, context: ValidationContext) -> Any:
        """
        Validate number-specific constraints.

        Args:
            value: The number to validate (guaranteed to be a finite number)
            context: Validation context

        Returns:
            The number
        """
        if self.integer_only and not (isinstance(value, int) or value.is_integer()):
            self._error(
                context,
                ErrorCode.NUMBER_NOT_INTEGER,
                f"Value {value} must be an integer",
                value
            )

        if self.minimum is not None and value < self.minimum:
            self._error(
                context,
                ErrorCode.NUMBER_TOO_SMALL,
                f"Value {value} must be greater than or equal to {self.minimum}",
                value
            )

        if self.maximum is not None and value > self.maximum:
            self._error(
                context,
                ErrorCode.NUMBER_TOO_LARGE,
                f"Value {value} must be less than or equal to {self.maximum}",
                value
            )

        if self.exclusive_minimum is not None and value <= self.exclusive_minimum:
            self._error(
                context,
                ErrorCode.NUMBER_TOO_SMALL,
                f"Value {value} must be greater than {self.exclusive_minimum}",
                value
            )

        if self.exclusive_maximum is not None and value >= self.exclusive_maximum:
            self._error(
                context,
                ErrorCode.NUMBER_TOO_LARGE,
                f"Value {value} must be less than {self.exclusive_maximum}",
                value
            )

        if self.multiple_of is not None:
            # The sign of the base does not change which values are multiples
            base = abs(self.multiple_of)
            # Handle floating point precision issues
            if isinstance(value, float) or isinstance(base, float):
                remainder = value % base
                is_multiple = remainder < 1e-10 or abs(remainder - base) < 1e-10
            else:
                is_multiple = value % base == 0

            if not is_multiple:
                self._error(
                    context,
                    ErrorCode.NUMBER_NOT_MULTIPLE,
                    f"Value {value} is not a multiple of {self.multiple_of}",
                    value
                )

        return value

    def _describe_constraints(self) -> Dict[str, Any]:
        constraints: Dict[str, Any] = {}
        if self.integer_only:
            constraints["integer"] = True
        if self.minimum is not None:
            constraints["min"] = self.minimum
        if self.maximum is not None:
            constraints["max"] = self.maximum
        if self.exclusive_minimum is not None:
            constraints["greater"] = self.exclusive_minimum
        if self.exclusive_maximum is not None:
            constraints["less"] = self.exclusive_maximum
        if self.multiple_of is not None:
            constraints["multiple"] = self.multiple_of
        return constraints
