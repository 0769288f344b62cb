"""
Date rule implementation.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional, Union

from .base import TypeRule, ValidationContext
from ..api import ErrorCode
from ..utils import TypeUtils

DateLike = Union[datetime, date, str, int, float]


def parse_date(value: Any) -> Optional[datetime]:
    """
    Interpret a value as a point in time.

    Naive values are taken to be UTC so that every result can be compared
    with every other.

    Args:
        value: datetime, date, ISO 8601 string or POSIX timestamp in seconds

    Returns:
        Timezone-aware datetime, or None if the value is not a date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time())
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    elif TypeUtils.is_finite_number(value):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class DateRule(TypeRule):
    """
    Rule for validating dates.

    Strict rules only accept date and datetime objects; otherwise ISO 8601
    strings and timestamps are converted. Bounds may be given as "now",
    which is evaluated at validation time.
    """

    rule_type = "date"

    def __init__(self):
        super().__init__()
        self.minimum: Optional[DateLike] = None
        self.maximum: Optional[DateLike] = None

    def min(self, limit: DateLike) -> "DateRule":
        self._bound(limit)
        return self._set(minimum=limit)

    def max(self, limit: DateLike) -> "DateRule":
        self._bound(limit)
        return self._set(maximum=limit)

    @staticmethod
    def _bound(limit: DateLike) -> datetime:
        if limit == "now":
            return datetime.now(timezone.utc)
        parsed = parse_date(limit)
        if parsed is None:
            raise ValueError(f"Invalid date bound: {limit!r}")
        return parsed

    @property
    def json_type(self) -> str:
        return "date"

    def _convert(self, value: Any) -> Any:
        if isinstance(value, (datetime, date)):
            return value
        parsed = parse_date(value)
        return value if parsed is None else parsed

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, (datetime, date))

    def _check_type_specific(self, value: Any, context: ValidationContext) -> Any:
        moment = parse_date(value)

        if self.minimum is not None and moment < self._bound(self.minimum):
            self._error(
                context,
                ErrorCode.DATE_TOO_EARLY,
                f"Date {value} must be on or after {self.minimum}",
                value
            )

        if self.maximum is not None and moment > self._bound(self.maximum):
            self._error(
                context,
                ErrorCode.DATE_TOO_LATE,
                f"Date {value} must be on or before {self.maximum}",
                value
            )

        return value

    def _describe_constraints(self) -> Dict[str, Any]:
        constraints: Dict[str, Any] = {}
        if self.minimum is not None:
            constraints["min"] = self.minimum
        if self.maximum is not None:
            constraints["max"] = self.maximum
        return constraints
