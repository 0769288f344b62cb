"""
String rule implementation.
"""

import base64
import binascii
import ipaddress
import re
from typing import Any, Callable, Dict, List, Optional, Pattern

from .base import TypeRule, ValidationContext
from ..api import ErrorCode

EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,}$"
)
HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
URI_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:[^\s]*$")
BASE64_PATTERN = re.compile(
    r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$"
)


def is_email(value: str) -> bool:
    local, _, _ = value.partition("@")
    return len(value) <= 254 and len(local) <= 64 and bool(EMAIL_PATTERN.match(value))


def is_hostname(value: str) -> bool:
    if not value or len(value) > 255:
        return False
    labels = value[:-1].split(".") if value.endswith(".") else value.split(".")
    return all(HOSTNAME_LABEL.match(label) for label in labels)


def _is_ip(value: str, version: int) -> bool:
    try:
        return ipaddress.ip_address(value).version == version
    except ValueError:
        return False


def is_ipv4(value: str) -> bool:
    return _is_ip(value, 4)


def is_ipv6(value: str) -> bool:
    return _is_ip(value, 6)


def is_uri(value: str) -> bool:
    return bool(URI_PATTERN.match(value))


def is_base64(value: str) -> bool:
    if not BASE64_PATTERN.match(value):
        return False
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


FORMAT_CHECKS: Dict[str, Callable[[str], bool]] = {
    "email": is_email,
    "hostname": is_hostname,
    "ipv4": is_ipv4,
    "ipv6": is_ipv6,
    "uri": is_uri,
    "base64": is_base64,
}


class StringRule(TypeRule):
    """
    Rule for validating string values.

    The empty string is rejected unless it is explicitly allowed with
    ``allow("")``.
    """

    rule_type = "string"

    def __init__(self):
        super().__init__()
        self.min_length: Optional[int] = None
        self.max_length: Optional[int] = None
        self.patterns: List[Pattern] = []
        self.formats: List[str] = []

    def _clone(self) -> "StringRule":
        clone = super()._clone()
        clone.patterns = list(self.patterns)
        clone.formats = list(self.formats)
        return clone

    def min(self, limit: int) -> "StringRule":
        return self._set(min_length=limit)

    def max(self, limit: int) -> "StringRule":
        return self._set(max_length=limit)

    def regex(self, pattern: str) -> "StringRule":
        """
        Require the string to contain a match for a regular expression.

        Args:
            pattern: Regular expression source

        Returns:
            New rule

        Raises:
            re.error: If the pattern does not compile
        """
        clone = self._clone()
        clone.patterns.append(re.compile(pattern))
        return clone

    def _format(self, name: str) -> "StringRule":
        clone = self._clone()
        clone.formats.append(name)
        return clone

    def email(self) -> "StringRule":
        return self._format("email")

    def hostname(self) -> "StringRule":
        return self._format("hostname")

    def ip(self, versions: List[str]) -> "StringRule":
        """
        Require an IP address of one of the given versions.

        Args:
            versions: Any of "ipv4" and "ipv6"

        Returns:
            New rule
        """
        unknown = set(versions) - {"ipv4", "ipv6"}
        if unknown:
            raise ValueError(f"Unknown IP versions: {sorted(unknown)}")
        return self._format("|".join(versions))

    def uri(self) -> "StringRule":
        return self._format("uri")

    def base64(self) -> "StringRule":
        return self._format("base64")

    @property
    def json_type(self) -> str:
        return "string"

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, str)

    def _check_type_specific(self, value: Any, context: ValidationContext) -> Any:
        """
        Validate string-specific constraints.

        Args:
            value: The string to validate (guaranteed to be a string)
            context: Validation context

        Returns:
            The string
        """
        if value == "":
            self._error(context, ErrorCode.STRING_EMPTY, "String must not be empty", value)
            return value

        if self.min_length is not None and len(value) < self.min_length:
            self._error(
                context,
                ErrorCode.STRING_TOO_SHORT,
                f"String length is {len(value)}, but minimum is {self.min_length}",
                value
            )

        if self.max_length is not None and len(value) > self.max_length:
            self._error(
                context,
                ErrorCode.STRING_TOO_LONG,
                f"String length is {len(value)}, but maximum is {self.max_length}",
                value
            )

        for fmt in self.formats:
            checks = [FORMAT_CHECKS[name] for name in fmt.split("|")]
            if not any(check(value) for check in checks):
                self._error(
                    context,
                    ErrorCode.FORMAT_MISMATCH,
                    f"String '{value}' is not a valid {fmt.replace('|', ' or ')}",
                    value
                )

        for pattern in self.patterns:
            if not pattern.search(value):
                self._error(
                    context,
                    ErrorCode.PATTERN_MISMATCH,
                    f"String '{value}' does not match pattern '{pattern.pattern}'",
                    value
                )

        return value

    def _describe_constraints(self) -> Dict[str, Any]:
        constraints: Dict[str, Any] = {}
        if self.min_length is not None:
            constraints["min"] = self.min_length
        if self.max_length is not None:
            constraints["max"] = self.max_length
        if self.patterns:
            constraints["regex"] = [pattern.pattern for pattern in self.patterns]
        if self.formats:
            constraints["format"] = list(self.formats)
        return constraints
