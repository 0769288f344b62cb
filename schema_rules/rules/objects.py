"""
Object rule implementation.
"""

import json
import re
from typing import Any, Dict, List, Optional, Pattern, Tuple

from .base import MISSING, Rule, TypeRule, ValidationContext
from ..api import ErrorCode


class ObjectRule(TypeRule):
    """
    Rule for validating object values.

    An object rule built without keys accepts any key. Once keys are given,
    other keys are rejected unless ``unknown()`` allows them or a
    ``pattern()`` rule claims them.
    """

    rule_type = "object"

    def __init__(self, keys: Optional[Dict[str, Rule]] = None):
        """
        Initialize a new object rule.

        Args:
            keys: Rules for specific keys, or None to leave keys unconstrained
        """
        super().__init__()
        self.key_rules: Optional[Dict[str, Rule]] = dict(keys) if keys is not None else None
        self.allow_unknown = False
        self.pattern_rules: List[Tuple[Pattern, Rule]] = []
        self.min_properties: Optional[int] = None
        self.max_properties: Optional[int] = None

    def _clone(self) -> "ObjectRule":
        clone = super()._clone()
        if self.key_rules is not None:
            clone.key_rules = dict(self.key_rules)
        clone.pattern_rules = list(self.pattern_rules)
        return clone

    def keys(self, keys: Dict[str, Rule]) -> "ObjectRule":
        clone = self._clone()
        clone.key_rules = {**(clone.key_rules or {}), **keys}
        return clone

    def unknown(self, allow: bool = True) -> "ObjectRule":
        return self._set(allow_unknown=bool(allow))

    def pattern(self, regex: str, rule: Rule) -> "ObjectRule":
        """
        Validate unknown keys matching a regular expression with a rule.

        Args:
            regex: Regular expression searched in each unknown key
            rule: Rule applied to the values of matching keys

        Returns:
            New rule
        """
        clone = self._clone()
        clone.pattern_rules.append((re.compile(regex), rule))
        return clone

    def min(self, limit: int) -> "ObjectRule":
        return self._set(min_properties=limit)

    def max(self, limit: int) -> "ObjectRule":
        return self._set(max_properties=limit)

    @property
    def known_keys(self) -> Optional[List[str]]:
        """Names of the keys with their own rule, or None when unconstrained."""
        return list(self.key_rules) if self.key_rules is not None else None

    @property
    def required_keys(self) -> List[str]:
        return [key for key, rule in (self.key_rules or {}).items() if rule.is_required]

    @property
    def json_type(self) -> str:
        return "object"

    def _convert(self, value: Any) -> Any:
        if isinstance(value, str) and value.lstrip().startswith("{"):
            try:
                return json.loads(value)
            except ValueError:
                return value
        return value

    def _accepts(self, value: Any) -> bool:
        return isinstance(value, dict)

    def _check_type_specific(self, value: Any, context: ValidationContext) -> Any:
        """
        Validate object-specific constraints.

        Args:
            value: The object to validate (guaranteed to be a dict)
            context: Validation context

        Returns:
            New dict with converted values and defaults filled in
        """
        result: Dict[str, Any] = {}

        if self.min_properties is not None and len(value) < self.min_properties:
            self._error(
                context,
                ErrorCode.OBJECT_TOO_FEW_PROPERTIES,
                f"Object has {len(value)} properties, but minimum is {self.min_properties}",
                value
            )

        if self.max_properties is not None and len(value) > self.max_properties:
            self._error(
                context,
                ErrorCode.OBJECT_TOO_MANY_PROPERTIES,
                f"Object has {len(value)} properties, but maximum is {self.max_properties}",
                value
            )

        key_rules = self.key_rules or {}

        for key, rule in key_rules.items():
            with context.with_path(key):
                checked = rule.check(value.get(key, MISSING), context)
            if checked is not MISSING:
                result[key] = checked

        for key, item in value.items():
            if key in key_rules:
                continue

            rule = self._pattern_rule(key)
            if rule is not None:
                with context.with_path(key):
                    result[key] = rule.check(item, context)
            elif self.key_rules is None or self.allow_unknown:
                result[key] = item
            else:
                with context.with_path(key):
                    self._error(
                        context,
                        ErrorCode.ADDITIONAL_PROPERTY_NOT_ALLOWED,
                        f"Additional property '{key}' not allowed",
                        item
                    )
                result[key] = item

        return result

    def _pattern_rule(self, key: str) -> Optional[Rule]:
        for regex, rule in self.pattern_rules:
            if regex.search(str(key)):
                return rule
        return None

    def _describe_constraints(self) -> Dict[str, Any]:
        constraints: Dict[str, Any] = {}
        if self.key_rules is not None:
            constraints["keys"] = {key: rule.describe() for key, rule in self.key_rules.items()}
        if self.allow_unknown:
            constraints["unknown"] = True
        if self.pattern_rules:
            constraints["patterns"] = [
                {"regex": regex.pattern, "rule": rule.describe()}
                for regex, rule in self.pattern_rules
            ]
        if self.min_properties is not None:
            constraints["min"] = self.min_properties
        if self.max_properties is not None:
            constraints["max"] = self.max_properties
        return constraints

    def __str__(self) -> str:
        """String representation of the rule."""
        parts = []
        if self.key_rules is not None:
            parts.append(f"keys={list(self.key_rules)}")
        if self.required_keys:
            parts.append(f"required={self.required_keys}")
        if self.allow_unknown:
            parts.append("unknown=True")
        if self.pattern_rules:
            parts.append(f"patterns={[regex.pattern for regex, _ in self.pattern_rules]}")
        if self.min_properties is not None:
            parts.append(f"min_properties={self.min_properties}")
        if self.max_properties is not None:
            parts.append(f"max_properties={self.max_properties}")
        return f"ObjectRule({', '.join(parts)})"
