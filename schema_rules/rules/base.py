"""
Base rule classes for the JSON Schema rule translator.

Rules are immutable values: every builder method returns a modified copy and
leaves the receiver untouched, so a rule can be shared between several
parents without aliasing surprises.
"""

import copy
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..api import ErrorCode, ValidationError, ValidationResult
from ..utils import JsonPointer, TypeUtils


class _Missing:
    """Marker for a value that is absent, such as an object key that is not set."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class Presence(Enum):
    """Whether a value may, must, or must not be present."""
    OPTIONAL = "optional"
    REQUIRED = "required"
    FORBIDDEN = "forbidden"


class ValidationContext:
    """
    Context for validation operations.

    This class maintains state during the validation process,
    including the current path and error collection.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new validation context.

        Args:
            verbose: Whether to include additional details in errors
        """
        self.errors: List[ValidationError] = []
        self.path_parts: List[str] = []
        self.verbose = verbose

    @property
    def path(self) -> str:
        """
        Get the current JSON Pointer path.

        Returns:
            JSON Pointer string for the current path
        """
        return JsonPointer.from_parts(self.path_parts)

    def push_path(self, part: Any) -> None:
        """
        Push a path part onto the current path.

        Args:
            part: Path segment to add
        """
        self.path_parts.append(str(part))

    def pop_path(self) -> None:
        """Remove the last path part from the current path."""
        if self.path_parts:
            self.path_parts.pop()

    def add_error(self,
                  code: ErrorCode,
                  message: str,
                  value: Any = None,
                  rule: Any = None,
                  label: Optional[str] = None) -> None:
        """
        Add a validation error to the context.

        Args:
            code: Error code
            message: Error message
            value: Value that failed validation
            rule: Rule that was violated
            label: Label of the violated rule
        """
        error = ValidationError(
            code=code,
            path=self.path,
            message=message,
            label=label,
            value=value,
            rule=rule
        )
        self.errors.append(error)

    def with_path(self, part: Any):
        """
        Context manager for adding a path part temporarily.

        Args:
            part: Path segment to add

        Returns:
            Context manager
        """
        return PathContext(self, part)

    def branch(self) -> "ValidationContext":
        """
        Create an isolated context at the current path.

        Errors recorded in the branch do not reach this context unless they
        are copied over explicitly.

        Returns:
            New validation context
        """
        sub_context = ValidationContext(verbose=self.verbose)
        sub_context.path_parts = self.path_parts.copy()
        return sub_context

    def __str__(self) -> str:
        """String representation of the validation context."""
        return f"ValidationContext(path={self.path}, errors={len(self.errors)})"


class PathContext:
    """Context manager for temporarily adding a path part."""

    def __init__(self, context: ValidationContext, part: Any):
        """
        Initialize a new path context.

        Args:
            context: Validation context
            part: Path segment to add
        """
        self.context = context
        self.part = part

    def __enter__(self):
        """Add the path part when entering the context."""
        self.context.push_path(self.part)
        return self.context

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Remove the path part when exiting the context."""
        self.context.pop_path()


class Rule(ABC):
    """
    Base class for all validation rules.

    Holds the flags every rule shares (presence, strictness, label,
    description, default and literal value lists) and implements the
    presence and literal checks that run before any type-specific check.
    """

    rule_type = "any"

    def __init__(self):
        self._presence = Presence.OPTIONAL
        self._strict = False
        self._label: Optional[str] = None
        self._description: Optional[str] = None
        self._default: Any = MISSING
        self._valids: Optional[List[Any]] = None
        self._allowed: List[Any] = []

    def _clone(self) -> "Rule":
        """
        Copy this rule so a builder can modify the copy.

        Subclasses holding containers copy them as well.
        """
        clone = copy.copy(self)
        clone._allowed = list(self._allowed)
        if self._valids is not None:
            clone._valids = list(self._valids)
        return clone

    def _set(self, **attributes: Any) -> "Rule":
        clone = self._clone()
        for name, value in attributes.items():
            setattr(clone, name, value)
        return clone

    # Builders shared by every rule

    def required(self) -> "Rule":
        return self._set(_presence=Presence.REQUIRED)

    def optional(self) -> "Rule":
        return self._set(_presence=Presence.OPTIONAL)

    def forbidden(self) -> "Rule":
        return self._set(_presence=Presence.FORBIDDEN)

    def strict(self, enabled: bool = True) -> "Rule":
        """
        Toggle strict mode.

        A strict rule never converts its input (no "5" to 5, no "true" to
        True) before checking it.
        """
        return self._set(_strict=bool(enabled))

    def label(self, name: str) -> "Rule":
        return self._set(_label=name)

    def description(self, text: str) -> "Rule":
        return self._set(_description=text)

    def default(self, value: Any) -> "Rule":
        """Value substituted when the input is absent."""
        return self._set(_default=value)

    def valid(self, *values: Any) -> "Rule":
        """
        Restrict the rule to the given literal values.

        Args:
            *values: Accepted literals

        Returns:
            New rule that rejects any other value
        """
        clone = self._clone()
        clone._valids = (clone._valids or []) + list(values)
        return clone

    def allow(self, *values: Any) -> "Rule":
        """
        Accept the given literal values in addition to what the rule accepts.

        Args:
            *values: Extra literals

        Returns:
            New rule
        """
        clone = self._clone()
        clone._allowed = clone._allowed + list(values)
        return clone

    # Read-only views

    @property
    def presence(self) -> Presence:
        return self._presence

    @property
    def is_required(self) -> bool:
        return self._presence is Presence.REQUIRED

    @property
    def is_strict(self) -> bool:
        return self._strict

    @property
    def flags(self) -> Dict[str, Any]:
        """Shared flags as a plain mapping (unset flags are omitted)."""
        flags: Dict[str, Any] = {"presence": self._presence.value}
        if self._strict:
            flags["strict"] = True
        if self._label is not None:
            flags["label"] = self._label
        if self._description is not None:
            flags["description"] = self._description
        if self._default is not MISSING:
            flags["default"] = self._default
        return flags

    # Validation

    def check(self, value: Any, context: ValidationContext) -> Any:
        """
        Check a value against this rule, recording errors in the context.

        Args:
            value: Value to check, or MISSING when absent
            context: Validation context

        Returns:
            The value after conversion and default substitution
        """
        if value is MISSING:
            if self._presence is Presence.REQUIRED:
                self._error(context, ErrorCode.VALUE_REQUIRED, "Value is required", None)
                return MISSING
            if self._default is not MISSING:
                return copy.deepcopy(self._default)
            return MISSING

        if self._presence is Presence.FORBIDDEN:
            self._error(context, ErrorCode.VALUE_FORBIDDEN, "Value is not allowed", value)
            return value

        if self._matches(value, self._allowed):
            return value

        if self._valids is not None:
            if not self._matches(value, self._valids):
                self._error(
                    context,
                    ErrorCode.VALUE_NOT_ALLOWED,
                    f"Value {value!r} must be one of {self._valids!r}",
                    value
                )
            return value

        return self._check_type(value, context)

    def attempt(self, value: Any, context: ValidationContext) -> Tuple[bool, Any]:
        """
        Check a value and report whether this call added any error.

        Args:
            value: Value to check
            context: Validation context

        Returns:
            Tuple of (valid, converted value)
        """
        before = len(context.errors)
        result = self.check(value, context)
        return len(context.errors) == before, result

    @abstractmethod
    def _check_type(self, value: Any, context: ValidationContext) -> Any:
        """
        Type-specific check of a present value.

        Args:
            value: Value to check (never MISSING)
            context: Validation context

        Returns:
            The value after conversion
        """
        pass

    def validate(self, value: Any, verbose: bool = False) -> ValidationResult:
        """
        Validate a value against this rule.

        Args:
            value: Value to validate
            verbose: Whether to include additional details in error messages

        Returns:
            ValidationResult with the converted value
        """
        from ..validator import Validator

        return Validator(verbose=verbose).validate(value, self)

    def _error(self, context: ValidationContext, code: ErrorCode, message: str, value: Any) -> None:
        context.add_error(code, message, value=value, rule=self, label=self._label)

    @staticmethod
    def _matches(value: Any, candidates: List[Any]) -> bool:
        return any(TypeUtils.same_value(value, candidate) for candidate in candidates)

    # Introspection

    def describe(self) -> Dict[str, Any]:
        """
        Describe the rule as a plain, comparable mapping.

        Returns:
            Mapping with the rule type, its flags and its constraints
        """
        description: Dict[str, Any] = {"type": self.rule_type, "flags": self.flags}
        if self._valids is not None:
            description["valid"] = list(self._valids)
        if self._allowed:
            description["allow"] = list(self._allowed)
        description.update(self._describe_constraints())
        return description

    def _describe_constraints(self) -> Dict[str, Any]:
        return {}

    def __str__(self) -> str:
        """String representation of the rule."""
        parts = [f"{key}={value!r}" for key, value in self._describe_constraints().items()]
        if self._valids is not None:
            parts.append(f"valid={self._valids!r}")
        if self._presence is not Presence.OPTIONAL:
            parts.append(self._presence.value)
        return f"{self.__class__.__name__}({', '.join(parts)})"

    def __repr__(self) -> str:
        """Detailed representation of the rule."""
        return self.__str__()


class AnyRule(Rule):
    """Rule that accepts any present value."""

    def _check_type(self, value: Any, context: ValidationContext) -> Any:
        return value


class TypeRule(Rule, ABC):
    """
    Base class for type-specific rules.

    Type rules first convert the input (unless strict), then check that it
    has the right type, then apply their own constraints.
    """

    @property
    @abstractmethod
    def json_type(self) -> str:
        """
        Get the type name this rule checks for.

        Returns:
            Type name used in error messages
        """
        pass

    def _check_type(self, value: Any, context: ValidationContext) -> Any:
        if not self._strict:
            value = self._convert(value)

        if not self._accepts(value):
            self._error(
                context,
                ErrorCode.TYPE_ERROR,
                f"Expected {self.json_type}, got {TypeUtils.get_json_type(value)}",
                value
            )
            return value

        return self._check_type_specific(value, context)

    def _convert(self, value: Any) -> Any:
        """
        Convert a loosely typed input; unconvertible values pass through.

        Args:
            value: Raw input

        Returns:
            Converted value, or the input unchanged
        """
        return value

    @abstractmethod
    def _accepts(self, value: Any) -> bool:
        """Check whether a (converted) value has this rule's type."""
        pass

    @abstractmethod
    def _check_type_specific(self, value: Any, context: ValidationContext) -> Any:
        """
        Apply type-specific constraints.

        This method is called after the type check has passed.

        Args:
            value: Value to check (guaranteed to be of the correct type)
            context: Validation context

        Returns:
            The checked value
        """
        pass
