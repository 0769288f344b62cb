"""
Public API for the JSON Schema rule translator.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Union


class ErrorCode(Enum):
    """Enumeration of validation error codes."""
    TYPE_ERROR = auto()
    VALUE_REQUIRED = auto()
    VALUE_FORBIDDEN = auto()
    VALUE_NOT_ALLOWED = auto()
    ADDITIONAL_PROPERTY_NOT_ALLOWED = auto()
    STRING_EMPTY = auto()
    STRING_TOO_SHORT = auto()
    STRING_TOO_LONG = auto()
    PATTERN_MISMATCH = auto()
    FORMAT_MISMATCH = auto()
    NUMBER_TOO_SMALL = auto()
    NUMBER_TOO_LARGE = auto()
    NUMBER_NOT_INTEGER = auto()
    NUMBER_NOT_MULTIPLE = auto()
    DATE_TOO_EARLY = auto()
    DATE_TOO_LATE = auto()
    BINARY_TOO_SHORT = auto()
    BINARY_TOO_LONG = auto()
    ARRAY_TOO_SHORT = auto()
    ARRAY_TOO_LONG = auto()
    ARRAY_ITEMS_NOT_UNIQUE = auto()
    ARRAY_ITEM_INVALID = auto()
    ARRAY_ITEM_MISSING = auto()
    OBJECT_TOO_FEW_PROPERTIES = auto()
    OBJECT_TOO_MANY_PROPERTIES = auto()
    ALTERNATIVES_NO_MATCH = auto()


@dataclass
class ValidationError:
    """
    Represents a validation error with structured information.

    Attributes:
        code: The error code identifying the type of error
        path: JSON Pointer to the value that failed validation
        message: Human-readable error message
        label: Label of the rule that reported the error, if it has one
        value: The value that failed validation
        rule: The rule that was violated
    """
    code: ErrorCode
    path: str
    message: str
    label: Optional[str] = None
    value: Any = None
    rule: Any = None

    def __str__(self) -> str:
        if self.label:
            return f"Error at '{self.path}' ({self.label}): {self.message}"
        return f"Error at '{self.path}': {self.message}"


@dataclass
class ValidationResult:
    """
    Result of validating data against a rule.

    Attributes:
        valid: Whether the validation was successful
        errors: List of validation errors (if any)
        value: The validated value after conversion and defaults
    """
    valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)
    value: Any = None

    def __bool__(self) -> bool:
        return self.valid


class TranslationError(ValueError):
    """Base class for every error raised while translating a schema."""


class ConfigurationError(TranslationError):
    """The schema or the translator options have an invalid shape."""


class ShapeError(TranslationError):
    """A keyword value does not have the shape the translator needs."""


class SchemaReferenceError(TranslationError):
    """A $ref could not be resolved to a schema."""


class UnresolvedTypeError(TranslationError):
    """A type name matches neither a built-in nor a registered custom type."""


class MergeTypeError(TranslationError):
    """allOf members disagree on, or lack, a mergeable array/object type."""


class CycleError(TranslationError):
    """A $ref was re-entered while it was still being resolved."""

    def __init__(self, chain: List[str]):
        self.chain = list(chain)
        super().__init__(f"Circular $ref chain: {' -> '.join(self.chain)}")


def translate(schema: Union[Dict[str, Any], str],
              options: Optional[Any] = None,
              **kwargs):
    """
    Translate a JSON schema into a validation rule.

    Args:
        schema: Schema mapping, or a type name shorthand
        options: Mapping with ``subSchemas``, ``types``, ``refineType`` and
            ``strictMode`` keys, or a ``TranslatorOptions`` instance
        **kwargs: The same options as snake_case keyword arguments

    Returns:
        Root rule of the translated schema

    Raises:
        TranslationError: If the schema cannot be translated
    """
    from .translator import SchemaTranslator

    return SchemaTranslator(schema, options, **kwargs).translate()
