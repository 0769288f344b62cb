"""
Utility classes and functions for the JSON Schema rule translator.
"""

import json
import math
from typing import Any, List, Optional


class JsonPointer:
    """
    Utility class for handling JSON Pointers (RFC 6901).

    JSON Pointers are used to reference specific locations within a JSON document.
    """

    @staticmethod
    def from_parts(parts: List[str]) -> str:
        """
        Create a JSON Pointer from path parts.

        Args:
            parts: List of path segments

        Returns:
            JSON Pointer string
        """
        if not parts:
            return ""

        return "/" + "/".join(JsonPointer.escape_part(part) for part in parts)

    @staticmethod
    def escape_part(part: str) -> str:
        """
        Escape a JSON Pointer path segment.

        Args:
            part: Path segment to escape

        Returns:
            Escaped path segment
        """
        # Replace ~ with ~0 and / with ~1
        return str(part).replace("~", "~0").replace("/", "~1")

    @staticmethod
    def unescape_part(part: str) -> str:
        """
        Unescape a JSON Pointer path segment.

        Args:
            part: Escaped path segment

        Returns:
            Unescaped path segment
        """
        # Replace ~1 with / and ~0 with ~
        return part.replace("~1", "/").replace("~0", "~")

    @staticmethod
    def walk(document: Any, parts: List[str]) -> Any:
        """
        Follow path parts into a document as far as they lead.

        Unlike a strict pointer resolution this never raises: walking stops
        and returns None as soon as a part cannot be followed.

        Args:
            document: The JSON document to navigate
            parts: Unescaped path segments

        Returns:
            The value reached, or None
        """
        current = document

        for part in parts:
            if isinstance(current, dict):
                current = current.get(part)
            elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
                current = current[int(part)]
            else:
                return None

            if current is None:
                return None

        return current


class TypeUtils:
    """Utilities for working with JSON values."""

    @staticmethod
    def get_json_type(value: Any) -> str:
        """
        Get the JSON Schema type for a Python value.

        Args:
            value: Python value

        Returns:
            JSON Schema type name
        """
        if value is None:
            return "null"
        elif isinstance(value, bool):
            return "boolean"
        elif isinstance(value, int):
            return "integer"
        elif isinstance(value, float):
            return "number"
        elif isinstance(value, str):
            return "string"
        elif isinstance(value, list):
            return "array"
        elif isinstance(value, dict):
            return "object"
        else:
            # Best effort for custom types
            return type(value).__name__

    @staticmethod
    def is_number(value: Any) -> bool:
        """Check for a real number; booleans do not count."""
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    @staticmethod
    def is_finite_number(value: Any) -> bool:
        return TypeUtils.is_number(value) and math.isfinite(value)

    @staticmethod
    def is_set(value: Any) -> bool:
        """
        Check whether a schema keyword counts as present.

        Missing values, None, False, zero and the empty string are treated as
        absent. Containers are present even when empty.

        Args:
            value: Keyword value

        Returns:
            True if the keyword should be applied
        """
        if value is None or value is False:
            return False
        if isinstance(value, (list, dict)):
            return True
        if isinstance(value, (int, float, str)):
            return bool(value)
        return True

    @staticmethod
    def same_value(left: Any, right: Any) -> bool:
        """
        Compare two JSON values without letting booleans equal numbers.

        Args:
            left: First value
            right: Second value

        Returns:
            True if both values are equal
        """
        if isinstance(left, bool) != isinstance(right, bool):
            return False
        return left == right

    @staticmethod
    def canonical(value: Any) -> str:
        """Stable text form of a value, used for distinctness checks."""
        try:
            return json.dumps(value, sort_keys=True, default=repr)
        except (TypeError, ValueError):
            return repr(value)


class SchemaKeywords:
    """Constants for the JSON Schema keywords the translator understands."""

    # Type keywords
    TYPE = "type"
    FORMAT = "format"

    # Number keywords
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"
    MULTIPLE_OF = "multipleOf"

    # String keywords
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"

    # Array keywords
    ITEMS = "items"
    ORDERED = "ordered"
    ADDITIONAL_ITEMS = "additionalItems"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    UNIQUE_ITEMS = "uniqueItems"

    # Object keywords
    PROPERTIES = "properties"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    REQUIRED = "required"
    MIN_PROPERTIES = "minProperties"
    MAX_PROPERTIES = "maxProperties"

    # Schema composition
    ALL_OF = "allOf"
    ANY_OF = "anyOf"
    ONE_OF = "oneOf"
    NOT = "not"

    # Miscellaneous
    ENUM = "enum"

    # References
    REF = "$ref"

    # Schema metadata, mapped onto rule decorations
    TITLE = "title"
    DESCRIPTION = "description"
    DEFAULT = "default"

    @staticmethod
    def get(node: Any, keyword: str, default: Optional[Any] = None) -> Any:
        """
        Read a keyword from a schema node.

        Args:
            node: Schema node (non-mappings have no keywords)
            keyword: Schema keyword
            default: Value returned when the keyword is missing

        Returns:
            The keyword value or the default
        """
        if isinstance(node, dict):
            return node.get(keyword, default)
        return default
