"""
Translator options and entry-point validation.
"""

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .api import ConfigurationError
from .rules import Rule

RefineType = Callable[[Any, Optional[str]], Any]

# Option names accepted in an options mapping, and the field each one sets
OPTION_NAMES = {
    "subSchemas": "sub_schemas",
    "types": "types",
    "refineType": "refine_type",
    "strictMode": "strict_mode",
}


@dataclass(frozen=True)
class TranslatorOptions:
    """
    Immutable translator configuration.

    Attributes:
        sub_schemas: Schemas addressable by id from a $ref
        types: Prebuilt rules for custom type names
        refine_type: Maps a (type, format) pair to the type to dispatch on
        strict_mode: Disable input conversion on every built rule
    """
    sub_schemas: Optional[Mapping[str, Any]] = None
    types: Optional[Mapping[str, Rule]] = None
    refine_type: Optional[RefineType] = None
    strict_mode: bool = False

    def __post_init__(self):
        if self.sub_schemas is not None and not isinstance(self.sub_schemas, Mapping):
            raise ConfigurationError(
                f"subSchemas must be a mapping, got {type(self.sub_schemas).__name__}")

        if self.types is not None:
            if not isinstance(self.types, Mapping):
                raise ConfigurationError(
                    f"types must be a mapping, got {type(self.types).__name__}")
            for name, rule in self.types.items():
                if not isinstance(rule, Rule):
                    raise ConfigurationError(
                        f"Custom type '{name}' must be a Rule, got {type(rule).__name__}")

        if self.refine_type is not None and not callable(self.refine_type):
            raise ConfigurationError("refineType must be callable")

        if not isinstance(self.strict_mode, bool):
            raise ConfigurationError(
                f"strictMode must be a boolean, got {type(self.strict_mode).__name__}")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "TranslatorOptions":
        """
        Build options from a mapping using the camelCase option names.

        Args:
            options: Mapping with any of subSchemas, types, refineType and strictMode

        Returns:
            Validated options

        Raises:
            ConfigurationError: If a key is unknown or a value has the wrong shape
        """
        unknown = sorted(str(key) for key in options if key not in OPTION_NAMES)
        if unknown:
            raise ConfigurationError(f"Unknown translator options: {', '.join(unknown)}")

        values = {OPTION_NAMES[key]: value for key, value in options.items()}
        if values.get("strict_mode") is None:
            values.pop("strict_mode", None)
        return cls(**values)


def build_options(options: Union[None, Mapping[str, Any], TranslatorOptions] = None,
                  **kwargs: Any) -> TranslatorOptions:
    """
    Normalize the ways options can be passed into one TranslatorOptions.

    Args:
        options: None, an options mapping or a TranslatorOptions instance
        **kwargs: snake_case overrides (sub_schemas, types, refine_type, strict_mode)

    Returns:
        Validated options

    Raises:
        ConfigurationError: If the options are malformed
    """
    if options is None:
        base = TranslatorOptions()
    elif isinstance(options, TranslatorOptions):
        base = options
    elif isinstance(options, Mapping):
        base = TranslatorOptions.from_mapping(options)
    else:
        raise ConfigurationError(
            f"Options must be a mapping, got {type(options).__name__}")

    if not kwargs:
        return base

    names = {field.name for field in fields(TranslatorOptions)}
    unknown = sorted(set(kwargs) - names)
    if unknown:
        raise ConfigurationError(f"Unknown translator options: {', '.join(unknown)}")

    values: Dict[str, Any] = {name: getattr(base, name) for name in names}
    values.update(kwargs)
    return TranslatorOptions(**values)


def check_schema(schema: Any) -> None:
    """
    Check the root schema before any resolution starts.

    Args:
        schema: Root schema

    Raises:
        ConfigurationError: Unless the schema is a mapping or a non-empty string
    """
    if isinstance(schema, dict):
        return
    if isinstance(schema, str):
        if not schema:
            raise ConfigurationError("Schema must not be an empty string")
        return
    raise ConfigurationError(
        f"Schema must be a mapping or a string, got {type(schema).__name__}")
