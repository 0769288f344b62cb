#!/usr/bin/env python3
"""
JSON Schema Rule Translator

This package translates JSON schema documents into trees of validation
rules that can then check data, converting loosely typed input unless
strict mode is on.
"""

import logging

from .api import (
    ConfigurationError,
    CycleError,
    ErrorCode,
    MergeTypeError,
    SchemaReferenceError,
    ShapeError,
    TranslationError,
    UnresolvedTypeError,
    ValidationError,
    ValidationResult,
    translate
)
from .options import TranslatorOptions
from .translator import SchemaTranslator
from .utils import JsonPointer
from .validator import Validator
from .version import __version__

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("schema_rules")

# Export public classes and functions
__all__ = [
    "translate",
    "SchemaTranslator",
    "TranslatorOptions",
    "Validator",
    "ValidationResult",
    "ValidationError",
    "ErrorCode",
    "JsonPointer",
    "TranslationError",
    "ConfigurationError",
    "ShapeError",
    "SchemaReferenceError",
    "UnresolvedTypeError",
    "MergeTypeError",
    "CycleError"
]
