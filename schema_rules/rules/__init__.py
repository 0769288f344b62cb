"""
Rule package initialization.
"""

from .base import MISSING, AnyRule, Presence, Rule, TypeRule, ValidationContext
from .strings import StringRule
from .numbers import NumberRule
from .booleans import BooleanRule
from .dates import DateRule
from .binaries import BinaryRule
from .arrays import ArrayRule
from .objects import ObjectRule
from .logical import AlternativesRule

__all__ = [
    "MISSING",
    "Presence",
    "Rule",
    "TypeRule",
    "ValidationContext",
    "AnyRule",
    "StringRule",
    "NumberRule",
    "BooleanRule",
    "DateRule",
    "BinaryRule",
    "ArrayRule",
    "ObjectRule",
    "AlternativesRule"
]
