"""
Validator that runs translated rules against data.
"""

from typing import Any

from .rules import Rule, ValidationContext
from .api import ValidationResult


class Validator:
    """
    Validates data against rule trees.

    This class is responsible for running a rule against a value and
    packaging the collected errors and the converted value into a
    validation result.
    """

    def __init__(self, verbose: bool = False):
        """
        Initialize a new validator.

        Args:
            verbose: Whether to include additional details in error messages
        """
        self.verbose = verbose

    def validate(self, data: Any, rule: Rule) -> ValidationResult:
        """
        Validate data against a rule.

        Args:
            data: Data to validate
            rule: Rule to validate against

        Returns:
            ValidationResult containing validation status, errors and the
            converted value
        """
        context = ValidationContext(verbose=self.verbose)

        value = rule.check(data, context)

        return ValidationResult(
            valid=not context.errors,
            errors=context.errors,
            value=value
        )
