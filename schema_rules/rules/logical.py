"""
Alternatives rule implementation.
"""

from typing import Any, Dict, List, Optional, Tuple

from .base import Rule, ValidationContext
from ..api import ErrorCode


class AlternativesRule(Rule):
    """
    Rule that accepts a value if at least one alternative accepts it.

    Conditional branches added with ``when`` are evaluated before the plain
    alternatives: the value is tested against the condition and then checked
    against ``then`` or ``otherwise``.
    """

    rule_type = "alternatives"

    def __init__(self, rules: Optional[List[Rule]] = None):
        """
        Initialize a new alternatives rule.

        Args:
            rules: Alternatives tried in order
        """
        super().__init__()
        self.alternatives: List[Rule] = list(rules or [])
        self.conditions: List[Tuple[Rule, Optional[Rule], Optional[Rule]]] = []

    def _clone(self) -> "AlternativesRule":
        clone = super()._clone()
        clone.alternatives = list(self.alternatives)
        clone.conditions = list(self.conditions)
        return clone

    def try_(self, rules: List[Rule]) -> "AlternativesRule":
        clone = self._clone()
        clone.alternatives.extend(rules)
        return clone

    def when(self,
             condition: Rule,
             then: Optional[Rule] = None,
             otherwise: Optional[Rule] = None) -> "AlternativesRule":
        """
        Add a conditional branch.

        Args:
            condition: Rule the value is tested against
            then: Rule applied when the condition accepts the value
            otherwise: Rule applied when it does not

        Returns:
            New rule
        """
        if then is None and otherwise is None:
            raise ValueError("A condition needs at least one of then or otherwise")
        clone = self._clone()
        clone.conditions.append((condition, then, otherwise))
        return clone

    def _check_type(self, value: Any, context: ValidationContext) -> Any:
        """
        Validate a value against the conditions and alternatives.

        Args:
            value: Value to validate
            context: Validation context

        Returns:
            The value as converted by the branch that accepted it
        """
        for condition, then, otherwise in self.conditions:
            matched, _ = condition.attempt(value, context.branch())
            chosen = then if matched else otherwise
            if chosen is not None:
                return chosen.check(value, context)

        if self.conditions and not self.alternatives:
            return value

        # Track all branch errors
        all_errors = []

        for i, rule in enumerate(self.alternatives):
            # Use an isolated error context to collect branch errors
            sub_context = context.branch()
            valid, converted = rule.attempt(value, sub_context)
            if valid:
                return converted
            all_errors.append((i, sub_context.errors))

        self._error(
            context,
            ErrorCode.ALTERNATIVES_NO_MATCH,
            "Value does not match any of the allowed alternatives",
            value
        )

        # Add details about why each branch failed
        if context.verbose:
            for i, errors in all_errors:
                for error in errors:
                    context.add_error(
                        error.code,
                        f"alternative[{i}]: {error.message}",
                        value=error.value,
                        rule=error.rule,
                        label=error.label
                    )

        return value

    def _describe_constraints(self) -> Dict[str, Any]:
        constraints: Dict[str, Any] = {}
        if self.alternatives:
            constraints["try"] = [rule.describe() for rule in self.alternatives]
        if self.conditions:
            constraints["when"] = [
                {
                    "condition": condition.describe(),
                    "then": then.describe() if then is not None else None,
                    "otherwise": otherwise.describe() if otherwise is not None else None,
                }
                for condition, then, otherwise in self.conditions
            ]
        return constraints

    def __str__(self) -> str:
        """String representation of the rule."""
        return (f"AlternativesRule(alternatives={len(self.alternatives)}, "
                f"conditions={len(self.conditions)})")

    def __repr__(self) -> str:
        """Detailed representation of the rule."""
        return f"AlternativesRule(alternatives={[str(rule) for rule in self.alternatives]})"
