"""Constraint engine - condition evaluation, constraint checks and combinations.

Example usage:
    >>> from stylekit.constraints import validate_constraints
    >>> issues = validate_constraints(button, PropertyUsage(component="Button",
    ...     props={"importance": "ghost", "state": "disabled"}))
    >>> [i.code for i in issues]
    [<IssueCode.CONSTRAINT_FORBIDDEN_PROP: 'CONSTRAINT_FORBIDDEN_PROP'>]
"""

from .combinations import (
    count_combinations,
    generate_valid_combinations,
    is_satisfiable,
    iter_valid_combinations,
    suggest_valid_alternatives,
)
from .lib import (
    describe_constraint,
    evaluate_condition,
    evaluate_operator,
    format_condition,
    validate_constraints,
)

__all__ = [
    # Evaluation
    "evaluate_condition",
    "evaluate_operator",
    "format_condition",
    "describe_constraint",
    # Constraint checks
    "validate_constraints",
    # Combinations
    "count_combinations",
    "iter_valid_combinations",
    "generate_valid_combinations",
    "is_satisfiable",
    "suggest_valid_alternatives",
]
