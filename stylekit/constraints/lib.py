"""Condition evaluation and conditional constraint checks.

A constraint fires when every entry of its `when` condition holds for the
supplied props. Firing constraints then check their `forbid` and `require`
actions; every violation across every constraint is reported.
"""

from typing import Any

from stylekit.diagnostics import IssueCode, Severity, ValidationIssue, usage_path
from stylekit.schema import (
    ComponentSchema,
    ConditionOperator,
    Constraint,
    Equals,
    OneOf,
    Operator,
    PropertyUsage,
    coerce_to_string,
)

# =============================================================================
# Condition Evaluation
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _strictly_equal(actual: Any, expected: Any) -> bool:
    """Equality without cross-type coercion (True never equals 1)."""
    # Lists and dicts compare by value here, not by identity.
    if _is_number(actual) and _is_number(expected):
        return actual == expected
    return type(actual) is type(expected) and actual == expected


def evaluate_operator(op: str, actual: Any, expected: Any) -> bool:
    """Apply one comparison operator. Unknown operators evaluate to False.

    Args:
        op: Operator text (`eq`, `neq`, `in`, `nin`, `gt`, `lt`, `gte`, `lte`).
        actual: Supplied prop value, None when absent.
        expected: Operand from the condition.
    """
    match op:
        case ConditionOperator.EQ:
            return _strictly_equal(actual, expected)
        case ConditionOperator.NEQ:
            return not _strictly_equal(actual, expected)
        case ConditionOperator.IN:
            return isinstance(expected, list) and coerce_to_string(actual) in expected
        case ConditionOperator.NIN:
            return (
                isinstance(expected, list)
                and coerce_to_string(actual) not in expected
            )
        case ConditionOperator.GT:
            return _is_number(actual) and _is_number(expected) and actual > expected
        case ConditionOperator.LT:
            return _is_number(actual) and _is_number(expected) and actual < expected
        case ConditionOperator.GTE:
            return _is_number(actual) and _is_number(expected) and actual >= expected
        case ConditionOperator.LTE:
            return _is_number(actual) and _is_number(expected) and actual <= expected
        case _:
            return False


def evaluate_condition(condition: dict[str, Any], props: dict[str, Any]) -> bool:
    """Check whether every entry of a constraint trigger holds.

    Args:
        condition: Parsed conditions keyed by property name.
        props: Supplied prop values.

    Returns:
        True when all entries hold; an empty condition always holds.
    """
    for key, expected in condition.items():
        actual = props.get(key)
        match expected:
            case OneOf(values=values):
                if coerce_to_string(actual) not in values:
                    return False
            case Operator(op=op, value=value):
                if not evaluate_operator(op, actual, value):
                    return False
            case Equals(value=value):
                if coerce_to_string(actual) != coerce_to_string(value):
                    return False
            case _:
                raise TypeError(f"Unparsed condition for '{key}': {expected!r}")
    return True


def _format_operand(value: Any) -> str:
    if isinstance(value, list):
        return "[" + ", ".join(coerce_to_string(v) for v in value) + "]"
    return coerce_to_string(value)


def format_condition(condition: dict[str, Any]) -> str:
    """Render a trigger for messages, e.g. `importance="ghost" and size is [sm, md]`."""
    parts = []
    for key, expected in condition.items():
        match expected:
            case OneOf(values=values):
                parts.append(f"{key} is [{', '.join(values)}]")
            case Operator(op=op, value=value):
                parts.append(f"{key} {op} {_format_operand(value)}")
            case Equals(value=value):
                parts.append(f'{key}="{coerce_to_string(value)}"')
    return " and ".join(parts)


# =============================================================================
# Constraint Validation
# =============================================================================


def _check_constraint(
    constraint: Constraint, props: dict[str, Any], path: str
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    trigger = format_condition(constraint.when)

    for name in constraint.forbid or []:
        if props.get(name) is not None:
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.CONSTRAINT_FORBIDDEN_PROP,
                    message=constraint.message
                    or f'Property "{name}" is not allowed when {trigger}',
                    path=path,
                    suggestion=f'Remove "{name}" or change {trigger}',
                )
            )

    for name, allowed in (constraint.require or {}).items():
        actual = props.get(name)
        first = allowed[0] if allowed else ""
        if actual is None:
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.CONSTRAINT_MISSING_REQUIRED,
                    message=constraint.message
                    or f'Property "{name}" is required when {trigger}',
                    path=path,
                    suggestion=f'Add {name}="{first}"',
                )
            )
        elif coerce_to_string(actual) not in allowed:
            issues.append(
                ValidationIssue(
                    severity=Severity.ERROR,
                    code=IssueCode.CONSTRAINT_INVALID_VALUE,
                    message=constraint.message
                    or (
                        f'Property "{name}" must be one of [{", ".join(allowed)}] '
                        f'when {trigger}, got "{coerce_to_string(actual)}"'
                    ),
                    path=path,
                    suggestion=f'Change to {name}="{first}"',
                )
            )

    return issues


def validate_constraints(
    schema: ComponentSchema, usage: PropertyUsage
) -> list[ValidationIssue]:
    """Check a usage against every conditional constraint of its schema.

    Constraints are visited in schema order and all violations are collected.
    A prop counts as present only when supplied with a non-None value.

    Args:
        schema: Component schema owning the constraints.
        usage: Call site to check.

    Returns:
        Issues in constraint order; empty when the schema has no constraints
        or nothing fires.
    """
    issues: list[ValidationIssue] = []
    path = usage_path(usage)
    for constraint in schema.constraints:
        if not evaluate_condition(constraint.when, usage.props):
            continue
        issues.extend(_check_constraint(constraint, usage.props, path))
    return issues


def describe_constraint(constraint: Constraint) -> str:
    """Sentence form of a constraint, used by manifests and type comments."""
    trigger = format_condition(constraint.when)
    if constraint.message:
        return constraint.message
    clauses = []
    if constraint.forbid:
        clauses.append(f"{', '.join(constraint.forbid)} is not allowed")
    for name, allowed in (constraint.require or {}).items():
        clauses.append(f"{name} must be one of [{', '.join(allowed)}]")
    return f"When {trigger}: {'; '.join(clauses)}" if clauses else f"When {trigger}"


__all__ = [
    "evaluate_condition",
    "evaluate_operator",
    "format_condition",
    "validate_constraints",
    "describe_constraint",
]
