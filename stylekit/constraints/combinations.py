"""Valid prop combinations and nearest-valid suggestions.

Combinations cover enum properties only: each one is a full assignment of
every enum property of a schema, in declaration order. The expansion is
exponential in the number of enum properties, so it belongs on build and
tooling paths rather than per-request ones.
"""

import itertools
import math
from collections.abc import Iterator
from typing import Any

from stylekit.config import get_suggestion_limit
from stylekit.core.log import get_logger
from stylekit.schema import (
    BooleanProperty,
    ComponentSchema,
    Condition,
    EnumProperty,
    Equals,
    OneOf,
    Operator,
    PropertyDefinition,
    PropertyUsage,
    coerce_to_string,
)

from .lib import validate_constraints

logger = get_logger(__name__)


def count_combinations(schema: ComponentSchema) -> int:
    """Size of the unfiltered enum cross product."""
    return math.prod(len(d.values) for _, d in schema.enum_properties())


def iter_valid_combinations(schema: ComponentSchema) -> Iterator[dict[str, str]]:
    """Yield constraint-valid enum assignments in depth-first order.

    Enum properties are expanded in declaration order and values in declared
    order. Each full assignment is checked with `validate_constraints`; only
    assignments with zero issues are yielded, each as a fresh dict.
    """
    enum_props = [(name, d.values) for name, d in schema.enum_properties()]
    current: dict[str, str] = {}

    def expand(index: int) -> Iterator[dict[str, str]]:
        if index == len(enum_props):
            usage = PropertyUsage(component=schema.name, props=current)
            if not validate_constraints(schema, usage):
                yield dict(current)
            return
        name, values = enum_props[index]
        for value in values:
            current[name] = value
            yield from expand(index + 1)
        current.pop(name, None)

    yield from expand(0)


def generate_valid_combinations(schema: ComponentSchema) -> list[dict[str, str]]:
    """Every constraint-valid enum assignment of a schema.

    Args:
        schema: Component schema to expand.

    Returns:
        Combinations in depth-first order. An enum property with no values
        yields no combinations; a schema without enum properties yields a
        single empty combination when its constraints allow it.

    Example:
        >>> generate_valid_combinations(button)[0]
        {'importance': 'primary', 'size': 'md', 'state': 'default'}
    """
    combinations = list(iter_valid_combinations(schema))
    logger.debug(
        f"{schema.name}: {len(combinations)} of {count_combinations(schema)} "
        "enum combinations are valid"
    )
    return combinations


# =============================================================================
# Satisfiability
# =============================================================================

_ABSENT = object()


def _condition_literals(condition: Condition) -> list[Any]:
    match condition:
        case OneOf(values=values):
            return list(values)
        case Operator(value=list() as values):
            return list(values)
        case Operator(value=bool() | str() as value):
            return [value]
        case Operator(value=int() | float() as value):
            return [value - 1, value, value + 1]
        case Operator(value=value) | Equals(value=value):
            return [value]
    return []


def _candidate_values(
    schema: ComponentSchema, name: str, definition: PropertyDefinition
) -> list[Any]:
    """Values worth trying for one property, `_ABSENT` meaning omitted.

    Enum and boolean properties range over their declared values. Free-form
    properties only matter through the literals constraints compare them
    against, so those literals plus omission cover every outcome.
    """
    omittable = not definition.required or definition.default is not None
    match definition:
        case EnumProperty(values=values):
            candidates = list(values)
        case BooleanProperty():
            candidates = [True, False]
        case _:
            omittable = True
            candidates = []
            for constraint in schema.constraints:
                if name in constraint.when:
                    candidates.extend(_condition_literals(constraint.when[name]))
                if constraint.require and name in constraint.require:
                    candidates.extend(constraint.require[name])
    return [_ABSENT, *candidates] if omittable else candidates


def is_satisfiable(schema: ComponentSchema, fixed: dict[str, Any]) -> bool:
    """Whether some usage carrying `fixed` passes every constraint.

    Properties outside `fixed` are searched over their candidate values,
    including omission where the property allows it, so triggers that an
    absent prop satisfies (`neq`, `nin`) are handled like any other.
    """
    free = [
        (name, _candidate_values(schema, name, definition))
        for name, definition in schema.properties.items()
        if name not in fixed
    ]
    names = [name for name, _ in free]
    for choice in itertools.product(*(candidates for _, candidates in free)):
        props = dict(fixed)
        props.update((name, value) for name, value in zip(names, choice) if value is not _ABSENT)
        if not validate_constraints(schema, PropertyUsage(component=schema.name, props=props)):
            return True
    return False


# =============================================================================
# Suggestions
# =============================================================================


def _similarity(combination: dict[str, str], props: dict[str, Any]) -> int:
    return sum(
        1
        for key, value in props.items()
        if key in combination and combination[key] == coerce_to_string(value)
    )


def suggest_valid_alternatives(
    schema: ComponentSchema,
    invalid_props: dict[str, Any],
    limit: int | None = None,
) -> list[dict[str, str]]:
    """Valid combinations closest to an invalid prop set.

    Each valid combination scores one point per prop of `invalid_props` whose
    coerced value it shares. Results are sorted by descending score; ties keep
    generator order.

    Args:
        schema: Component schema.
        invalid_props: Props the caller tried to use.
        limit: Maximum suggestions. Defaults to STYLEKIT_SUGGESTION_LIMIT,
            which is 3 unless the environment overrides it.

    Returns:
        Up to `limit` valid combinations; empty when none exist.
    """
    limit = get_suggestion_limit(limit)
    valid = generate_valid_combinations(schema)
    ranked = sorted(valid, key=lambda combo: -_similarity(combo, invalid_props))
    return ranked[: max(limit, 0)]


__all__ = [
    "count_combinations",
    "iter_valid_combinations",
    "generate_valid_combinations",
    "is_satisfiable",
    "suggest_valid_alternatives",
]
