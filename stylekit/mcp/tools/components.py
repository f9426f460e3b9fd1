"""Component introspection tools for the MCP server.

These tools expose schemas, valid combinations and alternative suggestions
for one component of the served design system.
"""

import logging
from typing import Any

from stylekit.constraints import (
    count_combinations,
    describe_constraint,
    generate_valid_combinations,
    suggest_valid_alternatives,
)
from stylekit.schema import ComponentSchema, DesignSystemConfig

logger = logging.getLogger(__name__)


def require_component(config: DesignSystemConfig, component: str) -> ComponentSchema:
    """Look up a component or fail with the list of known names.

    Raises:
        ValueError: If the design system has no such component.
    """
    schema = config.get_component(component)
    if schema is None:
        available = ", ".join(config.components) or "none"
        raise ValueError(
            f'Component "{component}" not found. Available components: {available}'
        )
    return schema


def get_component_schema(config: DesignSystemConfig, component: str) -> dict[str, Any]:
    """Get the schema definition of a component.

    Returns:
        The component document in its declarative (camelCase) form, plus
        `constraintDescriptions` with one sentence per constraint.
    """
    schema = require_component(config, component)
    data = schema.model_dump(mode="json", by_alias=True, exclude_none=True)
    data["constraintDescriptions"] = [describe_constraint(c) for c in schema.constraints]
    return data


def get_valid_prop_combinations(
    config: DesignSystemConfig,
    component: str,
    limit: int | None = None,
) -> dict[str, Any]:
    """List the valid enum combinations of a component.

    Args:
        config: Served design system.
        component: Component name.
        limit: Return at most this many combinations; `count` stays exact.
    """
    schema = require_component(config, component)
    combinations = generate_valid_combinations(schema)
    shown = combinations if limit is None else combinations[: max(limit, 0)]
    return {
        "component": component,
        "count": len(combinations),
        "total": count_combinations(schema),
        "combinations": shown,
    }


def suggest_alternatives(
    config: DesignSystemConfig,
    component: str,
    props: dict[str, Any],
    limit: int | None = None,
) -> dict[str, Any]:
    """Valid combinations closest to the given props."""
    schema = require_component(config, component)
    suggestions = suggest_valid_alternatives(schema, props, limit=limit)
    logger.debug(f"{component}: {len(suggestions)} suggestions for {props}")
    return {"component": component, "suggestions": suggestions}


__all__ = [
    "require_component",
    "get_component_schema",
    "get_valid_prop_combinations",
    "suggest_alternatives",
]
