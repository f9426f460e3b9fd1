"""Validate component usage tool for the MCP server.

This tool checks one call site against the served design system and, when
the call site is invalid, offers the closest valid combinations.
"""

from typing import Any

from stylekit.constraints import suggest_valid_alternatives
from stylekit.schema import DesignSystemConfig, PropertyUsage
from stylekit.validation import check_usage

from .components import require_component


def validate_component_usage(
    config: DesignSystemConfig,
    component: str,
    props: dict[str, Any],
) -> dict[str, Any]:
    """Validate props passed to a component.

    Omitted props take their declared defaults before constraints are
    checked, as they would at runtime.

    Args:
        config: Served design system.
        component: Component name.
        props: Props at the call site.

    Returns:
        Dictionary containing:
        - valid: Boolean indicating if the usage passes
        - issues: Issue objects with severity, code, message, path
        - suggestions: Closest valid combinations (only when invalid)

    Example:
        >>> result = validate_component_usage(system, "Button",
        ...     {"importance": "ghost", "state": "disabled"})
        >>> result["valid"]
        False
    """
    schema = require_component(config, component)
    usage = PropertyUsage(component=component, props=props)
    result = check_usage(schema, usage, fill_defaults=True)

    data = result.to_dict()
    if not result.valid:
        data["suggestions"] = suggest_valid_alternatives(schema, props)
    return data


__all__ = ["validate_component_usage"]
