"""MCP tools for stylekit.

Plain functions taking the served design system explicitly; the server
binds them to its config.

Tools:
    - get_component_schema: Component definition and constraint sentences
    - get_valid_prop_combinations: Valid enum combinations
    - suggest_alternatives: Closest valid combinations to a prop set
    - validate_component_usage: Check one call site
    - get_design_tokens: Token registry, optionally one category
    - get_manifest: Machine-readable system manifest
    - get_usage_guide: Markdown rules for writing call sites
"""

from .components import (
    get_component_schema,
    get_valid_prop_combinations,
    require_component,
    suggest_alternatives,
)
from .manifest import get_manifest, get_usage_guide
from .tokens import get_design_tokens
from .validate import validate_component_usage

__all__ = [
    "require_component",
    "get_component_schema",
    "get_valid_prop_combinations",
    "suggest_alternatives",
    "validate_component_usage",
    "get_design_tokens",
    "get_manifest",
    "get_usage_guide",
]
