"""CSS module - custom properties and attribute-selector rules.

Example usage:
    >>> from stylekit.css import compile_system
    >>> stylesheet = compile_system(system, minify=True)
"""

from .lib import (
    LITERAL_VALUES,
    CompiledStyles,
    attribute_selector,
    compile_component,
    compile_system,
    flatten_tokens,
    generate_css_rule,
    generate_css_variables,
    generate_dark_mode_variables,
    is_reachable,
    kebab_case,
    minify_css,
    resolve_prefix,
    resolve_style_value,
    resolve_value,
    variable_name,
)

__all__ = [
    # Naming
    "kebab_case",
    "resolve_prefix",
    "variable_name",
    # Variables
    "flatten_tokens",
    "generate_css_variables",
    "generate_dark_mode_variables",
    # Values
    "LITERAL_VALUES",
    "resolve_value",
    "resolve_style_value",
    # Rules
    "CompiledStyles",
    "attribute_selector",
    "generate_css_rule",
    "is_reachable",
    "compile_component",
    # System
    "minify_css",
    "compile_system",
]
