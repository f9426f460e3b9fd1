"""Typegen module - TypeScript declarations for components and tokens."""

from .lib import (
    generate_component_types,
    generate_jsdoc,
    generate_system_types,
    generate_token_types,
    token_type_name,
    type_string,
)

__all__ = [
    "type_string",
    "generate_jsdoc",
    "generate_component_types",
    "token_type_name",
    "generate_token_types",
    "generate_system_types",
]
