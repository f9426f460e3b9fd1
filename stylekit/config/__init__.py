"""Environment configuration for stylekit.

Variables are declared on `EnvVar` and read with `get_environment()`:

    >>> from stylekit.config import EnvVar, get_environment
    >>> get_environment(EnvVar.MCP_PORT)
    18080

Categories:
    compile: CSS prefix and type union threshold
    validation: Suggestion limit and strict mode
    logging: Log level
    service: MCP server address and design system document
"""

from .lib import (
    # Declarations
    EnvConfig,
    EnvVar,
    # Lookup
    get_environment,
    get_environment_info,
    list_environment_variables,
    # Shortcuts
    get_config_path,
    get_css_prefix,
    get_log_level,
    get_max_union_size,
    get_suggestion_limit,
    is_strict,
)

__all__ = [
    "EnvConfig",
    "EnvVar",
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
    "get_css_prefix",
    "get_max_union_size",
    "get_suggestion_limit",
    "is_strict",
    "get_log_level",
    "get_config_path",
]
