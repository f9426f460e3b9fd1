"""Environment-driven settings for stylekit.

Every tunable the toolkit reads from the process environment is declared
once as an `EnvVar` member. Values are looked up through `get_environment()`,
which applies an explicit override first, then the environment, then the
declared default, and converts raw strings to the declared type.

Example:
    >>> from stylekit.config import EnvVar, get_environment
    >>> get_environment(EnvVar.STYLEKIT_MAX_UNION_SIZE)
    20
    >>> get_environment(EnvVar.STYLEKIT_CSS_PREFIX, override="acme")
    'acme'
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Declarations
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Declaration of one environment variable.

    Attributes:
        name: Variable name as it appears in the environment.
        default: Value used when the variable is unset, blank or unparseable.
        var_type: Target type for raw string values.
        description: Short help text.
        category: Group used by `list_environment_variables`.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """Environment variables understood by stylekit.

    Categories: compile, validation, logging, service.
    """

    # -------------------------------------------------------------------------
    # Compilation
    # -------------------------------------------------------------------------
    STYLEKIT_CSS_PREFIX = EnvConfig(
        name="STYLEKIT_CSS_PREFIX",
        default="ui",
        var_type=str,
        description="Class and CSS variable prefix when a system sets none",
        category="compile",
    )
    STYLEKIT_MAX_UNION_SIZE = EnvConfig(
        name="STYLEKIT_MAX_UNION_SIZE",
        default=20,
        var_type=int,
        description="Largest combination set emitted as a literal union type",
        category="compile",
    )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------
    STYLEKIT_SUGGESTION_LIMIT = EnvConfig(
        name="STYLEKIT_SUGGESTION_LIMIT",
        default=3,
        var_type=int,
        description="Number of alternative prop combinations to suggest",
        category="validation",
    )
    STYLEKIT_STRICT = EnvConfig(
        name="STYLEKIT_STRICT",
        default=False,
        var_type=bool,
        description="Treat warnings as failures in batch validation",
        category="validation",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    STYLEKIT_LOG_LEVEL = EnvConfig(
        name="STYLEKIT_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # MCP service
    # -------------------------------------------------------------------------
    STYLEKIT_CONFIG_PATH = EnvConfig(
        name="STYLEKIT_CONFIG_PATH",
        default=None,
        var_type=Path,
        description="Design system JSON document served by the MCP server",
        category="service",
    )
    MCP_HOST = EnvConfig(
        name="MCP_HOST",
        default="0.0.0.0",
        var_type=str,
        description="MCP server bind address",
        category="service",
    )
    MCP_PORT = EnvConfig(
        name="MCP_PORT",
        default=18080,
        var_type=int,
        description="MCP server port",
        category="service",
    )


# =============================================================================
# Conversion
# =============================================================================

_TRUTHY = frozenset({"true", "1", "yes", "on"})
_FALSY = frozenset({"false", "0", "no", "off"})


def _to_bool(raw: str) -> bool:
    word = raw.strip().lower()
    if word in _TRUTHY:
        return True
    if word in _FALSY:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _to_int(raw: str) -> int:
    return int(raw.strip())


_CONVERTERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: _to_int,
    bool: _to_bool,
    Path: lambda raw: Path(raw).expanduser(),
}


def _convert_value(raw: str | None, config: EnvConfig) -> Any:
    # Blank counts as unset; unparseable text falls back to the default.
    if raw is None or not raw.strip():
        return config.default
    convert = _CONVERTERS.get(config.var_type, str)
    try:
        return convert(raw)
    except ValueError:
        return config.default


# =============================================================================
# Lookup
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Resolve a variable: override, then the environment, then the default.

    A non-None override is returned untouched.
    """
    if override is not None:
        return override
    config: EnvConfig = env_var.value
    return _convert_value(os.environ.get(config.name), config)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Return the declaration behind an EnvVar member."""
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """All declared variables, or only those in ``category``."""
    return [
        var for var in EnvVar if category is None or var.value.category == category
    ]


# =============================================================================
# Shortcuts
# =============================================================================


def get_css_prefix(override: str | None = None) -> str:
    """Prefix for classes and variables when the design system declares none.

    An empty override counts as unset.
    """
    return get_environment(EnvVar.STYLEKIT_CSS_PREFIX, override=override or None)


def get_max_union_size(override: int | None = None) -> int:
    return get_environment(EnvVar.STYLEKIT_MAX_UNION_SIZE, override=override)


def get_suggestion_limit(override: int | None = None) -> int:
    return get_environment(EnvVar.STYLEKIT_SUGGESTION_LIMIT, override=override)


def is_strict(override: bool | None = None) -> bool:
    """Whether batch validation should fail on warnings."""
    return get_environment(EnvVar.STYLEKIT_STRICT, override=override)


def get_log_level(verbose: bool = False) -> str:
    """Log level name; ``verbose`` forces DEBUG."""
    if verbose:
        return "DEBUG"
    return get_environment(EnvVar.STYLEKIT_LOG_LEVEL).upper()


def get_config_path(override: Path | str | None = None) -> Path | None:
    """Design system document for the MCP server, if one is configured."""
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.STYLEKIT_CONFIG_PATH)


__all__ = [
    # Declarations
    "EnvConfig",
    "EnvVar",
    # Lookup
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
    # Shortcuts
    "get_css_prefix",
    "get_max_union_size",
    "get_suggestion_limit",
    "is_strict",
    "get_log_level",
    "get_config_path",
]
