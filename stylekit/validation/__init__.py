"""Validation module - schema checks, usage checks and custom hooks.

Example usage:
    >>> from stylekit.validation import check_usage, validate_schema
    >>> validate_schema(system).valid
    True
    >>> result = check_usage(button, PropertyUsage(component="Button",
    ...     props={"importance": "ghost", "state": "disabled"}))
"""

from .hooks import HookResult, ValidatorHook, ValidatorRegistration, ValidatorRegistry
from .lib import (
    PASS_THROUGH_PROPS,
    PROPERTY_NAME_PATTERN,
    TOKEN_NAME_PATTERN,
    UsageBatch,
    check_usage,
    is_pass_through,
    validate_all_usages,
    validate_property_value,
    validate_schema,
    validate_usage,
)

__all__ = [
    # Schema validation
    "TOKEN_NAME_PATTERN",
    "PROPERTY_NAME_PATTERN",
    "validate_schema",
    # Usage validation
    "PASS_THROUGH_PROPS",
    "is_pass_through",
    "validate_property_value",
    "validate_usage",
    "check_usage",
    # Batch validation
    "UsageBatch",
    "validate_all_usages",
    # Hooks
    "HookResult",
    "ValidatorHook",
    "ValidatorRegistration",
    "ValidatorRegistry",
]
