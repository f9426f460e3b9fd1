"""stylekit: schema-driven styling toolkit for design systems."""

from stylekit.constraints import generate_valid_combinations, suggest_valid_alternatives
from stylekit.diagnostics import IssueCode, ValidationIssue, ValidationResult
from stylekit.schema import (
    ComponentSchema,
    DesignSystemConfig,
    PropertyUsage,
    define_component,
    define_system,
    load_design_system,
    prop,
    when,
)
from stylekit.validation import check_usage, validate_all_usages, validate_schema

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Schema
    "ComponentSchema",
    "DesignSystemConfig",
    "PropertyUsage",
    "define_component",
    "define_system",
    "load_design_system",
    "prop",
    "when",
    # Constraints
    "generate_valid_combinations",
    "suggest_valid_alternatives",
    # Validation
    "IssueCode",
    "ValidationIssue",
    "ValidationResult",
    "check_usage",
    "validate_schema",
    "validate_all_usages",
]
