"""Schema module - authoritative models for design system documents.

This module provides:
- Property, constraint and mapping models for component schemas
- Token registries and system settings
- Usage records for call-site validation
- Declarative builders (`define_component`, `prop`, `when`)

Example usage:
    >>> from stylekit.schema import define_component, prop, when
    >>> badge = define_component(
    ...     name="Badge",
    ...     properties={"tone": prop.enum(["info", "danger"], default="info")},
    ... )
"""

from .define import (
    ConstraintBuilder,
    SchemaDefinitionError,
    define_component,
    define_system,
    export_json_schema,
    load_design_system,
    prop,
    when,
)
from .lib import (
    UNDEFINED,
    BooleanProperty,
    ComponentSchema,
    Condition,
    ConditionalMapping,
    ConditionOperator,
    Constraint,
    DesignSystemConfig,
    EnumProperty,
    Equals,
    NumberProperty,
    OneOf,
    Operator,
    PropertyDefinition,
    PropertyKind,
    PropertyUsage,
    StringProperty,
    StyleValue,
    SystemSettings,
    TokenRegistry,
    TokenValue,
    UsageLocation,
    VisualMapping,
    apply_defaults,
    coerce_to_string,
    condition_to_raw,
    parse_condition,
    parse_mapping_key,
)

__all__ = [
    # Properties
    "PropertyKind",
    "EnumProperty",
    "BooleanProperty",
    "StringProperty",
    "NumberProperty",
    "PropertyDefinition",
    # Conditions
    "ConditionOperator",
    "Condition",
    "Equals",
    "OneOf",
    "Operator",
    "UNDEFINED",
    "coerce_to_string",
    "parse_condition",
    "condition_to_raw",
    # Constraints and mappings
    "Constraint",
    "ConditionalMapping",
    "StyleValue",
    "VisualMapping",
    "parse_mapping_key",
    # Components and systems
    "ComponentSchema",
    "apply_defaults",
    "TokenValue",
    "TokenRegistry",
    "SystemSettings",
    "DesignSystemConfig",
    # Usage
    "UsageLocation",
    "PropertyUsage",
    # Builders
    "SchemaDefinitionError",
    "ConstraintBuilder",
    "define_component",
    "define_system",
    "load_design_system",
    "export_json_schema",
    "prop",
    "when",
]
