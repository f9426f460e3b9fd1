"""Design system schema models.

This module is the single source of truth for the shape of a design system
document. It provides:
- Property definitions (enum, boolean, string, number) as a tagged union
- Constraint conditions parsed once into `Equals` / `OneOf` / `Operator`
- Component schemas, token registries and system settings
- Call-site usage records consumed by the validators

Models are pydantic v2 and frozen: a schema is built once from a declarative
definition and never mutated afterwards.
"""

import math
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_serializer, field_validator

# =============================================================================
# Property Definitions
# =============================================================================


class PropertyKind(str, Enum):
    """Value kind accepted by a component property."""

    ENUM = "enum"
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"


class _BaseProperty(BaseModel):
    required: bool = Field(
        default=False,
        description="Whether call sites must supply the property",
    )
    description: str | None = Field(
        default=None,
        description="Human-readable purpose of the property",
    )

    model_config = {"frozen": True}


class EnumProperty(_BaseProperty):
    """Property restricted to a closed list of string values.

    An empty `values` list is accepted here; `validate_schema` reports it.
    """

    type: Literal["enum"] = "enum"
    values: list[str] = Field(..., description="Allowed values, in declared order")
    default: str | None = Field(default=None, description="Value used when omitted")


class BooleanProperty(_BaseProperty):
    """Boolean flag property."""

    type: Literal["boolean"] = "boolean"
    default: bool | None = Field(default=None, strict=True)


class StringProperty(_BaseProperty):
    """Free-form string property."""

    type: Literal["string"] = "string"
    default: str | None = Field(default=None, strict=True)


class NumberProperty(_BaseProperty):
    """Numeric property with optional inclusive bounds."""

    type: Literal["number"] = "number"
    default: float | None = None
    min: float | None = Field(default=None, description="Inclusive lower bound")
    max: float | None = Field(default=None, description="Inclusive upper bound")


PropertyDefinition = Annotated[
    EnumProperty | BooleanProperty | StringProperty | NumberProperty,
    Field(discriminator="type"),
]

# =============================================================================
# Conditions
# =============================================================================


class ConditionOperator(str, Enum):
    """Operators understood by `Operator` conditions."""

    EQ = "eq"
    NEQ = "neq"
    IN = "in"
    NIN = "nin"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"


class Equals(BaseModel):
    """Passes when the prop value, coerced to text, equals `value`."""

    kind: Literal["equals"] = "equals"
    value: Any = None

    model_config = {"frozen": True}


class OneOf(BaseModel):
    """Passes when the coerced prop value is one of `values`."""

    kind: Literal["one_of"] = "one_of"
    values: list[str]

    model_config = {"frozen": True}


class Operator(BaseModel):
    """Explicit comparison.

    `op` keeps the raw operator text so that an unknown operator evaluates to
    false instead of failing schema construction.
    """

    kind: Literal["operator"] = "operator"
    op: str
    value: Any = None

    model_config = {"frozen": True}

    @property
    def operator(self) -> ConditionOperator | None:
        try:
            return ConditionOperator(self.op)
        except ValueError:
            return None


Condition = Annotated[Equals | OneOf | Operator, Field(discriminator="kind")]

# =============================================================================
# Value Coercion
# =============================================================================

UNDEFINED = "undefined"


def coerce_to_string(value: Any, present: bool = True) -> str:
    """Render a prop value as the text used for condition comparisons.

    Absent and None values become "undefined", booleans become "true" /
    "false" and integral floats drop their fractional part ("1", not "1.0").

    Args:
        value: Raw prop value.
        present: False when the prop was not supplied at all.

    Returns:
        Comparison text.
    """
    if not present or value is None:
        return UNDEFINED
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else coerce_to_string(v) for v in value)
    return str(value)


def parse_condition(raw: Any) -> Equals | OneOf | Operator:
    """Classify a raw `when` entry by its runtime shape.

    A list becomes `OneOf`, a mapping carrying `op` becomes `Operator` and
    anything else becomes `Equals`. Already-parsed conditions pass through.
    """
    if isinstance(raw, (Equals, OneOf, Operator)):
        return raw
    if isinstance(raw, (list, tuple)):
        return OneOf(values=[coerce_to_string(v) for v in raw])
    if isinstance(raw, dict):
        if "op" in raw:
            return Operator(op=str(raw["op"]), value=raw.get("value"))
        if raw.get("kind") in ("equals", "one_of", "operator"):
            return _CONDITION_KINDS[raw["kind"]].model_validate(raw)
    return Equals(value=raw)


def condition_to_raw(condition: Equals | OneOf | Operator) -> Any:
    """Inverse of `parse_condition`: the declarative form of a condition."""
    if isinstance(condition, OneOf):
        return list(condition.values)
    if isinstance(condition, Operator):
        return {"op": condition.op, "value": condition.value}
    return condition.value


_CONDITION_KINDS: dict[str, type[BaseModel]] = {
    "equals": Equals,
    "one_of": OneOf,
    "operator": Operator,
}

# =============================================================================
# Constraints and Mappings
# =============================================================================


class Constraint(BaseModel):
    """Conditional rule over a component's props.

    When every entry of `when` holds, each `forbid` prop must be absent and
    each `require` prop must be present with one of its listed values.
    """

    when: dict[str, Condition] = Field(
        default_factory=dict,
        description="Trigger conditions keyed by property name (AND-combined)",
    )
    forbid: list[str] | None = Field(
        default=None,
        description="Properties that must be absent while the trigger holds",
    )
    require: dict[str, list[str]] | None = Field(
        default=None,
        description="Properties that must hold one of the listed values",
    )
    message: str | None = Field(
        default=None,
        description="Custom message reported instead of the generated one",
    )

    model_config = {"frozen": True}

    @field_validator("when", mode="before")
    @classmethod
    def _parse_when(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: parse_condition(raw) for key, raw in value.items()}
        return value

    @field_serializer("when")
    def _dump_when(self, when: dict[str, Any]) -> dict[str, Any]:
        return {key: condition_to_raw(cond) for key, cond in when.items()}

    def referenced_properties(self) -> list[str]:
        """Property names named by the trigger, forbid list and require map."""
        names = list(self.when)
        names.extend(self.forbid or [])
        names.extend(self.require or {})
        return names


StyleValue = str | dict[str, str]
VisualMapping = dict[str, StyleValue]


class ConditionalMapping(BaseModel):
    """Styles applied when extra prop values hold alongside the mapping key."""

    condition: dict[str, str]
    styles: VisualMapping

    model_config = {"frozen": True}


def parse_mapping_key(key: str) -> list[tuple[str, str]]:
    """Split a mapping key into ordered (prop, value) pairs.

    Example:
        >>> parse_mapping_key("importance=primary,size=lg")
        [('importance', 'primary'), ('size', 'lg')]
    """
    pairs: list[tuple[str, str]] = []
    for part in key.split(","):
        part = part.strip()
        if not part:
            continue
        name, _, value = part.partition("=")
        pairs.append((name.strip(), value.strip()))
    return pairs


# =============================================================================
# Component Schema
# =============================================================================


class ComponentSchema(BaseModel):
    """Complete description of one component's styling surface."""

    name: str = Field(..., min_length=1, description="Component name (PascalCase)")
    description: str = Field(default="", description="What the component is for")
    properties: dict[str, PropertyDefinition] = Field(
        ...,
        description="Property definitions in declaration order",
    )
    constraints: list[Constraint] = Field(default_factory=list)
    mappings: dict[str, VisualMapping | list[ConditionalMapping]] = Field(
        default_factory=dict,
        description="Condition-key strings mapped to styles",
    )
    base_styles: VisualMapping | None = Field(default=None, alias="baseStyles")

    model_config = {"frozen": True, "populate_by_name": True}

    def enum_properties(self) -> list[tuple[str, EnumProperty]]:
        """Enum properties in declaration order."""
        return [
            (name, definition)
            for name, definition in self.properties.items()
            if isinstance(definition, EnumProperty)
        ]


def apply_defaults(schema: ComponentSchema, props: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of `props` with omitted optional properties defaulted.

    Required properties are never filled in.
    """
    filled = dict(props)
    for name, definition in schema.properties.items():
        if definition.required or definition.default is None:
            continue
        if filled.get(name) is None:
            filled[name] = definition.default
    return filled


# =============================================================================
# Design System
# =============================================================================

TokenValue = str | int | float
TokenRegistry = dict[str, dict[str, TokenValue | dict[str, Any]]]


class SystemSettings(BaseModel):
    """Compilation settings carried by a design system."""

    css_prefix: str | None = Field(default=None, alias="cssPrefix")
    generate_css_variables: bool = Field(default=True, alias="generateCSSVariables")
    strict_mode: bool = Field(default=False, alias="strictMode")

    model_config = {"frozen": True, "populate_by_name": True}


class DesignSystemConfig(BaseModel):
    """A named set of tokens and component schemas."""

    name: str = Field(..., min_length=1)
    version: str | None = None
    tokens: TokenRegistry = Field(default_factory=dict)
    dark_tokens: TokenRegistry = Field(default_factory=dict, alias="darkTokens")
    components: dict[str, ComponentSchema] = Field(default_factory=dict)
    settings: SystemSettings = Field(default_factory=SystemSettings)

    model_config = {"frozen": True, "populate_by_name": True}

    def get_component(self, name: str) -> ComponentSchema | None:
        return self.components.get(name)

    def get_token(self, category: str, name: str) -> Any:
        return self.tokens.get(category, {}).get(name)


# =============================================================================
# Usage Records
# =============================================================================


class UsageLocation(BaseModel):
    """Source position of a component call site."""

    file: str
    line: int | None = None
    column: int | None = None

    model_config = {"frozen": True}

    def format(self) -> str:
        """Render as `file:line:column`, omitting unknown parts."""
        parts = [self.file]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


class PropertyUsage(BaseModel):
    """One component call site: the props a caller supplied."""

    component: str
    props: dict[str, Any] = Field(default_factory=dict)
    location: UsageLocation | None = None

    model_config = {"frozen": True}


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
    # Components
    "ComponentSchema",
    "apply_defaults",
    # System
    "TokenValue",
    "TokenRegistry",
    "SystemSettings",
    "DesignSystemConfig",
    # Usage
    "UsageLocation",
    "PropertyUsage",
]
