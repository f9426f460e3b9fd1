"""Machine-readable manifest of a design system.

The manifest summarizes what a code assistant needs to write valid call
sites: every component's properties and constraints, a few valid and invalid
examples, and a flat table of semantic descriptions keyed by
`token:`/`component:`/`prop:`/`value:` paths.
"""

from collections.abc import Collection
from typing import Any

from pydantic import BaseModel, Field

from stylekit.constraints import (
    count_combinations,
    describe_constraint,
    generate_valid_combinations,
)
from stylekit.core.log import get_logger
from stylekit.css import flatten_tokens
from stylekit.schema import (
    ComponentSchema,
    Constraint,
    DesignSystemConfig,
    Equals,
    OneOf,
    Operator,
    PropertyKind,
    TokenRegistry,
    coerce_to_string,
)

logger = get_logger(__name__)

DEFAULT_VERSION = "0.1.0"
VALID_EXAMPLE_LIMIT = 3
INVALID_EXAMPLE_LIMIT = 2

# =============================================================================
# Models
# =============================================================================


class PropertyManifest(BaseModel):
    """One component property as seen by a consumer."""

    name: str
    type: PropertyKind
    values: list[str] | None = Field(default=None, description="Allowed enum values")
    required: bool = False
    default: Any = None
    description: str | None = None

    model_config = {"frozen": True}


class ExampleSet(BaseModel):
    """JSX snippets showing correct and incorrect usage."""

    valid: list[str] = Field(default_factory=list)
    invalid: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class ComponentManifest(BaseModel):
    """Summary of one component schema."""

    name: str
    description: str
    properties: list[PropertyManifest] = Field(default_factory=list)
    constraints: list[str] = Field(
        default_factory=list,
        description="Constraint sentences",
    )
    combination_count: int = Field(
        default=0,
        alias="combinationCount",
        description="Number of valid enum combinations",
    )
    total_combinations: int = Field(
        default=0,
        alias="totalCombinations",
        description="Size of the unconstrained enum space",
    )
    examples: ExampleSet = Field(default_factory=ExampleSet)

    model_config = {"frozen": True, "populate_by_name": True}


class SystemManifest(BaseModel):
    """Manifest for a whole design system.

    `model_dump(by_alias=True)` gives the camelCase wire form.
    """

    version: str = DEFAULT_VERSION
    design_system: str = Field(..., alias="designSystem")
    tokens: TokenRegistry = Field(default_factory=dict)
    components: list[ComponentManifest] = Field(default_factory=list)
    semantic_descriptions: dict[str, str] = Field(
        default_factory=dict,
        alias="semanticDescriptions",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def get_component(self, name: str) -> ComponentManifest | None:
        for component in self.components:
            if component.name == name:
                return component
        return None


# =============================================================================
# Examples
# =============================================================================


def _jsx(name: str, props: list[tuple[str, str]], content: str) -> str:
    attrs = "".join(f' {key}="{value}"' for key, value in props)
    return f"<{name}{attrs}>{content}</{name}>"


def _trigger_value(expected: Any) -> str | None:
    """A concrete value satisfying a condition, when one is obvious."""
    match expected:
        case OneOf(values=values):
            return values[0] if values else None
        case Operator(op="eq" | "in", value=value):
            if isinstance(value, (list, tuple)):
                return coerce_to_string(value[0]) if value else None
            return coerce_to_string(value)
        case Equals(value=value):
            return coerce_to_string(value)
    return None


def _sample_value(
    schema: ComponentSchema, name: str, excluded: Collection[str] = ()
) -> str | None:
    definition = schema.properties.get(name)
    match definition.type if definition else None:
        case "enum":
            return next((v for v in definition.values if v not in excluded), None)
        case "boolean":
            return next((v for v in ("true", "false") if v not in excluded), None)
        case None:
            return None
        case _:
            return "value"


def _invalid_example(schema: ComponentSchema, constraint: Constraint) -> str | None:
    trigger: list[tuple[str, str]] = []
    for key, expected in constraint.when.items():
        value = _trigger_value(expected)
        if value is None:
            return None
        trigger.append((key, value))

    offending: tuple[str, str] | None = None
    if constraint.forbid:
        name = constraint.forbid[0]
        value = _sample_value(schema, name)
        if value is not None:
            offending = (name, value)
    if offending is None:
        for name, allowed in (constraint.require or {}).items():
            value = _sample_value(schema, name, excluded=allowed)
            if value is not None:
                offending = (name, value)
                break
    if offending is None:
        return None

    snippet = _jsx(schema.name, [*trigger, offending], "Invalid")
    return f"{snippet}  <!-- Error: {describe_constraint(constraint)} -->"


def generate_examples(schema: ComponentSchema, combinations: list[dict[str, str]]) -> ExampleSet:
    """Valid snippets from the first combinations, invalid ones from constraints."""
    valid = [
        _jsx(schema.name, list(combo.items()), "Content")
        for combo in combinations[:VALID_EXAMPLE_LIMIT]
    ]
    invalid = []
    for constraint in schema.constraints[:INVALID_EXAMPLE_LIMIT]:
        example = _invalid_example(schema, constraint)
        if example:
            invalid.append(example)
    invalid.append(
        f'{_jsx(schema.name, [("className", "flex items-center")], "Bad")}'
        "  <!-- Error: Use component props, not utility classes -->"
    )
    return ExampleSet(valid=valid, invalid=invalid)


# =============================================================================
# Manifest Generation
# =============================================================================


def component_description(schema: ComponentSchema) -> str:
    return schema.description or f"{schema.name} component"


def generate_component_manifest(schema: ComponentSchema) -> ComponentManifest:
    combinations = generate_valid_combinations(schema)
    return ComponentManifest(
        name=schema.name,
        description=component_description(schema),
        properties=[
            PropertyManifest(
                name=name,
                type=definition.type,
                values=list(definition.values) if definition.type == "enum" else None,
                required=definition.required,
                default=definition.default,
                description=definition.description,
            )
            for name, definition in schema.properties.items()
        ],
        constraints=[describe_constraint(c) for c in schema.constraints],
        combination_count=len(combinations),
        total_combinations=count_combinations(schema),
        examples=generate_examples(schema, combinations),
    )


def generate_semantic_descriptions(config: DesignSystemConfig) -> dict[str, str]:
    """Flat description table for tokens, components, props and enum values."""
    descriptions: dict[str, str] = {}
    for category, group in config.tokens.items():
        for name, value in flatten_tokens(group):
            descriptions[f"token:{category}:{name}"] = (
                f"{category} token with value {coerce_to_string(value)}"
            )

    for name, schema in config.components.items():
        descriptions[f"component:{name}"] = component_description(schema)
        for prop_name, definition in schema.properties.items():
            descriptions[f"prop:{name}:{prop_name}"] = (
                definition.description or f"{prop_name} property"
            )
            if definition.type == "enum":
                for value in definition.values:
                    descriptions[f"value:{name}:{prop_name}:{value}"] = f"{value} option"
    return descriptions


def generate_manifest(config: DesignSystemConfig) -> SystemManifest:
    """Build the manifest for a design system.

    Args:
        config: Design system to describe.

    Returns:
        SystemManifest; components appear in declaration order.
    """
    manifest = SystemManifest(
        version=config.version or DEFAULT_VERSION,
        design_system=config.name,
        tokens=config.tokens,
        components=[generate_component_manifest(s) for s in config.components.values()],
        semantic_descriptions=generate_semantic_descriptions(config),
    )
    logger.debug(
        f"Manifest for {config.name}: {len(manifest.components)} components, "
        f"{len(manifest.semantic_descriptions)} descriptions"
    )
    return manifest


# =============================================================================
# Usage Guide
# =============================================================================


def _component_guide(component: ComponentManifest) -> list[str]:
    lines = [f"## Component: {component.name}", "", component.description, ""]
    lines.extend(["### Properties", ""])
    for prop in component.properties:
        required = " (required)" if prop.required else ""
        default = ""
        if prop.default is not None:
            default = f" [default: {coerce_to_string(prop.default)}]"
        values = f" = {' | '.join(prop.values)}" if prop.values else ""
        lines.append(f"- **{prop.name}**{required}{default}{values}")
        if prop.description:
            lines.append(f"  - {prop.description}")
    lines.append("")

    if component.constraints:
        lines.extend(["### Constraints", ""])
        lines.extend(f"- {constraint}" for constraint in component.constraints)
        lines.append("")

    lines.extend(["### Examples", "", "**Valid:**"])
    for example in component.examples.valid:
        lines.extend(["```tsx", example, "```"])
    lines.append("")
    if component.examples.invalid:
        lines.append("**Invalid:**")
        for example in component.examples.invalid:
            lines.extend(["```tsx", example, "```"])
        lines.append("")
    return lines


def generate_usage_guide(manifest: SystemManifest, component: str | None = None) -> str:
    """Markdown rules for writing call sites against a design system.

    Args:
        manifest: Manifest to render.
        component: Focus on one component; unknown names fall back to the
            system overview.

    Returns:
        Markdown text.
    """
    lines = [
        f"# {manifest.design_system} Design System Rules",
        "",
        "1. Use only the enum values and tokens listed in the schema.",
        "2. Check constraints before combining props.",
        "3. Prefer semantic props over visual descriptions.",
        "",
    ]

    focused = manifest.get_component(component) if component else None
    if focused:
        lines.extend(_component_guide(focused))
    else:
        lines.extend(["## Available Components", ""])
        lines.extend(f"- **{c.name}**: {c.description}" for c in manifest.components)
        lines.extend(["", "## Design Tokens", ""])
        for category, group in manifest.tokens.items():
            names = [name for name, _ in flatten_tokens(group)]
            if not names:
                continue
            lines.append(f"### {category}")
            lines.extend(f"- {name}" for name in names)
            lines.append("")

    return "\n".join(lines)


__all__ = [
    "PropertyManifest",
    "ExampleSet",
    "ComponentManifest",
    "SystemManifest",
    "generate_examples",
    "component_description",
    "generate_component_manifest",
    "generate_semantic_descriptions",
    "generate_manifest",
    "generate_usage_guide",
]
