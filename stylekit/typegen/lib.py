"""TypeScript declaration generation.

Produces a `.d.ts`-style module: one token union per category, one props
interface per component and, for small enum spaces, a union of every valid
prop combination.
"""

import json

from stylekit.config import get_max_union_size
from stylekit.constraints import format_condition, generate_valid_combinations
from stylekit.core.log import get_logger
from stylekit.css import flatten_tokens
from stylekit.schema import (
    ComponentSchema,
    Constraint,
    DesignSystemConfig,
    PropertyDefinition,
    TokenRegistry,
)

logger = get_logger(__name__)

SECTION_RULE = "// " + "=" * 76
DEFAULT_VERSION = "0.1.0"


def _literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _section(title: str) -> list[str]:
    return [SECTION_RULE, f"// {title}", SECTION_RULE, ""]


def _union(type_name: str, members: list[str]) -> list[str]:
    if not members:
        return [f"export type {type_name} = never;"]
    lines = [f"export type {type_name} ="]
    lines.extend(f"  | {member}" for member in members)
    lines[-1] += ";"
    return lines


def type_string(definition: PropertyDefinition) -> str:
    """TypeScript type for a property definition."""
    match definition.type:
        case "enum":
            return " | ".join(_literal(v) for v in definition.values) or "never"
        case "boolean":
            return "boolean"
        case "string":
            return "string"
        case "number":
            return "number"
        case _:
            return "unknown"


def _constraint_doc(constraint: Constraint) -> list[str]:
    trigger = format_condition(constraint.when)
    lines = []
    if constraint.forbid:
        lines.append(f" * - When {trigger}: cannot use {', '.join(constraint.forbid)}")
    if constraint.require:
        requirements = ", ".join(
            f"{name} in [{', '.join(values)}]" for name, values in constraint.require.items()
        )
        lines.append(f" * - When {trigger}: requires {requirements}")
    return lines


def generate_jsdoc(schema: ComponentSchema) -> str:
    lines = ["/**"]
    if schema.description:
        lines.extend([f" * {schema.description}", " *"])
    for name, definition in schema.properties.items():
        default = ""
        if definition.default is not None:
            default = f" (default: {json.dumps(definition.default)})"
        lines.append(f" * @property {{{type_string(definition)}}} {name}{default}")
    if schema.constraints:
        lines.extend([" *", " * Constraints:"])
        for constraint in schema.constraints:
            lines.extend(_constraint_doc(constraint))
    lines.append(" */")
    return "\n".join(lines)


def generate_component_types(schema: ComponentSchema, max_union: int | None = None) -> str:
    """Generate the props interface for one component.

    Args:
        schema: Component to describe.
        max_union: Largest combination count emitted as a union type.
            Defaults to STYLEKIT_MAX_UNION_SIZE.

    Returns:
        JSDoc block, `<Name>Props` interface and, when the component has
        between 1 and `max_union` valid combinations, a
        `<Name>ValidCombinations` union.
    """
    limit = get_max_union_size(max_union)
    lines = [generate_jsdoc(schema), f"export interface {schema.name}Props {{"]
    for name, definition in schema.properties.items():
        optional = "" if definition.required else "?"
        lines.append(f"  {name}{optional}: {type_string(definition)};")
    lines.extend(["  [key: string]: unknown;", "}", ""])

    combinations = generate_valid_combinations(schema)
    if 0 < len(combinations) <= limit:
        members = []
        for combo in combinations:
            fields = "; ".join(f"{k}: {_literal(v)}" for k, v in combo.items())
            members.append(f"{{ {fields} }}" if fields else "{}")
        lines.append(f"/** Valid prop combinations for {schema.name} */")
        lines.extend(_union(f"{schema.name}ValidCombinations", members))
        lines.append("")
    elif combinations:
        logger.debug(
            f"{schema.name}: {len(combinations)} combinations exceed union limit {limit}"
        )

    return "\n".join(lines)


def token_type_name(category: str) -> str:
    return f"{category[:1].upper()}{category[1:]}Token"


def generate_token_types(tokens: TokenRegistry) -> str:
    """One string-literal union per token category plus a registry interface."""
    lines = ["/** Design Tokens */", ""]
    categories = []
    for category, group in tokens.items():
        names = [name for name, _ in flatten_tokens(group)]
        if not names:
            continue
        categories.append(category)
        lines.append(f"/** Valid {category} tokens */")
        lines.extend(_union(token_type_name(category), [_literal(n) for n in names]))
        lines.append("")

    lines.append("/** Complete token registry */")
    lines.append("export interface TokenRegistry {")
    lines.extend(f"  {category}: {token_type_name(category)};" for category in categories)
    lines.extend(["}", ""])
    return "\n".join(lines)


def generate_system_types(config: DesignSystemConfig, max_union: int | None = None) -> str:
    """Generate the full declaration module for a design system."""
    lines = [
        f"// Generated by stylekit v{config.version or DEFAULT_VERSION}",
        f"// Design System: {config.name}",
        "",
        "/* eslint-disable */",
        "",
        *_section("TOKENS"),
        generate_token_types(config.tokens),
        *_section("COMPONENTS"),
    ]
    for schema in config.components.values():
        lines.append(generate_component_types(schema, max_union))

    names = list(config.components)
    lines.extend(_section("COMPONENT REGISTRY"))
    lines.append("/** All available components */")
    lines.extend(_union("StyleKitComponent", [_literal(n) for n in names]))
    lines.extend(["", "/** Props for each component */", "export interface StyleKitProps {"])
    lines.extend(f"  {name}: {name}Props;" for name in names)
    lines.extend(["}", ""])

    logger.info(f"Generated types for {len(names)} components of {config.name}")
    return "\n".join(lines)


__all__ = [
    "type_string",
    "generate_jsdoc",
    "generate_component_types",
    "token_type_name",
    "generate_token_types",
    "generate_system_types",
]
