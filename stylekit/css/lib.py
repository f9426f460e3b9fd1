"""CSS generation from design system schemas.

Tokens become custom properties on `:root`; each mapping key becomes one
rule using per-prop attribute selectors, so the output grows with the number
of mapping keys rather than with the combination space.

Example:
    >>> css = compile_system(system)
    >>> print(compile_component(system.components["Button"], system).css)
    .acme-button[data-importance="primary"] {
      background-color: var(--acme-color-brand-primary);
    }
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from stylekit.config import get_css_prefix
from stylekit.constraints import generate_valid_combinations, is_satisfiable
from stylekit.core.log import get_logger
from stylekit.schema import (
    BooleanProperty,
    ComponentSchema,
    ConditionalMapping,
    DesignSystemConfig,
    StyleValue,
    TokenRegistry,
    VisualMapping,
    coerce_to_string,
    parse_mapping_key,
)

logger = get_logger(__name__)

LITERAL_VALUES = frozenset({"none", "transparent", "inherit", "initial", "unset", "auto"})
DEFAULT_VERSION = "0.1.0"

_WORD = re.compile(r"^[a-zA-Z][\w-]*$")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


@dataclass
class CompiledStyles:
    """CSS for one component.

    Attributes:
        css: Rule blocks separated by blank lines.
        classes: Class selectors (without the leading dot) that received rules.
        combinations: Valid enum combinations of the component.
    """

    css: str
    classes: list[str] = field(default_factory=list)
    combinations: list[dict[str, str]] = field(default_factory=list)


# =============================================================================
# Naming
# =============================================================================


def kebab_case(name: str) -> str:
    """`backgroundColor` -> `background-color`."""
    return _CAMEL_BOUNDARY.sub(r"\1-\2", name).lower()


def resolve_prefix(config: DesignSystemConfig) -> str:
    """Class and variable prefix: system setting > STYLEKIT_CSS_PREFIX > "ui"."""
    return get_css_prefix(config.settings.css_prefix)


def variable_name(prefix: str, category: str, name: str) -> str:
    return f"--{prefix}-{category}-{name}"


# =============================================================================
# CSS Variables
# =============================================================================


def flatten_tokens(group: dict[str, Any], stem: str = "") -> Iterator[tuple[str, Any]]:
    """Yield (name, value) pairs with nested palettes joined by `-`."""
    for name, value in group.items():
        full = f"{stem}-{name}" if stem else str(name)
        if isinstance(value, dict):
            yield from flatten_tokens(value, full)
        else:
            yield full, value


def _declarations(tokens: TokenRegistry, prefix: str) -> list[str]:
    return [
        f"  {variable_name(prefix, category, name)}: {coerce_to_string(value)};"
        for category, group in tokens.items()
        for name, value in flatten_tokens(group)
    ]


def generate_css_variables(tokens: TokenRegistry, prefix: str) -> str:
    """Render every token as a custom property on `:root`."""
    return "\n".join([":root {", *_declarations(tokens, prefix), "}"])


def generate_dark_mode_variables(dark_tokens: TokenRegistry, prefix: str) -> str:
    """Dark overrides, applied by system preference and by a `.dark` root class."""
    declarations = _declarations(dark_tokens, prefix)
    lines = [
        "@media (prefers-color-scheme: dark) {",
        "  :root {",
        *(f"  {d}" for d in declarations),
        "  }",
        "}",
        "",
        ":root.dark {",
        *declarations,
        "}",
    ]
    return "\n".join(lines)


# =============================================================================
# Value Resolution
# =============================================================================


def resolve_value(value: Any, tokens: TokenRegistry, prefix: str) -> str:
    """Turn a token reference into a `var()` call.

    A bare token name (`brand-primary`) or a category-prefixed one
    (`radius-md`) resolves to its custom property; CSS keywords and anything
    else pass through. Multi-word values resolve word by word.
    """
    text = coerce_to_string(value)
    if _WORD.match(text):
        if text in LITERAL_VALUES:
            return text
        for category, group in tokens.items():
            if any(name == text for name, _ in flatten_tokens(group)):
                return f"var({variable_name(prefix, category, text)})"
        for category, group in tokens.items():
            if text.startswith(f"{category}-"):
                key = text[len(category) + 1 :]
                if any(name == key for name, _ in flatten_tokens(group)):
                    return f"var({variable_name(prefix, category, key)})"
        return text

    words = text.split()
    if len(words) > 1:
        return " ".join(resolve_value(word, tokens, prefix) for word in words)
    return text


def resolve_style_value(
    value: StyleValue,
    tokens: TokenRegistry,
    prop_values: dict[str, str],
    prefix: str,
) -> str:
    """Resolve a style value; keyed values pick the entry for an active prop value."""
    if isinstance(value, dict):
        if not value:
            return ""
        active = set(prop_values.values())
        for key, candidate in value.items():
            if key in active:
                return resolve_value(candidate, tokens, prefix)
        return resolve_value(next(iter(value.values())), tokens, prefix)
    return resolve_value(value, tokens, prefix)


# =============================================================================
# Component Rules
# =============================================================================


def attribute_selector(pairs: list[tuple[str, str]]) -> str:
    """`[("fullWidth", "true")]` -> `[data-full-width="true"]`."""
    parts = []
    for name, value in pairs:
        attr = f"data-{kebab_case(name)}"
        parts.append(f'[{attr}="{value}"]' if value else f"[{attr}]")
    return "".join(parts)


def generate_css_rule(
    selector: str,
    styles: VisualMapping,
    tokens: TokenRegistry,
    prop_values: dict[str, str],
    prefix: str,
) -> str:
    """One rule block, or "" when no declaration has a value."""
    declarations = []
    for prop_name, value in styles.items():
        resolved = resolve_style_value(value, tokens, prop_values, prefix)
        if resolved:
            declarations.append(f"  {kebab_case(prop_name)}: {resolved};")
    if not declarations:
        return ""
    return "\n".join([f"{selector} {{", *declarations, "}"])


def is_reachable(schema: ComponentSchema, pairs: list[tuple[str, str]]) -> bool:
    """Whether some constraint-valid usage carries all of `pairs`.

    Rules failing this never match a valid call site and are not emitted.
    Boolean props are matched as booleans, the way call sites pass them.
    """
    props: dict[str, Any] = {}
    for name, value in pairs:
        if isinstance(schema.properties.get(name), BooleanProperty) and value in ("true", "false"):
            props[name] = value == "true"
        else:
            props[name] = value
    return is_satisfiable(schema, props)


def compile_component(schema: ComponentSchema, config: DesignSystemConfig) -> CompiledStyles:
    """Compile one component's base styles and mappings.

    Args:
        schema: Component to compile.
        config: Owning design system (tokens and prefix).

    Returns:
        CompiledStyles with the rule text, the classes that received rules
        and the component's valid enum combinations.
    """
    prefix = resolve_prefix(config)
    tokens = config.tokens
    base_class = f"{prefix}-{kebab_case(schema.name)}"
    rules: list[str] = []
    classes: list[str] = []

    if schema.base_styles:
        rule = generate_css_rule(f".{base_class}", schema.base_styles, tokens, {}, prefix)
        if rule:
            rules.append(rule)
            classes.append(base_class)

    for key, mapping in schema.mappings.items():
        pairs = parse_mapping_key(key)
        key_class = base_class + attribute_selector(pairs)

        if isinstance(mapping, list):
            emitted = False
            for conditional in mapping:
                if not isinstance(conditional, ConditionalMapping) or not conditional.condition:
                    continue
                all_pairs = pairs + list(conditional.condition.items())
                selector = f".{key_class}{attribute_selector(list(conditional.condition.items()))}"
                if not is_reachable(schema, all_pairs):
                    logger.debug(f"{schema.name}: skipping unreachable rule {selector}")
                    continue
                rule = generate_css_rule(
                    selector, conditional.styles, tokens, dict(all_pairs), prefix
                )
                if rule:
                    rules.append(rule)
                    emitted = True
            if emitted:
                classes.append(key_class)
            continue

        if not is_reachable(schema, pairs):
            logger.debug(f"{schema.name}: skipping unreachable rule .{key_class}")
            continue
        rule = generate_css_rule(f".{key_class}", mapping, tokens, dict(pairs), prefix)
        if rule:
            rules.append(rule)
            classes.append(key_class)

    return CompiledStyles(
        css="\n\n".join(rules),
        classes=classes,
        combinations=generate_valid_combinations(schema),
    )


# =============================================================================
# Full System Compilation
# =============================================================================


def minify_css(css: str) -> str:
    """Strip comments and insignificant whitespace."""
    css = re.sub(r"/\*[\s\S]*?\*/", "", css)
    css = re.sub(r"\s+", " ", css)
    css = re.sub(r"\s*([{}:;,])\s*", r"\1", css)
    css = css.replace(";}", "}")
    return css.strip()


def compile_system(config: DesignSystemConfig, minify: bool = False) -> str:
    """Compile a whole design system into one stylesheet.

    Args:
        config: Design system to compile.
        minify: Strip comments and whitespace from the result.

    Returns:
        Stylesheet text: header, token variables (unless disabled in the
        settings), dark overrides, then one block per component.
    """
    prefix = resolve_prefix(config)
    lines = [f"/* Design System: {config.name} v{config.version or DEFAULT_VERSION} */", ""]

    if config.settings.generate_css_variables:
        lines.extend([generate_css_variables(config.tokens, prefix), ""])
        if config.dark_tokens:
            lines.extend([generate_dark_mode_variables(config.dark_tokens, prefix), ""])

    for name, schema in config.components.items():
        compiled = compile_component(schema, config)
        lines.extend([f"/* Component: {name} */", compiled.css, ""])

    css = "\n".join(lines)
    logger.info(f"Compiled {len(config.components)} components for {config.name}")
    return minify_css(css) if minify else css


__all__ = [
    "LITERAL_VALUES",
    "CompiledStyles",
    "kebab_case",
    "resolve_prefix",
    "variable_name",
    "flatten_tokens",
    "generate_css_variables",
    "generate_dark_mode_variables",
    "resolve_value",
    "resolve_style_value",
    "attribute_selector",
    "generate_css_rule",
    "is_reachable",
    "compile_component",
    "minify_css",
    "compile_system",
]
