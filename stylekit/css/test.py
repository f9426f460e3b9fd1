"""Unit tests for the CSS emitter."""

import pytest

from stylekit.css import (
    attribute_selector,
    compile_component,
    compile_system,
    flatten_tokens,
    generate_css_variables,
    generate_dark_mode_variables,
    is_reachable,
    kebab_case,
    minify_css,
    resolve_prefix,
    resolve_style_value,
    resolve_value,
)
from stylekit.schema import define_component, define_system, prop, when

TOKENS = {
    "color": {"brand-primary": "#2563eb", "gray": {"100": "#f3f4f6"}},
    "space": {"sm": "8px", "md": "16px"},
    "radius": {"md": "6px"},
}


@pytest.mark.unit
class TestNaming:
    """Tests for selector and property naming."""

    def test_kebab_case(self):
        assert kebab_case("backgroundColor") == "background-color"
        assert kebab_case("fullWidth") == "full-width"
        assert kebab_case("color") == "color"
        assert kebab_case("DataGrid") == "data-grid"

    def test_attribute_selector(self):
        assert attribute_selector([("importance", "primary")]) == '[data-importance="primary"]'
        assert (
            attribute_selector([("fullWidth", "true"), ("size", "lg")])
            == '[data-full-width="true"][data-size="lg"]'
        )

    def test_attribute_selector_without_value(self):
        assert attribute_selector([("loading", "")]) == "[data-loading]"

    def test_prefix_from_settings(self, design_system):
        assert resolve_prefix(design_system) == "acme"

    def test_prefix_from_environment(self, monkeypatch):
        monkeypatch.setenv("STYLEKIT_CSS_PREFIX", "ds")
        assert resolve_prefix(define_system(name="Plain")) == "ds"

    def test_prefix_default(self, monkeypatch):
        monkeypatch.delenv("STYLEKIT_CSS_PREFIX", raising=False)
        assert resolve_prefix(define_system(name="Plain")) == "ui"


@pytest.mark.unit
class TestVariables:
    """Tests for token custom properties."""

    def test_flatten_nested_palette(self):
        assert list(flatten_tokens(TOKENS["color"])) == [
            ("brand-primary", "#2563eb"),
            ("gray-100", "#f3f4f6"),
        ]

    def test_root_block(self):
        css = generate_css_variables(TOKENS, "ui")
        assert css.splitlines() == [
            ":root {",
            "  --ui-color-brand-primary: #2563eb;",
            "  --ui-color-gray-100: #f3f4f6;",
            "  --ui-space-sm: 8px;",
            "  --ui-space-md: 16px;",
            "  --ui-radius-md: 6px;",
            "}",
        ]

    def test_numeric_token_values(self):
        css = generate_css_variables({"z": {"modal": 100, "ratio": 1.0}}, "ui")
        assert "  --ui-z-modal: 100;" in css
        assert "  --ui-z-ratio: 1;" in css

    def test_dark_mode_blocks(self):
        css = generate_dark_mode_variables({"color": {"surface": "#000"}}, "ui")
        assert css.splitlines() == [
            "@media (prefers-color-scheme: dark) {",
            "  :root {",
            "    --ui-color-surface: #000;",
            "  }",
            "}",
            "",
            ":root.dark {",
            "  --ui-color-surface: #000;",
            "}",
        ]


@pytest.mark.unit
class TestResolveValue:
    """Tests for token reference resolution."""

    @pytest.mark.parametrize("value", ["none", "transparent", "inherit", "auto"])
    def test_keywords_pass_through(self, value):
        assert resolve_value(value, TOKENS, "ui") == value

    def test_bare_token_name(self):
        assert resolve_value("brand-primary", TOKENS, "ui") == "var(--ui-color-brand-primary)"

    def test_flattened_palette_name(self):
        assert resolve_value("gray-100", TOKENS, "ui") == "var(--ui-color-gray-100)"

    def test_first_category_wins(self):
        assert resolve_value("md", TOKENS, "ui") == "var(--ui-space-md)"

    def test_category_prefixed_name(self):
        assert resolve_value("radius-md", TOKENS, "ui") == "var(--ui-radius-md)"
        assert resolve_value("color-gray-100", TOKENS, "ui") == "var(--ui-color-gray-100)"

    def test_unknown_word_passes_through(self):
        assert resolve_value("bold", TOKENS, "ui") == "bold"

    def test_literal_values_pass_through(self):
        assert resolve_value("#fff", TOKENS, "ui") == "#fff"
        assert resolve_value("12px", TOKENS, "ui") == "12px"
        assert resolve_value(600, TOKENS, "ui") == "600"

    def test_multi_word_value(self):
        assert resolve_value("sm md", TOKENS, "ui") == "var(--ui-space-sm) var(--ui-space-md)"
        assert resolve_value("1px solid brand-primary", TOKENS, "ui") == (
            "1px solid var(--ui-color-brand-primary)"
        )

    def test_keyed_value_picks_active_prop_value(self):
        value = {"sm": "space-sm", "lg": "space-md"}
        assert resolve_style_value(value, TOKENS, {"size": "lg"}, "ui") == "var(--ui-space-md)"

    def test_keyed_value_falls_back_to_first_entry(self):
        value = {"sm": "space-sm", "lg": "space-md"}
        assert resolve_style_value(value, TOKENS, {}, "ui") == "var(--ui-space-sm)"

    def test_empty_keyed_value(self):
        assert resolve_style_value({}, TOKENS, {}, "ui") == ""


@pytest.mark.unit
class TestCompileComponent:
    """Tests for per-component rule generation."""

    def test_base_rule(self, button_schema, design_system):
        css = compile_component(button_schema, design_system).css
        assert css.startswith(
            ".acme-button {\n"
            "  border-radius: var(--acme-radius-md);\n"
            "  padding: var(--acme-space-sm) var(--acme-space-md);\n"
            "}"
        )

    def test_mapping_rule(self, button_schema, design_system):
        css = compile_component(button_schema, design_system).css
        assert (
            '.acme-button[data-importance="primary"] {\n'
            "  background-color: var(--acme-color-brand-primary);\n"
            "  color: var(--acme-color-text-inverse);\n"
            "}"
        ) in css
        assert (
            '.acme-button[data-importance="ghost"] {\n'
            "  background-color: transparent;\n"
            "}"
        ) in css

    def test_conditional_mapping_compound_selector(self, button_schema, design_system):
        css = compile_component(button_schema, design_system).css
        assert (
            '.acme-button[data-size="lg"][data-importance="primary"] {\n'
            "  font-weight: 600;\n"
            "}"
        ) in css

    def test_unreachable_rule_is_pruned(self, button_schema, design_system):
        compiled = compile_component(button_schema, design_system)
        assert "opacity" not in compiled.css
        assert 'acme-button[data-importance="ghost"][data-state="disabled"]' not in compiled.classes

    def test_ghost_alone_is_kept(self, button_schema):
        assert is_reachable(button_schema, [("importance", "ghost")])
        assert not is_reachable(button_schema, [("importance", "ghost"), ("state", "default")])
        assert not is_reachable(button_schema, [("importance", "primary"), ("size", "sm")])

    def test_negated_trigger_keeps_reachable_rule(self, design_system):
        schema = define_component(
            name="Badge",
            properties={
                "importance": prop.enum(["primary", "ghost"]),
                "tone": prop.enum(["a", "b"]),
            },
            constraints=[when({"importance": {"op": "neq", "value": "ghost"}}).forbid(["tone"])],
            mappings={"tone=a": {"color": "red"}},
        )
        compiled = compile_component(schema, design_system)
        assert '.acme-badge[data-tone="a"] {\n  color: red;\n}' in compiled.css
        assert compiled.classes == ['acme-badge[data-tone="a"]']

    def test_trigger_on_other_prop(self, design_system):
        schema = define_component(
            name="Chip",
            properties={
                "tone": prop.enum(["a", "b"]),
                "size": prop.enum(["sm", "lg"]),
            },
            constraints=[when({"size": {"op": "nin", "value": ["lg"]}}).require({"tone": ["b"]})],
            mappings={
                "tone=a": {"color": "red"},
                "size=sm,tone=a": {"color": "blue"},
            },
        )
        compiled = compile_component(schema, design_system)
        assert compiled.classes == ['acme-chip[data-tone="a"]']
        assert "blue" not in compiled.css

    def test_classes(self, button_schema, design_system):
        compiled = compile_component(button_schema, design_system)
        assert compiled.classes == [
            "acme-button",
            'acme-button[data-importance="primary"]',
            'acme-button[data-importance="ghost"]',
            'acme-button[data-size="sm"]',
            'acme-button[data-size="lg"]',
        ]

    def test_combinations(self, button_schema, design_system):
        compiled = compile_component(button_schema, design_system)
        assert len(compiled.combinations) == 10
        assert compiled.combinations[0] == {
            "importance": "primary",
            "size": "md",
            "state": "default",
        }

    def test_component_without_styles(self, design_system):
        schema = design_system.components["Card"].model_copy(update={"mappings": {}})
        compiled = compile_component(schema, design_system)
        assert compiled.css == ""
        assert compiled.classes == []


@pytest.mark.unit
class TestCompileSystem:
    """Tests for whole-system stylesheets."""

    def test_sections_in_order(self, design_system):
        css = compile_system(design_system)
        header = css.index("/* Design System: Acme v1.2.0 */")
        root = css.index(":root {")
        dark = css.index("@media (prefers-color-scheme: dark)")
        button = css.index("/* Component: Button */")
        card = css.index("/* Component: Card */")
        assert header < root < dark < button < card
        assert "box-shadow: var(--acme-elevation-low);" in css

    def test_default_version(self):
        css = compile_system(define_system(name="Bare"))
        assert css.startswith("/* Design System: Bare v0.1.0 */")

    def test_variables_disabled(self, design_system):
        config = design_system.model_copy(
            update={
                "settings": design_system.settings.model_copy(
                    update={"generate_css_variables": False}
                )
            }
        )
        css = compile_system(config)
        assert ":root" not in css
        assert "/* Component: Button */" in css

    def test_minified(self, design_system):
        css = compile_system(design_system, minify=True)
        assert "\n" not in css
        assert "/*" not in css
        assert '.acme-button[data-importance="ghost"]{background-color:transparent}' in css


@pytest.mark.unit
class TestMinify:
    """Tests for the minifier."""

    def test_minify(self):
        css = "/* note */\n.a {\n  color: red;\n  margin: 0 auto;\n}\n"
        assert minify_css(css) == ".a{color:red;margin:0 auto}"
