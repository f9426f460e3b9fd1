"""Unit tests for TypeScript declaration generation."""

import pytest

from stylekit.schema import BooleanProperty, EnumProperty, NumberProperty, StringProperty
from stylekit.typegen import (
    generate_component_types,
    generate_jsdoc,
    generate_system_types,
    generate_token_types,
    token_type_name,
    type_string,
)


@pytest.mark.unit
class TestTypeString:
    """Tests for property type rendering."""

    def test_enum(self):
        assert type_string(EnumProperty(values=["sm", "lg"])) == "'sm' | 'lg'"

    def test_enum_quotes_are_escaped(self):
        assert type_string(EnumProperty(values=["it's"])) == "'it\\'s'"

    def test_empty_enum(self):
        assert type_string(EnumProperty(values=[])) == "never"

    def test_scalars(self):
        assert type_string(BooleanProperty()) == "boolean"
        assert type_string(StringProperty()) == "string"
        assert type_string(NumberProperty()) == "number"


@pytest.mark.unit
class TestComponentTypes:
    """Tests for per-component declarations."""

    def test_jsdoc(self, button_schema):
        assert generate_jsdoc(button_schema).splitlines() == [
            "/**",
            " * Clickable action trigger",
            " *",
            " * @property {'primary' | 'secondary' | 'ghost'} importance",
            " * @property {'sm' | 'md' | 'lg'} size (default: \"md\")",
            " * @property {'default' | 'disabled'} state",
            " * @property {boolean} fullWidth (default: false)",
            " * @property {string} label",
            " *",
            " * Constraints:",
            ' * - When importance="ghost": cannot use state',
            ' * - When importance="primary": requires size in [md, lg]',
            " */",
        ]

    def test_props_interface(self, button_schema):
        output = generate_component_types(button_schema)
        assert "export interface ButtonProps {" in output
        assert "  importance: 'primary' | 'secondary' | 'ghost';" in output
        assert "  size?: 'sm' | 'md' | 'lg';" in output
        assert "  fullWidth?: boolean;" in output
        assert "  [key: string]: unknown;" in output

    def test_combination_union(self, button_schema):
        lines = generate_component_types(button_schema, max_union=20).splitlines()
        start = lines.index("export type ButtonValidCombinations =")
        members = lines[start + 1 : start + 11]
        assert members[0] == "  | { importance: 'primary'; size: 'md'; state: 'default' }"
        assert members[-1] == "  | { importance: 'secondary'; size: 'lg'; state: 'disabled' };"
        assert not any("ghost" in member for member in members)

    def test_union_omitted_above_limit(self, button_schema):
        output = generate_component_types(button_schema, max_union=5)
        assert "ValidCombinations" not in output

    def test_union_limit_from_environment(self, button_schema, monkeypatch):
        monkeypatch.setenv("STYLEKIT_MAX_UNION_SIZE", "9")
        assert "ValidCombinations" not in generate_component_types(button_schema)
        monkeypatch.setenv("STYLEKIT_MAX_UNION_SIZE", "10")
        assert "ButtonValidCombinations" in generate_component_types(button_schema)


@pytest.mark.unit
class TestTokenTypes:
    """Tests for token unions."""

    def test_token_type_name(self):
        assert token_type_name("color") == "ColorToken"

    def test_unions_and_registry(self, design_system):
        lines = generate_token_types(design_system.tokens).splitlines()
        start = lines.index("export type ColorToken =")
        assert lines[start + 1 : start + 6] == [
            "  | 'brand-primary'",
            "  | 'text-inverse'",
            "  | 'surface'",
            "  | 'gray-100'",
            "  | 'gray-900';",
        ]
        assert "  space: SpaceToken;" in lines

    def test_empty_category_skipped(self):
        output = generate_token_types({"color": {}, "space": {"sm": "4px"}})
        assert "ColorToken" not in output
        assert "export type SpaceToken =" in output


@pytest.mark.unit
class TestSystemTypes:
    """Tests for the full declaration module."""

    def test_header_and_registry(self, design_system):
        output = generate_system_types(design_system)
        assert output.startswith("// Generated by stylekit v1.2.0\n// Design System: Acme")
        assert "export type StyleKitComponent =\n  | 'Button'\n  | 'Card';" in output
        assert "  Button: ButtonProps;" in output
        assert "  Card: CardProps;" in output

    def test_sections_in_order(self, design_system):
        output = generate_system_types(design_system)
        assert (
            output.index("// TOKENS")
            < output.index("export interface ButtonProps")
            < output.index("export interface CardProps")
            < output.index("// COMPONENT REGISTRY")
        )
