"""Unit tests for MCP tool functions (no MCP protocol)."""

import pytest

from . import (
    get_component_schema,
    get_design_tokens,
    get_manifest,
    get_usage_guide,
    get_valid_prop_combinations,
    suggest_alternatives,
    validate_component_usage,
)


@pytest.mark.unit
class TestComponentTools:
    """Tests for schema and combination tools."""

    def test_component_schema(self, design_system):
        data = get_component_schema(design_system, "Button")

        assert data["name"] == "Button"
        assert data["properties"]["importance"]["type"] == "enum"
        assert data["constraints"][0]["when"] == {"importance": "ghost"}
        assert data["constraints"][0]["forbid"] == ["state"]
        assert "baseStyles" in data
        assert data["constraintDescriptions"][1] == (
            'When importance="primary": size must be one of [md, lg]'
        )

    def test_unknown_component(self, design_system):
        with pytest.raises(ValueError, match="Available components: Button, Card"):
            get_component_schema(design_system, "Modal")

    def test_combinations(self, design_system):
        data = get_valid_prop_combinations(design_system, "Button")

        assert data["count"] == 10
        assert data["total"] == 18
        assert len(data["combinations"]) == 10

    def test_combinations_limit_keeps_exact_count(self, design_system):
        data = get_valid_prop_combinations(design_system, "Button", limit=2)

        assert data["count"] == 10
        assert len(data["combinations"]) == 2

    def test_suggestions(self, design_system):
        data = suggest_alternatives(
            design_system, "Button", {"importance": "ghost", "state": "disabled"}, limit=1
        )

        assert data["suggestions"] == [
            {"importance": "primary", "size": "md", "state": "disabled"}
        ]


@pytest.mark.unit
class TestValidateTool:
    """Tests for call-site validation."""

    def test_valid_usage_uses_defaults(self, design_system):
        data = validate_component_usage(design_system, "Button", {"importance": "primary"})

        assert data["valid"] is True
        assert data["issues"] == []
        assert "suggestions" not in data

    def test_constraint_violation_has_suggestions(self, design_system):
        data = validate_component_usage(
            design_system, "Button", {"importance": "ghost", "state": "disabled"}
        )

        assert data["valid"] is False
        assert [i["code"] for i in data["issues"]] == ["CONSTRAINT_FORBIDDEN_PROP"]
        assert len(data["suggestions"]) == 3

    def test_unknown_property(self, design_system):
        data = validate_component_usage(
            design_system, "Button", {"importance": "secondary", "tone": "loud"}
        )

        assert data["valid"] is False
        assert [i["code"] for i in data["issues"]] == ["UNKNOWN_PROPERTY"]
        assert data["suggestions"][0]["importance"] == "secondary"

    def test_unknown_component(self, design_system):
        with pytest.raises(ValueError, match="not found"):
            validate_component_usage(design_system, "Modal", {})


@pytest.mark.unit
class TestTokenTool:
    """Tests for token lookup."""

    def test_all_tokens(self, design_system):
        data = get_design_tokens(design_system)

        assert data["categories"] == ["color", "space", "radius", "elevation"]
        assert data["darkTokens"] == {"color": {"surface": "#0f172a"}}

    def test_one_category(self, design_system):
        data = get_design_tokens(design_system, "space")

        assert data == {
            "category": "space",
            "tokens": {"sm": "8px", "md": "16px"},
            "darkTokens": {},
        }

    def test_unknown_category(self, design_system):
        with pytest.raises(ValueError, match="Token category \"shadow\" not found"):
            get_design_tokens(design_system, "shadow")


@pytest.mark.unit
class TestManifestTools:
    """Tests for manifest and guide tools."""

    def test_manifest_wire_form(self, design_system):
        data = get_manifest(design_system)

        assert data["designSystem"] == "Acme"
        assert data["components"][0]["properties"][0]["type"] == "enum"

    def test_usage_guide(self, design_system):
        assert "## Component: Card" in get_usage_guide(design_system, "Card")
