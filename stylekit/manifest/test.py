"""Unit tests for manifest generation."""

import pytest

from stylekit.manifest import (
    generate_component_manifest,
    generate_manifest,
    generate_usage_guide,
)
from stylekit.schema import PropertyUsage, define_component, define_system, prop, when
from stylekit.validation import check_usage


@pytest.mark.unit
class TestComponentManifest:
    """Tests for per-component summaries."""

    def test_counts(self, button_schema):
        manifest = generate_component_manifest(button_schema)
        assert manifest.combination_count == 10
        assert manifest.total_combinations == 18

    def test_properties(self, button_schema):
        manifest = generate_component_manifest(button_schema)
        importance, size = manifest.properties[:2]
        assert importance.name == "importance"
        assert importance.type == "enum"
        assert importance.values == ["primary", "secondary", "ghost"]
        assert importance.required is True
        assert size.default == "md"
        label = manifest.properties[-1]
        assert label.type == "string"
        assert label.values is None

    def test_constraint_sentences(self, button_schema):
        manifest = generate_component_manifest(button_schema)
        assert manifest.constraints == [
            'When importance="ghost": state is not allowed',
            'When importance="primary": size must be one of [md, lg]',
        ]

    def test_valid_examples(self, button_schema):
        examples = generate_component_manifest(button_schema).examples
        assert examples.valid == [
            '<Button importance="primary" size="md" state="default">Content</Button>',
            '<Button importance="primary" size="md" state="disabled">Content</Button>',
            '<Button importance="primary" size="lg" state="default">Content</Button>',
        ]

    def test_invalid_examples(self, button_schema):
        invalid = generate_component_manifest(button_schema).examples.invalid
        assert invalid[0] == (
            '<Button importance="ghost" state="default">Invalid</Button>'
            '  <!-- Error: When importance="ghost": state is not allowed -->'
        )
        assert invalid[1].startswith('<Button importance="primary" size="sm">Invalid</Button>')
        assert 'className="flex items-center"' in invalid[2]

    @pytest.mark.parametrize(
        "props",
        [
            {"importance": "ghost", "state": "default"},
            {"importance": "primary", "size": "sm"},
        ],
    )
    def test_invalid_examples_really_fail(self, button_schema, props):
        usage = PropertyUsage(component="Button", props=props)
        assert not check_usage(button_schema, usage).valid

    def test_operator_trigger(self):
        schema = define_component(
            name="Meter",
            properties={"level": prop.enum(["low", "high"]), "pulse": prop.boolean()},
            constraints=[when({"level": {"op": "in", "value": ["high"]}}).forbid(["pulse"])],
        )
        invalid = generate_component_manifest(schema).examples.invalid
        assert invalid[0].startswith('<Meter level="high" pulse="true">Invalid</Meter>')

    def test_fallback_description(self):
        schema = define_component(name="Spacer", properties={})
        manifest = generate_component_manifest(schema)
        assert manifest.description == "Spacer component"
        assert manifest.examples.valid == ["<Spacer>Content</Spacer>"]


@pytest.mark.unit
class TestSystemManifest:
    """Tests for whole-system manifests."""

    def test_header(self, design_system):
        manifest = generate_manifest(design_system)
        assert manifest.version == "1.2.0"
        assert manifest.design_system == "Acme"
        assert [c.name for c in manifest.components] == ["Button", "Card"]

    def test_default_version(self):
        assert generate_manifest(define_system(name="Bare")).version == "0.1.0"

    def test_semantic_descriptions(self, design_system):
        descriptions = generate_manifest(design_system).semantic_descriptions
        assert descriptions["token:color:gray-100"] == "color token with value #f3f4f6"
        assert descriptions["component:Card"] == "Surface grouping related content"
        assert descriptions["prop:Button:importance"] == "importance property"
        assert descriptions["value:Button:size:sm"] == "sm option"
        assert "value:Button:label:x" not in descriptions

    def test_dump_uses_aliases(self, design_system):
        data = generate_manifest(design_system).model_dump(by_alias=True)
        assert data["designSystem"] == "Acme"
        assert "semanticDescriptions" in data
        assert data["components"][0]["combinationCount"] == 10
        assert data["components"][0]["totalCombinations"] == 18

    def test_get_component(self, design_system):
        manifest = generate_manifest(design_system)
        assert manifest.get_component("Card").name == "Card"
        assert manifest.get_component("Missing") is None


@pytest.mark.unit
class TestUsageGuide:
    """Tests for the Markdown usage guide."""

    def test_component_focus(self, design_system):
        guide = generate_usage_guide(generate_manifest(design_system), component="Button")
        assert "## Component: Button" in guide
        assert "- **importance** (required) = primary | secondary | ghost" in guide
        assert "- **size** [default: md] = sm | md | lg" in guide
        assert "- **fullWidth** [default: false]" in guide
        assert "### Constraints" in guide
        assert "**Invalid:**" in guide

    def test_overview(self, design_system):
        guide = generate_usage_guide(generate_manifest(design_system))
        assert guide.startswith("# Acme Design System Rules")
        assert "- **Button**: Clickable action trigger" in guide
        assert "### color" in guide
        assert "- gray-100" in guide

    def test_unknown_component_falls_back_to_overview(self, design_system):
        guide = generate_usage_guide(generate_manifest(design_system), component="Nope")
        assert "## Available Components" in guide
