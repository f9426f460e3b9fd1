"""Integration tests for the load -> validate -> compile pipeline."""

import json

import pytest

from stylekit.css import compile_system
from stylekit.diagnostics import IssueCode, Severity, ValidationIssue, usage_path
from stylekit.manifest import generate_manifest
from stylekit.schema import PropertyUsage, UsageLocation, load_design_system
from stylekit.typegen import generate_system_types
from stylekit.validation import (
    UsageBatch,
    ValidatorRegistry,
    validate_all_usages,
    validate_schema,
)


@pytest.fixture
def system_file(design_system, tmp_path):
    """The shared design system written out as a JSON document."""
    path = tmp_path / "design-system.json"
    path.write_text(json.dumps(design_system.model_dump(mode="json", by_alias=True)))
    return path


def _label_hook(usage, config):
    if "label" not in usage.props:
        return ValidationIssue(
            Severity.WARNING,
            IssueCode.MISSING_REQUIRED_PROP,
            "Buttons should carry a label",
            usage_path(usage),
        )
    return None


@pytest.mark.integration
class TestPipeline:
    """End-to-end flow over a design system loaded from disk."""

    def test_loaded_system_is_valid(self, system_file):
        system = load_design_system(system_file)

        assert validate_schema(system).valid

    def test_batch_validation_with_hooks(self, system_file):
        system = load_design_system(system_file)
        hooks = ValidatorRegistry()
        hooks.register("label", _label_hook, components=["Button"])
        batch = [
            UsageBatch(
                file="App.tsx",
                usages=[
                    PropertyUsage(
                        component="Button",
                        props={"importance": "primary", "size": "lg", "label": "Save"},
                    ),
                    PropertyUsage(
                        component="Button",
                        props={"importance": "ghost", "state": "disabled", "label": "x"},
                        location=UsageLocation(file="App.tsx", line=12, column=4),
                    ),
                ],
            ),
            UsageBatch(
                file="Panel.tsx",
                usages=[
                    PropertyUsage(component="Modal", props={}),
                    PropertyUsage(component="Button", props={"importance": "secondary"}),
                ],
            ),
        ]

        result = validate_all_usages(system, batch, strict=False, hooks=hooks)

        assert not result.valid
        assert [i.code for i in result.issues] == [
            IssueCode.CONSTRAINT_FORBIDDEN_PROP,
            IssueCode.UNKNOWN_COMPONENT,
            IssueCode.MISSING_REQUIRED_PROP,
        ]
        assert [i.path for i in result.issues] == ["App.tsx:12:4", "Panel.tsx", "Panel.tsx"]
        assert result.issues[2].severity == Severity.WARNING

    def test_outputs_from_loaded_system(self, system_file):
        system = load_design_system(system_file)

        css = compile_system(system)
        types = generate_system_types(system)
        manifest = generate_manifest(system)

        assert '.acme-button[data-importance="primary"]' in css
        assert "opacity" not in css
        assert "export type ButtonValidCombinations =" in types
        assert manifest.get_component("Button").combination_count == 10
