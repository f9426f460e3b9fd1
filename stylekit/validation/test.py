"""Unit tests for validation module."""

import pytest

from stylekit.diagnostics import IssueCode, Severity, ValidationIssue
from stylekit.schema import PropertyUsage, UsageLocation, define_system, prop, when
from stylekit.validation import (
    UsageBatch,
    ValidatorRegistry,
    check_usage,
    is_pass_through,
    validate_all_usages,
    validate_schema,
    validate_usage,
)


def _usage(props: dict, component: str = "Button") -> PropertyUsage:
    return PropertyUsage(component=component, props=props)


def _system(**components):
    return define_system(name="Test", components=components)


@pytest.fixture(autouse=True)
def _no_strict_env(monkeypatch):
    monkeypatch.delenv("STYLEKIT_STRICT", raising=False)


# =============================================================================
# Schema Validation
# =============================================================================


class TestValidateSchema:
    """Tests for validate_schema."""

    @pytest.mark.unit
    def test_valid_system(self, design_system):
        result = validate_schema(design_system)
        assert result.valid is True
        assert result.issues == []

    @pytest.mark.unit
    def test_empty_enum(self):
        result = validate_schema(
            _system(Tag={"name": "Tag", "properties": {"tone": prop.enum([])}})
        )
        assert result.valid is False
        assert result.codes() == [IssueCode.EMPTY_ENUM]
        assert result.issues[0].path == "components.Tag.properties.tone"

    @pytest.mark.unit
    def test_unknown_constraint_property(self):
        result = validate_schema(
            _system(
                Tag={
                    "name": "Tag",
                    "properties": {"tone": prop.enum(["a", "b"])},
                    "constraints": [
                        when({"variant": "x"}).forbid(["icon"]),
                        when({"tone": "a"}).require({"size": ["sm"]}),
                    ],
                }
            )
        )
        assert result.valid is False
        assert result.codes() == [IssueCode.UNKNOWN_CONSTRAINT_PROPERTY] * 3
        messages = [i.message for i in result.issues]
        assert 'Constraint references unknown property "variant"' in messages
        assert 'Constraint forbids unknown property "icon"' in messages
        assert 'Constraint requires unknown property "size"' in messages

    @pytest.mark.unit
    def test_constraint_with_both_actions_is_flagged(self):
        result = validate_schema(
            _system(
                Tag={
                    "name": "Tag",
                    "properties": {
                        "tone": prop.enum(["a", "b"]),
                        "icon": prop.string(),
                        "size": prop.enum(["sm", "md"]),
                    },
                    "constraints": [
                        {"when": {"tone": "a"}, "forbid": ["icon"], "require": {"size": ["sm"]}},
                    ],
                }
            )
        )
        assert result.valid is True
        assert result.codes() == [IssueCode.MULTIPLE_CONSTRAINT_ACTIONS]
        assert result.issues[0].severity == Severity.WARNING
        assert result.issues[0].path == "components.Tag.constraints[0]"

    @pytest.mark.unit
    def test_token_name_is_advisory(self):
        system = define_system(name="T", tokens={"color": {"brandPrimary": "#000"}})
        result = validate_schema(system)
        assert result.valid is True
        assert result.codes() == [IssueCode.INVALID_TOKEN_NAME]
        assert result.issues[0].severity == Severity.WARNING
        assert result.issues[0].path == "tokens.color.brandPrimary"

    @pytest.mark.unit
    def test_empty_token_value(self):
        system = define_system(
            name="T",
            tokens={"color": {"blank": "", "gray": {"100": ""}}},
            dark_tokens={"color": {"void": ""}},
        )
        result = validate_schema(system)
        assert result.valid is False
        assert [i.path for i in result.errors] == [
            "tokens.color.blank",
            "tokens.color.gray.100",
            "darkTokens.color.void",
        ]

    @pytest.mark.unit
    def test_component_name_mismatch(self):
        result = validate_schema(_system(Btn={"name": "Button", "properties": {}}))
        assert result.valid is True
        assert result.codes() == [IssueCode.COMPONENT_NAME_MISMATCH]

    @pytest.mark.unit
    def test_property_name_should_be_camel_case(self):
        result = validate_schema(
            _system(Tag={"name": "Tag", "properties": {"full-width": prop.boolean()}})
        )
        assert result.codes() == [IssueCode.INVALID_PROPERTY_NAME]
        assert result.valid is True

    @pytest.mark.unit
    def test_invalid_defaults(self):
        result = validate_schema(
            _system(
                Tag={
                    "name": "Tag",
                    "properties": {
                        "tone": prop.enum(["a", "b"], default="c"),
                        "count": prop.number(min=0, max=10, default=11),
                    },
                }
            )
        )
        assert result.codes() == [IssueCode.INVALID_DEFAULT, IssueCode.INVALID_DEFAULT]
        assert result.issues[0].path == "components.Tag.properties.tone.default"

    @pytest.mark.unit
    def test_invalid_range(self):
        result = validate_schema(
            _system(Tag={"name": "Tag", "properties": {"n": prop.number(min=5, max=1)}})
        )
        assert result.codes() == [IssueCode.INVALID_RANGE]
        assert result.issues[0].message == "Min (5) cannot be greater than max (1)"

    @pytest.mark.unit
    def test_unknown_mapping_property(self):
        result = validate_schema(
            _system(
                Tag={
                    "name": "Tag",
                    "properties": {"tone": prop.enum(["a"])},
                    "mappings": {
                        "tone=a,size=lg": {"color": "red"},
                        "tone=a": [{"condition": {"shape": "round"}, "styles": {}}],
                    },
                }
            )
        )
        assert result.codes() == [IssueCode.UNKNOWN_MAPPING_PROPERTY] * 2
        assert result.issues[0].path == "components.Tag.mappings.tone=a,size=lg"


# =============================================================================
# Usage Validation
# =============================================================================


class TestValidateUsage:
    """Tests for validate_usage."""

    @pytest.mark.unit
    def test_valid_usage(self, button_schema):
        result = validate_usage(button_schema, _usage({"importance": "primary"}))
        assert result.valid is True
        assert result.issues == []

    @pytest.mark.unit
    def test_missing_required(self, button_schema):
        result = validate_usage(button_schema, _usage({"size": "md"}))
        assert result.valid is False
        assert result.codes() == [IssueCode.MISSING_REQUIRED_PROP]
        assert result.issues[0].suggestion == 'Add importance="primary"'

    @pytest.mark.unit
    def test_none_counts_as_missing(self, button_schema):
        result = validate_usage(button_schema, _usage({"importance": None}))
        assert result.codes() == [IssueCode.MISSING_REQUIRED_PROP]

    @pytest.mark.unit
    def test_required_with_default_is_satisfied(self):
        system = _system(
            Tag={
                "name": "Tag",
                "properties": {"tone": prop.enum(["a", "b"], required=True, default="a")},
            }
        )
        result = validate_usage(system.components["Tag"], _usage({}, "Tag"))
        assert IssueCode.MISSING_REQUIRED_PROP not in result.codes()
        assert result.valid is True

    @pytest.mark.unit
    def test_invalid_enum_value(self, button_schema):
        result = validate_usage(
            button_schema, _usage({"importance": "primary", "size": "xl"})
        )
        assert result.codes() == [IssueCode.INVALID_ENUM_VALUE]
        issue = result.issues[0]
        assert issue.path == "Button.size"
        assert issue.suggestion == "Use one of: sm, md, lg"

    @pytest.mark.unit
    def test_unknown_property(self, button_schema):
        result = validate_usage(
            button_schema, _usage({"importance": "primary", "variant": "x"})
        )
        assert result.codes() == [IssueCode.UNKNOWN_PROPERTY]
        assert "importance, size, state, fullWidth, label" in result.issues[0].suggestion

    @pytest.mark.unit
    def test_pass_through_props(self, button_schema):
        props = {
            "importance": "primary",
            "children": "Save",
            "key": "k",
            "ref": object(),
            "onClick": "handler",
            "data-testid": "save",
        }
        assert validate_usage(button_schema, _usage(props)).issues == []

    @pytest.mark.unit
    def test_is_pass_through(self):
        assert is_pass_through("onFocus")
        assert is_pass_through("data-id")
        assert not is_pass_through("variant")

    @pytest.mark.unit
    def test_check_order(self, button_schema):
        """Required, then values, then unknown names."""
        result = validate_usage(button_schema, _usage({"variant": 1, "size": "xl"}))
        assert result.codes() == [
            IssueCode.MISSING_REQUIRED_PROP,
            IssueCode.INVALID_ENUM_VALUE,
            IssueCode.UNKNOWN_PROPERTY,
        ]

    @pytest.mark.unit
    def test_boolean_type_mismatch(self, button_schema):
        result = validate_usage(
            button_schema, _usage({"importance": "primary", "fullWidth": "yes"})
        )
        assert result.codes() == [IssueCode.TYPE_MISMATCH]

    @pytest.mark.unit
    def test_number_values(self, card_schema):
        assert validate_usage(card_schema, _usage({"padding": 12}, "Card")).valid
        assert validate_usage(card_schema, _usage({"padding": "12"}, "Card")).valid

        mismatch = validate_usage(card_schema, _usage({"padding": "wide"}, "Card"))
        assert mismatch.codes() == [IssueCode.TYPE_MISMATCH]

        too_big = validate_usage(card_schema, _usage({"padding": 100}, "Card"))
        assert too_big.codes() == [IssueCode.VALUE_OUT_OF_RANGE]
        assert too_big.issues[0].message == 'Property "padding" must be <= 64, got 100'

        too_small = validate_usage(card_schema, _usage({"padding": -1}, "Card"))
        assert too_small.codes() == [IssueCode.VALUE_OUT_OF_RANGE]

    @pytest.mark.unit
    def test_dynamic_value_is_info(self, button_schema):
        result = validate_usage(
            button_schema, _usage({"importance": {"__dynamic": "props.kind"}})
        )
        assert result.codes() == [IssueCode.DYNAMIC_VALUE]
        assert result.issues[0].severity == Severity.INFO
        assert result.valid is True

    @pytest.mark.unit
    def test_constraints_not_checked(self, button_schema):
        result = validate_usage(
            button_schema, _usage({"importance": "ghost", "state": "disabled"})
        )
        assert result.valid is True

    @pytest.mark.unit
    def test_location_path(self, button_schema):
        usage = PropertyUsage(
            component="Button",
            props={"importance": "huge"},
            location=UsageLocation(file="App.tsx", line=8, column=3),
        )
        assert validate_usage(button_schema, usage).issues[0].path == "App.tsx:8:3"


class TestCheckUsage:
    """Tests for check_usage."""

    @pytest.mark.unit
    def test_usage_then_constraint_issues(self, button_schema):
        result = check_usage(
            button_schema,
            _usage({"importance": "ghost", "state": "disabled", "variant": 1}),
        )
        assert result.codes() == [
            IssueCode.UNKNOWN_PROPERTY,
            IssueCode.CONSTRAINT_FORBIDDEN_PROP,
        ]

    @pytest.mark.unit
    def test_fill_defaults(self, button_schema):
        usage = _usage({"importance": "primary"})
        assert check_usage(button_schema, usage).codes() == [
            IssueCode.CONSTRAINT_MISSING_REQUIRED
        ]
        assert check_usage(button_schema, usage, fill_defaults=True).issues == []
        assert usage.props == {"importance": "primary"}


# =============================================================================
# Batch Validation and Hooks
# =============================================================================


def _forbid_label(usage, config):
    if "label" in usage.props:
        return ValidationIssue(
            Severity.WARNING, IssueCode.UNKNOWN_PROPERTY, "Use children", usage.component
        )
    return None


def _explode(usage, config):
    raise RuntimeError("boom")


class TestValidatorRegistry:
    """Tests for ValidatorRegistry."""

    @pytest.mark.unit
    def test_register_and_unregister(self):
        registry = ValidatorRegistry()
        registry.register("a", _forbid_label)
        registry.register("b", _explode)
        assert registry.names() == ["a", "b"]
        assert "a" in registry
        assert registry.unregister("a") is True
        assert registry.unregister("a") is False
        assert len(registry) == 1

    @pytest.mark.unit
    def test_hook_results_collected(self):
        registry = ValidatorRegistry()
        registry.register("label", _forbid_label)
        issues = registry.execute([_usage({"label": "x"}), _usage({})])
        assert [i.message for i in issues] == ["Use children"]

    @pytest.mark.unit
    def test_failing_hook_is_isolated(self):
        registry = ValidatorRegistry()
        registry.register("explode", _explode)
        registry.register("label", _forbid_label)
        issues = registry.execute([_usage({"label": "x"}), _usage({"label": "y"})])
        assert [i.code for i in issues] == [
            IssueCode.VALIDATOR_ERROR,
            IssueCode.UNKNOWN_PROPERTY,
            IssueCode.VALIDATOR_ERROR,
            IssueCode.UNKNOWN_PROPERTY,
        ]
        assert issues[0].message == 'Validator "explode" failed: boom'
        assert issues[0].path == "Button"

    @pytest.mark.unit
    def test_list_results(self):
        registry = ValidatorRegistry()
        registry.register("pair", lambda usage, config: [
            ValidationIssue(Severity.INFO, IssueCode.DYNAMIC_VALUE, "one", "p"),
            ValidationIssue(Severity.INFO, IssueCode.DYNAMIC_VALUE, "two", "p"),
        ])
        assert len(registry.execute([_usage({})])) == 2

    @pytest.mark.unit
    def test_bad_return_type(self):
        registry = ValidatorRegistry()
        registry.register("bad", lambda usage, config: "not an issue")
        issues = registry.execute([_usage({})])
        assert [i.code for i in issues] == [IssueCode.VALIDATOR_ERROR]

    @pytest.mark.unit
    def test_component_filter(self):
        registry = ValidatorRegistry()
        registry.register("explode", _explode, components=["Card"])
        assert registry.execute([_usage({})]) == []
        assert len(registry.execute([_usage({}, "Card")])) == 1

    @pytest.mark.unit
    def test_registries_are_independent(self):
        first = ValidatorRegistry()
        first.register("a", _explode)
        assert ValidatorRegistry().names() == []


class TestValidateAllUsages:
    """Tests for validate_all_usages."""

    @pytest.mark.unit
    def test_batch(self, design_system):
        batch = [
            UsageBatch(
                file="src/App.tsx",
                usages=[
                    _usage({"importance": "ghost", "state": "disabled"}),
                    _usage({}, "Modal"),
                ],
            ),
            UsageBatch(file="src/Other.tsx", usages=[_usage({"elevation": "raised"}, "Card")]),
        ]
        result = validate_all_usages(design_system, batch)
        assert result.valid is False
        assert result.codes() == [
            IssueCode.CONSTRAINT_FORBIDDEN_PROP,
            IssueCode.UNKNOWN_COMPONENT,
        ]
        assert [i.path for i in result.issues] == ["src/App.tsx", "src/App.tsx"]

    @pytest.mark.unit
    def test_existing_location_kept(self, design_system):
        usage = PropertyUsage(
            component="Modal", location=UsageLocation(file="a.tsx", line=1, column=2)
        )
        result = validate_all_usages(design_system, [UsageBatch(file="b.tsx", usages=[usage])])
        assert result.issues[0].path == "a.tsx:1:2"

    @pytest.mark.unit
    def test_hooks_and_strict(self, design_system):
        hooks = ValidatorRegistry()
        hooks.register("label", _forbid_label)
        batch = [
            UsageBatch(
                file="App.tsx",
                usages=[_usage({"importance": "primary", "size": "md", "label": "Save"})],
            )
        ]
        relaxed = validate_all_usages(design_system, batch, hooks=hooks)
        assert relaxed.valid is True
        assert relaxed.codes() == [IssueCode.UNKNOWN_PROPERTY]

        strict = validate_all_usages(design_system, batch, strict=True, hooks=hooks)
        assert strict.valid is False

    @pytest.mark.unit
    def test_strict_from_environment(self, design_system, monkeypatch):
        hooks = ValidatorRegistry()
        hooks.register("label", _forbid_label)
        batch = [
            UsageBatch(
                file="App.tsx",
                usages=[_usage({"importance": "primary", "size": "lg", "label": "x"})],
            )
        ]
        monkeypatch.setenv("STYLEKIT_STRICT", "true")
        assert validate_all_usages(design_system, batch, hooks=hooks).valid is False

    @pytest.mark.unit
    def test_empty_batch(self, design_system):
        result = validate_all_usages(design_system, [])
        assert result.valid is True
        assert result.issues == []
