"""Unit tests for the Schema module."""

import json

import pytest

from stylekit.schema import (
    UNDEFINED,
    BooleanProperty,
    ComponentSchema,
    ConditionalMapping,
    ConditionOperator,
    Constraint,
    DesignSystemConfig,
    EnumProperty,
    Equals,
    NumberProperty,
    OneOf,
    Operator,
    PropertyUsage,
    SchemaDefinitionError,
    StringProperty,
    UsageLocation,
    apply_defaults,
    coerce_to_string,
    define_component,
    define_system,
    export_json_schema,
    load_design_system,
    parse_condition,
    parse_mapping_key,
    prop,
    when,
)


class TestCoerceToString:
    """Tests for the comparison text of prop values."""

    @pytest.mark.unit
    def test_strings_pass_through(self):
        assert coerce_to_string("primary") == "primary"

    @pytest.mark.unit
    def test_absent_and_none_are_undefined(self):
        assert coerce_to_string(None) == UNDEFINED
        assert coerce_to_string("x", present=False) == "undefined"

    @pytest.mark.unit
    def test_booleans_are_lowercase(self):
        assert coerce_to_string(True) == "true"
        assert coerce_to_string(False) == "false"

    @pytest.mark.unit
    def test_integral_floats_drop_fraction(self):
        assert coerce_to_string(1.0) == "1"
        assert coerce_to_string(1.5) == "1.5"
        assert coerce_to_string(3) == "3"

    @pytest.mark.unit
    def test_lists_are_comma_joined(self):
        assert coerce_to_string(["a", 1, True]) == "a,1,true"


class TestParseCondition:
    """Tests for classification of raw `when` entries."""

    @pytest.mark.unit
    def test_scalar_is_equals(self):
        cond = parse_condition("ghost")
        assert isinstance(cond, Equals)
        assert cond.value == "ghost"

    @pytest.mark.unit
    def test_list_is_one_of(self):
        cond = parse_condition(["sm", "md"])
        assert isinstance(cond, OneOf)
        assert cond.values == ["sm", "md"]

    @pytest.mark.unit
    def test_list_values_are_coerced(self):
        cond = parse_condition([1, True])
        assert cond.values == ["1", "true"]

    @pytest.mark.unit
    def test_op_mapping_is_operator(self):
        cond = parse_condition({"op": "gt", "value": 3})
        assert isinstance(cond, Operator)
        assert cond.operator is ConditionOperator.GT
        assert cond.value == 3

    @pytest.mark.unit
    def test_unknown_op_is_kept(self):
        """Unknown operators survive construction and resolve to no operator."""
        cond = parse_condition({"op": "between", "value": [1, 2]})
        assert cond.op == "between"
        assert cond.operator is None

    @pytest.mark.unit
    def test_constraint_parses_when_once(self):
        constraint = Constraint(
            when={"importance": "ghost", "size": ["sm", "md"]}, forbid=["state"]
        )
        assert isinstance(constraint.when["importance"], Equals)
        assert isinstance(constraint.when["size"], OneOf)

    @pytest.mark.unit
    def test_constraint_dump_is_declarative(self):
        """Dumping a constraint restores the raw `when` shapes."""
        raw = {
            "importance": "primary",
            "size": ["md", "lg"],
            "count": {"op": "gte", "value": 2},
        }
        dumped = Constraint(when=raw, require={"size": ["lg"]}).model_dump()
        assert dumped["when"] == raw
        assert Constraint.model_validate(dumped).when == Constraint(when=raw).when


class TestPropertyDefinitions:
    """Tests for property models and factories."""

    @pytest.mark.unit
    def test_prop_enum(self):
        p = prop.enum(["a", "b"], required=True, default="a")
        assert isinstance(p, EnumProperty)
        assert p.type == "enum"
        assert p.values == ["a", "b"]
        assert p.required is True
        assert p.default == "a"

    @pytest.mark.unit
    def test_prop_kinds(self):
        assert isinstance(prop.boolean(default=False), BooleanProperty)
        assert isinstance(prop.string(), StringProperty)
        number = prop.number(min=0, max=10)
        assert isinstance(number, NumberProperty)
        assert (number.min, number.max) == (0, 10)

    @pytest.mark.unit
    def test_empty_enum_is_constructible(self):
        """An empty value list is reported by validation, not rejected here."""
        assert prop.enum([]).values == []

    @pytest.mark.unit
    def test_discriminated_on_type(self):
        schema = define_component(
            {
                "name": "Field",
                "properties": {
                    "kind": {"type": "enum", "values": ["text", "email"]},
                    "disabled": {"type": "boolean"},
                    "label": {"type": "string"},
                    "rows": {"type": "number", "min": 1},
                },
            }
        )
        kinds = [type(p) for p in schema.properties.values()]
        assert kinds == [EnumProperty, BooleanProperty, StringProperty, NumberProperty]

    @pytest.mark.unit
    def test_models_are_frozen(self):
        p = prop.enum(["a"])
        with pytest.raises(Exception):
            p.required = True


class TestWhenBuilder:
    """Tests for the constraint builder."""

    @pytest.mark.unit
    def test_forbid(self):
        c = when({"importance": "ghost"}).forbid(["state"], "No state on ghost")
        assert c.forbid == ["state"]
        assert c.require is None
        assert c.message == "No state on ghost"

    @pytest.mark.unit
    def test_require(self):
        c = when({"importance": "primary"}).require({"size": ["md", "lg"]})
        assert c.require == {"size": ["md", "lg"]}
        assert c.forbid is None
        assert c.referenced_properties() == ["importance", "size"]


class TestDefineComponent:
    """Tests for component definition."""

    @pytest.mark.unit
    def test_keyword_definition(self):
        button = define_component(
            name="Button",
            properties={
                "importance": prop.enum(["primary", "secondary"], required=True),
                "size": prop.enum(["sm", "md", "lg"], default="md"),
            },
        )
        assert button.name == "Button"
        assert button.properties["size"].default == "md"
        assert button.constraints == []
        assert button.mappings == {}

    @pytest.mark.unit
    def test_declaration_order_preserved(self):
        schema = define_component(
            name="X",
            properties={"z": prop.string(), "a": prop.string(), "m": prop.string()},
        )
        assert list(schema.properties) == ["z", "a", "m"]

    @pytest.mark.unit
    def test_base_styles_alias(self):
        schema = define_component(
            {"name": "Card", "properties": {}, "baseStyles": {"padding": "md"}}
        )
        assert schema.base_styles == {"padding": "md"}

    @pytest.mark.unit
    def test_conditional_mappings(self):
        schema = define_component(
            {
                "name": "Button",
                "properties": {"size": {"type": "enum", "values": ["sm", "lg"]}},
                "mappings": {
                    "size=lg": [
                        {"condition": {"importance": "primary"}, "styles": {"x": "y"}}
                    ]
                },
            }
        )
        assert isinstance(schema.mappings["size=lg"][0], ConditionalMapping)

    @pytest.mark.unit
    def test_missing_name_raises(self):
        with pytest.raises(SchemaDefinitionError) as exc_info:
            define_component({"properties": {}})
        assert exc_info.value.errors
        assert "name" in str(exc_info.value)

    @pytest.mark.unit
    def test_empty_name_raises(self):
        with pytest.raises(SchemaDefinitionError):
            define_component(name="", properties={})

    @pytest.mark.unit
    def test_missing_properties_raises(self):
        with pytest.raises(SchemaDefinitionError, match="properties"):
            define_component(name="Button")

    @pytest.mark.unit
    def test_not_a_mapping_raises(self):
        with pytest.raises(SchemaDefinitionError, match="must be a mapping"):
            define_component(["Button"])

    @pytest.mark.unit
    def test_error_is_value_error(self):
        assert issubclass(SchemaDefinitionError, ValueError)


class TestDesignSystem:
    """Tests for system definition and lookup helpers."""

    @pytest.mark.unit
    def test_define_system(self, design_system):
        assert design_system.name == "Acme"
        assert design_system.get_component("Button").name == "Button"
        assert design_system.get_component("Missing") is None
        assert design_system.get_token("color", "brand-primary") == "#2563eb"
        assert design_system.get_token("color", "nope") is None
        assert design_system.get_token("nope", "nope") is None

    @pytest.mark.unit
    def test_settings_aliases(self):
        system = define_system(
            {
                "name": "S",
                "settings": {"cssPrefix": "acme", "generateCSSVariables": False},
            }
        )
        assert system.settings.css_prefix == "acme"
        assert system.settings.generate_css_variables is False
        assert system.settings.strict_mode is False

    @pytest.mark.unit
    def test_system_requires_name(self):
        with pytest.raises(SchemaDefinitionError):
            define_system({"tokens": {}})

    @pytest.mark.unit
    def test_load_design_system(self, tmp_path):
        path = tmp_path / "system.json"
        path.write_text(
            json.dumps(
                {
                    "name": "FromFile",
                    "darkTokens": {"color": {"surface": "#000"}},
                    "components": {
                        "Tag": {
                            "name": "Tag",
                            "properties": {"tone": {"type": "enum", "values": ["a"]}},
                        }
                    },
                }
            )
        )
        system = load_design_system(path)
        assert isinstance(system, DesignSystemConfig)
        assert system.dark_tokens == {"color": {"surface": "#000"}}
        assert isinstance(system.components["Tag"], ComponentSchema)

    @pytest.mark.unit
    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SchemaDefinitionError, match="invalid JSON"):
            load_design_system(path)

    @pytest.mark.unit
    def test_export_json_schema(self):
        schema = export_json_schema()
        assert schema["title"] == "DesignSystemConfig"
        assert "components" in schema["properties"]


class TestHelpers:
    """Tests for mapping keys, defaults and usage records."""

    @pytest.mark.unit
    def test_parse_mapping_key_single(self):
        assert parse_mapping_key("size=lg") == [("size", "lg")]

    @pytest.mark.unit
    def test_parse_mapping_key_compound(self):
        assert parse_mapping_key("importance=primary, size=lg") == [
            ("importance", "primary"),
            ("size", "lg"),
        ]

    @pytest.mark.unit
    def test_apply_defaults(self, button_schema):
        props = {"importance": "primary"}
        filled = apply_defaults(button_schema, props)
        assert filled["size"] == "md"
        assert props == {"importance": "primary"}

    @pytest.mark.unit
    def test_apply_defaults_keeps_supplied(self, button_schema):
        filled = apply_defaults(button_schema, {"size": "lg"})
        assert filled["size"] == "lg"

    @pytest.mark.unit
    def test_usage_location_format(self):
        assert UsageLocation(file="App.tsx", line=3, column=7).format() == "App.tsx:3:7"
        assert UsageLocation(file="App.tsx", line=3).format() == "App.tsx:3"
        assert UsageLocation(file="App.tsx").format() == "App.tsx"

    @pytest.mark.unit
    def test_property_usage_defaults(self):
        usage = PropertyUsage(component="Button")
        assert usage.props == {}
        assert usage.location is None
