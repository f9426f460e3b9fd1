"""Unit tests for the constraint engine."""

import itertools

import pytest

from stylekit.constraints import (
    count_combinations,
    describe_constraint,
    evaluate_condition,
    evaluate_operator,
    format_condition,
    generate_valid_combinations,
    is_satisfiable,
    iter_valid_combinations,
    suggest_valid_alternatives,
    validate_constraints,
)
from stylekit.diagnostics import IssueCode, Severity
from stylekit.schema import (
    Constraint,
    PropertyUsage,
    UsageLocation,
    define_component,
    parse_condition,
    prop,
    when,
)


def _cond(raw: dict) -> dict:
    return {key: parse_condition(value) for key, value in raw.items()}


def _usage(props: dict, component: str = "Button") -> PropertyUsage:
    return PropertyUsage(component=component, props=props)


@pytest.fixture
def ghost_schema():
    """importance/state schema where ghost forbids state."""
    return define_component(
        name="Button",
        properties={
            "importance": prop.enum(["primary", "secondary", "ghost"]),
            "state": prop.enum(["default", "disabled"]),
        },
        constraints=[when({"importance": "ghost"}).forbid(["state"])],
    )


@pytest.fixture
def exclusion_schema():
    """a/b schema where a=1 forbids b."""
    return define_component(
        name="Pair",
        properties={"a": prop.enum(["1", "2"]), "b": prop.enum(["x", "y"])},
        constraints=[when({"a": "1"}).forbid(["b"])],
    )


# =============================================================================
# Condition Evaluation
# =============================================================================


class TestEvaluateCondition:
    """Tests for evaluate_condition."""

    @pytest.mark.unit
    def test_empty_condition_holds(self):
        assert evaluate_condition({}, {}) is True
        assert evaluate_condition({}, {"anything": 1}) is True

    @pytest.mark.unit
    def test_equals(self):
        cond = _cond({"importance": "ghost"})
        assert evaluate_condition(cond, {"importance": "ghost"}) is True
        assert evaluate_condition(cond, {"importance": "primary"}) is False

    @pytest.mark.unit
    def test_equals_coerces_booleans(self):
        """A boolean prop matches the text "true"."""
        cond = _cond({"disabled": "true"})
        assert evaluate_condition(cond, {"disabled": True}) is True
        assert evaluate_condition(cond, {"disabled": False}) is False

    @pytest.mark.unit
    def test_equals_coerces_numbers(self):
        cond = _cond({"count": 1})
        assert evaluate_condition(cond, {"count": "1"}) is True
        assert evaluate_condition(cond, {"count": 1.0}) is True

    @pytest.mark.unit
    def test_absent_key_is_undefined(self):
        assert evaluate_condition(_cond({"size": "sm"}), {}) is False
        assert evaluate_condition(_cond({"size": "undefined"}), {}) is True

    @pytest.mark.unit
    def test_one_of(self):
        cond = _cond({"size": ["sm", "md"]})
        assert evaluate_condition(cond, {"size": "md"}) is True
        assert evaluate_condition(cond, {"size": "lg"}) is False
        assert evaluate_condition(cond, {}) is False

    @pytest.mark.unit
    def test_all_entries_must_hold(self):
        cond = _cond({"importance": "primary", "size": ["lg"]})
        assert evaluate_condition(cond, {"importance": "primary", "size": "lg"})
        assert not evaluate_condition(cond, {"importance": "primary", "size": "sm"})

    @pytest.mark.unit
    def test_operator_condition(self):
        cond = _cond({"count": {"op": "gte", "value": 3}})
        assert evaluate_condition(cond, {"count": 3}) is True
        assert evaluate_condition(cond, {"count": 2}) is False

    @pytest.mark.unit
    def test_unknown_operator_fails_closed(self):
        cond = _cond({"size": {"op": "like", "value": "s"}})
        assert evaluate_condition(cond, {"size": "sm"}) is False


class TestEvaluateOperator:
    """Tests for the comparison operators."""

    @pytest.mark.unit
    def test_eq_is_strict(self):
        assert evaluate_operator("eq", 1, 1) is True
        assert evaluate_operator("eq", 1, 1.0) is True
        assert evaluate_operator("eq", "1", 1) is False
        assert evaluate_operator("eq", True, 1) is False
        assert evaluate_operator("eq", None, None) is True

    @pytest.mark.unit
    def test_neq(self):
        assert evaluate_operator("neq", "a", "b") is True
        assert evaluate_operator("neq", "a", "a") is False

    @pytest.mark.unit
    def test_eq_compares_collections_by_value(self):
        assert evaluate_operator("eq", ["a", "b"], ["a", "b"]) is True
        assert evaluate_operator("neq", {"k": 1}, {"k": 1}) is False
        assert evaluate_operator("eq", ["a"], ("a",)) is False

    @pytest.mark.unit
    def test_in_requires_list(self):
        assert evaluate_operator("in", "sm", ["sm", "md"]) is True
        assert evaluate_operator("in", True, ["true"]) is True
        assert evaluate_operator("in", "sm", "sm") is False

    @pytest.mark.unit
    def test_nin(self):
        assert evaluate_operator("nin", "lg", ["sm", "md"]) is True
        assert evaluate_operator("nin", "sm", ["sm", "md"]) is False
        assert evaluate_operator("nin", "sm", "md") is False

    @pytest.mark.unit
    def test_numeric_operators(self):
        assert evaluate_operator("gt", 5, 3) is True
        assert evaluate_operator("lt", 5, 3) is False
        assert evaluate_operator("gte", 3, 3) is True
        assert evaluate_operator("lte", 2.5, 3) is True

    @pytest.mark.unit
    def test_numeric_operators_fail_closed(self):
        assert evaluate_operator("gt", "5", 3) is False
        assert evaluate_operator("gt", 5, "3") is False
        assert evaluate_operator("gt", True, 0) is False
        assert evaluate_operator("lt", None, 3) is False

    @pytest.mark.unit
    def test_unknown_operator(self):
        assert evaluate_operator("between", 1, [0, 2]) is False


class TestFormatCondition:
    """Tests for condition rendering."""

    @pytest.mark.unit
    def test_equals(self):
        assert format_condition(_cond({"importance": "ghost"})) == 'importance="ghost"'

    @pytest.mark.unit
    def test_compound(self):
        cond = _cond({"a": "1", "size": ["sm", "md"], "n": {"op": "gt", "value": 2}})
        assert format_condition(cond) == 'a="1" and size is [sm, md] and n gt 2'

    @pytest.mark.unit
    def test_describe_constraint(self):
        c = when({"importance": "primary"}).require({"size": ["md", "lg"]})
        assert (
            describe_constraint(c)
            == 'When importance="primary": size must be one of [md, lg]'
        )

    @pytest.mark.unit
    def test_describe_uses_message(self):
        c = when({"importance": "ghost"}).forbid(["state"], "Ghosts have no state")
        assert describe_constraint(c) == "Ghosts have no state"


# =============================================================================
# Constraint Validation
# =============================================================================


class TestValidateConstraints:
    """Tests for validate_constraints."""

    @pytest.mark.unit
    def test_forbidden_prop_scenario(self, ghost_schema):
        issues = validate_constraints(
            ghost_schema, _usage({"importance": "ghost", "state": "disabled"})
        )
        assert len(issues) == 1
        assert issues[0].code == IssueCode.CONSTRAINT_FORBIDDEN_PROP
        assert issues[0].severity == Severity.ERROR
        assert issues[0].path == "Button"
        assert issues[0].message == 'Property "state" is not allowed when importance="ghost"'
        assert issues[0].suggestion == 'Remove "state" or change importance="ghost"'

        other = validate_constraints(
            ghost_schema, _usage({"importance": "secondary", "state": "disabled"})
        )
        assert other == []

    @pytest.mark.unit
    def test_forbidden_prop_none_is_absent(self, ghost_schema):
        issues = validate_constraints(
            ghost_schema, _usage({"importance": "ghost", "state": None})
        )
        assert issues == []

    @pytest.mark.unit
    def test_required_value_scenario(self, button_schema):
        issues = validate_constraints(
            button_schema, _usage({"importance": "primary", "size": "sm"})
        )
        assert [i.code for i in issues] == [IssueCode.CONSTRAINT_INVALID_VALUE]
        assert issues[0].suggestion == 'Change to size="md"'
        assert 'got "sm"' in issues[0].message

        ok = validate_constraints(
            button_schema, _usage({"importance": "primary", "size": "lg"})
        )
        assert ok == []

    @pytest.mark.unit
    def test_missing_required(self, button_schema):
        issues = validate_constraints(button_schema, _usage({"importance": "primary"}))
        assert [i.code for i in issues] == [IssueCode.CONSTRAINT_MISSING_REQUIRED]
        assert issues[0].suggestion == 'Add size="md"'

    @pytest.mark.unit
    def test_custom_message_overrides_template(self):
        schema = define_component(
            name="Badge",
            properties={"tone": prop.enum(["info", "danger"]), "icon": prop.string()},
            constraints=[
                when({"tone": "danger"}).require({"icon": ["alert"]}, "Danger needs an icon")
            ],
        )
        issues = validate_constraints(schema, _usage({"tone": "danger"}, "Badge"))
        assert issues[0].message == "Danger needs an icon"

    @pytest.mark.unit
    def test_all_violations_reported(self):
        schema = define_component(
            name="Multi",
            properties={
                "mode": prop.enum(["a", "b"]),
                "x": prop.string(),
                "y": prop.string(),
                "z": prop.enum(["1", "2"]),
            },
            constraints=[
                when({"mode": "a"}).forbid(["x", "y"]),
                when({"mode": "a"}).require({"z": ["1"]}),
            ],
        )
        issues = validate_constraints(
            schema, _usage({"mode": "a", "x": "1", "y": "2", "z": "2"}, "Multi")
        )
        assert [i.code for i in issues] == [
            IssueCode.CONSTRAINT_FORBIDDEN_PROP,
            IssueCode.CONSTRAINT_FORBIDDEN_PROP,
            IssueCode.CONSTRAINT_INVALID_VALUE,
        ]

    @pytest.mark.unit
    def test_forbid_and_require_on_one_constraint(self):
        """A constraint carrying both actions checks both."""
        schema = define_component(
            name="Both",
            properties={"m": prop.enum(["a"]), "x": prop.string(), "y": prop.enum(["1"])},
            constraints=[Constraint(when={"m": "a"}, forbid=["x"], require={"y": ["1"]})],
        )
        issues = validate_constraints(schema, _usage({"m": "a", "x": "v"}, "Both"))
        assert [i.code for i in issues] == [
            IssueCode.CONSTRAINT_FORBIDDEN_PROP,
            IssueCode.CONSTRAINT_MISSING_REQUIRED,
        ]

    @pytest.mark.unit
    def test_location_path(self, ghost_schema):
        usage = PropertyUsage(
            component="Button",
            props={"importance": "ghost", "state": "default"},
            location=UsageLocation(file="App.tsx", line=4, column=9),
        )
        assert validate_constraints(ghost_schema, usage)[0].path == "App.tsx:4:9"

    @pytest.mark.unit
    def test_deterministic(self, button_schema):
        usage = _usage({"importance": "primary", "size": "sm", "state": "x"})
        first = validate_constraints(button_schema, usage)
        for _ in range(5):
            assert validate_constraints(button_schema, usage) == first

    @pytest.mark.unit
    def test_no_constraints_no_issues(self, card_schema):
        for props in ({}, {"elevation": "nope"}, {"anything": [1, 2]}):
            assert validate_constraints(card_schema, _usage(props, "Card")) == []

    @pytest.mark.unit
    def test_does_not_mutate_usage(self, button_schema):
        props = {"importance": "primary"}
        usage = _usage(props)
        validate_constraints(button_schema, usage)
        assert usage.props == {"importance": "primary"}


# =============================================================================
# Combination Generation
# =============================================================================


class TestGenerateValidCombinations:
    """Tests for the combination generator."""

    @pytest.mark.unit
    def test_full_cross_product(self):
        schema = define_component(
            name="Grid",
            properties={"a": prop.enum(["1", "2"]), "b": prop.enum(["x", "y", "z"])},
        )
        combos = generate_valid_combinations(schema)
        assert len(combos) == 6
        assert combos == [
            {"a": a, "b": b} for a in ("1", "2") for b in ("x", "y", "z")
        ]
        assert count_combinations(schema) == 6

    @pytest.mark.unit
    def test_exclusion(self, exclusion_schema):
        combos = generate_valid_combinations(exclusion_schema)
        assert combos == [{"a": "2", "b": "x"}, {"a": "2", "b": "y"}]

    @pytest.mark.unit
    def test_button_order(self, button_schema):
        combos = generate_valid_combinations(button_schema)
        assert len(combos) == 10
        assert combos[0] == {"importance": "primary", "size": "md", "state": "default"}
        assert all(c["importance"] != "ghost" for c in combos)
        assert count_combinations(button_schema) == 18

    @pytest.mark.unit
    def test_only_enum_properties(self, button_schema):
        for combo in generate_valid_combinations(button_schema):
            assert set(combo) == {"importance", "size", "state"}

    @pytest.mark.unit
    def test_empty_enum_yields_nothing(self):
        schema = define_component(
            name="Broken",
            properties={"a": prop.enum(["1"]), "b": prop.enum([])},
        )
        assert generate_valid_combinations(schema) == []

    @pytest.mark.unit
    def test_no_enum_properties(self):
        schema = define_component(name="Text", properties={"label": prop.string()})
        assert generate_valid_combinations(schema) == [{}]

    @pytest.mark.unit
    def test_results_are_independent_copies(self, exclusion_schema):
        combos = generate_valid_combinations(exclusion_schema)
        combos[0]["b"] = "changed"
        assert combos[1] == {"a": "2", "b": "y"}

    @pytest.mark.unit
    def test_iterator_matches_list(self, button_schema):
        assert list(iter_valid_combinations(button_schema)) == (
            generate_valid_combinations(button_schema)
        )

    @pytest.mark.unit
    def test_sound_and_complete(self, button_schema):
        """Exactly the returned assignments pass the constraint engine."""
        valid = generate_valid_combinations(button_schema)
        enum_props = button_schema.enum_properties()
        names = [name for name, _ in enum_props]
        for values in itertools.product(*(d.values for _, d in enum_props)):
            assignment = dict(zip(names, values))
            issues = validate_constraints(button_schema, _usage(assignment))
            if assignment in valid:
                assert issues == []
            else:
                assert len(issues) >= 1


class TestSuggestValidAlternatives:
    """Tests for the alternative suggester."""

    @pytest.fixture(autouse=True)
    def _default_limit(self, monkeypatch):
        monkeypatch.delenv("STYLEKIT_SUGGESTION_LIMIT", raising=False)

    @pytest.mark.unit
    def test_ranked_by_similarity(self, button_schema):
        suggestions = suggest_valid_alternatives(
            button_schema, {"importance": "primary", "size": "sm"}
        )
        assert suggestions == [
            {"importance": "primary", "size": "md", "state": "default"},
            {"importance": "primary", "size": "md", "state": "disabled"},
            {"importance": "primary", "size": "lg", "state": "default"},
        ]

    @pytest.mark.unit
    def test_ties_keep_generator_order(self, button_schema):
        suggestions = suggest_valid_alternatives(
            button_schema, {"importance": "ghost", "state": "disabled"}
        )
        assert suggestions == [
            {"importance": "primary", "size": "md", "state": "disabled"},
            {"importance": "primary", "size": "lg", "state": "disabled"},
            {"importance": "secondary", "size": "sm", "state": "disabled"},
        ]

    @pytest.mark.unit
    def test_at_most_three_and_all_valid(self, button_schema, monkeypatch):
        monkeypatch.delenv("STYLEKIT_SUGGESTION_LIMIT", raising=False)
        suggestions = suggest_valid_alternatives(button_schema, {"importance": "ghost"})
        assert 0 < len(suggestions) <= 3
        for combo in suggestions:
            assert validate_constraints(button_schema, _usage(combo)) == []

    @pytest.mark.unit
    def test_custom_limit(self, button_schema):
        assert len(suggest_valid_alternatives(button_schema, {}, limit=5)) == 5

    @pytest.mark.unit
    def test_empty_valid_set(self):
        schema = define_component(
            name="Never",
            properties={"a": prop.enum(["1"])},
            constraints=[when({"a": "1"}).require({"b": ["x"]})],
        )
        assert suggest_valid_alternatives(schema, {"a": "1"}) == []

    @pytest.mark.unit
    def test_limit_from_environment(self, button_schema, monkeypatch):
        monkeypatch.setenv("STYLEKIT_SUGGESTION_LIMIT", "4")
        assert len(suggest_valid_alternatives(button_schema, {})) == 4
        assert len(suggest_valid_alternatives(button_schema, {}, limit=3)) == 3


class TestIsSatisfiable:
    """Tests for is_satisfiable."""

    @pytest.mark.unit
    def test_forbidden_and_required_pairs(self, button_schema):
        assert is_satisfiable(button_schema, {"importance": "ghost"})
        assert not is_satisfiable(button_schema, {"importance": "ghost", "state": "default"})
        assert not is_satisfiable(button_schema, {"importance": "primary", "size": "sm"})
        assert is_satisfiable(button_schema, {"size": "sm"})

    @pytest.mark.unit
    def test_negated_trigger_needs_other_prop(self):
        schema = define_component(
            name="Badge",
            properties={
                "importance": prop.enum(["primary", "ghost"]),
                "tone": prop.enum(["a", "b"]),
            },
            constraints=[when({"importance": {"op": "neq", "value": "ghost"}}).forbid(["tone"])],
        )
        # Omitting importance fires the neq trigger; importance="ghost" clears it.
        assert is_satisfiable(schema, {"tone": "a"})
        assert not is_satisfiable(schema, {"tone": "a", "importance": "primary"})

    @pytest.mark.unit
    def test_free_form_prop_takes_constraint_literals(self):
        schema = define_component(
            name="Field",
            properties={
                "label": prop.string(required=True),
                "count": prop.number(),
                "state": prop.enum(["default", "disabled"]),
            },
            constraints=[
                when({"label": {"op": "neq", "value": "static"}}).forbid(["state"]),
                when({"count": {"op": "gte", "value": 3}}).require({"label": ["static"]}),
            ],
        )
        assert is_satisfiable(schema, {"state": "disabled"})
        assert is_satisfiable(schema, {"count": 5})
        assert not is_satisfiable(schema, {"count": 5, "label": "x"})

    @pytest.mark.unit
    def test_required_enum_must_be_assigned(self):
        schema = define_component(
            name="Pill",
            properties={
                "kind": prop.enum(["a", "b"], required=True),
                "dot": prop.boolean(),
            },
            constraints=[
                when({"kind": "a"}).forbid(["dot"]),
                when({"kind": "b"}).forbid(["dot"]),
            ],
        )
        assert is_satisfiable(schema, {})
        assert not is_satisfiable(schema, {"dot": True})
