"""Unit tests for diagnostics."""

import pytest

from stylekit.diagnostics import (
    IssueCode,
    Severity,
    ValidationIssue,
    ValidationResult,
    usage_path,
)
from stylekit.schema import PropertyUsage, UsageLocation


def _issue(severity: Severity, code: IssueCode = IssueCode.UNKNOWN_PROPERTY):
    return ValidationIssue(severity=severity, code=code, message="m", path="Button")


class TestValidationIssue:
    """Tests for ValidationIssue."""

    @pytest.mark.unit
    def test_to_dict_omits_missing_suggestion(self):
        d = _issue(Severity.ERROR).to_dict()
        assert d == {
            "severity": "error",
            "code": "UNKNOWN_PROPERTY",
            "message": "m",
            "path": "Button",
        }

    @pytest.mark.unit
    def test_to_dict_with_suggestion(self):
        issue = ValidationIssue(
            Severity.ERROR,
            IssueCode.CONSTRAINT_MISSING_REQUIRED,
            "Property \"size\" is required",
            "Button",
            suggestion='Add size="md"',
        )
        assert issue.to_dict()["suggestion"] == 'Add size="md"'

    @pytest.mark.unit
    def test_format(self):
        issue = ValidationIssue(
            Severity.WARNING, IssueCode.INVALID_TOKEN_NAME, "bad", "tokens.color.X", "x"
        )
        assert issue.format() == "warning INVALID_TOKEN_NAME tokens.color.X: bad (x)"

    @pytest.mark.unit
    def test_issues_are_hashable_values(self):
        assert _issue(Severity.INFO) == _issue(Severity.INFO)
        assert len({_issue(Severity.INFO), _issue(Severity.INFO)}) == 1

    @pytest.mark.unit
    def test_codes_are_stable_strings(self):
        assert IssueCode.VALIDATOR_ERROR == "VALIDATOR_ERROR"
        assert all(code.value == code.name for code in IssueCode)


class TestValidationResult:
    """Tests for ValidationResult."""

    @pytest.mark.unit
    def test_empty_is_valid(self):
        assert ValidationResult.from_issues([]).valid is True

    @pytest.mark.unit
    def test_warnings_do_not_block(self):
        result = ValidationResult.from_issues([_issue(Severity.WARNING)])
        assert result.valid is True
        assert len(result.warnings) == 1
        assert result.errors == []

    @pytest.mark.unit
    def test_strict_blocks_warnings(self):
        result = ValidationResult.from_issues([_issue(Severity.WARNING)], strict=True)
        assert result.valid is False

    @pytest.mark.unit
    def test_info_never_blocks(self):
        result = ValidationResult.from_issues([_issue(Severity.INFO)], strict=True)
        assert result.valid is True

    @pytest.mark.unit
    def test_errors_block(self):
        result = ValidationResult.from_issues([_issue(Severity.ERROR)])
        assert result.valid is False
        assert result.codes() == [IssueCode.UNKNOWN_PROPERTY]

    @pytest.mark.unit
    def test_merge(self):
        ok = ValidationResult.from_issues([_issue(Severity.WARNING)])
        bad = ValidationResult.from_issues([_issue(Severity.ERROR)])
        merged = ok.merge(bad)
        assert merged.valid is False
        assert len(merged.issues) == 2

    @pytest.mark.unit
    def test_to_dict(self):
        result = ValidationResult.from_issues([_issue(Severity.ERROR)])
        assert result.to_dict()["valid"] is False
        assert result.to_dict()["issues"][0]["code"] == "UNKNOWN_PROPERTY"


class TestUsagePath:
    """Tests for usage_path."""

    @pytest.mark.unit
    def test_component_name(self):
        assert usage_path(PropertyUsage(component="Button")) == "Button"

    @pytest.mark.unit
    def test_property_suffix(self):
        assert usage_path(PropertyUsage(component="Button"), "size") == "Button.size"

    @pytest.mark.unit
    def test_location_wins(self):
        usage = PropertyUsage(
            component="Button",
            location=UsageLocation(file="src/App.tsx", line=12, column=5),
        )
        assert usage_path(usage, "size") == "src/App.tsx:12:5"
