"""Validation issues and results.

Issues are plain value objects: validators return them and never raise for
ordinary invalid input. Downstream tooling pattern-matches on `IssueCode`, so
the code values are a stable vocabulary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from stylekit.schema import PropertyUsage


class Severity(str, Enum):
    """How serious an issue is. Only errors make a result invalid."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCode(str, Enum):
    """Machine-readable issue codes."""

    # Schema defects
    EMPTY_ENUM = "EMPTY_ENUM"
    UNKNOWN_CONSTRAINT_PROPERTY = "UNKNOWN_CONSTRAINT_PROPERTY"
    INVALID_TOKEN_NAME = "INVALID_TOKEN_NAME"
    EMPTY_TOKEN_VALUE = "EMPTY_TOKEN_VALUE"
    COMPONENT_NAME_MISMATCH = "COMPONENT_NAME_MISMATCH"
    INVALID_PROPERTY_NAME = "INVALID_PROPERTY_NAME"
    INVALID_DEFAULT = "INVALID_DEFAULT"
    INVALID_RANGE = "INVALID_RANGE"
    UNKNOWN_MAPPING_PROPERTY = "UNKNOWN_MAPPING_PROPERTY"
    MULTIPLE_CONSTRAINT_ACTIONS = "MULTIPLE_CONSTRAINT_ACTIONS"

    # Usage defects
    MISSING_REQUIRED_PROP = "MISSING_REQUIRED_PROP"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    UNKNOWN_PROPERTY = "UNKNOWN_PROPERTY"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    DYNAMIC_VALUE = "DYNAMIC_VALUE"
    UNKNOWN_COMPONENT = "UNKNOWN_COMPONENT"

    # Conditional constraint violations
    CONSTRAINT_FORBIDDEN_PROP = "CONSTRAINT_FORBIDDEN_PROP"
    CONSTRAINT_MISSING_REQUIRED = "CONSTRAINT_MISSING_REQUIRED"
    CONSTRAINT_INVALID_VALUE = "CONSTRAINT_INVALID_VALUE"

    # Custom validator hooks
    VALIDATOR_ERROR = "VALIDATOR_ERROR"


@dataclass(frozen=True)
class ValidationIssue:
    """A single finding from a schema or usage check.

    Attributes:
        severity: Error, warning or info.
        code: Stable machine-readable code.
        message: Human-readable description.
        path: Component name, `Component.prop`, or `file:line:column`.
        suggestion: Optional fix hint.
    """

    severity: Severity
    code: IssueCode
    message: str
    path: str
    suggestion: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data: dict[str, Any] = {
            "severity": self.severity.value,
            "code": self.code.value,
            "message": self.message,
            "path": self.path,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data

    def format(self) -> str:
        """One-line rendering, e.g. `error CODE path: message (hint)`."""
        line = f"{self.severity.value} {self.code.value} {self.path}: {self.message}"
        if self.suggestion:
            line += f" ({self.suggestion})"
        return line


@dataclass
class ValidationResult:
    """Outcome of a validation pass.

    Attributes:
        valid: False when any issue blocks validity.
        issues: All findings, in the order they were produced.
    """

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)

    @classmethod
    def from_issues(
        cls, issues: list[ValidationIssue], strict: bool = False
    ) -> "ValidationResult":
        """Build a result; strict mode also fails on warnings."""
        blocking = {Severity.ERROR, Severity.WARNING} if strict else {Severity.ERROR}
        valid = not any(issue.severity in blocking for issue in issues)
        return cls(valid=valid, issues=list(issues))

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    def codes(self) -> list[IssueCode]:
        return [i.code for i in self.issues]

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Combine two results; valid only if both are."""
        return ValidationResult(
            valid=self.valid and other.valid,
            issues=[*self.issues, *other.issues],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "issues": [issue.to_dict() for issue in self.issues],
        }


def usage_path(usage: PropertyUsage, prop: str | None = None) -> str:
    """Locate an issue for a usage.

    The call-site location wins when known; otherwise the component name,
    suffixed with `.prop` for property-level issues.
    """
    if usage.location is not None:
        return usage.location.format()
    if prop is not None:
        return f"{usage.component}.{prop}"
    return usage.component


__all__ = [
    "Severity",
    "IssueCode",
    "ValidationIssue",
    "ValidationResult",
    "usage_path",
]
