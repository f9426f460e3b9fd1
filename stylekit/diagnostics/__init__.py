"""Diagnostics - issue codes, issues and validation results."""

from .lib import IssueCode, Severity, ValidationIssue, ValidationResult, usage_path

__all__ = [
    "IssueCode",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "usage_path",
]
