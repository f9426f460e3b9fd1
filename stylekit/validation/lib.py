"""Schema and usage validation.

This module provides validation functions for design systems and component
call sites, reporting problems as issues instead of raising:
- `validate_schema`: structural checks over tokens and component schemas
- `validate_usage`: required props, value types and unknown props
- `check_usage`: `validate_usage` plus the conditional constraints
- `validate_all_usages`: batch pass over many files with optional hooks
"""

import re
from typing import Any

from pydantic import BaseModel, Field

from stylekit.config import is_strict
from stylekit.constraints import validate_constraints
from stylekit.core.log import get_logger
from stylekit.diagnostics import (
    IssueCode,
    Severity,
    ValidationIssue,
    ValidationResult,
    usage_path,
)
from stylekit.schema import (
    BooleanProperty,
    ComponentSchema,
    ConditionalMapping,
    DesignSystemConfig,
    EnumProperty,
    NumberProperty,
    PropertyDefinition,
    PropertyUsage,
    UsageLocation,
    apply_defaults,
    coerce_to_string,
    parse_mapping_key,
)

from .hooks import ValidatorRegistry

logger = get_logger(__name__)

TOKEN_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
PROPERTY_NAME_PATTERN = re.compile(r"^[a-z][a-zA-Z0-9]*$")

PASS_THROUGH_PROPS = frozenset({"children", "key", "ref"})
DYNAMIC_MARKER = "__dynamic"

# =============================================================================
# Schema Validation
# =============================================================================


def _error(code: IssueCode, message: str, path: str, suggestion: str | None = None):
    return ValidationIssue(Severity.ERROR, code, message, path, suggestion)


def _warning(code: IssueCode, message: str, path: str, suggestion: str | None = None):
    return ValidationIssue(Severity.WARNING, code, message, path, suggestion)


def _is_empty_token(value: Any) -> bool:
    if isinstance(value, dict):
        return not value
    return value is None or (isinstance(value, str) and not value.strip())


def _validate_tokens(tokens: dict[str, dict[str, Any]], root: str) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for category, group in tokens.items():
        for name, value in group.items():
            path = f"{root}.{category}.{name}"
            if not TOKEN_NAME_PATTERN.match(name):
                issues.append(
                    _warning(
                        IssueCode.INVALID_TOKEN_NAME,
                        f'Token name "{name}" in category "{category}" '
                        "should be kebab-case",
                        path,
                    )
                )
            if _is_empty_token(value):
                issues.append(
                    _error(
                        IssueCode.EMPTY_TOKEN_VALUE,
                        f'Token "{category}.{name}" has empty value',
                        path,
                    )
                )
            elif isinstance(value, dict):
                for shade, shade_value in value.items():
                    if _is_empty_token(shade_value):
                        issues.append(
                            _error(
                                IssueCode.EMPTY_TOKEN_VALUE,
                                f'Token "{category}.{name}.{shade}" has empty value',
                                f"{path}.{shade}",
                            )
                        )
    return issues


def _default_is_valid(definition: PropertyDefinition) -> bool:
    default = definition.default
    if default is None:
        return True
    if isinstance(definition, EnumProperty):
        return default in definition.values
    if isinstance(definition, NumberProperty):
        if definition.min is not None and default < definition.min:
            return False
        if definition.max is not None and default > definition.max:
            return False
    return True


def _validate_property(name: str, definition: PropertyDefinition, path: str):
    issues: list[ValidationIssue] = []

    if not PROPERTY_NAME_PATTERN.match(name):
        issues.append(
            _warning(
                IssueCode.INVALID_PROPERTY_NAME,
                f'Property name "{name}" should be camelCase',
                path,
            )
        )

    if isinstance(definition, EnumProperty) and not definition.values:
        issues.append(
            _error(IssueCode.EMPTY_ENUM, f'Enum property "{name}" has no values', path)
        )

    if isinstance(definition, NumberProperty):
        low, high = definition.min, definition.max
        if low is not None and high is not None and low > high:
            issues.append(
                _error(
                    IssueCode.INVALID_RANGE,
                    f"Min ({coerce_to_string(low)}) cannot be greater than "
                    f"max ({coerce_to_string(high)})",
                    path,
                )
            )

    if not _default_is_valid(definition):
        issues.append(
            _error(
                IssueCode.INVALID_DEFAULT,
                f'Default value "{coerce_to_string(definition.default)}" '
                f'is not valid for property "{name}"',
                f"{path}.default",
            )
        )

    return issues


def _validate_component(key: str, schema: ComponentSchema) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    root = f"components.{key}"

    if schema.name != key:
        issues.append(
            _warning(
                IssueCode.COMPONENT_NAME_MISMATCH,
                f'Component key "{key}" does not match schema name "{schema.name}"',
                root,
            )
        )

    for name, definition in schema.properties.items():
        issues.extend(_validate_property(name, definition, f"{root}.properties.{name}"))

    for index, constraint in enumerate(schema.constraints):
        path = f"{root}.constraints[{index}]"
        if constraint.forbid and constraint.require:
            issues.append(
                _warning(
                    IssueCode.MULTIPLE_CONSTRAINT_ACTIONS,
                    "Constraint declares both forbid and require; both are enforced",
                    path,
                    "Split it into one constraint per action",
                )
            )
        for role, names in (
            ("references", list(constraint.when)),
            ("forbids", constraint.forbid or []),
            ("requires", list(constraint.require or {})),
        ):
            for name in names:
                if name not in schema.properties:
                    issues.append(
                        _error(
                            IssueCode.UNKNOWN_CONSTRAINT_PROPERTY,
                            f'Constraint {role} unknown property "{name}"',
                            path,
                        )
                    )

    for mapping_key, mapping in schema.mappings.items():
        names = [name for name, _ in parse_mapping_key(mapping_key)]
        if isinstance(mapping, list):
            for conditional in mapping:
                if isinstance(conditional, ConditionalMapping):
                    names.extend(conditional.condition)
        for name in names:
            if name not in schema.properties:
                issues.append(
                    _error(
                        IssueCode.UNKNOWN_MAPPING_PROPERTY,
                        f'Mapping references unknown property "{name}"',
                        f"{root}.mappings.{mapping_key}",
                    )
                )

    return issues


def validate_schema(config: DesignSystemConfig) -> ValidationResult:
    """Check a design system for structural defects.

    Token names are advisory (warnings); empty enums, invalid defaults and
    references to undeclared properties are errors.

    Args:
        config: Design system to check.

    Returns:
        ValidationResult, valid iff no issue is an error.
    """
    issues = _validate_tokens(config.tokens, "tokens")
    issues.extend(_validate_tokens(config.dark_tokens, "darkTokens"))
    for key, schema in config.components.items():
        issues.extend(_validate_component(key, schema))

    result = ValidationResult.from_issues(issues)
    logger.debug(
        f"Schema {config.name}: {len(result.errors)} errors, "
        f"{len(result.warnings)} warnings"
    )
    return result


# =============================================================================
# Usage Validation
# =============================================================================


def is_pass_through(name: str) -> bool:
    """Props forwarded to the host element rather than declared by a schema."""
    return name in PASS_THROUGH_PROPS or name.startswith(("on", "data-"))


def _suggested_value(definition: PropertyDefinition) -> str:
    if isinstance(definition, EnumProperty):
        if definition.default is not None:
            return definition.default
        return definition.values[0] if definition.values else "..."
    if isinstance(definition, BooleanProperty):
        return coerce_to_string(True if definition.default is None else definition.default)
    return "..."


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def validate_property_value(
    name: str, definition: PropertyDefinition, value: Any, path: str
) -> list[ValidationIssue]:
    """Check one supplied value against its property definition."""
    if isinstance(value, dict) and DYNAMIC_MARKER in value:
        return [
            ValidationIssue(
                Severity.INFO,
                IssueCode.DYNAMIC_VALUE,
                f'Property "{name}" has dynamic value that cannot be statically validated',
                path,
            )
        ]

    issues: list[ValidationIssue] = []
    match definition:
        case EnumProperty(values=values):
            text = coerce_to_string(value)
            if text not in values:
                issues.append(
                    _error(
                        IssueCode.INVALID_ENUM_VALUE,
                        f'Invalid value "{text}" for property "{name}". '
                        f"Valid values: {', '.join(values)}",
                        path,
                        f"Use one of: {', '.join(values)}",
                    )
                )
        case BooleanProperty():
            if not isinstance(value, bool):
                issues.append(
                    _error(
                        IssueCode.TYPE_MISMATCH,
                        f'Property "{name}" must be a boolean, '
                        f"got {type(value).__name__}",
                        path,
                    )
                )
        case NumberProperty(min=low, max=high):
            number = _as_number(value)
            if number is None or number != number:
                issues.append(
                    _error(
                        IssueCode.TYPE_MISMATCH,
                        f'Property "{name}" must be a number, got {type(value).__name__}',
                        path,
                    )
                )
            else:
                if low is not None and number < low:
                    issues.append(
                        _error(
                            IssueCode.VALUE_OUT_OF_RANGE,
                            f'Property "{name}" must be >= {coerce_to_string(low)}, '
                            f"got {coerce_to_string(number)}",
                            path,
                        )
                    )
                if high is not None and number > high:
                    issues.append(
                        _error(
                            IssueCode.VALUE_OUT_OF_RANGE,
                            f'Property "{name}" must be <= {coerce_to_string(high)}, '
                            f"got {coerce_to_string(number)}",
                            path,
                        )
                    )
    return issues


def validate_usage(schema: ComponentSchema, usage: PropertyUsage) -> ValidationResult:
    """Check a call site's props against a schema, without constraints.

    Checks run in order: required props, supplied values, unknown props.
    A required prop with a default is satisfied when omitted, and a prop
    supplied as None counts as omitted.

    Args:
        schema: Component schema.
        usage: Call site to check.

    Returns:
        ValidationResult for the usage.
    """
    issues: list[ValidationIssue] = []
    supplied = {k: v for k, v in usage.props.items() if v is not None}

    for name, definition in schema.properties.items():
        if definition.required and name not in supplied and definition.default is None:
            issues.append(
                _error(
                    IssueCode.MISSING_REQUIRED_PROP,
                    f'Required property "{name}" is missing',
                    usage_path(usage),
                    f'Add {name}="{_suggested_value(definition)}"',
                )
            )

    for name, value in supplied.items():
        definition = schema.properties.get(name)
        if definition is not None:
            issues.extend(
                validate_property_value(name, definition, value, usage_path(usage, name))
            )

    for name in supplied:
        if name in schema.properties or is_pass_through(name):
            continue
        issues.append(
            _error(
                IssueCode.UNKNOWN_PROPERTY,
                f'Unknown property "{name}" on component "{schema.name}"',
                usage_path(usage),
                f"Valid properties: {', '.join(schema.properties)}",
            )
        )

    return ValidationResult.from_issues(issues)


def check_usage(
    schema: ComponentSchema,
    usage: PropertyUsage,
    fill_defaults: bool = False,
) -> ValidationResult:
    """Full call-site check: usage issues followed by constraint issues.

    Args:
        schema: Component schema.
        usage: Call site to check.
        fill_defaults: Apply property defaults before the constraint checks.
            Required-ness is always checked against the props as supplied.
    """
    issues = list(validate_usage(schema, usage).issues)
    constrained = usage
    if fill_defaults:
        constrained = usage.model_copy(
            update={"props": apply_defaults(schema, usage.props)}
        )
    issues.extend(validate_constraints(schema, constrained))
    return ValidationResult.from_issues(issues)


# =============================================================================
# Batch Validation
# =============================================================================


class UsageBatch(BaseModel):
    """Usages extracted from one source file."""

    file: str = Field(..., description="Source file the usages come from")
    usages: list[PropertyUsage] = Field(default_factory=list)


def _located(usage: PropertyUsage, file: str) -> PropertyUsage:
    if usage.location is not None:
        return usage
    return usage.model_copy(update={"location": UsageLocation(file=file)})


def validate_all_usages(
    config: DesignSystemConfig,
    batch: list[UsageBatch],
    strict: bool | None = None,
    hooks: ValidatorRegistry | None = None,
) -> ValidationResult:
    """Validate every usage of every file against a design system.

    Usages without a location are attributed to their file. Unknown
    components are reported once per usage; known ones go through
    `check_usage`. Registered hooks then run over all usages.

    Args:
        config: Design system providing the schemas.
        batch: Usages grouped by file.
        strict: Fail on warnings too. Defaults to the system's strict_mode
            setting or STYLEKIT_STRICT.
        hooks: Optional custom validator registry.

    Returns:
        Combined ValidationResult.
    """
    if strict is None:
        strict = config.settings.strict_mode or is_strict()

    issues: list[ValidationIssue] = []
    checked: list[PropertyUsage] = []
    for entry in batch:
        for usage in entry.usages:
            usage = _located(usage, entry.file)
            checked.append(usage)
            schema = config.get_component(usage.component)
            if schema is None:
                issues.append(
                    _error(
                        IssueCode.UNKNOWN_COMPONENT,
                        f'Unknown component "{usage.component}"',
                        usage_path(usage),
                        f"Known components: {', '.join(config.components)}",
                    )
                )
                continue
            issues.extend(check_usage(schema, usage).issues)

    if hooks is not None:
        issues.extend(hooks.execute(checked, config))

    result = ValidationResult.from_issues(issues, strict=strict)
    logger.info(
        f"Validated {len(checked)} usages in {len(batch)} files: "
        f"{len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    return result


__all__ = [
    "TOKEN_NAME_PATTERN",
    "PROPERTY_NAME_PATTERN",
    "PASS_THROUGH_PROPS",
    "UsageBatch",
    "validate_schema",
    "is_pass_through",
    "validate_property_value",
    "validate_usage",
    "check_usage",
    "validate_all_usages",
]
