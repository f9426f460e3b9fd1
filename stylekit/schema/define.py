"""Declarative helpers for building design system schemas.

Example:
    >>> from stylekit.schema import define_component, prop, when
    >>> button = define_component(
    ...     name="Button",
    ...     properties={
    ...         "importance": prop.enum(["primary", "secondary", "ghost"]),
    ...         "size": prop.enum(["sm", "md", "lg"], default="md"),
    ...     },
    ...     constraints=[when({"importance": "ghost"}).forbid(["size"])],
    ... )
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from stylekit.core.log import get_logger

from .lib import (
    BooleanProperty,
    ComponentSchema,
    Constraint,
    DesignSystemConfig,
    EnumProperty,
    NumberProperty,
    StringProperty,
)

logger = get_logger(__name__)


class SchemaDefinitionError(ValueError):
    """Raised when a definition is structurally malformed.

    Attributes:
        errors: The pydantic error list, one entry per offending field.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


def _format_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ())) or "<root>"
        parts.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def _build(model: type, kind: str, data: Any, fields: dict[str, Any]):
    if data is None:
        data = fields
    elif fields:
        raise TypeError(f"define_{kind} takes a mapping or keyword fields, not both")
    if isinstance(data, model):
        return data
    if not isinstance(data, dict):
        raise SchemaDefinitionError(
            f"{kind} definition must be a mapping, got {type(data).__name__}"
        )
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        name = data.get("name") or "<unnamed>"
        raise SchemaDefinitionError(
            f"Invalid {kind} '{name}': {_format_errors(errors)}", errors
        ) from e


def define_component(
    data: dict[str, Any] | None = None, **fields: Any
) -> ComponentSchema:
    """Validate a component definition into a `ComponentSchema`.

    Args:
        data: Definition mapping (JSON-shaped, camelCase aliases accepted).
        **fields: Alternatively, the definition as keyword arguments.

    Returns:
        Frozen ComponentSchema.

    Raises:
        SchemaDefinitionError: If the definition is not a mapping, has no
            name or no properties, or a field has the wrong shape.
    """
    schema = _build(ComponentSchema, "component", data, fields)
    logger.debug(
        f"Defined component {schema.name} ({len(schema.properties)} properties, "
        f"{len(schema.constraints)} constraints)"
    )
    return schema


def define_system(
    data: dict[str, Any] | None = None, **fields: Any
) -> DesignSystemConfig:
    """Validate a design system definition into a `DesignSystemConfig`.

    Components may be given as `ComponentSchema` instances or raw mappings.

    Raises:
        SchemaDefinitionError: If the definition is structurally malformed.
    """
    config = _build(DesignSystemConfig, "system", data, fields)
    logger.debug(
        f"Defined design system {config.name} with {len(config.components)} components"
    )
    return config


def load_design_system(path: Path | str) -> DesignSystemConfig:
    """Read a JSON design system document.

    Raises:
        FileNotFoundError: If the path does not exist.
        SchemaDefinitionError: If the file is not valid JSON or not a valid
            design system.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaDefinitionError(f"{path}: invalid JSON ({e})") from e
    logger.info(f"Loaded design system document {path}")
    return define_system(data)


def export_json_schema() -> dict[str, Any]:
    """Export the JSON Schema of a design system document."""
    return DesignSystemConfig.model_json_schema()


# =============================================================================
# Property Factories
# =============================================================================


class _PropertyFactory:
    """Factories for property definitions, exposed as `prop`."""

    @staticmethod
    def enum(
        values: list[str],
        required: bool = False,
        default: str | None = None,
        description: str | None = None,
    ) -> EnumProperty:
        return EnumProperty(
            values=list(values),
            required=required,
            default=default,
            description=description,
        )

    @staticmethod
    def boolean(
        required: bool = False,
        default: bool | None = None,
        description: str | None = None,
    ) -> BooleanProperty:
        return BooleanProperty(
            required=required, default=default, description=description
        )

    @staticmethod
    def string(
        required: bool = False,
        default: str | None = None,
        description: str | None = None,
    ) -> StringProperty:
        return StringProperty(
            required=required, default=default, description=description
        )

    @staticmethod
    def number(
        required: bool = False,
        default: float | None = None,
        min: float | None = None,
        max: float | None = None,
        description: str | None = None,
    ) -> NumberProperty:
        return NumberProperty(
            required=required,
            default=default,
            min=min,
            max=max,
            description=description,
        )


prop = _PropertyFactory()


# =============================================================================
# Constraint Builder
# =============================================================================


class ConstraintBuilder:
    """Pending constraint trigger; finish it with `forbid` or `require`."""

    def __init__(self, condition: dict[str, Any]):
        self.condition = dict(condition)

    def forbid(self, props: list[str], message: str | None = None) -> Constraint:
        return Constraint(when=self.condition, forbid=list(props), message=message)

    def require(
        self, requirements: dict[str, list[str]], message: str | None = None
    ) -> Constraint:
        return Constraint(
            when=self.condition,
            require={name: list(values) for name, values in requirements.items()},
            message=message,
        )


def when(condition: dict[str, Any]) -> ConstraintBuilder:
    """Start a constraint triggered by `condition`.

    Example:
        >>> when({"importance": "primary"}).require({"size": ["md", "lg"]})
    """
    return ConstraintBuilder(condition)


__all__ = [
    "SchemaDefinitionError",
    "define_component",
    "define_system",
    "load_design_system",
    "export_json_schema",
    "prop",
    "when",
    "ConstraintBuilder",
]
