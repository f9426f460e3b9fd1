"""Manifest and usage guide tools for the MCP server."""

from typing import Any

from stylekit.manifest import generate_manifest, generate_usage_guide
from stylekit.schema import DesignSystemConfig


def get_manifest(config: DesignSystemConfig) -> dict[str, Any]:
    """Machine-readable manifest in its camelCase wire form."""
    return generate_manifest(config).model_dump(mode="json", by_alias=True)


def get_usage_guide(config: DesignSystemConfig, component: str | None = None) -> str:
    """Markdown rules for writing call sites, optionally for one component."""
    return generate_usage_guide(generate_manifest(config), component=component)


__all__ = ["get_manifest", "get_usage_guide"]
