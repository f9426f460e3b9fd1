"""Design token tool for the MCP server."""

from typing import Any

from stylekit.schema import DesignSystemConfig


def get_design_tokens(
    config: DesignSystemConfig,
    category: str | None = None,
) -> dict[str, Any]:
    """Get design tokens, optionally for one category.

    Raises:
        ValueError: If `category` is not defined by the design system.
    """
    if category is None:
        return {
            "categories": list(config.tokens),
            "tokens": config.tokens,
            "darkTokens": config.dark_tokens,
        }
    if category not in config.tokens:
        available = ", ".join(config.tokens) or "none"
        raise ValueError(
            f'Token category "{category}" not found. Available categories: {available}'
        )
    return {
        "category": category,
        "tokens": config.tokens[category],
        "darkTokens": config.dark_tokens.get(category, {}),
    }


__all__ = ["get_design_tokens"]
