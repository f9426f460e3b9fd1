"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Shared component schemas and design systems
- Global test configuration
"""

from __future__ import annotations

import pytest
from dotenv import load_dotenv

from stylekit.schema import (
    ComponentSchema,
    DesignSystemConfig,
    define_component,
    define_system,
    prop,
    when,
)

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Component Schema Fixtures
# =============================================================================


@pytest.fixture
def button_schema() -> ComponentSchema:
    """Button with a ghost/state exclusion and a primary/size requirement.

    Enum space is 3 x 3 x 2 = 18 assignments, 10 of which are valid:
    ghost forbids `state`, and primary requires `size` in (md, lg).
    """
    return define_component(
        name="Button",
        description="Clickable action trigger",
        properties={
            "importance": prop.enum(["primary", "secondary", "ghost"], required=True),
            "size": prop.enum(["sm", "md", "lg"], default="md"),
            "state": prop.enum(["default", "disabled"]),
            "fullWidth": prop.boolean(default=False),
            "label": prop.string(),
        },
        constraints=[
            when({"importance": "ghost"}).forbid(["state"]),
            when({"importance": "primary"}).require({"size": ["md", "lg"]}),
        ],
        mappings={
            "importance=primary": {
                "backgroundColor": "brand-primary",
                "color": "text-inverse",
            },
            "importance=ghost": {"backgroundColor": "transparent"},
            "size=sm": {"padding": "space-sm"},
            "size=lg": [
                {"condition": {"importance": "primary"}, "styles": {"fontWeight": "600"}}
            ],
            "importance=ghost,state=disabled": {"opacity": "0.5"},
        },
        base_styles={"borderRadius": "radius-md", "padding": "sm md"},
    )


@pytest.fixture
def card_schema() -> ComponentSchema:
    """Card with a single enum and no constraints."""
    return define_component(
        name="Card",
        description="Surface grouping related content",
        properties={
            "elevation": prop.enum(["flat", "raised"], default="flat"),
            "padding": prop.number(min=0, max=64),
        },
        mappings={"elevation=raised": {"boxShadow": "elevation-low"}},
    )


@pytest.fixture
def design_system(button_schema, card_schema) -> DesignSystemConfig:
    """Small design system with nested palettes and dark tokens."""
    return define_system(
        name="Acme",
        version="1.2.0",
        tokens={
            "color": {
                "brand-primary": "#2563eb",
                "text-inverse": "#ffffff",
                "surface": "#f8fafc",
                "gray": {"100": "#f3f4f6", "900": "#111827"},
            },
            "space": {"sm": "8px", "md": "16px"},
            "radius": {"md": "6px"},
            "elevation": {"low": "0 1px 2px rgba(0, 0, 0, 0.1)"},
        },
        dark_tokens={"color": {"surface": "#0f172a"}},
        components={"Button": button_schema, "Card": card_schema},
        settings={"cssPrefix": "acme"},
    )
