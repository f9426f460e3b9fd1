"""MCP (Model Context Protocol) server for stylekit.

This module provides the MCP server that exposes a design system's schemas,
validation and suggestions to code assistants.

Example:
    # Start server in STDIO mode
    >>> from stylekit.mcp import run_server
    >>> run_server(load_design_system("design-system.json"))

    # Create server for testing
    >>> from stylekit.mcp import create_server
    >>> server = create_server(system)

Available Tools:
    - ping: Health check
    - get_component_schema: Component definition
    - validate_component_usage: Check one call site
    - get_valid_prop_combinations: Valid enum combinations
    - suggest_alternatives: Closest valid combinations
    - get_design_tokens: Token registry
    - get_manifest: Machine-readable manifest
    - get_usage_guide: Markdown rules for call sites
"""

from .lib import SERVER_NAME, ServerConfig, TransportType, get_server_version
from .server import create_server, load_server_config, main, run_server

__all__ = [
    # Server
    "create_server",
    "load_server_config",
    "run_server",
    "main",
    # Configuration
    "SERVER_NAME",
    "ServerConfig",
    "TransportType",
    # Utilities
    "get_server_version",
]
