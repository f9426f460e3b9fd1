"""FastMCP server for stylekit.

This module provides the MCP server that exposes a design system to code
assistants. Tools answer the questions an assistant has while writing a call
site:

    1. get_component_schema: which props exist and how they constrain each other
    2. validate_component_usage: whether a call site is valid
    3. get_valid_prop_combinations / suggest_alternatives: what to use instead

Usage:
    # STDIO mode (for desktop clients)
    python -m stylekit.mcp.server --config design-system.json

    # HTTP mode
    python -m stylekit.mcp.server --config design-system.json --transport http
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP

from stylekit.config import get_log_level
from stylekit.core.log import setup_logging
from stylekit.css import compile_system
from stylekit.schema import (
    DesignSystemConfig,
    SchemaDefinitionError,
    export_json_schema,
    load_design_system,
)
from stylekit.typegen import generate_system_types
from stylekit.validation import validate_schema

from . import tools
from .lib import SERVER_NAME, ServerConfig, TransportType, get_server_version

logger = logging.getLogger(__name__)

# =============================================================================
# Server Instructions (LLM Guidance)
# =============================================================================

SERVER_INSTRUCTIONS = """\
## stylekit Design System Server

Answers questions about a schema-driven design system so that generated
call sites only use props, values and tokens the system defines.

### Quick Start
1. `ping()` -> check which design system is served
2. `get_component_schema("Button")` -> props and constraints
3. `validate_component_usage("Button", {...})` -> check before finishing

### Tools
- `get_valid_prop_combinations(component)` - every valid enum combination
- `suggest_alternatives(component, props)` - closest valid combinations
- `get_design_tokens(category)` - token names and values
- `get_manifest()` - machine-readable summary of the whole system
- `get_usage_guide(component)` - Markdown rules for writing call sites
"""


# =============================================================================
# Server Factory
# =============================================================================


def create_server(
    config: DesignSystemConfig,
    server_config: ServerConfig | None = None,
) -> FastMCP:
    """Create an MCP server bound to one design system.

    Args:
        config: Design system served by every tool.
        server_config: Server settings (default: from environment).

    Returns:
        Configured FastMCP server instance.
    """
    server_config = server_config or ServerConfig.from_env()
    mcp = FastMCP(name=server_config.name, instructions=SERVER_INSTRUCTIONS)

    @mcp.tool
    def ping() -> dict[str, Any]:
        """Health check.

        Returns:
            Server version and the served design system's name, version and
            component names.
        """
        return {
            "status": "ok",
            "version": get_server_version(),
            "design_system": config.name,
            "design_system_version": config.version,
            "components": list(config.components),
        }

    @mcp.tool
    def get_component_schema(component: str) -> dict[str, Any]:
        """Get the schema definition of a component.

        Args:
            component: Component name (e.g. Button, Card).
        """
        return tools.get_component_schema(config, component)

    @mcp.tool
    def validate_component_usage(component: str, props: dict[str, Any]) -> dict[str, Any]:
        """Validate the props passed to a component.

        Args:
            component: Component name.
            props: Props at the call site, e.g. {"importance": "primary"}.

        Returns:
            valid flag, issues, and suggestions when the usage is invalid.
        """
        return tools.validate_component_usage(config, component, props)

    @mcp.tool
    def get_valid_prop_combinations(
        component: str,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """List every valid enum combination of a component.

        Args:
            component: Component name.
            limit: Return at most this many combinations.
        """
        return tools.get_valid_prop_combinations(config, component, limit=limit)

    @mcp.tool
    def suggest_alternatives(
        component: str,
        props: dict[str, Any],
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Suggest valid combinations closest to an invalid prop set.

        Args:
            component: Component name.
            props: Props the caller tried to use.
            limit: Maximum number of suggestions (default 3).
        """
        return tools.suggest_alternatives(config, component, props, limit=limit)

    @mcp.tool
    def get_design_tokens(category: str | None = None) -> dict[str, Any]:
        """Get design tokens (colors, spacing, etc.).

        Args:
            category: Token category; all categories when omitted.
        """
        return tools.get_design_tokens(config, category)

    @mcp.tool
    def get_manifest() -> dict[str, Any]:
        """Get the machine-readable manifest of the design system."""
        return tools.get_manifest(config)

    @mcp.tool
    def get_usage_guide(component: str | None = None) -> str:
        """Get Markdown rules for writing call sites.

        Args:
            component: Focus on one component (optional).
        """
        return tools.get_usage_guide(config, component)

    @mcp.resource("schema://design-system")
    def design_system_json_schema() -> str:
        """JSON Schema of design system documents."""
        return json.dumps(export_json_schema(), indent=2)

    @mcp.resource("styles://compiled.css")
    def compiled_css() -> str:
        """Stylesheet compiled from the served design system."""
        return compile_system(config)

    @mcp.resource("types://components.d.ts")
    def component_types() -> str:
        """TypeScript declarations for the served design system."""
        return generate_system_types(config)

    return mcp


def load_server_config(path: Path | str) -> DesignSystemConfig:
    """Load a design system and log any schema issues it carries."""
    config = load_design_system(path)
    result = validate_schema(config)
    for issue in result.issues:
        if issue.is_error:
            logger.error(issue.format())
        else:
            logger.warning(issue.format())
    return config


# =============================================================================
# Server Runner
# =============================================================================


def run_server(
    config: DesignSystemConfig,
    transport: TransportType = TransportType.STDIO,
    host: str = "0.0.0.0",
    port: int = 18080,
) -> None:
    """Run the MCP server with specified transport.

    Args:
        config: Design system to serve.
        transport: Transport type (stdio, http, sse).
        host: Bind address for HTTP/SSE.
        port: Port for HTTP/SSE.
    """
    server_config = ServerConfig(transport=transport, host=host, port=port)
    mcp = create_server(config, server_config)

    logger.info(f"Starting {SERVER_NAME} server v{get_server_version()}")
    logger.info(f"Serving {config.name} with {len(config.components)} components")
    logger.info(f"Transport: {transport.value}")

    match transport:
        case TransportType.STDIO:
            mcp.run()
        case TransportType.HTTP:
            logger.info(f"Listening on {server_config.endpoint}")
            mcp.run(transport="http", host=host, port=port, path=server_config.path)
        case TransportType.SSE:
            logger.info(f"Listening on {server_config.endpoint}")
            mcp.run(transport="sse", host=host, port=port)
        case _:
            raise ValueError(f"Unknown transport: {transport}")


# =============================================================================
# CLI Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stylekit-mcp",
        description="MCP server exposing a design system to code assistants",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Design system JSON document (default: STYLEKIT_CONFIG_PATH)",
    )
    parser.add_argument(
        "--transport",
        "-t",
        type=str,
        choices=[t.value for t in TransportType],
        default="stdio",
        help="Transport type (default: stdio)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Bind address for HTTP/SSE (default: MCP_HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port for HTTP/SSE (default: MCP_PORT or 18080)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for the MCP server.

    Args:
        argv: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 for success).
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    level = get_log_level(args.verbose)
    setup_logging(level, stream=sys.stderr)

    server_config = ServerConfig.from_env(
        transport=TransportType(args.transport),
        config_path=args.config,
    )
    if server_config.config_path is None:
        logger.error("No design system given: pass --config or set STYLEKIT_CONFIG_PATH")
        return 2

    try:
        config = load_server_config(server_config.config_path)
    except (OSError, SchemaDefinitionError) as e:
        logger.error(f"Failed to load design system: {e}")
        return 1

    try:
        run_server(
            config,
            transport=server_config.transport,
            host=args.host or server_config.host,
            port=args.port or server_config.port,
        )
        return 0
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.error(f"Server error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
