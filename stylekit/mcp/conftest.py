"""Pytest fixtures for MCP server tests.

This module provides:
- Server and client fixtures for protocol testing
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from fastmcp import Client, FastMCP

from .lib import ServerConfig
from .server import create_server


@pytest.fixture
def mcp_server(design_system) -> FastMCP:
    """Create MCP server instance bound to the shared design system."""
    return create_server(design_system, ServerConfig())


@pytest.fixture
async def mcp_client(mcp_server: FastMCP) -> AsyncGenerator[Client, None]:
    """Create connected MCP client for testing.

    Args:
        mcp_server: The MCP server instance.

    Yields:
        Connected Client instance for testing.
    """
    async with Client(mcp_server) as client:
        yield client
