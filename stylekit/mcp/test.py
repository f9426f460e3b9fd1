"""Unit tests for MCP server module.

Tests cover:
- Server configuration
- Server instance creation
- CLI entry point
- Tool calls over the MCP client protocol
"""

import json
from pathlib import Path

import pytest
from fastmcp.exceptions import ToolError

import stylekit

from .lib import ServerConfig, TransportType, get_server_version
from .server import create_server, load_server_config, main

EXPECTED_TOOLS = {
    "ping",
    "get_component_schema",
    "validate_component_usage",
    "get_valid_prop_combinations",
    "suggest_alternatives",
    "get_design_tokens",
    "get_manifest",
    "get_usage_guide",
}

# =============================================================================
# Configuration Tests
# =============================================================================


class TestServerConfig:
    """Tests for ServerConfig dataclass."""

    @pytest.mark.unit
    def test_default_config(self):
        """Default config has expected values."""
        config = ServerConfig()

        assert config.name == "stylekit"
        assert config.transport == TransportType.STDIO
        assert config.host == "0.0.0.0"
        assert config.port == 18080
        assert config.path == "/mcp"
        assert config.config_path is None

    @pytest.mark.unit
    def test_from_env(self, monkeypatch):
        """from_env reads host, port and design system path."""
        monkeypatch.setenv("MCP_PORT", "9100")
        monkeypatch.setenv("STYLEKIT_CONFIG_PATH", "systems/acme.json")

        config = ServerConfig.from_env()

        assert config.port == 9100
        assert config.config_path == Path("systems/acme.json")

    @pytest.mark.unit
    def test_from_env_overrides(self, monkeypatch):
        """Explicit arguments win over the environment."""
        monkeypatch.setenv("STYLEKIT_CONFIG_PATH", "systems/acme.json")

        config = ServerConfig.from_env(
            transport=TransportType.HTTP, config_path="other.json"
        )

        assert config.transport == TransportType.HTTP
        assert config.config_path == Path("other.json")

    @pytest.mark.unit
    def test_transport_from_string(self):
        """Transport can be created from string."""
        assert TransportType("stdio") == TransportType.STDIO
        assert TransportType("http") == TransportType.HTTP
        assert TransportType("sse") == TransportType.SSE

    @pytest.mark.unit
    def test_endpoint(self):
        """Network transports expose a URL, stdio does not."""
        assert ServerConfig().endpoint is None
        assert (
            ServerConfig(transport=TransportType.HTTP, host="127.0.0.1", port=9000).endpoint
            == "http://127.0.0.1:9000/mcp"
        )
        assert ServerConfig(transport=TransportType.SSE, port=9000).endpoint == (
            "http://0.0.0.0:9000/sse"
        )

    @pytest.mark.unit
    def test_server_version(self):
        """Server reports the package version."""
        assert get_server_version() == stylekit.__version__


# =============================================================================
# Server Instance Tests
# =============================================================================


class TestServerInstance:
    """Tests for FastMCP server creation."""

    @pytest.mark.unit
    def test_server_has_name(self, mcp_server):
        assert mcp_server.name == "stylekit"

    @pytest.mark.unit
    def test_servers_are_independent(self, design_system):
        """Each call builds a fresh server bound to its own design system."""
        first = create_server(design_system, ServerConfig())
        second = create_server(design_system, ServerConfig(name="other"))

        assert first is not second
        assert second.name == "other"

    @pytest.mark.unit
    def test_load_server_config(self, design_system, tmp_path):
        path = tmp_path / "system.json"
        path.write_text(json.dumps(design_system.model_dump(mode="json", by_alias=True)))

        loaded = load_server_config(path)

        assert loaded.name == "Acme"
        assert list(loaded.components) == ["Button", "Card"]


# =============================================================================
# CLI Tests
# =============================================================================


class TestMain:
    """Tests for the CLI entry point (startup failures only)."""

    @pytest.mark.unit
    def test_missing_config_argument(self, monkeypatch):
        monkeypatch.delenv("STYLEKIT_CONFIG_PATH", raising=False)

        assert main([]) == 2

    @pytest.mark.unit
    def test_unreadable_config(self, tmp_path):
        assert main(["--config", str(tmp_path / "missing.json")]) == 1

    @pytest.mark.unit
    def test_invalid_config(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        assert main(["--config", str(path)]) == 1


# =============================================================================
# MCP Protocol Integration Tests (require async)
# =============================================================================


def _payload(result):
    return json.loads(result.content[0].text)


@pytest.mark.mcp
class TestMCPProtocol:
    """Integration tests using MCP client protocol."""

    @pytest.mark.asyncio
    async def test_client_can_list_tools(self, mcp_client):
        tools = await mcp_client.list_tools()

        assert {t.name for t in tools} == EXPECTED_TOOLS

    @pytest.mark.asyncio
    async def test_ping(self, mcp_client):
        result = await mcp_client.call_tool("ping", {})

        data = _payload(result)
        assert data["status"] == "ok"
        assert data["design_system"] == "Acme"
        assert data["components"] == ["Button", "Card"]

    @pytest.mark.asyncio
    async def test_validate_component_usage(self, mcp_client):
        result = await mcp_client.call_tool(
            "validate_component_usage",
            {"component": "Button", "props": {"importance": "ghost", "state": "disabled"}},
        )

        data = _payload(result)
        assert data["valid"] is False
        assert data["issues"][0]["code"] == "CONSTRAINT_FORBIDDEN_PROP"

    @pytest.mark.asyncio
    async def test_unknown_component_is_tool_error(self, mcp_client):
        with pytest.raises(ToolError, match="not found"):
            await mcp_client.call_tool("get_component_schema", {"component": "Modal"})

    @pytest.mark.asyncio
    async def test_compiled_css_resource(self, mcp_client):
        contents = await mcp_client.read_resource("styles://compiled.css")

        assert ".acme-button" in contents[0].text
