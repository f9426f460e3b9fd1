"""Settings for the stylekit MCP server.

Holds the transport choice, network address and the design system document
the server is bound to.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from stylekit.config import EnvVar, get_config_path, get_environment

SERVER_NAME = "stylekit"


class TransportType(str, Enum):
    """How the server talks to its client."""

    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"


@dataclass
class ServerConfig:
    """Runtime settings for one server instance.

    Attributes:
        name: Name reported to MCP clients.
        transport: stdio for desktop clients, http or sse for network clients.
        host: Bind address (network transports only).
        port: Bind port (network transports only).
        path: Mount path of the HTTP endpoint.
        config_path: Design system document the tools answer from.
    """

    name: str = SERVER_NAME
    transport: TransportType = TransportType.STDIO
    host: str = "0.0.0.0"
    port: int = 18080
    path: str = "/mcp"
    config_path: Path | None = None

    @property
    def endpoint(self) -> str | None:
        """Client-facing URL, or None for stdio."""
        match self.transport:
            case TransportType.HTTP:
                return f"http://{self.host}:{self.port}{self.path}"
            case TransportType.SSE:
                return f"http://{self.host}:{self.port}/sse"
        return None

    @classmethod
    def from_env(
        cls,
        transport: TransportType | None = None,
        config_path: Path | str | None = None,
    ) -> "ServerConfig":
        """Build settings from MCP_HOST, MCP_PORT and STYLEKIT_CONFIG_PATH.

        Explicit arguments take precedence over the environment.
        """
        return cls(
            transport=transport or TransportType.STDIO,
            host=get_environment(EnvVar.MCP_HOST),
            port=get_environment(EnvVar.MCP_PORT),
            config_path=get_config_path(config_path),
        )


def get_server_version() -> str:
    """Version reported by the server (the package version)."""
    from stylekit import __version__

    return __version__


__all__ = [
    "SERVER_NAME",
    "TransportType",
    "ServerConfig",
    "get_server_version",
]
