"""
UniFi MCP Gateway Configuration

Handles environment variables and configuration for the UniFi Protect MCP server.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://192.168.1.1"
DEFAULT_HTTP_ADDR = ":8000"
DEFAULT_TIMEOUT = 30.0
TRANSPORTS = ("stdio", "http")


def load_dotenv(path: Optional[Path] = None) -> None:
    """Load KEY=VALUE pairs from a .env file without overriding the environment."""
    envp = path or Path.cwd() / '.env'
    if not envp.exists():
        return
    for line in envp.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        os.environ.setdefault(k, v)


def parse_http_addr(addr: str) -> Tuple[str, int]:
    """Split a listen address such as ``:8000`` or ``127.0.0.1:9000``."""
    host, sep, port = addr.strip().rpartition(':')
    if not sep:
        raise ConfigurationError(f"Invalid HTTP listen address: {addr!r}")
    try:
        port_number = int(port)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid HTTP listen port: {port!r}") from exc
    return host or '0.0.0.0', port_number


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings shared (read-only) by every remote API client."""

    base_url: str
    api_key: str
    skip_tls_verify: bool = False
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, 'base_url', self.base_url.rstrip('/'))


class GatewayConfig:
    """Configuration manager for the UniFi MCP gateway."""

    @property
    def base_url(self) -> str:
        """Get the UniFi console base URL."""
        return (os.getenv("UNIFI_BASE_URL") or DEFAULT_BASE_URL).rstrip('/')

    @property
    def api_key(self) -> str:
        """Get the UniFi integration API key."""
        return os.getenv("UNIFI_API_KEY", "")

    @property
    def skip_ssl_verify(self) -> bool:
        """Check if TLS certificate verification is disabled."""
        return os.getenv("UNIFI_SKIP_SSL_VERIFY", "").lower() == "true"

    @property
    def request_timeout(self) -> float:
        """Get the per-request timeout in seconds."""
        raw = os.getenv("UNIFI_REQUEST_TIMEOUT")
        if not raw:
            return DEFAULT_TIMEOUT
        try:
            return float(raw)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid UNIFI_REQUEST_TIMEOUT: {raw!r}") from exc

    @property
    def transport(self) -> str:
        """Get the agent-facing transport (stdio or http)."""
        return (os.getenv("MCP_TRANSPORT") or "stdio").lower()

    @property
    def http_addr(self) -> str:
        """Get the HTTP transport listen address."""
        return os.getenv("MCP_HTTP_ADDR") or DEFAULT_HTTP_ADDR

    @property
    def log_level(self) -> str:
        """Get the logging level."""
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def log_json(self) -> bool:
        """Whether log records are rendered as JSON lines."""
        return os.getenv("LOG_JSON", "").lower() in ("1", "true", "yes", "on")

    @property
    def log_file(self) -> Optional[str]:
        """Get the rotating log file path, from LOG_FILE or LOG_DIR/<server>.log."""
        if os.getenv("LOG_FILE"):
            return os.getenv("LOG_FILE")
        log_dir = os.getenv("LOG_DIR")
        return str(Path(log_dir) / "unifi-protect-mcp.log") if log_dir else None

    def client_config(self, *, require_api_key: bool = True) -> ClientConfig:
        """Build the shared client configuration.

        Raises:
            ConfigurationError: If the API key is missing and required.
        """
        api_key = self.api_key
        if require_api_key and not api_key:
            raise ConfigurationError("UNIFI_API_KEY environment variable is required")
        return ClientConfig(
            base_url=self.base_url,
            api_key=api_key,
            skip_tls_verify=self.skip_ssl_verify,
            timeout=self.request_timeout,
        )


# Global config instance
config = GatewayConfig()
