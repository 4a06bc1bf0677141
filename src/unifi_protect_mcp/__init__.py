"""UniFi Protect / UniFi Network MCP gateway."""

__version__ = '0.1.0'
