"""
MCP server adapter

Exposes a sealed :class:`ToolRegistry` through the MCP ``tools/list`` and
``tools/call`` handlers. Both transports run the server built here.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.types import TextContent, Tool

from .errors import UnknownToolError
from .registry import ToolInvocation, ToolRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = 'unifi-protect-mcp'
SERVER_VERSION = '0.1.0'


class ToolCallFailed(Exception):
    """Carries a rendered error result; MCP reports it with ``isError`` set."""


def create_mcp_server(registry: ToolRegistry, name: str = SERVER_NAME) -> Server:
    """Create and configure the MCP server for ``registry``."""
    server = Server(name)

    @server.list_tools()
    async def handle_list_tools() -> List[Tool]:
        return [descriptor.to_mcp_tool() for descriptor in registry.list()]

    # Handlers own argument validation so their error messages reach the agent unchanged.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        logger.info(f"Calling tool: {name}")
        try:
            result = await registry.dispatch(ToolInvocation(name, arguments or {}))
        except UnknownToolError as exc:
            logger.warning(f"Unknown tool requested: {name}")
            raise ToolCallFailed(json.dumps(exc.to_payload(), indent=2, sort_keys=True)) from exc

        if result.is_error:
            logger.info(f"Tool {name} failed: {result.describe()}")
            raise ToolCallFailed(result.to_text())
        return [TextContent(type='text', text=result.to_text())]

    return server


def initialization_options(server: Server) -> InitializationOptions:
    return InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=server.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={},
        ),
    )


__all__ = ['SERVER_NAME', 'SERVER_VERSION', 'ToolCallFailed', 'create_mcp_server', 'initialization_options']
