"""
Agent-facing transports.

- ``stdio``: MCP over stdin/stdout until the channel closes or the task is cancelled.
- ``http``: MCP streamable HTTP on ``/mcp`` (stateless, JSON responses) plus ``GET /health``.
"""

import contextlib
import logging
from typing import AsyncIterator

import uvicorn
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from .registry import ToolRegistry
from .server import initialization_options

logger = logging.getLogger(__name__)


class StdioTransport:
    name = 'stdio'

    def __init__(self, server: Server) -> None:
        self.server = server

    async def run(self) -> None:
        logger.info("Serving MCP over stdio")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(read_stream, write_stream, initialization_options(self.server))
        logger.info("stdio channel closed")


class _MCPEndpoint:
    """ASGI endpoint handing ``/mcp`` requests to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


class StreamableHTTPTransport:
    name = 'http'

    def __init__(self, server: Server, registry: ToolRegistry, host: str = '0.0.0.0', port: int = 8000,
                 log_level: str = 'info') -> None:
        self.server = server
        self.registry = registry
        self.host = host
        self.port = port
        self.log_level = log_level
        self.session_manager = StreamableHTTPSessionManager(app=server, json_response=True, stateless=True)
        self.app = self.build_app()

    async def health(self, request: Request) -> JSONResponse:
        return JSONResponse({'status': 'healthy', 'tools': len(self.registry)})

    def build_app(self) -> Starlette:
        @contextlib.asynccontextmanager
        async def lifespan(app: Starlette) -> AsyncIterator[None]:
            async with self.session_manager.run():
                yield

        return Starlette(
            routes=[
                Route('/mcp', endpoint=_MCPEndpoint(self.session_manager), methods=['GET', 'POST', 'DELETE']),
                Route('/health', endpoint=self.health, methods=['GET']),
            ],
            lifespan=lifespan,
        )

    async def run(self) -> None:
        logger.info(f"Serving MCP over HTTP on http://{self.host}:{self.port}/mcp")
        level = self.log_level.lower()
        if level not in uvicorn.config.LOG_LEVELS:
            level = 'info'
        config_obj = uvicorn.Config(self.app, host=self.host, port=self.port, log_level=level)
        server = uvicorn.Server(config_obj)
        await server.serve()


__all__ = ['StdioTransport', 'StreamableHTTPTransport']
