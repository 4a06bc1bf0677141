"""Tool catalog and invocation dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

import mcp.types as types

from .arguments import ToolArguments
from .errors import DuplicateToolError, RegistryError, UnknownToolError
from .results import ToolResult

logger = logging.getLogger(__name__)

Handler = Callable[[ToolArguments], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: Dict[str, Any]

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(name=self.name, description=self.description, inputSchema=self.input_schema)

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'description': self.description, 'inputSchema': self.input_schema}


@dataclass(frozen=True)
class ToolInvocation:
    name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)


class ToolRegistry:
    """Ordered tool catalog, filled once at startup and then sealed.

    After :meth:`seal` the catalog is read-only and invocations may be
    dispatched concurrently.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, ToolDescriptor] = {}
        self._handlers: Dict[str, Handler] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def register(self, descriptor: ToolDescriptor, handler: Handler) -> None:
        if self._sealed:
            raise RegistryError(f"Cannot register {descriptor.name}: registry is sealed")
        if descriptor.name in self._tools:
            raise DuplicateToolError(descriptor.name)
        self._tools[descriptor.name] = descriptor
        self._handlers[descriptor.name] = handler

    def seal(self) -> 'ToolRegistry':
        self._sealed = True
        logger.info(f"Registered {len(self._tools)} tools")
        return self

    def list(self) -> List[ToolDescriptor]:
        return list(self._tools.values())

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    async def dispatch(self, invocation: ToolInvocation) -> ToolResult:
        """Route an invocation to its handler and return the handler's result as-is."""
        if not self._sealed:
            raise RegistryError("Registry must be sealed before dispatching")
        handler = self._handlers.get(invocation.name)
        if handler is None:
            raise UnknownToolError(invocation.name)
        return await handler(ToolArguments(invocation.arguments))


__all__ = ['Handler', 'ToolDescriptor', 'ToolInvocation', 'ToolRegistry']
