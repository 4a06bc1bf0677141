"""
Handler protocol shared by every tool.

Each handler extracts its arguments, checks the client's credentials and
issues exactly one client call. The :func:`tool_handler` decorator turns
every failure into a :class:`ToolError`, so a handler never raises.
"""

import functools
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

from ..arguments import ToolArguments
from ..errors import AuthenticationError, RemoteError, ValidationFailure
from ..models import RemoteResource
from ..registry import Handler, ToolDescriptor, ToolRegistry
from ..results import ToolError, ToolResult, ToolSuccess

logger = logging.getLogger(__name__)

DEFAULT_SITE = 'default'
DEFAULT_LIMIT = 50
DEFAULT_OFFSET = 0


def tool_handler(name: str, action: str) -> Callable[[Callable[[ToolArguments], Awaitable[Any]]], Handler]:
    """Wrap a tool coroutine with the uniform error mapping.

    The wrapped coroutine may return a :class:`ToolResult` or a bare payload,
    which is wrapped as :class:`ToolSuccess`.
    """

    def decorator(fn: Callable[[ToolArguments], Awaitable[Any]]) -> Handler:
        @functools.wraps(fn)
        async def wrapper(args: ToolArguments) -> ToolResult:
            logger.debug(f"Tool called: {name}")
            try:
                result = await fn(args)
            except ValidationFailure as exc:
                return ToolError(exc.message, code=exc.code)
            except AuthenticationError as exc:
                logger.error(f"{name}: authentication failed: {exc}")
                return ToolError("Authentication failed", str(exc), exc.code)
            except RemoteError as exc:
                logger.error(f"{name}: failed to {action}: {exc}")
                return ToolError(f"Failed to {action}", str(exc), exc.code)
            except Exception as exc:
                logger.exception(f"{name}: unexpected error")
                return ToolError(f"Failed to {action}", str(exc), 'INTERNAL_ERROR')
            if isinstance(result, (ToolSuccess, ToolError)):
                return result
            return ToolSuccess(result)

        return wrapper

    return decorator


def plain(items: List[Any]) -> List[Any]:
    """Dump typed records to JSON-ready dicts; raw vendor objects pass through."""
    return [item.dump() if isinstance(item, RemoteResource) else item for item in items]


# Schema helpers

def string_param(description: str) -> Dict[str, Any]:
    return {'type': 'string', 'description': description}


def integer_param(description: str, default: Optional[int] = None) -> Dict[str, Any]:
    prop: Dict[str, Any] = {'type': 'integer', 'description': description}
    if default is not None:
        prop['default'] = default
    return prop


def object_param(description: str) -> Dict[str, Any]:
    return {'type': 'object', 'description': description}


def input_schema(properties: Optional[Dict[str, Any]] = None, required: Iterable[str] = ()) -> Dict[str, Any]:
    schema: Dict[str, Any] = {'type': 'object', 'properties': dict(properties or {})}
    required = list(required)
    if required:
        schema['required'] = required
    return schema


class Toolset:
    """A group of tools bound to one client."""

    def __init__(self, client) -> None:
        self.client = client
        self._entries: List[Tuple[ToolDescriptor, Handler]] = []

    def add(self, name: str, description: str, schema: Dict[str, Any], handler: Handler) -> None:
        self._entries.append((ToolDescriptor(name, description, schema), handler))

    def build(self) -> None:
        raise NotImplementedError

    def register(self, registry: ToolRegistry) -> int:
        """Register every tool of this set, in declaration order."""
        if not self._entries:
            self.build()
        for descriptor, handler in self._entries:
            registry.register(descriptor, handler)
        return len(self._entries)


__all__ = [
    'DEFAULT_SITE',
    'DEFAULT_LIMIT',
    'DEFAULT_OFFSET',
    'tool_handler',
    'string_param',
    'integer_param',
    'object_param',
    'input_schema',
    'plain',
    'Toolset',
]
