"""Uniform success/error envelope returned for every tool invocation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .errors import error_response


@dataclass(frozen=True)
class ToolSuccess:
    payload: Any = field(default_factory=dict)

    is_error = False

    def to_text(self) -> str:
        return json.dumps(self.payload, indent=2, sort_keys=True, default=str)


@dataclass(frozen=True)
class ToolError:
    message: str
    cause: Optional[str] = None
    code: str = 'TOOL_ERROR'

    is_error = True

    def to_dict(self) -> Dict[str, Any]:
        payload = error_response(self.code, self.message)
        if self.cause:
            payload['cause'] = self.cause
        return payload

    def to_text(self) -> str:
        return json.dumps(self.to_dict(), indent=2, sort_keys=True)

    def describe(self) -> str:
        """Human-readable ``message: cause`` form."""
        return f"{self.message}: {self.cause}" if self.cause else self.message


ToolResult = Union[ToolSuccess, ToolError]


def listing(key: str, items: list, **extra: Any) -> ToolSuccess:
    """Wrap a list payload together with its ``count``."""
    payload: Dict[str, Any] = {key: items, 'count': len(items)}
    payload.update(extra)
    return ToolSuccess(payload)


__all__ = ['ToolSuccess', 'ToolError', 'ToolResult', 'listing']
