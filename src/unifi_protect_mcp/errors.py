"""Error taxonomy and payload helpers for the UniFi MCP gateway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ErrorPayload:
    """Structured error payload returned to MCP clients."""

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'success': False,
            'error_code': self.code,
            'error': self.message,
        }
        if self.details:
            payload['details'] = self.details
        return payload


class UnifiMCPError(Exception):
    """Base exception for gateway failures."""

    code: str = 'UNIFI_MCP_ERROR'

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        return ErrorPayload(self.code, self.message, self.details or None).to_dict()


class ConfigurationError(UnifiMCPError):
    code = 'CONFIGURATION_ERROR'


class ValidationFailure(UnifiMCPError):
    code = 'VALIDATION_ERROR'


class MissingArgument(ValidationFailure):
    """A required tool argument is absent or empty."""

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Missing required parameter: {name}", details={'parameter': name})
        self.name = name


class InvalidArgument(ValidationFailure):
    """A tool argument is present but has the wrong type or value."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message, details={'parameter': name})
        self.name = name


class AuthenticationError(UnifiMCPError):
    code = 'AUTH_ERROR'


class RemoteError(UnifiMCPError):
    """Base class for failures talking to the vendor API."""

    code = 'REMOTE_ERROR'


class RemoteRequestError(RemoteError):
    """The vendor API answered with a non-2xx status."""

    code = 'REMOTE_REQUEST_ERROR'

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            f"request failed with status {status_code}: {body}",
            details={'status_code': status_code},
        )
        self.status_code = status_code
        self.body = body


class RemoteTransportError(RemoteError):
    code = 'REMOTE_TRANSPORT_ERROR'


class RemoteDecodeError(RemoteError):
    code = 'REMOTE_DECODE_ERROR'


class UnknownToolError(UnifiMCPError):
    code = 'UNKNOWN_TOOL'

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}", details={'tool': name})
        self.name = name


class RegistryError(UnifiMCPError):
    code = 'REGISTRY_ERROR'


class DuplicateToolError(RegistryError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Tool already registered: {name}", details={'tool': name})
        self.name = name


def error_response(code: str, message: str, *, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return a standardised error payload."""
    return ErrorPayload(code, message, details).to_dict()


__all__ = [
    'ErrorPayload',
    'UnifiMCPError',
    'ConfigurationError',
    'ValidationFailure',
    'MissingArgument',
    'InvalidArgument',
    'AuthenticationError',
    'RemoteError',
    'RemoteRequestError',
    'RemoteTransportError',
    'RemoteDecodeError',
    'UnknownToolError',
    'RegistryError',
    'DuplicateToolError',
    'error_response',
]
