"""
Base client for the UniFi vendor REST APIs.

Handles:
- aiohttp session lifecycle (created lazily, shared across requests)
- Per-endpoint authentication header family
- Fixed total timeout, no retries
- Status, transport and decode failure mapping
- Per-endpoint response envelope (bare JSON or wrapped under ``data``)
"""

import asyncio
import enum
import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import aiohttp

from ..config import ClientConfig
from ..errors import AuthenticationError, RemoteDecodeError, RemoteRequestError, RemoteTransportError

logger = logging.getLogger(__name__)


def path_segment(value: str) -> str:
    """Escape an opaque identifier for use as one URL path segment."""
    return quote(str(value), safe='')


def body_text(raw: bytes) -> str:
    """Render a response body for error reporting; undecodable bytes become U+FFFD."""
    return raw.decode('utf-8', errors='replace')


class AuthScheme(enum.Enum):
    """Authentication header convention used by an endpoint family."""

    API_KEY = 'api_key'
    BEARER = 'bearer'

    def headers(self, api_key: str) -> Dict[str, str]:
        if self is AuthScheme.BEARER:
            return {'Authorization': f'Bearer {api_key}'}
        return {'X-API-KEY': api_key}


class Envelope(enum.Enum):
    """Response body shape of an endpoint."""

    BARE = 'bare'
    DATA = 'data'

    def unwrap(self, body: Any) -> Any:
        if self is Envelope.BARE:
            return body
        if body is None:
            return None
        if not isinstance(body, dict):
            raise RemoteDecodeError("failed to decode response: expected an object with a 'data' key")
        return body.get('data')


class UnifiBaseClient:
    """
    Shared HTTP plumbing for the Protect and Network clients.

    Subclasses only build paths and pick the auth scheme and envelope for
    each endpoint; everything on the wire goes through :meth:`_request`.
    """

    service_name = 'unifi'

    def __init__(self, config: ClientConfig, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self._session = session
        self._owns_session = session is None

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def initialize(self) -> None:
        """Create the HTTP session if one was not supplied."""
        if self._session is not None and not self._session.closed:
            return
        connector = aiohttp.TCPConnector(ssl=False) if self.config.skip_tls_verify else None
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            connector=connector,
        )
        self._owns_session = True

    async def close(self) -> None:
        """Close the client and cleanup resources."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def authenticate(self) -> None:
        """Local precondition check; no network call is made."""
        logger.debug(f"{self.service_name}: verifying API key")
        if not self.config.api_key:
            raise AuthenticationError("API key not configured")

    def _headers(self, auth: AuthScheme, with_body: bool) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        headers.update(auth.headers(self.config.api_key))
        if with_body:
            headers['Content-Type'] = 'application/json'
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        auth: AuthScheme,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Tuple[int, bytes]:
        """Issue one request and return ``(status, raw_body)``."""
        await self.initialize()
        url = f"{self.base_url}{path}"
        body = json.dumps(payload) if payload is not None else None
        try:
            async with self._session.request(
                method,
                url,
                params=params,
                data=body,
                headers=self._headers(auth, body is not None),
            ) as response:
                return response.status, await response.read()
        except asyncio.TimeoutError as exc:
            logger.error(f"{self.service_name}: {method} {path} timed out")
            raise RemoteTransportError(f"request timed out after {self.config.timeout}s") from exc
        except aiohttp.ClientError as exc:
            logger.error(f"{self.service_name}: {method} {path} failed: {exc}")
            raise RemoteTransportError(f"request failed: {exc}") from exc

    async def _request(
        self,
        method: str,
        path: str,
        *,
        auth: AuthScheme,
        envelope: Envelope = Envelope.BARE,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False,
    ) -> Any:
        """
        Make a request and decode its JSON body.

        Returns the unwrapped payload, or ``None`` when the endpoint answered
        404 and ``allow_not_found`` is set.

        Raises:
            RemoteRequestError: non-2xx status
            RemoteTransportError: connection failure or timeout
            RemoteDecodeError: body is not the expected JSON shape
        """
        status, raw = await self._send(method, path, auth=auth, params=params, payload=payload)

        if status == 404 and allow_not_found:
            logger.warning(f"{self.service_name}: {path} not available on this controller version")
            return None
        if not 200 <= status < 300:
            raise RemoteRequestError(status, body_text(raw))
        try:
            text = raw.decode('utf-8')
        except UnicodeDecodeError as exc:
            logger.error(f"{self.service_name}: undecodable body from {path}: {exc}")
            raise RemoteDecodeError(f"failed to decode response: {exc}") from exc
        if not text.strip():
            return envelope.unwrap(None)
        try:
            body = json.loads(text)
        except ValueError as exc:
            logger.error(f"{self.service_name}: invalid JSON from {path}: {exc}")
            raise RemoteDecodeError(f"failed to decode response: {exc}") from exc
        return envelope.unwrap(body)

    async def _fetch_list(self, path: str, *, auth: AuthScheme, envelope: Envelope = Envelope.BARE,
                          params: Optional[Dict[str, Any]] = None,
                          allow_not_found: bool = False) -> List[Any]:
        value = await self._request('GET', path, auth=auth, envelope=envelope, params=params,
                                    allow_not_found=allow_not_found)
        if value is None:
            return []
        if not isinstance(value, list):
            raise RemoteDecodeError("failed to decode response: expected a JSON array")
        return value

    async def _fetch_object(self, path: str, *, auth: AuthScheme,
                            envelope: Envelope = Envelope.BARE) -> Dict[str, Any]:
        value = await self._request('GET', path, auth=auth, envelope=envelope)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise RemoteDecodeError("failed to decode response: expected a JSON object")
        return value

    async def _mutate(self, method: str, path: str, payload: Dict[str, Any], *, auth: AuthScheme,
                      envelope: Envelope = Envelope.DATA) -> Dict[str, Any]:
        value = await self._request(method, path, auth=auth, envelope=envelope, payload=payload)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise RemoteDecodeError("failed to decode response: expected a JSON object")
        return value


__all__ = ['AuthScheme', 'Envelope', 'UnifiBaseClient', 'body_text', 'path_segment']
