"""Shared fixtures: recording fake clients and an in-process fake UniFi console."""

from __future__ import annotations

import contextlib
import json
from typing import Any, Dict, List, Tuple

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from unifi_protect_mcp.config import ClientConfig
from unifi_protect_mcp.tools import build_registry


class FakeClient:
    """Stands in for a Protect or Network client and records every call."""

    def __init__(self) -> None:
        self.responses: Dict[str, Any] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[Tuple[str, tuple]] = []
        self.auth_calls = 0
        self.auth_error: Exception | None = None

    def authenticate(self) -> None:
        self.auth_calls += 1
        if self.auth_error is not None:
            raise self.auth_error

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(name)

        async def call(*args):
            self.calls.append((name, args))
            if name in self.errors:
                raise self.errors[name]
            return self.responses.get(name, [])

        return call


@pytest.fixture
def protect_client():
    return FakeClient()


@pytest.fixture
def network_client():
    return FakeClient()


@pytest.fixture
def registry(protect_client, network_client):
    return build_registry(protect_client, network_client)


class FakeVendor:
    """Minimal UniFi console: canned responses keyed by (method, path)."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.requests: List[Dict[str, Any]] = []

    def add(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    async def handle(self, request: web.Request) -> web.Response:
        raw = await request.text()
        self.requests.append({
            'method': request.method,
            'path': request.path,
            'query': dict(request.query),
            'headers': dict(request.headers),
            'body': json.loads(raw) if raw else None,
        })
        status, body = self.routes.get((request.method, request.path), (404, 'not found'))
        if isinstance(body, bytes):
            return web.Response(status=status, body=body, content_type='application/json', charset='utf-8')
        if isinstance(body, str):
            return web.Response(status=status, text=body)
        return web.json_response(body, status=status)

    @property
    def last(self) -> Dict[str, Any]:
        return self.requests[-1]


@pytest.fixture
def vendor():
    return FakeVendor()


@pytest.fixture
def serve_vendor(vendor):
    """Factory yielding a ClientConfig that points at the running fake console."""

    @contextlib.asynccontextmanager
    async def _serve(api_key: str = 'secret-key'):
        app = web.Application()
        app.router.add_route('*', '/{tail:.*}', vendor.handle)
        server = TestServer(app)
        await server.start_server()
        try:
            yield ClientConfig(base_url=f'http://{server.host}:{server.port}/', api_key=api_key, timeout=5)
        finally:
            await server.close()

    return _serve
