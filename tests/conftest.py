"""
Pytest configuration and shared fixtures for 1Password Connect MCP Server tests.
"""
from __future__ import annotations

import json
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from mcp_server_onepassword.auth import TenantCredentials
from mcp_server_onepassword.config import reset_config
from mcp_server_onepassword.core.client import ConnectClient, create_connect_client

CONFIG_ENV_VARS = (
    "ONEPASSWORD_MCP_NAME",
    "ONEPASSWORD_MCP_HOST",
    "ONEPASSWORD_MCP_PORT",
    "ONEPASSWORD_MCP_PATH",
    "ONEPASSWORD_MCP_LOG_LEVEL",
    "ONEPASSWORD_MCP_LOG_JSON",
    "ONEPASSWORD_REQUEST_TIMEOUT",
    "CHARACTER_LIMIT",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Every test starts from default configuration."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def credentials() -> TenantCredentials:
    """Mock tenant credentials."""
    return TenantCredentials(
        connect_token="eyJhbGciOiJFUzI1NiIsImtpZCI6InRlc3QifQ.example",
        connect_host="http://connect.example.test:8080",
    )


class ConnectStub:
    """Scripted Connect server behind an httpx.MockTransport.

    Routes map "METHOD /path" to a response or a callable returning one.
    Every request is recorded for assertions.
    """

    def __init__(self) -> None:
        self.routes: dict[str, httpx.Response | Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, response: Any = None, *, status: int = 200,
           headers: dict[str, str] | None = None) -> None:
        """Register a canned response (JSON-encoded unless bytes/str/Response)."""
        if isinstance(response, httpx.Response) or callable(response):
            self.routes[f"{method} {path}"] = response
        elif isinstance(response, bytes):
            self.routes[f"{method} {path}"] = httpx.Response(status, content=response, headers=headers)
        elif isinstance(response, str):
            self.routes[f"{method} {path}"] = httpx.Response(status, text=response, headers=headers)
        elif response is None:
            self.routes[f"{method} {path}"] = httpx.Response(status, headers=headers)
        else:
            self.routes[f"{method} {path}"] = httpx.Response(status, json=response, headers=headers)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(f"{request.method} {request.url.path}")
        if route is None:
            return httpx.Response(500, json={"message": f"unexpected {request.method} {request.url.path}"})
        if callable(route) and not isinstance(route, httpx.Response):
            return route(request)
        return route

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def connect() -> ConnectStub:
    """Scripted Connect server."""
    return ConnectStub()


@pytest.fixture
def client(credentials: TenantCredentials, connect: ConnectStub) -> ConnectClient:
    """Connect client wired to the scripted server."""
    return create_connect_client(credentials, transport=httpx.MockTransport(connect.handle))


@pytest.fixture
def client_factory(client: ConnectClient) -> Callable[[], ConnectClient]:
    """Client factory handed to execute_tool in place of header resolution."""
    return lambda: client


@pytest.fixture
def mock_vault() -> dict[str, Any]:
    """Mock vault data."""
    return {
        "id": "ytrfte14kw1uex5txaore1emkz",
        "name": "Engineering",
        "description": "Shared engineering secrets",
        "items": 42,
        "type": "USER_CREATED",
        "attributeVersion": 1,
        "contentVersion": 17,
        "createdAt": "2024-01-10T08:00:00Z",
        "updatedAt": "2024-03-02T12:30:00Z",
    }


@pytest.fixture
def mock_item() -> dict[str, Any]:
    """Mock login item data."""
    return {
        "id": "2fcbqwe9ndg175zg2dzwftvkpa",
        "title": "Staging DB",
        "category": "LOGIN",
        "vault": {"id": "ytrfte14kw1uex5txaore1emkz", "name": "Engineering"},
        "tags": ["db", "staging"],
        "favorite": False,
        "version": 3,
        "state": "ACTIVE",
        "fields": [
            {"id": "username", "type": "STRING", "purpose": "USERNAME", "label": "username", "value": "admin"},
            {"id": "password", "type": "CONCEALED", "purpose": "PASSWORD", "label": "password", "value": "hunter2"},
        ],
    }


@pytest.fixture
def mock_files() -> list[dict[str, Any]]:
    """Mock item file attachments."""
    return [
        {"id": "6r65pjq33banznomn7q22sj44e", "name": "id_rsa.pub", "size": 512, "content_type": "text/plain"},
        {"id": "7s76qkr44cbo0opno8r33tk55f", "name": "cert.pem", "size": 2048, "content_type": "application/x-pem-file"},
    ]


@pytest.fixture
def mock_activity() -> list[dict[str, Any]]:
    """Mock activity log entries."""
    return [
        {
            "requestId": "req-1",
            "timestamp": "2024-03-02T12:30:00Z",
            "action": "READ",
            "result": "SUCCESS",
            "actor": {"id": "svc-1", "account": "ACME"},
            "resource": {"type": "ITEM", "vault": {"id": "v1"}, "item": {"id": "i1"}, "itemVersion": 3},
        },
        {
            "requestId": "req-2",
            "timestamp": "2024-03-02T12:31:00Z",
            "action": "READ",
            "result": "DENY",
            "resource": {"type": "VAULT", "vault": {"id": "v2"}},
        },
    ]


@pytest.fixture
def mock_health() -> dict[str, Any]:
    """Mock Connect server health payload."""
    return {
        "name": "1Password Connect API",
        "version": "1.7.2",
        "dependencies": [
            {"service": "sync", "status": "ACTIVE", "message": "TLS"},
            {"service": "sqlite", "status": "ACTIVE"},
        ],
    }


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")


def pytest_collection_modifyitems(config, items):
    for item in items:
        item.add_marker(pytest.mark.unit)
