from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from mcp_server_onepassword.auth import HOST_HEADER, TOKEN_HEADER
from mcp_server_onepassword.server import (
    TenantCredentialsMiddleware,
    create_app,
    create_server,
    parse_args,
)
from mcp_server_onepassword.tools import TOOL_CATALOG


async def echo(request: Request) -> JSONResponse:
    return JSONResponse({"reached": True})


@pytest.fixture
def guarded() -> TestClient:
    app = Starlette(
        routes=[
            Route("/mcp", echo, methods=["GET", "POST"]),
            Route("/health", echo, methods=["GET"]),
        ],
        middleware=[Middleware(TenantCredentialsMiddleware, mcp_path="/mcp")],
    )
    return TestClient(app)


def test_middleware_rejects_missing_headers(guarded: TestClient) -> None:
    response = guarded.post("/mcp", json={})
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "Unauthorized"
    assert body["required_headers"] == [TOKEN_HEADER, HOST_HEADER]
    assert TOKEN_HEADER in body["message"]
    assert HOST_HEADER in body["message"]


def test_middleware_names_the_missing_header(guarded: TestClient) -> None:
    response = guarded.post("/mcp", json={}, headers={TOKEN_HEADER: "tok"})
    assert response.status_code == 401
    body = response.json()
    assert HOST_HEADER in body["message"]
    assert TOKEN_HEADER not in body["message"]
    assert body["required_headers"] == [TOKEN_HEADER, HOST_HEADER]


def test_middleware_passes_complete_credentials(guarded: TestClient) -> None:
    response = guarded.post(
        "/mcp", json={}, headers={TOKEN_HEADER: "tok", HOST_HEADER: "http://connect:8080"}
    )
    assert response.status_code == 200
    assert response.json() == {"reached": True}


def test_middleware_leaves_other_routes_open(guarded: TestClient) -> None:
    assert guarded.get("/health").status_code == 200


def test_app_rejects_unauthenticated_mcp_calls() -> None:
    client = TestClient(create_app())
    response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
    assert response.status_code == 401
    assert response.json()["required_headers"] == [TOKEN_HEADER, HOST_HEADER]


def test_health_route() -> None:
    client = TestClient(create_app())
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["server"] == "primrose-mcp-1password"


def test_info_route() -> None:
    client = TestClient(create_app(create_server()))
    body = client.get("/").json()
    assert body["endpoints"]["mcp"] == "/mcp"
    assert set(body["authentication"]["required_headers"]) == {TOKEN_HEADER, HOST_HEADER}
    assert [tool["name"] for tool in body["tools"]] == [name for name, _ in TOOL_CATALOG]


def test_parse_args() -> None:
    args = parse_args(["--port", "9000", "--log-level", "DEBUG"])
    assert args.port == 9000
    assert args.log_level == "DEBUG"
    assert args.host is None
