"""
1Password Connect MCP Server - Main Entry Point

FastMCP server over stateless streamable HTTP with:
- Per-request tenant credentials (no Connect token is ever configured globally)
- Domain-organized tool registration
- Health and info endpoints

Request Headers:
- X-1Password-Connect-Token: Connect server bearer token
- X-1Password-Connect-Host: Connect server URL

Environment Variables:
- ONEPASSWORD_MCP_NAME: Server name (default: primrose-mcp-1password)
- ONEPASSWORD_MCP_HOST / ONEPASSWORD_MCP_PORT: Listen address
- ONEPASSWORD_MCP_PATH: MCP endpoint path (default: /mcp)
- ONEPASSWORD_MCP_LOG_LEVEL: Logging level
- See config.py for the remaining variables
"""
from __future__ import annotations

import argparse
from collections.abc import Sequence

import uvicorn
from fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from mcp_server_onepassword.auth import (
    REQUIRED_HEADERS,
    MissingCredentialsError,
    mask_secret,
    parse_tenant_credentials,
    validate_credentials,
)
from mcp_server_onepassword.config import get_config
from mcp_server_onepassword.core.observability import (
    configure_logging,
    get_logger,
    get_uptime_seconds,
)
from mcp_server_onepassword.core.registry import ClientFactory, request_client_factory
from mcp_server_onepassword.tools import TOOL_CATALOG, register_all_tools

logger = get_logger("onepassword-mcp.server")

INSTRUCTIONS = """1Password Connect MCP Server for vaults, items, files and activity.

Every request must carry X-1Password-Connect-Token and X-1Password-Connect-Host
headers; each call talks to the Connect server named by its own headers.

Use `1password_test_connection` to verify credentials.
Use `1password_list_vaults` to discover vault IDs, then item and file tools.
"""


class TenantCredentialsMiddleware(BaseHTTPMiddleware):
    """Reject MCP requests that lack either tenant credential header.

    Only the MCP endpoint is guarded; health and info routes stay open.
    """

    def __init__(self, app, mcp_path: str = "/mcp") -> None:
        super().__init__(app)
        self.mcp_path = mcp_path.rstrip("/") or "/"

    def _guards(self, request: Request) -> bool:
        path = request.url.path.rstrip("/") or "/"
        return request.method != "OPTIONS" and path == self.mcp_path

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._guards(request):
            return await call_next(request)

        credentials = parse_tenant_credentials(request.headers)
        try:
            validate_credentials(credentials)
        except MissingCredentialsError as e:
            logger.info("Rejected request without credentials", missing=e.missing)
            return JSONResponse(
                status_code=401,
                content={
                    "error": "Unauthorized",
                    "message": e.message,
                    "required_headers": list(REQUIRED_HEADERS),
                },
            )

        logger.debug(
            "Tenant request",
            connect_host=credentials.connect_host,
            token=mask_secret(credentials.connect_token),
        )
        return await call_next(request)


def create_server(client_factory: ClientFactory = request_client_factory) -> FastMCP:
    """Build the FastMCP server with every tool and the plain HTTP routes."""
    config = get_config()
    mcp = FastMCP(name=config.server.name, instructions=INSTRUCTIONS)
    register_all_tools(mcp, client_factory)

    @mcp.custom_route("/health", methods=["GET"])
    async def health(request: Request) -> JSONResponse:
        return JSONResponse({
            "status": "ok",
            "server": config.server.name,
            "uptime_seconds": round(get_uptime_seconds(), 1),
        })

    @mcp.custom_route("/", methods=["GET"])
    async def info(request: Request) -> JSONResponse:
        return JSONResponse({
            "name": config.server.name,
            "version": config.server.version,
            "description": "1Password Connect MCP Server",
            "endpoints": {"mcp": config.server.path, "health": "/health"},
            "authentication": {
                "required_headers": {
                    "X-1Password-Connect-Token": "Connect server bearer token",
                    "X-1Password-Connect-Host": "Connect server URL (e.g., http://localhost:8080)",
                },
            },
            "tools": [{"name": name, "description": summary} for name, summary in TOOL_CATALOG],
        })

    logger.info("Server created", name=config.server.name, tools=len(TOOL_CATALOG))
    return mcp


def create_app(mcp: FastMCP | None = None) -> Starlette:
    """Wrap the server's streamable HTTP app with the credential middleware."""
    config = get_config()
    mcp = mcp or create_server()
    return mcp.http_app(
        path=config.server.path,
        middleware=[Middleware(TenantCredentialsMiddleware, mcp_path=config.server.path)],
        stateless_http=True,
        transport="http",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="onepassword-mcp",
        description="Multi-tenant 1Password Connect MCP server",
    )
    parser.add_argument("--host", help="Listen address (ONEPASSWORD_MCP_HOST)")
    parser.add_argument("--port", type=int, help="HTTP port (ONEPASSWORD_MCP_PORT)")
    parser.add_argument("--path", help="MCP endpoint path (ONEPASSWORD_MCP_PATH)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (ONEPASSWORD_MCP_LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point: apply CLI overrides, then serve over HTTP with uvicorn."""
    args = parse_args(argv)
    config = get_config()
    overrides = {
        key: value
        for key, value in (
            ("host", args.host),
            ("port", args.port),
            ("path", args.path),
            ("log_level", args.log_level),
        )
        if value is not None
    }
    if overrides:
        config.server = config.server.model_copy(update=overrides)

    configure_logging(config.server.log_level, config.server.log_json)
    logger.info(
        "Starting HTTP server",
        host=config.server.host,
        port=config.server.port,
        path=config.server.path,
    )
    uvicorn.run(
        create_app(),
        host=config.server.host,
        port=config.server.port,
        log_level=config.server.log_level.lower(),
    )


if __name__ == "__main__":
    main()
