"""
Tool dispatch with error containment.

Every tool goes through ``execute_tool``: it builds a Connect client for the
current tenant, runs the domain handler, and turns any failure into a
rendered error block. No exception crosses this boundary unrendered.
"""
from __future__ import annotations

from collections.abc import Awaitable, Callable
from time import perf_counter
from typing import Any, TypeVar

import pydantic
from fastmcp.exceptions import ToolError

from mcp_server_onepassword.auth import resolve_request_credentials
from mcp_server_onepassword.config import get_config

from .client import ConnectClient, create_connect_client
from .errors import ValidationError, error_details
from .formatters import ToolResponse, format_error
from .observability import get_logger

P = TypeVar("P")

ClientFactory = Callable[[], ConnectClient]
Handler = Callable[[P, ConnectClient], Awaitable[ToolResponse]]

logger = get_logger("onepassword-mcp.tools")


def request_client_factory() -> ConnectClient:
    """Build a client from the credentials of the in-flight HTTP request."""
    credentials = resolve_request_credentials()
    return create_connect_client(
        credentials, timeout=get_config().server.request_timeout
    )


async def execute_tool(
    name: str,
    handler: Handler[P],
    params: P,
    client_factory: ClientFactory = request_client_factory,
) -> ToolResponse:
    """Run a tool handler against a freshly built client.

    Args:
        name: Tool name, for logging
        handler: Coroutine taking (params, client) and returning a ToolResponse
        params: Validated tool input
        client_factory: Builds the per-call client; raises on missing credentials

    Returns:
        The handler's response, or an error block if anything failed
    """
    started = perf_counter()
    try:
        client = client_factory()
        response = await handler(params, client)
    except pydantic.ValidationError as e:
        return _failure(name, ValidationError.from_pydantic(e), started)
    except Exception as e:
        return _failure(name, e, started)

    logger.info(
        "Tool completed",
        tool=name,
        duration_ms=round((perf_counter() - started) * 1000, 1),
    )
    return response


def _failure(name: str, error: Exception, started: float) -> ToolResponse:
    details: dict[str, Any] = error_details(error)
    logger.warning(
        "Tool failed",
        tool=name,
        error=details.get("code", details.get("name")),
        status=details.get("status_code"),
        duration_ms=round((perf_counter() - started) * 1000, 1),
    )
    return format_error(error)


def emit(response: ToolResponse) -> str:
    """Hand a response to FastMCP.

    Error blocks are raised as ToolError, which FastMCP returns to the
    client as content with ``isError`` set.
    """
    if response.is_error:
        raise ToolError(response.text)
    return response.text
