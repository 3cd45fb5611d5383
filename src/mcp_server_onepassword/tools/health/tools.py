"""
Health and monitoring tool implementations.
"""
from fastmcp import FastMCP

from mcp_server_onepassword.core.client import ConnectClient
from mcp_server_onepassword.core.formatters import (
    ResponseFormat,
    ToolResponse,
    format_response,
    format_success,
)
from mcp_server_onepassword.core.registry import (
    ClientFactory,
    emit,
    execute_tool,
    request_client_factory,
)

from .models import ConnectionCheckInput, GetHealthInput, HeartbeatInput


async def get_health(params: GetHealthInput, client: ConnectClient) -> ToolResponse:
    health = await client.get_health()
    return format_response(health, params.response_format, "health")


async def heartbeat(params: HeartbeatInput, client: ConnectClient) -> ToolResponse:
    response = await client.heartbeat()
    return format_success("Server is alive", response=response)


async def check_connection(params: ConnectionCheckInput, client: ConnectClient) -> ToolResponse:
    # test_connection reports failures in its result instead of raising
    status = await client.test_connection()
    return format_response(status, ResponseFormat.JSON, "connection")


def register_health_tools(
    mcp: FastMCP, client_factory: ClientFactory = request_client_factory
) -> None:
    """Register health and connectivity tools with the MCP server."""

    @mcp.tool(
        name="1password_get_health",
        annotations={
            "title": "Connect Server Health",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def get_health_tool(params: GetHealthInput | None = None) -> str:
        """Check the health status of the 1Password Connect server.

        Returns:
            Server name, version and the status of each dependency
        """
        params = params or GetHealthInput()
        return emit(await execute_tool("1password_get_health", get_health, params, client_factory))

    @mcp.tool(
        name="1password_heartbeat",
        annotations={
            "title": "Connect Server Heartbeat",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def heartbeat_tool(params: HeartbeatInput | None = None) -> str:
        """Simple ping to verify the Connect server is available."""
        params = params or HeartbeatInput()
        return emit(await execute_tool("1password_heartbeat", heartbeat, params, client_factory))

    @mcp.tool(
        name="1password_test_connection",
        annotations={
            "title": "Test Connect Credentials",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def test_connection_tool(params: ConnectionCheckInput | None = None) -> str:
        """Test connectivity to the Connect server with the supplied credentials.

        Never fails on an unreachable server: the result reports
        {"connected": false, "message": ...} instead.
        """
        params = params or ConnectionCheckInput()
        return emit(
            await execute_tool("1password_test_connection", check_connection, params, client_factory)
        )
