"""
Activity tool implementations.
"""
from fastmcp import FastMCP

from mcp_server_onepassword.config import get_config
from mcp_server_onepassword.core.client import ConnectClient
from mcp_server_onepassword.core.formatters import ToolResponse, format_response
from mcp_server_onepassword.core.registry import (
    ClientFactory,
    emit,
    execute_tool,
    request_client_factory,
)

from .models import ListActivityInput


async def list_activity(params: ListActivityInput, client: ConnectClient) -> ToolResponse:
    limit = params.checked_limit(get_config().limits)
    activity = await client.list_activity(limit=limit, offset=params.offset)
    return format_response(activity, params.response_format, "activity")


def register_activity_tools(
    mcp: FastMCP, client_factory: ClientFactory = request_client_factory
) -> None:
    """Register activity tools with the MCP server."""

    @mcp.tool(
        name="1password_list_activity",
        annotations={
            "title": "List API Activity",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def list_activity_tool(params: ListActivityInput) -> str:
        """Retrieve the API activity log from the Connect server.

        Shows the audit trail of API requests made to the server. The
        endpoint exposes no cursor, so has_more is always false.

        Args:
            params: ListActivityInput with limit, offset and response_format

        Returns:
            Paginated activity entries with requestId, timestamp, action,
            result, actor and resource
        """
        return emit(
            await execute_tool("1password_list_activity", list_activity, params, client_factory)
        )
