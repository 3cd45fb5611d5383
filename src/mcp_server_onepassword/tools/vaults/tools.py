"""
Vault tool implementations.
"""
from fastmcp import FastMCP

from mcp_server_onepassword.core.client import ConnectClient
from mcp_server_onepassword.core.formatters import ToolResponse, format_response
from mcp_server_onepassword.core.registry import (
    ClientFactory,
    emit,
    execute_tool,
    request_client_factory,
)

from .models import GetVaultInput, ListVaultsInput


async def list_vaults(params: ListVaultsInput, client: ConnectClient) -> ToolResponse:
    vaults = await client.list_vaults(params.filter)
    return format_response(vaults or [], params.response_format, "vaults")


async def get_vault(params: GetVaultInput, client: ConnectClient) -> ToolResponse:
    vault = await client.get_vault(params.vault_id)
    return format_response(vault, params.response_format, "vault")


def register_vault_tools(
    mcp: FastMCP, client_factory: ClientFactory = request_client_factory
) -> None:
    """Register all vault tools with the MCP server."""

    @mcp.tool(
        name="1password_list_vaults",
        annotations={
            "title": "List Vaults",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def list_vaults_tool(params: ListVaultsInput) -> str:
        """List all vaults accessible to the service account.

        Args:
            params: ListVaultsInput with optional filter and response_format

        Returns:
            JSON array of vaults (id, name, description, item count) or a
            markdown table

        Example:
            {"filter": "name eq \\"Engineering\\"", "response_format": "markdown"}
        """
        return emit(await execute_tool("1password_list_vaults", list_vaults, params, client_factory))

    @mcp.tool(
        name="1password_get_vault",
        annotations={
            "title": "Get Vault Details",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def get_vault_tool(params: GetVaultInput) -> str:
        """Get detailed information about a specific vault.

        Returns id, name, description, item count, type and timestamps.
        """
        return emit(await execute_tool("1password_get_vault", get_vault, params, client_factory))
