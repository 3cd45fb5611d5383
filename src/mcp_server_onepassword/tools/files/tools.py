"""
File tool implementations.
"""
import base64

from fastmcp import FastMCP

from mcp_server_onepassword.core.client import ConnectClient
from mcp_server_onepassword.core.formatters import ToolResponse, format_response, format_success
from mcp_server_onepassword.core.registry import (
    ClientFactory,
    emit,
    execute_tool,
    request_client_factory,
)

from .models import GetFileContentInput, GetFileInput, ListFilesInput


async def list_files(params: ListFilesInput, client: ConnectClient) -> ToolResponse:
    files = await client.list_files(params.vault_id, params.item_id, params.inline_content)
    return format_response(files or [], params.response_format, "files")


async def get_file(params: GetFileInput, client: ConnectClient) -> ToolResponse:
    file = await client.get_file(
        params.vault_id, params.item_id, params.file_id, params.inline_content
    )
    return format_response(file, params.response_format, "file")


async def get_file_content(params: GetFileContentInput, client: ConnectClient) -> ToolResponse:
    content = await client.get_file_content(params.vault_id, params.item_id, params.file_id)
    return format_success(
        "File content downloaded",
        encoding="base64",
        size=len(content),
        content=base64.b64encode(content).decode("ascii"),
    )


def register_file_tools(
    mcp: FastMCP, client_factory: ClientFactory = request_client_factory
) -> None:
    """Register all file tools with the MCP server."""

    @mcp.tool(
        name="1password_list_files",
        annotations={
            "title": "List Item Files",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def list_files_tool(params: ListFilesInput) -> str:
        """List all files attached to an item.

        Args:
            params: ListFilesInput with vault_id, item_id, inline_content and response_format

        Returns:
            Files with id, name, size and content_type (plus content when inlined)
        """
        return emit(await execute_tool("1password_list_files", list_files, params, client_factory))

    @mcp.tool(
        name="1password_get_file",
        annotations={
            "title": "Get File Details",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def get_file_tool(params: GetFileInput) -> str:
        """Get details for a specific file attached to an item."""
        return emit(await execute_tool("1password_get_file", get_file, params, client_factory))

    @mcp.tool(
        name="1password_get_file_content",
        annotations={
            "title": "Download File Content",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def get_file_content_tool(params: GetFileContentInput) -> str:
        """Download the raw content of a file.

        Returns:
            JSON with encoding "base64", the byte size and the encoded content
        """
        return emit(
            await execute_tool("1password_get_file_content", get_file_content, params, client_factory)
        )
