"""
Item tool implementations.

Read tools render through the response formatter; mutations answer with a
success acknowledgement carrying the item the server returned.
"""
from fastmcp import FastMCP

from mcp_server_onepassword.core.client import ConnectClient
from mcp_server_onepassword.core.formatters import ToolResponse, format_response, format_success
from mcp_server_onepassword.core.registry import (
    ClientFactory,
    emit,
    execute_tool,
    request_client_factory,
)

from .models import (
    CreateItemInput,
    DeleteItemInput,
    GetItemInput,
    ListItemsInput,
    PatchItemInput,
    UpdateItemInput,
)


async def list_items(params: ListItemsInput, client: ConnectClient) -> ToolResponse:
    items = await client.list_items(params.vault_id, params.filter)
    return format_response(items or [], params.response_format, "items")


async def get_item(params: GetItemInput, client: ConnectClient) -> ToolResponse:
    item = await client.get_item(params.vault_id, params.item_id)
    return format_response(item, params.response_format, "item")


async def create_item(params: CreateItemInput, client: ConnectClient) -> ToolResponse:
    item = await client.create_item(params.vault_id, params.to_payload())
    return format_success("Item created", item=item)


async def update_item(params: UpdateItemInput, client: ConnectClient) -> ToolResponse:
    item = await client.update_item(params.vault_id, params.item_id, params.to_payload())
    return format_success("Item updated", item=item)


async def patch_item(params: PatchItemInput, client: ConnectClient) -> ToolResponse:
    item = await client.patch_item(params.vault_id, params.item_id, params.patch_document())
    return format_success("Item patched", item=item)


async def delete_item(params: DeleteItemInput, client: ConnectClient) -> ToolResponse:
    await client.delete_item(params.vault_id, params.item_id)
    return format_success(f"Item {params.item_id} deleted from vault {params.vault_id}")


def register_item_tools(
    mcp: FastMCP, client_factory: ClientFactory = request_client_factory
) -> None:
    """Register all item tools with the MCP server."""

    @mcp.tool(
        name="1password_list_items",
        annotations={
            "title": "List Items",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def list_items_tool(params: ListItemsInput) -> str:
        """List items in a vault.

        Returns items without full field/section details; use
        1password_get_item to fetch a complete item.

        Args:
            params: ListItemsInput with vault_id, optional filter and response_format

        Returns:
            Items with id, title, category, vault and tags
        """
        return emit(await execute_tool("1password_list_items", list_items, params, client_factory))

    @mcp.tool(
        name="1password_get_item",
        annotations={
            "title": "Get Item Details",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def get_item_tool(params: GetItemInput) -> str:
        """Get complete details for an item, including all fields, sections and URLs."""
        return emit(await execute_tool("1password_get_item", get_item, params, client_factory))

    @mcp.tool(
        name="1password_create_item",
        annotations={
            "title": "Create Item",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": True
        }
    )
    async def create_item_tool(params: CreateItemInput) -> str:
        """Create a new item in a vault.

        Args:
            params: CreateItemInput with vault_id, title, category and optional
                   fields, sections, urls, tags, favorite

        Returns:
            Success acknowledgement with the created item and its assigned UUID

        Example:
            {"vault_id": "abc123", "title": "Staging DB", "category": "LOGIN",
             "fields": [
                {"id": "username", "type": "STRING", "purpose": "USERNAME", "value": "admin"},
                {"id": "password", "type": "CONCEALED", "purpose": "PASSWORD",
                 "generate": true, "recipe": {"length": 32, "characterSets": ["LETTERS", "DIGITS"]}}
             ]}
        """
        return emit(await execute_tool("1password_create_item", create_item, params, client_factory))

    @mcp.tool(
        name="1password_update_item",
        annotations={
            "title": "Replace Item",
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def update_item_tool(params: UpdateItemInput) -> str:
        """Update an item by replacing it entirely.

        This is a full replacement: anything not supplied is removed from the
        item. Use 1password_patch_item for partial updates.
        """
        return emit(await execute_tool("1password_update_item", update_item, params, client_factory))

    @mcp.tool(
        name="1password_patch_item",
        annotations={
            "title": "Patch Item",
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": False,
            "openWorldHint": True
        }
    )
    async def patch_item_tool(params: PatchItemInput) -> str:
        """Apply partial updates to an item using JSON Patch (RFC 6902).

        Operation format:
            {"op": "replace", "path": "/title", "value": "New Title"}
            {"op": "add", "path": "/fields/-", "value": {"id": "new", "type": "STRING", "value": "x"}}
            {"op": "remove", "path": "/fields/0"}
        """
        return emit(await execute_tool("1password_patch_item", patch_item, params, client_factory))

    @mcp.tool(
        name="1password_delete_item",
        annotations={
            "title": "Delete Item",
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": True,
            "openWorldHint": True
        }
    )
    async def delete_item_tool(params: DeleteItemInput) -> str:
        """Permanently delete an item from a vault.

        WARNING: This action cannot be undone.
        """
        return emit(await execute_tool("1password_delete_item", delete_item, params, client_factory))
