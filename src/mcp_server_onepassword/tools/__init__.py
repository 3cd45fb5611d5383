"""
1Password Connect MCP tools, one package per API domain.

Each domain exposes ``register_<domain>_tools(mcp, client_factory)``; the
client factory builds a fresh Connect client for every call from that
call's request headers.
"""
from __future__ import annotations

from fastmcp import FastMCP

from mcp_server_onepassword.core.registry import ClientFactory, request_client_factory

from .activity import register_activity_tools
from .files import register_file_tools
from .health import register_health_tools
from .items import register_item_tools
from .vaults import register_vault_tools

# (name, summary) for every registered tool, in registration order
TOOL_CATALOG: list[tuple[str, str]] = [
    ("1password_list_vaults", "List all accessible vaults"),
    ("1password_get_vault", "Get vault details"),
    ("1password_list_items", "List items in a vault"),
    ("1password_get_item", "Get full item details"),
    ("1password_create_item", "Create a new item"),
    ("1password_update_item", "Replace an item entirely"),
    ("1password_patch_item", "Partially update an item (JSON Patch)"),
    ("1password_delete_item", "Permanently delete an item"),
    ("1password_list_files", "List files attached to an item"),
    ("1password_get_file", "Get file details"),
    ("1password_get_file_content", "Download file content (base64)"),
    ("1password_list_activity", "Read the API activity log"),
    ("1password_get_health", "Check Connect server health"),
    ("1password_heartbeat", "Ping the Connect server"),
    ("1password_test_connection", "Test the supplied credentials"),
]


def register_all_tools(
    mcp: FastMCP, client_factory: ClientFactory = request_client_factory
) -> None:
    """Register every domain's tools with the MCP server."""
    register_vault_tools(mcp, client_factory)
    register_item_tools(mcp, client_factory)
    register_file_tools(mcp, client_factory)
    register_activity_tools(mcp, client_factory)
    register_health_tools(mcp, client_factory)


__all__ = [
    "TOOL_CATALOG",
    "register_all_tools",
    "register_vault_tools",
    "register_item_tools",
    "register_file_tools",
    "register_activity_tools",
    "register_health_tools",
]
