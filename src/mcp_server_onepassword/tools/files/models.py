"""
Pydantic models for file tools.
"""
from __future__ import annotations

from pydantic import Field

from mcp_server_onepassword.core.models import ItemScopedInput, ResourceId, StrictInput


class ListFilesInput(ItemScopedInput):
    """Input for listing files attached to an item."""

    inline_content: bool | None = Field(
        default=None,
        description="If true, include Base64-encoded file content in the response",
    )


class GetFileInput(ListFilesInput):
    """Input for getting one file's details."""

    file_id: ResourceId = Field(..., description="File UUID")


class GetFileContentInput(StrictInput):
    """Input for downloading a file's raw content."""

    vault_id: ResourceId = Field(..., description="Vault UUID")
    item_id: ResourceId = Field(..., description="Item UUID")
    file_id: ResourceId = Field(..., description="File UUID")
