"""
Pydantic models for activity tools.
"""
from __future__ import annotations

from mcp_server_onepassword.core.models import PaginatedInput


class ListActivityInput(PaginatedInput):
    """Input for reading the Connect API activity log."""
