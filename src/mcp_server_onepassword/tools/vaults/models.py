"""
Pydantic models for vault tools.
"""
from __future__ import annotations

from pydantic import Field

from mcp_server_onepassword.core.models import BaseToolInput, VaultScopedInput


class ListVaultsInput(BaseToolInput):
    """Input for listing vaults."""

    filter: str | None = Field(
        default=None,
        description="SCIM-style filter by name (e.g., 'name eq \"My Vault\"')",
    )


class GetVaultInput(VaultScopedInput):
    """Input for getting a single vault."""
