"""
Vault domain tools.

Listing and inspecting the vaults a Connect token can access.
"""
from __future__ import annotations

from .models import GetVaultInput, ListVaultsInput
from .tools import get_vault, list_vaults, register_vault_tools

__all__ = [
    "register_vault_tools",
    "list_vaults",
    "get_vault",
    "ListVaultsInput",
    "GetVaultInput",
]
