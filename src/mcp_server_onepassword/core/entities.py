"""
1Password Connect API entity shapes.

Payloads are passed through as decoded JSON; these TypedDicts document the
keys the Connect server returns and that the formatters read.
"""
from __future__ import annotations

from typing import Any, Literal, TypedDict


class Vault(TypedDict, total=False):
    id: str
    name: str
    description: str
    items: int  # item count
    type: Literal["USER_CREATED", "PERSONAL", "EVERYONE"]
    attributeVersion: int
    contentVersion: int
    createdAt: str
    updatedAt: str


class VaultRef(TypedDict, total=False):
    id: str
    name: str


class ItemFile(TypedDict, total=False):
    id: str
    name: str
    size: int
    content_path: str
    content_type: str
    section: dict[str, str]
    content: str  # base64, only with inline_content=true


class Item(TypedDict, total=False):
    id: str
    title: str
    category: str
    vault: VaultRef
    urls: list[dict[str, Any]]
    favorite: bool
    tags: list[str]
    version: int
    state: Literal["ACTIVE", "ARCHIVED", "DELETED"]
    createdAt: str
    updatedAt: str
    lastEditedBy: str
    sections: list[dict[str, Any]]
    fields: list[dict[str, Any]]
    files: list[ItemFile]


class ActivityResource(TypedDict, total=False):
    type: Literal["ITEM", "VAULT"]
    vault: dict[str, str]
    item: dict[str, str]
    itemVersion: int


class APIRequest(TypedDict, total=False):
    """One entry of the Connect server's activity log."""
    requestId: str
    timestamp: str
    action: Literal["READ", "CREATE", "UPDATE", "DELETE"]
    result: Literal["SUCCESS", "DENY"]
    actor: dict[str, Any]
    resource: ActivityResource


class ServerDependency(TypedDict, total=False):
    service: str
    status: Literal["ACTIVE", "INACTIVE", "UNKNOWN"]
    message: str


class ServerHealth(TypedDict, total=False):
    name: str
    version: str
    dependencies: list[ServerDependency]


class ConnectionStatus(TypedDict):
    connected: bool
    message: str
