"""
Item domain tools.

Listing, reading, creating, replacing, patching and deleting vault items.
"""
from __future__ import annotations

from .models import (
    CharacterSet,
    CreateItemInput,
    DeleteItemInput,
    FieldPurpose,
    FieldType,
    GetItemInput,
    ItemCategory,
    ItemFieldInput,
    JsonPatchOperation,
    ListItemsInput,
    PasswordRecipe,
    PatchItemInput,
    PatchOp,
    UpdateItemInput,
)
from .tools import (
    create_item,
    delete_item,
    get_item,
    list_items,
    patch_item,
    register_item_tools,
    update_item,
)

__all__ = [
    # Registration function
    "register_item_tools",

    # Handlers
    "list_items",
    "get_item",
    "create_item",
    "update_item",
    "patch_item",
    "delete_item",

    # Input models
    "ListItemsInput",
    "GetItemInput",
    "CreateItemInput",
    "UpdateItemInput",
    "PatchItemInput",
    "DeleteItemInput",
    "ItemFieldInput",
    "PasswordRecipe",
    "JsonPatchOperation",

    # Enums
    "ItemCategory",
    "FieldType",
    "FieldPurpose",
    "PatchOp",
    "CharacterSet",
]
