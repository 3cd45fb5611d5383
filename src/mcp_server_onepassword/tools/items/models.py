"""
Pydantic models for item tools.

All closed enumerations are validated here, so an unknown category, field
type, purpose or patch op is rejected before any Connect call is made.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from mcp_server_onepassword.core.models import (
    ItemScopedInput,
    ResourceId,
    StrictInput,
    VaultScopedInput,
)


class ItemCategory(str, Enum):
    """Item categories supported by 1Password Connect."""
    LOGIN = "LOGIN"
    SECURE_NOTE = "SECURE_NOTE"
    CREDIT_CARD = "CREDIT_CARD"
    IDENTITY = "IDENTITY"
    PASSWORD = "PASSWORD"
    DOCUMENT = "DOCUMENT"
    API_CREDENTIAL = "API_CREDENTIAL"
    DATABASE = "DATABASE"
    BANK_ACCOUNT = "BANK_ACCOUNT"
    CUSTOM = "CUSTOM"
    DRIVER_LICENSE = "DRIVER_LICENSE"
    EMAIL_ACCOUNT = "EMAIL_ACCOUNT"
    MEMBERSHIP = "MEMBERSHIP"
    OUTDOOR_LICENSE = "OUTDOOR_LICENSE"
    PASSPORT = "PASSPORT"
    REWARD_PROGRAM = "REWARD_PROGRAM"
    SERVER = "SERVER"
    SOCIAL_SECURITY_NUMBER = "SOCIAL_SECURITY_NUMBER"
    SOFTWARE_LICENSE = "SOFTWARE_LICENSE"
    SSH_KEY = "SSH_KEY"
    WIRELESS_ROUTER = "WIRELESS_ROUTER"


class FieldType(str, Enum):
    """Item field types."""
    STRING = "STRING"
    CONCEALED = "CONCEALED"
    EMAIL = "EMAIL"
    URL = "URL"
    OTP = "OTP"
    DATE = "DATE"
    MONTH_YEAR = "MONTH_YEAR"
    PHONE = "PHONE"
    MENU = "MENU"
    FILE = "FILE"
    ADDRESS = "ADDRESS"
    CREDIT_CARD_TYPE = "CREDIT_CARD_TYPE"
    CREDIT_CARD_NUMBER = "CREDIT_CARD_NUMBER"
    REFERENCE = "REFERENCE"
    SSHKEY = "SSHKEY"


class FieldPurpose(str, Enum):
    USERNAME = "USERNAME"
    PASSWORD = "PASSWORD"
    NOTES = "NOTES"


class PatchOp(str, Enum):
    """RFC 6902 operation names."""
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


class CharacterSet(str, Enum):
    LETTERS = "LETTERS"
    DIGITS = "DIGITS"
    SYMBOLS = "SYMBOLS"


# =============================================================================
# Nested Input Objects
# =============================================================================

class SectionRef(StrictInput):
    id: str = Field(..., description="Section identifier", min_length=1)


class PasswordRecipe(StrictInput):
    """Recipe the Connect server uses when asked to generate a field value."""

    length: int | None = Field(default=None, description="Generated value length", ge=1, le=64)
    character_sets: list[CharacterSet] | None = Field(
        default=None,
        alias="characterSets",
        description="Character sets to draw from (LETTERS, DIGITS, SYMBOLS)",
    )
    exclude_characters: str | None = Field(
        default=None,
        alias="excludeCharacters",
        description="Characters never to use in the generated value",
    )


class ItemFieldInput(StrictInput):
    """A field on an item."""

    id: str = Field(..., description="Unique identifier for the field", min_length=1)
    type: FieldType | None = Field(default=None, description="Type of the field")
    purpose: FieldPurpose | None = Field(
        default=None, description="Purpose of the field (USERNAME, PASSWORD, NOTES)"
    )
    label: str | None = Field(default=None, description="Label displayed for the field")
    value: str | None = Field(default=None, description="Value of the field")
    section: SectionRef | None = Field(default=None, description="Section this field belongs to")
    generate: bool | None = Field(
        default=None, description="Ask the server to generate the value"
    )
    recipe: PasswordRecipe | None = Field(
        default=None, description="Generation recipe, used with generate=true"
    )


class ItemSectionInput(StrictInput):
    id: str = Field(..., description="Unique identifier for the section", min_length=1)
    label: str | None = Field(default=None, description="Label for the section")


class ItemUrlInput(StrictInput):
    href: str = Field(..., description="The URL", min_length=1)
    label: str | None = Field(default=None, description="Label for the URL")
    primary: bool | None = Field(default=None, description="Whether this is the primary URL")


class JsonPatchOperation(StrictInput):
    """A single RFC 6902 operation. Paths are not checked locally."""

    op: PatchOp = Field(..., description="Operation type")
    path: str = Field(..., description="JSON Pointer path (e.g., '/title')")
    value: Any = Field(default=None, description="Value for add/replace/test operations")
    from_: str | None = Field(
        default=None, alias="from", description="Source path for move/copy operations"
    )


# =============================================================================
# Tool Input Models
# =============================================================================

class ListItemsInput(VaultScopedInput):
    """Input for listing items in a vault."""

    filter: str | None = Field(
        default=None,
        description="Filter by title or tag (e.g., 'title eq \"My Login\"' or 'tag eq \"work\"')",
    )


class GetItemInput(ItemScopedInput):
    """Input for getting a single item with all fields and sections."""


class CreateItemInput(StrictInput):
    """Input for creating an item."""

    vault_id: ResourceId = Field(..., description="Vault UUID to create the item in")
    title: str = Field(..., description="Title of the item", min_length=1)
    category: ItemCategory = Field(
        ..., description="Item category (LOGIN, SECURE_NOTE, PASSWORD, API_CREDENTIAL, ...)"
    )
    fields: list[ItemFieldInput] | None = Field(default=None, description="Item fields")
    sections: list[ItemSectionInput] | None = Field(default=None, description="Item sections")
    urls: list[ItemUrlInput] | None = Field(default=None, description="Item URLs")
    tags: list[str] | None = Field(default=None, description="Item tags")
    favorite: bool | None = Field(default=None, description="Whether to mark as favorite")

    def to_payload(self) -> dict[str, Any]:
        """Item body as the Connect API expects it (camelCase, no unset keys)."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"vault_id", "item_id"},
        )


class UpdateItemInput(CreateItemInput):
    """Input for replacing an item entirely. Omitted fields are dropped."""

    item_id: ResourceId = Field(..., description="Item UUID")


class PatchItemInput(StrictInput):
    """Input for a partial JSON Patch update."""

    vault_id: ResourceId = Field(..., description="Vault UUID")
    item_id: ResourceId = Field(..., description="Item UUID")
    operations: list[JsonPatchOperation] = Field(..., description="JSON Patch operations")

    def patch_document(self) -> list[dict[str, Any]]:
        # exclude_unset keeps an explicit null value but drops omitted keys
        return [
            op.model_dump(mode="json", by_alias=True, exclude_unset=True)
            for op in self.operations
        ]


class DeleteItemInput(StrictInput):
    """Input for permanently deleting an item."""

    vault_id: ResourceId = Field(..., description="Vault UUID")
    item_id: ResourceId = Field(..., description="Item UUID to delete")


__all__ = [
    "ItemCategory",
    "FieldType",
    "FieldPurpose",
    "PatchOp",
    "CharacterSet",
    "SectionRef",
    "PasswordRecipe",
    "ItemFieldInput",
    "ItemSectionInput",
    "ItemUrlInput",
    "JsonPatchOperation",
    "ListItemsInput",
    "GetItemInput",
    "CreateItemInput",
    "UpdateItemInput",
    "PatchItemInput",
    "DeleteItemInput",
]
