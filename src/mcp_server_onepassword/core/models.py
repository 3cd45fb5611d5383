"""
Base Pydantic models for 1Password Connect MCP tools.

Provides standardized input/output models with validation and documentation.
"""
from __future__ import annotations

from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from mcp_server_onepassword.config import LimitsConfig

from .errors import ValidationError
from .formatters import ResponseFormat

__all__ = [
    "ResponseFormat",
    "ResourceId",
    "StrictInput",
    "BaseToolInput",
    "VaultScopedInput",
    "ItemScopedInput",
    "PaginatedInput",
    "PaginatedOutput",
]


# Identifiers are the only strings trimmed on input; titles, labels and
# secret values are forwarded exactly as given.
ResourceId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class StrictInput(BaseModel):
    """Model config shared by every tool input and nested input object."""
    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
        populate_by_name=True,
    )


class BaseToolInput(StrictInput):
    """Base model for tool inputs that render a response."""

    response_format: ResponseFormat = Field(
        default=ResponseFormat.JSON,
        description="Output format: 'json' for machine-readable, 'markdown' for human-readable"
    )


class VaultScopedInput(BaseToolInput):
    """Base model for tools operating inside one vault."""

    vault_id: ResourceId = Field(..., description="Vault UUID")


class ItemScopedInput(VaultScopedInput):
    """Base model for tools operating on one item."""

    item_id: ResourceId = Field(..., description="Item UUID")


class PaginatedInput(BaseToolInput):
    """Base model for paginated list operations.

    The upper bound on ``limit`` comes from configuration, so it is checked
    at dispatch time by ``checked_limit`` rather than in the schema.
    """

    limit: int | None = Field(
        default=None,
        description="Maximum results to return (server default when omitted)",
        ge=1,
    )
    offset: int | None = Field(
        default=None,
        description="Number of results to skip for pagination",
        ge=0
    )

    def checked_limit(self, limits: LimitsConfig) -> int | None:
        """Return the requested page size, enforcing the configured maximum.

        None means the caller gave no limit and the server default applies.
        """
        if self.limit is not None and self.limit > limits.max_page_size:
            raise ValidationError(
                f"limit must not exceed {limits.max_page_size}",
                {"limit": [f"must be between 1 and {limits.max_page_size}"]},
            )
        return self.limit


T = TypeVar('T')


class PaginatedOutput(BaseModel, Generic[T]):
    """Standard pagination response wrapper."""

    total: int | None = Field(default=None, description="Total available results, if known")
    count: int = Field(description="Number of results in this response")
    items: list[T] = Field(description="Result items")
    has_more: bool = Field(description="Whether more results are available (advisory)")
    next_offset: int | None = Field(
        default=None,
        description="Offset for next page (None if no more pages)"
    )

    @classmethod
    def single_page(cls, items: list[T]) -> PaginatedOutput[T]:
        """Wrap a bare array from an endpoint that exposes no cursor.

        The Connect activity endpoint returns a plain list, so there is no
        way to know whether more entries exist: ``has_more`` is always False.
        """
        return cls(count=len(items), items=items, has_more=False)
