"""
Core infrastructure modules for the 1Password Connect MCP Server.

This package contains:
- client: per-tenant Connect API client (import from .client directly)
- entities: shapes of Connect API payloads
- errors: error taxonomy
- formatters: JSON / markdown response rendering
- models: base Pydantic models
- observability: structured logging
- registry: tool dispatch and error containment
"""

from .errors import (
    AuthenticationError,
    AuthorizationError,
    ConnectAPIError,
    ErrorCategory,
    NotFoundError,
    RateLimitError,
    ValidationError,
    error_details,
    is_retryable_error,
)
from .formatters import (
    JSONFormatter,
    MarkdownFormatter,
    ResponseFormat,
    ToolResponse,
    format_error,
    format_response,
    format_success,
)
from .models import (
    BaseToolInput,
    ItemScopedInput,
    PaginatedInput,
    PaginatedOutput,
    VaultScopedInput,
)
from .observability import configure_logging, get_logger

__all__ = [
    # Errors
    "ErrorCategory",
    "ConnectAPIError",
    "RateLimitError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ValidationError",
    "is_retryable_error",
    "error_details",
    # Formatters
    "ResponseFormat",
    "ToolResponse",
    "MarkdownFormatter",
    "JSONFormatter",
    "format_response",
    "format_success",
    "format_error",
    # Models
    "BaseToolInput",
    "VaultScopedInput",
    "ItemScopedInput",
    "PaginatedInput",
    "PaginatedOutput",
    # Observability
    "configure_logging",
    "get_logger",
]
