"""
Response formatting utilities for consistent output.

Supports both JSON (machine-readable, always complete) and markdown
(human-readable, capped at CHARACTER_LIMIT) formats,
and renders any failure as a uniform error block.
"""
from __future__ import annotations

import json
import re
from collections.abc import Callable
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

from mcp_server_onepassword.config import get_config

from .entities import APIRequest
from .errors import ConnectAPIError, error_details


class ResponseFormat(str, Enum):
    """Output format options for tool responses."""
    JSON = "json"
    MARKDOWN = "markdown"


class TextContent(BaseModel):
    """A single text block of a tool response."""
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Content array plus error flag, as handed to the MCP runtime."""
    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text_block(cls, text: str, is_error: bool = False) -> ToolResponse:
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def text(self) -> str:
        """All text blocks joined together."""
        return "\n".join(block.text for block in self.content)


def truncate(text: str, limit: int | None = None) -> str:
    """Cap markdown text at the configured character limit. JSON is never cut."""
    if limit is None:
        limit = get_config().limits.character_limit
    if limit <= 0 or len(text) <= limit:
        return text
    return f"{text[:limit]}\n\n... [truncated: response exceeded {limit} characters]"


class Formatter:
    """Base formatter with common utilities."""

    @staticmethod
    def format_bytes(size: int) -> str:
        """Format byte size to human readable (B, KB, MB, GB)."""
        if size < 1024:
            return f"{size} B"
        if size < 1024 ** 2:
            return f"{size / 1024:.1f} KB"
        if size < 1024 ** 3:
            return f"{size / 1024 ** 2:.1f} MB"
        return f"{size / 1024 ** 3:.1f} GB"

    @staticmethod
    def format_key(key: str) -> str:
        """Turn a camelCase or snake_case key into a Title Case label."""
        spaced = re.sub(r"([A-Z])", r" \1", key).replace("_", " ").strip()
        return spaced[:1].upper() + spaced[1:]

    @staticmethod
    def cell(value: Any) -> str:
        """Render a table cell, using '-' for missing values."""
        if value is None or value == "":
            return "-"
        return str(value)


class MarkdownFormatter(Formatter):
    """Markdown-specific formatting utilities."""

    @staticmethod
    def header(text: str, level: int = 2) -> str:
        """Create markdown header."""
        return f"{'#' * level} {text}"

    @staticmethod
    def table(headers: list[str], rows: list[list[Any]]) -> str:
        """Generate markdown table."""
        lines = []
        lines.append("| " + " | ".join(str(h) for h in headers) + " |")
        lines.append("| " + " | ".join(["---"] * len(headers)) + " |")
        for row in rows:
            lines.append("| " + " | ".join(Formatter.cell(c) for c in row) + " |")
        return "\n".join(lines)

    @staticmethod
    def code_block(code: str, language: str = "") -> str:
        """Create markdown code block."""
        return f"```{language}\n{code}\n```"

    @staticmethod
    def key_value(key: str, value: Any) -> str:
        """Format key-value pair."""
        return f"**{key}:** {value}"

    @classmethod
    def vaults_table(cls, vaults: list[dict[str, Any]]) -> str:
        rows = [
            [v.get("id"), v.get("name"), v.get("description"), v.get("items")]
            for v in vaults
        ]
        return cls.table(["ID", "Name", "Description", "Items"], rows)

    @classmethod
    def items_table(cls, items: list[dict[str, Any]]) -> str:
        rows = []
        for item in items:
            vault = item.get("vault") or {}
            tags = ", ".join(item.get("tags") or [])
            rows.append([
                item.get("id"),
                item.get("title"),
                item.get("category"),
                vault.get("name") or vault.get("id"),
                tags,
            ])
        return cls.table(["ID", "Title", "Category", "Vault", "Tags"], rows)

    @classmethod
    def files_table(cls, files: list[dict[str, Any]]) -> str:
        rows = []
        for f in files:
            size = f.get("size")
            rows.append([
                f.get("id"),
                f.get("name"),
                cls.format_bytes(size) if isinstance(size, int) else None,
                f.get("content_type"),
            ])
        return cls.table(["ID", "Name", "Size", "Content Type"], rows)

    @classmethod
    def activity_table(cls, requests: list[APIRequest]) -> str:
        rows = []
        for req in requests:
            resource = req.get("resource") or {}
            target = (resource.get("item") or {}).get("id") or (resource.get("vault") or {}).get("id")
            rows.append([
                req.get("requestId"),
                req.get("timestamp"),
                req.get("action"),
                req.get("result"),
                target,
            ])
        return cls.table(["Request ID", "Timestamp", "Action", "Result", "Resource"], rows)

    @classmethod
    def generic_table(cls, records: list[Any]) -> str:
        """Table keyed on the first record's own keys (max 5 columns)."""
        if not records:
            return "_No items_"
        first = records[0] if isinstance(records[0], dict) else {"value": records[0]}
        keys = list(first.keys())[:5]
        rows = []
        for record in records:
            if not isinstance(record, dict):
                record = {"value": record}
            rows.append([record.get(k) for k in keys])
        return cls.table(keys, rows)

    @classmethod
    def health(cls, health: dict[str, Any]) -> str:
        lines = [
            cls.header("Server Health"),
            "",
            cls.key_value("Name", health.get("name") or "-"),
            cls.key_value("Version", health.get("version") or "-"),
        ]
        dependencies = health.get("dependencies") or []
        if dependencies:
            rows = [[d.get("service"), d.get("status"), d.get("message")] for d in dependencies]
            lines += ["", cls.header("Dependencies", 3), cls.table(["Service", "Status", "Message"], rows)]
        return "\n".join(lines)

    @classmethod
    def record(cls, data: dict[str, Any], entity_type: str) -> str:
        """Format a single object as a heading plus key/value lines."""
        lines = [cls.header(_title(entity_type.removesuffix("s"))), ""]
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, (dict, list)):
                lines.append(f"**{cls.format_key(key)}:**")
                lines.append(cls.code_block(json.dumps(value, indent=2), "json"))
            else:
                lines.append(cls.key_value(cls.format_key(key), value))
        return "\n".join(lines)


# Table renderer per entity kind
TABLES: dict[str, Callable[[list[dict[str, Any]]], str]] = {
    "vaults": MarkdownFormatter.vaults_table,
    "items": MarkdownFormatter.items_table,
    "files": MarkdownFormatter.files_table,
    "activity": MarkdownFormatter.activity_table,
}


class JSONFormatter(Formatter):
    """JSON-specific formatting utilities."""

    @staticmethod
    def format(data: Any, indent: int = 2) -> str:
        """Format data as JSON string."""
        return json.dumps(data, indent=indent, default=str)


def _title(text: str) -> str:
    return text[:1].upper() + text[1:]


def _is_paginated(data: Any) -> bool:
    return isinstance(data, dict) and isinstance(data.get("items"), list) and "count" in data


def _paginated_markdown(data: dict[str, Any], entity_type: str) -> str:
    lines = [MarkdownFormatter.header(_title(entity_type)), ""]
    if data.get("total") is not None:
        lines.append(f"**Total:** {data['total']} | **Showing:** {data['count']}")
    else:
        lines.append(f"**Showing:** {data['count']}")
    if data.get("has_more"):
        lines.append(f"**More available:** Yes (offset: `{data.get('next_offset')}`)")
    lines.append("")

    items = data["items"]
    if not items:
        lines.append("_No items found._")
    else:
        lines.append(TABLES.get(entity_type, MarkdownFormatter.generic_table)(items))
    return "\n".join(lines)


def to_markdown(data: Any, entity_type: str) -> str:
    """Render a decoded payload as markdown for the given entity kind."""
    if _is_paginated(data):
        return _paginated_markdown(data, entity_type)
    if entity_type == "health" and isinstance(data, dict):
        return MarkdownFormatter.health(data)
    if isinstance(data, list):
        if entity_type == "health" and data and isinstance(data[0], dict):
            return MarkdownFormatter.health(data[0])
        return TABLES.get(entity_type, MarkdownFormatter.generic_table)(data)
    if isinstance(data, dict):
        return MarkdownFormatter.record(data, entity_type)
    return str(data)


def format_response(
    data: Any,
    response_format: ResponseFormat | str,
    entity_type: str,
) -> ToolResponse:
    """
    Format a successful response based on requested format.

    Args:
        data: Decoded payload (dict, list, or pydantic model)
        response_format: Output format (json or markdown)
        entity_type: Entity kind label, e.g. 'vaults', 'item', 'activity'

    Returns:
        ToolResponse with a single text block
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    if ResponseFormat(response_format) == ResponseFormat.MARKDOWN:
        return ToolResponse.text_block(truncate(to_markdown(data, entity_type)))
    return ToolResponse.text_block(JSONFormatter.format(data))


def format_success(message: str, **data: Any) -> ToolResponse:
    """Format a success acknowledgement for mutations and pings."""
    result: dict[str, Any] = {"success": True, "message": message}
    result.update(data)
    return ToolResponse.text_block(JSONFormatter.format(result))


def format_error(error: BaseException) -> ToolResponse:
    """Render any failure as an error block with structured details."""
    if isinstance(error, ConnectAPIError):
        message = f"Error: {error.message}"
        if error.retryable:
            message += " (retryable)"
    else:
        message = f"Error: {error}"

    payload = {"error": message, "details": error_details(error)}
    return ToolResponse.text_block(JSONFormatter.format(payload), is_error=True)
