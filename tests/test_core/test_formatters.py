"""
Tests for core formatters module.
"""
from __future__ import annotations

import json

import pytest

from mcp_server_onepassword.core.errors import NotFoundError, RateLimitError
from mcp_server_onepassword.core.formatters import (
    Formatter,
    JSONFormatter,
    MarkdownFormatter,
    ResponseFormat,
    ToolResponse,
    format_error,
    format_response,
    format_success,
    truncate,
)
from mcp_server_onepassword.core.models import PaginatedOutput


class TestFormatter:
    """Tests for base Formatter class."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (512, "512 B"),
            (2048, "2.0 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (3 * 1024 ** 3, "3.0 GB"),
            (0, "0 B"),
        ],
    )
    def test_format_bytes(self, size, expected):
        assert Formatter.format_bytes(size) == expected

    def test_format_key(self):
        assert Formatter.format_key("contentVersion") == "Content Version"
        assert Formatter.format_key("content_type") == "Content type"
        assert Formatter.format_key("id") == "Id"

    def test_cell(self):
        assert Formatter.cell(None) == "-"
        assert Formatter.cell("") == "-"
        assert Formatter.cell(0) == "0"


class TestMarkdownFormatter:
    """Tests for MarkdownFormatter."""

    def test_table(self):
        result = MarkdownFormatter.table(["A", "B"], [[1, None]])
        assert result.splitlines() == ["| A | B |", "| --- | --- |", "| 1 | - |"]

    def test_vaults_table(self, mock_vault):
        result = MarkdownFormatter.vaults_table([mock_vault])
        assert "| ID | Name | Description | Items |" in result
        assert "| ytrfte14kw1uex5txaore1emkz | Engineering | Shared engineering secrets | 42 |" in result

    def test_items_table(self, mock_item):
        result = MarkdownFormatter.items_table([mock_item])
        assert "| ID | Title | Category | Vault | Tags |" in result
        assert "| Staging DB | LOGIN | Engineering | db, staging |" in result

    def test_items_table_vault_id_fallback(self):
        result = MarkdownFormatter.items_table([{"id": "i1", "title": "t", "vault": {"id": "v1"}}])
        assert "| i1 | t | - | v1 | - |" in result

    def test_files_table(self, mock_files):
        result = MarkdownFormatter.files_table(mock_files)
        assert "| ID | Name | Size | Content Type |" in result
        assert "512 B" in result
        assert "2.0 KB" in result

    def test_activity_table(self, mock_activity):
        result = MarkdownFormatter.activity_table(mock_activity + [{"requestId": "req-3"}])
        lines = result.splitlines()
        assert lines[0] == "| Request ID | Timestamp | Action | Result | Resource |"
        assert lines[2].endswith("| i1 |")
        assert lines[3].endswith("| v2 |")
        assert lines[4] == "| req-3 | - | - | - | - |"

    def test_generic_table_caps_columns(self):
        record = {f"k{i}": i for i in range(8)}
        header = MarkdownFormatter.generic_table([record]).splitlines()[0]
        assert header == "| k0 | k1 | k2 | k3 | k4 |"

    def test_generic_table_missing_keys(self):
        result = MarkdownFormatter.generic_table([{"a": 1, "b": 2}, {"a": 3}])
        assert "| 3 | - |" in result

    def test_health(self, mock_health):
        result = MarkdownFormatter.health(mock_health)
        assert "## Server Health" in result
        assert "**Name:** 1Password Connect API" in result
        assert "**Version:** 1.7.2" in result
        assert "| sync | ACTIVE | TLS |" in result
        assert "| sqlite | ACTIVE | - |" in result


class TestFormatResponse:
    """Tests for format_response."""

    def test_json_round_trip(self, mock_item):
        response = format_response(mock_item, ResponseFormat.JSON, "item")
        assert response.is_error is False
        assert len(response.content) == 1
        assert response.content[0].type == "text"
        assert json.loads(response.text) == mock_item

    def test_json_accepts_string_format(self, mock_vault):
        response = format_response([mock_vault], "json", "vaults")
        assert json.loads(response.text) == [mock_vault]

    def test_markdown_list(self, mock_vault):
        response = format_response([mock_vault], ResponseFormat.MARKDOWN, "vaults")
        assert response.text.startswith("| ID | Name | Description | Items |")

    def test_markdown_record(self, mock_vault):
        response = format_response(mock_vault, ResponseFormat.MARKDOWN, "vault")
        assert response.text.startswith("## Vault")
        assert "**Name:** Engineering" in response.text
        assert "**Content Version:** 17" in response.text

    def test_markdown_record_nested_values(self, mock_item):
        text = format_response(mock_item, ResponseFormat.MARKDOWN, "item").text
        assert "**Fields:**" in text
        assert "```json" in text

    def test_markdown_health(self, mock_health):
        text = format_response(mock_health, ResponseFormat.MARKDOWN, "health").text
        assert text.startswith("## Server Health")

    def test_markdown_paginated(self, mock_activity):
        page = PaginatedOutput[dict].single_page(mock_activity)
        text = format_response(page, ResponseFormat.MARKDOWN, "activity").text
        assert text.startswith("## Activity")
        assert "**Showing:** 2" in text
        assert "**Total:**" not in text
        assert "More available" not in text
        assert "| req-1 |" in text

    def test_markdown_paginated_with_total(self):
        data = {"items": [{"id": "a"}], "count": 1, "total": 9, "has_more": True, "next_offset": 1}
        text = format_response(data, ResponseFormat.MARKDOWN, "things").text
        assert "**Total:** 9 | **Showing:** 1" in text
        assert "**More available:** Yes (offset: `1`)" in text

    def test_markdown_paginated_empty(self):
        page = PaginatedOutput[dict].single_page([])
        text = format_response(page, ResponseFormat.MARKDOWN, "activity").text
        assert "_No items found._" in text

    def test_model_payload_json(self, mock_activity):
        page = PaginatedOutput[dict].single_page(mock_activity)
        data = json.loads(format_response(page, ResponseFormat.JSON, "activity").text)
        assert data["count"] == 2
        assert data["has_more"] is False
        assert data["items"] == mock_activity


class TestTruncation:
    """Tests for the response character limit."""

    def test_short_text_untouched(self):
        assert truncate("abc", limit=10) == "abc"

    def test_long_text_truncated(self):
        result = truncate("x" * 50, limit=10)
        assert result.startswith("x" * 10 + "\n")
        assert "truncated: response exceeded 10 characters" in result

    def test_markdown_uses_configured_limit(self, monkeypatch, mock_vault):
        monkeypatch.setenv("CHARACTER_LIMIT", "100")
        vaults = [dict(mock_vault, id=f"v{n}") for n in range(50)]
        response = format_response(vaults, ResponseFormat.MARKDOWN, "vaults")
        assert "truncated: response exceeded 100 characters" in response.text
        assert response.text.index("\n\n... [truncated") == 100

    def test_json_over_limit_is_complete(self, monkeypatch, mock_vault):
        monkeypatch.setenv("CHARACTER_LIMIT", "100")
        vaults = [dict(mock_vault, id=f"v{n}") for n in range(50)]
        response = format_response(vaults, ResponseFormat.JSON, "vaults")
        assert len(response.text) > 100
        assert json.loads(response.text) == vaults

    def test_success_over_limit_is_complete(self, monkeypatch):
        monkeypatch.setenv("CHARACTER_LIMIT", "100")
        content = "QUJD" * 500
        response = format_success("File content retrieved", content=content)
        assert json.loads(response.text)["content"] == content

    def test_text_block_not_truncated(self, monkeypatch):
        monkeypatch.setenv("CHARACTER_LIMIT", "100")
        assert ToolResponse.text_block("y" * 500).text == "y" * 500


class TestSuccessAndError:
    """Tests for format_success and format_error."""

    def test_format_success(self):
        response = format_success("Item created", item={"id": "i1"})
        assert json.loads(response.text) == {
            "success": True,
            "message": "Item created",
            "item": {"id": "i1"},
        }

    def test_format_error_taxonomy(self):
        response = format_error(NotFoundError("Vault", "v1"))
        assert response.is_error is True
        payload = json.loads(response.text)
        assert payload["error"] == "Error: Vault with ID 'v1' not found"
        assert payload["details"]["code"] == "NOT_FOUND"
        assert payload["details"]["status_code"] == 404

    def test_format_error_retryable(self):
        payload = json.loads(format_error(RateLimitError("Rate limit exceeded", 12)).text)
        assert payload["error"] == "Error: Rate limit exceeded (retryable)"
        assert payload["details"]["retry_after_seconds"] == 12

    def test_format_error_plain_exception(self):
        payload = json.loads(format_error(RuntimeError("kaboom")).text)
        assert payload["error"] == "Error: kaboom"
        assert payload["details"]["name"] == "RuntimeError"

    def test_json_formatter(self):
        assert JSONFormatter.format({"a": 1}) == '{\n  "a": 1\n}'
