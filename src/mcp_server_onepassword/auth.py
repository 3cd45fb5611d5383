"""
Tenant credential resolution.

Connect tokens and server URLs arrive with every request as HTTP headers,
never from process configuration, so one server instance can serve many
1Password accounts at once. Credentials live only as long as the call that
carried them.

Request Headers:
- X-1Password-Connect-Token: Bearer token for the Connect server
- X-1Password-Connect-Host: URL of the Connect server (e.g., http://localhost:8080)
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastmcp.server.dependencies import get_http_headers

from mcp_server_onepassword.core.errors import AuthenticationError

TOKEN_HEADER = "X-1Password-Connect-Token"
HOST_HEADER = "X-1Password-Connect-Host"
REQUIRED_HEADERS: tuple[str, ...] = (TOKEN_HEADER, HOST_HEADER)


@dataclass(frozen=True)
class TenantCredentials:
    """Credentials for a single Connect account, scoped to one request."""

    connect_token: str | None = None
    connect_host: str | None = None

    def __repr__(self) -> str:
        return (
            f"TenantCredentials(connect_token={mask_secret(self.connect_token)!r}, "
            f"connect_host={self.connect_host!r})"
        )


class MissingCredentialsError(AuthenticationError):
    """Raised when a request lacks one or both credential headers."""

    def __init__(self, missing: list[str]) -> None:
        hints = {
            TOKEN_HEADER: f"Missing {TOKEN_HEADER} header. Provide your Connect server token.",
            HOST_HEADER: (
                f"Missing {HOST_HEADER} header. Provide your Connect server URL "
                "(e.g., http://localhost:8080)."
            ),
        }
        super().__init__(" ".join(hints[name] for name in missing), code="MISSING_CREDENTIALS")
        self.missing = list(missing)
        self.required_headers = list(REQUIRED_HEADERS)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["missing_headers"] = self.missing
        data["required_headers"] = self.required_headers
        return data


def mask_secret(value: str | None) -> str:
    """Mask a secret for display, keeping only a short prefix and suffix."""
    if not value:
        return "<unset>"
    if len(value) <= 12:
        return "***"
    return f"{value[:4]}...{value[-4:]}"


def parse_tenant_credentials(headers: Mapping[str, str]) -> TenantCredentials:
    """Extract tenant credentials from request headers (case-insensitive)."""
    lowered = {key.lower(): value for key, value in headers.items()}
    token = (lowered.get(TOKEN_HEADER.lower()) or "").strip()
    host = (lowered.get(HOST_HEADER.lower()) or "").strip()
    return TenantCredentials(connect_token=token or None, connect_host=host or None)


def validate_credentials(credentials: TenantCredentials) -> None:
    """Ensure both credential values are present.

    Raises:
        MissingCredentialsError: naming each absent header.
    """
    missing = []
    if not credentials.connect_token:
        missing.append(TOKEN_HEADER)
    if not credentials.connect_host:
        missing.append(HOST_HEADER)
    if missing:
        raise MissingCredentialsError(missing)


def resolve_request_credentials() -> TenantCredentials:
    """Read and validate credentials from the active MCP HTTP request.

    Outside an HTTP request (e.g. stdio) no headers exist, so this raises
    MissingCredentialsError rather than falling back to any global value.
    """
    credentials = parse_tenant_credentials(get_http_headers(include_all=True))
    validate_credentials(credentials)
    return credentials
