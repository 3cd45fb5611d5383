"""
1Password Connect API client.

Handles all HTTP communication with a Connect server. A client is bound to
one tenant's credentials and is built fresh for every tool call through
``create_connect_client``; nothing here is cached or shared between calls.

Every non-2xx response is raised as a member of the error taxonomy in
``core.errors``; transport failures from httpx propagate unchanged.
"""
from __future__ import annotations

import json
from time import perf_counter
from typing import Any
from urllib.parse import quote

import httpx

from mcp_server_onepassword.auth import TenantCredentials, mask_secret

from .entities import ConnectionStatus, Item, ItemFile, ServerHealth, Vault
from .errors import (
    AuthenticationError,
    AuthorizationError,
    ConnectAPIError,
    NotFoundError,
    RateLimitError,
)
from .models import PaginatedOutput
from .observability import get_logger

DEFAULT_CONNECT_HOST = "http://localhost:8080"
API_VERSION = "v1"
DEFAULT_RETRY_AFTER = 60
JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"

logger = get_logger("onepassword-mcp.client")


def _segment(value: str) -> str:
    return quote(value, safe="")


def parse_retry_after(value: str | None) -> int:
    """Parse a Retry-After header in seconds, defaulting to 60."""
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        return int(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER


def error_message(response: httpx.Response) -> str:
    """Best-effort message from a JSON error body."""
    fallback = f"API error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return fallback


class ConnectClient:
    """Async client for one tenant's 1Password Connect server.

    Example:
        client = create_connect_client(credentials)
        vaults = await client.list_vaults()
    """

    def __init__(
        self,
        credentials: TenantCredentials,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: Tenant credentials parsed from request headers
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._credentials = credentials
        host = (credentials.connect_host or DEFAULT_CONNECT_HOST).rstrip("/")
        self.base_url = f"{host}/{API_VERSION}"
        self._timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return (
            f"ConnectClient(base_url={self.base_url!r}, "
            f"token={mask_secret(self._credentials.connect_token)!r})"
        )

    # =========================================================================
    # HTTP Request Helpers
    # =========================================================================

    def _auth_headers(self) -> dict[str, str]:
        if not self._credentials.connect_token:
            raise AuthenticationError(
                "No Connect token provided. Include X-1Password-Connect-Token header."
            )
        return {"Authorization": f"Bearer {self._credentials.connect_token}"}

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        body: Any = None,
        content_type: str = "application/json",
        accept: str = "application/json",
        entity: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Issue one request and map failures onto the error taxonomy.

        Args:
            entity: (kind, identifier) reported by NotFoundError on 404;
                defaults to ("Resource", path)
        """
        headers = self._auth_headers()
        headers["Accept"] = accept
        content = None
        if body is not None:
            headers["Content-Type"] = content_type
            content = json.dumps(body)

        started = perf_counter()
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as http:
            response = await http.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                content=content,
                headers=headers,
            )
        logger.debug(
            "Connect API request",
            method=method,
            path=path,
            status=response.status_code,
            duration_ms=round((perf_counter() - started) * 1000, 1),
        )

        status = response.status_code
        if status == 429:
            raise RateLimitError(
                "Rate limit exceeded",
                parse_retry_after(response.headers.get("Retry-After")),
            )
        if status == 401:
            raise AuthenticationError("Authentication failed. Check your Connect token.")
        if status == 403:
            raise AuthorizationError(
                "Authorization failed. Check your service account permissions."
            )
        if status == 404:
            kind, identifier = entity or ("Resource", path)
            raise NotFoundError(kind, identifier)
        if not response.is_success:
            raise ConnectAPIError(error_message(response), status)
        return response

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._send(method, path, **kwargs)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _inline_params(inline_content: bool | None) -> dict[str, str] | None:
        if inline_content is None:
            return None
        return {"inline_content": "true" if inline_content else "false"}

    # =========================================================================
    # Connection
    # =========================================================================

    async def test_connection(self) -> ConnectionStatus:
        """Report connectivity. Never raises."""
        try:
            health = await self.get_health()
            if not isinstance(health, dict):
                raise ConnectAPIError("Unexpected health response from 1Password Connect server")
        except Exception as e:
            message = str(e) or "Connection failed"
            logger.info("Connection test failed", base_url=self.base_url, error=message)
            return {"connected": False, "message": message}
        return {
            "connected": True,
            "message": (
                "Successfully connected to 1Password Connect server "
                f"({health.get('name')} v{health.get('version')})"
            ),
        }

    # =========================================================================
    # Health & Monitoring
    # =========================================================================

    async def get_health(self) -> ServerHealth:
        return await self._request_json("GET", "/health")

    async def heartbeat(self) -> str:
        """Ping the server; the heartbeat endpoint answers in plain text."""
        response = await self._send("GET", "/heartbeat", accept="text/plain")
        return response.text

    # =========================================================================
    # Vaults
    # =========================================================================

    async def list_vaults(self, filter: str | None = None) -> list[Vault]:
        params = {"filter": filter} if filter else None
        return await self._request_json("GET", "/vaults", params=params)

    async def get_vault(self, vault_id: str) -> Vault:
        return await self._request_json(
            "GET", f"/vaults/{_segment(vault_id)}", entity=("Vault", vault_id)
        )

    # =========================================================================
    # Items
    # =========================================================================

    def _item_path(self, vault_id: str, item_id: str | None = None) -> str:
        path = f"/vaults/{_segment(vault_id)}/items"
        if item_id is not None:
            path += f"/{_segment(item_id)}"
        return path

    async def list_items(self, vault_id: str, filter: str | None = None) -> list[Item]:
        params = {"filter": filter} if filter else None
        return await self._request_json(
            "GET", self._item_path(vault_id), params=params, entity=("Vault", vault_id)
        )

    async def get_item(self, vault_id: str, item_id: str) -> Item:
        return await self._request_json(
            "GET", self._item_path(vault_id, item_id), entity=("Item", item_id)
        )

    async def create_item(self, vault_id: str, item: dict[str, Any]) -> Item:
        """Create an item; the payload's vault reference is forced to vault_id."""
        payload = {**item, "vault": {"id": vault_id}}
        return await self._request_json(
            "POST", self._item_path(vault_id), body=payload, entity=("Vault", vault_id)
        )

    async def update_item(self, vault_id: str, item_id: str, item: dict[str, Any]) -> Item:
        """Replace an item entirely (PUT); id and vault are forced to match the path."""
        payload = {**item, "id": item_id, "vault": {"id": vault_id}}
        return await self._request_json(
            "PUT", self._item_path(vault_id, item_id), body=payload, entity=("Item", item_id)
        )

    async def patch_item(
        self, vault_id: str, item_id: str, operations: list[dict[str, Any]]
    ) -> Item:
        """Apply RFC 6902 operations. The list is sent as-is; the server validates it."""
        return await self._request_json(
            "PATCH",
            self._item_path(vault_id, item_id),
            body=operations,
            content_type=JSON_PATCH_CONTENT_TYPE,
            entity=("Item", item_id),
        )

    async def delete_item(self, vault_id: str, item_id: str) -> None:
        await self._send("DELETE", self._item_path(vault_id, item_id), entity=("Item", item_id))

    # =========================================================================
    # Files
    # =========================================================================

    def _files_path(self, vault_id: str, item_id: str, file_id: str | None = None) -> str:
        path = f"{self._item_path(vault_id, item_id)}/files"
        if file_id is not None:
            path += f"/{_segment(file_id)}"
        return path

    async def list_files(
        self, vault_id: str, item_id: str, inline_content: bool | None = None
    ) -> list[ItemFile]:
        return await self._request_json(
            "GET",
            self._files_path(vault_id, item_id),
            params=self._inline_params(inline_content),
            entity=("Item", item_id),
        )

    async def get_file(
        self,
        vault_id: str,
        item_id: str,
        file_id: str,
        inline_content: bool | None = None,
    ) -> ItemFile:
        return await self._request_json(
            "GET",
            self._files_path(vault_id, item_id, file_id),
            params=self._inline_params(inline_content),
            entity=("File", file_id),
        )

    async def get_file_content(self, vault_id: str, item_id: str, file_id: str) -> bytes:
        """Download raw file bytes; the body is never JSON-decoded."""
        response = await self._send(
            "GET",
            f"{self._files_path(vault_id, item_id, file_id)}/content",
            accept="*/*",
            entity=("File", file_id),
        )
        return response.content

    # =========================================================================
    # Activity
    # =========================================================================

    async def list_activity(
        self, limit: int | None = None, offset: int | None = None
    ) -> PaginatedOutput[dict[str, Any]]:
        """Fetch the API activity log.

        The endpoint returns a bare array with no cursor, so the result is a
        single page: count is the array length and has_more is always False.
        """
        params = {}
        if limit:
            params["limit"] = str(limit)
        if offset:
            params["offset"] = str(offset)
        items = await self._request_json("GET", "/activity", params=params or None) or []
        return PaginatedOutput[dict[str, Any]].single_page(items)


def create_connect_client(
    credentials: TenantCredentials,
    *,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ConnectClient:
    """Create a Connect client bound to one tenant's credentials.

    Args:
        credentials: Tenant credentials parsed from request headers
        timeout: Request timeout in seconds
        transport: Optional httpx transport override
    """
    return ConnectClient(credentials, timeout=timeout, transport=transport)
