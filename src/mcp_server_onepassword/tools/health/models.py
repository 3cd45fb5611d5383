"""
Pydantic models for health tools.
"""
from __future__ import annotations

from mcp_server_onepassword.core.models import BaseToolInput, StrictInput


class GetHealthInput(BaseToolInput):
    """Input for the Connect server health check."""


class HeartbeatInput(StrictInput):
    """The heartbeat takes no arguments."""


class ConnectionCheckInput(StrictInput):
    """Connection testing takes no arguments."""
