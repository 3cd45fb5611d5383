"""
Health and connectivity tools.
"""
from __future__ import annotations

from .models import ConnectionCheckInput, GetHealthInput, HeartbeatInput
from .tools import check_connection, get_health, heartbeat, register_health_tools

__all__ = [
    "register_health_tools",
    "get_health",
    "heartbeat",
    "check_connection",
    "GetHealthInput",
    "HeartbeatInput",
    "ConnectionCheckInput",
]
