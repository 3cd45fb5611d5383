"""
Activity domain tools.
"""
from __future__ import annotations

from .models import ListActivityInput
from .tools import list_activity, register_activity_tools

__all__ = ["register_activity_tools", "list_activity", "ListActivityInput"]
