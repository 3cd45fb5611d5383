"""
File domain tools.

Listing item attachments, reading their metadata and downloading content.
"""
from __future__ import annotations

from .models import GetFileContentInput, GetFileInput, ListFilesInput
from .tools import get_file, get_file_content, list_files, register_file_tools

__all__ = [
    "register_file_tools",
    "list_files",
    "get_file",
    "get_file_content",
    "ListFilesInput",
    "GetFileInput",
    "GetFileContentInput",
]
