"""Collaborator services the explorer core talks to.

Text buffers, filesystem primitives, confirmation prompts, and persisted
options. Each service is a small protocol plus a default implementation.
"""

from __future__ import annotations

from .buffers import MemoryBufferService, TextBufferService
from .config import ExplorerOptions, load_options, save_options
from .confirm import ConfirmationService, PromptConfirm, StaticConfirm
from .fs_service import FileSystemService, LocalFileSystem

__all__ = [
    "ConfirmationService",
    "ExplorerOptions",
    "FileSystemService",
    "LocalFileSystem",
    "MemoryBufferService",
    "PromptConfirm",
    "StaticConfirm",
    "TextBufferService",
    "load_options",
    "save_options",
]
