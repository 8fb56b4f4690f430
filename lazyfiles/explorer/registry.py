"""Session-scoped explorer bookkeeping: open explorers and anchor history."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

from .branch import Branch
from .view import DirectoryView


@dataclass
class Explorer:
    """State owned by one controller while open, archived on close."""

    anchor: str
    branch: Branch = field(default_factory=Branch)
    views: dict[str, DirectoryView] = field(default_factory=dict)
    is_corrupted: bool = False


class ExplorerRegistry:
    """Open explorer per session key plus closed explorers per anchor."""

    def __init__(self) -> None:
        self.opened: dict[Hashable, Explorer] = {}
        self.history: dict[str, Explorer] = {}
        self.latest_paths: dict[Hashable, str] = {}

    def get_opened(self, session: Hashable) -> Explorer | None:
        return self.opened.get(session)

    def register_open(self, session: Hashable, explorer: Explorer, path: str) -> None:
        self.opened[session] = explorer
        self.latest_paths[session] = path

    def archive(self, session: Hashable, explorer: Explorer) -> None:
        self.history[explorer.anchor] = explorer
        if self.opened.get(session) is explorer:
            del self.opened[session]

    def from_history(self, anchor: str) -> Explorer | None:
        return self.history.get(anchor)

    def latest_path(self, session: Hashable) -> str | None:
        return self.latest_paths.get(session)

    def reset(self) -> None:
        self.opened.clear()
        self.history.clear()
        self.latest_paths.clear()


__all__ = [
    "Explorer",
    "ExplorerRegistry",
]
