"""Confirmation services asked before destructive steps."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TextIO


class ConfirmationService(Protocol):
    def confirm(self, message: str) -> bool: ...


class StaticConfirm:
    """Always answer the same; records every message it was asked."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.messages: list[str] = []

    def confirm(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer


class PromptConfirm:
    """Ask on a text stream; only an explicit yes confirms."""

    def __init__(self, read_line: Callable[[str], str] | None = None, out: TextIO | None = None) -> None:
        self._read_line = read_line if read_line is not None else input
        self._out = out

    def confirm(self, message: str) -> bool:
        if self._out is not None:
            self._out.write(message.rstrip("\n") + "\n")
            self._out.flush()
            prompt = "[y/N] "
        else:
            prompt = f"{message.rstrip()}\n[y/N] "
        try:
            answer = self._read_line(prompt)
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}


__all__ = [
    "ConfirmationService",
    "StaticConfirm",
    "PromptConfirm",
]
