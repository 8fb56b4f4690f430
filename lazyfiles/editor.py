"""Editor launch helpers for editing a directory listing as text.

Runs ``$EDITOR`` on a temporary file holding the listing lines.
Returns an error message string instead of raising for CLI-friendly handling.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

LISTING_SUFFIX = ".lazyfiles"


def launch_editor(target: Path) -> str | None:
    editor_env = os.environ.get("EDITOR", "").strip()
    if not editor_env:
        return "Cannot edit: $EDITOR is not set."
    cmd = shlex.split(editor_env)
    if not cmd:
        return "Cannot edit: $EDITOR is empty."

    try:
        result = subprocess.run([*cmd, str(target)], check=False)
    except OSError as exc:
        return f"Failed to launch editor: {exc}"
    if result.returncode != 0:
        return f"Editor exited with status {result.returncode}."
    return None


def edit_lines(lines: Sequence[str]) -> tuple[list[str] | None, str | None]:
    """Let the user edit ``lines``; returns ``(edited_lines, error)``."""
    fd, name = tempfile.mkstemp(prefix="lazyfiles-", suffix=LISTING_SUFFIX)
    target = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write("".join(f"{line}\n" for line in lines))
        error = launch_editor(target)
        if error is not None:
            return None, error
        return target.read_text(encoding="utf-8").splitlines(), None
    finally:
        target.unlink(missing_ok=True)


__all__ = [
    "launch_editor",
    "edit_lines",
]
