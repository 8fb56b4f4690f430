"""Execute classified actions through a filesystem service.

Actions run in ``ACTION_ORDER``. Each one is attempted once; a refusal or
failure is logged and recorded but never aborts the rest of the batch, and
nothing already applied is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import IoError, NotFoundError, PathExistsError
from ..file_model.paths import normalize_path
from ..path_index import PathIndex
from ..runtime.fs_service import FileSystemService
from .actions import FsActions, Transfer

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_EXISTS = "exists"
STATUS_NOT_FOUND = "not_found"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class ActionOutcome:
    kind: str
    from_path: str | None
    to_path: str | None
    status: str
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


def _run_one(
    kind: str,
    action: Transfer | str,
    fs: FileSystemService,
    permanent_delete: bool,
) -> tuple[str | None, str | None]:
    if kind == "create":
        assert isinstance(action, str)
        fs.create(action)
        return None, normalize_path(action)
    if kind == "delete":
        assert isinstance(action, str)
        fs.delete(action, permanent_delete)
        return action, None

    assert isinstance(action, Transfer)
    if kind == "copy":
        fs.copy(action.from_path, action.to_path)
    elif kind == "move":
        fs.move(action.from_path, action.to_path)
    elif kind == "rename":
        fs.rename(action.from_path, action.to_path)
    else:
        raise ValueError(f"unknown action kind: {kind}")
    return action.from_path, normalize_path(action.to_path)


def apply_actions(
    actions: FsActions,
    fs: FileSystemService,
    index: PathIndex,
    permanent_delete: bool = True,
    on_applied: Callable[[ActionOutcome], None] | None = None,
) -> list[ActionOutcome]:
    """Apply ``actions`` in order and return one outcome per action.

    Successful moves and renames reassign the source's path id to the
    destination so later diffs resolve to the new location.
    """
    outcomes: list[ActionOutcome] = []
    for kind, action in actions.ordered():
        if isinstance(action, Transfer):
            from_path, to_path = action.from_path, normalize_path(action.to_path)
        elif kind == "create":
            from_path, to_path = None, normalize_path(action)
        else:
            from_path, to_path = action, None

        try:
            from_path, to_path = _run_one(kind, action, fs, permanent_delete)
        except PathExistsError as exc:
            logger.warning("%s", exc)
            outcome = ActionOutcome(kind, from_path, to_path, STATUS_EXISTS, str(exc))
        except NotFoundError as exc:
            logger.warning("Can not %s: %s", kind, exc)
            outcome = ActionOutcome(kind, from_path, to_path, STATUS_NOT_FOUND, str(exc))
        except IoError as exc:
            logger.warning("Can not %s: %s", kind, exc)
            outcome = ActionOutcome(kind, from_path, to_path, STATUS_ERROR, str(exc))
        else:
            if kind in ("move", "rename") and from_path is not None and to_path is not None:
                index.reassign(from_path, to_path)
            outcome = ActionOutcome(kind, from_path, to_path, STATUS_OK)
            logger.debug("applied %s %s -> %s", kind, from_path, to_path)

        outcomes.append(outcome)
        if on_applied is not None and outcome.ok:
            on_applied(outcome)
    return outcomes


__all__ = [
    "STATUS_OK",
    "STATUS_EXISTS",
    "STATUS_NOT_FOUND",
    "STATUS_ERROR",
    "ActionOutcome",
    "apply_actions",
]
