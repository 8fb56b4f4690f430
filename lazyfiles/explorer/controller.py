"""Explorer controller: branch navigation, view refresh, and synchronization.

The controller owns one ``Explorer`` while open and talks to its
collaborators (text buffers, filesystem, confirmation) only through the
service objects it was constructed with. Public entry points never let a
collaborator failure escape; they skip, normalize the branch, or close.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass, field

from ..errors import CorruptedStateError, IoError, NotFoundError
from ..file_model.listing import DefaultListingStrategy, ListingStrategy, entry_ids, list_directory
from ..file_model.paths import basename, child_path, full_path, parent_path, path_exists, path_kind, shorten_path
from ..file_model.preview import read_preview_lines
from ..file_model.types import EntryKind, FsEntry
from ..path_index import PathIndex
from ..runtime.buffers import TextBufferService
from ..runtime.config import ExplorerOptions
from ..runtime.confirm import ConfirmationService
from ..runtime.fs_service import FileSystemService
from ..sync.actions import FsActions, actions_to_lines, classify_diffs
from ..sync.apply import ActionOutcome, apply_actions
from ..sync.diff import Diff, compute_buffer_diff
from ..sync.lines import format_entry_line, id_width, match_line_path_id
from .branch import PLACEHOLDER, Branch
from .registry import Explorer, ExplorerRegistry
from .settle import FocusWatch, NotificationQueue
from .view import UNSET, Coordinate, DirectoryView, NamedEntry, clamp_to_name, decode_cursor, encode_cursor

logger = logging.getLogger(__name__)

_NO_CURSOR = object()


@dataclass(frozen=True)
class ColumnSnapshot:
    """Read-only description of one displayed column for renderers."""

    depth: int
    path: str
    title: str
    lines: tuple[str, ...]
    cursor: Coordinate | None
    is_focus: bool
    is_directory: bool
    modified: bool


@dataclass
class SyncReport:
    actions: FsActions = field(default_factory=FsActions)
    confirmed: bool = False
    outcomes: list[ActionOutcome] = field(default_factory=list)

    @property
    def applied(self) -> list[ActionOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> list[ActionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


class ExplorerController:
    """Drive one column explorer per session over injected services."""

    def __init__(
        self,
        *,
        index: PathIndex,
        buffers: TextBufferService,
        fs: FileSystemService,
        confirm: ConfirmationService,
        registry: ExplorerRegistry | None = None,
        options: ExplorerOptions | None = None,
        strategy: ListingStrategy | None = None,
        session: Hashable = "default",
        open_file: Callable[[str], None] | None = None,
        on_action: Callable[[ActionOutcome], None] | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.index = index
        self.buffers = buffers
        self.fs = fs
        self.confirm = confirm
        self.registry = registry if registry is not None else ExplorerRegistry()
        self.options = options if options is not None else ExplorerOptions()
        self.strategy = strategy if strategy is not None else DefaultListingStrategy(self.options.show_hidden)
        self.session = session
        self.open_file = open_file
        self.on_action = on_action
        self.notifications = NotificationQueue()
        self.focus_watch = FocusWatch(self.options.focus_poll_seconds, monotonic)
        self.explorer: Explorer | None = None

    # State -------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.explorer is not None

    @property
    def branch(self) -> Branch | None:
        return self.explorer.branch if self.explorer is not None else None

    def get_latest_path(self) -> str | None:
        """Path most recently opened in this session, kept after close."""
        return self.registry.latest_path(self.session)

    def view_for(self, path: str) -> DirectoryView | None:
        if self.explorer is None:
            return None
        return self.explorer.views.get(path)

    def buffer_for(self, path: str) -> int | None:
        view = self.view_for(path)
        return view.buffer if view is not None else None

    def has_modified(self) -> bool:
        if self.explorer is None:
            return False
        return any(self._is_modified(view) for view in self.explorer.views.values())

    def _is_modified(self, view: DirectoryView) -> bool:
        return self.buffers.is_valid(view.buffer) and self.buffers.is_modified(view.buffer)

    # Open / close ------------------------------------------------------------

    def open(self, path: str | None = None, use_latest: bool = True) -> bool:
        """Open on ``path`` (default: cwd), focusing the middle column.

        A file opens its parent as anchor with the cursor on the file. With
        ``use_latest`` the archived explorer of the anchor is reused.
        """
        target = full_path(path if path is not None else os.getcwd())
        kind = path_kind(target)
        if kind is None:
            logger.warning("`path` is not a valid path (%s)", target)
            return False
        if self.close() is False:
            return False

        anchor = target if kind == "directory" else (parent_path(target) or target)
        explorer = self.registry.from_history(anchor) if use_latest else None
        if explorer is None:
            explorer = Explorer(anchor=anchor)

        if kind == "directory":
            explorer.branch = Branch.for_directory(target)
        else:
            explorer.branch = Branch.for_file(target)
            explorer.views.setdefault(anchor, DirectoryView()).cursor = NamedEntry(basename(target))
        explorer.is_corrupted = False

        self.explorer = explorer
        self.registry.register_open(self.session, explorer, target)
        if not self.refresh():
            return False
        self.focus_watch.start()
        logger.debug("opened explorer on %s (anchor %s)", target, anchor)
        return True

    def close(self, force: bool = False) -> bool | None:
        """Close and archive the explorer.

        Returns ``None`` when nothing is open and ``False`` when closing with
        unsynchronized edits was declined.
        """
        explorer = self.explorer
        if explorer is None:
            return None
        self.focus_watch.stop()
        if not force and not self._confirm_modified("close"):
            return False

        self.notifications.drain()
        for view in explorer.views.values():
            self._release_view(view)
        self.registry.archive(self.session, explorer)
        self.explorer = None
        logger.debug("closed explorer for %s", explorer.anchor)
        return True

    def _confirm_modified(self, action_name: str) -> bool:
        if not self.has_modified():
            return True
        message = f"There is at least one modified buffer\n\nConfirm {action_name} without synchronization?"
        return self.confirm.confirm(message)

    def _release_view(self, view: DirectoryView) -> None:
        if self.buffers.is_valid(view.buffer):
            assert view.buffer is not None
            if view.is_directory:
                view.cursor = encode_cursor(view.cursor, self.buffers.read_lines(view.buffer))
            self.buffers.release(view.buffer)
        view.invalidate()

    # Refresh -----------------------------------------------------------------

    def refresh(self, force_update: bool = False, sync_preview: bool = True) -> bool:
        """Normalize the branch and make sure every column is rendered.

        ``force_update`` re-reads every live view from disk, discarding
        unsynchronized edits. Returns ``False`` when the explorer is (or got)
        closed.
        """
        explorer = self.explorer
        if explorer is None:
            return False
        if explorer.is_corrupted or not self._normalize():
            return self._close_corrupted()

        if force_update:
            for path, view in list(explorer.views.items()):
                if self.buffers.is_valid(view.buffer):
                    self._rerender(path, view)

        self._point_parents_at_children()
        if not self._show_branch():
            return self._close_corrupted()
        if sync_preview:
            self.sync_cursor(explorer.branch.focus_depth)
            if not self._show_branch():
                return self._close_corrupted()
        return True

    def _normalize(self) -> bool:
        explorer = self.explorer
        assert explorer is not None
        try:
            explorer.branch = explorer.branch.normalized()
        except CorruptedStateError as exc:
            logger.warning("%s", exc)
            explorer.is_corrupted = True
            return False
        return True

    def _close_corrupted(self) -> bool:
        explorer = self.explorer
        if explorer is not None:
            logger.warning("Closing explorer for %s: no valid column left", explorer.anchor)
            explorer.is_corrupted = False
            self.close(force=True)
        return False

    def _point_parents_at_children(self) -> None:
        """Put unset cursors of a column on the child shown to its right."""
        explorer = self.explorer
        assert explorer is not None
        paths = explorer.branch.paths
        for left, right in zip(paths, paths[1:]):
            if not left or not right or parent_path(right) != left:
                continue
            view = explorer.views.setdefault(left, DirectoryView())
            if view.cursor is UNSET:
                view.cursor = NamedEntry(basename(right))

    def _show_branch(self) -> bool:
        """Ensure a rendered view per branch path; drop columns that vanished."""
        explorer = self.explorer
        assert explorer is not None
        for depth, path in enumerate(explorer.branch.paths):
            if path == PLACEHOLDER:
                continue
            try:
                view = self._ensure_view(path)
            except NotFoundError as exc:
                logger.warning("%s", exc)
                self._discard_view(path)
                if not self._drop_columns_from(depth):
                    return False
                return self._show_branch()
            if not isinstance(view.cursor, Coordinate):
                assert view.buffer is not None
                view.cursor = decode_cursor(view.cursor, self.buffers.read_lines(view.buffer))
        return True

    def _drop_columns_from(self, depth: int) -> bool:
        explorer = self.explorer
        assert explorer is not None
        kept = explorer.branch.paths[:depth]
        if not any(path != PLACEHOLDER for path in kept):
            explorer.is_corrupted = True
            return False
        explorer.branch.paths = kept
        explorer.branch.clamp_focus()
        return True

    def _ensure_view(self, path: str) -> DirectoryView:
        explorer = self.explorer
        assert explorer is not None
        view = explorer.views.get(path)
        if view is None:
            view = DirectoryView()
            explorer.views[path] = view
        if not self.buffers.is_valid(view.buffer):
            self._render_view(path, view)
        return view

    def _rerender(self, path: str, view: DirectoryView) -> None:
        try:
            self._render_view(path, view)
        except NotFoundError:
            self._discard_view(path)

    def _discard_view(self, path: str) -> None:
        explorer = self.explorer
        assert explorer is not None
        view = explorer.views.pop(path, None)
        if view is not None and self.buffers.is_valid(view.buffer):
            assert view.buffer is not None
            self.buffers.release(view.buffer)

    def _render_view(self, path: str, view: DirectoryView) -> None:
        """Read ``path`` from disk into the view's buffer and reset its baseline."""
        kind = path_kind(path)
        if kind is None:
            raise NotFoundError(path)

        if self.buffers.is_valid(view.buffer):
            assert view.buffer is not None
            if view.is_directory:
                view.cursor = encode_cursor(view.cursor, self.buffers.read_lines(view.buffer))
        else:
            view.buffer = self.buffers.create(path)

        if kind == "directory":
            try:
                entries = list_directory(path, self.index, self.strategy)
            except IoError as exc:
                logger.warning("%s", exc)
                entries = []
            width = id_width(self.index.size)
            lines = [format_entry_line(entry.id, self.strategy.prefix(entry), entry.name, width) for entry in entries]
            view.known_child_ids = entry_ids(entries)
            view.is_directory = True
        else:
            try:
                lines = read_preview_lines(path, self.options.preview_max_lines)
            except IoError as exc:
                logger.warning("%s", exc)
                lines = []
            view.known_child_ids = ()
            view.is_directory = False

        self.buffers.render(view.buffer, lines)
        view.cursor = decode_cursor(view.cursor, lines)

    # Cursor / branch sync ----------------------------------------------------

    def _cursor_path(self, path: str, view: DirectoryView) -> object:
        """Path denoted by the view cursor, ``None`` for a non-entry line.

        Returns ``_NO_CURSOR`` when the view has no usable cursor.
        """
        if not view.is_directory:
            return _NO_CURSOR
        cursor = view.cursor
        if isinstance(cursor, NamedEntry):
            return child_path(path, cursor.name)
        if isinstance(cursor, Coordinate) and self.buffers.is_valid(view.buffer):
            assert view.buffer is not None
            lines = self.buffers.read_lines(view.buffer)
            if not 1 <= cursor.line <= len(lines):
                return None
            return self.index.resolve(match_line_path_id(lines[cursor.line - 1]))
        return _NO_CURSOR

    def sync_cursor(self, depth: int) -> None:
        """Make the column right of ``depth`` agree with the cursor at ``depth``.

        On mismatch everything right of ``depth`` is dropped; the cursor path
        becomes the preview column when previews are on, the path exists, and
        ``depth`` holds focus. Otherwise the placeholder takes that slot.
        """
        explorer = self.explorer
        if explorer is None:
            return
        branch = explorer.branch
        path = branch.at(depth)
        if not path:
            return
        view = explorer.views.get(path)
        if view is None:
            return
        cursor_path = self._cursor_path(path, view)
        if cursor_path is _NO_CURSOR:
            return

        focus_after_trim = min(branch.focus_depth, depth)
        wants_preview = (
            self.options.show_preview
            and isinstance(cursor_path, str)
            and path_exists(cursor_path)
            and focus_after_trim == depth
        )
        desired = cursor_path if wants_preview else PLACEHOLDER
        if len(branch) == depth + 2 and branch.at(depth + 1) == desired:
            return

        branch.truncate_after(depth)
        branch.append(desired)

    # Navigation --------------------------------------------------------------

    def get_fs_entry(self, buffer: int, line: int) -> FsEntry | None:
        """Filesystem data for ``line`` (1-based) of ``buffer``."""
        if not self.buffers.is_valid(buffer):
            return None
        lines = self.buffers.read_lines(buffer)
        if not 1 <= line <= len(lines):
            return None
        path = self.index.resolve(match_line_path_id(lines[line - 1]))
        if path is None:
            return None
        kind = path_kind(path)
        return FsEntry(path=path, name=basename(path), kind=EntryKind(kind) if kind is not None else None)

    def _entry_under_cursor(self) -> FsEntry | None:
        explorer = self.explorer
        assert explorer is not None
        path = explorer.branch.focused
        if not path:
            return None
        view = explorer.views.get(path)
        if view is None or view.buffer is None or not isinstance(view.cursor, Coordinate):
            return None
        return self.get_fs_entry(view.buffer, view.cursor.line)

    def go_in(self, close_on_file: bool = False) -> str | None:
        """Enter the entry under the focused cursor.

        Directories become the new middle column; files go to ``open_file``.
        Returns the entered path.
        """
        if self.explorer is None:
            return None
        entry = self._entry_under_cursor()
        if entry is None or entry.kind is None:
            return None

        if entry.kind is EntryKind.DIRECTORY:
            self.explorer.branch.descend(entry.path)
            self.refresh()
            return entry.path

        if self.open_file is not None:
            self.open_file(entry.path)
        else:
            logger.info("no file opener configured for %s", entry.path)
        if close_on_file:
            self.close()
        return entry.path

    def go_out(self) -> bool:
        """Shift the branch one level up, keeping the cursor on where we were."""
        explorer = self.explorer
        if explorer is None:
            return False
        previous = explorer.branch.focused
        if not explorer.branch.ascend():
            return False
        current = explorer.branch.focused
        if current and previous and parent_path(previous) == current:
            explorer.views.setdefault(current, DirectoryView()).cursor = NamedEntry(basename(previous))
        self.refresh()
        return True

    navigate_in = go_in
    navigate_out = go_out

    def go_out_plus(self) -> bool:
        moved = self.go_out()
        self.trim_right()
        return moved

    def trim_left(self) -> None:
        if self.explorer is None:
            return
        self.explorer.branch.trim_left()
        self.refresh()

    def trim_right(self) -> None:
        if self.explorer is None:
            return
        self.explorer.branch.trim_right()
        self.refresh(sync_preview=False)

    def reset(self) -> None:
        """Back to the anchor columns with every cursor on the first entry."""
        explorer = self.explorer
        if explorer is None:
            return
        explorer.branch = Branch.for_directory(explorer.anchor)
        for view in explorer.views.values():
            view.cursor = Coordinate(1, 0)
        self.refresh()

    def update_options(
        self,
        options: ExplorerOptions | None = None,
        strategy: ListingStrategy | None = None,
    ) -> bool:
        """Swap options/listing strategy and refresh every column.

        Live columns are only re-read from disk when discarding unsynchronized
        edits is confirmed; returns whether that re-read happened.
        """
        confirmed = self.explorer is None or self._confirm_modified("buffer updates")
        if options is not None:
            self.options = options
            self.focus_watch.interval_seconds = options.focus_poll_seconds
        if strategy is not None:
            self.strategy = strategy
        elif options is not None:
            self.strategy = DefaultListingStrategy(options.show_hidden)
        self.refresh(force_update=confirmed)
        return confirmed

    # Synchronization ---------------------------------------------------------

    def compute_diffs(self) -> list[Diff]:
        """Raw diffs of every directory view that still holds a live buffer."""
        explorer = self.explorer
        if explorer is None:
            return []
        diffs: list[Diff] = []
        for path, view in explorer.views.items():
            if not view.is_directory or not self.buffers.is_valid(view.buffer):
                continue
            assert view.buffer is not None
            diffs.extend(
                compute_buffer_diff(
                    path,
                    self.buffers.read_lines(view.buffer),
                    view.known_child_ids,
                    self.index,
                    modified=self.buffers.is_modified(view.buffer),
                )
            )
        return diffs

    def synchronize(self) -> SyncReport | None:
        """Apply text edits to the filesystem, then re-read every column."""
        if self.explorer is None:
            return None
        report = SyncReport(actions=classify_diffs(self.compute_diffs()))
        if not report.actions.is_empty:
            if not self.options.confirm_fs_actions or self.confirm.confirm("\n".join(actions_to_lines(report.actions))):
                report.confirmed = True
                report.outcomes = apply_actions(
                    report.actions,
                    self.fs,
                    self.index,
                    permanent_delete=self.options.permanent_delete,
                    on_applied=self.on_action,
                )
            else:
                logger.info("filesystem actions declined; discarding edits")
        self.refresh(force_update=True)
        return report

    # Host notifications ------------------------------------------------------

    def notify_cursor_moved(self, buffer: int, line: int, col: int = 0) -> None:
        self.notifications.cursor_moved(buffer, line, col)

    def notify_text_changed(self, buffer: int) -> None:
        self.notifications.text_changed(buffer)

    def _path_of_buffer(self, buffer: int) -> str | None:
        explorer = self.explorer
        assert explorer is not None
        for path, view in explorer.views.items():
            if view.buffer == buffer:
                return path
        return None

    def settle(self) -> bool:
        """Process every notification queued since the last settle at once."""
        batch = self.notifications.drain()
        explorer = self.explorer
        if not batch or explorer is None:
            return False

        depths: set[int] = set()
        for buffer, coordinate in batch.cursors.items():
            path = self._path_of_buffer(buffer)
            if path is None or not self.buffers.is_valid(buffer):
                continue
            view = explorer.views[path]
            if view.is_directory:
                coordinate = clamp_to_name(coordinate, self.buffers.read_lines(buffer))
            view.cursor = coordinate
            depth = explorer.branch.depth_of(path)
            if depth is not None:
                depths.add(depth)
        for buffer in batch.changed_buffers:
            path = self._path_of_buffer(buffer)
            depth = explorer.branch.depth_of(path) if path is not None else None
            if depth is not None:
                depths.add(depth)

        for depth in sorted(depths):
            self.sync_cursor(depth)
        self.refresh()
        return True

    def displayed_buffers(self) -> set[int]:
        explorer = self.explorer
        if explorer is None:
            return set()
        buffers: set[int] = set()
        for path in explorer.branch.real_paths():
            view = explorer.views.get(path)
            if view is not None and view.buffer is not None:
                buffers.add(view.buffer)
        return buffers

    def poll_focus(self, focused_buffer: int | None) -> bool:
        """Close when focus left every column; returns whether it closed."""
        if self.explorer is None or not self.focus_watch.due():
            return False
        if focused_buffer is not None and focused_buffer in self.displayed_buffers():
            return False
        return self.close() is True

    # Rendering support -------------------------------------------------------

    def columns(self) -> list[ColumnSnapshot]:
        explorer = self.explorer
        if explorer is None:
            return []
        out: list[ColumnSnapshot] = []
        for depth, path in enumerate(explorer.branch.paths):
            view = explorer.views.get(path) if path else None
            if view is None or not self.buffers.is_valid(view.buffer):
                out.append(
                    ColumnSnapshot(depth, path, "", (), None, depth == explorer.branch.focus_depth, True, False)
                )
                continue
            assert view.buffer is not None
            title = shorten_path(path) if depth == 0 else basename(path)
            out.append(
                ColumnSnapshot(
                    depth=depth,
                    path=path,
                    title=title,
                    lines=tuple(self.buffers.read_lines(view.buffer)),
                    cursor=view.cursor if isinstance(view.cursor, Coordinate) else None,
                    is_focus=depth == explorer.branch.focus_depth,
                    is_directory=view.is_directory,
                    modified=self._is_modified(view),
                )
            )
        return out


__all__ = [
    "ColumnSnapshot",
    "SyncReport",
    "ExplorerController",
]
