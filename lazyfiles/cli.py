"""Command-line front door for lazyfiles.

Parses CLI options, resolves the target path, and opens an explorer on it.
Then either prints the columns or lets ``$EDITOR`` edit the focused listing
and synchronizes the edits to disk.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import shutil
import sys
from pathlib import Path

from .editor import edit_lines
from .explorer import ExplorerController
from .highlight import DEFAULT_STYLE, colorize_lines
from .path_index import PathIndex
from .render import render_columns
from .runtime import ExplorerOptions, LocalFileSystem, MemoryBufferService, PromptConfirm, StaticConfirm, load_options
from .runtime.confirm import ConfirmationService
from .sync.apply import ActionOutcome

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((120, 24))
    return max(1, term.columns)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyfiles",
        description="Browse directories in columns and edit them as text.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory or file. Defaults to current directory.")
    parser.add_argument("--print", action="store_true", help="Print the explorer columns and exit.")
    parser.add_argument("--yes", action="store_true", help="Apply filesystem actions without asking.")
    delete_group = parser.add_mutually_exclusive_group()
    delete_group.add_argument(
        "--trash",
        dest="permanent_delete",
        action="store_false",
        default=None,
        help="Move deleted entries to the trash directory.",
    )
    delete_group.add_argument(
        "--permanent",
        dest="permanent_delete",
        action="store_true",
        default=None,
        help="Delete entries permanently.",
    )
    parser.add_argument("--no-preview", action="store_true", help="Do not show a preview column.")
    hidden_group = parser.add_mutually_exclusive_group()
    hidden_group.add_argument("--hidden", dest="show_hidden", action="store_true", default=None, help="List dot-files.")
    hidden_group.add_argument(
        "--no-hidden",
        dest="show_hidden",
        action="store_false",
        default=None,
        help="Hide dot-files.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable preview highlighting.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for previews.")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages to stderr.")
    return parser


def options_from_args(args: argparse.Namespace, base: ExplorerOptions) -> ExplorerOptions:
    """Overlay command-line switches on the persisted options."""
    overrides: dict[str, object] = {}
    if args.permanent_delete is not None:
        overrides["permanent_delete"] = args.permanent_delete
    if args.show_hidden is not None:
        overrides["show_hidden"] = args.show_hidden
    if args.no_preview:
        overrides["show_preview"] = False
    if args.yes:
        overrides["confirm_fs_actions"] = False
    return dataclasses.replace(base, **overrides)


def build_controller(options: ExplorerOptions, confirm: ConfirmationService) -> ExplorerController:
    return ExplorerController(
        index=PathIndex(),
        buffers=MemoryBufferService(),
        fs=LocalFileSystem(),
        confirm=confirm,
        options=options,
    )


def format_outcome(outcome: ActionOutcome) -> str:
    label = f"{outcome.kind.upper():>8}:"
    if outcome.from_path is not None and outcome.to_path is not None:
        target = f"{outcome.from_path} -> {outcome.to_path}"
    else:
        target = outcome.from_path or outcome.to_path or ""
    if outcome.ok:
        return f"{label} {target}"
    return f"{label} {target} ({outcome.status}: {outcome.message})"


def print_columns(controller: ExplorerController, style: str, no_color: bool) -> None:
    colorize = None if no_color else (lambda lines, path: colorize_lines(lines, path, style))
    rows = render_columns(controller.columns(), width=_default_render_width(), colorize=colorize)
    sys.stdout.write("".join(f"{row}\n" for row in rows))


def edit_and_synchronize(controller: ExplorerController, buffers: MemoryBufferService) -> int:
    """Edit the focused listing in ``$EDITOR``; returns the number of failed actions."""
    branch = controller.branch
    focused = branch.focused if branch is not None else None
    buffer = controller.buffer_for(focused) if focused else None
    if buffer is None:
        raise SystemExit("Nothing to edit.")

    lines = buffers.read_lines(buffer)
    edited, error = edit_lines(lines)
    if error is not None:
        raise SystemExit(error)
    assert edited is not None
    if edited == lines:
        sys.stdout.write("No changes.\n")
        return 0

    buffers.edit(buffer, edited)
    report = controller.synchronize()
    if report is None or report.actions.is_empty:
        sys.stdout.write("Nothing to synchronize.\n")
        return 0
    if not report.confirmed:
        sys.stdout.write("Cancelled.\n")
        return 0
    for outcome in report.outcomes:
        stream = sys.stdout if outcome.ok else sys.stderr
        stream.write(format_outcome(outcome) + "\n")
    return len(report.failed)


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and run lazyfiles on a file or directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    _configure_logging(args.verbose)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    options = options_from_args(args, load_options())
    confirm: ConfirmationService = StaticConfirm(True) if args.yes else PromptConfirm(out=sys.stdout)
    controller = build_controller(options, confirm)
    if not controller.open(str(path), use_latest=False):
        raise SystemExit(f"Cannot open: {path}")

    try:
        if args.print:
            print_columns(controller, args.style, args.no_color)
            return
        buffers = controller.buffers
        assert isinstance(buffers, MemoryBufferService)
        failed = edit_and_synchronize(controller, buffers)
    finally:
        controller.close(force=True)
    if failed:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
