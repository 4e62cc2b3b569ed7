"""Command-line front door for docmenu.

Scans the input directories, reconciles the project's ``Menu.txt`` with
what was found, and writes the menu back when it changed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_menu_settings, save_menu_settings, with_overrides
from .input_roots import InputRoots
from .menu import Menu
from .menu_file import MenuFileError
from .reconcile import TrashedMenuError
from .scanner import TITLE_CACHE_FILENAME, save_title_cache, scan_input_roots
from .snapshot import MenuSaveError


def _nonnegative_int(value: str) -> int:
    """argparse type for integer thresholds where ``0`` disables the feature."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _log_level(verbose: int, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    if verbose >= 1:
        return logging.DEBUG
    return logging.INFO


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docmenu",
        description="Keep a project's documentation menu in sync with its source files.",
    )
    parser.add_argument("project", type=Path, help="Project directory holding Menu.txt and Data/.")
    parser.add_argument(
        "-i",
        "--input",
        dest="inputs",
        type=Path,
        action="append",
        required=True,
        metavar="DIR",
        help="Source directory to scan. Repeat for several roots.",
    )
    parser.add_argument("--dry-run", action="store_true", help="Reconcile and report without writing anything.")
    parser.add_argument(
        "--fail-on-trashed-menu",
        action="store_true",
        default=None,
        help="Stop instead of saving when most files in the menu disappeared.",
    )
    parser.add_argument(
        "--include-gitignored",
        action="store_true",
        help="Also scan files matched by .gitignore.",
    )
    parser.add_argument("--max-files-in-group", type=_nonnegative_int, default=None, metavar="N")
    parser.add_argument("--min-files-in-new-group", type=_nonnegative_int, default=None, metavar="N")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist the threshold options above as the new defaults.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log each change decision.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run one menu build.

    Failures leave through ``SystemExit`` with a message; the menu file and
    snapshot are left untouched in that case.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=_log_level(args.verbose, args.quiet), format="%(levelname)s: %(message)s")

    project_dir = args.project.resolve()
    for directory in args.inputs:
        if not directory.is_dir():
            raise SystemExit(f"Input directory not found: {directory}")

    settings = with_overrides(
        load_menu_settings(),
        max_files_in_group=args.max_files_in_group,
        min_files_in_new_group=args.min_files_in_new_group,
        fail_on_trashed_menu=args.fail_on_trashed_menu,
    )
    if args.save_settings:
        save_menu_settings(settings)

    roots = InputRoots.named(args.inputs)
    title_cache_path = project_dir / "Data" / TITLE_CACHE_FILENAME
    scan = scan_input_roots(
        roots,
        title_cache_path=title_cache_path,
        skip_gitignored=not args.include_gitignored,
        skip=lambda path: path == project_dir,
    )

    menu = Menu.for_project(project_dir, settings=settings)
    try:
        changed = menu.load_and_update(args.inputs, scan)
    except MenuFileError as exc:
        print(exc.details(), file=sys.stderr)
        raise SystemExit(f"{exc}. The errors are marked in the file.") from exc
    except TrashedMenuError as exc:
        raise SystemExit(f"Refusing to save the menu: {exc}") from exc

    files = len(menu.files_in_menu())
    if args.dry_run:
        state = "would be rewritten" if changed else "is up to date"
        print(f"{menu.menu_path}: {files} files, menu {state}")
        return

    try:
        written = menu.save()
        save_title_cache(title_cache_path, scan.default_titles)
    except MenuSaveError as exc:
        raise SystemExit(str(exc)) from exc
    except OSError as exc:
        raise SystemExit(f"Couldn't save default titles: {exc}") from exc
    state = "updated" if written else "unchanged"
    print(f"{menu.menu_path}: {files} files, menu {state}")


__all__ = ["build_parser", "main"]
