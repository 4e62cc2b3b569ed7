"""Menu facade: load the menu file and snapshot, reconcile, and save.

``Menu`` is the only object the CLI talks to. A build is:

1. ``load_and_update(input_dirs, scan)`` parses ``Menu.txt``, reads the
   previous snapshot, and runs every reconciliation pass.
2. ``save()`` writes the menu file and then the snapshot, but only when
   something changed. Both are rendered before either is written, and a
   menu that lost most of its files is backed up first.

The snapshot is written second so its mtime is never older than the menu
file's; a menu file newer than the snapshot means the user edited it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path

from .config import DEFAULT_SETTINGS, MenuSettings
from .indexes import IndexRegistry
from .input_roots import InputRoots
from .menu_file import MenuFileContents, MenuFileError, annotate_menu_file, load_menu_file, render_menu_file
from .menu_model import FileEntry, GroupEntry, files_in_menu
from .reconcile import MenuFileStatus, MenuState, Reconciler
from .reconcile.safety import backup_menu_file
from .scanner import FileScan
from .snapshot import MenuSaveError, encode_for_save, load_snapshot, write_snapshot
from .timestamp import format_timestamp
from .topics import TopicTypes

logger = logging.getLogger(__name__)

MENU_FILENAME = "Menu.txt"
SNAPSHOT_RELATIVE_PATH = Path("Data") / "PreviousMenuState.nd"


def _mtime_ns(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None


class Menu:
    """One project's menu across a single build."""

    def __init__(
        self,
        menu_path: Path,
        snapshot_path: Path,
        *,
        topics: TopicTypes | None = None,
        settings: MenuSettings | None = None,
    ) -> None:
        self.menu_path = Path(menu_path)
        self.snapshot_path = Path(snapshot_path)
        self.topics = topics or TopicTypes()
        self.settings = settings or DEFAULT_SETTINGS
        self.state = MenuState()
        self._roots = InputRoots([])

    @classmethod
    def for_project(
        cls,
        project_dir: Path,
        *,
        topics: TopicTypes | None = None,
        settings: MenuSettings | None = None,
    ) -> "Menu":
        project_dir = Path(project_dir)
        return cls(
            project_dir / MENU_FILENAME,
            project_dir / SNAPSHOT_RELATIVE_PATH,
            topics=topics,
            settings=settings,
        )

    def menu_file_status(self) -> MenuFileStatus:
        menu_mtime = _mtime_ns(self.menu_path)
        if menu_mtime is None:
            return MenuFileStatus.MISSING
        snapshot_mtime = _mtime_ns(self.snapshot_path)
        if snapshot_mtime is None:
            return MenuFileStatus.NEW
        if menu_mtime > snapshot_mtime:
            return MenuFileStatus.CHANGED
        return MenuFileStatus.SAME

    def _read_menu_file(self) -> MenuFileContents:
        contents = load_menu_file(self.menu_path, self.topics)
        if contents is None:
            return MenuFileContents()
        if contents.issues:
            annotate_menu_file(self.menu_path, contents.issues)
            raise MenuFileError(self.menu_path, contents.issues)
        return contents

    def load_and_update(self, input_dirs: Iterable[Path], scan: FileScan, *, today: date | None = None) -> bool:
        """Load the menu, reconcile it against ``scan``, and report whether it changed.

        Raises ``MenuFileError`` after annotating the menu file when it has
        parse errors.
        """
        status = self.menu_file_status()
        contents = self._read_menu_file()
        self._roots = InputRoots.named(
            input_dirs,
            stored=contents.input_directories,
            only_name=contents.only_directory_name,
        )

        previous = load_snapshot(self.snapshot_path, self.topics)
        snapshot_mtime = None
        if previous is not None:
            mtime = _mtime_ns(self.snapshot_path)
            if mtime is not None:
                snapshot_mtime = datetime.fromtimestamp(mtime / 1_000_000_000)

        self.state = MenuState(
            root=contents.root,
            title=contents.title,
            subtitle=contents.subtitle,
            footer=contents.footer,
            timestamp_code=contents.timestamp_code,
            indexes=IndexRegistry(active=contents.indexes, banned=contents.banned_indexes),
            changed=contents.forced_change,
        )
        logger.debug("Menu file %s is %s", self.menu_path, status.value)
        reconciler = Reconciler(
            self.state,
            scan,
            topics=self.topics,
            roots=self._roots,
            settings=self.settings,
            menu_status=status,
            previous=previous,
            snapshot_mtime=snapshot_mtime,
            stored_directories=contents.input_directories,
            today=today,
        )
        return reconciler.run()

    def save(self) -> bool:
        """Write the menu file and snapshot when changed; returns whether it wrote."""
        if not self.state.changed:
            return False
        text = render_menu_file(
            self.state.root,
            self.topics,
            title=self.state.title,
            subtitle=self.state.subtitle,
            footer=self.state.footer,
            timestamp_code=self.state.timestamp_code,
            banned_indexes=self.state.indexes.banned_indexes(),
            roots=self._roots,
        )
        data = encode_for_save(self.state.root, self.topics)

        if self.state.trashed:
            try:
                backup = backup_menu_file(self.menu_path)
            except OSError as exc:
                raise MenuSaveError(f"Couldn't back up menu file {self.menu_path}: {exc}") from exc
            if backup is not None:
                logger.warning("The previous menu was saved as %s", backup)

        try:
            self.menu_path.parent.mkdir(parents=True, exist_ok=True)
            self.menu_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise MenuSaveError(f"Couldn't save menu file {self.menu_path}: {exc}") from exc
        write_snapshot(self.snapshot_path, data)
        logger.info("Saved %s", self.menu_path)
        return True

    def content(self) -> GroupEntry:
        return self.state.root

    def title(self) -> str | None:
        return self.state.title

    def subtitle(self) -> str | None:
        return self.state.subtitle

    def footer(self) -> str | None:
        return self.state.footer

    def timestamp_code(self) -> str | None:
        return self.state.timestamp_code

    def timestamp_text(self, today: date | None = None) -> str | None:
        code = self.state.timestamp_code
        return format_timestamp(code, today) if code else None

    def active_indexes(self) -> frozenset[str]:
        return self.state.indexes.active_indexes()

    def previous_indexes(self) -> frozenset[str]:
        return self.state.indexes.previous_indexes()

    def banned_indexes(self) -> frozenset[str]:
        return self.state.indexes.banned_indexes()

    def has_changed(self) -> bool:
        return self.state.changed

    def files_in_menu(self) -> dict[Path, FileEntry]:
        return files_in_menu(self.state.root)

    def input_roots(self) -> InputRoots:
        return self._roots


__all__ = ["MENU_FILENAME", "SNAPSHOT_RELATIVE_PATH", "Menu"]
