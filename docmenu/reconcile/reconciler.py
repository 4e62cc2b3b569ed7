"""Ordered reconciliation passes that bring the menu in line with the sources."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path

from ..config import DEFAULT_SETTINGS, MenuSettings
from ..input_roots import InputRoots
from ..menu_model import FileEntry, GroupEntry, MenuEntry, files_in_menu, iter_file_entries
from ..scanner import FileScan
from ..snapshot import PreviousMenuState
from ..topics import TopicTypes
from .indexing import add_missing_indexes, detect_index_groups, remove_unindexable
from .ordering import detect_order, resort_groups
from .placement import auto_place_new_files, create_directory_subgroups, remove_dead_files, remove_empty_groups
from .resolve import drop_duplicate_targets, resolve_moved_roots, resolve_relative_targets
from .safety import check_for_trashed_menu
from .state import MenuFileStatus, MenuState

logger = logging.getLogger(__name__)


class Reconciler:
    """Run every pass over ``state`` once, in a fixed order.

    Later passes rely on earlier ones: titles are locked before any are
    regenerated, and sort tiers are read before new entries are sorted in.
    """

    def __init__(
        self,
        state: MenuState,
        scan: FileScan,
        *,
        topics: TopicTypes,
        roots: InputRoots,
        settings: MenuSettings = DEFAULT_SETTINGS,
        menu_status: MenuFileStatus = MenuFileStatus.SAME,
        previous: PreviousMenuState | None = None,
        snapshot_mtime: datetime | None = None,
        stored_directories: dict[Path, str] | None = None,
        today: date | None = None,
    ) -> None:
        self.state = state
        self.scan = scan
        self.topics = topics
        self.roots = roots
        self.settings = settings
        self.menu_status = menu_status
        self.previous = previous
        self.snapshot_mtime = snapshot_mtime
        self.stored_directories = stored_directories or {}
        self.today = today or date.today()

        self.added: set[MenuEntry] = set()
        self.flagged_titles: set[FileEntry] = set()
        self.update_all_titles = False

    @property
    def root(self) -> GroupEntry:
        return self.state.root

    def mark_changed(self, reason: str) -> None:
        if not self.state.changed:
            logger.debug("Menu needs rewriting: %s", reason)
        self.state.changed = True

    def run(self) -> bool:
        if self.previous is None:
            self.mark_changed("no usable snapshot of the previous menu")
        if self.menu_status in (MenuFileStatus.CHANGED, MenuFileStatus.MISSING):
            self.mark_changed(f"menu file is {self.menu_status.value}")

        self.resolve_file_identity()
        self.detect_day_rollover()
        self.lock_user_title_changes()
        self.flag_auto_title_changes()
        original = len(files_in_menu(self.root))
        self.place_new_files()
        removed = self.remove_dead_files()
        self.check_for_trashed_menu(original, removed)
        self.ban_and_unban_indexes()
        self.detect_index_groups()
        self.add_and_remove_indexes()
        self.remove_dead_groups()
        self.create_directory_subgroups()
        self.detect_order()
        self.generate_auto_file_titles()
        self.resort_groups()
        return self.state.changed

    def resolve_file_identity(self) -> None:
        # Single-root menus always store relative paths; resolving them is not a change.
        resolve_relative_targets(self.root, self.roots, self.scan.files)
        if resolve_moved_roots(self.root, self.stored_directories, self.roots):
            self.mark_changed("an input directory moved")
        dropped = drop_duplicate_targets(self.root)
        if dropped:
            logger.info("Dropped %d duplicate file entries", dropped)
            self.mark_changed("duplicate file entries")

    def detect_day_rollover(self) -> None:
        if not self.state.timestamp_code or self.snapshot_mtime is None:
            return
        if self.snapshot_mtime.date() != self.today:
            self.mark_changed("the timestamp date rolled over")

    def lock_user_title_changes(self) -> None:
        if self.previous is None:
            return
        for path, entry in files_in_menu(self.root).items():
            old = self.previous.files.get(path)
            if old is None or entry.no_auto_title or old.title == entry.title:
                continue
            logger.debug("Locking edited title %r for %s", entry.title, path)
            entry.no_auto_title = True
            self.mark_changed("a file title was edited by hand")

    def flag_auto_title_changes(self) -> None:
        if self.menu_status in (MenuFileStatus.CHANGED, MenuFileStatus.NEW):
            self.update_all_titles = True
            return
        files = files_in_menu(self.root)
        self.flagged_titles.update(files[path] for path in self.scan.changed_titles if path in files)

    def place_new_files(self) -> None:
        new_files = self.scan.files - files_in_menu(self.root).keys()
        if not new_files:
            return
        created = auto_place_new_files(
            self.root,
            new_files,
            self.scan.default_title,
            self.settings,
            root_directories=frozenset(self.roots.paths()),
        )
        self.added.update(created)
        self.flagged_titles.update(entry for entry in created if isinstance(entry, FileEntry))
        logger.info("Added %d new files to the menu", len(new_files))
        self.mark_changed("new source files")

    def remove_dead_files(self) -> int:
        removed = remove_dead_files(self.root, self.scan.files)
        if removed:
            logger.info("Removed %d deleted files from the menu", removed)
            self.mark_changed("source files were deleted")
        return removed

    def check_for_trashed_menu(self, original: int, removed: int) -> None:
        if check_for_trashed_menu(original, removed, self.settings):
            self.state.trashed = True
            self.mark_changed("most of the menu disappeared")

    def ban_and_unban_indexes(self) -> None:
        if self.menu_status == MenuFileStatus.MISSING:
            return
        registry = self.state.indexes
        if self.previous is not None:
            registry.set_previous(self.previous.indexes)
        registry.refresh_active(self.root)
        if registry.ban_and_unban():
            self.mark_changed("the banned index list changed")

    def detect_index_groups(self) -> None:
        detect_index_groups(self.root)

    def add_and_remove_indexes(self) -> None:
        if remove_unindexable(self.root, self.topics):
            self.mark_changed("indexes for unindexable topics were removed")
        created = add_missing_indexes(self.root, self.topics, self.state.indexes)
        if created:
            self.added.update(created)
            self.mark_changed("new indexes")

    def remove_dead_groups(self) -> None:
        if remove_empty_groups(self.root):
            self.mark_changed("empty groups were removed")

    def create_directory_subgroups(self) -> None:
        created = create_directory_subgroups(self.root, self.settings)
        if created:
            # The new groups stand where their files did, so they count as additions.
            self.added.update(created)
            self.mark_changed("crowded groups were split by directory")

    def detect_order(self) -> None:
        detect_order(self.root, self.added)

    def generate_auto_file_titles(self) -> None:
        for _owners, entry in iter_file_entries(self.root):
            if entry.no_auto_title:
                continue
            if not self.update_all_titles and entry not in self.flagged_titles:
                continue
            title = self.scan.default_title(entry.target)
            if title != entry.title:
                entry.title = title
                self.mark_changed("file titles were regenerated")

    def resort_groups(self) -> None:
        if resort_groups(self.root):
            self.mark_changed("groups were resorted")


__all__ = ["Reconciler"]
