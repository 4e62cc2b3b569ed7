"""Structural passes: adding new files, pruning dead ones, directory groups."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Set
from pathlib import Path

from ..config import MenuSettings
from ..menu_model import FileEntry, GroupEntry, GroupFlag, MenuEntry, iter_groups


def directory_homes(root: GroupEntry) -> dict[Path, GroupEntry]:
    """Map each directory to the first group (pre-order) directly holding one of its files."""
    homes: dict[Path, GroupEntry] = {}
    for group in iter_groups(root):
        for child in group.children:
            if isinstance(child, FileEntry):
                homes.setdefault(child.target.parent, group)
    return homes


def _nearest_home(directory: Path, homes: dict[Path, GroupEntry]) -> tuple[Path | None, GroupEntry | None]:
    for ancestor in directory.parents:
        group = homes.get(ancestor)
        if group is not None:
            return ancestor, group
    return None, None


def _add_file(group: GroupEntry, path: Path, title_for: Callable[[Path], str]) -> FileEntry:
    """Insert after the group's last file so trailing indexes and text stay last."""
    entry = FileEntry(title=title_for(path), target=path)
    last_file = max((idx for idx, child in enumerate(group.children) if isinstance(child, FileEntry)), default=None)
    if last_file is None:
        group.append(entry)
    else:
        group.children.insert(last_file + 1, entry)
    group.flags |= GroupFlag.UPDATED_STRUCTURE
    return entry


def auto_place_new_files(
    root: GroupEntry,
    new_files: Iterable[Path],
    title_for: Callable[[Path], str],
    settings: MenuSettings,
    *,
    root_directories: Set[Path] = frozenset(),
) -> list[MenuEntry]:
    """Insert entries for ``new_files`` next to their siblings.

    Files whose directory already has a home group join it. The rest are
    bucketed by directory; a large enough bucket gets a group of its own
    below the nearest ancestor's home, a small one joins that home directly.
    Returns every entry created, groups included.
    """
    homes = directory_homes(root)
    added: list[MenuEntry] = []
    homeless: dict[Path, list[Path]] = {}

    for path in sorted(new_files):
        group = homes.get(path.parent)
        if group is None:
            homeless.setdefault(path.parent, []).append(path)
        else:
            added.append(_add_file(group, path, title_for))

    threshold = settings.min_files_in_new_group
    # Sorted so a parent directory's new group exists before its children look for it.
    for directory in sorted(homeless):
        paths = homeless[directory]
        ancestor, parent = _nearest_home(directory, homes)
        if parent is None:
            parent = root
        if threshold > 0 and len(paths) >= threshold and directory not in root_directories:
            title = directory.relative_to(ancestor).as_posix() if ancestor is not None else directory.name
            target = GroupEntry(title=title, flags=GroupFlag.UPDATED_STRUCTURE)
            parent.append(target)
            parent.flags |= GroupFlag.UPDATED_STRUCTURE
            homes[directory] = target
            added.append(target)
        else:
            target = parent
        for path in paths:
            added.append(_add_file(target, path, title_for))
    return added


def remove_dead_files(root: GroupEntry, current_files: Set[Path]) -> int:
    """Delete file entries whose target no longer exists; returns the count."""
    removed = 0
    for group in iter_groups(root):
        kept = [
            child
            for child in group.children
            if not isinstance(child, FileEntry) or child.target in current_files
        ]
        if len(kept) != len(group.children):
            removed += len(group.children) - len(kept)
            group.children = kept
            group.flags |= GroupFlag.UPDATED_STRUCTURE
    return removed


def remove_empty_groups(root: GroupEntry) -> int:
    """Delete empty groups bottom-up so emptied parents go too; root stays."""

    def prune(group: GroupEntry) -> int:
        removed = 0
        kept: list[MenuEntry] = []
        for child in group.children:
            if isinstance(child, GroupEntry):
                removed += prune(child)
                if not child.children:
                    removed += 1
                    continue
            kept.append(child)
        if len(kept) != len(group.children):
            group.children = kept
            group.flags |= GroupFlag.UPDATED_STRUCTURE
        return removed

    return prune(root)


def _common_directory(paths: Iterable[Path]) -> Path:
    return Path(os.path.commonpath([str(path) for path in paths]))


def create_directory_subgroups(root: GroupEntry, settings: MenuSettings) -> list[GroupEntry]:
    """Split over-full restructured groups into per-directory sub-groups."""
    limit = settings.max_files_in_group
    if limit <= 0:
        return []
    minimum = max(2, settings.min_files_in_new_group)
    created: list[GroupEntry] = []
    pending = [group for group in iter_groups(root) if group.flags & GroupFlag.UPDATED_STRUCTURE]

    while pending:
        group = pending.pop(0)
        files = [child for child in group.children if isinstance(child, FileEntry)]
        if len(files) <= limit:
            continue
        base = _common_directory(entry.target.parent for entry in files)
        buckets: dict[str, list[FileEntry]] = {}
        for entry in files:
            if entry.target.parent == base:
                continue
            component = entry.target.parent.relative_to(base).parts[0]
            buckets.setdefault(component, []).append(entry)

        for name in sorted(buckets, key=str.lower):
            members = buckets[name]
            if len(members) < minimum:
                continue
            sub_group = GroupEntry(title=name, flags=GroupFlag.UPDATED_STRUCTURE)
            position = next(idx for idx, child in enumerate(group.children) if child is members[0])
            group.children[position] = sub_group
            for member in members[1:]:
                group.remove(member)
            sub_group.children = list(members)
            created.append(sub_group)
            pending.append(sub_group)
    return created


__all__ = [
    "directory_homes",
    "auto_place_new_files",
    "remove_dead_files",
    "remove_empty_groups",
    "create_directory_subgroups",
]
