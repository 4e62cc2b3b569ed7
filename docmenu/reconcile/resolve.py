"""Map file targets read from the menu onto the current input roots."""

from __future__ import annotations

import os
from collections.abc import Set
from pathlib import Path

from ..input_roots import InputRoots
from ..menu_model import FileEntry, GroupEntry, iter_file_entries


def resolve_relative_targets(root: GroupEntry, roots: InputRoots, scanned: Set[Path]) -> int:
    """Make relative targets absolute.

    A relative target belongs to the first root under which it was scanned,
    falling back to the first root. Returns how many targets changed.
    """
    if not roots.roots:
        return 0
    changed = 0
    for _owners, entry in iter_file_entries(root):
        if entry.target.is_absolute():
            continue
        candidates = [Path(os.path.normpath(root_.path / entry.target)) for root_ in roots.roots]
        entry.target = next((candidate for candidate in candidates if candidate in scanned), candidates[0])
        changed += 1
    return changed


def resolve_moved_roots(root: GroupEntry, stored: dict[Path, str], roots: InputRoots) -> int:
    """Re-root targets recorded under a directory whose name now maps elsewhere."""
    changed = 0
    for old_directory, name in stored.items():
        new_directory = roots.resolve(name)
        if new_directory is None or new_directory == old_directory:
            continue
        for _owners, entry in iter_file_entries(root):
            if entry.target.is_relative_to(old_directory) and not entry.target.is_relative_to(new_directory):
                entry.target = new_directory / entry.target.relative_to(old_directory)
                changed += 1
    return changed


def drop_duplicate_targets(root: GroupEntry) -> int:
    """Keep only the first entry for each target; returns how many were dropped."""
    seen: set[Path] = set()
    duplicates: list[tuple[GroupEntry, FileEntry]] = []
    for owners, entry in iter_file_entries(root):
        if entry.target in seen:
            duplicates.append((owners[-1], entry))
        else:
            seen.add(entry.target)
    for parent, entry in duplicates:
        parent.remove(entry)
    return len(duplicates)


__all__ = ["resolve_relative_targets", "resolve_moved_roots", "drop_duplicate_targets"]
