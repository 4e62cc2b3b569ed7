"""Traversal helpers shared by the codecs and reconciliation passes."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from .types import FileEntry, GroupEntry, IndexEntry, LinkEntry, MenuEntry, TextEntry


def iter_file_entries(root: GroupEntry) -> Iterator[tuple[tuple[GroupEntry, ...], FileEntry]]:
    """Yield ``(owning_groups, file_entry)`` depth-first in menu order.

    ``owning_groups`` runs from ``root`` down to the file's direct parent.
    """

    def walk(group: GroupEntry, owners: tuple[GroupEntry, ...]) -> Iterator[tuple[tuple[GroupEntry, ...], FileEntry]]:
        owners = owners + (group,)
        for child in list(group.children):
            if isinstance(child, FileEntry):
                yield owners, child
            elif isinstance(child, GroupEntry):
                yield from walk(child, owners)

    yield from walk(root, ())


def files_in_menu(root: GroupEntry) -> dict[Path, FileEntry]:
    """Map every file target in the tree to its entry."""
    return {entry.target: entry for _owners, entry in iter_file_entries(root)}


def iter_groups(root: GroupEntry, *, include_root: bool = True, bottom_up: bool = False) -> Iterator[GroupEntry]:
    """Yield groups pre-order, or post-order when ``bottom_up`` is set."""

    def walk(group: GroupEntry) -> Iterator[GroupEntry]:
        if not bottom_up:
            yield group
        for child in list(group.children):
            if isinstance(child, GroupEntry):
                yield from walk(child)
        if bottom_up:
            yield group

    for group in walk(root):
        if group is root and not include_root:
            continue
        yield group


def iter_entries(root: GroupEntry) -> Iterator[tuple[GroupEntry, MenuEntry]]:
    """Yield ``(parent, entry)`` for every entry below ``root``."""
    for group in iter_groups(root):
        for child in list(group.children):
            yield group, child


def outline(entry: MenuEntry) -> tuple:
    """Return a comparable nested tuple describing ``entry`` and its subtree."""
    if isinstance(entry, GroupEntry):
        return ("group", entry.title, tuple(outline(child) for child in entry.children))
    if isinstance(entry, FileEntry):
        return ("file", entry.title, str(entry.target), entry.no_auto_title)
    if isinstance(entry, TextEntry):
        return ("text", entry.title)
    if isinstance(entry, LinkEntry):
        return ("link", entry.title, entry.url)
    if isinstance(entry, IndexEntry):
        return ("index", entry.title, entry.topic_type)
    raise TypeError(f"not a menu entry: {entry!r}")


__all__ = [
    "iter_file_entries",
    "files_in_menu",
    "iter_groups",
    "iter_entries",
    "outline",
]
