"""Sort-tier detection and in-place resorting of groups."""

from __future__ import annotations

from collections.abc import Callable, Set

from ..menu_model import SORT_FLAGS, FileEntry, GroupEntry, GroupFlag, MenuEntry, iter_groups


def title_key(entry: MenuEntry) -> str:
    return entry.title.casefold()


def is_sortable_group(entry: MenuEntry) -> bool:
    return isinstance(entry, GroupEntry) and not entry.flags & GroupFlag.INDEX_GROUP


def _is_file(entry: MenuEntry) -> bool:
    return isinstance(entry, FileEntry)


def _is_file_or_group(entry: MenuEntry) -> bool:
    return isinstance(entry, FileEntry) or is_sortable_group(entry)


def _in_order(entries: list[MenuEntry]) -> bool:
    keys = [title_key(entry) for entry in entries]
    return all(left <= right for left, right in zip(keys, keys[1:]))


def detect_sort_tier(group: GroupEntry, added: Set[MenuEntry] = frozenset()) -> GroupFlag:
    """Classify how ``group`` was ordered, ignoring entries in ``added``."""
    existing = [child for child in group.children if child not in added]
    if _in_order([child for child in existing if _is_file_or_group(child)]):
        return GroupFlag.FILES_AND_GROUPS_SORTED
    if _in_order([child for child in existing if _is_file(child)]):
        return GroupFlag.FILES_SORTED
    return GroupFlag.UNSORTED


def detect_order(root: GroupEntry, added: Set[MenuEntry] = frozenset()) -> None:
    for group in iter_groups(root):
        group.flags = (group.flags & ~SORT_FLAGS) | detect_sort_tier(group, added)


def resort_group(group: GroupEntry) -> bool:
    """Stably sort the entries ``group``'s tier covers, keeping the rest in place.

    Returns whether any entry moved.
    """
    tier = group.sort_tier()
    movable: Callable[[MenuEntry], bool]
    if tier == GroupFlag.FILES_AND_GROUPS_SORTED:
        movable = _is_file_or_group
    elif tier == GroupFlag.FILES_SORTED:
        movable = _is_file
    else:
        return False

    slots = [idx for idx, child in enumerate(group.children) if movable(child)]
    ordered = sorted((group.children[idx] for idx in slots), key=title_key)
    moved = any(group.children[idx] is not entry for idx, entry in zip(slots, ordered))
    for idx, entry in zip(slots, ordered):
        group.children[idx] = entry
    return moved


def resort_groups(root: GroupEntry) -> bool:
    moved = False
    for group in iter_groups(root):
        if resort_group(group):
            moved = True
    return moved


__all__ = [
    "title_key",
    "is_sortable_group",
    "detect_sort_tier",
    "detect_order",
    "resort_group",
    "resort_groups",
]
