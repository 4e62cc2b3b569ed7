"""Index-group detection and generated index upkeep."""

from __future__ import annotations

from ..indexes import IndexRegistry
from ..menu_model import GroupEntry, GroupFlag, IndexEntry, MenuEntry, iter_groups
from ..topics import TopicTypes

INDEX_GROUP_TITLE = "Index"


def detect_index_groups(root: GroupEntry) -> list[GroupEntry]:
    """Flag non-root groups made up only of index entries and return them."""
    found: list[GroupEntry] = []
    for group in iter_groups(root, include_root=False):
        if group.children and all(isinstance(child, IndexEntry) for child in group.children):
            group.flags |= GroupFlag.INDEX_GROUP
            found.append(group)
        else:
            group.flags &= ~GroupFlag.INDEX_GROUP
    return found


def remove_unindexable(root: GroupEntry, topics: TopicTypes) -> int:
    removed = 0
    for group in iter_groups(root):
        kept = [
            child
            for child in group.children
            if not isinstance(child, IndexEntry) or topics.is_indexable(child.topic_type)
        ]
        if len(kept) != len(group.children):
            removed += len(group.children) - len(kept)
            group.children = kept
            group.flags |= GroupFlag.UPDATED_STRUCTURE
    return removed


def index_title(topic_type: str, topics: TopicTypes) -> str:
    """Default title of a new index: the plural topic name, e.g. 'Everything'."""
    return topics.name_of_type(topic_type, plural=True)


def add_missing_indexes(root: GroupEntry, topics: TopicTypes, registry: IndexRegistry) -> list[MenuEntry]:
    """Add an index for every indexable, unbanned type not yet in the tree.

    New indexes join the first index group when there is one. Otherwise a
    lone index goes at top level and several share a new ``Index`` group.
    Returns the entries created.
    """
    registry.refresh_active(root)
    missing = sorted(
        (
            topic_type
            for topic_type in topics.all_indexable_types()
            if topic_type not in registry.active_indexes() and not registry.is_banned(topic_type)
        ),
        key=topics.index_sort_key,
    )
    if not missing:
        return []

    entries: list[MenuEntry] = [IndexEntry(title=index_title(t, topics), topic_type=t) for t in missing]
    index_group = next(
        (group for group in iter_groups(root, include_root=False) if group.flags & GroupFlag.INDEX_GROUP),
        None,
    )
    if index_group is not None:
        index_group.children.extend(entries)
        index_group.flags |= GroupFlag.UPDATED_STRUCTURE
        added = list(entries)
    elif len(entries) == 1:
        root.append(entries[0])
        root.flags |= GroupFlag.UPDATED_STRUCTURE
        added = list(entries)
    else:
        index_group = GroupEntry(
            title=INDEX_GROUP_TITLE,
            children=list(entries),
            flags=GroupFlag.INDEX_GROUP | GroupFlag.UPDATED_STRUCTURE,
        )
        root.append(index_group)
        root.flags |= GroupFlag.UPDATED_STRUCTURE
        added = [index_group, *entries]
    registry.refresh_active(root)
    return added


__all__ = [
    "INDEX_GROUP_TITLE",
    "detect_index_groups",
    "remove_unindexable",
    "index_title",
    "add_missing_indexes",
]
