"""Bookkeeping for active, previous, and user-banned generated indexes."""

from __future__ import annotations

from collections.abc import Iterable

from .menu_model import GroupEntry, IndexEntry, iter_entries


class IndexRegistry:
    """Active, previous, and banned index topic types for one build."""

    def __init__(
        self,
        active: Iterable[str] = (),
        previous: Iterable[str] = (),
        banned: Iterable[str] = (),
    ) -> None:
        self._active = set(active)
        self._previous = set(previous)
        self._banned = set(banned)

    def active_indexes(self) -> frozenset[str]:
        return frozenset(self._active)

    def previous_indexes(self) -> frozenset[str]:
        return frozenset(self._previous)

    def banned_indexes(self) -> frozenset[str]:
        return frozenset(self._banned)

    def set_previous(self, previous: Iterable[str]) -> None:
        self._previous = set(previous)

    def is_banned(self, topic_type: str) -> bool:
        return topic_type in self._banned

    def ban(self, topic_type: str) -> None:
        self._banned.add(topic_type)

    def unban(self, topic_type: str) -> None:
        self._banned.discard(topic_type)

    def ban_and_unban(self) -> bool:
        """Ban indexes the user removed, unban ones they put back.

        Returns whether the banned set changed.
        """
        before = set(self._banned)
        self._banned |= self._previous - self._active
        self._banned -= self._active
        return self._banned != before

    def refresh_active(self, root: GroupEntry) -> None:
        """Recompute the active set from the index entries in ``root``."""
        self._active = {entry.topic_type for _parent, entry in iter_entries(root) if isinstance(entry, IndexEntry)}


__all__ = ["IndexRegistry"]
