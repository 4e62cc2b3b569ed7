"""Domain datatypes for menu tree entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from pathlib import Path


class EntryKind(IntEnum):
    """Entry kinds; values double as the snapshot record tags."""

    FILE = 3
    GROUP = 4
    TEXT = 5
    LINK = 6
    INDEX = 8


class GroupFlag(IntFlag):
    """Transient per-build group state. Never persisted."""

    NONE = 0
    UPDATED_STRUCTURE = 1
    INDEX_GROUP = 4
    UNSORTED = 8
    FILES_SORTED = 16
    FILES_AND_GROUPS_SORTED = 32


SORT_FLAGS = GroupFlag.UNSORTED | GroupFlag.FILES_SORTED | GroupFlag.FILES_AND_GROUPS_SORTED


@dataclass(eq=False)
class FileEntry:
    """Menu entry pointing at one source file."""

    title: str
    target: Path
    no_auto_title: bool = False

    kind = EntryKind.FILE


@dataclass(eq=False)
class GroupEntry:
    """Menu group with ordered, exclusively owned children."""

    title: str
    children: list["MenuEntry"] = field(default_factory=list)
    flags: GroupFlag = GroupFlag.NONE

    kind = EntryKind.GROUP

    def append(self, entry: "MenuEntry") -> None:
        self.children.append(entry)

    def remove(self, entry: "MenuEntry") -> None:
        """Remove ``entry`` by identity."""
        for idx, child in enumerate(self.children):
            if child is entry:
                del self.children[idx]
                return
        raise ValueError(f"entry not in group {self.title!r}")

    def sort_tier(self) -> GroupFlag:
        return self.flags & SORT_FLAGS


@dataclass(eq=False)
class TextEntry:
    """Free text line in the menu."""

    title: str

    kind = EntryKind.TEXT


@dataclass(eq=False)
class LinkEntry:
    """External link."""

    title: str
    url: str

    kind = EntryKind.LINK


@dataclass(eq=False)
class IndexEntry:
    """Generated index for one topic type."""

    title: str
    topic_type: str

    kind = EntryKind.INDEX


MenuEntry = GroupEntry | FileEntry | TextEntry | LinkEntry | IndexEntry


def new_root() -> GroupEntry:
    """Return an empty root group; its children are the top-level menu."""
    return GroupEntry(title="")


__all__ = [
    "EntryKind",
    "GroupFlag",
    "SORT_FLAGS",
    "FileEntry",
    "GroupEntry",
    "TextEntry",
    "LinkEntry",
    "IndexEntry",
    "MenuEntry",
    "new_root",
]
