"""Domain model for the documentation menu tree.

This package contains non-I/O tree primitives:
- group/file/text/link/index entry datatypes
- transient group flags used during reconciliation
- depth-first walkers and file lookups
- structural outlines for comparing trees
"""

from __future__ import annotations

from .types import (
    SORT_FLAGS,
    EntryKind,
    FileEntry,
    GroupEntry,
    GroupFlag,
    IndexEntry,
    LinkEntry,
    MenuEntry,
    TextEntry,
    new_root,
)
from .walk import files_in_menu, iter_entries, iter_file_entries, iter_groups, outline

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
    "iter_file_entries",
    "files_in_menu",
    "iter_groups",
    "iter_entries",
    "outline",
]
