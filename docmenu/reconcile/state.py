"""Per-build menu state shared by every reconciliation pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..indexes import IndexRegistry
from ..menu_model import GroupEntry, new_root


class MenuFileStatus(Enum):
    """How the menu file relates to the previous build."""

    MISSING = "missing"
    NEW = "new"
    CHANGED = "changed"
    SAME = "same"


@dataclass
class MenuState:
    """The tree, its global metadata, and the change verdict for one build."""

    root: GroupEntry = field(default_factory=new_root)
    title: str | None = None
    subtitle: str | None = None
    footer: str | None = None
    timestamp_code: str | None = None
    indexes: IndexRegistry = field(default_factory=IndexRegistry)
    changed: bool = False
    # Most tracked files vanished; the old menu file is backed up on save.
    trashed: bool = False


__all__ = ["MenuFileStatus", "MenuState"]
