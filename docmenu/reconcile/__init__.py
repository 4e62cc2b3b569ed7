"""Reconciliation of the menu tree against the scanned source files.

This package contains:
- per-build state and the menu-file status enum
- target resolution across input roots
- placement of new files, pruning, and directory sub-groups
- index upkeep, sort detection and resorting
- the trashed-menu safety check
- ``Reconciler``, which runs the passes in order
"""

from .reconciler import Reconciler
from .safety import TrashedMenuError, check_for_trashed_menu
from .state import MenuFileStatus, MenuState

__all__ = [
    "Reconciler",
    "MenuFileStatus",
    "MenuState",
    "TrashedMenuError",
    "check_for_trashed_menu",
]
