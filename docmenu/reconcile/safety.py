"""Guard against a build that would silently wipe most of the menu."""

from __future__ import annotations

import filecmp
import logging
import shutil
from collections.abc import Iterator
from pathlib import Path

from ..config import MenuSettings

logger = logging.getLogger(__name__)


class TrashedMenuError(RuntimeError):
    """Too many files vanished at once and the policy says to stop."""


def is_menu_trashed(original: int, removed: int, settings: MenuSettings) -> bool:
    if original <= 0 or removed <= 0:
        return False
    if original < settings.trashed_menu_min_files:
        return False
    return removed / original >= settings.trashed_menu_ratio


def _backup_names(menu_path: Path) -> Iterator[Path]:
    yield menu_path.with_name(f"{menu_path.stem}_Backup{menu_path.suffix}")
    number = 2
    while True:
        yield menu_path.with_name(f"{menu_path.stem}_Backup_{number}{menu_path.suffix}")
        number += 1


def backup_menu_file(menu_path: Path) -> Path | None:
    """Copy the menu file aside; ``None`` when there is nothing to copy.

    An existing backup with the same content is reused instead of adding
    another copy.
    """
    if not menu_path.is_file():
        return None
    for candidate in _backup_names(menu_path):
        if not candidate.exists():
            shutil.copy2(menu_path, candidate)
            return candidate
        if filecmp.cmp(menu_path, candidate, shallow=False):
            return candidate
    return None


def check_for_trashed_menu(original: int, removed: int, settings: MenuSettings) -> bool:
    """Warn when ``removed`` of ``original`` files is too many.

    Raises ``TrashedMenuError`` when the settings ask for it. Returns whether
    the menu looked trashed; the backup itself is taken when the menu is saved.
    """
    if not is_menu_trashed(original, removed, settings):
        return False

    message = f"{removed} of {original} files in the menu no longer exist"
    logger.warning("%s", message)
    if settings.fail_on_trashed_menu:
        raise TrashedMenuError(message)
    return True


__all__ = [
    "TrashedMenuError",
    "is_menu_trashed",
    "backup_menu_file",
    "check_for_trashed_menu",
]
