"""Persistent JSON config helpers.

Stores the reconciliation thresholds and the trashed-menu policy.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "docmenu"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class MenuSettings:
    """Tunable reconciliation policy.

    ``max_files_in_group`` is the number of direct files a group may hold
    before it is split into directory sub-groups. ``min_files_in_new_group``
    is how many new files from one directory it takes to create a group for
    them. Either set to ``0`` disables that behavior.

    The trashed-menu check fires when at least ``trashed_menu_min_files``
    files were tracked and ``trashed_menu_ratio`` of them vanished in one run.
    """

    max_files_in_group: int = 10
    min_files_in_new_group: int = 3
    trashed_menu_min_files: int = 6
    trashed_menu_ratio: float = 0.5
    fail_on_trashed_menu: bool = False


DEFAULT_SETTINGS = MenuSettings()


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _coerce_nonnegative_int(value: object, default: int) -> int:
    """Booleans and non-integers are treated as invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return max(0, value)


def _coerce_ratio(value: object, default: float) -> float:
    """Accept numbers in the half-open interval ``(0, 1]``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value <= 0 or value > 1:
        return default
    return float(value)


def load_menu_settings() -> MenuSettings:
    """Return settings from config with per-key validation."""
    data = load_config()
    fail = data.get("fail_on_trashed_menu")
    return MenuSettings(
        max_files_in_group=_coerce_nonnegative_int(
            data.get("max_files_in_group"), DEFAULT_SETTINGS.max_files_in_group
        ),
        min_files_in_new_group=_coerce_nonnegative_int(
            data.get("min_files_in_new_group"), DEFAULT_SETTINGS.min_files_in_new_group
        ),
        trashed_menu_min_files=_coerce_nonnegative_int(
            data.get("trashed_menu_min_files"), DEFAULT_SETTINGS.trashed_menu_min_files
        ),
        trashed_menu_ratio=_coerce_ratio(data.get("trashed_menu_ratio"), DEFAULT_SETTINGS.trashed_menu_ratio),
        fail_on_trashed_menu=fail if isinstance(fail, bool) else DEFAULT_SETTINGS.fail_on_trashed_menu,
    )


def save_menu_settings(settings: MenuSettings) -> None:
    """Persist ``settings`` alongside any other keys already in the config."""
    config = load_config()
    config.update(asdict(settings))
    save_config(config)


def with_overrides(settings: MenuSettings, **overrides: object) -> MenuSettings:
    """Return ``settings`` with every non-``None`` override applied."""
    applied = {key: value for key, value in overrides.items() if value is not None}
    return replace(settings, **applied) if applied else settings


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "MenuSettings",
    "DEFAULT_SETTINGS",
    "load_config",
    "save_config",
    "load_menu_settings",
    "save_menu_settings",
    "with_overrides",
]
