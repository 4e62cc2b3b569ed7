"""JSON cache of the default titles seen on the previous scan."""

from __future__ import annotations

import json
from pathlib import Path

TITLE_CACHE_FILENAME = "DefaultTitles.json"


def load_title_cache(path: Path) -> dict[Path, str]:
    """Load cached titles; missing or malformed caches are empty."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return {}
    if not isinstance(data, dict):
        return {}
    return {Path(key): value for key, value in data.items() if isinstance(key, str) and isinstance(value, str)}


def save_title_cache(path: Path, titles: dict[Path, str]) -> bool:
    """Write ``titles`` when they differ from the cache on disk.

    Returns whether anything was written.
    """
    if load_title_cache(path) == titles:
        return False
    serialized = {str(key): titles[key] for key in sorted(titles)}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(serialized, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return True


def changed_titles(previous: dict[Path, str], current: dict[Path, str]) -> frozenset[Path]:
    """Paths seen before whose default title is now different."""
    return frozenset(path for path, title in current.items() if path in previous and previous[path] != title)


__all__ = [
    "TITLE_CACHE_FILENAME",
    "load_title_cache",
    "save_title_cache",
    "changed_titles",
]
