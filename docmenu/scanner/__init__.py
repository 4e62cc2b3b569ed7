"""Source scanning: which files exist now and what their default titles are.

This package contains the scanner collaborator used by reconciliation:
- gitignore-aware filesystem walking restricted to lexable source files
- top-of-file documentation titles with a file-name fallback
- a JSON cache used to report which default titles changed
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..input_roots import InputRoots
from .doc_title import default_title, top_of_file_title
from .fs import SourceFile, is_source_file, iter_source_files
from .ignore import GitIgnoreMatcher, load_gitignore_matcher
from .title_cache import TITLE_CACHE_FILENAME, changed_titles, load_title_cache, save_title_cache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileScan:
    """Result of one scan: current files, their default titles, and changes."""

    files: frozenset[Path]
    default_titles: dict[Path, str] = field(default_factory=dict)
    changed_titles: frozenset[Path] = frozenset()

    @classmethod
    def from_titles(cls, titles: dict[Path, str], changed: Iterable[Path] = ()) -> "FileScan":
        return cls(files=frozenset(titles), default_titles=dict(titles), changed_titles=frozenset(changed))

    def default_title(self, path: Path) -> str:
        return self.default_titles.get(path) or path.name


def scan_input_roots(
    roots: InputRoots,
    *,
    title_cache_path: Path | None = None,
    skip_gitignored: bool = True,
    show_hidden: bool = False,
    skip: Callable[[Path], bool] | None = None,
) -> FileScan:
    """Walk every input root and collect source files and default titles."""
    titles: dict[Path, str] = {}
    for root in roots.roots:
        matcher = load_gitignore_matcher(root.path) if skip_gitignored else None
        for source in iter_source_files(root.path, show_hidden=show_hidden, ignore_matcher=matcher, skip=skip):
            titles.setdefault(source.path, default_title(source.path, source.file_size))

    previous = load_title_cache(title_cache_path) if title_cache_path is not None else {}
    changed = changed_titles(previous, titles)
    logger.info("Scanned %d source files in %d input roots", len(titles), len(roots.roots))
    if changed:
        logger.debug("%d default titles changed since the last scan", len(changed))
    return FileScan.from_titles(titles, changed)


__all__ = [
    "FileScan",
    "scan_input_roots",
    "SourceFile",
    "is_source_file",
    "iter_source_files",
    "GitIgnoreMatcher",
    "load_gitignore_matcher",
    "default_title",
    "top_of_file_title",
    "TITLE_CACHE_FILENAME",
    "load_title_cache",
    "save_title_cache",
    "changed_titles",
]
