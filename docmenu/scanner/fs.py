"""Filesystem walking for source files under the input roots."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .ignore import GitIgnoreMatcher

_GET_LEXER_FOR_FILENAME = None
_LEXER_NOT_FOUND: type[Exception] | None = None
_LEXER_CACHE: dict[str, bool] = {}


@dataclass(frozen=True)
class SourceFile:
    """One discovered source file plus cached stat metadata."""

    path: Path
    file_size: int | None


def _ensure_pygments() -> None:
    global _GET_LEXER_FOR_FILENAME, _LEXER_NOT_FOUND
    if _GET_LEXER_FOR_FILENAME is not None:
        return
    from pygments.lexers import get_lexer_for_filename
    from pygments.util import ClassNotFound

    _GET_LEXER_FOR_FILENAME = get_lexer_for_filename
    _LEXER_NOT_FOUND = ClassNotFound


def is_source_file(path: Path) -> bool:
    """Return whether Pygments recognizes ``path`` as a language it can lex.

    Results are cached by file suffix (or by name for suffix-less files).
    """
    key = path.suffix.lower() or path.name
    cached = _LEXER_CACHE.get(key)
    if cached is not None:
        return cached
    _ensure_pygments()
    assert _GET_LEXER_FOR_FILENAME is not None and _LEXER_NOT_FOUND is not None
    try:
        _GET_LEXER_FOR_FILENAME(path.name)
        recognized = True
    except _LEXER_NOT_FOUND:
        recognized = False
    _LEXER_CACHE[key] = recognized
    return recognized


def iter_source_files(
    root: Path,
    *,
    show_hidden: bool = False,
    ignore_matcher: GitIgnoreMatcher | None = None,
    accept: Callable[[Path], bool] = is_source_file,
    skip: Callable[[Path], bool] | None = None,
) -> Iterator[SourceFile]:
    """Yield accepted files below ``root`` in sorted, depth-first order.

    Unreadable directories are skipped. ``skip`` can veto whole paths, for
    example the project directory holding the menu itself.
    """

    def walk(directory: Path) -> Iterator[SourceFile]:
        try:
            with os.scandir(directory) as entries:
                children = sorted(entries, key=lambda item: item.name.lower())
        except OSError:
            return

        for child in children:
            if not show_hidden and child.name.startswith("."):
                continue
            child_path = Path(child.path)
            if ignore_matcher is not None and ignore_matcher.is_ignored(child_path):
                continue
            if skip is not None and skip(child_path):
                continue
            try:
                is_dir = child.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if is_dir:
                yield from walk(child_path)
                continue
            if not accept(child_path):
                continue
            file_size: int | None = None
            try:
                stat = child.stat(follow_symlinks=False)
                file_size = int(stat.st_size)
            except OSError:
                pass
            yield SourceFile(path=child_path, file_size=file_size)

    yield from walk(root)


__all__ = ["SourceFile", "is_source_file", "iter_source_files"]
