"""Default menu titles taken from a file's top-of-file documentation."""

from __future__ import annotations

import re
from pathlib import Path

TITLE_READ_BYTES = 4_096
TITLE_MAX_FILE_BYTES = 1024 * 1024
TITLE_MAX_CHARS = 80

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_CODING_COOKIE_RE = re.compile(r"^#.*coding[:=]\s*[-\w.]+")
_TRIPLE_QUOTE_PREFIXES = ('"""', "'''")
_LINE_COMMENT_PREFIXES = ("#", "//", "--", ";")


def _normalize_title(text: str) -> str | None:
    """Collapse whitespace, drop control characters, and cap the length."""
    candidate = _CONTROL_RE.sub("", " ".join(text.strip().split())).strip("#*/ ")
    if not candidate:
        return None
    if len(candidate) > TITLE_MAX_CHARS:
        return candidate[: TITLE_MAX_CHARS - 3].rstrip() + "..."
    return candidate


def _first_in_block(lines: list[str], start_idx: int, opener: str, closer: str, strip: str = "") -> str | None:
    """First non-empty line of a block comment or docstring opened on ``start_idx``."""
    body = lines[start_idx].lstrip()[len(opener) :]
    for idx in range(start_idx, len(lines)):
        text = body if idx == start_idx else lines[idx]
        closed = closer in text
        if closed:
            text = text.split(closer, 1)[0]
        title = _normalize_title(text.strip().lstrip(strip))
        if title or closed:
            return title
    return None


def _first_line_comment(lines: list[str], start_idx: int, prefix: str) -> str | None:
    for idx in range(start_idx, len(lines)):
        stripped = lines[idx].lstrip()
        if not stripped:
            continue
        if not stripped.startswith(prefix):
            break
        title = _normalize_title(stripped[len(prefix) :])
        if title:
            return title
    return None


def top_of_file_title(path: Path, size_bytes: int | None = None) -> str | None:
    """Return the first line of top-of-file documentation, if any."""
    if size_bytes is not None and size_bytes > TITLE_MAX_FILE_BYTES:
        return None
    try:
        with path.open("rb") as handle:
            sample = handle.read(TITLE_READ_BYTES)
    except OSError:
        return None
    if not sample or b"\x00" in sample:
        return None

    lines = sample.decode("utf-8", errors="replace").splitlines()
    if lines and lines[0].startswith("\ufeff"):
        lines[0] = lines[0].lstrip("\ufeff")

    idx = 0
    while idx < len(lines) and not lines[idx].strip():
        idx += 1
    if idx < len(lines) and lines[idx].lstrip().startswith("#!"):
        idx += 1
    if idx < len(lines) and _CODING_COOKIE_RE.match(lines[idx].strip()):
        idx += 1
    while idx < len(lines) and not lines[idx].strip():
        idx += 1
    if idx >= len(lines):
        return None

    first = lines[idx].lstrip()
    for delimiter in _TRIPLE_QUOTE_PREFIXES:
        if first.startswith(delimiter):
            return _first_in_block(lines, idx, delimiter, delimiter)
    if first.startswith("/*"):
        return _first_in_block(lines, idx, "/*", "*/", strip="*")
    for prefix in _LINE_COMMENT_PREFIXES:
        if first.startswith(prefix):
            return _first_line_comment(lines, idx, prefix)
    return None


def default_title(path: Path, size_bytes: int | None = None) -> str:
    """Menu title for ``path``: its documentation summary, else its file name."""
    return top_of_file_title(path, size_bytes) or path.name


__all__ = ["top_of_file_title", "default_title"]
