"""Gitignore-aware path filtering for the source scanner.

Builds a matcher by asking git for the ignored files and directories under
an input root. Without git, or outside a repository, nothing is ignored.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path


def _is_within(path: Path, root: Path) -> bool:
    """Return whether ``path`` is at or under ``root``."""
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Ignored paths of one input root, as resolved absolute paths."""

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        """Return whether ``path`` or one of its parent directories is ignored."""
        resolved = path.resolve()
        if not _is_within(resolved, self.root):
            return False
        if resolved in self.ignored_files:
            return True
        for candidate in (resolved, *resolved.parents):
            if candidate in self.ignored_dirs:
                return True
            if candidate == self.root:
                break
        return False


def _git_output(args: list[str]) -> bytes | None:
    try:
        proc = subprocess.run(args, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, check=True)
    except (OSError, subprocess.CalledProcessError):
        return None
    return proc.stdout


def load_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Return a matcher for ``root`` or ``None`` when git cannot help."""
    if shutil.which("git") is None:
        return None

    root = root.resolve()
    top_level = _git_output(["git", "-C", str(root), "rev-parse", "--show-toplevel"])
    if not top_level or not top_level.strip():
        return None
    repo_root = Path(top_level.decode("utf-8", errors="replace").strip()).resolve()
    if not _is_within(root, repo_root):
        return None

    listing = _git_output(
        ["git", "-C", str(repo_root), "ls-files", "-z", "--others", "-i", "--exclude-standard", "--directory"]
    )
    if listing is None:
        return None

    ignored_files: set[Path] = set()
    ignored_dirs: set[Path] = set()
    for raw in listing.split(b"\x00"):
        rel = raw.decode("utf-8", errors="replace")
        if not rel.rstrip("/"):
            continue
        abs_path = (repo_root / rel.rstrip("/")).resolve()
        if not _is_within(abs_path, root):
            continue
        if rel.endswith("/") or abs_path.is_dir():
            ignored_dirs.add(abs_path)
        else:
            ignored_files.add(abs_path)

    return GitIgnoreMatcher(root=root, ignored_files=frozenset(ignored_files), ignored_dirs=frozenset(ignored_dirs))


__all__ = ["GitIgnoreMatcher", "load_gitignore_matcher"]
