"""Input-root normalization, naming, and path splitting.

Roots are named so a menu file can be shared between machines: the menu
stores ``name -> directory`` pairs and a later run maps the names back onto
whatever directories the command line points at.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePath

DEFAULT_ROOT_NAME = "default"


@dataclass(frozen=True)
class InputRoot:
    """One input directory and its stable name."""

    path: Path
    name: str


def normalized_root_paths(paths: Iterable[Path]) -> list[Path]:
    """Return resolved roots preserving first-seen order, without duplicates."""
    normalized: list[Path] = []
    for raw_root in paths:
        resolved = Path(raw_root).resolve()
        if resolved not in normalized:
            normalized.append(resolved)
    return normalized


def _base_name(path: Path) -> str:
    return path.name.lower() or "root"


class InputRoots:
    """Ordered set of named input directories."""

    def __init__(self, roots: Iterable[InputRoot]) -> None:
        self._roots = list(roots)

    @classmethod
    def named(
        cls,
        paths: Iterable[Path],
        *,
        stored: dict[Path, str] | None = None,
        only_name: str | None = None,
    ) -> "InputRoots":
        """Name ``paths``, reusing names recorded in the menu file when possible."""
        resolved = normalized_root_paths(paths)
        stored = stored or {}
        if len(resolved) == 1:
            only = resolved[0]
            return cls([InputRoot(only, only_name or stored.get(only) or DEFAULT_ROOT_NAME)])

        taken: set[str] = set()
        names: dict[Path, str] = {}
        for path in resolved:
            name = stored.get(path)
            if name is not None and name not in taken:
                names[path] = name
                taken.add(name)
        for path in resolved:
            if path in names:
                continue
            base = _base_name(path)
            name = base
            suffix = 2
            while name in taken:
                name = f"{base}{suffix}"
                suffix += 1
            names[path] = name
            taken.add(name)
        return cls(InputRoot(path, names[path]) for path in resolved)

    @property
    def roots(self) -> list[InputRoot]:
        return list(self._roots)

    @property
    def is_single(self) -> bool:
        return len(self._roots) == 1

    def paths(self) -> list[Path]:
        return [root.path for root in self._roots]

    def resolve(self, name: str) -> Path | None:
        """Return the directory currently carrying ``name``."""
        wanted = name.lower()
        for root in self._roots:
            if root.name.lower() == wanted:
                return root.path
        return None

    def split(self, path: Path) -> tuple[InputRoot, PurePath] | None:
        """Return ``(root, relative_path)`` for the deepest root holding ``path``."""
        best: tuple[InputRoot, PurePath] | None = None
        for root in self._roots:
            if not path.is_relative_to(root.path):
                continue
            relative = path.relative_to(root.path)
            if best is None or len(relative.parts) < len(best[1].parts):
                best = (root, relative)
        return best


__all__ = [
    "DEFAULT_ROOT_NAME",
    "InputRoot",
    "InputRoots",
    "normalized_root_paths",
]
