"""Menu-file parse issues, the aggregated failure, and in-file annotation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ERROR_PREFIX = "# ERROR: "
_HEADER_LINES = (
    "# There is an error in this file.  Search for ERROR to find it.",
    "# There are errors in this file.  Search for ERROR to find them.",
)


@dataclass(frozen=True)
class MenuIssue:
    """One parse problem with its 1-based source line."""

    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


class MenuFileError(Exception):
    """Raised once per load when the menu file has any parse issues."""

    def __init__(self, path: Path, issues: list[MenuIssue]) -> None:
        self.path = path
        self.issues = list(issues)
        count = len(self.issues)
        noun = "is an error" if count == 1 else f"are {count} errors"
        super().__init__(f"There {noun} in {path}")

    def details(self) -> str:
        return "\n".join(f"{self.path}:{issue}" for issue in self.issues)


def _is_annotation(line: str) -> bool:
    return line.startswith(ERROR_PREFIX) or line in _HEADER_LINES


def annotate_menu_file(path: Path, issues: list[MenuIssue]) -> None:
    """Rewrite ``path`` with ``# ERROR:`` comments above offending lines.

    Annotations from an earlier run are dropped. ``issues`` must come from a
    parse of the file as it is on disk now.
    """
    original = path.read_text(encoding="utf-8-sig").splitlines()
    by_line: dict[int, list[str]] = {}
    for issue in issues:
        by_line.setdefault(issue.line, []).append(issue.message)

    out: list[str] = []
    skip_blank = False
    for number, line in enumerate(original, start=1):
        if _is_annotation(line):
            skip_blank = line in _HEADER_LINES
            continue
        if skip_blank and not line.strip():
            skip_blank = False
            continue
        skip_blank = False
        out.extend(ERROR_PREFIX + message for message in by_line.get(number, ()))
        out.append(line)

    if issues:
        header = _HEADER_LINES[0] if len(issues) == 1 else _HEADER_LINES[1]
        out = [header, ""] + out
    path.write_text("\n".join(out) + "\n", encoding="utf-8")


__all__ = [
    "ERROR_PREFIX",
    "MenuIssue",
    "MenuFileError",
    "annotate_menu_file",
]
