"""Deterministic writer for the menu file.

Output always uses braced groups and regenerates the explanatory comments,
whatever shape the user left the file in.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..input_roots import DEFAULT_ROOT_NAME, InputRoots
from ..menu_model import FileEntry, GroupEntry, IndexEntry, LinkEntry, MenuEntry, TextEntry
from ..topics import TOPIC_GENERAL, TopicTypes
from .escaping import EMPTY_TITLE, escape_text, obscure
from .parser import DATA_INPUT_DIRECTORY, DATA_ONLY_DIRECTORY_NAME, DATA_SEPARATOR

FORMAT_VERSION = "1.4"
INDENT = "   "

_TIMESTAMP_LEGEND = (
    '#   m     - One or two digit month.  January is "1"',
    '#   mm    - Always two digit month.  January is "01"',
    '#   mon   - Short month word.  January is "Jan"',
    '#   month - Long month word.  January is "January"',
    '#   d     - One or two digit day.  1 is "1"',
    '#   dd    - Always two digit day.  1 is "01"',
    '#   day   - Day with letter extension.  1 is "1st"',
    '#   yy    - Two digit year.  2006 is "06"',
    '#   yyyy  - Four digit year.  2006 is "2006"',
    '#   year  - Four digit year.  2006 is "2006"',
)

_EDITING_HELP = (
    "# --------------------------------------------------------------------------",
    "# ",
    "# Cut and paste the lines below to change the order in which your files",
    "# appear on the menu.  Don't worry about adding or removing files, they",
    "# are added and removed automatically on the next build.",
    "# ",
    "# You can further organize the menu by grouping the entries.  Add a",
    '# "Group: [name] {" line to start a group, and add a "}" to end it.',
    "# ",
    '# You can add text and web links to the menu by adding "Text: [text]" and',
    '# "Link: [name] ([URL])" lines, respectively.',
    "# ",
    "# The formatting and comments are auto-generated, so don't worry about",
    "# neatness when editing the file.  It will be cleaned up on the next",
    "# build.  When working with groups, just deal with the braces and forget",
    "# about the indentation and comments.",
    "# ",
)

_MULTI_ROOT_HELP = (
    "# You can use this file on other computers even if they use different",
    "# directories.  As long as the command line points to the same source files,",
    "# the locations will be corrected automatically.",
    "# ",
)


def _header_lines(
    title: str | None,
    subtitle: str | None,
    footer: str | None,
    timestamp_code: str | None,
) -> list[str]:
    lines = [f"Format: {FORMAT_VERSION}", "", ""]
    if title is not None:
        lines.append(f"Title: {escape_text(title)}")
        if subtitle is not None:
            lines.append(f"SubTitle: {escape_text(subtitle)}")
        else:
            lines += ["", "# You can also add a sub-title to your menu like this:", "# SubTitle: [subtitle]"]
    else:
        lines += [
            "# You can add a title and sub-title to your menu like this:",
            "# Title: [project name]",
            "# SubTitle: [subtitle]",
        ]
    lines.append("")

    if footer is not None:
        lines.append(f"Footer: {escape_text(footer)}")
    else:
        lines += [
            "# You can add a footer to your documentation like this:",
            "# Footer: [text]",
            "# If you want to add a copyright notice, this would be the place to do it.",
        ]

    if timestamp_code is not None:
        lines.append(f"Timestamp: {escape_text(timestamp_code)}")
    else:
        lines += [
            "",
            "# You can add a timestamp to your documentation like one of these:",
            "# Timestamp: Generated on month day, year",
            "# Timestamp: Updated mm/dd/yyyy",
            "# Timestamp: Last updated mon day",
            "#",
        ]
    lines += list(_TIMESTAMP_LEGEND)
    lines.append("")
    return lines


def _banned_lines(banned: Iterable[str], topics: TopicTypes) -> list[str]:
    names = sorted((topics.name_of_type(t, plural=True) for t in banned), key=str.lower)
    if not names:
        return []
    return [
        "# These are indexes you deleted, so they will not be added again",
        "# unless you remove them from this line.",
        "",
        "Don't Index: " + ", ".join(escape_text(name) for name in names),
        "",
        "",
    ]


def _target_text(target: Path, roots: InputRoots | None) -> str:
    if roots is not None and roots.is_single:
        split = roots.split(target)
        if split is not None:
            return split[1].as_posix()
    return str(target)


def write_entries(
    entries: list[MenuEntry],
    topics: TopicTypes,
    roots: InputRoots | None,
    indent: str = "",
) -> list[str]:
    """Render ``entries`` recursively; groups are always braced."""
    lines: list[str] = []
    last: MenuEntry | None = None
    for entry in entries:
        if isinstance(entry, FileEntry):
            modifier = "no auto-title, " if entry.no_auto_title else ""
            target = escape_text(_target_text(entry.target, roots))
            lines.append(f"{indent}File: {escape_text(entry.title)}  ({modifier}{target})")
        elif isinstance(entry, GroupEntry):
            if last is not None and not isinstance(last, GroupEntry):
                lines.append("")
            title = escape_text(entry.title)
            lines.append(f"{indent}Group: {title}  {{")
            lines.append("")
            lines += write_entries(entry.children, topics, roots, indent + INDENT)
            lines.append(f"{indent}{INDENT}}}  # Group: {title}")
            lines.append("")
        elif isinstance(entry, TextEntry):
            lines.append(f"{indent}Text: {escape_text(entry.title)}")
        elif isinstance(entry, LinkEntry):
            title = escape_text(entry.title) or EMPTY_TITLE
            lines.append(f"{indent}Link: {title}  ({escape_text(entry.url)})")
        elif isinstance(entry, IndexEntry):
            prefix = ""
            if entry.topic_type != TOPIC_GENERAL:
                prefix = escape_text(topics.name_of_type(entry.topic_type)) + " "
            lines.append(f"{indent}{prefix}Index: {escape_text(entry.title)}")
        last = entry
    return lines


def _data_lines(roots: InputRoots | None) -> list[str]:
    if roots is None or not roots.roots:
        return []
    if not roots.is_single:
        lines = ["", "", "##### Do not change or remove these lines. #####"]
        for root in roots.roots:
            payload = obscure(f"{root.name}{DATA_SEPARATOR}{root.path}")
            lines.append(f"Data: {DATA_INPUT_DIRECTORY}({payload})")
        return lines
    only = roots.roots[0]
    if only.name.lower() == DEFAULT_ROOT_NAME:
        return []
    return [
        "",
        "",
        "##### Do not change or remove this line. #####",
        f"Data: {DATA_ONLY_DIRECTORY_NAME}({obscure(only.name)})",
    ]


def render_menu_file(
    root: GroupEntry,
    topics: TopicTypes,
    *,
    title: str | None = None,
    subtitle: str | None = None,
    footer: str | None = None,
    timestamp_code: str | None = None,
    banned_indexes: Iterable[str] = (),
    roots: InputRoots | None = None,
) -> str:
    """Return the complete menu-file text for ``root`` and its metadata."""
    if title is None:
        subtitle = None
    lines = _header_lines(title, subtitle, footer, timestamp_code)
    lines += _banned_lines(banned_indexes, topics)
    lines.append("")
    lines += list(_EDITING_HELP)
    if roots is not None and not roots.is_single:
        lines += list(_MULTI_ROOT_HELP)
    lines += ["# --------------------------------------------------------------------------", "", ""]
    lines += write_entries(root.children, topics, roots)
    lines += _data_lines(roots)
    return "\n".join(lines) + "\n"


__all__ = [
    "FORMAT_VERSION",
    "write_entries",
    "render_menu_file",
]
