"""Recursive-descent reader for the hand-editable menu file.

The reader is forgiving: braces may sit on their own lines or trail/lead
other tags, groups may be braceless, and every problem is recorded as a
``MenuIssue`` instead of stopping the parse.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from ..menu_model import FileEntry, GroupEntry, IndexEntry, LinkEntry, TextEntry, new_root
from ..topics import TOPIC_GENERAL, TopicTypes
from .errors import MenuIssue
from .escaping import restore_text, split_comment, unobscure

_FILE_RE = re.compile(r"^(.*)\(([^\(]+)\)$")
_AUTO_TITLE_RE = re.compile(r"^((?:no )?auto-title, ?)(.+)$", re.IGNORECASE)
_LINK_TITLED_RE = re.compile(r"^([^\(\)]+?) ?\(([^\)]+)\)$")
_LINK_BARE_PAREN_RE = re.compile(r"^\(([^\)]+)\)$")
_DATA_RE = re.compile(r"^(\d+)\((.*)\)$")
_INDEX_LIST_SPLIT_RE = re.compile(r", ?")

DATA_INPUT_DIRECTORY = 1
DATA_ONLY_DIRECTORY_NAME = 2
DATA_SEPARATOR = "///"


@dataclass
class MenuFileContents:
    """Everything read from one menu file."""

    root: GroupEntry = field(default_factory=new_root)
    title: str | None = None
    subtitle: str | None = None
    footer: str | None = None
    timestamp_code: str | None = None
    indexes: set[str] = field(default_factory=set)
    banned_indexes: set[str] = field(default_factory=set)
    input_directories: dict[Path, str] = field(default_factory=dict)
    only_directory_name: str | None = None
    issues: list[MenuIssue] = field(default_factory=list)
    forced_change: bool = False


@dataclass
class _OpenGroup:
    group: GroupEntry
    line: int
    braceless: bool = False


def _line_tokens(content: str) -> list[str]:
    """Split leading and trailing braces off the tag text."""
    text = content.strip()
    leading: list[str] = []
    trailing: list[str] = []
    while text and text[0] in "{}":
        leading.append(text[0])
        text = text[1:].lstrip()
    while text and text[-1] in "{}":
        trailing.insert(0, text[-1])
        text = text[:-1].rstrip()
    return leading + ([text] if text else []) + trailing


def _parse_link(value: str) -> tuple[str, str] | None:
    match = _LINK_TITLED_RE.match(value)
    if match:
        return match.group(1), match.group(2)
    match = _LINK_BARE_PAREN_RE.match(value)
    if match:
        return match.group(1), match.group(1)
    if value and "(" not in value and ")" not in value:
        return value, value
    return None


class _MenuParser:
    def __init__(self, topics: TopicTypes) -> None:
        self.topics = topics
        self.contents = MenuFileContents()
        self.open_groups: list[_OpenGroup] = []
        self.after_group_tag = False
        self.line = 0

    @property
    def current(self) -> GroupEntry:
        return self.open_groups[-1].group if self.open_groups else self.contents.root

    def error(self, message: str, line: int | None = None) -> None:
        self.contents.issues.append(MenuIssue(self.line if line is None else line, message))

    def close_braceless_group(self) -> None:
        if self.open_groups and self.open_groups[-1].braceless:
            self.open_groups.pop()

    def feed_line(self, number: int, raw: str) -> None:
        self.line = number
        if raw.lstrip().startswith("#"):
            return
        content, comment = split_comment(raw.rstrip("\r\n"))
        for token in _line_tokens(content):
            self.feed_token(token, comment)

    def feed_token(self, token: str, comment: str | None) -> None:
        if self.after_group_tag:
            self.after_group_tag = False
            if token == "{":
                return
            self.open_groups[-1].braceless = True

        if token == "{":
            self.error("Opening braces are only allowed after Group tags.")
            return
        if token == "}":
            self.close_braceless_group()
            if self.open_groups:
                self.open_groups.pop()
            else:
                self.error("Unmatched closing brace.")
            return

        raw_keyword, colon, value = token.partition(":")
        if not colon:
            self.error(f'"{token}" is not a valid menu line.')
            return
        raw_keyword = " ".join(raw_keyword.split())
        keyword = raw_keyword.lower()
        value = value.strip()

        handler = _KEYWORD_HANDLERS.get(keyword)
        if handler is not None:
            handler(self, value, comment)
        elif keyword.endswith(" index"):
            self.typed_index(raw_keyword[: -len(" index")], value)
        else:
            self.error(f"{raw_keyword[:1].upper()}{raw_keyword[1:]} is not a valid keyword.")

    def finish(self) -> MenuFileContents:
        self.close_braceless_group()
        if self.open_groups:
            count = len(self.open_groups)
            message = "There is an unclosed group." if count == 1 else f"There are {count} unclosed groups."
            self.error(message, line=self.open_groups[0].line)
            self.open_groups.clear()
        return self.contents

    # Keyword handlers.

    def on_format(self, value: str, comment: str | None) -> None:
        pass

    def on_title(self, value: str, comment: str | None) -> None:
        if self.contents.title is None:
            self.contents.title = restore_text(value)
        else:
            self.error("Title can only be defined once.")

    def on_subtitle(self, value: str, comment: str | None) -> None:
        if self.contents.title is None:
            self.error("Title must be defined before SubTitle.")
        elif self.contents.subtitle is None:
            self.contents.subtitle = restore_text(value)
        else:
            self.error("SubTitle can only be defined once.")

    def on_footer(self, value: str, comment: str | None) -> None:
        if self.contents.footer is None:
            self.contents.footer = restore_text(value)
        else:
            self.error("Footer can only be defined once.")

    def on_timestamp(self, value: str, comment: str | None) -> None:
        if self.contents.timestamp_code is not None:
            self.error("Timestamp can only be defined once.")
        elif not value:
            self.error("Timestamp must not be empty.")
        else:
            self.contents.timestamp_code = restore_text(value)

    def on_file(self, value: str, comment: str | None) -> None:
        match = _FILE_RE.match(value)
        if not match:
            self.error('File lines must be in the format "File: [title] ([location])"')
            return
        title, target = match.group(1).rstrip(" "), match.group(2)
        no_auto_title = False
        modifier = _AUTO_TITLE_RE.match(target)
        if modifier:
            no_auto_title = modifier.group(1).lower().startswith("no")
            target = modifier.group(2)
        self.current.append(
            FileEntry(title=restore_text(title), target=Path(restore_text(target.strip())), no_auto_title=no_auto_title)
        )

    def on_group(self, value: str, comment: str | None) -> None:
        self.close_braceless_group()
        entry = GroupEntry(title=restore_text(value))
        self.current.append(entry)
        self.open_groups.append(_OpenGroup(entry, self.line))
        self.after_group_tag = True

    def on_text(self, value: str, comment: str | None) -> None:
        self.current.append(TextEntry(title=restore_text(value)))

    def on_link(self, value: str, comment: str | None) -> None:
        parsed = _parse_link(value)
        if parsed is None and comment is not None:
            # URLs may carry a fragment that was read as a comment.
            parsed = _parse_link(f"{value}#{comment}".strip())
        if parsed is None:
            self.error('Link lines must be in the format "Link: [title] ([url])"')
            return
        title, url = parsed
        self.current.append(LinkEntry(title=restore_text(title.strip()), url=restore_text(url.strip())))

    def on_data(self, value: str, comment: str | None) -> None:
        match = _DATA_RE.match(value)
        if not match:
            return
        number, payload = int(match.group(1)), unobscure(match.group(2))
        if payload is None:
            return
        if number == DATA_INPUT_DIRECTORY:
            name, separator, directory = payload.partition(DATA_SEPARATOR)
            if separator:
                self.contents.input_directories[Path(directory)] = name
        elif number == DATA_ONLY_DIRECTORY_NAME:
            self.contents.only_directory_name = payload
        # Unknown numbers come from newer formats; keep quiet.

    def on_dont_index(self, value: str, comment: str | None) -> None:
        for name in _INDEX_LIST_SPLIT_RE.split(value):
            name = restore_text(name).strip()
            if not name:
                continue
            topic_type = self.topics.type_from_name(name)
            if topic_type is None:
                self.error(f"{name} is not a valid index type.")
            else:
                self.contents.banned_indexes.add(topic_type)

    def on_index(self, value: str, comment: str | None) -> None:
        self.current.append(IndexEntry(title=restore_text(value), topic_type=TOPIC_GENERAL))
        self.contents.indexes.add(TOPIC_GENERAL)

    def typed_index(self, name: str, value: str) -> None:
        name = restore_text(name)
        topic_type = self.topics.type_from_name(name)
        if topic_type is None:
            self.error(f"{name} is not a valid index type.")
            return
        if not self.topics.is_indexable(topic_type):
            # The topic settings changed under the menu; drop it and rewrite.
            self.contents.forced_change = True
            return
        self.contents.indexes.add(topic_type)
        self.current.append(IndexEntry(title=restore_text(value), topic_type=topic_type))


_KEYWORD_HANDLERS = {
    "format": _MenuParser.on_format,
    "title": _MenuParser.on_title,
    "subtitle": _MenuParser.on_subtitle,
    "footer": _MenuParser.on_footer,
    "timestamp": _MenuParser.on_timestamp,
    "file": _MenuParser.on_file,
    "group": _MenuParser.on_group,
    "text": _MenuParser.on_text,
    "link": _MenuParser.on_link,
    "data": _MenuParser.on_data,
    "don't index": _MenuParser.on_dont_index,
    "dont index": _MenuParser.on_dont_index,
    "index": _MenuParser.on_index,
}


def parse_menu_text(text: str, topics: TopicTypes) -> MenuFileContents:
    """Parse menu-file ``text``; problems are collected in ``issues``."""
    parser = _MenuParser(topics)
    for number, raw in enumerate(text.splitlines(), start=1):
        parser.feed_line(number, raw)
    return parser.finish()


def load_menu_file(path: Path, topics: TopicTypes) -> MenuFileContents | None:
    """Read and parse ``path``; ``None`` when the file does not exist."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        return None
    return parse_menu_text(text, topics)


__all__ = [
    "DATA_INPUT_DIRECTORY",
    "DATA_ONLY_DIRECTORY_NAME",
    "DATA_SEPARATOR",
    "MenuFileContents",
    "parse_menu_text",
    "load_menu_file",
]
