"""Binary previous-state snapshot (``PreviousMenuState.nd``).

Layout::

    [UInt8: 0x80 marker] [UInt8: major] [UInt8: minor]
    then records, each starting with a UInt8 tag:
    [0]                                           close current group
    [FILE]  [UInt8: no_auto_title] [AString16: title] [AString16: target]
    [GROUP] [AString16: title]
    [INDEX] [AString16: title] [topic type, see _INDEX_TOPIC_CODECS]
    [LINK]  [AString16: title] [AString16: url]
    [TEXT]  [AString16: text]

``AString16`` is a big-endian UInt16 byte count followed by UTF-8 bytes.
The snapshot is only ever diffed against; any defect makes the whole file
count as absent.
"""

from __future__ import annotations

import io
import logging
import struct
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from .menu_model import (
    EntryKind,
    FileEntry,
    GroupEntry,
    IndexEntry,
    LinkEntry,
    MenuEntry,
    TextEntry,
    new_root,
)
from .topics import TopicTypes

logger = logging.getLogger(__name__)

BINARY_FORMAT = 0x80
CLOSE_GROUP = 0


@dataclass(frozen=True, order=True)
class FormatVersion:
    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


SNAPSHOT_VERSION = FormatVersion(1, 4)
OLDEST_SUPPORTED_VERSION = FormatVersion(1, 0)
STRING_TOPIC_TYPES_SINCE = FormatVersion(1, 3)


class SnapshotFormatError(ValueError):
    """The snapshot bytes cannot be decoded."""


class MenuSaveError(OSError):
    """Writing the menu file or snapshot failed."""


@dataclass
class PreviousMenuState:
    """Decoded snapshot: the old tree plus lookups used for diffing."""

    root: GroupEntry = field(default_factory=new_root)
    indexes: set[str] = field(default_factory=set)
    files: dict[Path, FileEntry] = field(default_factory=dict)


class _Reader:
    def __init__(self, data: bytes, offset: int = 0) -> None:
        self.data = data
        self.offset = offset

    def at_end(self) -> bool:
        return self.offset >= len(self.data)

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise SnapshotFormatError(f"truncated record at byte {self.offset}")
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def u8(self) -> int:
        return self.take(1)[0]

    def u16(self) -> int:
        return struct.unpack(">H", self.take(2))[0]

    def astring16(self) -> str:
        return self.take(self.u16()).decode("utf-8", errors="replace")


class _Writer:
    def __init__(self) -> None:
        self.buffer = io.BytesIO()

    def u8(self, value: int) -> None:
        self.buffer.write(struct.pack(">B", value))

    def astring16(self, text: str) -> None:
        raw = text.encode("utf-8")
        if len(raw) > 0xFFFF:
            raise ValueError(f"string too long for snapshot: {len(raw)} bytes")
        self.buffer.write(struct.pack(">H", len(raw)))
        self.buffer.write(raw)


def _read_legacy_topic(reader: _Reader, topics: TopicTypes) -> str | None:
    return topics.type_from_legacy(reader.u8())


def _write_legacy_topic(writer: _Writer, topic_type: str, topics: TopicTypes) -> None:
    writer.u8(topics.legacy_code_of(topic_type))


def _read_string_topic(reader: _Reader, topics: TopicTypes) -> str | None:
    return reader.astring16()


def _write_string_topic(writer: _Writer, topic_type: str, topics: TopicTypes) -> None:
    writer.astring16(topic_type)


# (first version, first version no longer covered or None, reader, writer)
_INDEX_TOPIC_CODECS: tuple[
    tuple[
        FormatVersion,
        FormatVersion | None,
        Callable[[_Reader, TopicTypes], str | None],
        Callable[[_Writer, str, TopicTypes], None],
    ],
    ...,
] = (
    (OLDEST_SUPPORTED_VERSION, STRING_TOPIC_TYPES_SINCE, _read_legacy_topic, _write_legacy_topic),
    (STRING_TOPIC_TYPES_SINCE, None, _read_string_topic, _write_string_topic),
)


def _index_topic_codec(version: FormatVersion):
    for first, stop, reader, writer in _INDEX_TOPIC_CODECS:
        if version >= first and (stop is None or version < stop):
            return reader, writer
    raise SnapshotFormatError(f"unsupported snapshot version {version}")


def is_supported_version(version: FormatVersion) -> bool:
    return OLDEST_SUPPORTED_VERSION <= version <= SNAPSHOT_VERSION


def decode_snapshot(data: bytes, topics: TopicTypes) -> PreviousMenuState:
    """Decode snapshot bytes; raises ``SnapshotFormatError`` on any defect."""
    reader = _Reader(data)
    if reader.at_end() or reader.u8() != BINARY_FORMAT:
        raise SnapshotFormatError("missing binary format marker")
    version = FormatVersion(reader.u8(), reader.u8())
    if not is_supported_version(version):
        raise SnapshotFormatError(f"unsupported snapshot version {version}")
    read_topic, _write_topic = _index_topic_codec(version)

    state = PreviousMenuState()
    stack: list[GroupEntry] = []
    current = state.root

    while not reader.at_end():
        tag = reader.u8()
        entry: MenuEntry | None
        if tag == CLOSE_GROUP:
            if not stack:
                raise SnapshotFormatError(f"unmatched group close at byte {reader.offset - 1}")
            current = stack.pop()
            continue
        if tag == EntryKind.FILE:
            no_auto_title = bool(reader.u8())
            title = reader.astring16()
            entry = FileEntry(title=title, target=Path(reader.astring16()), no_auto_title=no_auto_title)
        elif tag == EntryKind.GROUP:
            entry = GroupEntry(title=reader.astring16())
        elif tag == EntryKind.INDEX:
            title = reader.astring16()
            topic_type = read_topic(reader, topics)
            # The topic type may have been removed since the snapshot was written.
            entry = IndexEntry(title, topic_type) if topics.is_valid_type(topic_type) else None
        elif tag == EntryKind.LINK:
            title = reader.astring16()
            entry = LinkEntry(title=title, url=reader.astring16())
        elif tag == EntryKind.TEXT:
            entry = TextEntry(title=reader.astring16())
        else:
            raise SnapshotFormatError(f"unknown record tag {tag} at byte {reader.offset - 1}")

        if entry is None:
            continue
        current.append(entry)
        if isinstance(entry, FileEntry):
            state.files[entry.target] = entry
        elif isinstance(entry, GroupEntry):
            stack.append(current)
            current = entry
        elif isinstance(entry, IndexEntry):
            state.indexes.add(entry.topic_type)
    if stack:
        raise SnapshotFormatError(f"snapshot ends inside {len(stack)} open group(s)")
    return state


def encode_snapshot(root: GroupEntry, topics: TopicTypes, version: FormatVersion = SNAPSHOT_VERSION) -> bytes:
    """Encode ``root``'s children in the layout of ``version``."""
    _read_topic, write_topic = _index_topic_codec(version)
    writer = _Writer()
    writer.u8(BINARY_FORMAT)
    writer.u8(version.major)
    writer.u8(version.minor)

    def write_entries(entries: list[MenuEntry]) -> None:
        for entry in entries:
            writer.u8(entry.kind)
            if isinstance(entry, FileEntry):
                writer.u8(1 if entry.no_auto_title else 0)
                writer.astring16(entry.title)
                writer.astring16(str(entry.target))
            elif isinstance(entry, GroupEntry):
                writer.astring16(entry.title)
                write_entries(entry.children)
                writer.u8(CLOSE_GROUP)
            elif isinstance(entry, IndexEntry):
                writer.astring16(entry.title)
                write_topic(writer, entry.topic_type, topics)
            elif isinstance(entry, LinkEntry):
                writer.astring16(entry.title)
                writer.astring16(entry.url)
            elif isinstance(entry, TextEntry):
                writer.astring16(entry.title)

    write_entries(root.children)
    return writer.buffer.getvalue()


def load_snapshot(path: Path, topics: TopicTypes) -> PreviousMenuState | None:
    """Return the decoded snapshot, or ``None`` when missing or unusable."""
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as exc:
        logger.warning("Cannot read menu snapshot %s: %s", path, exc)
        return None
    try:
        return decode_snapshot(data, topics)
    except SnapshotFormatError as exc:
        logger.warning("Ignoring menu snapshot %s: %s", path, exc)
        return None


def encode_for_save(root: GroupEntry, topics: TopicTypes) -> bytes:
    """``encode_snapshot`` at the current version, failing as ``MenuSaveError``."""
    try:
        return encode_snapshot(root, topics)
    except ValueError as exc:
        raise MenuSaveError(f"Couldn't encode menu snapshot: {exc}") from exc


def write_snapshot(path: Path, data: bytes) -> None:
    """Write already encoded snapshot bytes in one call."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise MenuSaveError(f"Couldn't save menu snapshot {path}: {exc}") from exc


__all__ = [
    "BINARY_FORMAT",
    "FormatVersion",
    "SNAPSHOT_VERSION",
    "OLDEST_SUPPORTED_VERSION",
    "STRING_TOPIC_TYPES_SINCE",
    "SnapshotFormatError",
    "MenuSaveError",
    "PreviousMenuState",
    "decode_snapshot",
    "encode_snapshot",
    "encode_for_save",
    "write_snapshot",
    "is_supported_version",
    "load_snapshot",
]
