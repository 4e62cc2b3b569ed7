"""Entity escaping, comment splitting, and ``Data:`` payload obscuring."""

from __future__ import annotations

import re

_ENTITIES = (
    ("&", "&amp;"),
    ("(", "&lparen;"),
    (")", "&rparen;"),
    ("{", "&lbrace;"),
    ("}", "&rbrace;"),
)
# Only used at the edges of a value, where the reader would strip them.
_EDGE_ENTITIES = (
    (" ", "&sp;"),
    ("\t", "&tab;"),
)
EMPTY_TITLE = "&empty;"

_ENTITY_RE = re.compile(r"&(amp|lparen|rparen|lbrace|rbrace|sp|tab|empty);")
_ENTITY_CHARS = {name[1:-1]: char for char, name in _ENTITIES + _EDGE_ENTITIES}
_ENTITY_CHARS["empty"] = ""
_EDGE_CHARS = "".join(char for char, _ in _EDGE_ENTITIES)
_EDGE_NAMES = dict(_EDGE_ENTITIES)

_OBSCURE_KEY = b"docmenu"


def _escape_edges(text: str) -> str:
    body = text.lstrip(_EDGE_CHARS)
    lead = text[: len(text) - len(body)]
    core = body.rstrip(_EDGE_CHARS)
    trail = body[len(core) :]
    if not lead and not trail:
        return text
    return (
        "".join(_EDGE_NAMES[char] for char in lead)
        + core
        + "".join(_EDGE_NAMES[char] for char in trail)
    )


def escape_text(text: str) -> str:
    """Escape ``& ( ) { }``, edge whitespace and ``#`` so the value survives a reload."""
    out = text
    for char, entity in _ENTITIES:
        out = out.replace(char, entity)
    return _escape_edges(out).replace("#", "##")


def restore_text(text: str) -> str:
    """Inverse of the entity part of ``escape_text``."""
    return _ENTITY_RE.sub(lambda match: _ENTITY_CHARS[match.group(1)], text)


def split_comment(line: str) -> tuple[str, str | None]:
    """Split ``line`` at its first unescaped ``#``.

    ``##`` is a literal ``#`` and is collapsed in the returned content.
    Returns ``(content, comment)`` where ``comment`` excludes the ``#``.
    """
    out: list[str] = []
    idx = 0
    while idx < len(line):
        ch = line[idx]
        if ch == "#":
            if line.startswith("##", idx):
                out.append("#")
                idx += 2
                continue
            return "".join(out), line[idx + 1 :]
        out.append(ch)
        idx += 1
    return "".join(out), None


def obscure(text: str) -> str:
    """Encode ``Data:`` payloads so users do not mistake them for settings."""
    raw = text.encode("utf-8")
    mixed = bytes(byte ^ _OBSCURE_KEY[idx % len(_OBSCURE_KEY)] for idx, byte in enumerate(raw))
    return mixed.hex()


def unobscure(payload: str) -> str | None:
    """Decode ``obscure`` output; ``None`` when the payload is damaged."""
    try:
        mixed = bytes.fromhex(payload.strip())
    except ValueError:
        return None
    raw = bytes(byte ^ _OBSCURE_KEY[idx % len(_OBSCURE_KEY)] for idx, byte in enumerate(mixed))
    return raw.decode("utf-8", errors="replace")


__all__ = [
    "EMPTY_TITLE",
    "escape_text",
    "restore_text",
    "split_comment",
    "obscure",
    "unobscure",
]
