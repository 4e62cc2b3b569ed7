"""Reader and writer for the human-editable menu file (``Menu.txt``)."""

from __future__ import annotations

from .errors import MenuFileError, MenuIssue, annotate_menu_file
from .escaping import escape_text, obscure, restore_text, split_comment, unobscure
from .parser import MenuFileContents, load_menu_file, parse_menu_text
from .writer import FORMAT_VERSION, render_menu_file, write_entries

__all__ = [
    "MenuIssue",
    "MenuFileError",
    "annotate_menu_file",
    "escape_text",
    "restore_text",
    "split_comment",
    "obscure",
    "unobscure",
    "MenuFileContents",
    "parse_menu_text",
    "load_menu_file",
    "FORMAT_VERSION",
    "render_menu_file",
    "write_entries",
]
