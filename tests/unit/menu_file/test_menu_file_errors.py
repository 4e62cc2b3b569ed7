"""Tests for error annotation of the menu file and text escaping helpers."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from docmenu.menu_file import (
    MenuFileError,
    MenuIssue,
    annotate_menu_file,
    escape_text,
    load_menu_file,
    obscure,
    parse_menu_text,
    restore_text,
    split_comment,
    unobscure,
)
from docmenu.topics import TopicTypes


class MenuFileAnnotationTests(unittest.TestCase):
    def test_annotations_are_inserted_above_offending_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "Menu.txt"
            path.write_text("File: A  (a.py)\nBogus: x\n}\n", encoding="utf-8")
            contents = parse_menu_text(path.read_text(encoding="utf-8"), TopicTypes())

            annotate_menu_file(path, contents.issues)

            lines = path.read_text(encoding="utf-8").splitlines()

        self.assertEqual(
            lines,
            [
                "# There are errors in this file.  Search for ERROR to find them.",
                "",
                "File: A  (a.py)",
                "# ERROR: Bogus is not a valid keyword.",
                "Bogus: x",
                "# ERROR: Unmatched closing brace.",
                "}",
            ],
        )

    def test_reannotating_replaces_old_annotations(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "Menu.txt"
            path.write_text("Bogus: x\nText: fine\n", encoding="utf-8")
            topics = TopicTypes()
            annotate_menu_file(path, parse_menu_text(path.read_text(encoding="utf-8"), topics).issues)

            # The user fixed the line; annotations parse as comments.
            fixed = path.read_text(encoding="utf-8").replace("Bogus: x", "Text: x")
            path.write_text(fixed, encoding="utf-8")
            issues = parse_menu_text(fixed, topics).issues
            annotate_menu_file(path, issues)

            lines = path.read_text(encoding="utf-8").splitlines()

        self.assertEqual(issues, [])
        self.assertEqual(lines, ["Text: x", "Text: fine"])

    def test_byte_order_mark_does_not_survive_annotation(self) -> None:
        topics = TopicTypes()
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "Menu.txt"
            path.write_text("\ufeffTitle: Proj\nBogus: x\n", encoding="utf-8")
            contents = load_menu_file(path, topics)
            assert contents is not None
            annotate_menu_file(path, contents.issues)

            fixed = path.read_text(encoding="utf-8").replace("Bogus: x\n", "")
            path.write_text(fixed, encoding="utf-8")
            reloaded = load_menu_file(path, topics)

        assert reloaded is not None
        self.assertEqual(reloaded.issues, [])
        self.assertEqual(reloaded.title, "Proj")

    def test_menu_file_error_message_counts_issues(self) -> None:
        one = MenuFileError(Path("Menu.txt"), [MenuIssue(3, "bad")])
        two = MenuFileError(Path("Menu.txt"), [MenuIssue(3, "bad"), MenuIssue(5, "worse")])

        self.assertEqual(str(one), "There is an error in Menu.txt")
        self.assertEqual(str(two), "There are 2 errors in Menu.txt")
        self.assertEqual(two.details(), "Menu.txt:line 3: bad\nMenu.txt:line 5: worse")


class EscapingTests(unittest.TestCase):
    def test_escape_and_restore(self) -> None:
        raw = "a & (b) {c}"

        escaped = escape_text(raw)

        self.assertEqual(escaped, "a &amp; &lparen;b&rparen; &lbrace;c&rbrace;")
        self.assertEqual(restore_text(escaped), raw)

    def test_split_comment_collapses_doubled_hashes(self) -> None:
        self.assertEqual(split_comment("Text: C## rocks # note"), ("Text: C# rocks ", " note"))
        self.assertEqual(split_comment("Text: none"), ("Text: none", None))

    def test_obscured_payloads_decode(self) -> None:
        payload = obscure("name////some/dir")

        self.assertNotIn("name", payload)
        self.assertEqual(unobscure(payload), "name////some/dir")
        self.assertIsNone(unobscure("not hex"))


if __name__ == "__main__":
    unittest.main()
