"""Menu-file writer tests, including reload of the written text."""

from __future__ import annotations

import unittest
from pathlib import Path

from docmenu.input_roots import InputRoot, InputRoots
from docmenu.menu_file import parse_menu_text, render_menu_file, write_entries
from docmenu.menu_model import FileEntry, GroupEntry, IndexEntry, LinkEntry, TextEntry, new_root, outline
from docmenu.reconcile.resolve import resolve_relative_targets
from docmenu.topics import TopicTypes

SRC = Path("/work/src")


def _tree() -> GroupEntry:
    root = new_root()
    root.append(FileEntry("Alpha (main)", SRC / "a.py"))
    group = GroupEntry("Helpers & Tools")
    group.append(FileEntry("Beta #1", SRC / "g" / "b.py", no_auto_title=True))
    group.append(LinkEntry("Site", "https://example.com/x"))
    root.append(group)
    root.append(TextEntry("Plain {text}"))
    root.append(IndexEntry("Everything", "general"))
    root.append(IndexEntry("Functions", "function"))
    return root


class MenuFileWriterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.topics = TopicTypes()
        self.single = InputRoots([InputRoot(SRC, "default")])

    def test_write_entries_layout(self) -> None:
        lines = write_entries(_tree().children, self.topics, self.single)

        self.assertEqual(
            lines,
            [
                "File: Alpha &lparen;main&rparen;  (a.py)",
                "",
                "Group: Helpers &amp; Tools  {",
                "",
                "   File: Beta ##1  (no auto-title, g/b.py)",
                "   Link: Site  (https://example.com/x)",
                "   }  # Group: Helpers &amp; Tools",
                "",
                "Text: Plain &lbrace;text&rbrace;",
                "Index: Everything",
                "Function Index: Functions",
            ],
        )

    def test_rendered_file_reloads_to_same_tree_and_metadata(self) -> None:
        root = _tree()
        text = render_menu_file(
            root,
            self.topics,
            title="Proj",
            subtitle="Sub",
            footer="Foot",
            timestamp_code="Updated month day, year",
            banned_indexes={"class", "variable"},
            roots=self.single,
        )

        contents = parse_menu_text(text, self.topics)
        resolve_relative_targets(contents.root, self.single, frozenset())

        self.assertEqual(contents.issues, [])
        self.assertEqual(outline(contents.root), outline(root))
        self.assertEqual(contents.title, "Proj")
        self.assertEqual(contents.subtitle, "Sub")
        self.assertEqual(contents.footer, "Foot")
        self.assertEqual(contents.timestamp_code, "Updated month day, year")
        self.assertEqual(contents.banned_indexes, {"class", "variable"})
        self.assertIn("Don't Index: Classes, Variables", text)
        self.assertTrue(text.startswith("Format: 1.4\n"))

    def test_empty_and_padded_titles_reload_unchanged(self) -> None:
        root = new_root()
        root.append(FileEntry("", SRC / "a.py"))
        root.append(FileEntry("  padded  ", SRC / "b.py", no_auto_title=True))
        root.append(TextEntry(" lead"))
        root.append(TextEntry("\ttabbed"))
        root.append(LinkEntry("", "http://x"))
        root.append(LinkEntry(" Site ", "http://y"))
        root.append(GroupEntry("G ", [FileEntry("C", SRC / "c.py")]))

        text = render_menu_file(root, self.topics, roots=self.single)
        contents = parse_menu_text(text, self.topics)
        resolve_relative_targets(contents.root, self.single, frozenset())

        self.assertEqual(contents.issues, [])
        self.assertEqual(outline(contents.root), outline(root))
        self.assertIn("File: &sp;&sp;padded&sp;&sp;  (no auto-title, b.py)", text)
        self.assertIn("Link: &empty;  (http://x)", text)

    def test_missing_metadata_is_written_as_commented_examples(self) -> None:
        text = render_menu_file(new_root(), self.topics, subtitle="ignored without title", roots=self.single)

        self.assertIn("# Title: [project name]", text)
        self.assertIn("# Footer: [text]", text)
        self.assertIn("# Timestamp: Updated mm/dd/yyyy", text)
        self.assertNotIn("SubTitle: ignored", text)
        self.assertNotIn("Data:", text)

        contents = parse_menu_text(text, self.topics)
        self.assertEqual(contents.issues, [])
        self.assertIsNone(contents.title)

    def test_multiple_roots_write_absolute_paths_and_data_lines(self) -> None:
        lib = Path("/work/lib")
        roots = InputRoots([InputRoot(SRC, "src"), InputRoot(lib, "lib")])
        root = new_root()
        root.append(FileEntry("A", SRC / "a.py"))
        root.append(FileEntry("L", lib / "l.py"))

        text = render_menu_file(root, self.topics, roots=roots)
        contents = parse_menu_text(text, self.topics)

        self.assertIn(f"File: A  ({SRC / 'a.py'})", text)
        self.assertIn("# You can use this file on other computers", text)
        self.assertEqual(contents.input_directories, {SRC: "src", lib: "lib"})
        self.assertEqual(outline(contents.root), outline(root))

    def test_single_named_root_writes_only_directory_name(self) -> None:
        roots = InputRoots([InputRoot(SRC, "project")])

        text = render_menu_file(new_root(), self.topics, roots=roots)
        contents = parse_menu_text(text, self.topics)

        self.assertEqual(contents.only_directory_name, "project")
        self.assertEqual(contents.input_directories, {})


if __name__ == "__main__":
    unittest.main()
