"""Tests for source discovery, documentation titles, and the title cache."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from docmenu.input_roots import InputRoots
from docmenu.scanner import (
    default_title,
    is_source_file,
    iter_source_files,
    load_title_cache,
    save_title_cache,
    scan_input_roots,
    top_of_file_title,
)
from docmenu.scanner.title_cache import changed_titles


class DocTitleTests(unittest.TestCase):
    def _title(self, name: str, text: str) -> str | None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / name
            path.write_text(text, encoding="utf-8")
            return top_of_file_title(path)

    def test_python_docstring_after_shebang_and_coding_cookie(self) -> None:
        text = '#!/usr/bin/env python3\n# -*- coding: utf-8 -*-\n"""\nParse things.\n\nMore.\n"""\n'
        self.assertEqual(self._title("a.py", text), "Parse things.")

    def test_block_comment(self) -> None:
        self.assertEqual(self._title("a.c", "/*\n * Ring buffer helpers\n */\nint x;\n"), "Ring buffer helpers")

    def test_line_comments(self) -> None:
        self.assertEqual(self._title("a.js", "// Event bus\n// details\nexport {}\n"), "Event bus")
        self.assertEqual(self._title("a.sql", "-- Schema setup\nCREATE TABLE t ();\n"), "Schema setup")

    def test_code_without_documentation(self) -> None:
        self.assertIsNone(self._title("a.py", "value = 1\n"))
        self.assertIsNone(self._title("a.py", ""))

    def test_long_titles_are_shortened(self) -> None:
        title = self._title("a.py", '"""' + "word " * 40 + '"""\n')
        assert title is not None
        self.assertEqual(len(title), 80)
        self.assertTrue(title.endswith("..."))

    def test_default_title_falls_back_to_file_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "plain.py"
            path.write_text("x = 1\n", encoding="utf-8")
            self.assertEqual(default_title(path), "plain.py")
            self.assertEqual(default_title(Path(tmp) / "missing.py"), "missing.py")


class SourceWalkTests(unittest.TestCase):
    def test_recognized_languages(self) -> None:
        self.assertTrue(is_source_file(Path("x.py")))
        self.assertTrue(is_source_file(Path("x.c")))
        self.assertFalse(is_source_file(Path("x.zzz-unknown")))

    def test_walk_is_sorted_and_skips_hidden_and_unrecognized_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "pkg").mkdir()
            (root / ".hidden").mkdir()
            (root / "skipme").mkdir()
            for rel in ("b.py", "A.py", "pkg/c.py", ".hidden/d.py", "skipme/e.py", "data.zzz-unknown"):
                (root / rel).write_text("x = 1\n", encoding="utf-8")

            found = [
                source.path.relative_to(root).as_posix()
                for source in iter_source_files(root, skip=lambda path: path.name == "skipme")
            ]

        self.assertEqual(found, ["A.py", "b.py", "pkg/c.py"])


class TitleCacheTests(unittest.TestCase):
    def test_changed_titles_only_reports_known_paths(self) -> None:
        previous = {Path("/a.py"): "A", Path("/b.py"): "B"}
        current = {Path("/a.py"): "A2", Path("/b.py"): "B", Path("/c.py"): "C"}

        self.assertEqual(changed_titles(previous, current), {Path("/a.py")})

    def test_save_writes_only_when_different(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "Data" / "DefaultTitles.json"
            titles = {Path("/a.py"): "A"}

            self.assertEqual(load_title_cache(path), {})
            self.assertTrue(save_title_cache(path, titles))
            self.assertFalse(save_title_cache(path, titles))
            self.assertEqual(load_title_cache(path), titles)

            path.write_text("[1, 2]", encoding="utf-8")
            self.assertEqual(load_title_cache(path), {})


class ScanInputRootsTests(unittest.TestCase):
    def test_scan_reports_titles_and_changes_since_cache(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            src = base / "src"
            src.mkdir()
            (src / "a.py").write_text('"""Alpha module."""\n', encoding="utf-8")
            (src / "b.py").write_text("x = 1\n", encoding="utf-8")
            cache = base / "DefaultTitles.json"
            save_title_cache(cache, {src / "a.py": "Old alpha", src / "b.py": "b.py"})

            scan = scan_input_roots(InputRoots.named([src]), title_cache_path=cache, skip_gitignored=False)

        self.assertEqual(scan.files, {src / "a.py", src / "b.py"})
        self.assertEqual(scan.default_title(src / "a.py"), "Alpha module.")
        self.assertEqual(scan.default_title(src / "b.py"), "b.py")
        self.assertEqual(scan.changed_titles, {src / "a.py"})


if __name__ == "__main__":
    unittest.main()
