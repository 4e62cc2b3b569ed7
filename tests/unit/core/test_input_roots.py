"""Tests for naming input directories and splitting paths by root."""

from __future__ import annotations

import unittest
from pathlib import Path, PurePath

from docmenu.input_roots import DEFAULT_ROOT_NAME, InputRoot, InputRoots, normalized_root_paths


class InputRootsTests(unittest.TestCase):
    def test_single_root_uses_stored_or_default_name(self) -> None:
        src = Path("/work/src")

        self.assertEqual(InputRoots.named([src]).roots, [InputRoot(src, DEFAULT_ROOT_NAME)])
        self.assertEqual(InputRoots.named([src], stored={src: "main"}).roots[0].name, "main")
        self.assertEqual(InputRoots.named([src], only_name="kept").roots[0].name, "kept")
        self.assertTrue(InputRoots.named([src]).is_single)

    def test_several_roots_get_unique_directory_names(self) -> None:
        roots = InputRoots.named([Path("/work/a/src"), Path("/work/b/src"), Path("/work/Lib")])

        self.assertEqual([root.name for root in roots.roots], ["src", "src2", "lib"])

    def test_stored_names_are_reused_first(self) -> None:
        a, b = Path("/work/a/src"), Path("/work/b/src")

        roots = InputRoots.named([a, b], stored={b: "src"})

        self.assertEqual([(root.path, root.name) for root in roots.roots], [(a, "src2"), (b, "src")])

    def test_duplicates_are_dropped_in_first_seen_order(self) -> None:
        self.assertEqual(
            normalized_root_paths([Path("/work/b"), Path("/work/a"), Path("/work/b/../b")]),
            [Path("/work/b"), Path("/work/a")],
        )

    def test_resolve_and_split(self) -> None:
        outer, inner = Path("/work"), Path("/work/pkg")
        roots = InputRoots([InputRoot(outer, "outer"), InputRoot(inner, "inner")])

        self.assertEqual(roots.resolve("INNER"), inner)
        self.assertIsNone(roots.resolve("missing"))
        split = roots.split(Path("/work/pkg/mod/x.py"))
        assert split is not None
        self.assertEqual(split[0].name, "inner")
        self.assertEqual(split[1], PurePath("mod/x.py"))
        self.assertIsNone(roots.split(Path("/elsewhere/x.py")))


if __name__ == "__main__":
    unittest.main()
