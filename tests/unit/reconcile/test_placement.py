"""Tests for new-file placement, pruning, and directory sub-groups."""

from __future__ import annotations

import unittest
from pathlib import Path

from docmenu.config import MenuSettings
from docmenu.menu_model import FileEntry, GroupEntry, GroupFlag, TextEntry, new_root, outline
from docmenu.reconcile.placement import (
    auto_place_new_files,
    create_directory_subgroups,
    directory_homes,
    remove_dead_files,
    remove_empty_groups,
)

SRC = Path("/src")


def _title(path: Path) -> str:
    return path.stem.title()


class AutoPlacementTests(unittest.TestCase):
    def test_new_file_joins_group_holding_its_siblings(self) -> None:
        root = new_root()
        lib = GroupEntry("Lib")
        lib.append(FileEntry("A", SRC / "lib" / "a.py"))
        root.append(lib)

        added = auto_place_new_files(root, [SRC / "lib" / "b.py"], _title, MenuSettings(), root_directories={SRC})

        self.assertEqual([entry.title for entry in lib.children], ["A", "B"])
        self.assertEqual(added, [lib.children[1]])
        self.assertTrue(lib.flags & GroupFlag.UPDATED_STRUCTURE)
        self.assertIs(directory_homes(root)[SRC / "lib"], lib)

    def test_homeless_directory_with_enough_files_gets_a_group(self) -> None:
        root = new_root()
        root.append(FileEntry("Main", SRC / "main.py"))
        new = [SRC / "net" / name for name in ("c.py", "a.py", "b.py")]

        added = auto_place_new_files(root, new, _title, MenuSettings(min_files_in_new_group=3), root_directories={SRC})

        group = root.children[1]
        self.assertIsInstance(group, GroupEntry)
        self.assertEqual(group.title, "net")
        self.assertEqual([entry.title for entry in group.children], ["A", "B", "C"])
        self.assertIs(added[0], group)
        self.assertEqual(len(added), 4)

    def test_small_bucket_joins_nearest_ancestor_home(self) -> None:
        root = new_root()
        docs = GroupEntry("Docs")
        docs.append(FileEntry("Index", SRC / "docs" / "index.py"))
        root.append(docs)

        auto_place_new_files(root, [SRC / "docs" / "api" / "x.py"], _title, MenuSettings(), root_directories={SRC})

        self.assertEqual([entry.title for entry in docs.children], ["Index", "X"])

    def test_grouping_threshold_zero_disables_new_groups(self) -> None:
        root = new_root()
        new = [SRC / "net" / name for name in ("a.py", "b.py", "c.py", "d.py")]

        auto_place_new_files(root, new, _title, MenuSettings(min_files_in_new_group=0), root_directories={SRC})

        self.assertTrue(all(isinstance(child, FileEntry) for child in root.children))
        self.assertEqual(len(root.children), 4)

    def test_files_directly_in_an_input_root_stay_top_level(self) -> None:
        root = new_root()
        new = [SRC / name for name in ("a.py", "b.py", "c.py")]

        auto_place_new_files(root, new, _title, MenuSettings(), root_directories={SRC})

        self.assertEqual([child.title for child in root.children], ["A", "B", "C"])

    def test_nested_new_directories_nest_their_groups(self) -> None:
        root = new_root()
        new = [SRC / "x" / f"{n}.py" for n in "abc"] + [SRC / "x" / "y" / f"{n}.py" for n in "def"]

        auto_place_new_files(root, new, _title, MenuSettings(), root_directories={SRC})

        self.assertEqual(
            outline(root),
            (
                "group",
                "",
                (
                    (
                        "group",
                        "x",
                        (
                            ("file", "A", "/src/x/a.py", False),
                            ("file", "B", "/src/x/b.py", False),
                            ("file", "C", "/src/x/c.py", False),
                            (
                                "group",
                                "y",
                                (
                                    ("file", "D", "/src/x/y/d.py", False),
                                    ("file", "E", "/src/x/y/e.py", False),
                                    ("file", "F", "/src/x/y/f.py", False),
                                ),
                            ),
                        ),
                    ),
                ),
            ),
        )


class PruningTests(unittest.TestCase):
    def test_remove_dead_files_counts_and_flags(self) -> None:
        root = new_root()
        group = GroupEntry("G")
        group.append(FileEntry("Gone", SRC / "gone.py"))
        group.append(TextEntry("kept"))
        root.append(group)
        root.append(FileEntry("Live", SRC / "live.py"))

        removed = remove_dead_files(root, {SRC / "live.py"})

        self.assertEqual(removed, 1)
        self.assertEqual([type(child) for child in group.children], [TextEntry])
        self.assertTrue(group.flags & GroupFlag.UPDATED_STRUCTURE)

    def test_remove_empty_groups_cascades_bottom_up(self) -> None:
        root = new_root()
        outer = GroupEntry("Outer")
        outer.append(GroupEntry("Inner"))
        root.append(outer)
        root.append(FileEntry("Live", SRC / "live.py"))

        removed = remove_empty_groups(root)

        self.assertEqual(removed, 2)
        self.assertEqual([child.title for child in root.children], ["Live"])


class DirectorySubgroupTests(unittest.TestCase):
    def _crowded_group(self) -> GroupEntry:
        group = GroupEntry("Everything", flags=GroupFlag.UPDATED_STRUCTURE)
        group.append(FileEntry("s1", SRC / "s1.py"))
        for n in range(4):
            group.append(FileEntry(f"a{n}", SRC / "a" / f"{n}.py"))
        group.append(FileEntry("s2", SRC / "s2.py"))
        for n in range(4):
            group.append(FileEntry(f"b{n}", SRC / "b" / f"{n}.py"))
        group.append(FileEntry("c0", SRC / "c" / "0.py"))
        group.append(FileEntry("s3", SRC / "s3.py"))
        return group

    def test_crowded_group_is_split_by_directory(self) -> None:
        root = new_root()
        group = self._crowded_group()
        root.append(group)

        created = create_directory_subgroups(root, MenuSettings(max_files_in_group=10, min_files_in_new_group=3))

        self.assertEqual([sub.title for sub in created], ["a", "b"])
        self.assertEqual([child.title for child in group.children], ["s1", "a", "s2", "b", "c0", "s3"])
        self.assertEqual([child.title for child in group.children[1].children], ["a0", "a1", "a2", "a3"])

    def test_groups_not_restructured_or_within_limit_are_left_alone(self) -> None:
        root = new_root()
        group = self._crowded_group()
        group.flags = GroupFlag.NONE
        root.append(group)

        self.assertEqual(create_directory_subgroups(root, MenuSettings()), [])
        self.assertEqual(create_directory_subgroups(root, MenuSettings(max_files_in_group=0)), [])
        group.flags = GroupFlag.UPDATED_STRUCTURE
        self.assertEqual(create_directory_subgroups(root, MenuSettings(max_files_in_group=12)), [])
        self.assertEqual(len(group.children), 12)


if __name__ == "__main__":
    unittest.main()
