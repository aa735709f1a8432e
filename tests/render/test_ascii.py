"""Tests for ASCII tree rendering."""

from __future__ import annotations

from repotree.models import EntryKind, TreeNode
from repotree.render import render_line, render_tree
from repotree.tree import build_tree


def test_render_line_builds_prefix_from_ancestor_flags() -> None:
    node = TreeNode(name="x.py", path="a/b/x.py", kind=EntryKind.FILE, depth=2)

    assert render_line(node, (False, True), is_last=False) == "│       ├── 🐍 x.py"
    assert render_line(node, (True, False), is_last=True) == "    │   └── 🐍 x.py"
    assert render_line(node, (), is_last=True) == "└── 🐍 x.py"


def test_render_line_uses_directory_icon() -> None:
    node = TreeNode(name="src", path="src", kind=EntryKind.DIRECTORY, depth=0)

    assert render_line(node, (), is_last=False) == "├── 📁 src"


def test_render_tree_for_nested_forest(make_entries) -> None:
    forest = build_tree(make_entries(["README.md", "src/index.ts", "src/lib/util.ts"]))

    assert render_tree(forest) == (
        "├── 📝 README.md\n"
        "└── 📁 src\n"
        "    ├── ⚡ index.ts\n"
        "    └── 📁 lib\n"
        "        └── ⚡ util.ts\n"
    )


def test_render_tree_uses_pipes_under_non_last_siblings(make_entries) -> None:
    forest = build_tree(make_entries(["a/one.txt", "a/two.txt", "b.md"]))

    assert render_tree(forest) == (
        "├── 📁 a\n"
        "│   ├── 📄 one.txt\n"
        "│   └── 📄 two.txt\n"
        "└── 📝 b.md\n"
    )


def test_render_tree_of_empty_forest_is_empty_string() -> None:
    assert render_tree([]) == ""


def test_render_tree_hides_children_of_collapsed_directories(make_entries) -> None:
    forest = build_tree(make_entries(["README.md", "src/index.ts", "src/lib/util.ts"]))

    assert render_tree(forest, expanded=set()) == "├── 📝 README.md\n└── 📁 src\n"
    assert render_tree(forest, expanded={"src"}) == (
        "├── 📝 README.md\n"
        "└── 📁 src\n"
        "    ├── ⚡ index.ts\n"
        "    └── 📁 lib\n"
    )
