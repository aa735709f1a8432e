"""ASCII tree rendering."""

from __future__ import annotations

from typing import AbstractSet, List, Optional, Sequence

from ..analyzers.rules import DIRECTORY_ICON, file_icon
from ..models import TreeNode

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def node_icon(node: TreeNode) -> str:
    return DIRECTORY_ICON if node.is_directory else file_icon(node.name)


def render_line(node: TreeNode, ancestor_is_last: Sequence[bool], is_last: bool) -> str:
    """Render one node given whether each ancestor (root first) was a last child."""
    prefix = "".join(SPACE if last else PIPE for last in ancestor_is_last)
    connector = LAST_BRANCH if is_last else BRANCH
    return f"{prefix}{connector}{node_icon(node)} {node.name}"


def render_tree(
    forest: Sequence[TreeNode], expanded: Optional[AbstractSet[str]] = None
) -> str:
    """Render the forest, one line per node, each terminated by a newline.

    With ``expanded`` set, only the listed directories show their children.
    """
    lines: List[str] = []
    _render_level(forest, (), expanded, lines)
    return "".join(f"{line}\n" for line in lines)


def _render_level(
    nodes: Sequence[TreeNode],
    ancestor_is_last: tuple[bool, ...],
    expanded: Optional[AbstractSet[str]],
    lines: List[str],
) -> None:
    for index, node in enumerate(nodes):
        is_last = index == len(nodes) - 1
        lines.append(render_line(node, ancestor_is_last, is_last))
        if not node.children:
            continue
        if expanded is not None and node.path not in expanded:
            continue
        _render_level(node.children, ancestor_is_last + (is_last,), expanded, lines)


__all__ = ["node_icon", "render_line", "render_tree"]
