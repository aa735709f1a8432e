"""Builds the directory hierarchy from a flat repository listing."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List

from .logging import get_logger
from .models import EntryKind, PathEntry, TreeNode

logger = get_logger("tree")


def build_tree(entries: Iterable[PathEntry]) -> List[TreeNode]:
    """Return the forest of root nodes for ``entries``.

    Entries are processed in ordinal path order, which also fixes sibling
    order in the result. Directories implied by a path are materialised once
    even when the listing never names them.

    When a file path is also used as a directory prefix by a later entry
    (``a`` and ``a/b``), the later segment wins: ``a`` becomes a directory
    and loses its size. The conflict is logged, never raised.
    """
    forest: List[TreeNode] = []
    nodes: Dict[str, TreeNode] = {}

    for entry in sorted(entries, key=lambda item: item.path):
        parts = entry.path.split("/")
        parent: TreeNode | None = None
        current_path = ""
        for index, part in enumerate(parts):
            current_path = f"{current_path}/{part}" if current_path else part
            terminal = index == len(parts) - 1
            kind = entry.kind if terminal else EntryKind.DIRECTORY
            size = entry.size if terminal and entry.kind is EntryKind.FILE else None

            node = nodes.get(current_path)
            if node is None:
                node = TreeNode(name=part, path=current_path, kind=kind, depth=index, size=size)
                nodes[current_path] = node
                if parent is None:
                    forest.append(node)
                else:
                    parent.children.append(node)
            elif node.kind is not kind:
                logger.warning(
                    "Path %s listed as %s but also used as %s; keeping %s",
                    current_path,
                    node.kind.value,
                    kind.value,
                    kind.value,
                )
                node.kind = kind
                node.size = size
            elif terminal:
                node.size = size
            parent = node

    return forest


def iter_nodes(forest: Iterable[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node depth-first in materialised order."""
    for node in forest:
        yield node
        yield from iter_nodes(node.children)


def find_node(forest: Iterable[TreeNode], path: str) -> TreeNode | None:
    """Return the node at ``path`` or None when it is not part of the forest."""
    level: Iterable[TreeNode] = forest
    current = ""
    found: TreeNode | None = None
    for part in path.split("/"):
        current = f"{current}/{part}" if current else part
        found = next((node for node in level if node.path == current), None)
        if found is None:
            return None
        level = found.children
    return found


__all__ = ["build_tree", "find_node", "iter_nodes"]
