"""Pure renderers turning analysis output into text views."""

from __future__ import annotations

from .ascii import node_icon, render_line, render_tree
from .exports import ExportFormat, ExportRenderer
from .listing import filter_entries, matches, render_list

__all__ = [
    "ExportFormat",
    "ExportRenderer",
    "filter_entries",
    "matches",
    "node_icon",
    "render_line",
    "render_list",
    "render_tree",
]
