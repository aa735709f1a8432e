"""Search/filter predicate and flat path listing."""

from __future__ import annotations

from typing import Iterable, List

from ..analyzers.important import is_important
from ..analyzers.rules import DIRECTORY_ICON, IMPORTANT_FILTER_MARKERS, file_icon
from ..models import PathEntry
from ..session import FilterMode, ViewState


def matches(entry: PathEntry, search: str = "", mode: FilterMode | str = FilterMode.ALL) -> bool:
    """Case-insensitive substring search combined with the filter mode."""
    if search.lower() not in entry.path.lower():
        return False
    mode = FilterMode(mode)
    if mode is FilterMode.FILES:
        return entry.is_file
    if mode is FilterMode.FOLDERS:
        return entry.is_directory
    if mode is FilterMode.IMPORTANT:
        return is_important(entry.path, IMPORTANT_FILTER_MARKERS)
    return True


def filter_entries(entries: Iterable[PathEntry], view: ViewState | None = None) -> List[PathEntry]:
    view = view or ViewState()
    return [entry for entry in entries if matches(entry, view.search, view.filter_mode)]


def render_list(
    entries: Iterable[PathEntry],
    view: ViewState | None = None,
    *,
    detailed: bool = False,
) -> str:
    """Render matching paths one per line in listing order.

    ``detailed`` prefixes each path with its icon and appends file sizes in KB.
    """
    lines = [
        _detailed_line(entry) if detailed else entry.path
        for entry in filter_entries(entries, view)
    ]
    return "\n".join(lines)


def _detailed_line(entry: PathEntry) -> str:
    icon = DIRECTORY_ICON if entry.is_directory else file_icon(entry.path)
    line = f"{icon} {entry.path}"
    if entry.size:
        line += f" ({entry.size / 1024:.1f}KB)"
    return line


__all__ = ["filter_entries", "matches", "render_list"]
