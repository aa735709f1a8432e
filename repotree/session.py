"""Per-session view state: search term, filter mode, expanded folders."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, Optional


class FilterMode(str, Enum):
    """Constraint applied on top of the search term in the file list."""

    ALL = "all"
    FILES = "files"
    FOLDERS = "folders"
    IMPORTANT = "important"


@dataclass(frozen=True)
class ViewState:
    """Immutable snapshot of presentation choices.

    Every update returns a new instance so renderers can be handed a
    consistent view without sharing mutable state. ``expanded`` is None
    until the first folder toggle, meaning every folder is shown open.
    """

    search: str = ""
    filter_mode: FilterMode = FilterMode.ALL
    expanded: Optional[FrozenSet[str]] = None
    copied: Optional[str] = None

    def with_search(self, term: str) -> "ViewState":
        return replace(self, search=term)

    def with_filter(self, mode: FilterMode | str) -> "ViewState":
        return replace(self, filter_mode=FilterMode(mode))

    def toggle_folder(self, path: str) -> "ViewState":
        expanded = self.expanded if self.expanded is not None else frozenset()
        if path in expanded:
            return replace(self, expanded=expanded - {path})
        return replace(self, expanded=expanded | {path})

    def with_copied(self, label: Optional[str]) -> "ViewState":
        return replace(self, copied=label)


__all__ = ["FilterMode", "ViewState"]
