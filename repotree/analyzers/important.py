"""Selection of high-signal files (README, manifests, entry points, config)."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..models import PathEntry
from .rules import IMPORTANT_FILE_MARKERS


def is_important(path: str, markers: Sequence[str] = IMPORTANT_FILE_MARKERS) -> bool:
    lowered = path.lower()
    return any(marker in lowered for marker in markers)


def select_important_files(entries: Iterable[PathEntry]) -> List[PathEntry]:
    """Return entries whose path mentions an important marker, in input order."""
    return [entry for entry in entries if is_important(entry.path)]


def summarise_key_files(important: Sequence[PathEntry], limit: int = 8) -> List[str]:
    """Return at most ``limit`` paths plus an overflow line such as ``+3 more...``."""
    limit = max(limit, 0)
    lines = [entry.path for entry in important[:limit]]
    remaining = len(important) - limit
    if remaining > 0:
        lines.append(f"+{remaining} more...")
    return lines


__all__ = ["is_important", "select_important_files", "summarise_key_files"]
