"""Coarse structural complexity score."""

from __future__ import annotations

from typing import Iterable

from ..models import PathEntry

MAX_SCORE = 100


def complexity_score(entries: Iterable[PathEntry]) -> int:
    """Return ``min(100, round((D*2 + F*0.5 + M*3) / 10))``.

    ``D`` counts directories, ``F`` files and ``M`` is the deepest segment
    count (0 for an empty listing). Halves round up. The sum is kept in
    half-units so the rounding is exact.
    """
    directories = 0
    files = 0
    max_depth = 0
    for entry in entries:
        if entry.is_directory:
            directories += 1
        else:
            files += 1
        max_depth = max(max_depth, len(entry.segments))

    halves = directories * 4 + files + max_depth * 6
    return min(MAX_SCORE, (halves + 10) // 20)


__all__ = ["MAX_SCORE", "complexity_score"]
