"""Heuristic classifiers over the flat repository listing."""

from __future__ import annotations

from .complexity import MAX_SCORE, complexity_score
from .important import is_important, select_important_files, summarise_key_files
from .insights import project_type, readme_recommendation, structure_quality
from .stack import detect_tech_stack

__all__ = [
    "MAX_SCORE",
    "complexity_score",
    "detect_tech_stack",
    "is_important",
    "project_type",
    "readme_recommendation",
    "select_important_files",
    "structure_quality",
    "summarise_key_files",
]
