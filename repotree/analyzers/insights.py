"""Human-readable insights derived from the classifier outputs."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..models import PathEntry
from .rules import TechLabel

_QUALITY_BANDS = (
    (30, "Simple & Clean"),
    (60, "Well Organized"),
    (80, "Complex but Manageable"),
)


def project_type(tech_stack: Sequence[str]) -> str:
    if TechLabel.NEXT.value in tech_stack:
        return "Next.js Application"
    if TechLabel.REACT.value in tech_stack:
        return "React Application"
    if TechLabel.PYTHON.value in tech_stack:
        return "Python Project"
    return "Web Application"


def structure_quality(score: int) -> str:
    for upper, label in _QUALITY_BANDS:
        if score < upper:
            return label
    return "Highly Complex"


def readme_recommendation(entries: Iterable[PathEntry]) -> str:
    # Matches the upper-case convention only; `readme.md` is not counted.
    if any("README" in entry.path for entry in entries):
        return "Well documented project with README"
    return "Consider adding a README file"


__all__ = ["project_type", "readme_recommendation", "structure_quality"]
