"""Tech-stack detection from file names and extensions."""

from __future__ import annotations

from typing import Iterable, List, Set

from ..models import PathEntry
from .rules import STACK_RULES, Extension, FileMarker, StackRule


def detect_tech_stack(entries: Iterable[PathEntry]) -> List[str]:
    """Return the labels whose rule matches at least one entry.

    Labels follow rule-table order and appear once regardless of how many
    entries trigger them.
    """
    paths = [entry.path for entry in entries]
    extensions: Set[Extension] = {Extension.of(path) for path in paths}
    markers: Set[FileMarker] = {FileMarker.of(path) for path in paths}

    return [
        rule.label.value
        for rule in STACK_RULES
        if _rule_matches(rule, paths, extensions, markers)
    ]


def _rule_matches(
    rule: StackRule,
    paths: List[str],
    extensions: Set[Extension],
    markers: Set[FileMarker],
) -> bool:
    if rule.extensions & extensions:
        return True
    if rule.markers & markers:
        return True
    if rule.substrings and any(marker in path for path in paths for marker in rule.substrings):
        return True
    if rule.suffixes and any(path.endswith(rule.suffixes) for path in paths):
        return True
    return False


__all__ = ["detect_tech_stack"]
