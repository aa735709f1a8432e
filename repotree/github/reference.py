"""Parsing of user-supplied repository references."""

from __future__ import annotations

from typing import Tuple


def parse_repo_reference(text: str) -> Tuple[str, str]:
    """Return ``(owner, name)`` from a GitHub URL or an ``owner/name`` string.

    >>> parse_repo_reference("https://github.com/vercel/next.js")
    ('vercel', 'next.js')
    >>> parse_repo_reference("facebook/react")
    ('facebook', 'react')
    """
    value = text.strip()
    parts = value.split("/")
    if "github.com" in value:
        host_index = next(index for index, part in enumerate(parts) if "github.com" in part)
        candidates = parts[host_index + 1 : host_index + 3]
    elif "/" in value:
        candidates = parts[:2]
    else:
        candidates = []

    if len(candidates) != 2 or not all(candidates):
        raise ValueError(f"Expected 'owner/repo' or a github.com URL, got {text!r}")

    owner, name = candidates
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise ValueError(f"Expected 'owner/repo' or a github.com URL, got {text!r}")
    return owner, name


__all__ = ["parse_repo_reference"]
