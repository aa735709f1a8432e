"""GitHub REST access and repository reference helpers."""

from .client import (
    GitHubAPIError,
    GitHubClient,
    GitHubTransportError,
    parse_repository,
    parse_tree,
)
from .reference import parse_repo_reference

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "GitHubTransportError",
    "parse_repo_reference",
    "parse_repository",
    "parse_tree",
]
