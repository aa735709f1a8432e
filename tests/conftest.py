from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence

import httpx
import pytest

from repotree.config import RepoTreeConfig
from repotree.github import GitHubClient
from repotree.models import EntryKind, PathEntry
from repotree.orchestrator import Orchestrator

API_BASE = "https://api.github.test"


def _entries(paths: Sequence[str]) -> List[PathEntry]:
    """Build entries from paths; a trailing slash marks a directory."""
    entries: List[PathEntry] = []
    for path in paths:
        if path.endswith("/"):
            entries.append(PathEntry(path=path.rstrip("/"), kind=EntryKind.DIRECTORY, content_id="t"))
        else:
            entries.append(PathEntry(path=path, kind=EntryKind.FILE, size=2048, content_id="b"))
    return entries


class FakeGitHub:
    """Serves canned GitHub REST payloads and records every request."""

    def __init__(self) -> None:
        self.routes: Dict[str, Any] = {}
        self.failures: Dict[str, int] = {}
        self.requests: List[httpx.Request] = []

    def add_repository(
        self,
        owner: str,
        name: str,
        paths: Sequence[str],
        *,
        default_branch: str = "main",
        sha: str = "abc123",
        **metadata: Any,
    ) -> None:
        repo: Dict[str, Any] = {
            "name": name,
            "description": "A sample repository",
            "language": "TypeScript",
            "stargazers_count": 42,
            "forks_count": 7,
            "watchers_count": 42,
            "default_branch": default_branch,
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-06-01T00:00:00Z",
            "homepage": None,
            "topics": ["tooling"],
        }
        repo.update(metadata)
        tree = [
            {"path": path.rstrip("/"), "type": "tree", "sha": "t"}
            if path.endswith("/")
            else {"path": path, "type": "blob", "size": 2048, "sha": "b"}
            for path in paths
        ]
        self.routes[f"/repos/{owner}/{name}"] = repo
        self.routes[f"/repos/{owner}/{name}/branches/{default_branch}"] = {
            "name": default_branch,
            "commit": {"sha": sha},
        }
        self.routes[f"/repos/{owner}/{name}/git/trees/{sha}"] = {
            "sha": sha,
            "tree": tree,
            "truncated": False,
        }

    def fail(self, path: str, status_code: int = 500) -> None:
        self.failures[path] = status_code

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self.failures:
            return httpx.Response(self.failures[path], json={"message": "Server Error"})
        payload = self.routes.get(path)
        if payload is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=payload)

    def client(self) -> GitHubClient:
        return GitHubClient(base_url=API_BASE, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def make_entries() -> Callable[[Sequence[str]], List[PathEntry]]:
    return _entries


@pytest.fixture
def fake_github() -> FakeGitHub:
    github = FakeGitHub()
    github.add_repository(
        "acme",
        "widgets",
        ["README.md", "package.json", "src/", "src/index.ts", "src/lib/", "src/lib/util.ts"],
    )
    return github


@pytest.fixture
def config(tmp_path: Path) -> RepoTreeConfig:
    return RepoTreeConfig(root=tmp_path)


@pytest.fixture
def orchestrator(fake_github: FakeGitHub, config: RepoTreeConfig) -> Orchestrator:
    return Orchestrator(fake_github.client, config=config)


@pytest.fixture(autouse=True)
def _reset_repotree_logger():
    yield
    logger = logging.getLogger("repotree")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
