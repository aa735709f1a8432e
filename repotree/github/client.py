"""Async client for the GitHub REST endpoints repotree depends on."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..config import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, APIConfig
from ..logging import get_logger
from ..models import EntryKind, PathEntry, RepoMetadata

logger = get_logger("github")


class GitHubAPIError(RuntimeError):
    """Raised when a GitHub request fails or returns an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class GitHubTransportError(RuntimeError):
    """Raised when GitHub cannot be reached at all."""


class GitHubClient:
    """Client for the repository, branch and git-tree endpoints of GitHub REST v3."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": user_agent,
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls, config: APIConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "GitHubClient":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout,
            user_agent=config.user_agent,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_repository(self, owner: str, name: str) -> RepoMetadata:
        """Fetch repository metadata for ``owner/name``."""
        data = await self._get_json(f"/repos/{_segment(owner)}/{_segment(name)}")
        if not isinstance(data, dict):
            raise GitHubAPIError("Repository response is not an object")
        return parse_repository(data, fallback_name=name)

    async def get_branch_sha(self, owner: str, name: str, branch: str) -> str:
        """Return the commit SHA at the tip of ``branch``."""
        data = await self._get_json(
            f"/repos/{_segment(owner)}/{_segment(name)}/branches/{_segment(branch)}"
        )
        commit = data.get("commit") if isinstance(data, dict) else None
        sha = commit.get("sha") if isinstance(commit, dict) else None
        if not isinstance(sha, str) or not sha:
            raise GitHubAPIError(f"Branch {branch!r} response has no commit sha")
        return sha

    async def get_tree(self, owner: str, name: str, sha: str) -> List[PathEntry]:
        """Fetch the full recursive listing for the tree at ``sha``."""
        data = await self._get_json(
            f"/repos/{_segment(owner)}/{_segment(name)}/git/trees/{_segment(sha)}",
            params={"recursive": "1"},
        )
        if not isinstance(data, dict) or not isinstance(data.get("tree"), list):
            raise GitHubAPIError("Tree response has no 'tree' listing")
        if data.get("truncated"):
            logger.warning("GitHub truncated the tree listing for %s/%s", owner, name)
        return parse_tree(data["tree"])

    async def _get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        logger.debug("GET %s%s", self.base_url, path)
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise GitHubTransportError(f"Request to {path} failed: {exc}") from exc

        if not response.is_success:
            raise GitHubAPIError(
                f"GitHub returned {response.status_code} for {path}",
                status_code=response.status_code,
                url=str(response.request.url),
            )
        try:
            return response.json()
        except ValueError as exc:
            raise GitHubAPIError(f"GitHub returned invalid JSON for {path}", url=path) from exc


def parse_repository(data: Dict[str, Any], *, fallback_name: str = "") -> RepoMetadata:
    """Normalise a repository payload, tolerating missing fields."""
    topics = data.get("topics") or []
    return RepoMetadata(
        name=_as_str(data.get("name")) or fallback_name,
        description=_as_str(data.get("description")),
        language=_as_str(data.get("language")),
        stars=_as_count(data.get("stargazers_count", data.get("stars"))),
        forks=_as_count(data.get("forks_count", data.get("forks"))),
        watchers=_as_count(data.get("watchers_count", data.get("watchers"))),
        default_branch=_as_str(data.get("default_branch")) or "main",
        created_at=_as_str(data.get("created_at")),
        updated_at=_as_str(data.get("updated_at")),
        homepage=_as_str(data.get("homepage")),
        topics=tuple(str(topic) for topic in topics if isinstance(topic, str)),
    )


def parse_tree(items: List[Any]) -> List[PathEntry]:
    """Convert git-tree items into entries, skipping malformed rows."""
    entries: List[PathEntry] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        path = item.get("path")
        if not isinstance(path, str) or not path:
            continue
        kind = EntryKind.from_git_type(str(item.get("type", "blob")))
        size = item.get("size")
        entries.append(
            PathEntry(
                path=path,
                kind=kind,
                size=size if kind is EntryKind.FILE and isinstance(size, int) and size >= 0 else None,
                content_id=str(item.get("sha") or ""),
            )
        )
    return entries


def _segment(value: str) -> str:
    return quote(value, safe="")


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _as_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "GitHubTransportError",
    "parse_repository",
    "parse_tree",
]
