"""Analysis pipeline: fetch metadata, branch and tree, then classify and render."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from .analyzers import complexity_score, detect_tech_stack, select_important_files
from .config import RepoTreeConfig, load_config
from .github import GitHubAPIError, GitHubClient
from .logging import get_logger
from .models import AnalysisResult, PathEntry, RepoMetadata
from .render import ExportFormat, ExportRenderer, filter_entries
from .session import FilterMode, ViewState
from .tree import build_tree, find_node


class AnalysisState(str, Enum):
    """Lifecycle of an analysis session."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class AnalysisError(RuntimeError):
    """Terminal failure of one analysis run."""

    reason = "An error occurred"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)

    @property
    def message(self) -> str:
        return str(self)


class RepositoryNotFound(AnalysisError):
    reason = "Repository not found"


class BranchLookupFailed(AnalysisError):
    reason = "Failed to fetch branch information"


class TreeFetchFailed(AnalysisError):
    reason = "Failed to fetch repository tree"


class UnknownAnalysisError(AnalysisError):
    """Any other failure; carries the message of the underlying cause."""


@dataclass(frozen=True)
class SessionSnapshot:
    """What subscribers observe after every state change.

    ``result`` is only populated in the ready state and ``error`` only in the
    failed state.
    """

    state: AnalysisState = AnalysisState.IDLE
    owner: Optional[str] = None
    name: Optional[str] = None
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    view: ViewState = field(default_factory=ViewState)


Listener = Callable[[SessionSnapshot], None]
ClientFactory = Callable[[], GitHubClient]


def build_result(owner: str, metadata: RepoMetadata, entries: Iterable[PathEntry]) -> AnalysisResult:
    """Run the tree builder and classifiers over a fetched listing."""
    listing = tuple(entries)
    return AnalysisResult(
        owner=owner,
        metadata=metadata,
        entries=listing,
        forest=tuple(build_tree(listing)),
        tech_stack=tuple(detect_tech_stack(listing)),
        important_files=tuple(select_important_files(listing)),
        complexity=complexity_score(listing),
    )


class Orchestrator:
    """Coordinates one analysis session against the GitHub API."""

    def __init__(
        self,
        client_factory: ClientFactory | None = None,
        *,
        config: RepoTreeConfig | None = None,
        renderer: ExportRenderer | None = None,
    ) -> None:
        self.config = config or load_config()
        self._client_factory = client_factory or self._default_client
        self.renderer = renderer or ExportRenderer(
            key_files_limit=self.config.display.key_files_limit,
            prompt_key_files=self.config.display.prompt_key_files,
        )
        self.logger = get_logger("orchestrator")
        self._snapshot = SessionSnapshot()
        self._listeners: List[Listener] = []
        self._generation = 0
        self._task: asyncio.Task[AnalysisResult] | None = None
        self._target: Tuple[str, str] | None = None

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def state(self) -> AnalysisState:
        return self._snapshot.state

    @property
    def result(self) -> AnalysisResult | None:
        return self._snapshot.result

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``, call it with the current snapshot, return an unsubscribe hook."""
        self._listeners.append(listener)
        listener(self._snapshot)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def analyze(self, owner: str, name: str) -> AnalysisResult:
        """Run a full analysis of ``owner/name``, superseding any run in flight.

        Raises the matching ``AnalysisError`` subclass when the run fails, and
        ``asyncio.CancelledError`` when a newer run supersedes this one.
        """
        self._generation += 1
        generation = self._generation
        if self._task is not None and not self._task.done():
            self.logger.debug("Cancelling superseded analysis run")
            self._task.cancel()

        self._target = (owner, name)
        self._publish(
            SessionSnapshot(
                state=AnalysisState.LOADING,
                owner=owner,
                name=name,
                view=self._snapshot.view,
            )
        )
        task = asyncio.create_task(self._execute(owner, name, generation))
        self._task = task
        return await task

    async def retry(self) -> AnalysisResult:
        """Re-run the last requested analysis from the first step."""
        if self._target is None:
            raise RuntimeError("Nothing to retry: no analysis has been requested yet")
        owner, name = self._target
        return await self.analyze(owner, name)

    def update_view(self, view: ViewState) -> SessionSnapshot:
        return self._publish(_replace_view(self._snapshot, view))

    def set_search(self, term: str) -> SessionSnapshot:
        return self.update_view(self._snapshot.view.with_search(term))

    def set_filter(self, mode: FilterMode | str) -> SessionSnapshot:
        return self.update_view(self._snapshot.view.with_filter(mode))

    def toggle_folder(self, path: str) -> SessionSnapshot:
        """Expand or collapse ``path`` in the tree view of the current result."""
        node = find_node(self._require_result().forest, path)
        if node is None or not node.is_directory:
            raise ValueError(f"{path!r} is not a folder of the analysed repository")
        return self.update_view(self._snapshot.view.toggle_folder(path))

    def render(self, fmt: ExportFormat | str, *, detailed: bool = False) -> str:
        """Render the current result with the current view state."""
        result = self._require_result()
        return self.renderer.render(fmt, result, self._snapshot.view, detailed=detailed)

    def filtered_entries(self) -> List[PathEntry]:
        return filter_entries(self._require_result().entries, self._snapshot.view)

    async def _execute(self, owner: str, name: str, generation: int) -> AnalysisResult:
        try:
            result = await self._fetch_and_build(owner, name)
        except asyncio.CancelledError:
            self.logger.debug("Analysis of %s/%s cancelled", owner, name)
            raise
        except AnalysisError as exc:
            self._fail(owner, name, generation, exc)
            raise
        except Exception as exc:
            error = UnknownAnalysisError(str(exc) or exc.__class__.__name__)
            self._fail(owner, name, generation, error)
            raise error from exc

        if generation == self._generation:
            self.logger.info(
                "Analysis of %s/%s ready: %d entries, complexity %d",
                owner,
                name,
                len(result.entries),
                result.complexity,
            )
            self._publish(
                SessionSnapshot(
                    state=AnalysisState.READY,
                    owner=owner,
                    name=name,
                    result=result,
                    view=self._snapshot.view,
                )
            )
        return result

    async def _fetch_and_build(self, owner: str, name: str) -> AnalysisResult:
        client = self._client_factory()
        try:
            self.logger.info("Fetching repository %s/%s", owner, name)
            try:
                metadata = await client.get_repository(owner, name)
            except GitHubAPIError as exc:
                raise RepositoryNotFound() from exc

            self.logger.debug("Resolving default branch %s", metadata.default_branch)
            try:
                sha = await client.get_branch_sha(owner, name, metadata.default_branch)
            except GitHubAPIError as exc:
                raise BranchLookupFailed() from exc

            self.logger.debug("Fetching recursive tree at %s", sha)
            try:
                entries = await client.get_tree(owner, name, sha)
            except GitHubAPIError as exc:
                raise TreeFetchFailed() from exc
        finally:
            await client.aclose()

        return build_result(owner, metadata, entries)

    def _fail(self, owner: str, name: str, generation: int, error: AnalysisError) -> None:
        cause = error.__cause__
        self.logger.warning(
            "Analysis of %s/%s failed: %s%s",
            owner,
            name,
            error.message,
            f" ({cause})" if cause else "",
        )
        if generation != self._generation:
            return
        self._publish(
            SessionSnapshot(
                state=AnalysisState.FAILED,
                owner=owner,
                name=name,
                error=error.message,
                view=self._snapshot.view,
            )
        )

    def _publish(self, snapshot: SessionSnapshot) -> SessionSnapshot:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # pragma: no cover - listener errors are logged
                self.logger.exception("Session listener %r failed", listener)
        return snapshot

    def _require_result(self) -> AnalysisResult:
        result = self._snapshot.result
        if result is None:
            raise RuntimeError(f"No analysis result available (state: {self.state.value})")
        return result

    def _default_client(self) -> GitHubClient:
        return GitHubClient.from_config(self.config.api)


def _replace_view(snapshot: SessionSnapshot, view: ViewState) -> SessionSnapshot:
    return replace(snapshot, view=view)


__all__ = [
    "AnalysisError",
    "AnalysisState",
    "BranchLookupFailed",
    "Orchestrator",
    "RepositoryNotFound",
    "SessionSnapshot",
    "TreeFetchFailed",
    "UnknownAnalysisError",
    "build_result",
]
