"""FastAPI application entrypoint for repotree service mode."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from ..analyzers import project_type, readme_recommendation, structure_quality
from ..logging import get_logger
from ..models import AnalysisResult
from ..orchestrator import AnalysisError, Orchestrator, RepositoryNotFound
from ..render import ExportFormat
from ..session import FilterMode

logger = get_logger("service")


class HealthResponse(BaseModel):
    status: str


class RepositoryInfo(BaseModel):
    name: str
    description: Optional[str] = None
    language: Optional[str] = None
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    default_branch: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    homepage: Optional[str] = None
    topics: List[str] = []


class AnalysisResponse(BaseModel):
    owner: str
    repository: RepositoryInfo
    files: int
    folders: int
    complexity: int
    tech_stack: List[str]
    important_files: List[str]
    project_type: str
    structure_quality: str
    recommendation: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _to_response(result: AnalysisResult) -> AnalysisResponse:
    return AnalysisResponse(
        owner=result.owner,
        repository=RepositoryInfo(**result.metadata.to_dict()),
        files=result.file_count,
        folders=result.folder_count,
        complexity=result.complexity,
        tech_stack=list(result.tech_stack),
        important_files=[entry.path for entry in result.important_files],
        project_type=project_type(result.tech_stack),
        structure_quality=structure_quality(result.complexity),
        recommendation=readme_recommendation(result.entries),
    )


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing repository analysis."""

    app = FastAPI(title="RepoTree Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # One session per request; analyses are one-shot and never shared.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/repos/{owner}/{repo}", response_model=AnalysisResponse)
    async def analyze_repo(
        owner: str,
        repo: str,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalysisResponse:
        result = await orchestrator.analyze(owner, repo)
        return _to_response(result)

    @app.get("/repos/{owner}/{repo}/export/{fmt}")
    async def export_repo(
        owner: str,
        repo: str,
        fmt: ExportFormat,
        search: str = Query(default=""),
        filter_mode: FilterMode = Query(default=FilterMode.ALL, alias="filter"),
        detailed: bool = Query(default=False),
        expand: List[str] = Query(default=[]),
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> PlainTextResponse:
        await orchestrator.analyze(owner, repo)
        orchestrator.set_search(search)
        orchestrator.set_filter(filter_mode)
        for folder in expand:
            try:
                orchestrator.toggle_folder(folder)
            except ValueError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
        body = orchestrator.render(fmt, detailed=detailed)
        media_type = "application/json" if fmt is ExportFormat.JSON else "text/plain"
        return PlainTextResponse(body, media_type=media_type)

    @app.exception_handler(RepositoryNotFound)
    async def not_found_handler(_: Any, exc: RepositoryNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(_: Any, exc: AnalysisError) -> JSONResponse:
        logger.warning("Analysis request failed: %s", exc.message)
        return JSONResponse(status_code=502, content={"detail": exc.message})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
