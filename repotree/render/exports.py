"""Template-driven exports of a completed analysis."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader

from ..analyzers import (
    project_type,
    readme_recommendation,
    structure_quality,
    summarise_key_files,
)
from ..analyzers.rules import tech_icon
from ..models import AnalysisResult
from ..session import ViewState
from .ascii import render_tree
from .listing import filter_entries, render_list

NO_DESCRIPTION = "No description provided"
NO_LANGUAGE = "Not specified"


class ExportFormat(str, Enum):
    """Views a finished analysis can be rendered into."""

    TREE = "tree"
    LIST = "list"
    MARKDOWN = "markdown"
    JSON = "json"
    TEXT = "text"
    PROMPT = "prompt"
    SUMMARY = "summary"


class ExportRenderer:
    """Renders analysis results through Jinja templates."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        key_files_limit: int = 8,
        prompt_key_files: int = 5,
    ) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self.key_files_limit = key_files_limit
        self.prompt_key_files = prompt_key_files
        self._env = self._create_env(self.templates_dir)

    def render(
        self,
        fmt: ExportFormat | str,
        result: AnalysisResult,
        view: ViewState | None = None,
        *,
        detailed: bool = False,
    ) -> str:
        """Render ``result`` in the requested format.

        The tree view honours the folders expanded in ``view``; the list view
        honours its search and filter. ``detailed`` adds icons and sizes to the
        list. Document exports always carry the full tree.
        """
        fmt = ExportFormat(fmt)
        if fmt is ExportFormat.TREE:
            return self.tree(result, view)
        if fmt is ExportFormat.LIST:
            return render_list(result.entries, view, detailed=detailed)
        if fmt is ExportFormat.MARKDOWN:
            return self.markdown(result)
        if fmt is ExportFormat.JSON:
            return self.to_json(result)
        if fmt is ExportFormat.TEXT:
            return self.plain_text(result)
        if fmt is ExportFormat.PROMPT:
            return self.prompt(result)
        return self.summary(result, view)

    def tree(self, result: AnalysisResult, view: ViewState | None = None) -> str:
        return render_tree(result.forest, view.expanded if view is not None else None)

    def markdown(self, result: AnalysisResult) -> str:
        return self._render_template("markdown.j2", self._base_context(result))

    def plain_text(self, result: AnalysisResult) -> str:
        context = self._base_context(result)
        context["underline"] = "=" * (len(result.metadata.name) + 20)
        return self._render_template("plain_text.j2", context)

    def prompt(self, result: AnalysisResult) -> str:
        context = self._base_context(result)
        context["key_files"] = [
            entry.path for entry in result.important_files[: self.prompt_key_files]
        ]
        return self._render_template("prompt.j2", context)

    def summary(self, result: AnalysisResult, view: ViewState | None = None) -> str:
        metadata = result.metadata
        context = self._base_context(result)
        context.update(
            owner=result.owner,
            description=metadata.description or NO_DESCRIPTION,
            language=metadata.language or NO_LANGUAGE,
            stars=metadata.stars,
            forks=metadata.forks,
            watchers=metadata.watchers,
            default_branch=metadata.default_branch,
            homepage=metadata.homepage,
            topics=list(metadata.topics),
            tech_badges=[
                f"{tech_icon(label)} {label}".strip() for label in result.tech_stack
            ],
            project_type=project_type(result.tech_stack),
            structure_quality=structure_quality(result.complexity),
            recommendation=readme_recommendation(result.entries),
            key_files=summarise_key_files(result.important_files, self.key_files_limit),
            shown=len(filter_entries(result.entries, view)),
        )
        return self._render_template("summary.j2", context)

    def to_json(self, result: AnalysisResult) -> str:
        return json.dumps(self.to_document(result), indent=2, ensure_ascii=False)

    @staticmethod
    def to_document(result: AnalysisResult) -> Dict[str, Any]:
        """Return the structured form embedded by the JSON export."""
        return {
            "repository": {
                "name": result.metadata.name,
                "owner": result.owner,
                "metadata": result.metadata.to_dict(),
                "structure": [node.to_dict() for node in result.forest],
                "tech_stack": list(result.tech_stack),
                "stats": {
                    "files": result.file_count,
                    "folders": result.folder_count,
                    "complexity": result.complexity,
                },
            }
        }

    def _base_context(self, result: AnalysisResult) -> Dict[str, Any]:
        return {
            "repo": result.metadata.name,
            "tree": render_tree(result.forest),
            "tech_stack": list(result.tech_stack),
            "files": result.file_count,
            "folders": result.folder_count,
            "complexity": result.complexity,
        }

    def _render_template(self, name: str, context: Dict[str, Any]) -> str:
        template = self._env.get_template(name)
        return template.render(**context)

    @staticmethod
    def _create_env(templates_dir: Path) -> Environment:
        directories = [str(templates_dir)]
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


__all__ = ["ExportFormat", "ExportRenderer", "NO_DESCRIPTION", "NO_LANGUAGE"]
