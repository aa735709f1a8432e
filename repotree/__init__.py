"""Fetch a GitHub repository tree and render filterable, exportable views of it."""

from .models import AnalysisResult, EntryKind, PathEntry, RepoMetadata, TreeNode
from .orchestrator import (
    AnalysisError,
    AnalysisState,
    BranchLookupFailed,
    Orchestrator,
    RepositoryNotFound,
    SessionSnapshot,
    TreeFetchFailed,
    UnknownAnalysisError,
)
from .session import FilterMode, ViewState
from .tree import build_tree

__version__ = "0.1.0"

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "AnalysisState",
    "BranchLookupFailed",
    "EntryKind",
    "FilterMode",
    "Orchestrator",
    "PathEntry",
    "RepoMetadata",
    "RepositoryNotFound",
    "SessionSnapshot",
    "TreeFetchFailed",
    "TreeNode",
    "UnknownAnalysisError",
    "ViewState",
    "build_tree",
]
