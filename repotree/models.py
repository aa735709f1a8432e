"""Core data models shared across repotree components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class EntryKind(str, Enum):
    """Kind of a repository entry."""

    FILE = "file"
    DIRECTORY = "directory"

    @classmethod
    def from_git_type(cls, value: str) -> "EntryKind":
        """Map a git tree object type (`blob`, `tree`, `commit`) to an entry kind."""
        if value == "tree":
            return cls.DIRECTORY
        return cls.FILE


@dataclass(frozen=True)
class PathEntry:
    """One object from the flat repository listing."""

    path: str
    kind: EntryKind
    size: Optional[int] = None
    content_id: str = ""

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def segments(self) -> List[str]:
        return self.path.split("/")


@dataclass
class TreeNode:
    """Node of the hierarchy derived from the flat listing."""

    name: str
    path: str
    kind: EntryKind
    depth: int
    size: Optional[int] = None
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "type": self.kind.value,
            "size": self.size,
            "depth": self.depth,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class RepoMetadata:
    """Repository facts reported by the metadata endpoint."""

    name: str
    description: Optional[str] = None
    language: Optional[str] = None
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    default_branch: str = "main"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    homepage: Optional[str] = None
    topics: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "language": self.language,
            "stars": self.stars,
            "forks": self.forks,
            "watchers": self.watchers,
            "default_branch": self.default_branch,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "homepage": self.homepage,
            "topics": list(self.topics),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregate output of one completed analysis run."""

    owner: str
    metadata: RepoMetadata
    entries: Tuple[PathEntry, ...]
    forest: Tuple[TreeNode, ...]
    tech_stack: Tuple[str, ...]
    important_files: Tuple[PathEntry, ...]
    complexity: int

    @property
    def file_count(self) -> int:
        return sum(1 for entry in self.entries if entry.is_file)

    @property
    def folder_count(self) -> int:
        return sum(1 for entry in self.entries if entry.is_directory)
