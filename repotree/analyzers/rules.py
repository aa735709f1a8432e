"""Closed lookup tables backing the heuristic classifiers and icons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Tuple


class Extension(str, Enum):
    """File extensions the classifiers and renderers know about."""

    JS = "js"
    JSX = "jsx"
    TS = "ts"
    TSX = "tsx"
    HTML = "html"
    CSS = "css"
    SCSS = "scss"
    SASS = "sass"
    JSON = "json"
    MD = "md"
    TXT = "txt"
    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"
    GIF = "gif"
    SVG = "svg"
    PY = "py"
    JAVA = "java"
    CPP = "cpp"
    C = "c"
    YML = "yml"
    YAML = "yaml"
    TOML = "toml"
    XML = "xml"
    UNMAPPED = ""

    @classmethod
    def of(cls, path: str) -> "Extension":
        """Classify the extension of the final segment of ``path``."""
        suffix = extension_of(path)
        if not suffix:
            return cls.UNMAPPED
        try:
            return cls(suffix)
        except ValueError:
            return cls.UNMAPPED


class FileMarker(str, Enum):
    """Well-known lowercase file names that identify a tool."""

    PACKAGE_JSON = "package.json"
    NEXT_CONFIG_JS = "next.config.js"
    NEXT_CONFIG_TS = "next.config.ts"
    VITE_CONFIG_JS = "vite.config.js"
    VITE_CONFIG_TS = "vite.config.ts"
    DOCKERFILE = "dockerfile"
    DOCKER_COMPOSE = "docker-compose.yml"
    TAILWIND_CONFIG_JS = "tailwind.config.js"
    TAILWIND_CONFIG_TS = "tailwind.config.ts"
    UNMAPPED = ""

    @classmethod
    def of(cls, path: str) -> "FileMarker":
        name = path.rsplit("/", 1)[-1].lower()
        try:
            return cls(name) if name else cls.UNMAPPED
        except ValueError:
            return cls.UNMAPPED


class TechLabel(str, Enum):
    """Labels produced by the tech-stack detector."""

    TYPESCRIPT = "TypeScript"
    JAVASCRIPT = "JavaScript"
    PYTHON = "Python"
    CSS = "CSS"
    HTML = "HTML"
    MARKDOWN = "Markdown"
    NODE = "Node.js"
    NEXT = "Next.js"
    VITE = "Vite"
    DOCKER = "Docker"
    TAILWIND = "Tailwind"
    REACT = "React"


@dataclass(frozen=True)
class StackRule:
    """One row of the tech-stack rule table.

    A rule fires when any entry matches any of its criteria. ``substrings`` and
    ``suffixes`` are matched against the raw path.
    """

    label: TechLabel
    extensions: FrozenSet[Extension] = frozenset()
    markers: FrozenSet[FileMarker] = frozenset()
    substrings: Tuple[str, ...] = ()
    suffixes: Tuple[str, ...] = ()


STACK_RULES: Tuple[StackRule, ...] = (
    StackRule(TechLabel.TYPESCRIPT, extensions=frozenset({Extension.TS, Extension.TSX})),
    StackRule(TechLabel.JAVASCRIPT, extensions=frozenset({Extension.JS, Extension.JSX})),
    StackRule(TechLabel.PYTHON, extensions=frozenset({Extension.PY})),
    StackRule(TechLabel.CSS, extensions=frozenset({Extension.CSS})),
    StackRule(TechLabel.HTML, extensions=frozenset({Extension.HTML})),
    StackRule(TechLabel.MARKDOWN, extensions=frozenset({Extension.MD})),
    StackRule(TechLabel.NODE, markers=frozenset({FileMarker.PACKAGE_JSON})),
    StackRule(
        TechLabel.NEXT,
        markers=frozenset({FileMarker.NEXT_CONFIG_JS, FileMarker.NEXT_CONFIG_TS}),
    ),
    StackRule(
        TechLabel.VITE,
        markers=frozenset({FileMarker.VITE_CONFIG_JS, FileMarker.VITE_CONFIG_TS}),
    ),
    StackRule(
        TechLabel.DOCKER,
        markers=frozenset({FileMarker.DOCKERFILE, FileMarker.DOCKER_COMPOSE}),
    ),
    StackRule(
        TechLabel.TAILWIND,
        markers=frozenset({FileMarker.TAILWIND_CONFIG_JS, FileMarker.TAILWIND_CONFIG_TS}),
    ),
    StackRule(TechLabel.REACT, substrings=("react",), suffixes=(".jsx", ".tsx")),
)

IMPORTANT_FILE_MARKERS: Tuple[str, ...] = (
    "readme",
    "package.json",
    "index.",
    "app.",
    ".env",
    "config",
)

# Broader than IMPORTANT_FILE_MARKERS: used by the "important" list filter.
IMPORTANT_FILTER_MARKERS: Tuple[str, ...] = (
    "readme",
    "package.json",
    "index",
    "app",
    "src",
    ".env",
    "config",
)

DIRECTORY_ICON = "📁"
DEFAULT_FILE_ICON = "📄"

FILE_ICONS: Dict[Extension, str] = {
    Extension.JS: "📜",
    Extension.JSX: "⚛️",
    Extension.TS: "⚡",
    Extension.TSX: "⚛️",
    Extension.HTML: "🌐",
    Extension.CSS: "🎨",
    Extension.SCSS: "🎨",
    Extension.SASS: "🎨",
    Extension.JSON: "📋",
    Extension.MD: "📝",
    Extension.TXT: "📄",
    Extension.PNG: "🖼️",
    Extension.JPG: "🖼️",
    Extension.JPEG: "🖼️",
    Extension.GIF: "🖼️",
    Extension.SVG: "🖼️",
    Extension.PY: "🐍",
    Extension.JAVA: "☕",
    Extension.CPP: "⚙️",
    Extension.C: "⚙️",
    Extension.YML: "⚙️",
    Extension.YAML: "⚙️",
    Extension.TOML: "⚙️",
    Extension.XML: "📰",
    Extension.UNMAPPED: DEFAULT_FILE_ICON,
}

TECH_ICONS: Dict[TechLabel, str] = {
    TechLabel.TYPESCRIPT: "⚡",
    TechLabel.JAVASCRIPT: "📜",
    TechLabel.REACT: "⚛️",
    TechLabel.NEXT: "▲",
    TechLabel.PYTHON: "🐍",
    TechLabel.NODE: "🟢",
    TechLabel.DOCKER: "🐋",
    TechLabel.TAILWIND: "🎨",
    TechLabel.VITE: "⚡",
    TechLabel.CSS: "🎨",
    TechLabel.HTML: "📄",
    TechLabel.MARKDOWN: "📝",
}


def extension_of(path: str) -> str:
    """Return the lowercase text after the last dot of the final segment, or ''."""
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()


def file_icon(path: str) -> str:
    """Return the display icon for a file path, falling back to a generic icon."""
    return FILE_ICONS[Extension.of(path)]


def tech_icon(label: str) -> str:
    """Return the badge icon for a tech-stack label, or '' when none is defined."""
    try:
        return TECH_ICONS[TechLabel(label)]
    except ValueError:
        return ""


__all__ = [
    "DEFAULT_FILE_ICON",
    "DIRECTORY_ICON",
    "Extension",
    "FILE_ICONS",
    "FileMarker",
    "IMPORTANT_FILE_MARKERS",
    "IMPORTANT_FILTER_MARKERS",
    "STACK_RULES",
    "StackRule",
    "TECH_ICONS",
    "TechLabel",
    "extension_of",
    "file_icon",
    "tech_icon",
]
