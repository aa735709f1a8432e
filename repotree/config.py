"""Configuration loading for repotree (.repotree.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

CONFIG_FILENAME = ".repotree.yml"

DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "repotree"

ENV_BASE_URL = "REPOTREE_API_BASE_URL"
ENV_TIMEOUT = "REPOTREE_API_TIMEOUT"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class APIConfig:
    """GitHub REST API connection settings."""

    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class DisplayConfig:
    """Limits applied when summarising analysis output."""

    key_files_limit: int = 8
    prompt_key_files: int = 5


@dataclass
class RepoTreeConfig:
    """Represents the settings defined in .repotree.yml."""

    root: Path
    api: APIConfig = field(default_factory=APIConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def load_config(
    config_path: Path | None = None, *, environ: Mapping[str, str] | None = None
) -> RepoTreeConfig:
    """Load configuration from disk, then apply environment overrides."""
    config_file = _resolve_config_path(config_path or Path.cwd())
    root = config_file.parent.resolve()
    env = os.environ if environ is None else environ

    config = RepoTreeConfig(root=root)
    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
        _apply_file_settings(config, data)

    _apply_env_overrides(config, env)
    return config


def _apply_file_settings(config: RepoTreeConfig, data: Dict[str, Any]) -> None:
    api_data = _as_dict(data.get("api"))
    if api_data:
        base_url = _as_str(api_data.get("base_url"))
        if base_url:
            config.api.base_url = base_url.rstrip("/")
        timeout = _as_float(api_data.get("timeout"))
        if timeout is not None:
            if timeout <= 0:
                raise ConfigError("api.timeout must be a positive number of seconds")
            config.api.timeout = timeout
        user_agent = _as_str(api_data.get("user_agent"))
        if user_agent:
            config.api.user_agent = user_agent

    display_data = _as_dict(data.get("display"))
    if display_data:
        key_files_limit = _as_int(display_data.get("key_files_limit"))
        if key_files_limit is not None:
            config.display.key_files_limit = max(key_files_limit, 0)
        prompt_key_files = _as_int(display_data.get("prompt_key_files"))
        if prompt_key_files is not None:
            config.display.prompt_key_files = max(prompt_key_files, 0)


def _apply_env_overrides(config: RepoTreeConfig, env: Mapping[str, str]) -> None:
    base_url = env.get(ENV_BASE_URL, "").strip()
    if base_url:
        config.api.base_url = base_url.rstrip("/")
    raw_timeout = env.get(ENV_TIMEOUT, "").strip()
    if raw_timeout:
        timeout = _as_float(raw_timeout)
        if timeout is None or timeout <= 0:
            raise ConfigError(f"{ENV_TIMEOUT} must be a positive number, got {raw_timeout!r}")
        config.api.timeout = timeout


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "APIConfig",
    "ConfigError",
    "DisplayConfig",
    "RepoTreeConfig",
    "load_config",
]
