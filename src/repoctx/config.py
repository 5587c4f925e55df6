"""Configuration management for repoctx."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from repoctx.exceptions import ConfigError

REPOCTX_DIR = ".repoctx"
CONFIG_FILE = "config.json"


class ContextConfig(BaseModel):
    """Defaults for context assembly."""

    max_tokens: int = Field(100_000, ge=1)
    # share of the budget kept for structural metadata
    metadata_reserve: float = Field(0.2, ge=0, lt=1)
    include_analysis: bool = True
    include_memory: bool = True


class IndexerConfig(BaseModel):
    """Which repository files get listed and loaded."""

    exclude_patterns: list[str] = Field(
        default_factory=lambda: [
            "node_modules",
            "__pycache__",
            ".git",
            ".repoctx",
            "dist",
            "build",
            "coverage",
            ".next",
            ".venv",
            "venv",
            "*.min.js",
            "*.min.css",
            "*.map",
            "*.lock",
            "*.png",
            "*.jpg",
            "*.gif",
            "*.ico",
            "*.woff",
            "*.woff2",
            "package-lock.json",
            "yarn.lock",
        ]
    )
    max_file_size_kb: int = 500
    max_concurrent_fetches: int = 16


class MemoryConfig(BaseModel):
    """Limits for the session memory store."""

    max_conversations: int = Field(100, ge=1, le=100)
    max_recent_files: int = Field(20, ge=1, le=20)


class ProjectConfig(BaseModel):
    """Full project configuration."""

    name: str = ""
    root_path: str = "."
    context: ContextConfig = Field(default_factory=ContextConfig)
    indexer: IndexerConfig = Field(default_factory=IndexerConfig)
    memory: MemoryConfig = Field(default_factory=MemoryConfig)


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .repoctx directory."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / REPOCTX_DIR).is_dir():
            return current
        current = current.parent
    if (current / REPOCTX_DIR).is_dir():
        return current
    return None


def get_repoctx_dir(root: Path) -> Path:
    """Get the .repoctx directory for a project root."""
    return root / REPOCTX_DIR


def load_config(root: Path) -> ProjectConfig:
    """Load configuration from .repoctx/config.json."""
    config_path = get_repoctx_dir(root) / CONFIG_FILE
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
            return ProjectConfig(**data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid config at {config_path}: {e}") from e
    return ProjectConfig(name=root.name, root_path=str(root))


def save_config(root: Path, config: ProjectConfig) -> None:
    """Save configuration to .repoctx/config.json."""
    ctx_dir = get_repoctx_dir(root)
    ctx_dir.mkdir(parents=True, exist_ok=True)
    config_path = ctx_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def set_config_value(config: ProjectConfig, key: str, value: Any) -> ProjectConfig:
    """Set a nested config value using dot notation (e.g., 'context.max_tokens')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    return ProjectConfig(**data)
