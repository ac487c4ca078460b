"""
Configuration loader and helpers for the media hygiene inspector.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable

import yaml

DEFAULT_CONFIG_PATH = Path("config.yaml")
ENV_CONFIG_PATH = "MEDIA_HYGIENE_CONFIG"

DEFAULT_LARGE_FILE_THRESHOLD = 5 * 1024 * 1024
DEFAULT_MAX_ORPHAN_FILES = 300
DEFAULT_ATTACHMENT_PAGE_SIZE = 500
DEFAULT_MISSING_FEATURED_LIMIT = 100


@dataclass(frozen=True)
class AppConfig:
    """Container for raw configuration data and path helpers."""

    root_dir: Path
    raw: Dict[str, Any]

    @classmethod
    def load(cls, path: Path | None = None) -> "AppConfig":
        """Load configuration from YAML and normalize the root directory."""
        config_value = os.environ.get(ENV_CONFIG_PATH)
        config_path = path
        if config_path is None:
            config_path = Path(config_value) if config_value else DEFAULT_CONFIG_PATH
        config_path = config_path.expanduser()
        if not config_path.is_absolute():
            config_path = (Path.cwd() / config_path).resolve()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        return cls(root_dir=config_path.parent, raw=data)

    def get(self, *keys: str, default: Any = None) -> Any:
        """Retrieve nested configuration values with an optional default."""
        node: Any = self.raw
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def resolve_path(self, *keys: str, default: str | None = None) -> Path:
        """Resolve a path from configuration keys to an absolute Path."""
        value = self.get(*keys, default=default)
        if value is None:
            raise KeyError(f"Missing config path for {'.'.join(keys)}")
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = (self.root_dir / path).resolve()
        return path


@dataclass(frozen=True)
class AuditSettings:
    """Run-time knobs for one reconciliation run."""

    large_file_threshold: int = DEFAULT_LARGE_FILE_THRESHOLD
    max_orphan_files: int = DEFAULT_MAX_ORPHAN_FILES
    attachment_page_size: int = DEFAULT_ATTACHMENT_PAGE_SIZE
    walk_deadline_seconds: float = 0.0
    missing_featured_limit: int = DEFAULT_MISSING_FEATURED_LIMIT

    def __post_init__(self) -> None:
        if self.large_file_threshold <= 0:
            raise ValueError("large_file_threshold must be positive")
        if self.max_orphan_files < 0:
            raise ValueError("max_orphan_files must not be negative")
        if self.attachment_page_size <= 0:
            raise ValueError("attachment_page_size must be positive")
        if self.walk_deadline_seconds < 0:
            raise ValueError("walk_deadline_seconds must not be negative")
        if self.missing_featured_limit < 0:
            raise ValueError("missing_featured_limit must not be negative")

    @classmethod
    def from_config(cls, config: AppConfig) -> "AuditSettings":
        """Build settings from the ``audit`` section of the configuration."""
        return cls(
            large_file_threshold=int(
                config.get("audit", "large_file_threshold_bytes", default=DEFAULT_LARGE_FILE_THRESHOLD)
            ),
            max_orphan_files=int(
                config.get("audit", "max_orphan_files", default=DEFAULT_MAX_ORPHAN_FILES)
            ),
            attachment_page_size=int(
                config.get("audit", "attachment_page_size", default=DEFAULT_ATTACHMENT_PAGE_SIZE)
            ),
            walk_deadline_seconds=float(config.get("audit", "walk_deadline_seconds", default=0)),
            missing_featured_limit=int(
                config.get("audit", "missing_featured_limit", default=DEFAULT_MISSING_FEATURED_LIMIT)
            ),
        )


def ensure_directories(paths: Iterable[Path]) -> None:
    """Create directories if they do not already exist."""
    for path in paths:
        path.mkdir(parents=True, exist_ok=True)
