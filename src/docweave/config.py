"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_EXTENSION = ".mdx"
DEFAULT_SITE_URL = "http://localhost:3000"


def _get_default_content_root() -> Path:
    """Get the content root from the environment or the working directory."""
    env_root = os.environ.get("DOCWEAVE_CONTENT_ROOT")
    if env_root:
        return Path(env_root).expanduser()
    return Path("content")


def _get_default_site_url() -> str:
    return os.environ.get("DOCWEAVE_SITE_URL", DEFAULT_SITE_URL).rstrip("/")


def _get_default_disallow() -> tuple[str, ...]:
    raw = os.environ.get("DOCWEAVE_ROBOTS_DISALLOW", "")
    return tuple(segment.strip() for segment in raw.split(",") if segment.strip())


@dataclass(slots=True)
class AppConfig:
    content_root: Path | None = None
    extension: str = DEFAULT_EXTENSION
    site_url: str = field(default_factory=_get_default_site_url)
    max_results: int = 8
    snippet_radius: int = 80
    robots_disallow: tuple[str, ...] = field(default_factory=_get_default_disallow)

    def __post_init__(self) -> None:
        if self.content_root is None:
            self.content_root = _get_default_content_root()

    def resolve_content_root(self, base_dir: Path | None = None) -> Path:
        if self.content_root is None:
            self.content_root = _get_default_content_root()
        if Path(self.content_root).is_absolute() or base_dir is None:
            return Path(self.content_root)
        return base_dir / self.content_root
