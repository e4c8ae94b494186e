"""Lazy navigation endpoint logic: list the children of one directory."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from docweave.content.slugs import parse_slug
from docweave.errors import DocumentNotFound, InvalidSlug, NotADirectory
from docweave.models import TreeEntry
from docweave.tree.builder import TreeBuilder

LOGGER = logging.getLogger(__name__)


class TreeRequestError(Exception):
    """Client-facing tree error carrying an HTTP-like status code."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def display_order(entries: List[TreeEntry]) -> List[TreeEntry]:
    """Directories first, then files; name order is kept within each group."""
    return sorted(entries, key=lambda entry: not entry.is_directory)


class TreeService:
    def __init__(self, builder: TreeBuilder) -> None:
        self.builder = builder

    def get_children(self, slug_path: str | None = None) -> Dict[str, List[Dict[str, Any]]]:
        try:
            slug = parse_slug(slug_path)
            entries = self.builder.list_one_level(slug)
        except (InvalidSlug, DocumentNotFound, NotADirectory) as exc:
            LOGGER.info("Rejected tree request for %r: %s", slug_path, exc)
            raise TreeRequestError(str(exc), status_code=400) from exc
        return {"items": [entry.to_dict() for entry in display_order(entries)]}
