"""Read-only, slug-addressed access to the content directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from docweave.config import DEFAULT_EXTENSION
from docweave.content.slugs import slug_key, validate_slug
from docweave.errors import DocumentNotFound, InvalidSlug, NotADirectory
from docweave.models import ChildEntry, DocumentSource, Slug
from docweave.utils.files import is_within, iter_visible_children

LOGGER = logging.getLogger(__name__)


class ContentStore:
    """The only component that touches the content filesystem."""

    def __init__(self, root: Path, *, extension: str = DEFAULT_EXTENSION) -> None:
        self.root = Path(root)
        self.extension = extension

    def _resolve(self, slug: Slug, suffix: str = "") -> Path:
        path = self.root.joinpath(*slug)
        if suffix:
            path = path.with_name(path.name + suffix)
        if not is_within(path, self.root):
            raise InvalidSlug(f"Slug escapes the content root: {slug_key(slug)}")
        return path

    def document_stem(self, name: str) -> str | None:
        """Return the slug segment for a content file name, else None."""
        if name.endswith(self.extension) and len(name) > len(self.extension):
            return name[: -len(self.extension)]
        return None

    def read(self, slug: Iterable[str]) -> DocumentSource:
        slug = validate_slug(slug, allow_root=False)
        path = self._resolve(slug, self.extension)
        if not path.is_file():
            raise DocumentNotFound(slug)
        LOGGER.debug("Reading %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise DocumentNotFound(slug) from exc
        return DocumentSource(slug=slug, text=text, path=path)

    def list_children(self, slug: Iterable[str] = ()) -> List[ChildEntry]:
        slug = validate_slug(slug)
        path = self._resolve(slug)
        if not path.is_dir():
            if slug and (path.is_file() or self._resolve(slug, self.extension).is_file()):
                raise NotADirectory(slug)
            raise DocumentNotFound(slug, f"Requested path does not exist: {slug_key(slug) or '/'}")
        return [ChildEntry(name=child.name, is_directory=child.is_dir()) for child in iter_visible_children(path)]
