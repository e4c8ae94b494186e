"""Error types raised by the DocWeave core."""

from __future__ import annotations

from typing import Sequence


class DocweaveError(Exception):
    """Base class for every content error raised by DocWeave."""


class InvalidSlug(DocweaveError, ValueError):
    """A slug segment is empty, contains a separator or a traversal token."""


class DocumentNotFound(DocweaveError, LookupError):
    """No document or directory exists at the requested slug."""

    def __init__(self, slug: Sequence[str], message: str | None = None) -> None:
        self.slug = tuple(slug)
        super().__init__(message or f"Document not found: {'/'.join(self.slug) or '/'}")


class NotADirectory(DocweaveError):
    """A directory operation was requested on a document slug."""

    def __init__(self, slug: Sequence[str]) -> None:
        self.slug = tuple(slug)
        super().__init__(f"Requested slug is not a directory: {'/'.join(self.slug)}")


class CircularInclude(DocweaveError):
    """An include chain revisits one of its own ancestors."""

    def __init__(self, slug: Sequence[str], chain: Sequence[str] = ()) -> None:
        self.slug = tuple(slug)
        self.chain = tuple(chain)
        key = "/".join(self.slug)
        message = f'Circular include detected for slug "{key}"'
        if self.chain:
            message += f" (chain: {' -> '.join([*self.chain, key])})"
        super().__init__(message)


class InvalidInclude(DocweaveError):
    """An include directive is missing its slug or names a malformed one."""


class UnknownTemplate(DocweaveError):
    """An inline image component names a template outside the known set."""
