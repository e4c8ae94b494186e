"""Parsing, validation and URL mapping for content slugs."""

from __future__ import annotations

import re
from typing import Iterable

from docweave.errors import InvalidSlug
from docweave.models import Slug

HOME_SLUG: Slug = ("home",)

_SEPARATOR_RE = re.compile(r"[/\\]")


def _check_segment(segment: str) -> None:
    if not segment or _SEPARATOR_RE.search(segment):
        raise InvalidSlug(f"Invalid slug segment: {segment!r}")
    if ".." in segment:
        raise InvalidSlug(f"Invalid slug segment: {segment!r}")


def validate_slug(segments: Iterable[str], *, allow_root: bool = True) -> Slug:
    """Check an already split slug and return it as a tuple."""
    slug = tuple(segments)
    if not slug and not allow_root:
        raise InvalidSlug("Slug must contain at least one segment")
    for segment in slug:
        if not isinstance(segment, str):
            raise InvalidSlug(f"Invalid slug segment: {segment!r}")
        _check_segment(segment)
    return slug


def parse_slug(path: str | None, *, allow_root: bool = True) -> Slug:
    """Split a ``a/b/c`` style path into a validated slug.

    Segments are trimmed and empty ones dropped, so ``"/guide//intro/"``
    parses to ``("guide", "intro")``.
    """
    if not path:
        return validate_slug((), allow_root=allow_root)
    segments = (segment.strip() for segment in _SEPARATOR_RE.split(path))
    return validate_slug((segment for segment in segments if segment), allow_root=allow_root)


def slug_key(slug: Iterable[str]) -> str:
    return "/".join(slug)


def to_href(slug: Iterable[str]) -> str:
    """Map a slug to its site path; the home document is served at ``/``."""
    slug = tuple(slug)
    if slug == HOME_SLUG:
        return "/"
    return "/" + slug_key(slug)


def humanize_segment(segment: str) -> str:
    """Turn ``getting-started`` into ``Getting started``."""
    words = re.sub(r"[-_]+", " ", segment).strip()
    if not words:
        return segment
    return words[0].upper() + words[1:]
