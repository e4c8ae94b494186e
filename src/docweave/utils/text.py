"""Text helpers for turning MDX markup into searchable plain text."""

from __future__ import annotations

import re

_CODE_FENCE_RE = re.compile(r"```.*?```", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`[^`]*`")
_IMAGE_RE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
_LINK_RE = re.compile(r"\[[^\]]*\]\([^)]*\)")
_MARKER_RE = re.compile(r"[*_~>#-]+")
_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_markup(text: str) -> str:
    """Remove markdown syntax, leaving plain words.

    Code blocks, inline code, images and links are dropped entirely; emphasis,
    heading, quote and list markers are replaced by spaces.
    """
    text = _CODE_FENCE_RE.sub(" ", text)
    text = _INLINE_CODE_RE.sub(" ", text)
    text = _IMAGE_RE.sub(" ", text)
    text = _LINK_RE.sub(" ", text)
    text = _MARKER_RE.sub(" ", text)
    return collapse_whitespace(text)
