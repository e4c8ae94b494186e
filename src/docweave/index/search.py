"""Substring search over prebuilt search records."""

from __future__ import annotations

from typing import List, Sequence

from docweave.models import SearchHit, SearchRecord
from docweave.utils.text import collapse_whitespace

MAX_RESULTS = 8
SNIPPET_RADIUS = 80
FALLBACK_SNIPPET_CHARS = 160
ELLIPSIS = "..."


def normalize_query(raw_query: str) -> str:
    return raw_query.strip().lower()


def build_snippet(text: str, normalized_query: str, *, radius: int = SNIPPET_RADIUS) -> str:
    """Return a window of ``text`` around the first match of the query.

    Truncated ends are marked with an ellipsis. When the query does not occur
    in ``text`` the first 160 characters are returned instead.
    """
    match_index = text.lower().find(normalized_query) if normalized_query else -1
    if match_index == -1:
        return collapse_whitespace(text[:FALLBACK_SNIPPET_CHARS])

    start = max(0, match_index - radius)
    end = min(len(text), match_index + len(normalized_query) + radius)
    snippet = text[start:end].strip()

    if start > 0:
        snippet = f"{ELLIPSIS}{snippet}"
    if end < len(text):
        snippet = f"{snippet}{ELLIPSIS}"
    return collapse_whitespace(snippet)


def query(
    records: Sequence[SearchRecord],
    raw_query: str,
    *,
    limit: int = MAX_RESULTS,
    radius: int = SNIPPET_RADIUS,
) -> List[SearchHit]:
    """Match records whose title, href or text contain the query.

    Results keep the order of ``records`` and are capped at ``limit``.
    """
    normalized = normalize_query(raw_query)
    if not normalized:
        return []

    hits: List[SearchHit] = []
    for record in records:
        haystack = f"{record.title} {record.href} {record.plain_text}".lower()
        if normalized not in haystack:
            continue
        hits.append(SearchHit(record=record, snippet=build_snippet(record.plain_text, normalized, radius=radius)))
        if len(hits) >= limit:
            break
    return hits
