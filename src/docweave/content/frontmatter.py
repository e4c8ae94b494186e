"""Helpers for parsing YAML front matter from MDX content."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterator, List

import frontmatter
import yaml

LOGGER = logging.getLogger(__name__)


class FrontMatter(Mapping[str, Any]):
    """Schema-less front matter with typed accessors that fail closed."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FrontMatter({self._data!r})"

    def get_str(self, key: str, default: str | None = None) -> str | None:
        value = self._data.get(key)
        return value if isinstance(value, str) else default

    def get_str_list(self, key: str, default: List[str] | None = None) -> List[str] | None:
        value = self._data.get(key)
        if not isinstance(value, (list, tuple)):
            return default
        return [str(item) for item in value]

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


@dataclass(slots=True)
class ParsedDocument:
    metadata: FrontMatter = field(default_factory=FrontMatter)
    body: str = ""


def parse_front_matter(content: str) -> ParsedDocument:
    """Split leading YAML front matter from the document body.

    Malformed front matter yields empty metadata and the original content as
    the body. Front matter that parses to something other than a mapping is
    dropped; the body is still the text after the closing delimiter.
    """
    try:
        parsed = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError) as exc:
        LOGGER.warning("Failed to parse front matter: %s", exc)
        return ParsedDocument(FrontMatter(), content)

    raw_metadata = parsed.metadata or {}
    body = parsed.content if isinstance(parsed.content, str) else str(parsed.content)
    return ParsedDocument(FrontMatter(raw_metadata), body)
