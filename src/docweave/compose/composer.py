"""Recursive expansion of ``<Include slug="..." />`` directives."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Tuple

from docweave.content.frontmatter import FrontMatter, parse_front_matter
from docweave.content.slugs import humanize_segment, parse_slug, slug_key, validate_slug
from docweave.content.store import ContentStore
from docweave.errors import CircularInclude, InvalidInclude, InvalidSlug, UnknownTemplate
from docweave.models import ComposedDocument, DocumentSource, Slug

LOGGER = logging.getLogger(__name__)

# Inline image components the renderer knows how to draw, keyed by tag name.
IMAGE_TEMPLATES = {
    "ImageSmall": "image_small",
    "ImageMedium": "image_medium",
    "ImageBig": "image_big",
}

# Code is matched first so that directives inside fences or backticks stay literal.
_TOKEN_RE = re.compile(
    r"(?P<fence>^[ \t]*(?P<marker>`{3,}|~{3,})[^\n]*\n.*?^[ \t]*(?P=marker)[ \t]*$)"
    r"|(?P<code>`[^`\n]+`)"
    r"|(?P<include><Include\b(?P<attrs>[^>]*?)(?:/>|>.*?</Include\s*>|>))"
    r"|(?P<image><(?P<component>Image[A-Z]\w*)\b)",
    re.MULTILINE | re.DOTALL,
)
_SLUG_ATTR_RE = re.compile(
    r"""\bslug\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|\{\s*(?:"(?P<edq>[^"]*)"|'(?P<esq>[^']*)')\s*\})"""
)


@dataclass(slots=True)
class _Expansion:
    source: DocumentSource
    metadata: FrontMatter
    body: str
    templates: List[str] = field(default_factory=list)


def parse_include_slug(attrs: str) -> Slug:
    """Extract the target slug from the attribute text of an Include tag."""
    match = _SLUG_ATTR_RE.search(attrs)
    if match is None:
        raise InvalidInclude("Include component requires a slug attribute")
    raw = next(value for value in match.group("dq", "sq", "edq", "esq") if value is not None)
    try:
        slug = parse_slug(raw, allow_root=False)
    except InvalidSlug as exc:
        raise InvalidInclude(f"Include component requires a non-empty, valid slug: {raw!r}") from exc
    return slug


class DocumentComposer:
    """Produce composed documents from a content store."""

    def __init__(self, store: ContentStore) -> None:
        self.store = store

    def compose(self, slug: Iterable[str]) -> ComposedDocument:
        slug = validate_slug(slug, allow_root=False)
        expansion = self._compose(slug, frozenset(), ())
        title = expansion.metadata.get_str("title") or humanize_segment(slug[-1])
        return ComposedDocument(
            slug=slug,
            title=title,
            body=expansion.body,
            metadata=expansion.metadata.to_dict(),
            path=expansion.source.path,
            templates=expansion.templates,
        )

    def _compose(self, slug: Slug, visited: FrozenSet[str], chain: Tuple[str, ...]) -> _Expansion:
        key = slug_key(slug)
        if key in visited:
            raise CircularInclude(slug, chain)
        LOGGER.debug("Composing %s (depth %d)", key, len(chain))

        source = self.store.read(slug)
        parsed = parse_front_matter(source.text)
        body, templates = self._expand(parsed.body, visited | {key}, chain + (key,))
        return _Expansion(source=source, metadata=parsed.metadata, body=body, templates=templates)

    def _expand(self, body: str, visited: FrozenSet[str], chain: Tuple[str, ...]) -> Tuple[str, List[str]]:
        pieces: List[str] = []
        templates: List[str] = []
        position = 0

        for match in _TOKEN_RE.finditer(body):
            if match.group("include") is not None:
                target = parse_include_slug(match.group("attrs"))
                child = self._compose(target, visited, chain)
                pieces.append(body[position : match.start()])
                pieces.append(child.body)
                position = match.end()
                for key in child.templates:
                    if key not in templates:
                        templates.append(key)
            elif match.group("image") is not None:
                component = match.group("component")
                template = IMAGE_TEMPLATES.get(component)
                if template is None:
                    raise UnknownTemplate(
                        f"Unknown image template <{component}> in {chain[-1]}; "
                        f"expected one of {', '.join(IMAGE_TEMPLATES)}"
                    )
                if template not in templates:
                    templates.append(template)

        pieces.append(body[position:])
        return "".join(pieces), templates
