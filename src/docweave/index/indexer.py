"""Search index construction."""

from __future__ import annotations

import logging
from typing import List

from docweave.content.frontmatter import parse_front_matter
from docweave.content.slugs import humanize_segment, to_href
from docweave.content.store import ContentStore
from docweave.models import SearchRecord, Slug
from docweave.tree.builder import TreeBuilder
from docweave.utils.text import strip_markup

LOGGER = logging.getLogger(__name__)


class SearchIndexer:
    """Flattens the content tree into plain-text search records."""

    def __init__(self, store: ContentStore, builder: TreeBuilder | None = None) -> None:
        self.store = store
        self.builder = builder or TreeBuilder(store)

    def build_record(self, slug: Slug) -> SearchRecord:
        source = self.store.read(slug)
        parsed = parse_front_matter(source.text)
        title = parsed.metadata.get_str("title") or humanize_segment(slug[-1])
        return SearchRecord(slug=slug, href=to_href(slug), title=title, plain_text=strip_markup(parsed.body))

    def build_index(self) -> List[SearchRecord]:
        """Build one record per document, ordered by title."""
        records = [self.build_record(slug) for slug in self.builder.enumerate_all_document_slugs()]
        records.sort(key=lambda record: record.title.casefold())
        LOGGER.info("Indexed %d documents from %s", len(records), self.store.root)
        return records
