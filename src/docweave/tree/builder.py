"""Directory tree assembly over the content store."""

from __future__ import annotations

import logging
from typing import Iterable, List

from docweave.content.frontmatter import parse_front_matter
from docweave.content.slugs import humanize_segment, validate_slug
from docweave.content.store import ContentStore
from docweave.models import DirectoryEntry, FileEntry, Slug, TreeEntry

LOGGER = logging.getLogger(__name__)


class TreeBuilder:
    """Builds navigation trees from the content store.

    Directories are only emitted when they hold at least one document;
    entries at each level are sorted by name (case-sensitive).
    """

    def __init__(self, store: ContentStore) -> None:
        self.store = store

    def _file_entry(self, slug: Slug) -> FileEntry:
        source = self.store.read(slug)
        metadata = parse_front_matter(source.text).metadata
        title = metadata.get_str("title") or humanize_segment(slug[-1])
        return FileEntry(slug=slug, name=slug[-1], title=title)

    def build_full_tree(self, root: Iterable[str] = ()) -> List[TreeEntry]:
        root = validate_slug(root)
        entries = self._collect(root)
        LOGGER.debug("Built tree for /%s with %d top-level entries", "/".join(root), len(entries))
        return entries

    def _collect(self, slug: Slug) -> List[TreeEntry]:
        entries: List[TreeEntry] = []
        for child in self.store.list_children(slug):
            if child.is_directory:
                directory_slug = slug + (child.name,)
                children = self._collect(directory_slug)
                if not children:
                    continue
                entries.append(
                    DirectoryEntry(
                        slug=directory_slug,
                        name=child.name,
                        title=humanize_segment(child.name),
                        has_children=True,
                        children=children,
                    )
                )
                continue

            stem = self.store.document_stem(child.name)
            if stem is None:
                continue
            entries.append(self._file_entry(slug + (stem,)))

        return sorted(entries, key=lambda entry: entry.name)

    def _peek_has_children(self, slug: Slug) -> bool:
        for child in self.store.list_children(slug):
            if child.is_directory or self.store.document_stem(child.name) is not None:
                return True
        return False

    def list_one_level(self, slug: Iterable[str] = ()) -> List[TreeEntry]:
        """List the immediate children of a directory without descending."""
        slug = validate_slug(slug)
        entries: List[TreeEntry] = []
        for child in self.store.list_children(slug):
            if child.is_directory:
                directory_slug = slug + (child.name,)
                if not self._peek_has_children(directory_slug):
                    continue
                entries.append(
                    DirectoryEntry(
                        slug=directory_slug,
                        name=child.name,
                        title=humanize_segment(child.name),
                        has_children=True,
                    )
                )
                continue

            stem = self.store.document_stem(child.name)
            if stem is not None:
                entries.append(self._file_entry(slug + (stem,)))

        return sorted(entries, key=lambda entry: entry.name)

    def enumerate_all_document_slugs(self) -> List[Slug]:
        slugs: List[Slug] = []

        def walk(entries: List[TreeEntry]) -> None:
            for entry in entries:
                if isinstance(entry, DirectoryEntry):
                    walk(entry.children)
                else:
                    slugs.append(entry.slug)

        walk(self.build_full_tree())
        return slugs
