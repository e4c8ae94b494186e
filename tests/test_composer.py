"""Tests for DocumentComposer."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import write_doc
from docweave.compose.composer import DocumentComposer, parse_include_slug
from docweave.content.frontmatter import parse_front_matter
from docweave.content.store import ContentStore
from docweave.errors import CircularInclude, DocumentNotFound, InvalidInclude, InvalidSlug, UnknownTemplate


@pytest.fixture
def composer(store: ContentStore) -> DocumentComposer:
    return DocumentComposer(store)


class TestParseIncludeSlug:
    """Test parse_include_slug helper."""

    @pytest.mark.parametrize(
        "attrs",
        [' slug="general/shared" ', " slug='general/shared'", ' slug={"general/shared"}', " slug = 'general/shared' "],
    )
    def test_quote_styles(self, attrs: str) -> None:
        assert parse_include_slug(attrs) == ("general", "shared")

    def test_missing_slug(self) -> None:
        with pytest.raises(InvalidInclude):
            parse_include_slug(' src="x" ')

    @pytest.mark.parametrize("attrs", [' slug="" ', ' slug=" / " ', ' slug="../secret" '])
    def test_malformed_slug(self, attrs: str) -> None:
        with pytest.raises(InvalidInclude):
            parse_include_slug(attrs)


class TestCompose:
    """Test DocumentComposer.compose."""

    def test_without_includes(self, composer: DocumentComposer, content_root: Path) -> None:
        """Body and metadata equal the document's own parsed parts."""
        raw = (content_root / "home.mdx").read_text(encoding="utf-8")
        parsed = parse_front_matter(raw)

        document = composer.compose(["home"])

        assert document.body == parsed.body
        assert document.metadata == parsed.metadata.to_dict()
        assert document.title == "Welcome"
        assert document.path == content_root / "home.mdx"

    def test_include_is_spliced(self, composer: DocumentComposer) -> None:
        document = composer.compose(["guide", "intro"])

        assert "Shared content" in document.body
        assert "<Include" not in document.body
        assert document.body.index("Before.") < document.body.index("Shared content") < document.body.index("After.")

    def test_include_element_with_children(self, content_root: Path) -> None:
        """Children of an Include element are dropped along with its closing tag."""
        write_doc(content_root, "wrapped.mdx", '<Include slug="general/shared">\nfallback\n</Include>\nend')

        document = DocumentComposer(ContentStore(content_root)).compose(["wrapped"])

        assert document.body == "Shared content\nend"
        assert "</Include>" not in document.body
        assert "fallback" not in document.body

    def test_include_element_empty_children(self, content_root: Path) -> None:
        write_doc(content_root, "pair.mdx", 'A <Include slug="general/shared"></Include> B')

        document = DocumentComposer(ContentStore(content_root)).compose(["pair"])

        assert document.body == "A Shared content B"

    def test_only_root_metadata_survives(self, composer: DocumentComposer) -> None:
        document = composer.compose(["guide", "intro"])

        assert document.metadata == {"title": "Introduction", "keywords": ["intro", "guide"]}

    def test_title_falls_back_to_slug(self, content_root: Path) -> None:
        write_doc(content_root, "guide/getting-started.mdx", "No front matter")

        document = DocumentComposer(ContentStore(content_root)).compose(["guide", "getting-started"])

        assert document.title == "Getting started"
        assert document.metadata == {}

    def test_self_include_is_circular(self, content_root: Path) -> None:
        write_doc(content_root, "loop.mdx", 'Start <Include slug="loop" />')

        with pytest.raises(CircularInclude) as excinfo:
            DocumentComposer(ContentStore(content_root)).compose(["loop"])

        assert excinfo.value.slug == ("loop",)

    def test_two_document_cycle(self, content_root: Path) -> None:
        write_doc(content_root, "a.mdx", '<Include slug="b" />')
        write_doc(content_root, "b.mdx", '<Include slug="a" />')

        with pytest.raises(CircularInclude) as excinfo:
            DocumentComposer(ContentStore(content_root)).compose(["a"])

        assert excinfo.value.chain == ("a", "b")
        assert "a -> b -> a" in str(excinfo.value)

    def test_sibling_includes_are_not_a_cycle(self, content_root: Path) -> None:
        """The same document may be included twice side by side."""
        write_doc(content_root, "twice.mdx", '<Include slug="general/shared" />\n\n<Include slug="general/shared" />')

        document = DocumentComposer(ContentStore(content_root)).compose(["twice"])

        assert document.body.count("Shared content") == 2

    def test_nested_diamond(self, content_root: Path) -> None:
        """A shared descendant reached through two branches is fine."""
        write_doc(content_root, "left.mdx", 'L <Include slug="general/shared" />')
        write_doc(content_root, "right.mdx", 'R <Include slug="general/shared" />')
        write_doc(content_root, "top.mdx", '<Include slug="left" />\n<Include slug="right" />')

        document = DocumentComposer(ContentStore(content_root)).compose(["top"])

        assert document.body == "L Shared content\nR Shared content"

    def test_missing_include_target(self, content_root: Path) -> None:
        write_doc(content_root, "broken.mdx", '<Include slug="does/not/exist" />')

        with pytest.raises(DocumentNotFound):
            DocumentComposer(ContentStore(content_root)).compose(["broken"])

    def test_directory_include_target(self, content_root: Path) -> None:
        write_doc(content_root, "dir-include.mdx", '<Include slug="guide" />')

        with pytest.raises(DocumentNotFound):
            DocumentComposer(ContentStore(content_root)).compose(["dir-include"])

    def test_empty_include_slug(self, content_root: Path) -> None:
        write_doc(content_root, "empty.mdx", '<Include slug="" />')

        with pytest.raises(InvalidInclude):
            DocumentComposer(ContentStore(content_root)).compose(["empty"])

    def test_include_without_slug(self, content_root: Path) -> None:
        write_doc(content_root, "noslug.mdx", "<Include />")

        with pytest.raises(InvalidInclude):
            DocumentComposer(ContentStore(content_root)).compose(["noslug"])

    def test_missing_root(self, composer: DocumentComposer) -> None:
        with pytest.raises(DocumentNotFound):
            composer.compose(["missing"])

    def test_invalid_root_slug(self, composer: DocumentComposer) -> None:
        with pytest.raises(InvalidSlug):
            composer.compose([])

    def test_includes_in_code_stay_literal(self, content_root: Path) -> None:
        text = 'Use it like:\n\n```mdx\n<Include slug="missing" />\n```\n\nor `<Include slug="missing" />` inline.'
        write_doc(content_root, "howto.mdx", text)

        document = DocumentComposer(ContentStore(content_root)).compose(["howto"])

        assert document.body == text


class TestImageTemplates:
    """Inline image components are limited to the known templates."""

    def test_known_templates_reported(self, content_root: Path) -> None:
        write_doc(
            content_root,
            "pics.mdx",
            '<ImageBig src="/a.svg" alt="A" />\n<Include slug="small" />',
        )
        write_doc(content_root, "small.mdx", '<ImageSmall src="/b.svg" alt="B" />')

        document = DocumentComposer(ContentStore(content_root)).compose(["pics"])

        assert document.templates == ["image_big", "image_small"]

    def test_unknown_template(self, content_root: Path) -> None:
        write_doc(content_root, "bad.mdx", '<ImageHuge src="/a.svg" alt="A" />')

        with pytest.raises(UnknownTemplate):
            DocumentComposer(ContentStore(content_root)).compose(["bad"])
