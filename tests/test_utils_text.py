"""Tests for text utility functions."""

from __future__ import annotations

import pytest

from docweave.utils.text import collapse_whitespace, strip_markup


class TestCollapseWhitespace:
    def test_collapse(self) -> None:
        assert collapse_whitespace("  a \n\n b\t c  ") == "a b c"

    def test_empty(self) -> None:
        assert collapse_whitespace(" \n ") == ""


class TestStripMarkup:
    """Test strip_markup function."""

    def test_code_fence_removed(self) -> None:
        assert strip_markup("before\n```python\nsecret()\n```\nafter") == "before after"

    def test_inline_code_removed(self) -> None:
        assert strip_markup("run `make` now") == "run now"

    def test_links_and_images_removed(self) -> None:
        assert strip_markup("see [docs](http://x) and ![alt](a.png) here") == "see and here"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("# Title", "Title"),
            ("**bold** and _italic_", "bold and italic"),
            ("> quoted", "quoted"),
            ("- item one\n- item two", "item one item two"),
            ("~~gone~~", "gone"),
        ],
    )
    def test_markers_removed(self, text: str, expected: str) -> None:
        assert strip_markup(text) == expected
