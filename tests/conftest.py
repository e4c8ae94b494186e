"""Shared fixtures: small content trees on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from docweave.content.store import ContentStore


def write_doc(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """The home / guide / general fixture tree."""
    root = tmp_path / "content"
    root.mkdir()
    write_doc(root, "home.mdx", "---\ntitle: Welcome\ndescription: Start here\n---\n# Welcome\n\nHello docs.\n")
    write_doc(
        root,
        "guide/intro.mdx",
        '---\ntitle: Introduction\nkeywords: [intro, guide]\n---\nBefore.\n\n<Include slug="general/shared" />\n\nAfter.\n',
    )
    write_doc(root, "general/shared.mdx", "---\ntitle: Shared\n---\nShared content\n")
    return root


@pytest.fixture
def store(content_root: Path) -> ContentStore:
    return ContentStore(content_root)
