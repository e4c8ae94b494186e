"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

HIDDEN_PREFIX = "."


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def iter_visible_children(directory: Path) -> Iterator[Path]:
    """Yield the non-hidden entries of a directory, sorted by name."""
    for child in sorted(directory.iterdir(), key=lambda item: item.name):
        if not is_hidden(child.name):
            yield child


def is_within(path: Path, root: Path) -> bool:
    """Return True if ``path`` resolves to a location under ``root``."""
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True
