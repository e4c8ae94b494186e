"""Core DocWeave data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Tuple, Union

Slug = Tuple[str, ...]


@dataclass(slots=True)
class DocumentSource:
    """Raw, unexpanded document text and where it lives on disk."""

    slug: Slug
    text: str
    path: Path


@dataclass(slots=True)
class ChildEntry:
    """Immediate child of a content directory."""

    name: str
    is_directory: bool


@dataclass(slots=True)
class ComposedDocument:
    """Document with every include directive resolved."""

    slug: Slug
    title: str
    body: str
    metadata: Dict[str, Any]
    path: Path
    templates: List[str] = field(default_factory=list)


@dataclass(slots=True)
class FileEntry:
    slug: Slug
    name: str
    title: str
    type: Literal["file"] = "file"

    @property
    def is_directory(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "name": self.name, "slug": list(self.slug), "title": self.title}


@dataclass(slots=True)
class DirectoryEntry:
    slug: Slug
    name: str
    title: str
    has_children: bool = True
    children: List["TreeEntry"] = field(default_factory=list)
    type: Literal["directory"] = "directory"

    @property
    def is_directory(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "name": self.name,
            "slug": list(self.slug),
            "title": self.title,
            "hasChildren": self.has_children,
        }
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


TreeEntry = Union[FileEntry, DirectoryEntry]


@dataclass(slots=True)
class SearchRecord:
    """Searchable, markup-free view of one document."""

    slug: Slug
    href: str
    title: str
    plain_text: str


@dataclass(slots=True)
class SearchHit:
    record: SearchRecord
    snippet: str
