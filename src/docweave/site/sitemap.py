"""sitemap.xml and robots.txt generation from the document enumeration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Sequence
from xml.etree import ElementTree

from docweave.content.slugs import HOME_SLUG, slug_key
from docweave.models import Slug

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
DEFAULT_PRIORITY = 0.6


@dataclass(slots=True)
class SitemapEntry:
    url: str
    priority: float
    last_modified: date
    change_frequency: str = "monthly"


def build_url(slug: Slug, base_url: str) -> str:
    base_url = base_url.rstrip("/")
    if slug == HOME_SLUG:
        return base_url
    return f"{base_url}/{slug_key(slug)}"


def priority_for_slug(slug: Slug) -> float:
    if not slug:
        return 1.0
    if len(slug) == 1:
        return 0.8
    return DEFAULT_PRIORITY


def build_sitemap_entries(
    slugs: Iterable[Slug], base_url: str, *, today: date | None = None
) -> List[SitemapEntry]:
    """One entry per unique document slug; the home page is always listed."""
    today = today or date.today()
    unique: dict[Slug, None] = dict.fromkeys(tuple(slug) for slug in slugs)
    unique.setdefault(HOME_SLUG, None)
    return [
        SitemapEntry(url=build_url(slug, base_url), priority=priority_for_slug(slug), last_modified=today)
        for slug in unique
    ]


def render_sitemap(entries: Sequence[SitemapEntry]) -> str:
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = entry.url
        ElementTree.SubElement(url, "lastmod").text = entry.last_modified.isoformat()
        ElementTree.SubElement(url, "changefreq").text = entry.change_frequency
        ElementTree.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    body = ElementTree.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def render_robots(base_url: str, disallow: Sequence[str] = ()) -> str:
    base_url = base_url.rstrip("/")
    lines = ["User-agent: *", "Allow: /"]
    lines.extend(f"Disallow: {path}" for path in disallow)
    lines.append("")
    lines.append(f"Sitemap: {base_url}/sitemap.xml")
    return "\n".join(lines) + "\n"
