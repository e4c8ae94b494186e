"""FastAPI application exposing composed documents, navigation and search."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from docweave.compose.composer import DocumentComposer
from docweave.config import AppConfig
from docweave.content.slugs import HOME_SLUG, parse_slug, to_href
from docweave.content.store import ContentStore
from docweave.errors import (
    CircularInclude,
    DocumentNotFound,
    InvalidInclude,
    InvalidSlug,
    UnknownTemplate,
)
from docweave.index.indexer import SearchIndexer
from docweave.index.search import query as run_query
from docweave.models import ComposedDocument, SearchRecord
from docweave.site.sitemap import build_sitemap_entries, render_robots, render_sitemap
from docweave.tree.builder import TreeBuilder
from docweave.tree.service import TreeRequestError, TreeService

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="DocWeave", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class SearchHitPayload(BaseModel):
    slug: List[str]
    href: str
    title: str
    snippet: str


def _resolve_content_root(root: Path | None = None) -> Path:
    config = AppConfig(content_root=root)
    return config.resolve_content_root(Path.cwd())


def _get_store(root: Path | None = None) -> ContentStore:
    return ContentStore(_resolve_content_root(root), extension=AppConfig().extension)


def _get_records(store: ContentStore, *, rebuild: bool = False) -> list[SearchRecord]:
    """Return the process-wide index, building it on first use."""
    cached_root = getattr(app.state, "index_root", None)
    if rebuild or cached_root != store.root or getattr(app.state, "search_records", None) is None:
        app.state.search_records = SearchIndexer(store).build_index()
        app.state.index_root = store.root
    return app.state.search_records


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    store = _get_store()
    if store.root.is_dir():
        _get_records(store, rebuild=True)
    else:
        LOGGER.warning("Content root %s does not exist; search index is empty", store.root)


@app.get("/api/tree")
async def docs_tree(slug: str | None = None) -> dict[str, Any]:
    service = TreeService(TreeBuilder(_get_store()))
    try:
        return service.get_children(slug)
    except TreeRequestError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@app.get("/api/slugs")
async def list_slugs() -> dict[str, List[List[str]]]:
    """Document slugs for static path generation; home is served at ``/``."""
    slugs = TreeBuilder(_get_store()).enumerate_all_document_slugs()
    return {"slugs": [list(slug) for slug in slugs if slug != HOME_SLUG]}


def _compute_etag(document: ComposedDocument) -> str:
    """Hash the composed payload so edits to included documents change the tag."""
    digest = hashlib.sha256()
    digest.update(document.body.encode("utf-8"))
    digest.update(json.dumps(document.metadata, sort_keys=True, default=str).encode("utf-8"))
    return f'"{digest.hexdigest()}"'


def _compose_response(slug_path: str, response: Response) -> dict[str, Any]:
    try:
        slug = parse_slug(slug_path, allow_root=False)
    except InvalidSlug as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    composer = DocumentComposer(_get_store())
    try:
        document = composer.compose(slug)
    except DocumentNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidSlug as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (CircularInclude, InvalidInclude, UnknownTemplate) as exc:
        LOGGER.error("Failed to compose %s: %s", slug_path, exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    response.headers["ETag"] = _compute_etag(document)
    return {
        "slug": list(document.slug),
        "href": to_href(document.slug),
        "title": document.title,
        "metadata": document.metadata,
        "templates": document.templates,
        "body": document.body,
    }


@app.get("/api/docs")
async def home_document(response: Response) -> dict[str, Any]:
    return _compose_response("/".join(HOME_SLUG), response)


@app.get("/api/docs/{slug_path:path}")
async def get_document(slug_path: str, response: Response) -> dict[str, Any]:
    return _compose_response(slug_path, response)


@app.get("/api/search")
async def search_documents(q: str = "") -> dict[str, List[SearchHitPayload]]:
    if not q.strip():
        return {"results": []}

    store = _get_store()
    config = AppConfig()
    try:
        records = _get_records(store)
    except DocumentNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    hits = run_query(records, q, limit=config.max_results, radius=config.snippet_radius)
    return {
        "results": [
            SearchHitPayload(
                slug=list(hit.record.slug),
                href=hit.record.href,
                title=hit.record.title,
                snippet=hit.snippet,
            )
            for hit in hits
        ]
    }


@app.post("/api/search/reindex")
async def reindex() -> dict[str, Any]:
    store = _get_store()
    try:
        records = _get_records(store, rebuild=True)
    except DocumentNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "ok", "documents": len(records)}


@app.get("/sitemap.xml")
async def sitemap() -> Response:
    config = AppConfig()
    slugs = TreeBuilder(_get_store()).enumerate_all_document_slugs()
    xml = render_sitemap(build_sitemap_entries(slugs, config.site_url))
    return Response(content=xml, media_type="application/xml")


@app.get("/robots.txt", response_class=PlainTextResponse)
async def robots() -> str:
    config = AppConfig()
    return render_robots(config.site_url, config.robots_disallow)
