"""Command line interface for DocWeave."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from docweave.compose.composer import DocumentComposer
from docweave.config import AppConfig
from docweave.content.slugs import parse_slug, slug_key, to_href
from docweave.content.store import ContentStore
from docweave.errors import DocweaveError
from docweave.index.indexer import SearchIndexer
from docweave.index.search import query as run_query
from docweave.models import DirectoryEntry, TreeEntry
from docweave.site.sitemap import build_sitemap_entries, render_sitemap
from docweave.tree.builder import TreeBuilder
from docweave.tree.service import TreeRequestError, TreeService
from docweave.web.app import app as web_app


console = Console()
app = typer.Typer(help="DocWeave - compose, browse and search MDX documentation")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _open_store(root: Optional[Path]) -> ContentStore:
    config = AppConfig(content_root=root)
    resolved_root = config.resolve_content_root(Path.cwd())
    if not resolved_root.is_dir():
        raise typer.BadParameter(f"Content root not found: {resolved_root}")
    return ContentStore(resolved_root, extension=config.extension)


def _fail(exc: Exception) -> None:
    console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


def _add_branch(parent: Tree, entries: List[TreeEntry]) -> None:
    for entry in entries:
        if isinstance(entry, DirectoryEntry):
            branch = parent.add(f"[bold]{entry.name}/[/bold]")
            _add_branch(branch, entry.children)
        else:
            parent.add(f"{entry.title} [dim]({slug_key(entry.slug)})[/dim]")


@app.command()
def tree(
    root: Optional[Path] = typer.Option(None, "--root", help="Content directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the full document tree."""
    _setup_logging(verbose)
    store = _open_store(root)
    try:
        entries = TreeBuilder(store).build_full_tree()
    except DocweaveError as exc:
        _fail(exc)
        return

    rendered = Tree(f"[bold]{store.root}[/bold]")
    _add_branch(rendered, entries)
    console.print(rendered)


@app.command("ls")
def list_children(
    slug: str = typer.Argument("", help="Directory slug, e.g. guide/advanced"),
    root: Optional[Path] = typer.Option(None, "--root", help="Content directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List one level of the tree, as the navigation menu requests it."""
    _setup_logging(verbose)
    service = TreeService(TreeBuilder(_open_store(root)))
    try:
        payload = service.get_children(slug)
    except TreeRequestError as exc:
        _fail(exc)
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Type")
    table.add_column("Slug")
    table.add_column("Title")
    for item in payload["items"]:
        table.add_row(item["type"], "/".join(item["slug"]), item["title"])
    console.print(table)


@app.command()
def compose(
    slug: str = typer.Argument(..., help="Document slug, e.g. guide/intro"),
    root: Optional[Path] = typer.Option(None, "--root", help="Content directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Expand every include of a document and print the result."""
    _setup_logging(verbose)
    composer = DocumentComposer(_open_store(root))
    try:
        document = composer.compose(parse_slug(slug, allow_root=False))
    except DocweaveError as exc:
        _fail(exc)
        return

    console.print(f"[bold]{document.title}[/bold] ({to_href(document.slug)})")
    typer.echo(document.body)


@app.command()
def slugs(
    root: Optional[Path] = typer.Option(None, "--root", help="Content directory"),
) -> None:
    """Print every document slug, one per line."""
    try:
        found = TreeBuilder(_open_store(root)).enumerate_all_document_slugs()
    except DocweaveError as exc:
        _fail(exc)
        return
    for slug in found:
        typer.echo(slug_key(slug))


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    root: Optional[Path] = typer.Option(None, "--root", help="Content directory"),
    limit: int = typer.Option(AppConfig().max_results, help="Maximum number of results"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search titles, paths and text of every document."""
    _setup_logging(verbose)
    try:
        records = SearchIndexer(_open_store(root)).build_index()
    except DocweaveError as exc:
        _fail(exc)
        return

    hits = run_query(records, query, limit=limit)
    if not hits:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Title")
    table.add_column("Path")
    table.add_column("Snippet")
    for hit in hits:
        table.add_row(hit.record.title, hit.record.href, hit.snippet)
    console.print(table)


@app.command()
def sitemap(
    root: Optional[Path] = typer.Option(None, "--root", help="Content directory"),
    site_url: str = typer.Option(AppConfig().site_url, help="Public base URL"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
) -> None:
    """Generate sitemap.xml for every document."""
    try:
        found = TreeBuilder(_open_store(root)).enumerate_all_document_slugs()
    except DocweaveError as exc:
        _fail(exc)
        return

    xml = render_sitemap(build_sitemap_entries(found, site_url))
    if output is None:
        typer.echo(xml)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(xml, encoding="utf-8")
    console.print(f"Wrote {len(found)} documents to [bold]{output}[/bold]")


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    root: Optional[Path] = typer.Option(None, "--root", help="Content directory"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    config = AppConfig(content_root=root)
    resolved_root = config.resolve_content_root(Path.cwd())
    if not resolved_root.is_dir():
        console.print("[yellow]Warning: content root not found, requests will fail.[/yellow]")
    if root is not None:
        # The web app reads its configuration from the environment.
        os.environ["DOCWEAVE_CONTENT_ROOT"] = str(resolved_root)

    console.print(f"Starting web interface on http://{host}:{port} (content: {resolved_root})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )


if __name__ == "__main__":  # pragma: no cover
    app()
