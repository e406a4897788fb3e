"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
import uvicorn

from stratawiki.config import Settings, load_config
from stratawiki.core.render import MarkdownRenderer
from stratawiki.errors import WikiError
from stratawiki.log import configure_logging
from stratawiki.services.files import FileService
from stratawiki.services.search import SearchService
from stratawiki.web.app import create_app


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def serve_cmd(
    wiki: Annotated[Optional[str], typer.Option("--wiki-dir", help="Markdown root directory")] = None,
    static: Annotated[Optional[str], typer.Option("--static-dir", help="Static asset directory")] = None,
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port")] = None,
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ...")] = None,
    ):
    """Serve the wiki over HTTP."""
    settings = _settings(overrides={
        "wiki_dir": wiki, "static_dir": static, "host": host, "port": port,
        "log_level": log_level.upper() if log_level else None,
    })
    if not Path(settings.wiki_dir).is_dir():
        _fail(f"Wiki directory not found: {settings.wiki_dir}")
    configure_logging(settings.log_level)
    typer.echo(f"Wiki listening on http://{settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def render_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown file to render")],
    toc: Annotated[bool, typer.Option("--toc", help="Print the table of contents instead of the body")] = False,
    title: Annotated[bool, typer.Option("--title", help="Print only the derived title")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print html, toc_html and title as JSON")] = False,
    ):
    """Render a single Markdown file to HTML on stdout."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)

    result = MarkdownRenderer().render(raw)
    if as_json:
        typer.echo(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
    elif title:
        typer.echo(result.title or "")
    elif toc:
        typer.echo(result.toc_html)
    else:
        typer.echo(result.html)


def search_cmd(
    query: Annotated[str, typer.Argument(help="Text to look for")],
    wiki: Annotated[Optional[str], typer.Option("--wiki-dir", help="Markdown root directory")] = None,
    ):
    """Search the wiki's markdown files and list matches by relevance."""
    settings = _settings(overrides={"wiki_dir": wiki})
    service = SearchService(FileService(Path(settings.wiki_dir)), settings.excerpt_radius)
    try:
        results = service.search(query[:settings.max_query_length])
    except WikiError as e:
        _fail(f"Search failed in {settings.wiki_dir}", e)
    if not results:
        typer.echo("No results.")
        raise typer.Exit(1)
    for r in results:
        typer.echo(f"  {r.relevance:5.1f}  {r.path}")
    typer.echo(f"Found {len(results)} result(s)")
