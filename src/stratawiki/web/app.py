"""FastAPI application: page, search, raw-source and static-asset routes"""

import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response

from stratawiki.components.fab import FabComponent
from stratawiki.components.navigation import NavigationComponent
from stratawiki.components.pages import render_directory_listing, render_raw_view, render_search_results
from stratawiki.components.templates import TemplateComponent
from stratawiki.config import Settings
from stratawiki.core.models import PageContext
from stratawiki.core.render import MarkdownRenderer
from stratawiki.errors import NotFoundError, WikiError
from stratawiki.services.files import (
    FileService,
    content_type_for,
    is_markdown,
    last_modified_html,
    normalize_path,
)
from stratawiki.services.search import SearchService


INDEX_NAMES = ('index.md', 'README.md')

logger = logging.getLogger(__name__)


class Wiki:
    """Wires the renderer, services and components for one wiki directory."""

    def __init__(self, settings: Settings, logger: logging.Logger = logger) -> None:
        self.settings = settings
        self.log = logger
        self.files = FileService(Path(settings.wiki_dir), logger=logger.getChild('files'))
        self.static = FileService(Path(settings.static_dir), logger=logger.getChild('static'))
        self.search_service = SearchService(self.files, settings.excerpt_radius, logger=logger.getChild('search'))
        self.nav = NavigationComponent(self.files, settings.nav_max_depth, logger=logger.getChild('nav'))
        self.fab = FabComponent(settings.wiki_dir)
        self.templates = TemplateComponent(settings.site_name, logger=logger.getChild('templates'))
        self.renderer = MarkdownRenderer()

    def page(self, req_path: str, title: str, content: str, toc_html: str = '') -> str:
        return self.templates.render_page(PageContext(
            title=title,
            content=content,
            sidebar=self.nav.build_sidebar_html(req_path, toc_html),
            fab=self.fab.render(req_path),
        ))

    def markdown_page(self, rel_file: str, req_path: str) -> str:
        result = self.renderer.render(self.files.read_file(rel_file))
        body = last_modified_html(self.files.resolve(rel_file)) + result.html
        title = result.title or req_path or 'Wiki'
        return self.page(req_path, title, body, result.toc_html)

    def directory_page(self, req_path: str) -> str:
        for name in INDEX_NAMES:
            candidate = f'{req_path}/{name}' if req_path else name
            if self.files.is_file(candidate):
                self.log.info("Serving %s for directory '%s'", name, req_path)
                return self.markdown_page(candidate, req_path)
        self.log.info("Serving directory listing for '%s'", req_path)
        listing = render_directory_listing(req_path, self.files.list_directory(req_path))
        return self.page(req_path, req_path or 'Wiki', listing)

    def path_response(self, req_path: str) -> Response:
        full = self.files.resolve(req_path)
        if full.is_dir():
            return HTMLResponse(self.directory_page(req_path))
        if full.is_file():
            if is_markdown(full):
                return HTMLResponse(self.markdown_page(req_path, req_path))
            return Response(self.files.read_bytes(req_path), media_type=content_type_for(full))
        variant = f'{req_path}.md'
        if self.files.is_file(variant):
            self.log.info("Serving .md file: '%s'", req_path)
            return HTMLResponse(self.markdown_page(variant, req_path))
        self.log.warning("Path not found: '%s'", req_path)
        raise NotFoundError(req_path)

    def search_page(self, query: str) -> str:
        limit = self.settings.max_query_length
        if len(query) > limit:
            self.log.warning("Truncating %d-char search query to %d", len(query), limit)
            query = query[:limit]
        started = time.perf_counter()
        results = self.search_service.search(query)
        self.log.info(
            "Search for %r found %d result(s) in %.1fms",
            query, len(results), (time.perf_counter() - started) * 1000,
        )
        return self.page('', 'Search', render_search_results(query, results))

    def raw_page(self, req_path: str) -> str:
        rel = req_path
        if not self.files.is_file(rel):
            rel = f'{req_path}.md'
            if not self.files.is_file(rel):
                raise NotFoundError(req_path)
        return self.page(req_path, f'Raw: {rel}', render_raw_view(rel, self.files.read_file(rel)))

    def static_response(self, req_path: str) -> Response:
        full = self.static.resolve(req_path)
        return Response(self.static.read_bytes(req_path), media_type=content_type_for(full))


def create_app(settings: Settings) -> FastAPI:
    wiki = Wiki(settings)
    app = FastAPI(title=settings.app_name, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.wiki = wiki

    @app.exception_handler(WikiError)
    async def wiki_error_handler(request: Request, exc: WikiError) -> HTMLResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        message = {
            404: "The requested page could not be found.",
            400: "The requested path is not valid.",
        }.get(exc.status_code, "The page could not be rendered.")
        page = wiki.templates.render_error(exc.status_code, exc.title, message)
        return HTMLResponse(page, status_code=exc.status_code)

    @app.get("/", response_class=HTMLResponse)
    def root():
        return wiki.directory_page('')

    @app.get("/search", response_class=HTMLResponse)
    def search(q: str = ""):
        return wiki.search_page(q)

    @app.get("/raw/{path:path}", response_class=HTMLResponse)
    def raw(path: str):
        return wiki.raw_page(normalize_path(path))

    @app.get("/static/{path:path}")
    def static(path: str):
        return wiki.static_response(normalize_path(path))

    @app.get("/{path:path}")
    def page(path: str):
        logger.info("Path request received: '%s'", path)
        return wiki.path_response(normalize_path(path))

    return app
