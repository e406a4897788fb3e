"""HTML shell rendering for wiki pages"""

import logging
import time

from jinja2 import Environment
from markupsafe import Markup

from stratawiki.core.models import PageContext


SHELL_TEMPLATE = """\
<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{{ title }} - {{ site_name }}</title>
    <link rel="stylesheet" href="/static/css/strata.css">
</head>
<body id="top">
    <div class="layout">
        <aside class="sidebar glass">{{ sidebar }}</aside>
        <main class="content">
            <div class="article-card glass">
{{ content }}
            </div>
        </main>
    </div>
    <a class="back-to-top glass" href="#top" aria-label="Back to top">&uarr;</a>
{{ fab }}
</body>
</html>"""

ERROR_TEMPLATE = """\
<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{{ status }} - {{ title }}</title>
    <link rel="stylesheet" href="/static/css/strata.css">
</head>
<body>
    <div class="error-page">
        <div class="error-container glass">
            <div class="error-icon">{{ status }}</div>
            <h1 class="error-title">{{ title }}</h1>
            <p class="error-message">{{ message }}</p>
            <div class="error-actions">
                <a href="/" class="error-btn primary">Go Home</a>
            </div>
        </div>
    </div>
</body>
</html>"""


class TemplateComponent:
    """Stitches sidebar, article and FAB fragments into a full page."""

    def __init__(self, site_name: str = 'Strata Wiki', logger: logging.Logger = None) -> None:
        self.site_name = site_name
        self.log = logger or logging.getLogger(__name__)
        self.env = Environment(autoescape=True)
        self.shell = self.env.from_string(SHELL_TEMPLATE)
        self.error = self.env.from_string(ERROR_TEMPLATE)

    def render_page(self, ctx: PageContext) -> str:
        started = time.perf_counter()
        page = self.shell.render(
            title=ctx.title,
            site_name=self.site_name,
            sidebar=Markup(ctx.sidebar),
            content=Markup(ctx.content),
            fab=Markup(ctx.fab),
        )
        self.log.debug("Rendered page %r in %.1fms", ctx.title, (time.perf_counter() - started) * 1000)
        return page

    def render_error(self, status: int, title: str, message: str) -> str:
        return self.error.render(status=status, title=title, message=message)
