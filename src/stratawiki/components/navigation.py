"""Sidebar navigation tree built from the wiki directory"""

import logging
from pathlib import PurePosixPath

from stratawiki.core.utils.escape import escape_attr, escape_html
from stratawiki.services.files import FileService, is_markdown


INDEX_FILES = {'index.md', 'readme.md'}


def _link(href: str, label: str, active: bool) -> str:
    cls = ' class="active"' if active else ''
    return f'<a{cls} href="{escape_attr(href)}">{escape_html(label)}</a>'


class NavigationComponent:
    def __init__(self, files: FileService, max_depth: int = 3, logger: logging.Logger = None) -> None:
        self.files = files
        self.max_depth = max_depth
        self.log = logger or logging.getLogger(__name__)

    def build_sidebar_html(self, current_path: str, toc_html: str = '') -> str:
        """Directory tree, open along current_path, plus an 'On this page' TOC section."""
        parts = ['<nav class="sidebar-nav">', '<div class="sidebar-title">Navigation</div>']
        self._build_dir(parts, '', 0, current_path.strip('/'))
        if toc_html:
            parts.append('<div class="sidebar-toc">')
            parts.append('<div class="sidebar-toc-title">On this page</div>')
            parts.append(toc_html)
            parts.append('</div>')
        parts.append('</nav>')
        return ''.join(parts)

    def _build_dir(self, parts: list[str], prefix: str, depth: int, current: str) -> None:
        if depth > self.max_depth:
            return
        parts.append('<ul class="nav-list">')
        for entry in self.files.list_directory(prefix):
            if entry.is_dir:
                branch = entry.path
                is_open = current == branch or current.startswith(branch + '/')
                parts.append('<li class="nav-item dir">')
                parts.append('<details open>' if is_open else '<details>')
                parts.append(f'<summary>{_link("/" + branch, entry.name + "/", current == branch)}</summary>')
                self._build_dir(parts, branch, depth + 1, current)
                parts.append('</details></li>')
            elif is_markdown(PurePosixPath(entry.name)) and entry.name.lower() not in INDEX_FILES:
                target = entry.path[:-len(PurePosixPath(entry.name).suffix)]
                label = PurePosixPath(entry.name).stem
                parts.append(f'<li class="nav-item file">{_link("/" + target, label, current == target)}</li>')
        parts.append('</ul>')
