"""Floating action bar: home link, search box and per-page actions"""

from stratawiki.core.utils.escape import escape_attr


class FabComponent:
    def __init__(self, wiki_dir: str = 'wiki') -> None:
        self.wiki_dir = wiki_dir.strip('/')

    def generate_actions(self, req_path: str) -> str:
        """Raw-view and edit links for a page; nothing on the home page."""
        req_path = req_path.strip('/')
        if not req_path:
            return ''
        source = req_path if req_path.endswith('.md') else f'{req_path}.md'
        raw_href = f'/raw/{source}'
        edit_href = f'file://{self.wiki_dir}/{source}'
        return (
            f'<a href="{escape_attr(raw_href)}" title="View raw" class="fab-action-raw"></a>'
            f'<a href="{escape_attr(edit_href)}" title="Edit this page" class="fab-action-edit"></a>'
        )

    def generate_fab_html(self, req_path: str, actions: str) -> str:
        fab_class = 'fab-home' if not req_path.strip('/') else 'fab-page'
        return (
            f'<div class="fab glass {fab_class}" id="fab">'
            '<div class="fab-menu">'
            '<a href="/" class="fab-item" title="Home"></a>'
            '<form class="fab-search" action="/search" method="get">'
            '<input type="text" name="q" placeholder="Search...">'
            '</form>'
            f'<div class="fab-actions">{actions}</div>'
            '</div></div>'
        )

    def render(self, req_path: str) -> str:
        return self.generate_fab_html(req_path, self.generate_actions(req_path))
