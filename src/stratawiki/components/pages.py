"""Article fragments for directory listings, search results and raw source views"""

from stratawiki.core.models import DirEntry, SearchResult
from stratawiki.core.utils.escape import escape_attr, escape_html


def clean_href(path: str) -> str:
    """Site URL for a wiki-relative path, without the .md suffix."""
    path = path.strip('/')
    if path.endswith('.md'):
        path = path[:-3]
    return f'/{path}'


def render_directory_listing(req_path: str, entries: list[DirEntry]) -> str:
    req_path = req_path.strip('/')
    parts = [f'<h1>{escape_html("/" + req_path)}</h1>']
    if req_path:
        parent = req_path.rpartition('/')[0]
        parts.append(f'<p><a href="{escape_attr("/" + parent)}">&#11025; Up</a></p>')
    parts.append('<ul class="listing">')
    for entry in entries:
        href = f'/{entry.path}' if entry.is_dir else clean_href(entry.path)
        label = f'{entry.name}/' if entry.is_dir else entry.name
        parts.append(f'  <li><a href="{escape_attr(href)}">{escape_html(label)}</a></li>')
    parts.append('</ul>')
    return '\n'.join(parts)


def render_search_results(query: str, results: list[SearchResult]) -> str:
    if not query.strip():
        return '<div class="search-results"><p class="no-query">Enter a search query to find content.</p></div>'

    count = len(results)
    parts = [
        '<div class="search-results">',
        f'<h2 class="search-header">Search Results for "{escape_html(query)}"</h2>',
        f'<p class="results-count">Found {count} result{"" if count == 1 else "s"}</p>',
    ]
    if not results:
        parts.append('<p class="no-results">No results found for your search.</p>')
        parts.append(
            '<div class="search-tips"><h3>Search Tips:</h3><ul>'
            '<li>Try using different keywords</li>'
            '<li>Check spelling and try synonyms</li>'
            '<li>Use shorter, more general terms</li>'
            '</ul></div>'
        )
    else:
        parts.append('<div class="search-results-list">')
        for r in results:
            parts.append(
                '<div class="search-result-item glass">'
                f'<h3 class="result-title"><a href="{escape_attr(clean_href(r.path))}">{escape_html(r.title)}</a></h3>'
                f'<p class="result-path"><code>{escape_html(clean_href(r.path).lstrip("/"))}</code></p>'
                f'<p class="result-excerpt">{escape_html(r.excerpt)}</p>'
                f'<div class="result-meta">Relevance: {r.relevance:.1f}</div>'
                '</div>'
            )
        parts.append('</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_raw_view(display_path: str, content: str) -> str:
    return (
        '<div class="raw-viewer">'
        '<div class="raw-header">'
        f'<h1>Raw Markdown: {escape_html(display_path)}</h1>'
        f'<p class="raw-path">/raw/{escape_html(display_path)}</p>'
        f'<p><a href="{escape_attr(clean_href(display_path))}" class="raw-btn primary">&larr; Back to Rendered View</a></p>'
        '</div>'
        f'<pre class="raw-markdown"><code>{escape_html(content)}</code></pre>'
        '</div>'
    )
