"""Table-of-contents fragment built from collected headings"""

from stratawiki.core.models import Heading
from stratawiki.core.utils.escape import escape_attr, escape_html


def build_toc_html(headings: list[Heading]) -> str:
    """Nested lists following heading depth; empty string when there are no headings.

    A deeper level opens inside the current <li>. Skipped levels get an empty
    wrapper <li> so every <ul> is a child of an <li>.
    """
    if not headings:
        return ''
    parts = ['<nav class="toc"><div class="toc-title">Contents</div>']
    depth = 0
    item_open = False       # an <li> is open in the innermost <ul>
    for heading in headings:
        level = min(max(heading.level, 1), 6)
        while depth > level:
            if item_open:
                parts.append('</li>')
            parts.append('</ul>')
            depth -= 1
            item_open = True
        if depth == level and item_open:
            parts.append('</li>')
        while depth < level:
            if depth and not item_open:
                parts.append('<li>')
            parts.append('<ul>')
            depth += 1
            item_open = False
        parts.append(f'<li><a href="#{escape_attr(heading.id)}">{escape_html(heading.text)}</a>')
        item_open = True
    while depth:
        if item_open:
            parts.append('</li>')
        parts.append('</ul>')
        depth -= 1
        item_open = True
    parts.append('</nav>')
    return ''.join(parts)
