"""HTML escaping for text nodes and attribute values"""

import html


def escape_html(text: str) -> str:
    """Escape &, < and > for text content; quotes are left as typed."""
    return html.escape(text, quote=False)


def escape_attr(text: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return html.escape(text, quote=True)
