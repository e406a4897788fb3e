"""Inline span conversion: images, links, code, strikethrough and emphasis.

Text is carried through the passes as a list of segments so that HTML produced
by an earlier pass is never rescanned or re-escaped by a later one:

    TEXT   raw source text, escaped only when the segments are joined
    HTML   a finished element (image, link, code span)
    OPEN   opening tag of an emphasis span
    CLOSE  closing tag of an emphasis span

Emphasis markers only pair up at the same OPEN/CLOSE depth, which keeps the
output properly nested.
"""

import html
import re
from typing import Callable, Optional

from stratawiki.core.utils.escape import escape_attr, escape_html


TEXT, HTML, OPEN, CLOSE = 'text', 'html', 'open', 'close'

Segment = tuple[str, str]
Match = Optional[tuple[Optional[str], int]]   # (html or None for literal, end index)

ABSOLUTE_PREFIXES = ('http://', 'https://')
TAG_RE = re.compile(r'<[^>]+>')

EMPHASIS_PASSES = (
    ('~~',  '<del>',          '</del>'),
    ('***', '<strong><em>',   '</em></strong>'),
    ('**',  '<strong>',       '</strong>'),
    ('*',   '<em>',           '</em>'),
)


def wiki_href(url: str) -> str:
    """Drop the .md suffix from relative wiki links, keeping any #fragment."""
    if url.startswith(ABSOLUTE_PREFIXES):
        return url
    path, sep, fragment = url.partition('#')
    if path.endswith('.md'):
        path = path[:-3]
    return path + sep + fragment


def _bracket_target(text: str, i: int) -> Optional[tuple[str, str, int]]:
    """Parse '[label](target)' starting at text[i] == '['. Returns (label, target, end)."""
    j = text.find(']', i + 1)
    if j == -1 or j + 1 >= len(text) or text[j + 1] != '(':
        return None
    k = text.find(')', j + 2)
    if k == -1:
        return None
    target = text[j + 2:k].strip()
    if not target:
        return None
    return text[i + 1:j], target, k + 1


def _match_image(text: str, i: int) -> Match:
    if not text.startswith('![', i):
        return None
    parsed = _bracket_target(text, i + 1)
    if parsed is None:
        return None
    alt, url, end = parsed
    return f'<img src="{escape_attr(url)}" alt="{escape_attr(alt)}">', end


def _match_link(text: str, i: int) -> Match:
    if text[i] != '[':
        return None
    parsed = _bracket_target(text, i)
    if parsed is None:
        return None
    label, url, end = parsed
    return f'<a href="{escape_attr(wiki_href(url))}">{escape_html(label)}</a>', end


def _match_code(text: str, i: int) -> Match:
    if text[i] != '`':
        return None
    j = text.find('`', i + 1)
    if j == -1:
        return None
    content = text[i + 1:j]
    if not content.strip():
        return None, j + 1
    return f'<code>{escape_html(content)}</code>', j + 1


def _merge(segments: list[Segment]) -> list[Segment]:
    """Join adjacent TEXT segments so markers split across them can still match."""
    merged: list[Segment] = []
    for kind, value in segments:
        if kind == TEXT and merged and merged[-1][0] == TEXT:
            merged[-1] = (TEXT, merged[-1][1] + value)
        elif kind != TEXT or value:
            merged.append((kind, value))
    return merged


def _atomic_pass(segments: list[Segment], match: Callable[[str, int], Match]) -> list[Segment]:
    """Replace self-contained constructs found inside single TEXT segments."""
    out: list[Segment] = []
    for kind, value in segments:
        if kind != TEXT:
            out.append((kind, value))
            continue
        buf: list[str] = []
        i = 0
        while i < len(value):
            hit = match(value, i)
            if hit is None:
                buf.append(value[i])
                i += 1
                continue
            element, end = hit
            if element is None:
                buf.append(value[i:end])
            else:
                out.append((TEXT, ''.join(buf)))
                out.append((HTML, element))
                buf = []
            i = end
        out.append((TEXT, ''.join(buf)))
    return _merge(out)


def _find_close(segments: list[Segment], idx: int, start: int, marker: str) -> Optional[tuple[int, int]]:
    """Locate the closing marker at the opener's depth; None if the span is left first."""
    depth = 0
    pos = start
    for i in range(idx, len(segments)):
        kind, value = segments[i]
        if kind == OPEN:
            depth += 1
        elif kind == CLOSE:
            depth -= 1
            if depth < 0:
                return None
        elif kind == TEXT and depth == 0:
            found = value.find(marker, pos)
            if found != -1:
                return i, found
        pos = 0
    return None


def _is_blank(segments: list[Segment]) -> bool:
    return all(kind == TEXT and not value.strip() for kind, value in segments)


def _emphasis_pass(segments: list[Segment], marker: str, open_tag: str, close_tag: str) -> list[Segment]:
    size = len(marker)
    segs = list(segments)
    out: list[Segment] = []
    idx = 0
    while idx < len(segs):
        kind, value = segs[idx]
        pos = value.find(marker) if kind == TEXT else -1
        if pos == -1:
            out.append((kind, value))
            idx += 1
            continue

        close = _find_close(segs, idx, pos + size, marker)
        if close is None:
            # Unmatched opener: keep one character literally and rescan the rest.
            out.append((TEXT, value[:pos + 1]))
            segs[idx] = (TEXT, value[pos + 1:])
            continue

        c_idx, c_pos = close
        if c_idx == idx:
            inner = [(TEXT, value[pos + size:c_pos])]
        else:
            inner = [(TEXT, value[pos + size:])] + segs[idx + 1:c_idx] + [(TEXT, segs[c_idx][1][:c_pos])]

        if _is_blank(inner):
            out.append((TEXT, value[:c_pos + size]))
        else:
            out.append((TEXT, value[:pos]))
            out.append((OPEN, open_tag))
            out.extend(inner)
            out.append((CLOSE, close_tag))
        segs[c_idx] = (TEXT, segs[c_idx][1][c_pos + size:])
        idx = c_idx
    return _merge(out)


def tokenize(text: str) -> list[Segment]:
    """Run every inline pass, in order, over one line of text."""
    segments = [(TEXT, text)]
    for match in (_match_image, _match_link, _match_code):
        segments = _atomic_pass(segments, match)
    for marker, open_tag, close_tag in EMPHASIS_PASSES:
        segments = _emphasis_pass(segments, marker, open_tag, close_tag)
    return segments


def render_inline(text: str) -> str:
    """Convert inline Markdown spans in text to escaped HTML."""
    return ''.join(escape_html(value) if kind == TEXT else value for kind, value in tokenize(text))


def plain_text(fragment: str) -> str:
    """Visible text of an HTML fragment produced by render_inline."""
    return html.unescape(TAG_RE.sub('', fragment)).strip()
