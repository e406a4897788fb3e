"""Markdown to HTML rendering with heading anchors, TOC and title extraction"""

import re
from typing import Optional

from stratawiki.core.frontmatter import split_front_matter, split_lines
from stratawiki.core.inline import plain_text, render_inline
from stratawiki.core.models import Heading, RenderResult
from stratawiki.core.toc import build_toc_html
from stratawiki.core.utils.escape import escape_attr, escape_html
from stratawiki.core.utils.slug import SlugRegistry


FENCE = '```'
LIST_ITEM_RE = re.compile(r'^(?P<indent>[ \t]*)(?:(?P<bullet>[-*+])|(?P<number>\d+)\.) (?P<content>.*)$')
TASK_MARKERS = {'[ ] ': False, '[x] ': True, '[X] ': True}
SEPARATOR_CHARS = set('|-: ')
RULE_CHARS = set('-*_')


def _indent_units(indent: str) -> int:
    """Tabs count as one unit each, spaces as one unit per four."""
    return indent.count('\t') + indent.count(' ') // 4


def _is_rule(trimmed: str) -> bool:
    return len(trimmed) >= 3 and len(set(trimmed)) == 1 and trimmed[0] in RULE_CHARS


def _heading_level(trimmed: str) -> int:
    """Number of leading '#' (1-6) when followed by a space, else 0."""
    level = len(trimmed) - len(trimmed.lstrip('#'))
    if 1 <= level <= 6 and trimmed[level:level + 1] == ' ':
        return level
    return 0


def _split_row(trimmed: str) -> list[str]:
    if trimmed.startswith('|'):
        trimmed = trimmed[1:]
    if trimmed.endswith('|'):
        trimmed = trimmed[:-1]
    return [cell.strip() for cell in trimmed.split('|')]


def _is_separator(trimmed: str) -> bool:
    return '-' in trimmed and set(trimmed) <= SEPARATOR_CHARS


class _BlockScanner:
    """Single-pass, line-oriented block parser. One instance per render call."""

    def __init__(self) -> None:
        self.out: list[str] = []
        self.headings: list[Heading] = []
        self.slugs = SlugRegistry()
        self.code: Optional[list[str]] = None     # open fenced block lines
        self.code_lang = ''
        self.lists: list[str] = []                 # open list tags, outermost first
        self.table: Optional[list[list[str]]] = None
        self.table_lines = 0

    def feed(self, line: str) -> None:
        trimmed = line.strip()

        if self.code is not None:
            if trimmed.startswith(FENCE):
                self._close_code()
            else:
                self.code.append(escape_html(line))
            return

        if trimmed.startswith(FENCE):
            self._close_blocks()
            self.code = []
            self.code_lang = trimmed[len(FENCE):].strip().split(' ')[0]
            return

        if self.table is not None:
            if '|' in trimmed:
                self._table_row(trimmed)
                return
            self._flush_table()

        if not trimmed:
            self._close_lists()
            return

        if _is_rule(trimmed):
            self._close_lists()
            self.out.append('<hr>')
            return

        level = _heading_level(trimmed)
        if level:
            self._close_lists()
            self._heading(level, trimmed[level + 1:].strip())
            return

        item = LIST_ITEM_RE.match(line)
        if item:
            self._list_item(item)
            return

        self._close_lists()
        if trimmed.startswith('> '):
            self.out.append(f'<blockquote><p>{render_inline(trimmed[2:].strip())}</p></blockquote>')
        elif '|' in trimmed:
            self.table = []
            self.table_lines = 0
            self._table_row(trimmed)
        else:
            self.out.append(f'<p>{render_inline(trimmed)}</p>')

    def finish(self) -> str:
        if self.code is not None:
            self._close_code()
        self._close_blocks()
        return '\n'.join(self.out)

    # --- headings ---

    def _heading(self, level: int, text: str) -> None:
        inner = render_inline(text)
        visible = plain_text(inner)
        slug = self.slugs.claim(visible, level)
        self.headings.append(Heading(level=level, id=slug, text=visible))
        anchor = escape_attr(slug)
        self.out.append(
            f'<h{level} id="{anchor}">{inner}'
            f'<a class="hlink" href="#{anchor}" aria-label="Link to this section">#</a></h{level}>'
        )

    # --- code ---

    def _close_code(self) -> None:
        cls = f' class="language-{escape_attr(self.code_lang)}"' if self.code_lang else ''
        body = ''.join(f'{line}\n' for line in self.code)
        self.out.append(f'<pre><code{cls}>{body}</code></pre>')
        self.code = None
        self.code_lang = ''

    # --- lists ---

    def _list_item(self, item: re.Match) -> None:
        tag = 'ol' if item.group('number') else 'ul'
        depth = min(_indent_units(item.group('indent')), len(self.lists))

        while len(self.lists) > depth + 1:
            self._close_list_level()
        if len(self.lists) == depth + 1 and self.lists[-1] != tag:
            self._close_list_level()

        if len(self.lists) == depth + 1:
            self.out[-1] += '</li>'
        else:
            start = int(item.group('number') or 1)
            self.out.append(f'<ol start="{start}">' if tag == 'ol' and start != 1 else f'<{tag}>')
            self.lists.append(tag)

        content = item.group('content')
        checked = None
        if item.group('bullet') == '-':
            for marker, state in TASK_MARKERS.items():
                if content.startswith(marker):
                    checked = state
                    content = content[len(marker):]
                    break

        if checked is None:
            self.out.append(f'<li>{render_inline(content.strip())}')
        else:
            box = '<input type="checkbox" checked disabled>' if checked else '<input type="checkbox" disabled>'
            self.out.append(f'<li class="task-list-item">{box} {render_inline(content.strip())}')

    def _close_list_level(self) -> None:
        self.out[-1] += f'</li></{self.lists.pop()}>'

    def _close_lists(self) -> None:
        while self.lists:
            self._close_list_level()

    # --- tables ---

    def _table_row(self, trimmed: str) -> None:
        self.table_lines += 1
        if self.table_lines == 2 and _is_separator(trimmed):
            return
        self.table.append(_split_row(trimmed))

    def _flush_table(self) -> None:
        header, *rows = self.table
        width = len(header)
        parts = ['<table><thead><tr>']
        parts.extend(f'<th>{render_inline(cell)}</th>' for cell in header)
        parts.append('</tr></thead><tbody>')
        for row in rows:
            cells = row[:width] + [''] * (width - len(row))
            parts.append('<tr>' + ''.join(f'<td>{render_inline(cell)}</td>' for cell in cells) + '</tr>')
        parts.append('</tbody></table>')
        self.out.append(''.join(parts))
        self.table = None
        self.table_lines = 0

    def _close_blocks(self) -> None:
        if self.table is not None:
            self._flush_table()
        self._close_lists()


class MarkdownRenderer:
    """Converts wiki Markdown into HTML, a TOC fragment and an optional title.

    Stateless between calls: render() never raises on malformed Markdown and
    may be shared across threads.
    """

    def render(self, raw_text: str) -> RenderResult:
        front = split_front_matter(raw_text)
        scanner = _BlockScanner()
        for line in split_lines(front.body):
            scanner.feed(line)
        html = scanner.finish()
        return RenderResult(
            html=html,
            toc_html=build_toc_html(scanner.headings),
            title=front.title or _first_h1(scanner.headings),
        )


def _first_h1(headings: list[Heading]) -> Optional[str]:
    return next((h.text for h in headings if h.level == 1 and h.text), None)


def render_markdown(raw_text: str) -> RenderResult:
    """Module-level shortcut for MarkdownRenderer().render."""
    return MarkdownRenderer().render(raw_text)
