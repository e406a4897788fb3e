"""Unit tests for core/render.py"""

import pytest

from stratawiki.core.models import RenderResult
from stratawiki.core.render import MarkdownRenderer, render_markdown


@pytest.fixture(name="renderer")
def renderer_fixture() -> MarkdownRenderer:
    return MarkdownRenderer()


# --- headings ---

def test_heading_anchor_and_toc(renderer):
    """A heading gets a slug id, a self link and a TOC entry."""
    result = renderer.render("# Hello World")
    assert result.html == (
        '<h1 id="hello-world">Hello World'
        '<a class="hlink" href="#hello-world" aria-label="Link to this section">#</a></h1>'
    )
    assert '<a href="#hello-world">' in result.toc_html


def test_duplicate_headings_get_suffixes(renderer):
    """Repeated heading text yields unique ids."""
    html = renderer.render("## Intro\n## Intro\n## Intro").html
    assert 'id="intro"' in html
    assert 'id="intro-1"' in html
    assert 'id="intro-2"' in html


def test_heading_with_inline_markup(renderer):
    """Inline markup renders inside the heading; slug and TOC use the visible text."""
    result = renderer.render("# Hello **World**")
    assert result.html.startswith('<h1 id="hello-world">Hello <strong>World</strong><a')
    assert '<a href="#hello-world">Hello World</a>' in result.toc_html


def test_heading_without_alphanumerics(renderer):
    """An empty slug falls back to h<level>."""
    assert renderer.render("## ???").html.startswith('<h2 id="h2">???')


def test_unicode_heading_slug(renderer):
    """Unicode letters are kept in slugs."""
    assert 'id="café-olé"' in renderer.render("# Café Olé").html


@pytest.mark.parametrize("text", ["####### seven", "#nospace"])
def test_not_a_heading(renderer, text):
    """Seven hashes or no space after the hashes is a paragraph."""
    assert renderer.render(text).html == f"<p>{text}</p>"


def test_no_headings_no_toc(renderer):
    """The TOC is empty when there are no headings."""
    assert renderer.render("just text").toc_html == ""


# --- title ---

def test_title_from_first_h1(renderer):
    """Title falls back to the first h1."""
    assert renderer.render("## Sub\n# Main\n# Other").title == "Main"


def test_title_none_without_h1(renderer):
    """No front matter title and no h1 means no title."""
    assert renderer.render("## Only h2").title is None


def test_front_matter_title_wins(renderer):
    """A front matter title beats the first h1."""
    assert renderer.render("---\ntitle: 'FM'\n---\n# Heading").title == "FM"


def test_unclosed_front_matter_rendered_as_body(renderer):
    """Without a closing delimiter the front matter lines are rendered."""
    result = renderer.render("---\ntitle: X\n# Heading")
    assert result.html.startswith("<hr>")
    assert "<p>title: X</p>" in result.html
    assert result.title == "Heading"


def test_front_matter_end_to_end(renderer):
    """Front matter, heading, paragraph and list render together."""
    text = "---\ntitle: My Page\n---\n# My Page\n\nSome **bold** text.\n\n- one\n- two\n"
    result = renderer.render(text)
    assert result.title == "My Page"
    assert result.html.count('<h1 id="my-page">') == 1
    assert "<p>Some <strong>bold</strong> text.</p>" in result.html
    assert result.html.count("<ul>") == 1
    assert result.html.count("<li>") == 2
    assert "title:" not in result.html
    assert result.toc_html.count("<a href=") == 1


def test_front_matter_scenario_without_blank_lines(renderer):
    """Quoted title, heading, paragraph and list back to back."""
    text = "---\ntitle: \"My Page\"\n---\n# My Page\nSome **bold** text.\n- item one\n- item two"
    result = renderer.render(text)
    assert result.title == "My Page"
    assert result.html.count('<h1 id="my-page">') == 1
    assert "<p>Some <strong>bold</strong> text.</p>\n<ul>\n<li>item one</li>\n<li>item two</li></ul>" in result.html
    assert result.toc_html.count("<a href=") == 1
    assert '<a href="#my-page">' in result.toc_html


# --- code ---

def test_code_block_isolated(renderer):
    """Markdown inside a fenced block is not interpreted."""
    html = renderer.render("```\n*not italic*\n# not a heading\n```").html
    assert html == "<pre><code>*not italic*\n# not a heading\n</code></pre>"


def test_code_block_language_and_escaping(renderer):
    """The fence info word becomes a language class; content is escaped."""
    html = renderer.render("```python\nx = 1 < 2\n```").html
    assert html == '<pre><code class="language-python">x = 1 &lt; 2\n</code></pre>'


def test_unterminated_code_block_closed(renderer):
    """An open fence is closed at end of input."""
    html = renderer.render("```\ncode").html
    assert html == "<pre><code>code\n</code></pre>"


def test_code_block_closes_list(renderer):
    """A fence ends any open list first."""
    html = renderer.render("- a\n```\nx\n```").html
    assert html == "<ul>\n<li>a</li></ul>\n<pre><code>x\n</code></pre>"


# --- lists ---

def test_nested_list(renderer):
    """Indented items nest inside the parent item."""
    html = renderer.render("- a\n    - b\n- c").html
    assert html == "<ul>\n<li>a\n<ul>\n<li>b</li></ul></li>\n<li>c</li></ul>"


def test_list_depth_clamped(renderer):
    """Over-indented items nest only one level deeper."""
    html = renderer.render("- a\n            - b").html
    assert html.count("<ul>") == 2
    assert html.count("</ul>") == 2


def test_ordered_list_start(renderer):
    """Ordered lists not starting at 1 carry a start attribute."""
    assert '<ol start="3">' in renderer.render("3. x\n4. y").html
    assert "<ol>" in renderer.render("1. x\n2. y").html


def test_list_type_switch(renderer):
    """Changing bullet type at the same depth starts a new list."""
    html = renderer.render("- a\n1. b").html
    assert html == "<ul>\n<li>a</li></ul>\n<ol>\n<li>b</li></ol>"


def test_task_list(renderer):
    """- [ ] and - [x] render disabled checkboxes."""
    html = renderer.render("- [ ] todo\n- [x] done").html
    assert '<li class="task-list-item"><input type="checkbox" disabled> todo</li>' in html
    assert '<li class="task-list-item"><input type="checkbox" checked disabled> done</li>' in html


def test_blank_line_closes_list(renderer):
    """A blank line ends the list."""
    assert renderer.render("- a\n\n- b").html.count("<ul>") == 2


def test_paragraph_closes_list(renderer):
    """A non-list line ends the list."""
    html = renderer.render("- a\ntext").html
    assert html == "<ul>\n<li>a</li></ul>\n<p>text</p>"


# --- rules, quotes, paragraphs ---

@pytest.mark.parametrize("text", ["---", "***", "___", "-----"])
def test_horizontal_rule(renderer, text):
    """Three or more of the same rule char make an <hr>."""
    assert renderer.render(text).html == "<hr>"


def test_short_rule_is_paragraph(renderer):
    """Two dashes are plain text."""
    assert renderer.render("--").html == "<p>--</p>"


def test_rule_closes_list(renderer):
    """A rule ends the list before it."""
    assert renderer.render("- a\n---").html == "<ul>\n<li>a</li></ul>\n<hr>"


def test_blockquote(renderer):
    """'> ' lines become blockquotes with inline markup."""
    html = renderer.render("> quoted *text*").html
    assert html == "<blockquote><p>quoted <em>text</em></p></blockquote>"


def test_blockquote_with_pipe(renderer):
    """A quoted line containing a pipe stays a blockquote."""
    assert renderer.render("> a | b").html == "<blockquote><p>a | b</p></blockquote>"


def test_blank_lines_separate_paragraphs(renderer):
    """Blank lines render nothing themselves."""
    assert renderer.render("a\n\nb").html == "<p>a</p>\n<p>b</p>"


def test_raw_html_escaped(renderer):
    """Raw HTML in the source is shown as text."""
    html = renderer.render("<script>alert(1)</script>").html
    assert html == "<p>&lt;script&gt;alert(1)&lt;/script&gt;</p>"


# --- tables ---

def test_table_rows_padded(renderer):
    """Short body rows are padded to the header width."""
    html = renderer.render("| a | b | c |\n|---|---|---|\n| 1 | 2 |").html
    assert "<th>a</th><th>b</th><th>c</th>" in html
    assert "<tr><td>1</td><td>2</td><td></td></tr>" in html


def test_table_rows_truncated(renderer):
    """Extra body cells are dropped."""
    html = renderer.render("| a |\n|---|\n| 1 | 2 |").html
    assert "<tr><td>1</td></tr>" in html


def test_table_without_separator(renderer):
    """A second row that is not a separator is a body row."""
    html = renderer.render("| a | b |\n| 1 | 2 |").html
    assert "<tr><td>1</td><td>2</td></tr>" in html


def test_table_cells_inline(renderer):
    """Cells get inline rendering."""
    html = renderer.render("| **h** |\n|---|\n| `c` |").html
    assert "<th><strong>h</strong></th>" in html
    assert "<td><code>c</code></td>" in html


def test_table_ends_at_non_pipe_line(renderer):
    """A line without a pipe flushes the table."""
    html = renderer.render("| a |\n|---|\n| 1 |\nafter").html
    assert html.endswith("</tbody></table>\n<p>after</p>")


# --- robustness ---

@pytest.mark.parametrize("text", [
    "", "***", "[", "![", "|", "```", "- ", "\t- x", "| a |\n|---|", "**", "`", "> ", "1.",
])
def test_never_raises(renderer, text):
    """Malformed input still renders."""
    assert isinstance(renderer.render(text), RenderResult)


def test_render_markdown_shortcut():
    """render_markdown matches MarkdownRenderer().render."""
    assert render_markdown("# X").html == MarkdownRenderer().render("# X").html


def test_only_newline_splits_lines(renderer):
    """Unicode line separators inside a line do not start a new block."""
    assert renderer.render("para\u2028two").html == "<p>para\u2028two</p>"


def test_crlf_line_endings(renderer):
    """Carriage returns are dropped from line ends."""
    html = renderer.render("# A\r\n- x\r\n").html
    assert "\r" not in html
    assert "<ul>\n<li>x</li></ul>" in html
