"""Integration tests for the stratawiki CLI"""

import json

import pytest
from typer.testing import CliRunner

from stratawiki.cli.cli import app


runner = CliRunner()


@pytest.fixture(name="page")
def page_fixture(tmp_path):
    path = tmp_path / "page.md"
    path.write_text("---\ntitle: Hello\n---\n# Hello\n\nSome *text*.\n", encoding="utf-8")
    return path


def test_help():
    """--help lists the commands."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("serve", "render", "search"):
        assert name in result.output


def test_render_html(page):
    """render prints the page HTML."""
    result = runner.invoke(app, ["render", str(page)])
    assert result.exit_code == 0
    assert '<h1 id="hello">' in result.output
    assert "<em>text</em>" in result.output


def test_render_title(page):
    """--title prints only the title."""
    result = runner.invoke(app, ["render", str(page), "--title"])
    assert result.exit_code == 0
    assert result.output.strip() == "Hello"


def test_render_toc(page):
    """--toc prints the table of contents."""
    result = runner.invoke(app, ["render", str(page), "--toc"])
    assert result.exit_code == 0
    assert '<a href="#hello">Hello</a>' in result.output


def test_render_json(page):
    """--json prints every RenderResult field."""
    result = runner.invoke(app, ["render", str(page), "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert set(data) == {"html", "toc_html", "title"}
    assert data["title"] == "Hello"


def test_render_missing_file(tmp_path):
    """An unreadable file exits 1 with an error."""
    result = runner.invoke(app, ["render", str(tmp_path / "nope.md")])
    assert result.exit_code == 1
    assert "Cannot read" in result.output


def test_search_results(wiki_dir):
    """search prints matching paths."""
    result = runner.invoke(app, ["search", "python", "--wiki-dir", str(wiki_dir)])
    assert result.exit_code == 0
    assert "notes/python.md" in result.output
    assert "Found 1 result(s)" in result.output


def test_search_no_results(wiki_dir):
    """No matches exits 1."""
    result = runner.invoke(app, ["search", "zzz", "--wiki-dir", str(wiki_dir)])
    assert result.exit_code == 1
    assert "No results." in result.output


def test_serve_missing_wiki_dir(tmp_path):
    """serve refuses to start without a wiki directory."""
    result = runner.invoke(app, ["serve", "--wiki-dir", str(tmp_path / "none")])
    assert result.exit_code == 1
    assert "Wiki directory not found" in result.output


def test_serve_runs_uvicorn(wiki_dir, monkeypatch):
    """serve hands the app and bind settings to uvicorn."""
    calls = {}

    def fake_run(app, host, port, log_level):
        calls.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr("stratawiki.cli.commands.uvicorn.run", fake_run)
    result = runner.invoke(app, ["serve", "--wiki-dir", str(wiki_dir), "--port", "8123", "--log-level", "debug"])
    assert result.exit_code == 0
    assert calls["port"] == 8123
    assert calls["log_level"] == "debug"
    assert calls["app"].state.wiki.settings.wiki_dir == str(wiki_dir)
