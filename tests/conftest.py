"""Root test configuration: a small on-disk wiki shared by service, component and web tests

Layout of the wiki fixture
--------------------------
    wiki/
        index.md            "# Home" + welcome paragraph
        guide.md            "# Guide" with two sections
        image.png           binary asset
        .hidden.md          never listed or searched
        empty/              directory without an index page
        notes/
            README.md       "# Notes"
            python.md       "# Python" tips page
            deep/
                deeper.md   nested page
"""

from pathlib import Path

import pytest


PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"

WIKI_FILES = {
    "index.md": "# Home\n\nWelcome to the wiki.\n",
    "guide.md": "# Guide\n\nInstall with pip.\n\n## Setup\n\nRun the server.\n\n## Usage\n\nOpen a browser.\n",
    ".hidden.md": "secret page\n",
    "notes/README.md": "# Notes\n\nAll the notes.\n",
    "notes/python.md": "# Python\n\nPython tips and <tricks>.\n",
    "notes/deep/deeper.md": "# Deeper\n\nNested page.\n",
}


@pytest.fixture(name="wiki_dir")
def wiki_dir_fixture(tmp_path) -> Path:
    root = tmp_path / "wiki"
    for rel, text in WIKI_FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    (root / "image.png").write_bytes(PNG_BYTES)
    (root / "empty").mkdir()
    return root


@pytest.fixture(name="static_dir")
def static_dir_fixture(tmp_path) -> Path:
    root = tmp_path / "static"
    (root / "css").mkdir(parents=True)
    (root / "css" / "site.css").write_text("body { color: red; }\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml is picked up."""
    monkeypatch.chdir(tmp_path)
