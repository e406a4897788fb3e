"""Data models passed between the renderer, services and page assembly"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel


@dataclass
class Heading:
    """One heading collected during a render; scratch state, not returned."""
    level: int      # 1-6
    id:    str      # unique within the document
    text:  str      # plain text, markers removed


class RenderResult(BaseModel):
    """Everything the page-assembly layer needs from one render call."""
    html:     str
    toc_html: str = ""              # empty when the document has no headings
    title:    Optional[str] = None


class DirEntry(BaseModel):
    name:   str
    is_dir: bool
    path:   str                     # posix path relative to the wiki root


class SearchResult(BaseModel):
    title:     str
    path:      str
    excerpt:   str
    relevance: float


class PageContext(BaseModel):
    """Typed context for the HTML shell template. Fragments are trusted HTML."""
    title:   str
    content: str
    sidebar: str = ""
    fab:     str = ""
