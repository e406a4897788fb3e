"""Front matter extraction for wiki pages"""

from dataclasses import dataclass, field
from typing import Optional


DELIMITER = '---'
QUOTES = ('"', "'")


@dataclass(frozen=True)
class FrontMatter:
    meta: dict[str, str] = field(default_factory=dict)
    body: str = ''

    @property
    def title(self) -> Optional[str]:
        return self.meta.get('title') or None


def split_lines(text: str) -> list[str]:
    """Split on newlines only, dropping a trailing carriage return from each line."""
    return [line.removesuffix('\r') for line in text.split('\n')]


def _unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTES:
        return value[1:-1]
    return value


def split_front_matter(text: str) -> FrontMatter:
    """Split a leading '---' block of key: value lines from the body.

    Without a closing delimiter the whole text is body and no metadata is read.
    """
    text = text.lstrip('\ufeff')
    lines = split_lines(text)
    if not lines or lines[0].strip() != DELIMITER:
        return FrontMatter(body=text)

    end = next((i for i in range(1, len(lines)) if lines[i].strip() == DELIMITER), None)
    if end is None:
        return FrontMatter(body=text)

    meta: dict[str, str] = {}
    for line in lines[1:end]:
        if ':' not in line:
            continue
        key, value = line.split(':', 1)
        key = key.strip().lower()
        if key:
            meta[key] = _unquote(value.strip()).strip()
    return FrontMatter(meta=meta, body='\n'.join(lines[end + 1:]))
