"""Slug generation for heading anchors"""


def slugify(text: str) -> str:
    """Lowercase text, map everything but alphanumerics to '-', trim trailing '-'."""
    chars = [c if c.isalnum() else '-' for c in text.lower()]
    return ''.join(chars).rstrip('-')


class SlugRegistry:
    """Hands out document-unique heading ids.

    Repeats of a base slug get -1, -2, ... in order. Counters are kept per base
    slug and only move forward, so a suffix is never handed out twice.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._used: set[str] = set()

    def claim(self, text: str, level: int) -> str:
        base = slugify(text) or f"h{level}"
        count = self._counts.get(base, 0)
        candidate = base if count == 0 else f"{base}-{count}"
        while candidate in self._used:
            count += 1
            candidate = f"{base}-{count}"
        self._counts[base] = count + 1
        self._used.add(candidate)
        return candidate
