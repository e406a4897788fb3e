"""Filesystem access rooted at the wiki directory"""

import datetime as dt
import logging
import mimetypes
from pathlib import Path, PurePosixPath

from stratawiki.core.models import DirEntry
from stratawiki.core.utils.escape import escape_html
from stratawiki.errors import InvalidPathError, NotFoundError, WikiIOError


MD_EXTENSIONS = {'.md'}
TEXT_TYPES = {'application/javascript', 'application/json', 'image/svg+xml'}


def normalize_path(path: str) -> str:
    """Trim slashes and drop empty / '.' segments from a request path."""
    return '/'.join(part for part in path.strip('/').split('/') if part and part != '.')


def ensure_safe_path(path: str) -> PurePosixPath:
    """Reject parent-directory segments and absolute paths."""
    pure = PurePosixPath(path)
    if pure.is_absolute() or '..' in pure.parts or '\\' in path:
        raise InvalidPathError(path)
    return pure


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() in MD_EXTENSIONS


def content_type_for(path: Path) -> str:
    """Content type for a served file; text types carry a utf-8 charset."""
    if is_markdown(path):
        return 'text/markdown; charset=utf-8'
    guessed, _ = mimetypes.guess_type(path.name)
    if guessed is None:
        return 'application/octet-stream'
    if guessed.startswith('text/') or guessed in TEXT_TYPES:
        return f'{guessed}; charset=utf-8'
    return guessed


def last_modified_html(path: Path) -> str:
    """'Last modified' paragraph with an RFC 3339 UTC timestamp; empty if unavailable."""
    try:
        mtime = path.stat().st_mtime
    except OSError:
        return ''
    stamp = dt.datetime.fromtimestamp(int(mtime), tz=dt.timezone.utc).isoformat().replace('+00:00', 'Z')
    return f'<p class="meta">Last modified: {escape_html(stamp)}</p>'


class FileService:
    """Lists and reads files below base_dir; every path argument is relative to it."""

    def __init__(self, base_dir: Path, logger: logging.Logger = None) -> None:
        self.base_dir = Path(base_dir)
        self.log = logger or logging.getLogger(__name__)

    def resolve(self, rel: str) -> Path:
        """Absolute path for rel; raises InvalidPathError when it escapes base_dir."""
        rel = normalize_path(str(rel))
        pure = ensure_safe_path(rel)
        return self.base_dir.joinpath(*pure.parts)

    def is_file(self, rel: str) -> bool:
        """True when rel names a regular file below base_dir."""
        return self.resolve(rel).is_file()

    def list_directory(self, rel: str = '') -> list[DirEntry]:
        """Visible entries of a directory: directories first, then files, case-insensitive."""
        full = self.resolve(rel)
        if not full.is_dir():
            raise NotFoundError(rel)
        try:
            children = list(full.iterdir())
        except OSError as e:
            self.log.error("Failed to list %s: %s", full, e)
            raise WikiIOError(str(e)) from e

        entries = [
            DirEntry(
                name=child.name,
                is_dir=child.is_dir(),
                path=child.relative_to(self.base_dir).as_posix(),
            )
            for child in children
            if not child.name.startswith('.')
        ]
        entries.sort(key=lambda e: (not e.is_dir, e.name.lower()))
        return entries

    def read_file(self, rel: str) -> str:
        full = self.resolve(rel)
        if not full.is_file():
            raise NotFoundError(rel)
        try:
            return full.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            self.log.error("Failed to read %s: %s", full, e)
            raise WikiIOError(str(e)) from e

    def read_bytes(self, rel: str) -> bytes:
        full = self.resolve(rel)
        if not full.is_file():
            raise NotFoundError(rel)
        try:
            return full.read_bytes()
        except OSError as e:
            self.log.error("Failed to read %s: %s", full, e)
            raise WikiIOError(str(e)) from e

    def iter_markdown(self, rel: str = ''):
        """Yield relative posix paths of every visible .md file below rel, depth first."""
        for entry in self.list_directory(rel):
            if entry.is_dir:
                yield from self.iter_markdown(entry.path)
            elif is_markdown(Path(entry.name)):
                yield entry.path
