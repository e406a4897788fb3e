"""Error types surfaced by the file, search and web layers"""


class WikiError(Exception):
    """Base error; status_code is the HTTP status the web layer answers with."""
    status_code = 500
    title = "Server Error"


class NotFoundError(WikiError):
    status_code = 404
    title = "Page Not Found"


class InvalidPathError(WikiError):
    status_code = 400
    title = "Invalid Path"


class WikiIOError(WikiError):
    """A file exists but could not be read."""
    status_code = 500
    title = "I/O Error"
