"""Content-type lookup by file extension."""

import mimetypes
from pathlib import PurePath

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Pinned so results do not depend on the host's mime.types files
CONTENT_TYPES: dict[str, str] = {
    ".css": "text/css",
    ".html": "text/html",
    ".js": "application/javascript",
    ".json": "application/json",
    ".txt": "text/plain",
    ".svg": "image/svg+xml",
}


def get_content_type(path: str | PurePath) -> str:
    """Return the content type for *path* based on its extension."""
    suffix = PurePath(path).suffix.lower()
    if suffix in CONTENT_TYPES:
        return CONTENT_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(f"file{suffix}") if suffix else (None, None)
    return guessed or DEFAULT_CONTENT_TYPE
