"""
=============================================================================
MIME TYPE RESOLUTION
=============================================================================

Resolves a short type token into a full Content-Type value, the way
res.type() / res.content_type() expect:

    ┌────────────────────────────────────────────────────────────────────┐
    │                       ACCEPTED TOKENS                              │
    ├────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   "html"              → text/html          bare extension          │
    │   ".html"             → text/html          dotted extension        │
    │   "index.html"        → text/html          file name               │
    │   "/srv/app/a.JSON"   → application/json   path, any case          │
    │   "unknown"           → application/octet-stream                   │
    │                                                                     │
    └────────────────────────────────────────────────────────────────────┘

Tokens that already contain a "/" never reach this module: the response
uses them verbatim.

=============================================================================
"""

from pathlib import PurePosixPath


MIME_TYPES = {
    # text
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".json": "application/json",
    ".map": "application/json",
    ".xml": "application/xml",
    ".txt": "text/plain",
    ".text": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".csv": "text/csv",
    ".yaml": "text/yaml",
    ".yml": "text/yaml",

    # images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    ".bmp": "image/bmp",

    # fonts
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",

    # audio / video
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".mp4": "video/mp4",
    ".webm": "video/webm",

    # documents and archives
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".gz": "application/gzip",
    ".tar": "application/x-tar",
    ".wasm": "application/wasm",
    ".bin": "application/octet-stream",

    # forms
    ".form": "application/x-www-form-urlencoded",
    ".urlencoded": "application/x-www-form-urlencoded",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def _extension(token: str) -> str:
    """Normalize a bare extension, dotted extension or path to ".ext"."""
    token = token.strip().lower()
    suffix = PurePosixPath(token).suffix
    if suffix:
        return suffix
    # "html" or ".html" (PurePosixPath treats a leading dot as a stem)
    return "." + token.lstrip(".")


def lookup(token: str) -> str:
    """
    Resolve a type token to a MIME type.

    Args:
        token: Extension ("json"), dotted extension (".json") or a path.

    Returns:
        The MIME type string.

    Examples:
        >>> lookup("txt")
        'text/plain'
        >>> lookup("photo.PNG")
        'image/png'
        >>> lookup("nope")
        'application/octet-stream'
    """
    return MIME_TYPES.get(_extension(token), DEFAULT_MIME_TYPE)
