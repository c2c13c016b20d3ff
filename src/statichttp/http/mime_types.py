"""
=============================================================================
MIME TYPE TABLES
=============================================================================

Maps file extensions to the MIME type sent back with a resource.

The table is built ONCE at startup and never changes afterwards. It is
passed by reference into every MIME lookup, from every connection thread,
so it is exposed as a read-only mapping:

    ┌────────────────────────────────────────────────────────────────────┐
    │                    EXTENSION -> MIME LOOKUP                        │
    ├────────────────────────────────────────────────────────────────────┤
    │                                                                     │
    │   "/var/www/public/sub/logo.png"                                   │
    │                       │                                             │
    │                       ▼  extension_of()                             │
    │                    ".png"                                           │
    │                       │                                             │
    │                       ▼  table.get()                                │
    │                  "image/png"        (or None: no mapping → 404)     │
    │                                                                     │
    └────────────────────────────────────────────────────────────────────┘

Unlike most servers there is NO fallback type. An extension missing from
the table means the resource is not served at all.

=============================================================================
"""

from pathlib import PurePath
from types import MappingProxyType
from typing import Mapping, Optional, Union


# =============================================================================
# DEFAULT TABLE
# =============================================================================
#
# The table the server has always been deployed with. Keys are lowercase
# extensions including the dot. Lookups are case-sensitive: "LOGO.PNG" has
# the extension ".PNG", which is not in the table.
#
# Values are kept byte-for-byte (image/svg, text/json) so existing clients
# see exactly the same content types as before.
#
# =============================================================================

DEFAULT_MIME_TYPES: Mapping[str, str] = MappingProxyType({
    ".html": "text/html",
    ".png": "image/png",
    ".svg": "image/svg",
    ".webmanifest": "text/json",
    ".xml": "text/xml",
})


# =============================================================================
# WEB TABLE
# =============================================================================
#
# A broader table for serving a typical static site (styles, scripts,
# fonts, media). Selected with `mime_table="web"` in ServerConfig.
#
# =============================================================================

WEB_MIME_TYPES: Mapping[str, str] = MappingProxyType({
    # Text
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".json": "application/json",
    ".webmanifest": "application/manifest+json",
    ".xml": "application/xml",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",

    # Images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    ".avif": "image/avif",

    # Fonts
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",

    # Audio / video
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".mp4": "video/mp4",
    ".webm": "video/webm",

    # Documents and data
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".wasm": "application/wasm",
    ".map": "application/json",
})


MIME_TABLES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "default": DEFAULT_MIME_TYPES,
    "web": WEB_MIME_TYPES,
})


# =============================================================================
# PUBLIC FUNCTIONS
# =============================================================================

def extension_of(path: Union[str, PurePath]) -> str:
    """
    Extract the extension (with the dot) from a path, case preserved.

    Examples:
        >>> extension_of("/srv/public/index.html")
        '.html'

        >>> extension_of("LOGO.PNG")
        '.PNG'

        >>> extension_of("Makefile")
        ''
    """
    return PurePath(path).suffix


def lookup_mime(
    path: Union[str, PurePath],
    extension_to_mime: Mapping[str, str],
) -> Optional[str]:
    """
    Look up the MIME type for a path in the given table.

    Returns:
        The MIME type, or None when the extension has no mapping.
    """
    return extension_to_mime.get(extension_of(path))


def get_mime_table(name: str) -> Mapping[str, str]:
    """
    Get one of the built-in tables by name ("default" or "web").

    Raises:
        ValueError: If no table has that name.
    """
    try:
        return MIME_TABLES[name]
    except KeyError:
        raise ValueError(
            f"Unknown MIME table: {name!r}. "
            f"Choose one of: {', '.join(sorted(MIME_TABLES))}"
        ) from None


def freeze_table(extension_to_mime: Mapping[str, str]) -> Mapping[str, str]:
    """
    Wrap a caller-supplied table in a read-only view.

    Keys are copied exactly as given; ".PNG" and ".png" stay distinct.
    Tables that are already read-only views are returned as is.
    """
    if isinstance(extension_to_mime, MappingProxyType):
        return extension_to_mime
    return MappingProxyType(dict(extension_to_mime))
