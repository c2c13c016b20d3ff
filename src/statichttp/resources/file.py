"""
=============================================================================
FILE RESOURCE
=============================================================================

A resource backed by a path on disk.

    FileResource("/srv/public/sub/logo.png")
        │
        ├──► mime(table)      ".png" → table[".png"]  → "image/png"
        │
        └──► get_data(query)  open → read → close      → b"\x89PNG..."

Nothing is cached. Every get_data() call opens and reads the file again,
so edits on disk show up on the next request, and concurrent requests for
the same file each do their own read.

The file is NOT checked at construction time. The "/" → index.html
binding is created even when index.html does not exist; existence is
only checked when the resource is actually asked for.

=============================================================================
"""

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from ..http.mime_types import lookup_mime


logger = logging.getLogger(__name__)


class FileResource:
    """
    Serves the raw bytes of a single file.

    Attributes:
        path: Filesystem path of the backing file.
    """

    __slots__ = ("path",)

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def get_data(self, query: Optional[str] = None) -> bytes:
        """
        Read the file fresh from disk. The query is ignored.

        Raises:
            OSError: If the file vanished or cannot be read. The server
                     answers 500 for these.
        """
        return self.path.read_bytes()

    def mime(self, extension_to_mime: Mapping[str, str]) -> Optional[str]:
        """
        Look up the MIME type by file extension.

        Returns None if the extension is not in the table, or if the path
        is not an existing regular file (e.g. the root has no index.html).
        """
        if not self.path.is_file():
            logger.debug(f"No file behind resource: {self.path}")
            return None
        return lookup_mime(self.path, extension_to_mime)

    def __repr__(self) -> str:
        return f"FileResource({str(self.path)!r})"

    def __str__(self) -> str:
        return str(self.path)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FileResource):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)
