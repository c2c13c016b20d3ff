"""
=============================================================================
RESOURCE REGISTRY
=============================================================================

Maps URL paths to resources. Built once at startup by walking the public
directory, read by every connection thread afterwards.

=============================================================================
DISCOVERY
=============================================================================

    public/                         Registry
    ├── index.html        ───►      "/"            → FileResource(public/index.html)
    ├── a.html            ───►      "/index.html"  → FileResource(public/index.html)
    └── sub/                        "/a.html"      → FileResource(public/a.html)
        └── b.png         ───►      "/sub/b.png"   → FileResource(public/sub/b.png)

- "/" is ALWAYS bound to <root>/index.html, even if that file does not
  exist yet. The request for "/" then simply finds no file (404).
- Every non-directory entry below the root is bound at "/" + its path
  relative to the root, with "/" separators on every platform.
- Directories are walked but never bound. "GET /sub" is a 404.

Paths are matched exactly. "/sub/b.png" and "/sub//b.png" are different
keys, and there is no ".." handling because only discovered (or explicitly
registered) paths are ever served: a request can never reach a file that
was not found under the root.

=============================================================================
THREAD SAFETY
=============================================================================

There is no lock. The registry is written during startup and frozen
when the server starts; from then on it is only read, and concurrent
dict reads need no synchronization. register_resource() after freeze()
raises RuntimeError.

=============================================================================
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from .base import Resource
from .file import FileResource


logger = logging.getLogger(__name__)


INDEX_FILE = "index.html"


class ResourceRegistry:
    """
    URL path → Resource mapping.

    Usage:
        # Discover everything under a directory
        registry = ResourceRegistry("/srv/public")

        # Or start empty and register by hand
        registry = ResourceRegistry()
        registry.register_resource("/hello", StaticResource(b"hi", mime_type="text/plain"))

        registry.lookup("/hello")     # → StaticResource
        registry.lookup("/missing")   # → None
    """

    def __init__(self, root_dir: Optional[Union[str, Path]] = None):
        """
        Build the registry.

        Args:
            root_dir: Directory to discover files under. None builds an
                      empty registry (no "/" binding either).

        Raises:
            ValueError: If root_dir is given but is not a directory.
        """
        self._resources: Dict[str, Resource] = {}
        self._frozen = False
        self.root_dir: Optional[Path] = None

        if root_dir is not None:
            self.root_dir = Path(root_dir)
            if not self.root_dir.is_dir():
                raise ValueError(f"Root directory does not exist: {root_dir}")
            self._discover(self.root_dir)

    def _discover(self, root: Path) -> None:
        """Bind "/" and every file below root."""
        self._resources["/"] = FileResource(root / INDEX_FILE)

        for entry in root.rglob("*"):
            if entry.is_dir():
                continue
            relative = entry.relative_to(root).as_posix()
            self._resources[f"/{relative}"] = FileResource(entry)

        logger.info(f"Discovered {len(self._resources) - 1} files under {root}")

    # =========================================================================
    # REGISTRATION
    # =========================================================================

    def register_resource(self, path: str, resource: Resource) -> None:
        """
        Bind a resource to a path, replacing any previous binding.

        Raises:
            RuntimeError: If the registry has been frozen.
        """
        if self._frozen:
            raise RuntimeError(
                f"Cannot register {path!r}: registry is frozen once the server starts"
            )
        if path in self._resources:
            logger.debug(f"Replacing resource at {path}")
        self._resources[path] = resource

    def freeze(self) -> None:
        """Make the registry read-only. Called by the server on start."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def lookup(self, path: str) -> Optional[Resource]:
        """Get the resource bound to path, or None. Never raises."""
        return self._resources.get(path)

    def paths(self) -> list[str]:
        """All bound paths, sorted."""
        return sorted(self._resources)

    def __contains__(self, path: object) -> bool:
        return path in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[str]:
        return iter(self._resources)

    def __repr__(self) -> str:
        return f"ResourceRegistry(root_dir={self.root_dir!r}, resources={len(self)})"
