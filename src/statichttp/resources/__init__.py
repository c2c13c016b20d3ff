"""
Resources: what can be served, and where.

    base.py       Resource protocol (get_data, mime)
    file.py       FileResource - a file on disk, read fresh every time
    memory.py     StaticResource - fixed bytes held in memory
    registry.py   ResourceRegistry - URL path → Resource, built by discovery
"""

from .base import Resource
from .file import FileResource
from .memory import StaticResource
from .registry import ResourceRegistry, INDEX_FILE

__all__ = [
    "Resource",
    "FileResource",
    "StaticResource",
    "ResourceRegistry",
    "INDEX_FILE",
]
