"""
Resource contract.

A resource is anything that can be served at a URL path. It answers two
questions:

    get_data(query)          → the bytes to send
    mime(extension_to_mime)  → the content type, or None if there is none

The contract is structural (typing.Protocol): any object with these two
methods is a resource, no base class required. The URL path a resource is
served at is held by the ResourceRegistry, never by the resource itself.

Guarantees every implementation must keep:

- mime() returns the same value on every call, whether or not get_data()
  was called in between.
- mime() returning None means "not servable"; the GET handler answers 404.
- Resources are shared by all connection threads, so they must not keep
  mutable per-request state.
"""

from typing import Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class Resource(Protocol):
    """Something that can be served at a URL path."""

    def get_data(self, query: Optional[str]) -> bytes:
        """Return the content. `query` is the raw query string, or None."""
        ...

    def mime(self, extension_to_mime: Mapping[str, str]) -> Optional[str]:
        """Return the MIME type using the given table, or None."""
        ...
