"""
In-memory resources.

For content that does not live on disk: generated pages, health checks,
a robots.txt assembled at startup. Registered by hand with
ResourceRegistry.register_resource().

    registry.register_resource(
        "/robots.txt",
        StaticResource(b"User-agent: *\nDisallow:\n", extension=".txt"),
    )
"""

from typing import Mapping, Optional, Union


class StaticResource:
    """
    A fixed payload with a fixed content type.

    The content type comes either from an explicit `mime_type`, which is
    returned as is, or from an `extension` looked up in the server's MIME
    table like a file would be.
    """

    __slots__ = ("data", "extension", "mime_type")

    def __init__(
        self,
        data: Union[bytes, str],
        extension: Optional[str] = None,
        mime_type: Optional[str] = None,
    ):
        if extension is None and mime_type is None:
            raise ValueError("StaticResource needs an extension or a mime_type")

        self.data = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self.extension = extension
        self.mime_type = mime_type

    def get_data(self, query: Optional[str] = None) -> bytes:
        return self.data

    def mime(self, extension_to_mime: Mapping[str, str]) -> Optional[str]:
        if self.mime_type is not None:
            return self.mime_type
        return extension_to_mime.get(self.extension)

    def __repr__(self) -> str:
        kind = self.mime_type or self.extension
        return f"StaticResource({len(self.data)} bytes, {kind!r})"
