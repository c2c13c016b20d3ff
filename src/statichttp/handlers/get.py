"""
=============================================================================
GET HANDLER
=============================================================================

Resolves a path through the resource registry and answers with the
resource's content.

=============================================================================
FLOW
=============================================================================

    handle("/sub/logo.png", "v=3")
        │
        ├──► registry.lookup("/sub/logo.png")
        │        └── None ─────────────────────────────►  404, {}, b""
        │
        ├──► resource.mime(extension_to_mime)
        │        └── None ─────────────────────────────►  404, {}, b""
        │
        └──► resource.get_data("v=3")
                 └────────────────────────────────────►  200,
                                                         {"ContentType": "image/png"},
                                                         b"\x89PNG..."

A resource whose content type cannot be resolved is indistinguishable,
from the client's side, from a resource that does not exist.

=============================================================================
THE ContentType HEADER
=============================================================================

Successful responses carry exactly one header. Its name defaults to
"ContentType" (no hyphen), which is what existing clients of this server
expect. Pass header_name="Content-Type" to send the standard name.

=============================================================================
"""

import logging
from typing import Mapping, Optional

from ..http.mime_types import freeze_table
from ..http.response import HTTPResponse, ok, not_found
from ..resources.registry import ResourceRegistry


logger = logging.getLogger(__name__)


DEFAULT_CONTENT_TYPE_HEADER = "ContentType"


class GetRequestHandler:
    """
    Serves registry resources for GET requests.

    Usage:
        registry = ResourceRegistry("/srv/public")
        get = GetRequestHandler(DEFAULT_MIME_TYPES, registry)

        server.register_handler("GET", get)
    """

    def __init__(
        self,
        extension_to_mime: Mapping[str, str],
        resources: ResourceRegistry,
        header_name: str = DEFAULT_CONTENT_TYPE_HEADER,
    ):
        """
        Args:
            extension_to_mime: Extension → MIME table. Wrapped read-only.
            resources: Registry to resolve paths against.
            header_name: Name of the content type header on 200 responses.
        """
        self.extension_to_mime = freeze_table(extension_to_mime)
        self.resources = resources
        self.header_name = header_name

    def handle(self, path: str, query: Optional[str]) -> HTTPResponse:
        """
        Resolve path and build the response.

        Raises:
            OSError: If the resource's data cannot be read. The server turns
                     this into a 500.
        """
        resource = self.resources.lookup(path)
        if resource is None:
            logger.debug(f"No resource at {path}")
            return not_found()

        mime = resource.mime(self.extension_to_mime)
        if mime is None:
            logger.debug(f"No MIME type for {path} ({resource})")
            return not_found()

        return ok(resource.get_data(query), {self.header_name: mime})
