"""Request handler that normalizes responses coming back from the next handler.

Handlers form a chain: each receives a context and a ``next_handler`` callable
that performs the rest of the request (ultimately the HTTP fetch, which lives
outside this package). The normalize handler post-processes the fetched
content into a canonical document.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from resource_normalizer.logging import get_logger
from resource_normalizer.normalization.service import ResourceNormalizer, get_normalizer

logger = get_logger(__name__, component="handler")

# Wire relationship names whose resource type differs from the name
DEFAULT_RELATIONSHIP_TYPE_MAP: Dict[str, str] = {
    "author": "user",
    "comments": "comment",
}


@dataclass
class HandlerContext:
    """Context passed down the handler chain."""

    request: Any


@dataclass
class HandlerResponse:
    """What the next handler returns: fetched content and the request it answered."""

    content: Any
    request: Any


def _unpack_response(response: Any) -> tuple:
    if isinstance(response, Mapping):
        return response["content"], response["request"]
    if isinstance(response, tuple):
        content, request = response
        return content, request
    return response.content, response.request


class NormalizeHandler:
    """Normalize fetched content with a fixed relationship type map.

    Attributes:
        relationship_type_map: Relationship name -> canonical type
        normalizer: ResourceNormalizer used for every response
    """

    def __init__(
        self,
        relationship_type_map: Optional[Mapping] = None,
        normalizer: Optional[ResourceNormalizer] = None,
    ):
        """Initialize NormalizeHandler.

        Args:
            relationship_type_map: Defaults to DEFAULT_RELATIONSHIP_TYPE_MAP
            normalizer: Defaults to the shared ResourceNormalizer
        """
        self.relationship_type_map = dict(
            DEFAULT_RELATIONSHIP_TYPE_MAP if relationship_type_map is None else relationship_type_map
        )
        self.normalizer = normalizer or get_normalizer()

    def request(self, context: Any, next_handler: Callable[[Any], Any]) -> Dict[str, Any]:
        """Run the rest of the chain and normalize its content.

        Args:
            context: Object with a ``request`` attribute (e.g. HandlerContext)
            next_handler: Callable taking the request and returning a
                HandlerResponse, a ``(content, request)`` tuple or a mapping
                with ``content`` and ``request`` keys

        Returns:
            Canonical document fragment

        Raises:
            Whatever next_handler or the normalizer raises
        """
        content, request = _unpack_response(next_handler(context.request))
        logger.debug(
            "Normalizing handler response",
            extra={"event": "handler.normalize.started", "request_url": getattr(request, "url", None)},
        )
        return self.normalizer.normalize(content, request, self.relationship_type_map)
