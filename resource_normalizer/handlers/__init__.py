"""Request handlers that plug the normalizer into a request pipeline."""

from .normalize import (
    DEFAULT_RELATIONSHIP_TYPE_MAP,
    HandlerContext,
    HandlerResponse,
    NormalizeHandler,
)

__all__ = [
    "DEFAULT_RELATIONSHIP_TYPE_MAP",
    "HandlerContext",
    "HandlerResponse",
    "NormalizeHandler",
]
