"""Test helper utilities for the resource normalizer tests."""

from .registries import (
    API_URL,
    UnavailableSchemaRegistry,
    article_payload,
    blog_registry,
    school_registry,
    unavailable_registry,
)

__all__ = [
    "API_URL",
    "UnavailableSchemaRegistry",
    "article_payload",
    "blog_registry",
    "school_registry",
    "unavailable_registry",
]
