"""Normalization engine for converting raw API payloads into canonical documents.

This module provides:
- ResourceNormalizer / normalize_resource: the single entry point
- RequestContext: schema registry + request URL for a call
- Inspector, identifier, serializer and linker building blocks
- CanonicalDocument / ResourceObject: models to validate produced fragments
"""

from .exceptions import MalformedPayloadError, MissingIdentifierError, NormalizationError
from .identifiers import IDENTIFIER_FIELDS, backfill_relationship_ids, resolve_id
from .inspector import (
    UNKNOWN_TYPE,
    coerce_primitives,
    detect_type,
    format_id,
    is_collection,
    is_primitive,
)
from .linker import add_links, remap_types
from .models import CanonicalDocument, Relationship, RequestContext, ResourceIdentifier, ResourceObject
from .serializer import serialize, serialize_one
from .service import PLACEHOLDER_ID, ResourceNormalizer, get_normalizer, normalize_resource

__all__ = [
    # Service
    "ResourceNormalizer",
    "normalize_resource",
    "get_normalizer",
    "RequestContext",
    "PLACEHOLDER_ID",
    # Building blocks
    "UNKNOWN_TYPE",
    "detect_type",
    "is_collection",
    "is_primitive",
    "format_id",
    "coerce_primitives",
    "IDENTIFIER_FIELDS",
    "resolve_id",
    "backfill_relationship_ids",
    "serialize",
    "serialize_one",
    "add_links",
    "remap_types",
    # Models
    "CanonicalDocument",
    "ResourceObject",
    "ResourceIdentifier",
    "Relationship",
    # Exceptions
    "NormalizationError",
    "MissingIdentifierError",
    "MalformedPayloadError",
]
