"""Schema registry: resource type declarations and the fail-open query adapter.

This module provides:
- FieldDeclaration / ResourceSchema: validated declaration models
- SchemaRegistry: read-only lookup handle (fields_of, known_type_names)
- load_schema_registry / default_registry: ways to build a registry
- lookup_relationships / relationships_of: relationship queries that never raise
"""

from .defaults import default_registry
from .exceptions import SchemaDefinitionError, SchemaError, SchemaLookupError
from .loader import build_registry, load_schema_registry
from .models import FieldDeclaration, FieldKind, ResourceSchema
from .query import (
    FieldInfo,
    RelationshipLookup,
    fields_for,
    lookup_relationships,
    relationships_of,
)
from .registry import SchemaRegistry

__all__ = [
    # Models
    "FieldDeclaration",
    "FieldKind",
    "ResourceSchema",
    # Registry
    "SchemaRegistry",
    "build_registry",
    "load_schema_registry",
    "default_registry",
    # Queries
    "FieldInfo",
    "RelationshipLookup",
    "fields_for",
    "lookup_relationships",
    "relationships_of",
    # Exceptions
    "SchemaError",
    "SchemaLookupError",
    "SchemaDefinitionError",
]
