"""Schema query adapter used by the normalizer.

Every query here is fail-open: if the registry cannot answer (unknown type,
malformed declarations, a registry that raises), the caller gets an explicit
empty outcome instead of an exception. A resource whose schema cannot be read
is still normalized, only without relationships.

The adapter accepts any registry exposing ``fields_of(type)``; field
declarations may be FieldDeclaration models or plain mappings with ``kind``,
``name`` keys.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from resource_normalizer.logging import get_logger

from .models import RELATIONSHIP_KINDS, FieldKind

logger = get_logger(__name__, component="schema")


@dataclass(frozen=True)
class FieldInfo:
    """Kind and name read from one field declaration."""

    kind: str
    name: str

    @property
    def is_relationship(self) -> bool:
        return self.kind in RELATIONSHIP_KINDS


@dataclass(frozen=True)
class RelationshipLookup:
    """Outcome of a relationship query.

    Attributes:
        resource_type: Type that was queried
        names: Relationship field names in declaration order (empty on failure)
        to_one: The subset of names declared belongsTo; their property name is
            already singular
        error: Description of the lookup failure, None when the lookup succeeded
    """

    resource_type: str
    names: Tuple[str, ...] = ()
    to_one: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        """Whether the registry answered the query."""
        return self.error is None

    @property
    def has_relationships(self) -> bool:
        return bool(self.names)


def _read_field(declaration: Any) -> FieldInfo:
    if isinstance(declaration, Mapping):
        kind, name = declaration["kind"], declaration["name"]
    else:
        kind, name = declaration.kind, declaration.name
    if hasattr(kind, "value"):
        kind = kind.value
    if not isinstance(kind, str) or not isinstance(name, str) or not name:
        raise ValueError(f"Malformed field declaration: {declaration!r}")
    return FieldInfo(kind=kind, name=name)


def _query_fields(schema: Any, resource_type: str) -> List[FieldInfo]:
    return [_read_field(declaration) for declaration in schema.fields_of(resource_type)]


def fields_for(schema: Any, resource_type: str) -> List[FieldInfo]:
    """Return the declared fields of a type, or an empty list if unreadable."""
    try:
        return _query_fields(schema, resource_type)
    except Exception as e:
        logger.debug(
            f"Schema field lookup failed for {resource_type}: {e}",
            extra={
                "event": "schema.lookup.failed",
                "resource_type": resource_type,
                "error_type": type(e).__name__,
            },
        )
        return []


def lookup_relationships(schema: Any, resource_type: str) -> RelationshipLookup:
    """Query the relationship fields (belongsTo/hasMany) of a type.

    Args:
        schema: Schema registry handle
        resource_type: Type name to query

    Returns:
        RelationshipLookup; on any failure ``names`` is empty and ``error`` is set
    """
    try:
        relationship_fields = [
            info for info in _query_fields(schema, resource_type) if info.is_relationship
        ]
    except Exception as e:
        logger.debug(
            f"Relationship lookup failed for {resource_type}: {e}",
            extra={
                "event": "schema.lookup.failed",
                "resource_type": resource_type,
                "error_type": type(e).__name__,
            },
        )
        return RelationshipLookup(resource_type=resource_type, error=str(e) or type(e).__name__)

    return RelationshipLookup(
        resource_type=resource_type,
        names=tuple(info.name for info in relationship_fields),
        to_one=tuple(
            info.name for info in relationship_fields if info.kind == FieldKind.BELONGS_TO.value
        ),
    )


def relationships_of(schema: Any, resource_type: str) -> List[str]:
    """Return relationship field names of a type, empty when the lookup fails."""
    return list(lookup_relationships(schema, resource_type).names)
