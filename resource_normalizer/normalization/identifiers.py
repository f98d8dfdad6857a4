"""Identifier resolution for resources that lack an explicit id."""

from typing import Any, Iterable, Optional

from .exceptions import MalformedPayloadError, MissingIdentifierError
from .inspector import format_id, is_mapping, is_primitive

# Fields that can identify a resource, highest priority first
IDENTIFIER_FIELDS = ("id", "slug", "username", "name")


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def resolve_id(resource: Any, resource_type: Optional[str] = None) -> str:
    """Derive a stable string identifier for a resource.

    Primitives are their own identifier. Objects use the first present of
    id, slug, username, name.

    Args:
        resource: Primitive value or resource mapping
        resource_type: Type being resolved, used in error messages

    Returns:
        Identifier as a string

    Raises:
        MissingIdentifierError: If a mapping has none of IDENTIFIER_FIELDS
        MalformedPayloadError: If resource is neither a mapping nor a primitive
    """
    if is_primitive(resource):
        return format_id(resource)
    if not is_mapping(resource):
        raise MalformedPayloadError(
            f"Cannot resolve an identifier from {type(resource).__name__} value: {resource!r}"
        )
    for field_name in IDENTIFIER_FIELDS:
        value = resource.get(field_name)
        if _is_present(value):
            return format_id(value)
    raise MissingIdentifierError(resource, resource_type)


def backfill_relationship_ids(
    resource: Any,
    relationship_names: Iterable[str],
    placeholder_id: Optional[str] = None,
) -> None:
    """Give every embedded relationship object an ``id``, in place.

    Items that already carry an id and primitive items are left alone.

    Args:
        resource: Resource mapping whose relationship values are updated
        relationship_names: Relationship fields declared for the resource type
        placeholder_id: Id to use when an item cannot be identified; when None
            MissingIdentifierError propagates

    Raises:
        MissingIdentifierError: If an item has no identifier and no placeholder is given
    """
    if not is_mapping(resource):
        return

    for name in relationship_names:
        value = resource.get(name)
        if not value:
            continue
        items = value if isinstance(value, list) else [value]
        for item in items:
            if not is_mapping(item) or _is_present(item.get("id")):
                continue
            try:
                item["id"] = resolve_id(item, name)
            except MissingIdentifierError:
                if placeholder_id is None:
                    raise
                item["id"] = placeholder_id
