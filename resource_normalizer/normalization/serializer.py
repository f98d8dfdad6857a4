"""Canonical serialization of a single resource.

``serialize`` turns one identified resource mapping into a document fragment::

    {"data": {"type", "id", "attributes", "relationships"?}, "included"?: [...]}

Relationship linkage is typed from the singular form of the property name
(``comments`` -> ``comment``). To-one names are already singular and are used
as-is (``class`` stays ``class``). The type rewriter corrects names that do not
match the real resource type (``author`` -> ``user``).
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from resource_normalizer.utils.inflection import singularize as default_singularize

from .exceptions import MalformedPayloadError, MissingIdentifierError
from .identifiers import backfill_relationship_ids, resolve_id
from .inspector import format_id, is_mapping, is_primitive

Singularizer = Callable[[str], str]


def _linkage(
    item: Any,
    related_type: str,
    included: List[Dict[str, Any]],
    seen: Set[Tuple[str, str]],
    placeholder_id: Optional[str] = None,
) -> Dict[str, str]:
    """Return the identifier of a related item, side-loading it when embedded.

    Embedded items are side-loaded once per (type, id), except items carrying
    placeholder_id: those are distinct unidentified objects and all kept.
    """
    if is_primitive(item):
        return {"type": related_type, "id": format_id(item)}
    if not is_mapping(item):
        raise MalformedPayloadError(
            f"Relationship item of type {related_type} must be an object or primitive, "
            f"got {type(item).__name__}"
        )
    if item.get("id") in (None, ""):
        raise MissingIdentifierError(item, related_type)

    identifier = {"type": related_type, "id": format_id(item["id"])}
    key = (identifier["type"], identifier["id"])
    if key not in seen or identifier["id"] == placeholder_id:
        seen.add(key)
        included.append({
            **identifier,
            "attributes": {k: v for k, v in item.items() if k != "id"},
        })
    return identifier


def serialize(
    resource: Dict[str, Any],
    resource_type: str,
    relationships: Optional[Iterable[str]] = None,
    included: bool = False,
    singularize: Optional[Singularizer] = None,
    to_one: Iterable[str] = (),
    placeholder_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Serialize an identified resource into a canonical document fragment.

    Args:
        resource: Resource mapping carrying an ``id``; relationship items that
            are objects must carry one too
        resource_type: Canonical type of the resource
        relationships: Property names to emit as relationships instead of attributes
        included: Whether to return embedded related objects under ``included``
        singularize: Maps a relationship name to its inferred type
        to_one: Relationship names declared belongsTo, typed by their own name
        placeholder_id: Id of unidentifiable embedded objects; such objects are
            never collapsed into one included resource

    Returns:
        ``{"data": ResourceObject}`` plus ``"included"`` when requested

    Raises:
        MissingIdentifierError: If the resource or an embedded related object has no id
        MalformedPayloadError: If a relationship item has an unsupported shape
    """
    singularize = singularize or default_singularize
    relationship_names = list(relationships or ())
    to_one_names = set(to_one)

    if resource.get("id") in (None, ""):
        raise MissingIdentifierError(resource, resource_type)

    data: Dict[str, Any] = {
        "type": resource_type,
        "id": format_id(resource["id"]),
        "attributes": {
            k: v for k, v in resource.items() if k != "id" and k not in relationship_names
        },
    }

    side_loaded: List[Dict[str, Any]] = []
    seen: Set[Tuple[str, str]] = set()

    if relationship_names:
        relationship_map: Dict[str, Any] = {}
        for name in relationship_names:
            if name not in resource:
                continue
            related_type = name if name in to_one_names else singularize(name)
            value = resource[name]
            if value is None:
                linkage = None
            elif isinstance(value, list):
                linkage = [
                    _linkage(item, related_type, side_loaded, seen, placeholder_id)
                    for item in value
                ]
            else:
                linkage = _linkage(value, related_type, side_loaded, seen, placeholder_id)
            relationship_map[name] = {"data": linkage}
        data["relationships"] = relationship_map

    document: Dict[str, Any] = {"data": data}
    if included:
        document["included"] = side_loaded
    return document


def serialize_one(
    resource: Any,
    resource_type: str,
    relationship_names: Iterable[str],
    has_relationships: bool,
    singularize: Optional[Singularizer] = None,
    placeholder_id: Optional[str] = None,
    to_one: Iterable[str] = (),
) -> Dict[str, Any]:
    """Resolve ids and serialize one raw resource.

    Types without declared relationships never carry ``relationships`` or
    ``included``.

    Args:
        resource: Raw resource (mapping or primitive)
        resource_type: Canonical type of the resource
        relationship_names: Relationship fields declared for the type
        has_relationships: Whether to emit relationships and included resources
        singularize: Maps a relationship name to its inferred type
        placeholder_id: Id used for resources without an identifier; when None
            MissingIdentifierError propagates
        to_one: Relationship names declared belongsTo

    Returns:
        Canonical document fragment for the resource

    Raises:
        MalformedPayloadError: If resource is neither a mapping nor a primitive
        MissingIdentifierError: In strict mode, when an identifier is missing
    """
    if is_primitive(resource):
        body: Dict[str, Any] = {}
    elif is_mapping(resource):
        body = resource
    else:
        raise MalformedPayloadError(
            f"Expected a {resource_type} object or primitive, got {type(resource).__name__}"
        )

    try:
        resource_id = resolve_id(resource, resource_type)
    except MissingIdentifierError:
        if placeholder_id is None:
            raise
        resource_id = placeholder_id

    relationship_names = list(relationship_names)
    if has_relationships:
        backfill_relationship_ids(body, relationship_names, placeholder_id=placeholder_id)

    return serialize(
        {**body, "id": resource_id},
        resource_type,
        relationships=relationship_names if has_relationships else None,
        included=has_relationships,
        singularize=singularize,
        to_one=to_one,
        placeholder_id=placeholder_id,
    )
