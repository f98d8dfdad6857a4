"""Relationship links and type correction for serialized resources.

The serializer infers a related type from the property name, which is often
wrong on the wire (``author`` holds a ``user``). ``remap_types`` applies an
explicit relationship-name -> canonical-type map after serialization.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional


def add_links(
    relationships: Optional[Dict[str, Dict[str, Any]]], base_url: str, resource_id: str
) -> None:
    """Attach ``related`` and ``self`` links to every relationship, in place.

    Args:
        relationships: Relationship map of a resource object (None is a no-op)
        base_url: Collection URL of the parent resource
        resource_id: Id of the parent resource
    """
    if not relationships:
        return

    base = (base_url or "").rstrip("/")
    for name, relationship in relationships.items():
        relationship["links"] = {
            "related": f"{base}/{resource_id}/{name}",
            "self": f"{base}/{resource_id}/relationships/{name}",
        }


def remap_types(data: Any, relationship_type_map: Optional[Mapping]) -> Any:
    """Rewrite resource types using a relationship-name -> type map.

    Two shapes are accepted:

    - list of included resources: returns a new list whose items carry the
      mapped ``type`` (unmapped types pass through); an empty list returns None.
    - relationship map: updated in place; every linkage under a mapped
      relationship name gets the mapped type. The same map is returned.

    Args:
        data: Included list, relationship map, or None
        relationship_type_map: Relationship or inferred type name -> canonical type

    Returns:
        Remapped data, or None for None/empty included lists
    """
    type_map = relationship_type_map or {}

    if data is None:
        return None

    if isinstance(data, list):
        if not data:
            return None
        return [{**item, "type": type_map.get(item["type"], item["type"])} for item in data]

    if isinstance(data, Mapping):
        for name, relationship in data.items():
            target_type = type_map.get(name)
            linkage = relationship.get("data") if relationship else None
            if not target_type or not linkage:
                continue
            items: List[Dict[str, Any]] = linkage if isinstance(linkage, list) else [linkage]
            for item in items:
                item["type"] = target_type

    return data
