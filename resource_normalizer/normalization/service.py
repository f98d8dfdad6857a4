"""Normalization service: raw API payload in, canonical document out.

This module implements the single pass that:
1. Detects the resource type from the payload keys
2. Coerces primitive collections into resource objects
3. Reads the type's relationships from the schema registry (fail-open)
4. Splits collections into single resources and normalizes each one
5. Serializes, links and type-corrects every resource
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from resource_normalizer.logging import get_logger, log_context
from resource_normalizer.schema.query import fields_for, lookup_relationships
from resource_normalizer.utils.inflection import Inflector, get_inflector

from .exceptions import MalformedPayloadError
from .inspector import UNKNOWN_TYPE, coerce_primitives, detect_type, is_collection
from .linker import add_links, remap_types
from .serializer import serialize_one

logger = get_logger(__name__, component="normalization")

# Id given to resources without id/slug/username/name when not in strict mode
PLACEHOLDER_ID = "undefined"


def _read_request(request: Any) -> tuple:
    """Return (schema, url) from a RequestContext, a mapping or any object with both."""
    if isinstance(request, Mapping):
        return request["schema"], request.get("url") or ""
    return request.schema, getattr(request, "url", "") or ""


def _placeholder_relationships(relationships: Optional[Mapping]) -> List[str]:
    """Names of relationships with at least one item given PLACEHOLDER_ID."""
    names = []
    for name, relationship in (relationships or {}).items():
        linkage = relationship.get("data")
        items = linkage if isinstance(linkage, list) else [linkage]
        if any(item and item.get("id") == PLACEHOLDER_ID for item in items):
            names.append(name)
    return names


class ResourceNormalizer:
    """Normalizes raw API payloads into canonical documents.

    Responsibilities:
    - Detect single-resource vs. collection responses
    - Normalize each collection element through the single-resource path
    - Emit relationships, included resources and links only for types that
      declare relationships
    - Correct relationship and included types through the relationship type map
    """

    def __init__(
        self,
        inflector: Optional[Inflector] = None,
        strict_identifiers: bool = False,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize ResourceNormalizer.

        Args:
            inflector: Pluralization rules (defaults to the shared Inflector)
            strict_identifiers: Raise MissingIdentifierError for resources without
                id/slug/username/name instead of using PLACEHOLDER_ID
            logger_instance: Logger instance (defaults to module logger)
        """
        self.inflector = inflector or get_inflector()
        self.strict_identifiers = strict_identifiers
        self.logger = logger_instance or logger

    def normalize(
        self,
        item: Any,
        request: Any,
        relationship_type_map: Optional[Mapping] = None,
    ) -> Dict[str, Any]:
        """Normalize one raw API response.

        Args:
            item: Raw response payload (mutated by primitive coercion)
            request: RequestContext, or anything exposing ``schema`` and ``url``
            relationship_type_map: Relationship name -> canonical type

        Returns:
            Canonical document fragment

        Raises:
            MalformedPayloadError: If the payload shape cannot be normalized
            MissingIdentifierError: In strict mode, for unidentifiable resources
        """
        if not isinstance(item, Mapping):
            raise MalformedPayloadError(
                f"Expected a JSON object payload, got {type(item).__name__}"
            )

        schema, url = _read_request(request)
        type_map = dict(relationship_type_map or {})
        known_types = list(schema.known_type_names())
        resource_type = detect_type(known_types, item, self.inflector.pluralize)

        with log_context(resource_type=resource_type, request_url=url):
            if resource_type == UNKNOWN_TYPE:
                self.logger.warning(
                    "Could not detect resource type from payload keys",
                    extra={
                        "event": "normalization.type.unknown",
                        "payload_keys": sorted(str(key) for key in item),
                        "known_types": known_types,
                    },
                )
            else:
                self.logger.debug(
                    f"Detected resource type {resource_type}",
                    extra={"event": "normalization.type.detected"},
                )

            document = coerce_primitives(
                item, resource_type, fields_for(schema, resource_type), self.inflector.pluralize
            )

            lookup = lookup_relationships(schema, resource_type)
            if not lookup.found and resource_type != UNKNOWN_TYPE:
                self.logger.warning(
                    f"Schema lookup failed for {resource_type}; normalizing without relationships",
                    extra={"event": "normalization.schema.unavailable", "error": lookup.error},
                )

            result = self.normalize_document(
                document, resource_type, lookup.names, url, type_map, to_one=lookup.to_one
            )

            data = result["data"]
            self.logger.info(
                "Normalized resource document",
                extra={
                    "event": "normalization.document.normalized",
                    "is_collection": isinstance(data, list),
                    "resource_count": len(data) if isinstance(data, list) else 1,
                    "included_count": len(result.get("included") or []),
                },
            )
            return result

    def normalize_document(
        self,
        document: Mapping,
        resource_type: str,
        relationships: Sequence[str],
        url: str = "",
        relationship_type_map: Optional[Mapping] = None,
        to_one: Sequence[str] = (),
    ) -> Dict[str, Any]:
        """Normalize a payload whose type and relationships are already known.

        Collections (plural key holding a list) are split into single resources,
        each wrapped under the singular key and normalized through the same path
        as a top-level resource. ``included`` of a collection is the plain
        concatenation of each element's included resources (no de-duplication).

        Args:
            document: Payload keyed by the singular or plural type name
            resource_type: Resource type
            relationships: Relationship field names of the type
            url: Base URL for relationship links
            relationship_type_map: Relationship name -> canonical type
            to_one: Relationship names declared belongsTo

        Returns:
            Canonical document fragment
        """
        type_map = relationship_type_map or {}
        has_relationships = len(relationships) > 0

        if is_collection([resource_type], document, self.inflector.pluralize):
            elements = document[self.inflector.pluralize(resource_type)]
            results = [
                self._normalize_single(
                    {resource_type: element}, resource_type, relationships, url, type_map, to_one
                )
                for element in elements
            ]

            collection: Dict[str, Any] = {"data": [result["data"] for result in results]}
            if has_relationships:
                collection["included"] = [
                    resource for result in results for resource in (result.get("included") or [])
                ]

            self.logger.debug(
                f"Normalized collection of {len(results)} {resource_type} resources",
                extra={
                    "event": "normalization.collection.normalized",
                    "resource_count": len(results),
                },
            )
            return collection

        return self._normalize_single(
            document, resource_type, relationships, url, type_map, to_one
        )

    def _normalize_single(
        self,
        document: Mapping,
        resource_type: str,
        relationships: Sequence[str],
        url: str,
        type_map: Mapping,
        to_one: Sequence[str] = (),
    ) -> Dict[str, Any]:
        if resource_type not in document:
            raise MalformedPayloadError(
                f"Payload has no '{resource_type}' key (keys: {', '.join(sorted(map(str, document)))})"
            )

        has_relationships = len(relationships) > 0
        result = serialize_one(
            document[resource_type],
            resource_type,
            relationships,
            has_relationships,
            singularize=self.inflector.singularize,
            placeholder_id=None if self.strict_identifiers else PLACEHOLDER_ID,
            to_one=to_one,
        )

        data = result["data"]
        if not self.strict_identifiers:
            if data["id"] == PLACEHOLDER_ID:
                self.logger.warning(
                    f"{resource_type} resource has no id, slug, username or name",
                    extra={"event": "normalization.identifier.missing"},
                )
            for name in _placeholder_relationships(data.get("relationships")):
                self.logger.warning(
                    f"Related {name} object of {resource_type} {data['id']} has no id, "
                    "slug, username or name",
                    extra={"event": "normalization.identifier.missing", "relationship": name},
                )

        if has_relationships:
            add_links(data.get("relationships"), url, data["id"])
            remap_types(data.get("relationships"), type_map)
            result["included"] = remap_types(
                result.get("included"), self._included_type_map(type_map)
            )

        return result

    def _included_type_map(self, type_map: Mapping) -> Dict[str, str]:
        """Extend the map with inferred type names so included resources match linkage.

        Included resources carry the type inferred from the relationship name
        (``followers`` -> ``follower``), so that inferred name is mapped as well.
        """
        extended = {self.inflector.singularize(name): target for name, target in type_map.items()}
        extended.update(type_map)
        return extended


_default_normalizer: Optional[ResourceNormalizer] = None


def get_normalizer() -> ResourceNormalizer:
    """Return the shared default ResourceNormalizer."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = ResourceNormalizer()
    return _default_normalizer


def normalize_resource(
    item: Any, request: Any, relationship_type_map: Optional[Mapping] = None
) -> Dict[str, Any]:
    """Normalize a raw API response with the default normalizer.

    Args:
        item: Raw response payload
        request: RequestContext (schema registry + request URL)
        relationship_type_map: Relationship name -> canonical type

    Returns:
        Canonical document fragment
    """
    return get_normalizer().normalize(item, request, relationship_type_map)
