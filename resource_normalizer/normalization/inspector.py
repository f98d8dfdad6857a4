"""Resource-shape inspection for raw API payloads.

Payloads are keyed by a type-derived name: the singular (``article``) for one
resource, the plural (``articles``) for a collection. Some endpoints return
collections of bare strings or numbers (``{"tags": ["ember", "rust"]}``); those
are coerced into resource objects before normalization.
"""

from collections.abc import Mapping
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence

from resource_normalizer.logging import get_logger
from resource_normalizer.utils.inflection import pluralize as default_pluralize

logger = get_logger(__name__, component="normalization")

UNKNOWN_TYPE = "unknown"

# Field names that can hold the value of a primitive, in the order they are tried
VALUE_FIELD_CANDIDATES = ("name", "title", "label", "text", "value")
DEFAULT_VALUE_FIELD = "value"

Pluralizer = Callable[[str], str]


def is_primitive(value: Any) -> bool:
    """Whether value is a bare string or number (booleans excluded)."""
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def format_id(value: Any) -> str:
    """String form of an identifier value; integral floats lose the fraction (2.0 -> "2")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def detect_type(
    known_types: Iterable[str], payload: Mapping, pluralize: Optional[Pluralizer] = None
) -> str:
    """Return the first known type whose singular or plural key is in the payload.

    Args:
        known_types: Candidate type names; their order decides ties
        payload: Raw API response
        pluralize: Pluralization function (defaults to the inflect-backed one)

    Returns:
        Detected type name, or UNKNOWN_TYPE if no key matches
    """
    pluralize = pluralize or default_pluralize
    for resource_type in known_types:
        if resource_type in payload or pluralize(resource_type) in payload:
            return resource_type
    return UNKNOWN_TYPE


def is_collection(
    known_types: Iterable[str], payload: Mapping, pluralize: Optional[Pluralizer] = None
) -> bool:
    """Whether the plural key of any given type holds a list."""
    pluralize = pluralize or default_pluralize
    return any(isinstance(payload.get(pluralize(t)), list) for t in known_types)


def choose_value_field(fields: Sequence[Any]) -> str:
    """Pick the property name that will hold a coerced primitive.

    The first plain field (in declaration order) whose name is one of
    VALUE_FIELD_CANDIDATES wins; DEFAULT_VALUE_FIELD otherwise.

    Args:
        fields: Field declarations (objects with ``kind`` and ``name``)
    """
    for declaration in fields:
        if declaration.kind == "field" and declaration.name in VALUE_FIELD_CANDIDATES:
            return declaration.name
    return DEFAULT_VALUE_FIELD


def coerce_primitives(
    payload: MutableMapping,
    resource_type: str,
    fields: Sequence[Any],
    pluralize: Optional[Pluralizer] = None,
) -> MutableMapping:
    """Replace a primitive collection with resource objects, in place.

    ``{"tags": ["ember"]}`` becomes ``{"tags": [{"id": "ember", "name": "ember"}]}``
    when the tag schema declares a ``name`` field. Collections that hold no
    primitives are left untouched, so re-running is a no-op.

    Args:
        payload: Raw API response (mutated)
        resource_type: Detected type
        fields: Declared fields of the type; empty when the schema lookup failed
        pluralize: Pluralization function

    Returns:
        The same payload object
    """
    pluralize = pluralize or default_pluralize
    plural_key = pluralize(resource_type)
    items = payload.get(plural_key)

    if not isinstance(items, list) or not any(is_primitive(item) for item in items):
        return payload

    property_name = choose_value_field(fields)
    payload[plural_key] = [
        {"id": format_id(item), property_name: item} if is_primitive(item) else item
        for item in items
    ]

    logger.debug(
        f"Coerced {len(items)} primitive {plural_key} into resource objects",
        extra={
            "event": "normalization.primitives.coerced",
            "resource_type": resource_type,
            "property_name": property_name,
            "count": len(items),
        },
    )
    return payload
