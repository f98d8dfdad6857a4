"""In-memory schema registry.

The registry is the read-only handle the normalizer queries for field
declarations. It is populated once (from code or YAML) and then shared across
normalization calls.
"""

from typing import Dict, Iterable, Iterator, List, Tuple

from resource_normalizer.logging import get_logger

from .exceptions import SchemaDefinitionError, SchemaLookupError
from .models import FieldDeclaration, ResourceSchema

logger = get_logger(__name__, component="schema")


class SchemaRegistry:
    """Ordered lookup from resource type name to its declared fields.

    Registration order is preserved and drives type detection order.
    """

    def __init__(self, schemas: Iterable[ResourceSchema] = ()):
        """Initialize the registry.

        Args:
            schemas: Schemas to register, in detection order

        Raises:
            SchemaDefinitionError: If a type is registered twice
        """
        self._schemas: Dict[str, ResourceSchema] = {}
        for schema in schemas:
            self.register(schema)

    def register(self, schema: ResourceSchema) -> None:
        """Register a schema.

        Raises:
            SchemaDefinitionError: If the type is already registered
        """
        if schema.type in self._schemas:
            raise SchemaDefinitionError(f"Resource type '{schema.type}' is already registered")
        self._schemas[schema.type] = schema
        logger.debug(
            "Registered resource schema",
            extra={
                "event": "schema.type.registered",
                "resource_type": schema.type,
                "field_count": len(schema.fields),
            },
        )

    def get(self, type_name: str) -> ResourceSchema:
        """Return the schema for a type.

        Raises:
            SchemaLookupError: If the type is not registered
        """
        try:
            return self._schemas[type_name]
        except KeyError:
            raise SchemaLookupError(type_name) from None

    def fields_of(self, type_name: str) -> Tuple[FieldDeclaration, ...]:
        """Return the declared fields of a type, in declaration order.

        Raises:
            SchemaLookupError: If the type is not registered
        """
        return tuple(self.get(type_name).fields)

    def known_type_names(self) -> List[str]:
        """Return all registered type names in registration order."""
        return list(self._schemas)

    def has_type(self, type_name: str) -> bool:
        return type_name in self._schemas

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._schemas

    def __iter__(self) -> Iterator[ResourceSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self) -> str:
        return f"SchemaRegistry(types={self.known_type_names()!r})"
