"""Schema registry loader for YAML declaration files.

Expected file layout::

    schemas:
      - type: article
        fields:
          - {kind: field, name: title}
          - {kind: belongsTo, name: author, type: user}
      - type: user
        fields:
          - {kind: field, name: username}
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import ValidationError

from resource_normalizer.logging import get_logger

from .exceptions import SchemaDefinitionError
from .models import ResourceSchema
from .registry import SchemaRegistry

logger = get_logger(__name__, component="schema")


def load_schema_registry(schema_path: Path) -> SchemaRegistry:
    """Load and validate a schema registry from a YAML file.

    Args:
        schema_path: Path to the YAML declaration file

    Returns:
        SchemaRegistry with every declared type registered in file order

    Raises:
        SchemaDefinitionError: If the file is missing, unparseable or invalid
    """
    schema_path = Path(schema_path)
    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except FileNotFoundError:
        raise SchemaDefinitionError(f"Schema file not found: {schema_path}")
    except yaml.YAMLError as e:
        raise SchemaDefinitionError(f"Failed to parse schema YAML {schema_path}: {e}")

    if not isinstance(document, dict) or not isinstance(document.get("schemas"), list):
        raise SchemaDefinitionError(
            f"Schema file {schema_path} must contain a top-level 'schemas' list"
        )

    registry = build_registry(document["schemas"])
    logger.info(
        "Schema registry loaded",
        extra={
            "event": "schema.registry.loaded",
            "schema_path": str(schema_path),
            "type_count": len(registry),
        },
    )
    return registry


def build_registry(definitions: List[Dict[str, Any]]) -> SchemaRegistry:
    """Build a registry from raw schema dictionaries.

    All definitions are validated before any error is raised so the caller sees
    every problem at once.

    Raises:
        SchemaDefinitionError: If any definition fails validation
    """
    schemas = []
    errors = []
    for index, definition in enumerate(definitions):
        try:
            schemas.append(ResourceSchema.model_validate(definition))
        except ValidationError as e:
            label = (definition.get("type") if isinstance(definition, dict) else None) or f"#{index}"
            for error in e.errors():
                field_path = " -> ".join(str(loc) for loc in error["loc"])
                location = f"{label} -> {field_path}" if field_path else str(label)
                errors.append(f"{location}: {error['msg']}")

    if errors:
        raise SchemaDefinitionError("Schema validation failed", errors=errors)

    return SchemaRegistry(schemas)
