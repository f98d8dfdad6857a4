"""Schema declaration models using Pydantic.

A resource schema is an ordered list of field declarations. Plain fields become
attributes of the canonical resource; ``belongsTo``/``hasMany`` fields are
relationships to another resource type.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class FieldKind(str, Enum):
    """Kinds of field declarations."""

    FIELD = "field"
    BELONGS_TO = "belongsTo"
    HAS_MANY = "hasMany"


RELATIONSHIP_KINDS = frozenset({FieldKind.BELONGS_TO.value, FieldKind.HAS_MANY.value})


class FieldDeclaration(BaseModel):
    """A single field of a resource schema."""

    kind: FieldKind = Field(
        FieldKind.FIELD, validate_default=True, description="field, belongsTo or hasMany"
    )
    name: str = Field(..., min_length=1, description="Property name on the wire")
    type: Optional[str] = Field(None, description="Target resource type for relationships")
    options: Dict[str, Any] = Field(default_factory=dict, description="Free-form options")

    model_config = {"use_enum_values": True, "frozen": True}

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip whitespace from the field name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field name cannot be empty or whitespace-only")
        return stripped

    @model_validator(mode="after")
    def validate_relationship_target(self):
        """Relationship fields must name their target type."""
        if self.kind in RELATIONSHIP_KINDS and not self.type:
            raise ValueError(f"Relationship field '{self.name}' must declare a target type")
        return self

    @property
    def is_relationship(self) -> bool:
        """Whether this field is a belongsTo/hasMany relationship."""
        return self.kind in RELATIONSHIP_KINDS


class ResourceSchema(BaseModel):
    """Declared fields for one resource type."""

    type: str = Field(..., min_length=1, description="Resource type name (singular)")
    fields: List[FieldDeclaration] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("type")
    @classmethod
    def strip_type(cls, v: str) -> str:
        """Strip whitespace from the type name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Schema type cannot be empty or whitespace-only")
        return stripped

    @model_validator(mode="after")
    def validate_unique_field_names(self):
        """Field names must be unique within a schema."""
        seen = set()
        duplicates = set()
        for declaration in self.fields:
            if declaration.name in seen:
                duplicates.add(declaration.name)
            seen.add(declaration.name)
        if duplicates:
            raise ValueError(
                f"Duplicate field names in schema '{self.type}': {', '.join(sorted(duplicates))}"
            )
        return self

    @property
    def relationship_fields(self) -> List[FieldDeclaration]:
        """Relationship declarations in declaration order."""
        return [declaration for declaration in self.fields if declaration.is_relationship]
