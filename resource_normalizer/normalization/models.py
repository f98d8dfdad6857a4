"""Data models for the normalization layer.

The engine builds plain dictionaries (ready for ``json.dumps``). The Pydantic
models below describe the same canonical document shape and are used to
validate a fragment on demand, e.g. before handing it to a cache layer.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class RequestContext:
    """Per-request inputs of a normalization call.

    Attributes:
        schema: Schema registry handle (anything with fields_of/known_type_names)
        url: Request URL, used as the base of relationship links
    """

    schema: Any
    url: str = ""


class ResourceIdentifier(BaseModel):
    """Linkage to a related resource."""

    type: str = Field(..., min_length=1)
    id: str = Field(..., min_length=1)


class Relationship(BaseModel):
    """Relationship entry of a resource object."""

    data: Union[ResourceIdentifier, List[ResourceIdentifier], None] = None
    links: Optional[Dict[str, str]] = None


class ResourceObject(BaseModel):
    """A typed, identified resource with attributes and optional relationships."""

    type: str = Field(..., min_length=1)
    id: str = Field(..., min_length=1)
    attributes: Dict[str, Any] = Field(default_factory=dict)
    relationships: Optional[Dict[str, Relationship]] = None


class CanonicalDocument(BaseModel):
    """Canonical document fragment: primary data plus side-loaded resources."""

    data: Union[ResourceObject, List[ResourceObject]]
    included: Optional[List[ResourceObject]] = None

    @property
    def is_collection(self) -> bool:
        return isinstance(self.data, list)

    def resources(self) -> List[ResourceObject]:
        """Primary resources as a list, whatever the document shape."""
        return list(self.data) if isinstance(self.data, list) else [self.data]

    def included_keys(self) -> List[tuple]:
        """(type, id) of every included resource, in order."""
        return [(resource.type, resource.id) for resource in self.included or []]
