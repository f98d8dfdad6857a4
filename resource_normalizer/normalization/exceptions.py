"""Exceptions raised by the normalization engine.

Schema lookup failures never reach this layer (the query adapter turns them
into "no relationships"). Everything here propagates to the caller, except
MissingIdentifierError when the normalizer runs in lenient mode.
"""

from typing import Any, Optional


class NormalizationError(Exception):
    """Base exception for all normalization errors."""

    pass


class MissingIdentifierError(NormalizationError):
    """A resource object has none of the identifier fields (id, slug, username, name).

    Raised by the identifier resolver. In lenient mode the normalizer catches it
    and substitutes a placeholder id; in strict mode it reaches the caller.
    """

    def __init__(self, resource: Any, resource_type: Optional[str] = None) -> None:
        """Initialize with the offending resource.

        Args:
            resource: Resource object without an identifier
            resource_type: Type being resolved, if known
        """
        self.resource = resource
        self.resource_type = resource_type
        label = f"{resource_type} resource" if resource_type else "Resource"
        keys = ", ".join(sorted(str(key) for key in resource)) if isinstance(resource, dict) else ""
        super().__init__(
            f"{label} has no id, slug, username or name (keys: {keys or 'none'})"
        )


class MalformedPayloadError(NormalizationError):
    """The payload or one of its values has a shape the normalizer cannot handle.

    Examples:
    - Payload is not a mapping
    - No value under the detected type key
    - A resource or relationship item that is neither an object nor a primitive
    """

    pass
