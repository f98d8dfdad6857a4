"""Schema registry exceptions.

All schema exceptions inherit from SchemaError so callers can catch registry
problems with a single except clause.
"""

from typing import List, Optional


class SchemaError(Exception):
    """Base exception for all schema registry errors."""

    pass


class SchemaLookupError(SchemaError, KeyError):
    """Raised when a type name is not registered.

    Subclasses KeyError so mapping-style callers can treat it as a missing key.
    The schema query adapter converts it to "no relationships".
    """

    def __init__(self, type_name: str) -> None:
        """Initialize lookup error.

        Args:
            type_name: Resource type that was not found
        """
        super().__init__(type_name)
        self.type_name = type_name

    def __str__(self) -> str:
        return f"Unknown resource type: {self.type_name!r}"


class SchemaDefinitionError(SchemaError):
    """Raised when schema declarations are invalid or cannot be loaded.

    Examples:
    - Duplicate type registration
    - Relationship field without a target type
    - YAML file missing or unparseable
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        """Initialize definition error.

        Args:
            message: Primary error message
            errors: Specific validation errors, one per entry
        """
        self.message = message
        self.errors = errors or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.errors:
            return self.message
        lines = [self.message]
        lines.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))
        return "\n".join(lines)
