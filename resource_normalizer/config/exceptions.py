"""Custom exceptions for configuration management."""

from typing import List, Optional

from pydantic import ValidationError


class ConfigurationError(Exception):
    """
    Exception raised when normalizer settings cannot be loaded.

    Settings come from a YAML file, environment variables and CLI flags;
    ``source`` names the one that failed (a file path, ``environment`` or a
    flag such as ``--type-map``) so the message points at what to edit.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        source: Optional[str] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: Invalid settings, one entry each
            suggestions: Hints for fixing the errors
            source: Where the invalid settings came from
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.source = source
        super().__init__(self._format_message())

    @classmethod
    def from_validation_error(
        cls,
        error: ValidationError,
        source: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ) -> "ConfigurationError":
        """Build an error listing each failed setting as ``key -> path: reason``."""
        errors = []
        for detail in error.errors():
            setting = " -> ".join(str(loc) for loc in detail["loc"])
            if detail["type"] == "missing":
                errors.append(f"Missing required setting: {setting}")
            else:
                errors.append(f"{setting}: {detail['msg']}")
        return cls(
            "Configuration validation failed",
            errors=errors,
            suggestions=suggestions,
            source=source,
        )

    def _format_message(self) -> str:
        parts = [f"{self.message} [{self.source}]" if self.source else self.message]

        if self.errors:
            count = len(self.errors)
            parts.append(f"\n{count} invalid setting{'s' if count != 1 else ''}:")
            parts.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))

        if self.suggestions:
            parts.append("\nSuggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)
