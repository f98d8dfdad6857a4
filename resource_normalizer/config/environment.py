"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("json", "key-value")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        schema_path: Optional[str] = None,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.base_url = base_url
        self.schema_path = schema_path
        self.log_level = log_level
        self.log_format = log_format
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - NORMALIZER_BASE_URL: Base URL for relationship links
    - NORMALIZER_SCHEMA_PATH: YAML schema declarations file
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_FORMAT: Override log format (json, key-value)
    - ENVIRONMENT: Environment label attached to log records

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable has an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    log_format = os.getenv("LOG_FORMAT")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if log_format and log_format not in VALID_LOG_FORMATS:
        errors.append(
            f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(VALID_LOG_FORMATS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=["Unset the variable or use one of the listed values"],
            source="environment",
        )

    return EnvironmentConfig(
        base_url=os.getenv("NORMALIZER_BASE_URL"),
        schema_path=os.getenv("NORMALIZER_SCHEMA_PATH"),
        log_level=log_level.upper() if log_level else None,
        log_format=log_format,
        environment=os.getenv("ENVIRONMENT"),
    )
