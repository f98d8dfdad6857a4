"""Configuration management module for the resource normalizer."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import apply_environment_overrides, load_config
from .models import AppConfig, InflectionConfig, LogFormat, LoggingConfig, LogLevel

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    "apply_environment_overrides",
    # Configuration models
    "AppConfig",
    "InflectionConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
