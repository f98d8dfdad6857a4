"""Configuration schema models using Pydantic."""

from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from resource_normalizer.handlers.normalize import DEFAULT_RELATIONSHIP_TYPE_MAP
from resource_normalizer.normalization.service import ResourceNormalizer
from resource_normalizer.schema import SchemaRegistry, default_registry, load_schema_registry
from resource_normalizer.utils.inflection import Inflector


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class InflectionConfig(BaseModel):
    """Pluralization overrides for type names the English rules get wrong."""

    irregular_plurals: Dict[str, str] = Field(
        default_factory=dict, description="Singular type name -> plural wire key"
    )

    @field_validator("irregular_plurals")
    @classmethod
    def validate_irregular_plurals(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Strip entries and reject plural keys shared by two singulars."""
        cleaned = {}
        for singular, plural in v.items():
            singular, plural = singular.strip(), plural.strip()
            if not singular or not plural:
                raise ValueError("irregular_plurals entries cannot be empty")
            cleaned[singular] = plural
        plurals = list(cleaned.values())
        collisions = sorted({p for p in plurals if plurals.count(p) > 1})
        if collisions:
            raise ValueError(f"Plural forms used by more than one type: {', '.join(collisions)}")
        return cleaned


class AppConfig(BaseModel):
    """Root configuration object for the resource normalizer."""

    schema_path: Optional[Path] = Field(
        None, description="YAML schema declarations (built-in schemas when unset)"
    )
    base_url: str = Field("", description="Base URL for relationship links")
    relationship_type_map: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_RELATIONSHIP_TYPE_MAP),
        description="Relationship name -> canonical resource type",
    )
    strict_identifiers: bool = Field(
        False, description="Fail on resources without id/slug/username/name"
    )
    inflection: InflectionConfig = Field(default_factory=InflectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("base_url")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        """Strip whitespace and trailing slashes from the base URL."""
        return v.strip().rstrip("/")

    @field_validator("relationship_type_map")
    @classmethod
    def validate_type_map(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Strip entries and reject empty names or types."""
        cleaned = {}
        for name, target in v.items():
            name, target = name.strip(), target.strip()
            if not name or not target:
                raise ValueError("relationship_type_map entries cannot be empty")
            cleaned[name] = target
        return cleaned

    def build_inflector(self) -> Inflector:
        return Inflector(self.inflection.irregular_plurals)

    def build_registry(self) -> SchemaRegistry:
        """Load the configured schema file, or the built-in schemas."""
        if self.schema_path is None:
            return default_registry()
        return load_schema_registry(self.schema_path)

    def build_normalizer(self) -> ResourceNormalizer:
        return ResourceNormalizer(
            inflector=self.build_inflector(),
            strict_identifiers=self.strict_identifiers,
        )
