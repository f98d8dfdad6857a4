"""Tests for the configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from resource_normalizer.config import (
    AppConfig,
    ConfigurationError,
    EnvironmentConfig,
    InflectionConfig,
    apply_environment_overrides,
    load_config,
    load_environment_config,
)
from resource_normalizer.config.validators import check_for_warnings
from resource_normalizer.handlers import DEFAULT_RELATIONSHIP_TYPE_MAP
from resource_normalizer.normalization import ResourceNormalizer
from resource_normalizer.schema import SchemaDefinitionError

ENV_VARS = ("NORMALIZER_BASE_URL", "NORMALIZER_SCHEMA_PATH", "LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT")

VALID_CONFIG = """
base_url: https://api.example.com/api/
strict_identifiers: true
relationship_type_map:
  author: user
  comments: comment
  favoritedBy: user
inflection:
  irregular_plurals:
    person: people
logging:
  level: INFO
  format: json
"""

SCHEMA_FILE = """
schemas:
  - type: article
    fields:
      - {kind: field, name: title}
      - {kind: belongsTo, name: author, type: user}
  - type: user
    fields:
      - {kind: field, name: username}
"""


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no normalizer environment variables."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config_file(clean_env):
    path = clean_env / "custom.yaml"
    path.write_text(VALID_CONFIG)
    return path


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, config_file):
        app_config, env_config = load_config(config_file)

        assert app_config.base_url == "https://api.example.com/api"
        assert app_config.strict_identifiers is True
        assert app_config.relationship_type_map["favoritedBy"] == "user"
        assert app_config.inflection.irregular_plurals == {"person": "people"}
        assert app_config.logging.level == "INFO"
        assert app_config.logging.format == "json"
        assert env_config.environment == "local"

    def test_defaults_without_config_file(self, clean_env):
        app_config, _ = load_config()

        assert app_config.schema_path is None
        assert app_config.base_url == ""
        assert app_config.relationship_type_map == DEFAULT_RELATIONSHIP_TYPE_MAP
        assert app_config.strict_identifiers is False
        assert app_config.logging.level == "WARNING"
        assert app_config.logging.format == "key-value"

    def test_default_file_in_working_directory(self, clean_env):
        (clean_env / "normalizer.yaml").write_text("base_url: /api\n")

        app_config, _ = load_config()

        assert app_config.base_url == "/api"

    def test_default_file_in_config_directory(self, clean_env):
        (clean_env / "config").mkdir()
        (clean_env / "config" / "normalizer.yaml").write_text("base_url: /v2\n")

        app_config, _ = load_config()

        assert app_config.base_url == "/v2"

    def test_empty_file_uses_defaults(self, clean_env):
        path = clean_env / "empty.yaml"
        path.write_text("")

        app_config, _ = load_config(path)

        assert app_config.relationship_type_map == DEFAULT_RELATIONSHIP_TYPE_MAP

    def test_config_file_not_found(self, clean_env):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert "not found" in str(exc_info.value).lower()

    def test_invalid_yaml_syntax(self, clean_env):
        invalid_yaml = clean_env / "invalid.yaml"
        invalid_yaml.write_text("base_url: 'unterminated\n  relationship_type_map: [")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(invalid_yaml)

        assert "parse" in str(exc_info.value).lower()

    def test_top_level_must_be_mapping(self, clean_env):
        path = clean_env / "list.yaml"
        path.write_text("- base_url\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)


class TestConfigurationValidation:
    """Test configuration validation rules."""

    def test_unknown_log_level(self, clean_env):
        path = clean_env / "bad.yaml"
        path.write_text("logging:\n  level: LOUD\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert any("logging -> level" in error for error in exc_info.value.errors)
        assert "Suggestions:" in str(exc_info.value)
        assert exc_info.value.source == str(path)

    def test_empty_type_map_entry(self):
        with pytest.raises(ValueError):
            AppConfig(relationship_type_map={"author": "  "})

    def test_type_map_entries_stripped(self):
        config = AppConfig(relationship_type_map={" author ": " user "})
        assert config.relationship_type_map == {"author": "user"}

    def test_plural_collision_rejected(self):
        with pytest.raises(ValueError):
            InflectionConfig(irregular_plurals={"person": "people", "human": "people"})

    def test_warning_for_self_mapping(self, clean_env):
        path = clean_env / "self.yaml"
        path.write_text("relationship_type_map:\n  user: user\n")

        with pytest.warns(UserWarning, match="maps to itself"):
            load_config(path)

    def test_warning_for_relative_base_url(self):
        warnings = check_for_warnings({"base_url": "api/articles"})
        assert len(warnings) == 1
        assert "relative" in warnings[0]

    def test_no_warnings_for_valid_config(self):
        assert check_for_warnings({"base_url": "https://x.test", "relationship_type_map": {"a": "b"}}) == []


class TestEnvironmentConfig:
    """Environment variable loading and overrides."""

    def test_all_unset(self, clean_env):
        env_config = load_environment_config()

        assert env_config.base_url is None
        assert env_config.schema_path is None
        assert env_config.log_level is None
        assert env_config.environment == "local"

    def test_log_level_upper_cased(self, clean_env, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert load_environment_config().log_level == "DEBUG"

    def test_invalid_values_collected(self, clean_env, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        monkeypatch.setenv("LOG_FORMAT", "xml")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert len(exc_info.value.errors) == 2
        assert exc_info.value.source == "environment"

    def test_environment_overrides_file(self, config_file, monkeypatch):
        monkeypatch.setenv("NORMALIZER_BASE_URL", "http://localhost:3000/api/")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("ENVIRONMENT", "staging")

        app_config, env_config = load_config(config_file)

        assert app_config.base_url == "http://localhost:3000/api"
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert env_config.environment == "staging"

    def test_apply_overrides_without_values_returns_same_config(self):
        app_config = AppConfig()
        assert apply_environment_overrides(app_config, EnvironmentConfig()) is app_config

    def test_schema_path_override(self):
        app_config = apply_environment_overrides(
            AppConfig(), EnvironmentConfig(schema_path="schemas.yaml")
        )
        assert app_config.schema_path == Path("schemas.yaml")


class TestBuilders:
    """Objects built from configuration."""

    def test_default_registry(self):
        registry = AppConfig().build_registry()
        assert "article" in registry
        assert "tag" in registry

    def test_registry_from_schema_file(self, tmp_path):
        schema_path = tmp_path / "schemas.yaml"
        schema_path.write_text(SCHEMA_FILE)

        registry = AppConfig(schema_path=schema_path).build_registry()

        assert registry.known_type_names() == ["article", "user"]

    def test_missing_schema_file(self, tmp_path):
        with pytest.raises(SchemaDefinitionError):
            AppConfig(schema_path=tmp_path / "missing.yaml").build_registry()

    def test_build_normalizer(self):
        config = AppConfig(
            strict_identifiers=True,
            inflection=InflectionConfig(irregular_plurals={"person": "people"}),
        )

        normalizer = config.build_normalizer()

        assert isinstance(normalizer, ResourceNormalizer)
        assert normalizer.strict_identifiers is True
        assert normalizer.inflector.pluralize("person") == "people"


class TestConfigurationError:
    """Test ConfigurationError formatting."""

    def test_message_names_source(self):
        error = ConfigurationError(
            "Invalid relationship type map",
            errors=["Invalid --type-map entry 'author'"],
            suggestions=["Use --type-map relationship=type"],
            source="--type-map",
        )

        lines = str(error).splitlines()
        assert lines[0] == "Invalid relationship type map [--type-map]"
        assert "1 invalid setting:" in lines
        assert "  1. Invalid --type-map entry 'author'" in lines
        assert lines[-1] == "  - Use --type-map relationship=type"

    def test_message_without_source_or_details(self):
        assert str(ConfigurationError("Broken")) == "Broken"

    def test_from_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            AppConfig.model_validate({"logging": {"level": "LOUD"}, "strict_identifiers": "maybe"})

        error = ConfigurationError.from_validation_error(exc_info.value, source="normalizer.yaml")

        assert error.source == "normalizer.yaml"
        assert len(error.errors) == 2
        assert any(entry.startswith("logging -> level:") for entry in error.errors)
        assert "2 invalid settings:" in str(error)

    def test_explicit_missing_file_points_at_flag(self, clean_env):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("nonexistent.yaml"))

        assert exc_info.value.source == "--config"
