"""Configuration loader for the resource normalizer."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_CANDIDATES = (
    Path("normalizer.yaml"),
    Path("config") / "normalizer.yaml",
)


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from YAML and environment variables.

    Config file lookup:
    1. Use config_path if given (must exist)
    2. Try normalizer.yaml in the current directory
    3. Try ./config/normalizer.yaml
    4. Fall back to built-in defaults

    Environment variables (see load_environment_config) override file values.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with overrides applied

    Raises:
        ConfigurationError: If configuration is invalid or an explicit file is missing
    """
    config_file = _find_config_file(config_path)
    config_dict = _read_config_file(config_file) if config_file else {}

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        app_config = AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            e,
            source=str(config_file) if config_file else "built-in defaults",
            suggestions=[
                "Review normalizer.example.yaml for the expected format",
                "Verify field types match the expected schema",
            ],
        )

    env_config = load_environment_config()
    return apply_environment_overrides(app_config, env_config), env_config


def apply_environment_overrides(app_config: AppConfig, env_config: EnvironmentConfig) -> AppConfig:
    """Return a copy of app_config with values set through the environment."""
    updates = {}
    if env_config.base_url is not None:
        updates["base_url"] = env_config.base_url.strip().rstrip("/")
    if env_config.schema_path:
        updates["schema_path"] = Path(env_config.schema_path)
    if env_config.log_level or env_config.log_format:
        updates["logging"] = app_config.logging.model_copy(
            update={
                key: value
                for key, value in (("level", env_config.log_level), ("format", env_config.log_format))
                if value
            }
        )
    return app_config.model_copy(update=updates) if updates else app_config


def _read_config_file(config_file: Path) -> dict:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
            source=str(config_file),
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} is readable"],
            source=str(config_file),
        )

    if config_dict is None:
        return {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            source=str(config_file),
        )
    return config_dict


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find the configuration file.

    Returns:
        Path to the configuration file, or None when no default file exists

    Raises:
        ConfigurationError: If an explicit path does not exist
    """
    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Omit --config to use normalizer.yaml or the built-in defaults",
                ],
                source="--config",
            )
        return config_path

    for candidate in DEFAULT_CONFIG_CANDIDATES:
        if candidate.exists():
            return candidate
    return None
