"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for likely mistakes that are still valid.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    type_map = config_dict.get("relationship_type_map", {})
    if isinstance(type_map, dict):
        for name, target in type_map.items():
            if name == target:
                warning_messages.append(
                    f"relationship_type_map entry '{name}' maps to itself and has no effect"
                )

    base_url = config_dict.get("base_url")
    if isinstance(base_url, str) and base_url.strip():
        stripped = base_url.strip()
        if not stripped.startswith(("http://", "https://", "/")):
            warning_messages.append(
                f"base_url '{stripped}' is neither absolute nor root-relative; links will be relative"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
