"""
Configuration Loading Utilities.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

# Overrides ``api.base_url`` when set.
BASE_URL_ENV = "RESEARCH_CONNECT_API"

REQUIRED_SECTIONS = ("api", "auth", "logging")


def _convert_numeric_strings(obj: Any) -> Any:
    """
    Recursively convert numeric strings to floats/ints.

    Handles values like '10' or '1.5e1' written as quoted strings.
    """
    if isinstance(obj, dict):
        return {k: _convert_numeric_strings(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_numeric_strings(item) for item in obj]
    elif isinstance(obj, str):
        # Try to convert to number if it looks numeric
        try:
            if "." in obj or "e" in obj.lower():
                return float(obj)
            return int(obj)
        except ValueError:
            return obj
    return obj


def get_default_config() -> dict[str, Any]:
    """
    Get default configuration dictionary.

    Returns:
        Default configuration
    """
    return {
        "api": {
            "base_url": "http://localhost:8080/v1",
            "timeout": 10.0,
        },
        "auth": {
            "expiry_leeway_seconds": 30,
            "login_path": "/login?expired=true",
            "credentials_file": "~/.research_connect/credentials.json",
        },
        "logging": {
            "level": "WARNING",
        },
    }


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Let ``RESEARCH_CONNECT_API`` point the client at another backend."""
    base_url = os.getenv(BASE_URL_ENV)
    if base_url:
        config.setdefault("api", {})["base_url"] = base_url
    return config


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file; defaults only when None

    Returns:
        Configuration dictionary, defaults filled in for missing keys

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config = get_default_config()
    if config_path is None:
        return apply_env_overrides(config)

    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}

    # Convert any numeric strings (handles quoted timeouts and leeways)
    loaded = _convert_numeric_strings(loaded)

    # Validate required sections
    for section in REQUIRED_SECTIONS:
        if not isinstance(loaded.get(section), dict):
            loaded[section] = {}

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = copy.deepcopy(values)

    return apply_env_overrides(config)


def save_config(config: dict[str, Any], config_path: str | Path) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Output path
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
