"""Configuration file loading and CLI overrides for runtime tunables.

Precedence, lowest to highest: Constants defaults, config file, CLI flags.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

from constants import Constants

logger = logging.getLogger(__name__)

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "archive_pattern": {"type": "string", "minLength": 1},
        "max_workers": {"type": "integer", "minimum": 1},
        "archive_timeout_sec": {
            "anyOf": [{"type": "number", "exclusiveMinimum": 0}, {"type": "null"}]
        },
    },
}

# config key -> Constants attribute
_CONFIG_KEYS = {
    "archive_pattern": "ARCHIVE_PATTERN",
    "max_workers": "MAX_WORKERS",
    "archive_timeout_sec": "ARCHIVE_TIMEOUT_SEC",
}


class ConfigError(ValueError):
    """Raised when a configuration file is missing, unparsable, or invalid."""


def validate_config(data: Dict[str, Any]) -> None:
    """Validate a config mapping and raise on the first error."""
    validator = Draft7Validator(CONFIG_SCHEMA)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise ConfigError(f"Invalid config at '{path}': {first.message}")


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load and validate a YAML (or JSON) configuration file.

    Args:
        config_path: Path to the file; None or empty yields an empty config.

    Returns:
        The validated configuration mapping.

    Raises:
        ConfigError: If the file is missing, unparsable, or fails validation.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")
    validate_config(data)
    return data


def apply_config(config: Dict[str, Any]) -> None:
    """Copy recognized config values onto Constants."""
    for key, attr in _CONFIG_KEYS.items():
        if key in config:
            setattr(Constants, attr, config[key])
            logger.debug("Config override %s=%r", attr, config[key])


def apply_cli_overrides(args) -> None:
    """Apply CLI overrides for resolution tunables (highest precedence)."""
    workers = getattr(args, "WORKERS", None)
    if workers is not None:
        if workers < 1:
            raise ConfigError(f"--workers must be at least 1, got {workers}")
        Constants.MAX_WORKERS = workers
    timeout = getattr(args, "TIMEOUT", None)
    if timeout is not None:
        if timeout <= 0:
            raise ConfigError(f"--timeout must be positive, got {timeout}")
        Constants.ARCHIVE_TIMEOUT_SEC = timeout
