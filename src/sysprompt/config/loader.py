"""YAML configuration file loading with Pydantic validation."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .models import SyspromptConfig


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Raises:
        ConfigError: If the file cannot be read or parsed, or does not
            contain a mapping.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except OSError as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top level of {path}")
    return data


def load_config(path: Optional[Path] = None) -> SyspromptConfig:
    """Load and validate the configuration file.

    Args:
        path: YAML file to load. None returns the defaults.

    Raises:
        ConfigError: If validation fails.
    """
    if path is None:
        return SyspromptConfig()

    data = load_yaml(path)
    try:
        return SyspromptConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e
