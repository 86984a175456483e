"""Configuration models and loading."""

from .loader import ConfigError, load_config, load_yaml
from .models import RuntimeSpecConfig, SyspromptConfig

__all__ = [
    "ConfigError",
    "RuntimeSpecConfig",
    "SyspromptConfig",
    "load_config",
    "load_yaml",
]
