"""
Configuration helpers for the scaffold command.
"""

from .models import CONFIG_FILENAME, CategoryOverride, ConfigError, ScaffoldConfig, find_config, load_config
from .settings import EnvOverrides, get_env_overrides, resolve_config

__all__ = [
    "CONFIG_FILENAME",
    "CategoryOverride",
    "ConfigError",
    "ScaffoldConfig",
    "find_config",
    "load_config",
    "EnvOverrides",
    "get_env_overrides",
    "resolve_config",
]
