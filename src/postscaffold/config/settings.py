"""
Environment overrides for the scaffold configuration.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models import ConfigError, ScaffoldConfig, find_config, load_config

logger = logging.getLogger(__name__)


def _load_dotenv() -> None:
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=True)


_load_dotenv()


class EnvOverrides(BaseModel):
    """
    Settings read from environment variables.

    Attributes:
        default_branch: Replaces ``default_branch`` from the config file.
        git: Replaces the git executable.
        hugo: Replaces the hugo executable.
    """
    default_branch: Optional[str] = Field(default=None, alias="SCAFFOLD_DEFAULT_BRANCH")
    git: Optional[str] = Field(default=None, alias="SCAFFOLD_GIT")
    hugo: Optional[str] = Field(default=None, alias="SCAFFOLD_HUGO")

    model_config = {
        "populate_by_name": True,
    }


def get_env_overrides() -> EnvOverrides:
    """
    Read overrides from the process environment (after any project .env was loaded).
    """
    values = {field.alias: os.getenv(field.alias) or None for field in EnvOverrides.model_fields.values()}
    return EnvOverrides(**values)


def resolve_config(repo: Path | str, config_path: Optional[Path | str] = None) -> ScaffoldConfig:
    """
    Build the effective configuration for a run.

    Precedence is built-in defaults, then the config file (explicit path or
    ``<repo>/scaffold.toml``), then environment variables.

    Raises:
        ConfigError: If the config file is missing or invalid.
    """
    path = Path(config_path) if config_path is not None else find_config(repo)
    if path is not None:
        logger.debug("Loading configuration from %s", path)
        config = load_config(path)
    else:
        config = ScaffoldConfig()

    overrides = get_env_overrides().model_dump(exclude_none=True)
    if not overrides:
        return config
    logger.debug("Applying environment overrides: %s", ", ".join(sorted(overrides)))
    try:
        return ScaffoldConfig.model_validate({**config.model_dump(), **overrides})
    except ValueError as exc:
        raise ConfigError(f"Invalid environment override: {exc}") from exc
