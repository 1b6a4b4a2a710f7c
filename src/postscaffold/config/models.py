"""
Pydantic models for validating scaffold configuration files.
"""

from __future__ import annotations

import tomllib
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..categories import Category, CategorySpec, get_category_spec, parse_category

CONFIG_FILENAME = "scaffold.toml"


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class CategoryOverride(BaseModel):
    """
    Per-category replacement of the built-in scaffolding rules.

    Attributes:
        name: CLI name of the category being overridden (e.g., "article").
        branch_prefix: New branch prefix; an empty string disables branch creation.
        kind: Hugo archetype to use instead of the default.
        path: Content path template; must contain ``{slug}`` and may use ``{year}``.
    """
    name: Category
    branch_prefix: Optional[str] = None
    kind: Optional[str] = None
    path: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("name", mode="before")
    @classmethod
    def _parse_name(cls, value: Any) -> Category:
        if isinstance(value, str):
            return parse_category(value)
        return value

    @field_validator("kind")
    @classmethod
    def _kind_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("kind must not be blank")
        return value

    @field_validator("path")
    @classmethod
    def _path_has_slug(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if "{slug}" not in value:
            raise ValueError("path must contain the {slug} placeholder")
        try:
            value.format(slug="x", year=2000)
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"path may only use the {{slug}} and {{year}} placeholders ({exc})") from exc
        return value


class ScaffoldConfig(BaseModel):
    """
    Top-level configuration for the scaffold command.

    Attributes:
        default_branch: Branch checked out and pulled before scaffolding.
        git: Executable used for version-control commands.
        hugo: Executable used to create content.
        pull: Whether to pull the default branch before scaffolding.
        categories: Overrides for the built-in category table.
    """
    default_branch: str = "master"
    git: str = "git"
    hugo: str = "hugo"
    pull: bool = True
    categories: List[CategoryOverride] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("default_branch", "git", "hugo")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @model_validator(mode="after")
    def _unique_overrides(self) -> "ScaffoldConfig":
        seen: set[Category] = set()
        for override in self.categories:
            if override.name in seen:
                raise ValueError(f"category '{override.name.value}' is configured more than once")
            seen.add(override.name)
        return self

    def category_spec(self, category: str | Category) -> CategorySpec:
        """
        Return the built-in rules for a category with any configured override applied.
        """
        spec = get_category_spec(category)
        for override in self.categories:
            if override.name != spec.category:
                continue
            changes: Dict[str, Any] = {}
            if override.branch_prefix is not None:
                changes["branch_prefix"] = override.branch_prefix.strip("/") or None
            if override.kind is not None:
                changes["kind"] = override.kind
            if override.path is not None:
                changes["path_template"] = override.path
            return replace(spec, **changes)
        return spec


def find_config(repo: Path | str) -> Optional[Path]:
    """Return ``<repo>/scaffold.toml`` if it exists."""
    candidate = Path(repo).expanduser().resolve() / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Path | str) -> ScaffoldConfig:
    """
    Load and validate a TOML config file into a ScaffoldConfig instance.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated ScaffoldConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    raw_data = _normalize_toml_schema(raw_data)

    try:
        return ScaffoldConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """
    Map the singular ``[[category]]`` table array onto the ``categories`` field.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a TOML table/object.")
    if "categories" in data:
        raise ConfigError("Use [[category]] blocks (singular) instead of [[categories]].")

    normalized = dict(data)
    normalized["categories"] = _coerce_table_array(normalized.pop("category", None), "category")
    return normalized


def _coerce_table_array(value: Any, label: str) -> list[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise ConfigError(f"Each [[{label}]] entry must be a table/object.")
        return value
    raise ConfigError(f"Invalid [{label}] block; expected a table or array of tables.")
