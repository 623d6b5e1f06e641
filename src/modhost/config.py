"""Path resolution, module configuration files and environment settings."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ArgumentError, ConfigError, NotFoundError

CONFIG_SUFFIX = ".config"

PathLike = str | os.PathLike[str]


def default_config_path(module_path: Path) -> Path | None:
    """Return ``<module_path>.config`` when that file exists."""

    candidate = module_path.with_name(module_path.name + CONFIG_SUFFIX)
    if candidate.is_file():
        return candidate
    return None


def resolve_paths(
    module_path: PathLike | None,
    config_path: PathLike | None = None,
) -> tuple[Path, Path | None]:
    """Validate and absolutize the module and configuration paths.

    The module must be an existing file. An explicit configuration path must
    exist too; without one the default ``.config`` sibling is looked up.
    """

    if module_path is None or not os.fspath(module_path):
        raise ArgumentError("module_path must not be empty")

    module = Path(os.path.abspath(os.fspath(module_path)))
    if not module.is_file():
        raise NotFoundError(f"Module file not found: {module}")

    if config_path is None:
        return module, default_config_path(module)

    if not os.fspath(config_path):
        raise ArgumentError("config_path must not be empty when given")
    config = Path(os.path.abspath(os.fspath(config_path)))
    if not config.is_file():
        raise NotFoundError(f"Configuration file not found: {config}")
    return module, config


def load_config(path: Path | None) -> dict[str, Any]:
    """Parse a module configuration file; ``None`` yields an empty mapping."""

    if path is None:
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read configuration file {path}", exc) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file {path} must contain a mapping, not {type(data).__name__}"
        )
    return data


class ModHostSettings(BaseSettings):
    """Environment driven settings for execution contexts."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    start_method: str = Field(default="spawn", alias="MODHOST_START_METHOD")
    staging_root: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        alias="MODHOST_STAGING_ROOT",
    )
    log_level: str = Field(default="WARNING", alias="MODHOST_LOG_LEVEL")


def load_settings() -> ModHostSettings:
    """Return settings initialised from environment."""

    return ModHostSettings()
