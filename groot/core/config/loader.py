"""
Configuration loader — reads groot.yml into a resolution profile.

A profile tells the CLI (or a host program) how to resolve the root
without hard-coding it: which strategy, which marker, which env files,
and which key to store the root under.  It reads YAML, validates it
against a Pydantic schema, and returns a typed profile.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from groot.core.context import DEFAULT_ROOT_KEY
from groot.core.errors import ConfigError
from groot.core.paths import ancestors_of

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "groot.yml"


class ResolutionProfile(BaseModel):
    """How the root should be resolved."""

    root_key: str = DEFAULT_ROOT_KEY
    strategy: Literal["marker", "git", "path"] = "marker"
    marker: str = ""
    env_files: list[str] = Field(default_factory=list)
    require_env: bool = False
    path: str = ""

    @field_validator("root_key")
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("root_key cannot be empty")
        return value

    @model_validator(mode="after")
    def _strategy_inputs(self) -> "ResolutionProfile":
        if self.strategy == "marker" and not self.marker.strip():
            raise ValueError("strategy 'marker' needs a marker filename")
        if self.strategy == "path" and not self.path.strip():
            raise ValueError("strategy 'path' needs a path")
        return self


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for groot.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to groot.yml, or None if not found.
    """
    for directory in ancestors_of((start_dir or Path.cwd()).resolve()):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def load_profile(path: Path | None = None) -> ResolutionProfile:
    """Load and validate a resolution profile.

    Args:
        path: Explicit path to groot.yml. If None, searches upward.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(f"No {CONFIG_FILE} found. Pass --marker, --git or --path, or specify --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading resolution profile from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Accept the profile nested under a "groot" key as well as flat
    if isinstance(data.get("groot"), dict):
        data = data["groot"]

    try:
        profile = ResolutionProfile.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid resolution profile: {e}") from e

    logger.info("Loaded '%s' resolution profile from %s", profile.strategy, path)
    return profile
