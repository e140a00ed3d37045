"""Persistent settings storage.

Settings are stored as YAML at ``~/.config/kubedeck/settings.yaml``. The
``KUBEDECK_CONFIG`` environment variable points to an alternative file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kubedeck.models.state.app_settings import (
    AppSettings,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "KUBEDECK_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/kubedeck/settings.yaml")


class ConfigManager:
    """Load and save :class:`AppSettings`."""

    @staticmethod
    def config_path(path: str | Path | None = None) -> Path:
        """Resolve the settings file location.

        Args:
            path: Explicit path (``--config``); wins over the environment.
        """
        if path:
            return Path(path).expanduser()
        env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if env_path:
            return Path(env_path).expanduser()
        return DEFAULT_CONFIG_PATH.expanduser()

    @classmethod
    def load(cls, path: str | Path | None = None) -> AppSettings:
        """Load settings, returning defaults when no file exists yet.

        Raises:
            ConfigLoadError: The file exists but cannot be read or validated.
        """
        config_file = cls.config_path(path)
        if not config_file.is_file():
            logger.debug("No settings file at %s, using defaults", config_file)
            return AppSettings()

        try:
            with open(config_file, encoding="utf-8") as handle:
                content: Any = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"Cannot read {config_file}: {e}") from e

        if content is None:
            return AppSettings()
        if not isinstance(content, dict):
            raise ConfigLoadError(f"{config_file} must contain a mapping")

        try:
            return AppSettings.model_validate(content)
        except ValidationError as e:
            raise ConfigLoadError(f"Invalid settings in {config_file}: {e}") from e

    @classmethod
    def save(cls, settings: AppSettings, path: str | Path | None = None) -> Path:
        """Write settings to disk.

        Raises:
            ConfigSaveError: The file cannot be written.
        """
        config_file = cls.config_path(path)
        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, "w", encoding="utf-8") as handle:
                yaml.safe_dump(settings.model_dump(), handle, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigSaveError(f"Cannot write {config_file}: {e}") from e
        return config_file


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "ConfigManager",
]
