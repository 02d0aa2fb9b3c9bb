"""Configuration management for fink-selfupdate.

This module provides the YAML-backed preference store: a flat mapping of
CamelCase keys, read with defaults, updated in memory and saved durably.
The file location follows the XDG Base Directory Specification unless
overridden.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import structlog
import yaml

from .errors import ConfigError
from .models import Settings

logger = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "FINK_SELFUPDATE_CONFIG"


def get_config_dir() -> Path:
    """Get the configuration directory following XDG spec.

    Returns:
        Path to the configuration directory.
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    return base / "fink-selfupdate"


def get_default_config_path() -> Path:
    """Get the default configuration file path.

    ``FINK_SELFUPDATE_CONFIG`` takes precedence over the XDG location.

    Returns:
        Path to the default config file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_config_dir() / "config.yaml"


class YamlConfigLoader:
    """Loads and saves the flat key/value mapping from/to a YAML file."""

    def load(self, path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file.

        Args:
            path: Path to the configuration file.

        Returns:
            Configuration dictionary.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ConfigError: If the file is not a valid YAML mapping.
        """
        if not path.exists():
            logger.debug("config_file_not_found", path=str(path))
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text())
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping of settings")

        return data

    def save(self, data: dict[str, Any], path: Path) -> None:
        """Save configuration to a YAML file.

        The file is written next to the target and renamed into place.

        Raises:
            ConfigError: If the file cannot be written.
        """
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
            tmp_path.replace(path)
        except OSError as e:
            raise ConfigError(f"Cannot write {path}: {e}") from e

        logger.info("config_saved", path=str(path))


class ConfigManager:
    """Preference store of the package manager.

    Values are kept as they appear in the file; :meth:`get_settings`
    returns the typed view.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to configuration file.
                        Uses default path if not provided.
        """
        self.config_path = config_path or get_default_config_path()
        self._loader = YamlConfigLoader()
        self._params: dict[str, Any] | None = None

    def load(self) -> dict[str, Any]:
        """Load configuration from file.

        Returns:
            The raw parameters, or an empty mapping if the file doesn't exist.
        """
        try:
            self._params = self._loader.load(self.config_path)
        except FileNotFoundError:
            logger.info("using_default_config", path=str(self.config_path))
            self._params = {}
        return self._params

    @property
    def params(self) -> dict[str, Any]:
        if self._params is None:
            return self.load()
        return self._params

    def param_default(self, key: str, default: str = "") -> str:
        """Get a parameter as a string, falling back to ``default``.

        Args:
            key: Parameter name as spelled in the file.
            default: Value returned when the key is missing or empty.
        """
        value = self.params.get(key)
        if value is None or value == "":
            return default
        return str(value)

    def set_param(self, key: str, value: Any) -> None:
        """Set a parameter in memory. Call :meth:`save` to persist it."""
        self.params[key] = value
        logger.debug("config_param_set", key=key, value=value)

    def save(self) -> None:
        """Persist all parameters.

        Raises:
            ConfigError: If the file cannot be written.
        """
        self._loader.save(self.params, self.config_path)

    def get_settings(self) -> Settings:
        """Return the typed view of the current parameters.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        try:
            return Settings.model_validate(self.params)
        except ValueError as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}") from e
