"""Settings manager for plugin settings.yaml files.

Manages three-scope settings system:
- User global (~/.pnp-plugin/settings.yaml)
- Project (.pnp-plugin/settings.yaml)
- Local (.pnp-plugin/settings.local.yaml)

Two sections are recognized: ``plugin`` (PluginSettings) and ``build``
(BuildOptions).
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from .errors import ConfigurationError
from .models import ImportKind

logger = logging.getLogger(__name__)

SCOPES = ("user", "project", "local")


class BuildOptions(BaseModel):
    """Build-wide options read once when the plugin is set up."""

    external: list[str] = Field(default_factory=list)
    platform: str = "browser"
    conditions: list[str] = Field(default_factory=list)


class PluginSettings(BaseModel):
    """Plugin options that can be set from settings files."""

    base_dir: str | None = None
    extensions: list[str] | None = None
    filter: str | None = None
    downgrade_kinds: list[ImportKind] | None = None
    provider: str | None = None

    @field_validator("filter")
    @classmethod
    def _check_filter(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid filter regex {value!r}: {e}") from e
        return value


class SettingsManager:
    """Manages settings across user/project/local scopes."""

    def __init__(self, settings_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            settings_dir: Base directory for project/local settings (for testing).
                          If None, uses .pnp-plugin in current directory.
            user_dir: Base directory for user settings (for testing).
                      If None, uses ~/.pnp-plugin.
        """
        if settings_dir is None:
            settings_dir = Path(".pnp-plugin")
        if user_dir is None:
            user_dir = Path.home() / ".pnp-plugin"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = settings_dir / "settings.yaml"
        self.local_settings_file = settings_dir / "settings.local.yaml"

    def _scope_file(self, scope: str) -> Path:
        file_map = {
            "user": self.user_settings_file,
            "project": self.project_settings_file,
            "local": self.local_settings_file,
        }
        if scope not in file_map:
            raise ConfigurationError(f"Unknown settings scope '{scope}' (expected one of {', '.join(SCOPES)})")
        return file_map[scope]

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. User settings
        2. Project settings
        3. Local settings

        Returns:
            Merged settings dictionary
        """
        merged: dict[str, Any] = {}
        for scope in SCOPES:
            settings = self._read_settings(self._scope_file(scope))
            if settings:
                merged = self._deep_merge(merged, settings)
        return merged

    def load_plugin_settings(self) -> PluginSettings:
        """Validate the merged ``plugin`` section.

        Raises:
            ConfigurationError: Section is malformed
        """
        return self._validate("plugin", PluginSettings)

    def load_build_options(self) -> BuildOptions:
        """Validate the merged ``build`` section.

        Raises:
            ConfigurationError: Section is malformed
        """
        return self._validate("build", BuildOptions)

    def set_value(self, section: str, key: str, value: Any, scope: str = "project") -> None:
        """Set a single settings value in one scope.

        Args:
            section: "plugin" or "build"
            key: Key inside the section
            value: Value to store
            scope: "user", "project", or "local"
        """
        if section not in ("plugin", "build"):
            raise ConfigurationError(f"Unknown settings section '{section}'")
        target_file = self._scope_file(scope)
        self._update_settings(target_file, {section: {key: value}})
        logger.info(f"Set {scope} {section}.{key} = {value!r}")

    def _validate(self, section: str, model: type[BaseModel]) -> Any:
        data = self.get_merged_settings().get(section) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings section '{section}' must be a mapping")
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid '{section}' settings: {e}") from e

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Args:
            path: Path to settings file

        Returns:
            Settings dict or None if file doesn't exist
        """
        if not path.exists():
            return None

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
                return data if data else {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

    def _write_settings(self, path: Path, settings: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, "w") as f:
                yaml.dump(settings, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            logger.error(f"Failed to write settings to {path}: {e}")
            raise

    def _update_settings(self, path: Path, updates: dict[str, Any]) -> None:
        existing = self._read_settings(path) or {}
        merged = self._deep_merge(existing, updates)
        self._write_settings(path, merged)

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            overlay: Overlay dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


__all__ = ["BuildOptions", "PluginSettings", "SettingsManager", "SCOPES"]
