"""Layered YAML settings for steering.

Settings live in three files, merged with later scopes overriding earlier ones:

1. User: ``$CODEX_HOME/settings.yaml``
2. Project: ``<repo_root>/.codex/settings.yaml``
3. Local: ``<repo_root>/.codex/settings.local.yaml``

Only the ``steering`` section is interpreted here::

    steering:
      enabled: true
      doc_max_bytes: 32768
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .discovery import discover_repo_root
from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .models import DEFAULT_DOC_MAX_BYTES
from .models import SettingsPaths
from .models import SettingsScope
from .models import SteeringConfig
from .utils import deep_merge

logger = logging.getLogger(__name__)

CODEX_HOME_ENV = "CODEX_HOME"
STEERING_SECTION = "steering"


def resolve_codex_home(explicit: Path | None = None) -> Path:
    """Resolve the codex home directory.

    Precedence:
    1. Explicit argument
    2. ``CODEX_HOME`` environment variable
    3. ``~/.codex``
    """
    if explicit is not None:
        return Path(explicit).expanduser()

    env_home = os.getenv(CODEX_HOME_ENV)
    if env_home:
        return Path(env_home).expanduser()

    return Path.home() / ".codex"


def default_settings_paths(codex_home: Path, repo_root: Path) -> SettingsPaths:
    return SettingsPaths(
        user=codex_home / "settings.yaml",
        project=repo_root / ".codex" / "settings.yaml",
        local=repo_root / ".codex" / "settings.local.yaml",
    )


class SteeringSettings:
    """Reads and writes the steering section across user/project/local scopes.

    Args:
        paths: Settings file locations for all three scopes
    """

    def __init__(self, paths: SettingsPaths):
        self.paths = paths

    # ===== Reading =====

    def get_merged_settings(self) -> dict[str, Any]:
        """Merge user, project and local settings (local wins)."""
        merged: dict[str, Any] = {}
        for path in (self.paths.user, self.paths.project, self.paths.local):
            data = self._read_yaml(path)
            if data:
                merged = deep_merge(merged, data)
        return merged

    def is_steering_enabled(self) -> bool:
        """Return ``steering.enabled``, defaulting to True.

        Raises:
            ConfigValidationError: If the value is not a boolean
        """
        value = self._steering_section().get("enabled", True)
        if not isinstance(value, bool):
            raise ConfigValidationError(f"steering.enabled must be a boolean, got {value!r}")
        return value

    def get_doc_max_bytes(self) -> int:
        """Return ``steering.doc_max_bytes``, defaulting to 32 KiB.

        Raises:
            ConfigValidationError: If the value is not a non-negative integer
        """
        value = self._steering_section().get("doc_max_bytes", DEFAULT_DOC_MAX_BYTES)
        _validate_doc_max_bytes(value)
        return value

    def build_config(self, cwd: Path, codex_home: Path) -> SteeringConfig:
        return SteeringConfig(
            cwd=cwd,
            codex_home=codex_home,
            steering_enabled=self.is_steering_enabled(),
            steering_doc_max_bytes=self.get_doc_max_bytes(),
        )

    # ===== Writing =====

    def set_steering_enabled(self, enabled: bool, scope: SettingsScope = SettingsScope.LOCAL) -> None:
        """Turn steering on or off in the given scope (default: LOCAL)."""
        if not isinstance(enabled, bool):
            raise ConfigValidationError(f"steering.enabled must be a boolean, got {enabled!r}")
        self.update_settings({STEERING_SECTION: {"enabled": enabled}}, scope=scope)
        logger.info(f"Set steering.enabled={enabled} in {scope.value} scope")

    def set_doc_max_bytes(self, max_bytes: int, scope: SettingsScope = SettingsScope.PROJECT) -> None:
        """Set the steering byte budget in the given scope (default: PROJECT)."""
        _validate_doc_max_bytes(max_bytes)
        self.update_settings({STEERING_SECTION: {"doc_max_bytes": max_bytes}}, scope=scope)
        logger.info(f"Set steering.doc_max_bytes={max_bytes} in {scope.value} scope")

    def clear_steering_setting(self, key: str, scope: SettingsScope) -> bool:
        """Remove one key from the steering section of a scope.

        Returns:
            True if removed, False if it was not set
        """
        path = self.scope_to_path(scope)
        settings = self._read_yaml(path)

        if not settings or not isinstance(settings.get(STEERING_SECTION), dict):
            return False
        if key not in settings[STEERING_SECTION]:
            return False

        del settings[STEERING_SECTION][key]
        # Drop the section once it is empty
        if not settings[STEERING_SECTION]:
            del settings[STEERING_SECTION]

        self._write_yaml(path, settings)
        logger.info(f"Cleared steering.{key} from {scope.value} scope")
        return True

    def update_settings(self, updates: dict[str, Any], scope: SettingsScope = SettingsScope.PROJECT) -> None:
        """Deep merge ``updates`` into the settings file for ``scope``."""
        path = self.scope_to_path(scope)
        existing = self._read_yaml(path) or {}
        self._write_yaml(path, deep_merge(existing, updates))

    def scope_to_path(self, scope: SettingsScope) -> Path:
        scope_map = {
            SettingsScope.USER: self.paths.user,
            SettingsScope.PROJECT: self.paths.project,
            SettingsScope.LOCAL: self.paths.local,
        }
        return scope_map[scope]

    # ===== Private Helpers =====

    def _steering_section(self) -> dict[str, Any]:
        section = self.get_merged_settings().get(STEERING_SECTION) or {}
        if not isinstance(section, dict):
            raise ConfigValidationError(f"'{STEERING_SECTION}' settings must be a mapping, got {section!r}")
        return section

    def _read_yaml(self, path: Path) -> dict[str, Any] | None:
        """Read a settings file.

        Returns:
            Parsed mapping, {} for an empty file, or None if missing or unreadable
        """
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings in {path}: expected a mapping, got {type(data).__name__}")
            return None
        return data

    def _write_yaml(self, path: Path, data: dict[str, Any]) -> None:
        """Write a settings file, creating parent directories.

        Raises:
            ConfigFileError: If the write fails
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigFileError(f"Failed to write settings to {path}: {e}") from e


def load_config(cwd: Path | None = None, codex_home: Path | None = None) -> SteeringConfig:
    """Build a SteeringConfig from the environment and settings files.

    Args:
        cwd: Working directory (default: current directory)
        codex_home: Codex home override (default: resolved via ``resolve_codex_home``)

    Raises:
        SteeringIOError: If repository root detection fails
        ConfigValidationError: If a steering setting has an invalid value
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    home = resolve_codex_home(codex_home)
    repo_root = discover_repo_root(cwd)
    settings = SteeringSettings(default_settings_paths(home, repo_root))
    return settings.build_config(cwd, home)


def _validate_doc_max_bytes(value: Any) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigValidationError(f"steering.doc_max_bytes must be a non-negative integer, got {value!r}")
