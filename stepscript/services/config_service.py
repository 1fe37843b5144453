"""
ConfigService - Configuration file management with migration support.

Handles loading, saving, and migrating config.json files while
ensuring backwards compatibility with existing configurations.
"""

import json
import os
import time
from typing import Any, Dict, Optional

from ..logging import logger
from ..models.config import CONFIG_VERSION, SequencerConfig


class ConfigService:
    """
    Service for managing sequencer configuration.

    Provides:
    - Loading/saving config.json
    - Automatic migration of old config formats
    - Safe handling of corrupted files
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config service.

        Args:
            config_path: Path to config.json. Defaults to 'config.json' in current dir.
        """
        self._config_path = config_path or "config.json"
        self._config: Optional[SequencerConfig] = None

    def get_config_path(self) -> str:
        """Get the path to the configuration file."""
        return self._config_path

    def load(self) -> SequencerConfig:
        """
        Load configuration from disk.

        If the file doesn't exist, returns default config.
        If the file is corrupted, backs it up and returns default config.
        If the file is old format, migrates it automatically.

        Returns:
            SequencerConfig instance
        """
        if not os.path.exists(self._config_path):
            self._config = SequencerConfig()
            return self._config

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                raw_data = json.load(f)

            if not isinstance(raw_data, dict):
                raise ValueError("Config root must be an object")

            # Check version and migrate if needed
            version = raw_data.get("_version", 0)
            if version < CONFIG_VERSION:
                raw_data = self._migrate(raw_data, version)
                self._save_raw(raw_data)

            self._config = SequencerConfig.from_dict(raw_data)
            return self._config

        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Corrupted config {self._config_path}: {e}")
            self._backup_corrupted()
            self._config = SequencerConfig()
            return self._config

    def save(self, config: Optional[SequencerConfig] = None) -> None:
        """
        Save configuration to disk.

        Args:
            config: SequencerConfig to save. Uses cached config if None.
        """
        if config is not None:
            self._config = config

        if self._config is None:
            self._config = SequencerConfig()

        self._save_raw(self._config.to_dict())

    def _save_raw(self, data: Dict[str, Any]) -> None:
        """Save raw dictionary to config file."""
        with open(self._config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)

    def _backup_corrupted(self) -> None:
        """Backup a corrupted config file next to the original."""
        if not os.path.exists(self._config_path):
            return

        directory, filename = os.path.split(self._config_path)
        stem = os.path.splitext(filename)[0]
        timestamp = int(time.time())
        backup_path = os.path.join(directory, f"{stem}-{timestamp}-.broken.json")
        try:
            os.rename(self._config_path, backup_path)
        except OSError as e:
            logger.warning(f"Could not back up corrupted config: {e}")

    def _migrate(self, data: Dict[str, Any], from_version: int) -> Dict[str, Any]:
        """
        Apply migrations sequentially from old version to current.

        Args:
            data: Raw config dictionary
            from_version: Version to migrate from

        Returns:
            Migrated config dictionary
        """
        migrations = {
            0: self._migrate_v0_to_v1,
        }

        current = dict(data)
        for v in range(from_version, CONFIG_VERSION):
            if v in migrations:
                current = migrations[v](current)

        current["_version"] = CONFIG_VERSION
        return current

    def _migrate_v0_to_v1(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Migrate from unversioned config to v1.

        NEVER removes keys - only adds.
        """
        result = dict(data)
        result.setdefault("deduplicate_branch_activations", False)
        result.setdefault("debug_logging", False)
        result.setdefault("use_event_bus", False)
        return result

    def get(self) -> SequencerConfig:
        """Get the current config, loading if necessary."""
        if self._config is None:
            return self.load()
        return self._config


class MockConfigService(ConfigService):
    """
    Mock ConfigService for testing.

    Stores config in memory instead of disk.
    """

    def __init__(self, config: Optional[SequencerConfig] = None):
        super().__init__("/dev/null")  # Won't actually be used
        self._config = config or SequencerConfig()
        self._saved_configs: list = []

    def load(self) -> SequencerConfig:
        return self._config

    def save(self, config: Optional[SequencerConfig] = None) -> None:
        if config is not None:
            self._config = config
        self._saved_configs.append(self._config.to_dict())

    def get_saved_configs(self) -> list:
        """Get list of all configs that were saved (for testing)."""
        return self._saved_configs
