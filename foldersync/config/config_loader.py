"""
Configuration Loader

Handles loading and merging configuration from an optional YAML file,
environment variables and command-line overrides.

Author: foldersync Project
License: MIT
"""

import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dotenv import load_dotenv

from .schema import Config


class ConfigLoader:
    """
    Configuration loader and manager.

    Precedence, lowest first: YAML file, environment variables, explicit
    overrides (the command line).
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to a YAML configuration file. If None, uses
                SYNC_CONFIG_PATH when set; without either, defaults apply.
        """
        # Load environment variables from .env if present
        load_dotenv()

        self.config_path = config_path or os.getenv("SYNC_CONFIG_PATH")
        self._config: Optional[Config] = None

    def load(self, overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Config:
        """
        Load and validate configuration.

        Args:
            overrides: Per-section values that win over file and
                environment, e.g. {"sync": {"source_path": "/data"}}.
                None values are ignored.

        Returns:
            Validated Config object

        Raises:
            ValueError: If YAML parsing or configuration validation fails
        """
        config_data = self._load_yaml()
        config_data = self._merge_env_vars(config_data)
        config_data = self._merge_overrides(config_data, overrides or {})

        self._config = Config(**config_data)
        return self._config

    def _load_yaml(self) -> Dict[str, Any]:
        """
        Load YAML configuration file.

        Returns:
            Dictionary with configuration data
        """
        if not self.config_path:
            return self._create_default_config()

        config_file = Path(self.config_path)

        # If config doesn't exist, use defaults
        if not config_file.exists():
            return self._create_default_config()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML config: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"YAML config must be a mapping: {config_file}")
        return data

    def _create_default_config(self) -> Dict[str, Any]:
        """
        Create default configuration structure.

        Source and replica have no defaults and must come from the
        environment or the command line.

        Returns:
            Default configuration dictionary
        """
        return {
            "sync": {
                "hash_algorithm": "sha256"
            },
            "scheduling": {
                "interval_seconds": 60
            },
            "logging": {
                "log_file_path": "foldersync.log",
                "log_level": "INFO",
                "log_to_console": True,
                "json_format": False
            }
        }

    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge environment variables into configuration.

        Environment variables override config file values.

        Args:
            config_data: Configuration dictionary from file

        Returns:
            Merged configuration dictionary
        """
        # Sync settings
        if os.getenv("SYNC_SOURCE_PATH"):
            config_data.setdefault("sync", {})["source_path"] = os.getenv("SYNC_SOURCE_PATH")
        if os.getenv("SYNC_REPLICA_PATH"):
            config_data.setdefault("sync", {})["replica_path"] = os.getenv("SYNC_REPLICA_PATH")
        if os.getenv("SYNC_HASH_ALGORITHM"):
            config_data.setdefault("sync", {})["hash_algorithm"] = os.getenv("SYNC_HASH_ALGORITHM")

        # Scheduling
        if os.getenv("SYNC_INTERVAL"):
            try:
                interval = int(os.getenv("SYNC_INTERVAL"))
            except ValueError:
                raise ValueError(f"SYNC_INTERVAL must be an integer: {os.getenv('SYNC_INTERVAL')}")
            config_data.setdefault("scheduling", {})["interval_seconds"] = interval

        # Logging
        if os.getenv("SYNC_LOG_FILE"):
            config_data.setdefault("logging", {})["log_file_path"] = os.getenv("SYNC_LOG_FILE")
        if os.getenv("SYNC_LOG_LEVEL"):
            config_data.setdefault("logging", {})["log_level"] = os.getenv("SYNC_LOG_LEVEL")
        if os.getenv("SYNC_JSON_LOGS"):
            config_data.setdefault("logging", {})["json_format"] = os.getenv("SYNC_JSON_LOGS").lower() == "true"

        return config_data

    def _merge_overrides(
        self,
        config_data: Dict[str, Any],
        overrides: Dict[str, Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Apply per-section overrides, skipping unset (None) values."""
        for section, values in overrides.items():
            target = config_data.setdefault(section, {})
            for key, value in values.items():
                if value is not None:
                    target[key] = value
        return config_data

    def save(self, config: Config, path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Config object to save
            path: Path to save to (uses loader path if None)
        """
        save_path = Path(path or self.config_path or "foldersync.yaml")
        save_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = config.model_dump(mode="json")

        with open(save_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

    def reload(self, overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Config:
        """
        Reload configuration from file.

        Returns:
            Reloaded Config object
        """
        return self.load(overrides)

    @property
    def config(self) -> Optional[Config]:
        """Get the current configuration object."""
        return self._config


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Dict[str, Any]]] = None
) -> Config:
    """
    Convenience function to load configuration.

    Args:
        config_path: Optional path to config file
        overrides: Per-section values that win over file and environment

    Returns:
        Loaded and validated Config object
    """
    loader = ConfigLoader(config_path)
    return loader.load(overrides)
