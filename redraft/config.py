"""
Configuration management for Redraft.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to tune editing behaviour (history depth, autosave
delay), storage keys and logging without changing code.
"""

import copy
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG: Dict[str, Any] = {
    "editing": {
        "history_capacity": 100,
        "autosave_delay": 1.5,
    },
    "storage": {
        "filename": "redraft.db",
        "default_key": "default",
        "summary_prefix": "summary",
        "prepare_doc_prefix": "prepare-doc",
        "template_prefix": "prepare-doc-template",
    },
    "documents": {
        "words_per_minute": 200,
        "default_title": "Document",
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "file": None,
    },
}


class ConfigManager:
    """
    Manages configuration loading and access for Redraft.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file, layered over the defaults."""
        config = self._get_default_config()
        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}

            if not isinstance(loaded, dict):
                raise ValueError(f"Configuration root must be a mapping: {self.config_path}")

            _merge(config, loaded)
            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, ValueError, yaml.YAMLError) as e:
            logging.debug(f"Using default configuration: {e}")

        self._config = config

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return copy.deepcopy(DEFAULT_CONFIG)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "editing.autosave_delay")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("editing.history_capacity")  # Returns 100
            config.get("storage.summary_prefix")  # Returns "summary"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def history_capacity(self) -> int:
        """Maximum entries kept on each of the undo and redo stacks."""
        return int(self.get("editing.history_capacity", 100))

    @property
    def autosave_delay(self) -> float:
        """Quiet period in seconds before an edit is committed."""
        return float(self.get("editing.autosave_delay", 1.5))

    @property
    def database_filename(self) -> str:
        """Get database filename."""
        return self.get("storage.filename", "redraft.db")

    @property
    def default_storage_key(self) -> str:
        """Key suffix used when no conversation identifier is available."""
        return self.get("storage.default_key", "default")

    @property
    def summary_key_prefix(self) -> str:
        return self.get("storage.summary_prefix", "summary")

    @property
    def prepare_doc_key_prefix(self) -> str:
        return self.get("storage.prepare_doc_prefix", "prepare-doc")

    @property
    def template_key_prefix(self) -> str:
        return self.get("storage.template_prefix", "prepare-doc-template")

    @property
    def words_per_minute(self) -> int:
        """Reading speed used for document statistics."""
        return int(self.get("documents.words_per_minute", 200))

    @property
    def default_title(self) -> str:
        return self.get("documents.default_title", "Document")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base, in place."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


def setup_logging(config_manager: Optional[ConfigManager] = None) -> None:
    """Configure logging for the application."""
    manager = config_manager or config
    level = getattr(logging, str(manager.get("logging.level", "INFO")).upper(), logging.INFO)
    format_str = manager.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = manager.get("logging.file")

    handlers: list = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=format_str, handlers=handlers)


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
