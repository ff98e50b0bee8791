"""
Configuration for the rootdigits command line.

Settings come from an optional YAML file layered over built-in defaults.
Values may reference environment variables as ${VAR_NAME}.
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger("rootdigits")

DEFAULTS: Dict[str, Any] = {
    "memoizer": {"chunk_size": 100},
    "logging": {"level": "INFO", "file": None},
    "cli": {"digits": 1000},
}


class ConfigManager:
    """Loads settings and serves them by dotted key."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Args:
            config_path: YAML file to load; None means defaults only
        """
        self.config_path = Path(config_path) if config_path else None
        self.settings = copy.deepcopy(DEFAULTS)
        if self.config_path is not None:
            self.load()

    def load(self) -> None:
        """Read the YAML file and merge it over the defaults."""
        if not self.config_path.exists():
            logger.warning(f"Config file not found: {self.config_path}, using defaults")
            return

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                content = self._replace_env_vars(f.read())
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse config {self.config_path}: {e}")
            raise

        if not isinstance(data, dict):
            raise ValueError(f"rootdigits: config {self.config_path} must be a mapping")
        _merge(self.settings, data)
        logger.debug(f"Loaded config: {self.config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a setting.

        Args:
            key: dotted key such as 'memoizer.chunk_size'
            default: returned when the key is missing or None

        Returns:
            The setting value
        """
        value = self.settings
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def _replace_env_vars(self, content: str) -> str:
        def replace_func(match):
            return os.getenv(match.group(1), match.group(0))

        return re.sub(r"\$\{([^}]+)\}", replace_func, content)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
