#!/usr/bin/env python3
"""
sectiondiff Configuration Management
"""

import copy
import os
from pathlib import Path
from typing import Any

from .config_store import ConfigStore

MISSING_SECTION_POLICIES = ("drop", "report")
KEY_MODES = ("name", "relative", "strict")
CONTAINER_FORMATS = ("auto", "elf", "pe")


class Config:
    """Configuration manager for sectiondiff"""

    DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
        "comparison": {
            "format": "auto",
            "skip_nobits": False,
            "missing_sections": "report",
        },
        "matrix": {
            "missing_sections": "drop",
            "max_workers": 1,
            "fail_fast": True,
            "cache_sections": True,
            "key_by": "name",
        },
        "output": {
            "json_indent": 4,
            "csv_missing_value": "0",
            "csv_directory": ".",
            "write_csv": True,
            "write_json": True,
        },
    }

    def __init__(self, config_path: str | None = None):
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.config_path = config_path or self._get_default_config_path()

        # Load configuration if exists
        if os.path.exists(self.config_path):
            self.load_config()

    def _get_default_config_path(self) -> str:
        """Get default configuration file path"""
        return str(Path.home() / ".sectiondiff" / "config.json")

    def load_config(self) -> None:
        """Load configuration from file"""
        user_config = ConfigStore.load(self.config_path)
        if user_config:
            self._merge_config(user_config)

    def save_config(self) -> None:
        """Save configuration to file"""
        ConfigStore.save(self.config_path, self.config)

    def _merge_config(self, user_config: dict[str, Any]) -> None:
        """Merge user configuration with defaults"""
        for section, settings in user_config.items():
            if section in self.config and isinstance(settings, dict):
                self.config[section].update(settings)
            else:
                self.config[section] = settings
        self.validate()

    def apply_overrides(self, overrides: dict[str, dict[str, Any]]) -> None:
        """Apply CLI overrides; ``None`` values leave the current setting untouched"""
        for section, settings in overrides.items():
            for key, value in settings.items():
                if value is not None:
                    self.set(section, key, value)
        self.validate()

    def validate(self) -> None:
        """Raise ValueError for settings outside their allowed values"""
        checks = (
            ("comparison", "missing_sections", MISSING_SECTION_POLICIES),
            ("matrix", "missing_sections", MISSING_SECTION_POLICIES),
            ("comparison", "format", CONTAINER_FORMATS),
            ("matrix", "key_by", KEY_MODES),
        )
        for section, key, allowed in checks:
            value = self.get(section, key)
            if value not in allowed:
                raise ValueError(
                    f"Invalid {section}.{key} '{value}' (expected one of {', '.join(allowed)})"
                )
        workers = self.get("matrix", "max_workers")
        if not isinstance(workers, int) or workers < 1:
            raise ValueError(f"Invalid matrix.max_workers '{workers}' (expected integer >= 1)")

    def get(self, section: str, key: str | None = None, default: Any = None) -> Any:
        """Get configuration value"""
        if key is None:
            return self.config.get(section, default)
        return self.config.get(section, {}).get(key, default)

    def set(self, section: str, key: str, value: Any) -> None:
        """Set configuration value"""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value

    def __getitem__(self, key):
        """Allow dict-like access"""
        return self.config[key]

    def __contains__(self, key):
        """Allow 'in' operator"""
        return key in self.config
