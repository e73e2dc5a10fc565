"""Configuration management for the dirvish check."""

import os
import yaml
from typing import Dict, Any, Optional

from ..exceptions import ConfigurationError
from .config_validator import ConfigValidator


class ConfigManager:
    """Loads optional YAML configuration and merges command-line overrides."""

    DEFAULT_CONFIG_LOCATIONS = [
        "dirvish-check.yaml",
        "dirvish-check.yml",
        os.path.expanduser("~/.dirvish-check/config.yaml"),
        os.path.expanduser("~/.dirvish-check/config.yml"),
        "/etc/dirvish-check/config.yaml",
        "/etc/dirvish-check/config.yml"
    ]

    DEFAULTS = {
        'check': {
            'bank': None,
            'warning_days': 2,
            'critical_days': 4,
            'allow_warnings': False
        },
        'logging': {
            'level': 'WARNING',
            'file': None
        }
    }

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config file. If not provided,
                        default locations are searched and defaults are
                        used when none exists.
        """
        self.config_path = config_path
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()

    def load_config(self, overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[str, Any]:
        """Load configuration from file and apply overrides.

        Args:
            overrides: Section/key values taking precedence over the file,
                       typically from command-line flags. None values are
                       ignored.

        Returns:
            Dictionary containing configuration data.

        Raises:
            ConfigurationError: If the config file is missing or invalid.
        """
        config_file = self._find_config_file()

        if config_file:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    self.config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file {config_file}: {e}")
            except OSError as e:
                raise ConfigurationError(f"Error reading config file {config_file}: {e}")
        else:
            self.config_data = {}

        if not isinstance(self.config_data, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a mapping")

        self._apply_overrides(overrides or {})

        # Set defaults
        self._set_defaults()

        self.validator.validate(self.config_data)

        return self.config_data

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in default locations.

        Returns:
            Path to configuration file, or None if no file is found.

        Raises:
            ConfigurationError: If an explicit config path does not exist.
        """
        if self.config_path:
            if os.path.exists(self.config_path):
                return self.config_path
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if os.path.exists(location):
                return location

        return None

    def _apply_overrides(self, overrides: Dict[str, Dict[str, Any]]):
        """Merge non-None override values into the loaded configuration."""
        for section, values in overrides.items():
            for key, value in values.items():
                if value is None:
                    continue
                if not isinstance(self.config_data.get(section), dict):
                    self.config_data[section] = {}
                self.config_data[section][key] = value

    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        for section, section_defaults in self.DEFAULTS.items():
            if self.config_data.get(section) is None:
                self.config_data[section] = {}
            if not isinstance(self.config_data[section], dict):
                continue
            for key, value in section_defaults.items():
                if key not in self.config_data[section]:
                    self.config_data[section][key] = value

    def get_check_config(self) -> Dict[str, Any]:
        """Get check configuration.

        Returns:
            Check configuration dictionary.
        """
        return self.config_data.get('check', {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration.

        Returns:
            Logging configuration dictionary.
        """
        return self.config_data.get('logging', {})
