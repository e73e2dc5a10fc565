"""Configuration validation for the dirvish check."""

from typing import Dict, Any

from ..exceptions import ConfigurationError


class ConfigValidator:
    """Validates dirvish check configuration."""

    KNOWN_SECTIONS = ['check', 'logging']
    LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration data.

        Args:
            config: Configuration dictionary to validate.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        self._validate_structure(config)
        self._validate_check_config(config['check'])
        self._validate_logging_config(config['logging'])

    def _validate_structure(self, config: Dict[str, Any]) -> None:
        """Validate basic configuration structure.

        Raises:
            ConfigurationError: If sections are unknown or not mappings.
        """
        unknown_sections = [section for section in config if section not in self.KNOWN_SECTIONS]
        if unknown_sections:
            raise ConfigurationError(f"Unknown configuration sections: {unknown_sections}")

        for section in self.KNOWN_SECTIONS:
            if not isinstance(config.get(section), dict):
                raise ConfigurationError(f"Configuration section '{section}' must be a dictionary")

    def _validate_check_config(self, check_config: Dict[str, Any]) -> None:
        """Validate bank path and thresholds.

        The bank itself is checked for existence by the scanner, so only
        its presence is required here.

        Raises:
            ConfigurationError: If the check configuration is invalid.
        """
        if not check_config.get('bank'):
            raise ConfigurationError("A bank path must be configured")

        for key in ('warning_days', 'critical_days'):
            value = check_config[key]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{key} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"{key} must not be negative, got {value}")

        if check_config['warning_days'] > check_config['critical_days']:
            raise ConfigurationError(
                f"Warning threshold ({check_config['warning_days']}) exceeds "
                f"critical threshold ({check_config['critical_days']})"
            )

        if not isinstance(check_config['allow_warnings'], bool):
            raise ConfigurationError(
                f"allow_warnings must be true or false, got {check_config['allow_warnings']!r}"
            )

    def _validate_logging_config(self, logging_config: Dict[str, Any]) -> None:
        """Validate logging configuration.

        Raises:
            ConfigurationError: If the log level is unknown.
        """
        level = logging_config.get('level')
        if not isinstance(level, str) or level.upper() not in self.LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {level!r}")
