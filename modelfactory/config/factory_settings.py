"""
Factory Settings - Centralized configuration management for modelfactory
Provides type-safe settings with validation, loaded from the environment,
a dictionary or a YAML file.
"""

import os
import logging
from typing import Any, Dict, Optional, Type
from dataclasses import dataclass

import yaml

from modelfactory.core.errors import ConfigurationError

COPY_MODES = ('shallow', 'deep')
LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')


@dataclass
class FactorySettings:
    """Factory settings with type safety and validation"""

    # How blueprint output is copied before overrides are merged
    copy_mode: str = 'shallow'

    # Upper bound accepted by Factory.count(), None for no limit
    max_count: Optional[int] = None

    # Level applied to the modelfactory logger by configure_logging()
    log_level: str = 'warning'

    def __post_init__(self):
        """Validate settings after initialization"""
        self._validate()

    def _validate(self):
        """Validate settings values"""
        if self.copy_mode not in COPY_MODES:
            raise ConfigurationError(f"Invalid copy_mode: {self.copy_mode}")

        if self.max_count is not None and (
                not isinstance(self.max_count, int) or isinstance(self.max_count, bool) or self.max_count < 1):
            raise ConfigurationError(f"Invalid max_count: {self.max_count}")

        if str(self.log_level).lower() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log_level: {self.log_level}")

    @property
    def deep_copy(self) -> bool:
        """Check if blueprint output is deep-copied"""
        return self.copy_mode == 'deep'


class SettingsFactory:
    """
    Factory for creating and managing factory settings.

    Features:
    - Environment variable loading with type conversion
    - YAML file loading
    - Settings validation
    - Singleton pattern for global settings access
    """

    _instance: Optional['SettingsFactory'] = None
    _settings: Optional[FactorySettings] = None

    def __new__(cls) -> 'SettingsFactory':
        """Singleton pattern implementation"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize the settings factory"""
        if not hasattr(self, '_initialized'):
            self._logger = logging.getLogger(__name__)
            self._overrides: Dict[str, Any] = {}
            self._initialized = True

    def load_from_environment(self, env_prefix: str = 'MODELFACTORY_') -> FactorySettings:
        """
        Load settings from environment variables.

        Args:
            env_prefix: Prefix for environment variables

        Returns:
            Configured FactorySettings instance
        """
        def get_env_var(key: str, default: Any = None, var_type: Type = str) -> Any:
            """Get environment variable with type conversion"""
            env_key = f"{env_prefix}{key}" if env_prefix else key
            value = os.environ.get(env_key)

            if value is None:
                return default

            if var_type == int:
                try:
                    return int(value)
                except ValueError:
                    self._logger.warning(f"Invalid integer value for {env_key}: {value}, using default: {default}")
                    return default
            return value

        settings = FactorySettings(
            copy_mode=get_env_var('COPY_MODE', 'shallow'),
            max_count=get_env_var('MAX_COUNT', None, int),
            log_level=get_env_var('LOG_LEVEL', 'warning'),
        )
        return self._store(settings, 'environment')

    def load_from_dict(self, settings_dict: Dict[str, Any]) -> FactorySettings:
        """
        Load settings from dictionary (useful for testing).

        Args:
            settings_dict: Dictionary of settings values

        Returns:
            Configured FactorySettings instance
        """
        unknown = set(settings_dict) - set(FactorySettings.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")

        return self._store(FactorySettings(**settings_dict), 'dictionary')

    def load_from_yaml(self, yaml_file_path: str) -> FactorySettings:
        """
        Load settings from a YAML file.

        Args:
            yaml_file_path: Path to a YAML file holding a mapping of settings

        Returns:
            Configured FactorySettings instance

        Raises:
            FileNotFoundError: If the YAML file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ConfigurationError: If the YAML content is not a settings mapping
        """
        try:
            with open(yaml_file_path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file)
        except FileNotFoundError:
            self._logger.error(f"Settings file not found: {yaml_file_path}")
            raise
        except yaml.YAMLError as e:
            self._logger.error(f"YAML parsing error: {e}")
            raise

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file must contain a mapping: {yaml_file_path}")

        return self.load_from_dict(data)

    def override_setting(self, key: str, value: Any) -> 'SettingsFactory':
        """
        Override a specific setting.

        Args:
            key: Settings key to override
            value: New value for the setting

        Returns:
            Self for method chaining
        """
        if key not in FactorySettings.__dataclass_fields__:
            raise ConfigurationError(f"Unknown setting: {key}")

        # Validate against the loaded settings, or the defaults plus pending overrides
        if self._settings is not None:
            current = self._current_values()
        else:
            current = {**self._current_values(FactorySettings()), **self._overrides}
        FactorySettings(**{**current, key: value})

        self._overrides[key] = value
        if self._settings is not None:
            setattr(self._settings, key, value)

        return self

    def get_settings(self) -> FactorySettings:
        """
        Get the current settings, loading them from the environment on first use.

        Returns:
            Current FactorySettings instance
        """
        if self._settings is None:
            return self.load_from_environment()
        return self._settings

    def reset(self) -> 'SettingsFactory':
        """Reset the factory (useful for testing)"""
        self._settings = None
        self._overrides.clear()
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert current settings to dictionary"""
        if self._settings is None:
            raise ConfigurationError("Settings not loaded")

        return self._current_values()

    def _current_values(self, settings: Optional[FactorySettings] = None) -> Dict[str, Any]:
        settings = settings or self._settings
        return {
            field_name: getattr(settings, field_name)
            for field_name in settings.__dataclass_fields__
        }

    def _store(self, settings: FactorySettings, source: str) -> FactorySettings:
        for key, value in list(self._overrides.items()):
            previous = getattr(settings, key)
            setattr(settings, key, value)
            try:
                settings._validate()
            except ConfigurationError:
                setattr(settings, key, previous)
                del self._overrides[key]
                self._logger.warning(f"Dropped invalid override {key}={value!r}")
                raise

        self._settings = settings
        self._logger.info(f"Factory settings loaded from {source}")
        return settings


# Global factory instance
_settings_factory = SettingsFactory()


def get_settings() -> FactorySettings:
    """Get the global factory settings"""
    return _settings_factory.get_settings()


def load_settings(env_prefix: str = 'MODELFACTORY_') -> FactorySettings:
    """Load settings from environment variables"""
    return _settings_factory.load_from_environment(env_prefix)


def load_settings_from_dict(settings_dict: Dict[str, Any]) -> FactorySettings:
    """Load settings from dictionary"""
    return _settings_factory.load_from_dict(settings_dict)


def load_settings_from_yaml(yaml_file_path: str) -> FactorySettings:
    """Load settings from a YAML file"""
    return _settings_factory.load_from_yaml(yaml_file_path)


def override_settings(key: str, value: Any) -> SettingsFactory:
    """Override a factory setting"""
    return _settings_factory.override_setting(key, value)


def reset_settings() -> SettingsFactory:
    """Reset global settings (useful for testing)"""
    return _settings_factory.reset()


def configure_logging(settings: Optional[FactorySettings] = None) -> logging.Logger:
    """
    Apply the configured log level to the package logger.

    Args:
        settings: Settings to apply, defaults to the global settings

    Returns:
        The modelfactory logger
    """
    settings = settings or get_settings()
    package_logger = logging.getLogger('modelfactory')
    package_logger.setLevel(settings.log_level.upper())
    return package_logger
