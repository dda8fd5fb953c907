"""
Configuration package for modelfactory.
"""

from .factory_settings import (
    FactorySettings, SettingsFactory, get_settings, load_settings, load_settings_from_dict,
    load_settings_from_yaml, override_settings, reset_settings, configure_logging
)
