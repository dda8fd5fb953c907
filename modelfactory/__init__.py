"""
modelfactory

Blueprint-driven factories for building test models with overrides and
named states.
"""

from .factory import Factory
from .core.errors import (
    ErrorCode, FactoryError, ConfigurationError, InvalidArgumentError, BuildError,
    StorageNotImplementedError
)
from .config.factory_settings import FactorySettings, get_settings, configure_logging

__version__ = '0.1.0'

__all__ = [
    'Factory',
    'ErrorCode',
    'FactoryError',
    'ConfigurationError',
    'InvalidArgumentError',
    'BuildError',
    'StorageNotImplementedError',
    'FactorySettings',
    'get_settings',
    'configure_logging',
]
