"""
Core error definitions for modelfactory

Provides error codes and the exception hierarchy raised by factories.
These do not depend on any other module in the package.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Standardized error codes for factory failures."""

    # Setup Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Build Errors
    BUILD_FAILED = "BUILD_FAILED"

    # Storage Errors
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


class FactoryError(Exception):
    """Base exception for all factory errors."""

    default_code = ErrorCode.BUILD_FAILED

    def __init__(self, message: str, code: Optional[ErrorCode] = None, details: Optional[Dict] = None):
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(FactoryError):
    """Raised when a factory or its settings are set up incorrectly."""

    default_code = ErrorCode.CONFIGURATION_ERROR


class InvalidArgumentError(FactoryError, ValueError):
    """Raised when a factory method receives an argument it cannot accept."""

    default_code = ErrorCode.INVALID_ARGUMENT


class BuildError(FactoryError):
    """Raised when a blueprint or a state callback fails during make()."""

    default_code = ErrorCode.BUILD_FAILED

    def __init__(self, message: str, original: Optional[BaseException] = None, details: Optional[Dict] = None):
        self.original = original
        super().__init__(message, details=details)


class StorageNotImplementedError(FactoryError, NotImplementedError):
    """Raised by create() while no storage layer exists."""

    default_code = ErrorCode.NOT_IMPLEMENTED
