"""
Custom exceptions for the registrar.
"""

from typing import Optional, Any, Dict


class RegistrarException(Exception):
    """Base exception for all registrar errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(RegistrarException):
    """Raised when data validation fails."""
    pass


class SchedulingError(ValidationError):
    """Raised when a weekly meeting cannot be built or placed."""
    pass


class DuplicateEntityError(RegistrarException):
    """Raised when attempting to create a duplicate entity."""
    pass


class ResourceNotFoundError(RegistrarException):
    """Raised when a requested resource is not found."""
    pass


class ConcurrencyError(RegistrarException):
    """Raised when concurrency control fails."""
    pass


class ConfigurationError(RegistrarException):
    """Raised when configuration is invalid."""
    pass
