"""
Custom exceptions for the Roster package.
"""

from typing import Optional, Any, Dict


class RosterException(Exception):
    """Base exception for all Roster-related errors."""
    
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(RosterException):
    """Raised when data validation fails."""
    pass


class CapacityError(RosterException):
    """Raised when a class or school has no room left."""
    pass


class ConflictError(RosterException):
    """Raised when an operation clashes with existing roster state."""
    pass


class NotFoundError(RosterException):
    """Raised when a requested student or class is not found."""
    pass


class ConfigurationError(RosterException):
    """Raised when configuration is invalid."""
    pass
