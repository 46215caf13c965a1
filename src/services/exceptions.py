"""
Service-level exceptions.

This module contains exceptions that can be raised by various services
in the application.
"""

class CycleValidationError(Exception):
    """Base exception for rejected user input. No state is changed when raised."""
    pass

class InvalidCycleConfigurationError(CycleValidationError):
    """Raised when the last period date or cycle length is missing or out of range."""
    pass

class InvalidEventError(CycleValidationError):
    """Raised when an event form is missing a field or has an unknown type."""
    pass

class PersistenceCorruptionError(Exception):
    """Raised when a stored cycle data blob cannot be decoded."""
    pass
