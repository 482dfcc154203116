"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class TempoError(Exception):
    """Base exception for tempo."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(TempoError):
    """Resource not found."""

    pass


class ValidationError(TempoError):
    """Validation error."""

    pass
