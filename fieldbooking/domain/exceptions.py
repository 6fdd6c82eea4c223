"""
Domain-specific exception hierarchy for the field booking application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .models import TimeWindow


class FieldBookingError(Exception):
    """Base class for all application-level errors."""


class InvalidWindowError(FieldBookingError):
    """Raised when a time window does not open before it closes."""


class ConflictError(FieldBookingError):
    """Raised when a request collides with existing data."""

    def __init__(self, message: str, conflict: "TimeWindow | None" = None):
        super().__init__(message)
        self.conflict = conflict


class NotFoundError(FieldBookingError):
    """Raised when a requested entity does not exist."""


class RequestValidationError(FieldBookingError):
    """Raised when an incoming request fails shape validation."""

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors) or "Validation failed")
        self.errors = list(errors)


class StoreError(FieldBookingError):
    """Raised when the data file cannot be read or written."""
