"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import (
    ConflictError,
    FieldBookingError,
    InvalidWindowError,
    NotFoundError,
    RequestValidationError,
    StoreError,
)
from .models import Availability, DayOfWeek, Field, FieldType, TimeWindow
from .overlap import AvailabilityOverlapChecker, OverlapResult

__all__ = [
    "Availability",
    "AvailabilityOverlapChecker",
    "ConflictError",
    "DayOfWeek",
    "Field",
    "FieldBookingError",
    "FieldType",
    "InvalidWindowError",
    "NotFoundError",
    "OverlapResult",
    "RequestValidationError",
    "StoreError",
    "TimeWindow",
]
