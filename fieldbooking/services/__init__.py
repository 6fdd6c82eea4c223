"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import (
    AvailabilityDeleteService,
    AvailabilityGetService,
    AvailabilityPostService,
    AvailabilityPutService,
)
from .field_types import FieldTypeGetService
from .fields import FieldGetService, FieldPostService, FieldPutService, ResourceLocks
from .mapper import DefaultMapper

__all__ = [
    "AvailabilityDeleteService",
    "AvailabilityGetService",
    "AvailabilityPostService",
    "AvailabilityPutService",
    "DefaultMapper",
    "FieldGetService",
    "FieldPostService",
    "FieldPutService",
    "FieldTypeGetService",
    "ResourceLocks",
]
