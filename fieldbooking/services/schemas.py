"""
Request and response DTOs exchanged with the service layer.
"""

from datetime import time
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class AvailabilityRequest(BaseModel):
    """Incoming availability window."""
    day: str
    open_hour: time
    close_hour: time


class AvailabilityResponse(BaseModel):
    """Availability window as returned to callers."""
    id: int = 0
    day: str = ""
    open_hour: Optional[time] = None
    close_hour: Optional[time] = None


class FieldTypeResponse(BaseModel):
    id: int = 0
    description: str = ""


class FieldRequest(BaseModel):
    """Incoming field data for create and update."""
    name: str = ""
    size: str = ""
    field_type: int = 0


class FieldResponse(BaseModel):
    id: Optional[UUID] = None
    name: str = ""
    size: str = ""
    field_type: Optional[FieldTypeResponse] = None
    availabilities: List[AvailabilityResponse] = Field(default_factory=list)


class GetFieldsRequest(BaseModel):
    """Filters and paging for listing fields."""
    name: Optional[str] = None
    size_of_field: Optional[str] = None
    type: Optional[int] = None
    availability: Optional[int] = None  # Day number, 0=Monday
    offset: Optional[int] = 0
    size: Optional[int] = 10
