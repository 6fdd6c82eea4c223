"""
Default object mapper between domain entities and DTOs.
"""

from __future__ import annotations

from typing import List
from uuid import UUID, uuid4

from ..domain.models import Availability, DayOfWeek, Field, FieldType
from .schemas import (
    AvailabilityRequest,
    AvailabilityResponse,
    FieldRequest,
    FieldResponse,
    FieldTypeResponse,
)


class DefaultMapper:
    """Plain attribute-by-attribute mapping, one method per conversion."""

    def to_availability(self, request: AvailabilityRequest, field_id: UUID) -> Availability:
        # Id is assigned by the command store on insert
        return Availability(
            availability_id=0,
            field_id=field_id,
            day=DayOfWeek.parse(request.day),
            open_hour=request.open_hour,
            close_hour=request.close_hour,
        )

    def apply_availability(self, request: AvailabilityRequest, availability: Availability) -> Availability:
        availability.day = DayOfWeek.parse(request.day)
        availability.open_hour = request.open_hour
        availability.close_hour = request.close_hour
        return availability

    def to_availability_response(self, availability: Availability) -> AvailabilityResponse:
        return AvailabilityResponse(
            id=availability.availability_id,
            day=DayOfWeek.parse(availability.day).label,
            open_hour=availability.open_hour,
            close_hour=availability.close_hour,
        )

    def to_field(self, request: FieldRequest) -> Field:
        return Field(
            field_id=uuid4(),
            name=request.name.strip(),
            size=request.size.strip(),
            field_type_id=request.field_type,
        )

    def apply_field(self, request: FieldRequest, field: Field) -> Field:
        field.name = request.name.strip()
        field.size = request.size.strip()
        field.field_type_id = request.field_type
        return field

    def to_field_response(self, field: Field) -> FieldResponse:
        field_type = field.field_type or FieldType(field_type_id=field.field_type_id)
        return FieldResponse(
            id=field.field_id,
            name=field.name,
            size=field.size,
            field_type=self.to_field_type_response(field_type),
            availabilities=[
                self.to_availability_response(availability)
                for availability in sorted(
                    field.availabilities,
                    key=lambda a: (a.day, a.open_hour),
                )
            ],
        )

    def to_field_responses(self, fields: List[Field]) -> List[FieldResponse]:
        return [self.to_field_response(field) for field in fields]

    def to_field_type_response(self, field_type: FieldType) -> FieldTypeResponse:
        return FieldTypeResponse(id=field_type.field_type_id, description=field_type.description)

    def to_field_type_responses(self, field_types: List[FieldType]) -> List[FieldTypeResponse]:
        return [self.to_field_type_response(field_type) for field_type in field_types]
