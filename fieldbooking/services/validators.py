"""
Shape validators for incoming requests.
"""

from __future__ import annotations

from typing import List, Optional

from ..domain.exceptions import RequestValidationError
from ..domain.models import DayOfWeek
from .interfaces import FieldTypeQuery
from .schemas import AvailabilityRequest, FieldRequest, GetFieldsRequest

MAX_NAME_LENGTH = 100


class AvailabilityRequestValidator:
    async def validate(self, request: AvailabilityRequest) -> None:
        errors: List[str] = []

        try:
            DayOfWeek.parse(request.day)
        except ValueError:
            errors.append(f"Invalid day: '{request.day}'")

        if request.open_hour is None or request.close_hour is None:
            errors.append("Open and close hours are required")
        elif request.open_hour >= request.close_hour:
            errors.append("Open hour must be before close hour")

        if errors:
            raise RequestValidationError(errors)


class FieldRequestValidator:
    """
    Validates field create/update requests.

    When a field type query is given, the referenced type must also exist.
    """

    def __init__(self, field_type_query: Optional[FieldTypeQuery] = None):
        self._field_type_query = field_type_query

    async def validate(self, request: FieldRequest) -> None:
        errors: List[str] = []

        name = request.name.strip()
        if not name:
            errors.append("Name is required")
        elif len(name) > MAX_NAME_LENGTH:
            errors.append(f"Name must be at most {MAX_NAME_LENGTH} characters")

        if not request.size.strip():
            errors.append("Size is required")

        if request.field_type <= 0:
            errors.append("Field type must be a positive id")
        elif self._field_type_query is not None:
            field_type = await self._field_type_query.get_field_type_by_id(request.field_type)
            if field_type is None:
                errors.append(f"Field type {request.field_type} does not exist")

        if errors:
            raise RequestValidationError(errors)


class GetFieldsRequestValidator:
    def __init__(self, max_page_size: int = 100):
        self._max_page_size = max_page_size

    async def validate(self, request: GetFieldsRequest) -> None:
        errors: List[str] = []

        if request.offset is not None and request.offset < 0:
            errors.append("Offset must not be negative")

        if request.size is not None and not 1 <= request.size <= self._max_page_size:
            errors.append(f"Size must be between 1 and {self._max_page_size}")

        if request.type is not None and request.type <= 0:
            errors.append("Type must be a positive id")

        if request.availability is not None and request.availability not in range(7):
            errors.append("Availability must be a day number between 0 and 6")

        if errors:
            raise RequestValidationError(errors)
