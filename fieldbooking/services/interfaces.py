"""
Narrow collaborator interfaces the services depend on.

Each protocol is one capability boundary: fetch state (queries), persist
state (commands), validate shape (validators) or transform representation
(mapper). Concrete implementations live in the adapters layer or are
replaced by stubs in tests.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, TypeVar
from uuid import UUID

from ..domain.models import Availability, Field, FieldType
from .schemas import (
    AvailabilityRequest,
    AvailabilityResponse,
    FieldRequest,
    FieldResponse,
    FieldTypeResponse,
)

RequestT = TypeVar("RequestT", contravariant=True)


class Validator(Protocol[RequestT]):
    async def validate(self, request: RequestT) -> None:
        """Raise RequestValidationError if the request is malformed."""


class AvailabilityQuery(Protocol):
    async def get_availability_by_id(self, availability_id: int) -> Optional[Availability]:
        ...

    async def get_availabilities_by_field(self, field_id: UUID) -> List[Availability]:
        ...


class AvailabilityCommand(Protocol):
    async def insert_availability(self, availability: Availability) -> None:
        """Persist a new availability, assigning its id."""

    async def update_availability(self, availability: Availability) -> None:
        ...

    async def delete_availability(self, availability: Availability) -> None:
        ...


class FieldQuery(Protocol):
    async def get_field_by_id(self, field_id: UUID) -> Optional[Field]:
        ...

    async def get_field_by_name(self, name: str) -> Optional[Field]:
        ...

    async def get_fields(
        self,
        name: Optional[str],
        size_of_field: Optional[str],
        type: Optional[int],
        availability: Optional[int],
        offset: Optional[int],
        size: Optional[int],
    ) -> List[Field]:
        ...


class FieldCommand(Protocol):
    async def insert_field(self, field: Field) -> None:
        ...

    async def update_field(self, field: Field) -> None:
        ...


class FieldTypeQuery(Protocol):
    async def get_list_field_types(self) -> List[FieldType]:
        ...

    async def get_field_type_by_id(self, field_type_id: int) -> Optional[FieldType]:
        ...


class Mapper(Protocol):
    """Entity <-> DTO transformations."""

    def to_availability(self, request: AvailabilityRequest, field_id: UUID) -> Availability:
        ...

    def apply_availability(self, request: AvailabilityRequest, availability: Availability) -> Availability:
        ...

    def to_availability_response(self, availability: Availability) -> AvailabilityResponse:
        ...

    def to_field(self, request: FieldRequest) -> Field:
        ...

    def apply_field(self, request: FieldRequest, field: Field) -> Field:
        ...

    def to_field_response(self, field: Field) -> FieldResponse:
        ...

    def to_field_responses(self, fields: List[Field]) -> List[FieldResponse]:
        ...

    def to_field_type_response(self, field_type: FieldType) -> FieldTypeResponse:
        ...

    def to_field_type_responses(self, field_types: List[FieldType]) -> List[FieldTypeResponse]:
        ...
