"""
Application services for fields and their weekly schedules.

``FieldPutService`` owns the rule that a field's availability windows never
overlap. The check and the subsequent write run under a per-field lock so
two concurrent requests for the same field cannot both pass the check.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import Hashable, List, Optional
from uuid import UUID

from ..domain.exceptions import ConflictError, NotFoundError
from ..domain.models import Field
from ..domain.overlap import AvailabilityOverlapChecker
from .availability import (
    AvailabilityDeleteService,
    AvailabilityGetService,
    AvailabilityPostService,
    AvailabilityPutService,
)
from .interfaces import FieldCommand, FieldQuery, FieldTypeQuery, Mapper, Validator
from .validators import AvailabilityRequestValidator
from .schemas import (
    AvailabilityRequest,
    AvailabilityResponse,
    FieldRequest,
    FieldResponse,
    GetFieldsRequest,
)

logger = logging.getLogger(__name__)


class ResourceLocks:
    """
    Lazily created asyncio locks, one per resource key.

    Locks are held weakly: once no task holds or waits on a key's lock, the
    entry disappears.
    """

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[Hashable, asyncio.Lock]" = weakref.WeakValueDictionary()

    def lock_for(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)


async def _require_field(query: FieldQuery, field_id: UUID) -> Field:
    field = await query.get_field_by_id(field_id)
    if field is None:
        raise NotFoundError("Field not found")
    return field


class FieldGetService:
    def __init__(
        self,
        query: FieldQuery,
        validator: Validator[GetFieldsRequest],
        mapper: Mapper,
    ) -> None:
        self._query = query
        self._validator = validator
        self._mapper = mapper

    async def get_field_by_id(self, field_id: UUID) -> FieldResponse:
        field = await _require_field(self._query, field_id)
        return self._mapper.to_field_response(field)

    async def get_all_fields(
        self,
        name: Optional[str] = None,
        size_of_field: Optional[str] = None,
        type: Optional[int] = None,
        availability: Optional[int] = None,
        offset: Optional[int] = 0,
        size: Optional[int] = 10,
    ) -> List[FieldResponse]:
        """
        List fields matching the filters, paged by offset and size.

        Args:
            name: Case-insensitive substring of the field name
            size_of_field: Exact field size, e.g. "Medium"
            type: Field type id
            availability: Day number (0=Monday) the field must be open on
            offset: Number of fields to skip
            size: Page size
        """
        await self._validator.validate(
            GetFieldsRequest(
                name=name,
                size_of_field=size_of_field,
                type=type,
                availability=availability,
                offset=offset,
                size=size,
            )
        )

        fields = await self._query.get_fields(name, size_of_field, type, availability, offset, size)
        if not fields:
            return []

        return self._mapper.to_field_responses(fields)


class FieldPostService:
    def __init__(
        self,
        command: FieldCommand,
        query: FieldQuery,
        field_type_query: FieldTypeQuery,
        validator: Validator[FieldRequest],
        mapper: Mapper,
    ) -> None:
        self._command = command
        self._query = query
        self._field_type_query = field_type_query
        self._validator = validator
        self._mapper = mapper

    async def create_field(self, request: FieldRequest) -> FieldResponse:
        await self._validator.validate(request)

        field_type = await self._field_type_query.get_field_type_by_id(request.field_type)
        if field_type is None:
            raise NotFoundError("Field type not found")

        if await self._query.get_field_by_name(request.name.strip()) is not None:
            raise ConflictError(f"A field named '{request.name.strip()}' already exists")

        field = self._mapper.to_field(request)
        field.field_type = field_type
        await self._command.insert_field(field)
        logger.info("Created field %s (%s)", field.field_id, field.name)

        return self._mapper.to_field_response(field)


class FieldPutService:
    """Updates fields and manages their availability windows."""

    def __init__(
        self,
        command: FieldCommand,
        query: FieldQuery,
        field_type_query: FieldTypeQuery,
        availability_post: AvailabilityPostService,
        availability_get: AvailabilityGetService,
        availability_put: AvailabilityPutService,
        availability_delete: AvailabilityDeleteService,
        validator: Validator[FieldRequest],
        mapper: Mapper,
        checker: Optional[AvailabilityOverlapChecker] = None,
        locks: Optional[ResourceLocks] = None,
        availability_validator: Optional[Validator[AvailabilityRequest]] = None,
    ) -> None:
        self._command = command
        self._query = query
        self._field_type_query = field_type_query
        self._availability_post = availability_post
        self._availability_get = availability_get
        self._availability_put = availability_put
        self._availability_delete = availability_delete
        self._validator = validator
        self._mapper = mapper
        self._checker = checker or AvailabilityOverlapChecker()
        self._locks = locks if locks is not None else ResourceLocks()
        self._availability_validator = (
            availability_validator if availability_validator is not None else AvailabilityRequestValidator()
        )

    async def create_availability(
        self,
        field_id: UUID,
        request: AvailabilityRequest,
    ) -> AvailabilityResponse:
        """
        Add a window to a field's schedule.

        Raises:
            RequestValidationError: If the day is unknown or the window does
                not open before it closes
            NotFoundError: If the field does not exist
            ConflictError: If the window overlaps an existing one
        """
        await self._availability_validator.validate(request)

        async with self._locks.lock_for(field_id):
            field = await _require_field(self._query, field_id)

            result = self._checker.check_times(
                request.day,
                request.open_hour,
                request.close_hour,
                field.schedule(),
            )
            if not result.ok:
                logger.debug("Rejected availability for field %s: %s", field_id, result.error)
            result.raise_for_error()

            return await self._availability_post.create_availability(field_id, request)

    async def update_availability(
        self,
        availability_id: int,
        request: AvailabilityRequest,
    ) -> AvailabilityResponse:
        """Replace a window, checking it against the field's other windows."""
        await self._availability_validator.validate(request)

        availability = await self._availability_get.get_availability_by_id(availability_id)

        async with self._locks.lock_for(availability.field_id):
            field = await _require_field(self._query, availability.field_id)

            result = self._checker.check_times(
                request.day,
                request.open_hour,
                request.close_hour,
                field.schedule(),
                ignore=availability.window,
            )
            if not result.ok:
                logger.debug("Rejected update of availability %s: %s", availability_id, result.error)
            result.raise_for_error()

            return await self._availability_put.update_availability(availability_id, request)

    async def delete_availability(self, availability_id: int) -> None:
        await self._availability_delete.delete_availability(availability_id)

    async def update_field(self, field_id: UUID, request: FieldRequest) -> FieldResponse:
        await self._validator.validate(request)

        field = await _require_field(self._query, field_id)

        field_type = await self._field_type_query.get_field_type_by_id(request.field_type)
        if field_type is None:
            raise NotFoundError("Field type not found")

        self._mapper.apply_field(request, field)
        field.field_type = field_type
        await self._command.update_field(field)
        logger.info("Updated field %s", field_id)

        return self._mapper.to_field_response(field)
