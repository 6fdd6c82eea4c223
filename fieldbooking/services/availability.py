"""
Application services for reading and writing availability windows.

Each service is a thin sequence over its injected collaborators:
validate, fetch, map, persist, map to response. Errors raised by a
collaborator propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from ..domain.exceptions import NotFoundError
from ..domain.models import Availability
from .interfaces import AvailabilityCommand, AvailabilityQuery, Mapper, Validator
from .schemas import AvailabilityRequest, AvailabilityResponse

logger = logging.getLogger(__name__)


class AvailabilityGetService:
    def __init__(self, query: AvailabilityQuery, mapper: Mapper) -> None:
        self._query = query
        self._mapper = mapper

    async def get_availability_by_id(self, availability_id: int) -> Availability:
        """Return the availability entity or raise NotFoundError."""
        availability = await self._query.get_availability_by_id(availability_id)
        if availability is None:
            raise NotFoundError("Availability not found")
        return availability

    async def get_field_availabilities(self, field_id: UUID) -> List[AvailabilityResponse]:
        availabilities = await self._query.get_availabilities_by_field(field_id)
        return [self._mapper.to_availability_response(a) for a in availabilities]


class AvailabilityPostService:
    def __init__(
        self,
        mapper: Mapper,
        command: AvailabilityCommand,
        validator: Validator[AvailabilityRequest],
    ) -> None:
        self._mapper = mapper
        self._command = command
        self._validator = validator

    async def create_availability(
        self,
        field_id: UUID,
        request: AvailabilityRequest,
    ) -> AvailabilityResponse:
        await self._validator.validate(request)

        availability = self._mapper.to_availability(request, field_id)
        await self._command.insert_availability(availability)
        logger.info(
            "Created availability %s for field %s",
            availability.availability_id,
            field_id,
        )

        return self._mapper.to_availability_response(availability)


class AvailabilityPutService:
    def __init__(
        self,
        mapper: Mapper,
        command: AvailabilityCommand,
        query: AvailabilityQuery,
        validator: Validator[AvailabilityRequest],
    ) -> None:
        self._mapper = mapper
        self._command = command
        self._query = query
        self._validator = validator

    async def update_availability(
        self,
        availability_id: int,
        request: AvailabilityRequest,
    ) -> AvailabilityResponse:
        await self._validator.validate(request)

        availability = await self._query.get_availability_by_id(availability_id)
        if availability is None:
            raise NotFoundError("Availability not found")

        self._mapper.apply_availability(request, availability)
        await self._command.update_availability(availability)
        logger.info("Updated availability %s", availability_id)

        return self._mapper.to_availability_response(availability)


class AvailabilityDeleteService:
    def __init__(
        self,
        command: AvailabilityCommand,
        get_service: AvailabilityGetService,
    ) -> None:
        self._command = command
        self._get_service = get_service

    async def delete_availability(self, availability_id: int) -> None:
        availability = await self._get_service.get_availability_by_id(availability_id)
        await self._command.delete_availability(availability)
        logger.info("Deleted availability %s", availability_id)
