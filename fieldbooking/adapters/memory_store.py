"""
In-memory repository implementing every query and command interface.

Entities are copied on the way in and out, so callers never share state
with the store and changes only land through a command.
"""

from __future__ import annotations

import copy
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ..domain.exceptions import NotFoundError
from ..domain.models import Availability, Field, FieldType


class InMemoryStore:
    """
    Dictionary-backed store for fields, field types and availabilities.

    Availabilities live inside their owning field; ids are assigned
    sequentially on insert.
    """

    def __init__(
        self,
        field_types: Iterable[FieldType] = (),
        fields: Iterable[Field] = (),
    ):
        self._field_types: Dict[int, FieldType] = {
            ft.field_type_id: copy.deepcopy(ft) for ft in field_types
        }
        self._fields: Dict[UUID, Field] = {}
        for field in fields:
            self._fields[field.field_id] = self._attach_type(copy.deepcopy(field))

        ids = [a.availability_id for f in self._fields.values() for a in f.availabilities]
        self._next_availability_id = max(ids, default=0) + 1

    # Field types

    async def get_list_field_types(self) -> List[FieldType]:
        return [copy.deepcopy(ft) for ft in sorted(self._field_types.values(), key=lambda ft: ft.field_type_id)]

    async def get_field_type_by_id(self, field_type_id: int) -> Optional[FieldType]:
        field_type = self._field_types.get(field_type_id)
        return copy.deepcopy(field_type) if field_type else None

    # Fields

    async def get_field_by_id(self, field_id: UUID) -> Optional[Field]:
        field = self._fields.get(field_id)
        return copy.deepcopy(field) if field else None

    async def get_field_by_name(self, name: str) -> Optional[Field]:
        for field in self._fields.values():
            if field.name.lower() == name.lower():
                return copy.deepcopy(field)
        return None

    async def get_fields(
        self,
        name: Optional[str],
        size_of_field: Optional[str],
        type: Optional[int],
        availability: Optional[int],
        offset: Optional[int],
        size: Optional[int],
    ) -> List[Field]:
        matches = sorted(self._fields.values(), key=lambda f: f.name.lower())

        if name:
            matches = [f for f in matches if name.lower() in f.name.lower()]
        if size_of_field:
            matches = [f for f in matches if f.size.lower() == size_of_field.lower()]
        if type is not None:
            matches = [f for f in matches if f.field_type_id == type]
        if availability is not None:
            matches = [
                f for f in matches
                if any(a.day == availability for a in f.availabilities)
            ]

        start = offset or 0
        end = start + size if size is not None else None
        return [copy.deepcopy(f) for f in matches[start:end]]

    async def insert_field(self, field: Field) -> None:
        self._fields[field.field_id] = self._attach_type(copy.deepcopy(field))
        self._persist()

    async def update_field(self, field: Field) -> None:
        if field.field_id not in self._fields:
            raise NotFoundError("Field not found")
        self._fields[field.field_id] = self._attach_type(copy.deepcopy(field))
        self._persist()

    # Availabilities

    async def get_availability_by_id(self, availability_id: int) -> Optional[Availability]:
        found = self._find_availability(availability_id)
        return copy.deepcopy(found[1]) if found else None

    async def get_availabilities_by_field(self, field_id: UUID) -> List[Availability]:
        field = self._fields.get(field_id)
        if field is None:
            return []
        return [copy.deepcopy(a) for a in sorted(field.availabilities, key=lambda a: (a.day, a.open_hour))]

    async def insert_availability(self, availability: Availability) -> None:
        field = self._fields.get(availability.field_id)
        if field is None:
            raise NotFoundError("Field not found")

        availability.availability_id = self._next_availability_id
        self._next_availability_id += 1
        field.availabilities.append(copy.deepcopy(availability))
        self._persist()

    async def update_availability(self, availability: Availability) -> None:
        found = self._find_availability(availability.availability_id)
        if found is None:
            raise NotFoundError("Availability not found")

        field, current = found
        index = field.availabilities.index(current)
        field.availabilities[index] = copy.deepcopy(availability)
        self._persist()

    async def delete_availability(self, availability: Availability) -> None:
        found = self._find_availability(availability.availability_id)
        if found is None:
            raise NotFoundError("Availability not found")

        field, current = found
        field.availabilities.remove(current)
        self._persist()

    def _find_availability(self, availability_id: int):
        for field in self._fields.values():
            for availability in field.availabilities:
                if availability.availability_id == availability_id:
                    return field, availability
        return None

    def _attach_type(self, field: Field) -> Field:
        field.field_type = self._field_types.get(field.field_type_id, field.field_type)
        return field

    def _persist(self) -> None:
        """Hook for subclasses that write changes through to storage."""
