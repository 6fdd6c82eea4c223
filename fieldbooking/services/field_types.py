"""
Read-only service for field types.
"""

from typing import List

from ..domain.exceptions import NotFoundError
from .interfaces import FieldTypeQuery, Mapper
from .schemas import FieldTypeResponse


class FieldTypeGetService:
    def __init__(self, query: FieldTypeQuery, mapper: Mapper) -> None:
        self._query = query
        self._mapper = mapper

    async def get_all(self) -> List[FieldTypeResponse]:
        field_types = await self._query.get_list_field_types()
        return self._mapper.to_field_type_responses(field_types)

    async def get_field_type_by_id(self, field_type_id: int) -> FieldTypeResponse:
        field_type = await self._query.get_field_type_by_id(field_type_id)
        if field_type is None:
            raise NotFoundError("Field type not found")
        return self._mapper.to_field_type_response(field_type)
