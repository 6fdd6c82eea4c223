"""
Tests for the in-memory and JSON file stores.
"""

import asyncio
import json
from datetime import time
from uuid import UUID, uuid4

import pytest

from fieldbooking.adapters.json_store import JsonFileStore, parse_time
from fieldbooking.adapters.memory_store import InMemoryStore
from fieldbooking.domain.exceptions import NotFoundError, StoreError
from fieldbooking.domain.models import Availability, DayOfWeek, Field, FieldType

FIELD_ID = UUID("3f1c2a4e-8b7d-4c1e-9a55-0d6b2f7e91a1")


def _store():
    other_id = uuid4()
    return InMemoryStore(
        field_types=[FieldType(1, "Futbol 5"), FieldType(3, "Futbol 11")],
        fields=[
            Field(
                field_id=FIELD_ID,
                name="Cancha 1",
                size="Small",
                field_type_id=1,
                availabilities=[
                    Availability(4, FIELD_ID, DayOfWeek.MONDAY, time(8, 0), time(12, 0)),
                ],
            ),
            Field(field_id=other_id, name="Cancha 2", size="Large", field_type_id=3),
        ],
    )


class TestInMemoryStore:
    """Tests for InMemoryStore."""

    def test_fields_carry_their_type(self):
        """Test that fields are returned with their field type attached."""
        field = asyncio.run(_store().get_field_by_id(FIELD_ID))

        assert field.field_type == FieldType(1, "Futbol 5")

    @pytest.mark.parametrize(
        "filters, expected",
        [
            ({}, ["Cancha 1", "Cancha 2"]),
            ({"name": "2"}, ["Cancha 2"]),
            ({"size_of_field": "small"}, ["Cancha 1"]),
            ({"type": 3}, ["Cancha 2"]),
            ({"availability": 0}, ["Cancha 1"]),
            ({"availability": 1}, []),
            ({"offset": 1}, ["Cancha 2"]),
            ({"size": 1}, ["Cancha 1"]),
        ],
    )
    def test_get_fields_filters(self, filters, expected):
        """Test name, size, type and day filters with paging."""
        arguments = {
            "name": None,
            "size_of_field": None,
            "type": None,
            "availability": None,
            "offset": 0,
            "size": 10,
        }
        arguments.update(filters)

        fields = asyncio.run(_store().get_fields(**arguments))

        assert [f.name for f in fields] == expected

    def test_returned_entities_are_copies(self):
        """Test that mutating a returned field does not touch the store."""
        store = _store()
        field = asyncio.run(store.get_field_by_id(FIELD_ID))
        field.name = "Changed"

        assert asyncio.run(store.get_field_by_id(FIELD_ID)).name == "Cancha 1"

    def test_insert_assigns_next_availability_id(self):
        """Test that inserted windows get sequential ids."""
        store = _store()
        availability = Availability(0, FIELD_ID, DayOfWeek.TUESDAY, time(9, 0), time(10, 0))

        asyncio.run(store.insert_availability(availability))

        assert availability.availability_id == 5
        assert asyncio.run(store.get_availability_by_id(5)).day is DayOfWeek.TUESDAY

    def test_insert_for_unknown_field_raises(self):
        """Test inserting a window for a missing field."""
        availability = Availability(0, uuid4(), DayOfWeek.TUESDAY, time(9, 0), time(10, 0))

        with pytest.raises(NotFoundError):
            asyncio.run(_store().insert_availability(availability))

    def test_update_and_delete_availability(self):
        """Test replacing and then removing a window."""
        store = _store()
        availability = asyncio.run(store.get_availability_by_id(4))
        availability.close_hour = time(13, 0)

        asyncio.run(store.update_availability(availability))
        assert asyncio.run(store.get_availability_by_id(4)).close_hour == time(13, 0)

        asyncio.run(store.delete_availability(availability))
        assert asyncio.run(store.get_availability_by_id(4)) is None
        assert asyncio.run(store.get_availabilities_by_field(FIELD_ID)) == []

    def test_get_field_by_name_is_case_insensitive(self):
        """Test that name lookup ignores case."""
        assert asyncio.run(_store().get_field_by_name("CANCHA 2")) is not None
        assert asyncio.run(_store().get_field_by_name("Cancha 9")) is None


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    def _write(self, path, data):
        path.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_file_starts_empty(self, tmp_path):
        """Test that a missing data file gives an empty store."""
        store = JsonFileStore(tmp_path / "data.json")

        assert asyncio.run(store.get_list_field_types()) == []

    def test_loads_and_writes_back(self, tmp_path):
        """Test that a loaded file is rewritten after a change."""
        path = tmp_path / "data.json"
        self._write(path, {
            "field_types": [{"id": 1, "description": "Futbol 5"}],
            "fields": [{
                "id": str(FIELD_ID),
                "name": "Cancha 1",
                "size": "Small",
                "field_type": 1,
                "availabilities": [{"id": 1, "day": "Monday", "open": "08:00", "close": "12:00"}],
            }],
        })

        store = JsonFileStore(path)
        availability = Availability(0, FIELD_ID, DayOfWeek.FRIDAY, time(18, 30), time(23, 0))
        asyncio.run(store.insert_availability(availability))

        data = json.loads(path.read_text(encoding="utf-8"))
        windows = data["fields"][0]["availabilities"]
        assert windows[-1] == {"id": 2, "day": "Friday", "open": "18:30", "close": "23:00"}
        assert not path.with_name("data.json.tmp").exists()

        reloaded = JsonFileStore(path)
        assert len(asyncio.run(reloaded.get_availabilities_by_field(FIELD_ID))) == 2

    def test_invalid_json_raises_store_error(self, tmp_path):
        """Test that malformed JSON is reported as a StoreError."""
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StoreError, match="Could not read data file"):
            JsonFileStore(path)

    def test_invalid_entry_raises_store_error(self, tmp_path):
        """Test that an entry with a bad value is reported as a StoreError."""
        path = tmp_path / "data.json"
        self._write(path, {"fields": [{"id": "not-a-uuid", "name": "Cancha"}]})

        with pytest.raises(StoreError, match="Invalid data"):
            JsonFileStore(path)


def test_parse_time():
    """Test HH:mm parsing."""
    assert parse_time("08:00") == time(8, 0)
    assert parse_time(" 23:45 ") == time(23, 45)
