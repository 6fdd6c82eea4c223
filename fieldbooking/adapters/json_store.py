"""
JSON-file backed store for running the CLI against local data.
"""

from __future__ import annotations

import json
import logging
from datetime import time
from pathlib import Path
from typing import Any, Dict, List
from uuid import UUID

import pendulum

from ..domain.exceptions import StoreError
from ..domain.models import Availability, DayOfWeek, Field, FieldType
from .memory_store import InMemoryStore

logger = logging.getLogger(__name__)

TIME_FORMAT = "HH:mm"


def parse_time(value: str) -> time:
    """Parse an ``HH:mm`` string into a naive time of day."""
    parsed = pendulum.from_format(value.strip(), TIME_FORMAT)
    return time(hour=parsed.hour, minute=parsed.minute)


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


class JsonFileStore(InMemoryStore):
    """
    In-memory store loaded from and written back to a JSON file.

    Every command rewrites the whole file through a temporary sibling, so a
    crash mid-write never leaves a truncated data file behind.

    File layout::

        {
          "field_types": [{"id": 1, "description": "Futbol 5"}],
          "fields": [{
            "id": "<uuid>", "name": "Cancha 1", "size": "Small", "field_type": 1,
            "availabilities": [{"id": 1, "day": "Monday", "open": "08:00", "close": "18:00"}]
          }]
        }
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        field_types, fields = self._load()
        super().__init__(field_types=field_types, fields=fields)

    def _load(self):
        if not self.path.exists():
            logger.info("Data file %s not found, starting empty", self.path)
            return [], []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f) or {}
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Could not read data file {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise StoreError(f"Data file {self.path} must contain a mapping at the root level")

        try:
            field_types = [
                FieldType(field_type_id=int(item["id"]), description=item.get("description", ""))
                for item in data.get("field_types", [])
            ]
            fields = [self._field_from_dict(item) for item in data.get("fields", [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Invalid data in {self.path}: {exc}") from exc

        return field_types, fields

    @staticmethod
    def _field_from_dict(item: Dict[str, Any]) -> Field:
        field_id = UUID(item["id"])
        return Field(
            field_id=field_id,
            name=item["name"],
            size=item.get("size", ""),
            field_type_id=int(item.get("field_type", 0)),
            availabilities=[
                Availability(
                    availability_id=int(a["id"]),
                    field_id=field_id,
                    day=DayOfWeek.parse(a["day"]),
                    open_hour=parse_time(a["open"]),
                    close_hour=parse_time(a["close"]),
                )
                for a in item.get("availabilities", [])
            ],
        )

    def _to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "field_types": [
                {"id": ft.field_type_id, "description": ft.description}
                for ft in sorted(self._field_types.values(), key=lambda ft: ft.field_type_id)
            ],
            "fields": [
                {
                    "id": str(field.field_id),
                    "name": field.name,
                    "size": field.size,
                    "field_type": field.field_type_id,
                    "availabilities": [
                        {
                            "id": a.availability_id,
                            "day": DayOfWeek.parse(a.day).label,
                            "open": format_time(a.open_hour),
                            "close": format_time(a.close_hour),
                        }
                        for a in field.availabilities
                    ],
                }
                for field in self._fields.values()
            ],
        }

    def _persist(self) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self._to_dict(), f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StoreError(f"Could not write data file {self.path}: {exc}") from exc
