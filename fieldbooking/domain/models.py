"""
Domain models for fields, field types and weekly availability windows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import IntEnum
from typing import List, Optional
from uuid import UUID

from .exceptions import InvalidWindowError


class DayOfWeek(IntEnum):
    """Day of the week, numbered like pendulum (0=Monday, 6=Sunday)."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: "DayOfWeek | str | int") -> "DayOfWeek":
        """
        Normalise a day given as enum member, weekday number or English name.

        Raises:
            ValueError: If the value does not name a day
        """
        if isinstance(value, DayOfWeek):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown day of week: {value!r}")

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class TimeWindow:
    """
    A half-open interval [open_time, close_time) on a day of the week.

    Invariant: open_time must be before close_time.
    """
    day: DayOfWeek
    open_time: time
    close_time: time

    def __post_init__(self):
        try:
            day = DayOfWeek.parse(self.day)
        except ValueError as exc:
            raise InvalidWindowError(str(exc)) from exc
        object.__setattr__(self, "day", day)

        if self.open_time >= self.close_time:
            raise InvalidWindowError(
                f"Open time {self.open_time:%H:%M} must be before close time {self.close_time:%H:%M}"
            )

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check if this window overlaps with another on the same day."""
        return (
            self.day == other.day
            and self.open_time < other.close_time
            and other.open_time < self.close_time
        )

    def __str__(self) -> str:
        return f"{self.day.label} {self.open_time:%H:%M} - {self.close_time:%H:%M}"


@dataclass
class FieldType:
    """A category of field, e.g. "Futbol 5"."""
    field_type_id: int
    description: str = ""


@dataclass
class Availability:
    """A weekly opening window belonging to one field."""
    availability_id: int
    field_id: Optional[UUID] = None
    day: DayOfWeek = DayOfWeek.MONDAY
    open_hour: time = time(0, 0)
    close_hour: time = time(23, 59)

    @property
    def window(self) -> TimeWindow:
        """The availability as a validated TimeWindow."""
        return TimeWindow(day=self.day, open_time=self.open_hour, close_time=self.close_hour)


@dataclass
class Field:
    """A bookable field and its weekly schedule."""
    field_id: UUID
    name: str
    size: str = ""
    field_type_id: int = 0
    field_type: Optional[FieldType] = None
    availabilities: List[Availability] = field(default_factory=list)

    def schedule(self) -> List[TimeWindow]:
        """Return the field's existing windows (its ScheduleSet)."""
        return [availability.window for availability in self.availabilities]
