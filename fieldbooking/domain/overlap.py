"""
Overlap detection for weekly availability windows.

Pure domain logic: the checker holds no state and performs no I/O, so the
same inputs always give the same result.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Iterable, List, Optional

from .exceptions import ConflictError, FieldBookingError, InvalidWindowError
from .models import DayOfWeek, TimeWindow


@dataclass(frozen=True)
class OverlapResult:
    """
    Outcome of an overlap check.

    ``error`` is None when the candidate is admissible, otherwise it holds an
    InvalidWindowError or a ConflictError.
    """
    candidate: Optional[TimeWindow] = None
    error: Optional[FieldBookingError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def conflict(self) -> Optional[TimeWindow]:
        """The existing window the candidate collided with, if any."""
        if isinstance(self.error, ConflictError):
            return self.error.conflict
        return None

    def raise_for_error(self) -> None:
        """Raise the stored error, if there is one."""
        if self.error is not None:
            raise self.error


class AvailabilityOverlapChecker:
    """
    Decides whether a candidate window may join a field's existing schedule.

    Two half-open windows [a1, a2) and [b1, b2) on the same day conflict
    iff a1 < b2 and b1 < a2. A window ending at 10:00 does not conflict
    with one starting at 10:00.
    """

    def check_overlap(
        self,
        candidate: TimeWindow,
        existing: Iterable[TimeWindow],
        ignore: Optional[TimeWindow] = None,
    ) -> OverlapResult:
        """
        Check a candidate window against existing windows.

        Args:
            candidate: The proposed window
            existing: Windows already scheduled for the same resource
            ignore: A window to skip once, e.g. the one an update replaces

        Returns:
            OverlapResult, failing with ConflictError on the first collision
        """
        if candidate.open_time >= candidate.close_time:
            return OverlapResult(
                candidate=candidate,
                error=InvalidWindowError(f"Invalid window: {candidate}"),
            )

        for window in self._without(existing, ignore):
            if window.overlaps(candidate):
                return OverlapResult(
                    candidate=candidate,
                    error=ConflictError(
                        f"Availability {candidate} overlaps existing {window}",
                        conflict=window,
                    ),
                )

        return OverlapResult(candidate=candidate)

    def check_times(
        self,
        day: "DayOfWeek | str",
        open_time: time,
        close_time: time,
        existing: Iterable[TimeWindow],
        ignore: Optional[TimeWindow] = None,
    ) -> OverlapResult:
        """Build the candidate from raw values, then check it."""
        try:
            candidate = TimeWindow(day=day, open_time=open_time, close_time=close_time)
        except InvalidWindowError as exc:
            return OverlapResult(error=exc)

        return self.check_overlap(candidate, existing, ignore=ignore)

    def find_conflicts(
        self,
        candidate: TimeWindow,
        existing: Iterable[TimeWindow],
        ignore: Optional[TimeWindow] = None,
    ) -> List[TimeWindow]:
        """Return every existing window that collides with the candidate."""
        return [
            window for window in self._without(existing, ignore)
            if window.overlaps(candidate)
        ]

    @staticmethod
    def _without(
        windows: Iterable[TimeWindow],
        ignore: Optional[TimeWindow],
    ) -> Iterable[TimeWindow]:
        skipped = ignore is None
        for window in windows:
            if not skipped and window == ignore:
                skipped = True
                continue
            yield window
