"""
Tests for the availability overlap checker.
"""

import pytest
from datetime import time

from fieldbooking.domain.exceptions import ConflictError, InvalidWindowError
from fieldbooking.domain.models import DayOfWeek, TimeWindow
from fieldbooking.domain.overlap import AvailabilityOverlapChecker


def window(day, open_hour, close_hour):
    return TimeWindow(day=day, open_time=time(*open_hour), close_time=time(*close_hour))


@pytest.fixture
def checker():
    return AvailabilityOverlapChecker()


class TestCheckOverlap:
    """Tests for check_overlap."""

    def test_no_existing_windows(self, checker):
        """Test that a window with nothing scheduled is accepted."""
        result = checker.check_overlap(window("Monday", (8, 0), (10, 0)), [])

        assert result.ok
        assert result.error is None
        assert result.conflict is None

    def test_no_window_on_same_day(self, checker):
        """Test that windows on other days are ignored."""
        existing = [
            window("Tuesday", (8, 0), (22, 0)),
            window("Sunday", (0, 0), (23, 59)),
        ]

        result = checker.check_overlap(window("Monday", (8, 0), (10, 0)), existing)

        assert result.ok

    def test_partial_overlap_conflicts(self, checker):
        """[09:00, 11:00) collides with [08:00, 10:00) on the same day."""
        existing = [window("Monday", (8, 0), (10, 0))]

        result = checker.check_overlap(window("Monday", (9, 0), (11, 0)), existing)

        assert not result.ok
        assert isinstance(result.error, ConflictError)
        assert result.conflict == existing[0]

    def test_touching_boundary_does_not_conflict(self, checker):
        """[10:00, 12:00) only touches [08:00, 10:00)."""
        existing = [window("Monday", (8, 0), (10, 0))]

        result = checker.check_overlap(window("Monday", (10, 0), (12, 0)), existing)

        assert result.ok

    def test_touching_on_the_other_side_does_not_conflict(self, checker):
        """Test that a window ending where another starts is accepted."""
        existing = [window("Monday", (10, 0), (12, 0))]

        result = checker.check_overlap(window("Monday", (8, 0), (10, 0)), existing)

        assert result.ok

    def test_different_days_never_conflict(self, checker):
        """Test that identical hours on another day are accepted."""
        existing = [window("Monday", (8, 0), (10, 0))]

        result = checker.check_overlap(window("Tuesday", (8, 0), (10, 0)), existing)

        assert result.ok

    @pytest.mark.parametrize(
        "candidate",
        [
            ((8, 0), (10, 0)),   # identical
            ((7, 0), (13, 0)),   # contains
            ((9, 0), (10, 0)),   # contained
            ((11, 59), (12, 30)),  # overlaps the end
        ],
    )
    def test_any_intersection_conflicts(self, checker, candidate):
        """Test that containment, equality and partial overlap all conflict."""
        existing = [window("Monday", (8, 0), (12, 0))]

        result = checker.check_overlap(window("Monday", *candidate), existing)

        assert isinstance(result.error, ConflictError)

    def test_first_conflict_is_reported(self, checker):
        """Test that the earliest conflicting window is reported."""
        existing = [
            window("Monday", (6, 0), (7, 0)),
            window("Monday", (8, 0), (10, 0)),
            window("Monday", (10, 0), (12, 0)),
        ]

        result = checker.check_overlap(window("Monday", (9, 0), (11, 0)), existing)

        assert result.conflict == existing[1]

    def test_ignore_skips_replaced_window(self, checker):
        """Test that the window being replaced is not a conflict."""
        replaced = window("Monday", (7, 0), (9, 0))
        existing = [replaced, window("Monday", (12, 0), (14, 0))]

        result = checker.check_overlap(
            window("Monday", (8, 0), (10, 0)),
            existing,
            ignore=replaced,
        )

        assert result.ok

    def test_raise_for_error(self, checker):
        """Test that a conflict result raises ConflictError."""
        existing = [window("Monday", (8, 0), (10, 0))]
        result = checker.check_overlap(window("Monday", (9, 0), (11, 0)), existing)

        with pytest.raises(ConflictError, match="overlaps existing Monday 08:00 - 10:00"):
            result.raise_for_error()

    def test_raise_for_error_is_noop_on_success(self, checker):
        """Test that a successful result does not raise."""
        checker.check_overlap(window("Monday", (8, 0), (10, 0)), []).raise_for_error()

    def test_repeated_calls_give_same_result(self, checker):
        """Test that the checker keeps no state between calls."""
        existing = [window("Monday", (8, 0), (10, 0))]
        candidate = window("Monday", (9, 0), (11, 0))

        results = [checker.check_overlap(candidate, existing) for _ in range(3)]

        assert all(not r.ok for r in results)
        assert {r.conflict for r in results} == {existing[0]}
        assert existing == [window("Monday", (8, 0), (10, 0))]


class TestCheckTimes:
    """Tests for check_times, which builds the candidate from raw values."""

    @pytest.mark.parametrize(
        "open_hour, close_hour",
        [
            (time(10, 0), time(10, 0)),
            (time(12, 0), time(8, 0)),
        ],
    )
    def test_invalid_window_fails_regardless_of_existing(self, checker, open_hour, close_hour):
        """Test that an inverted or empty window is an InvalidWindowError."""
        existing = [window("Monday", (8, 0), (10, 0))]

        result = checker.check_times("Monday", open_hour, close_hour, existing)

        assert isinstance(result.error, InvalidWindowError)
        assert result.candidate is None
        with pytest.raises(InvalidWindowError):
            result.raise_for_error()

    def test_valid_times_are_checked(self, checker):
        """Test that raw values go through the same overlap check."""
        existing = [window("Monday", (8, 0), (10, 0))]

        result = checker.check_times(DayOfWeek.MONDAY, time(9, 0), time(11, 0), existing)

        assert isinstance(result.error, ConflictError)
        assert result.candidate == window("Monday", (9, 0), (11, 0))


class TestFindConflicts:
    """Tests for find_conflicts."""

    def test_returns_all_conflicts(self, checker):
        """Test that every conflicting window is returned."""
        existing = [
            window("Monday", (8, 0), (10, 0)),
            window("Monday", (10, 0), (12, 0)),
            window("Monday", (13, 0), (15, 0)),
            window("Friday", (9, 0), (11, 0)),
        ]

        conflicts = checker.find_conflicts(window("Monday", (9, 0), (11, 0)), existing)

        assert conflicts == existing[:2]

    def test_returns_empty_list_without_conflicts(self, checker):
        """Test that no conflicts gives an empty list."""
        assert checker.find_conflicts(window("Monday", (9, 0), (11, 0)), []) == []
