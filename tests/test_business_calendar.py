"""
Tests for the business calendar predicates and day skipping.
"""

from datetime import date, datetime, timedelta

import pendulum
import pytest

from deliverycalc.domain.business_calendar import BusinessCalendar
from deliverycalc.domain.exceptions import ConfigurationError
from deliverycalc.domain.models import BusinessWindow

TZ = "Europe/Berlin"


def at(value: str):
    return pendulum.parse(value, tz=TZ)


@pytest.fixture
def calendar():
    """09:00 - 17:00 with Wednesday 2024-11-27 as holiday."""
    return BusinessCalendar(BusinessWindow(9, 0, 17, 0), holidays=[date(2024, 11, 27)])


class TestWorkingInstant:
    """Tests for is_working_instant."""

    @pytest.mark.parametrize(
        "window",
        [
            BusinessWindow(9, 0, 17, 0),
            BusinessWindow(0, 0, 23, 59),
            BusinessWindow(6, 45, 18, 30),
        ],
    )
    def test_weekend_is_never_working_time(self, window):
        """Saturdays and Sundays are off regardless of time-of-day."""
        calendar = BusinessCalendar(window)

        for day in ("2024-11-23", "2024-11-24"):
            start = at(f"{day} 00:00")
            for quarter in range(96):
                assert not calendar.is_working_instant(start.add(minutes=15 * quarter))

    def test_inside_window(self, calendar):
        assert calendar.is_working_instant(at("2024-11-25 10:00"))

    def test_window_start_is_inclusive(self, calendar):
        assert calendar.is_working_instant(at("2024-11-25 09:00"))
        assert not calendar.is_working_instant(at("2024-11-25 08:59"))

    def test_window_end_is_exclusive(self, calendar):
        assert calendar.is_working_instant(at("2024-11-25 16:59"))
        assert not calendar.is_working_instant(at("2024-11-25 17:00"))

    def test_holiday_is_not_working_time(self, calendar):
        assert not calendar.is_working_instant(at("2024-11-27 10:00"))
        assert calendar.is_holiday(at("2024-11-27 10:00"))
        assert calendar.is_working_instant(at("2024-11-28 10:00"))

    def test_accepts_stdlib_datetime(self, calendar):
        assert calendar.is_working_instant(datetime(2024, 11, 25, 10, 0))
        assert not calendar.is_working_instant(datetime(2024, 11, 25, 18, 0))

    def test_holidays_given_as_datetimes_are_normalized(self):
        """Holiday membership compares by date only."""
        calendar = BusinessCalendar(
            BusinessWindow(9, 0, 17, 0),
            holidays=[pendulum.datetime(2024, 11, 27, 15, 45, tz=TZ)]
        )

        assert calendar.holidays == {date(2024, 11, 27)}
        assert calendar.is_holiday(date(2024, 11, 27))
        assert not calendar.is_working_instant(at("2024-11-27 09:30"))


class TestDurations:
    """Tests for workday and off-time lengths."""

    def test_workday_duration(self, calendar):
        assert calendar.workday_duration_minutes() == 480
        assert calendar.off_duration_minutes() == 960

    def test_workday_duration_with_minutes(self):
        calendar = BusinessCalendar(BusinessWindow(6, 45, 18, 30))

        assert calendar.workday_duration_minutes() == 705
        assert calendar.off_duration_minutes() == 735


class TestSnapToWindow:
    """Tests for clamping timestamps into the business window."""

    def test_before_window_snaps_to_start(self, calendar):
        assert calendar.snap_to_window(at("2024-11-25 07:00")) == at("2024-11-25 09:00")

    def test_inside_window_is_unchanged(self, calendar):
        moment = at("2024-11-25 10:15")

        assert calendar.snap_to_window(moment) == moment

    def test_at_window_end_moves_to_next_day(self, calendar):
        assert calendar.snap_to_window(at("2024-11-25 17:00")) == at("2024-11-26 09:00")

    def test_after_window_moves_to_next_day(self, calendar):
        assert calendar.snap_to_window(at("2024-11-25 23:30")) == at("2024-11-26 09:00")

    def test_weekends_are_not_skipped(self, calendar):
        """Snapping only looks at the time-of-day."""
        assert calendar.snap_to_window(at("2024-11-22 18:00")) == at("2024-11-23 09:00")

    def test_seconds_are_cleared(self, calendar):
        assert calendar.snap_to_window(at("2024-11-25 06:12:34")) == at("2024-11-25 09:00:00")


class TestSkipNonWorkingDays:
    """Tests for skip_non_working_days."""

    def test_working_day_is_unchanged(self, calendar):
        moment = at("2024-11-25 20:00")

        assert calendar.skip_non_working_days(moment) == moment
        assert calendar.skip_non_working_days(moment, reset_to_window_start=True) == moment

    def test_weekend_keeps_time_of_day(self, calendar):
        assert calendar.skip_non_working_days(at("2024-11-23 14:30")) == at("2024-11-25 14:30")

    def test_weekend_with_reset(self, calendar):
        result = calendar.skip_non_working_days(at("2024-11-23 14:30"), reset_to_window_start=True)

        assert result == at("2024-11-25 09:00")

    def test_holiday_after_weekend(self):
        calendar = BusinessCalendar(
            BusinessWindow(9, 0, 17, 0),
            holidays=[date(2024, 11, 25), date(2024, 11, 26)]
        )

        assert calendar.skip_non_working_days(at("2024-11-23 11:00")) == at("2024-11-27 11:00")

    @pytest.mark.parametrize("reset", [False, True])
    @pytest.mark.parametrize(
        "value",
        ["2024-11-22 16:00", "2024-11-23 03:00", "2024-11-24 19:00", "2024-11-27 10:00"],
    )
    def test_idempotent(self, calendar, value, reset):
        once = calendar.skip_non_working_days(at(value), reset)

        assert calendar.skip_non_working_days(once, reset) == once

    def test_original_timestamp_is_not_modified(self, calendar):
        moment = at("2024-11-23 14:30")

        calendar.skip_non_working_days(moment, reset_to_window_start=True)

        assert moment == at("2024-11-23 14:30")

    def test_all_holiday_calendar_raises_error(self):
        """A calendar without any working day must not loop forever."""
        first = date(2024, 11, 25)
        holidays = [first + timedelta(days=offset) for offset in range(4000)]
        calendar = BusinessCalendar(BusinessWindow(9, 0, 17, 0), holidays=holidays)

        with pytest.raises(ConfigurationError, match="No working day found"):
            calendar.skip_non_working_days(at("2024-11-25 10:00"))

    def test_advance_to_working_instant_keeps_time(self, calendar):
        assert calendar.advance_to_working_instant(at("2024-11-23 10:00")) == at("2024-11-25 10:00")
        assert calendar.advance_to_working_instant(at("2024-11-27 16:00")) == at("2024-11-28 16:00")


class TestIterDays:
    """Tests for the day sequence between two timestamps."""

    def test_days_are_inclusive_at_window_start(self, calendar):
        days = list(calendar.iter_days(at("2024-11-22 15:00"), at("2024-11-25 11:00")))

        assert days == [
            at("2024-11-22 09:00"),
            at("2024-11-23 09:00"),
            at("2024-11-24 09:00"),
            at("2024-11-25 09:00"),
        ]

    def test_single_day(self, calendar):
        days = list(calendar.iter_days(at("2024-11-25 10:00"), at("2024-11-25 14:00")))

        assert days == [at("2024-11-25 09:00")]

    def test_sequence_is_restartable(self, calendar):
        start = at("2024-11-01 10:00")
        end = at("2024-12-31 10:00")

        first = list(calendar.iter_days(start, end))
        second = list(calendar.iter_days(start, end))

        assert first == second
        assert len(first) == 61
