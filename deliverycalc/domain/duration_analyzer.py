"""
Working time elapsed between two timestamps.
"""

from datetime import datetime

from .business_calendar import BusinessCalendar, as_datetime
from .exceptions import InvalidRangeError
from .models import to_date


class DurationAnalyzer:
    """
    Splits a time span into working and non-working parts.

    The first and last day of the span may be partial; every working day
    in between counts as a full workday, weekends and holidays count zero.
    """

    def __init__(self, calendar: BusinessCalendar):
        self.calendar = calendar

    def duration_in_working_hours(self, start: datetime, end: datetime) -> float:
        """
        Calculate the working hours between two timestamps.

        Args:
            start: Start of the span
            end: End of the span, not before ``start``

        Returns:
            Working hours as a float

        Raises:
            InvalidRangeError: If ``end`` is before ``start``
        """
        start = as_datetime(start)
        end = as_datetime(end)

        if start > end:
            raise InvalidRangeError(f"Start {start} must not be after end {end}")

        calendar = self.calendar

        start = calendar.advance_to_working_instant(calendar.snap_to_window(start))
        end = calendar.advance_to_working_instant(calendar.snap_to_window(end))

        # Both ends in the same non-working run keep their own time-of-day,
        # so the advanced end can fall before the advanced start.
        if end < start:
            end = start

        first_day = to_date(start)
        last_day = to_date(end)

        if first_day == last_day:
            return (end - start).total_seconds() / 3600

        working_minutes = 0.0

        for day in calendar.iter_days(start, end):
            if not calendar.is_working_day(day):
                continue

            if to_date(day) == first_day:
                # First day may start in the middle of the window
                working_minutes += (calendar.window_end(day) - start).total_seconds() / 60
            elif to_date(day) == last_day:
                # Last day may end in the middle of the window
                working_minutes += (end - day).total_seconds() / 60
            else:
                working_minutes += calendar.workday_duration_minutes()

        return working_minutes / 60

    def duration_in_working_days(self, start: datetime, end: datetime) -> float:
        """Calculate the working time between two timestamps in workdays."""
        working_hours = self.duration_in_working_hours(start, end)
        return working_hours / (self.calendar.workday_duration_minutes() / 60)
