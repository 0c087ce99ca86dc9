"""
Forward projection of a timestamp by an amount of working time.
"""

import math
from datetime import datetime, timedelta

from pendulum import DateTime

from .business_calendar import BusinessCalendar
from .exceptions import InvalidArgumentError


class DeliveryProjector:
    """
    Calculates when work finishes if it starts at an origin timestamp.

    Algorithm:
    1. Snap the origin into the business window and move it to the start
       of the first working day if it falls on a weekend or holiday
    2. Step over the number of whole workdays contained in the duration
    3. Add the remaining minutes on the reached day
    4. If that overflows the window end, carry the overflow over the night
       into the next working day
    """

    def __init__(self, calendar: BusinessCalendar):
        self.calendar = calendar

    def project(self, origin: datetime, duration_hours: float) -> DateTime:
        """
        Return the timestamp reached after consuming ``duration_hours`` of
        working time from ``origin``.

        Args:
            origin: Order timestamp
            duration_hours: Working time to consume, fractional hours allowed

        Returns:
            The delivery timestamp, always a working instant

        Raises:
            InvalidArgumentError: If the duration is negative, infinite or
                not a number
        """
        if not math.isfinite(duration_hours) or duration_hours < 0:
            raise InvalidArgumentError(
                f"Duration must be a non-negative number of hours, got {duration_hours}"
            )

        calendar = self.calendar

        current = calendar.snap_to_window(origin)
        current = calendar.skip_non_working_days(current, reset_to_window_start=True)

        duration_minutes = duration_hours * 60
        workday_minutes = calendar.workday_duration_minutes()
        whole_workdays = math.floor(duration_minutes / workday_minutes)

        if whole_workdays >= 1:
            remaining_minutes = duration_minutes - whole_workdays * workday_minutes

            # Time-of-day is already inside the window, so it is carried over
            # while stepping across weekends and holidays.
            for _ in range(whole_workdays):
                current = calendar.skip_non_working_days(current.add(days=1))

            window_end = calendar.window_end(current)
            current = current + timedelta(minutes=remaining_minutes)
        else:
            window_end = calendar.window_end(current)
            current = current + timedelta(minutes=duration_minutes)
            current = calendar.skip_non_working_days(current)

        # Compared against the end of the day the minutes were added on, so
        # an overflow past midnight is carried over as well.
        if current >= window_end:
            current = current + timedelta(minutes=calendar.off_duration_minutes())
            current = calendar.skip_non_working_days(current)

        return calendar.skip_non_working_days(current)
