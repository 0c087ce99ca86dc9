"""
Business calendar: classifies timestamps and steps over non-working days.

Pure domain logic without any external dependencies (no store access, no
caching, no I/O). The holiday set is handed in already resolved.
"""

from datetime import date, datetime
from typing import Iterable, Iterator

import pendulum
from pendulum import DateTime

from .exceptions import ConfigurationError
from .models import BusinessWindow, HolidaySet, to_date

SATURDAY = 5


def as_datetime(value: datetime) -> DateTime:
    """Return ``value`` as a pendulum DateTime, converting stdlib datetimes."""
    if isinstance(value, DateTime):
        return value
    return pendulum.instance(value)


class BusinessCalendar:
    """
    A daily business window combined with weekends and holidays.

    Instances are immutable value objects: every operation returns a new
    timestamp and never changes the calendar, so one calendar can be shared
    between threads.
    """

    # Upper bound for day skipping; a calendar with no working day in this
    # many days is treated as misconfigured.
    MAX_LOOKAHEAD_DAYS = 3650

    FULL_DAY_MINUTES = 1440

    def __init__(self, window: BusinessWindow, holidays: Iterable[date] = ()):
        self._window = window
        self._holidays: HolidaySet = frozenset(to_date(day) for day in holidays)

    @property
    def window(self) -> BusinessWindow:
        return self._window

    @property
    def holidays(self) -> HolidaySet:
        return self._holidays

    # -- predicates ----------------------------------------------------------

    def is_weekend(self, value: date) -> bool:
        return value.weekday() >= SATURDAY

    def is_holiday(self, value: date) -> bool:
        return to_date(value) in self._holidays

    def is_working_day(self, value: date) -> bool:
        """Check if the date of ``value`` is neither a weekend nor a holiday."""
        return not self.is_weekend(value) and not self.is_holiday(value)

    def is_working_instant(self, moment: datetime) -> bool:
        """
        Check if a timestamp lies inside business time.

        The window start is inclusive and the window end is exclusive, so a
        timestamp exactly at the closing time is not working time.
        """
        moment = as_datetime(moment)

        if not self.is_working_day(moment):
            return False

        if moment < self.window_start(moment) or moment >= self.window_end(moment):
            return False

        return True

    def workday_duration_minutes(self) -> int:
        """Return the length of one workday in minutes."""
        return self._window.duration_minutes

    def off_duration_minutes(self) -> int:
        """Return the non-working minutes between two consecutive windows."""
        return self.FULL_DAY_MINUTES - self.workday_duration_minutes()

    # -- window boundaries ---------------------------------------------------

    def window_start(self, moment: datetime) -> DateTime:
        """Return the window start on the date of ``moment``."""
        return as_datetime(moment).set(
            hour=self._window.start_hour,
            minute=self._window.start_minute,
            second=0,
            microsecond=0
        )

    def window_end(self, moment: datetime) -> DateTime:
        """Return the window end on the date of ``moment``."""
        return as_datetime(moment).set(
            hour=self._window.end_hour,
            minute=self._window.end_minute,
            second=0,
            microsecond=0
        )

    def snap_to_window(self, moment: datetime) -> DateTime:
        """
        Clamp a timestamp into its day's business window.

        Before the window opens -> window start of the same day.
        At or after the window closes -> window start of the next day.
        Weekends and holidays are not considered here.
        """
        moment = as_datetime(moment)

        if moment < self.window_start(moment):
            return self.window_start(moment)

        if moment >= self.window_end(moment):
            return self.window_start(moment.add(days=1))

        return moment

    # -- day stepping --------------------------------------------------------

    def skip_non_working_days(
        self,
        moment: datetime,
        reset_to_window_start: bool = False
    ) -> DateTime:
        """
        Move a timestamp forward until its date is a working day.

        Args:
            moment: Timestamp to start from
            reset_to_window_start: If True, the time-of-day is set to the
                window start after every skipped day; otherwise the carried
                time-of-day is kept

        Returns:
            The first timestamp on a working day (``moment`` itself if its
            date already is one)

        Raises:
            ConfigurationError: If no working day exists within
                MAX_LOOKAHEAD_DAYS
        """
        current = as_datetime(moment)
        skipped = 0

        while not self.is_working_day(current):
            if skipped >= self.MAX_LOOKAHEAD_DAYS:
                raise self._no_working_day_error(moment)

            current = current.add(days=1)
            skipped += 1

            if reset_to_window_start:
                current = self.window_start(current)

        return current

    def advance_to_working_instant(self, moment: datetime) -> DateTime:
        """
        Step forward in whole days, keeping the time-of-day, until the
        timestamp is a working instant.

        Only terminates for timestamps whose time-of-day is inside the
        window, which holds for anything passed through ``snap_to_window``.
        """
        current = as_datetime(moment)
        stepped = 0

        while not self.is_working_instant(current):
            if stepped >= self.MAX_LOOKAHEAD_DAYS:
                raise self._no_working_day_error(moment)

            current = current.add(days=1)
            stepped += 1

        return current

    def iter_days(self, start: datetime, end: datetime) -> Iterator[DateTime]:
        """
        Yield the window start of every date from ``start`` to ``end``.

        Both dates are included. Each call returns a fresh generator, so
        the sequence can be replayed.
        """
        current = self.window_start(start)
        last = to_date(as_datetime(end))

        while to_date(current) <= last:
            yield current
            current = current.add(days=1)

    def _no_working_day_error(self, moment: datetime) -> ConfigurationError:
        return ConfigurationError(
            f"No working day found within {self.MAX_LOOKAHEAD_DAYS} days after {moment}. "
            f"Check the holiday calendar."
        )

    def __repr__(self) -> str:
        return (
            f"BusinessCalendar(window={str(self._window)!r}, "
            f"holidays={len(self._holidays)})"
        )
