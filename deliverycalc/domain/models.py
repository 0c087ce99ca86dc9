"""
Domain models for business windows and holiday periods.
"""

from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import FrozenSet, Iterable, Iterator

from .exceptions import ConfigurationError

HolidaySet = FrozenSet[date]


@dataclass(frozen=True)
class BusinessWindow:
    """
    Represents the daily working window, e.g. 09:00 - 17:00.

    Invariant: the window opens before it closes on the same day.
    """
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int

    def __post_init__(self):
        for label, value, upper in (
            ("start_hour", self.start_hour, 23),
            ("start_minute", self.start_minute, 59),
            ("end_hour", self.end_hour, 23),
            ("end_minute", self.end_minute, 59),
        ):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{label} must be an integer, got {value!r}")
            if not 0 <= value <= upper:
                raise ConfigurationError(f"{label} must be between 0 and {upper}, got {value}")

        if self.start_offset_minutes >= self.end_offset_minutes:
            raise ConfigurationError(
                f"Window start {self.start_time:%H:%M} must be before window end {self.end_time:%H:%M}"
            )

    @property
    def start_offset_minutes(self) -> int:
        """Minutes from midnight to the window start."""
        return self.start_hour * 60 + self.start_minute

    @property
    def end_offset_minutes(self) -> int:
        """Minutes from midnight to the window end."""
        return self.end_hour * 60 + self.end_minute

    @property
    def duration_minutes(self) -> int:
        """Return the length of one workday in minutes."""
        return self.end_offset_minutes - self.start_offset_minutes

    @property
    def start_time(self) -> time:
        return time(hour=self.start_hour, minute=self.start_minute)

    @property
    def end_time(self) -> time:
        return time(hour=self.end_hour, minute=self.end_minute)

    def __str__(self) -> str:
        return f"{self.start_time:%H:%M} - {self.end_time:%H:%M}"


@dataclass(frozen=True)
class HolidayPeriod:
    """
    An inclusive range of non-working calendar dates.

    A single-day holiday has the same start and end date.
    """
    start_date: date
    end_date: date
    name: str = ""

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise ConfigurationError(
                f"Holiday period end {self.end_date} must not be before its start {self.start_date}"
            )

    def dates(self) -> Iterator[date]:
        """Yield every date of the period, start and end included."""
        current = self.start_date
        while current <= self.end_date:
            yield current
            current = current + timedelta(days=1)

    def day_count(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def __str__(self) -> str:
        label = f"{self.name}: " if self.name else ""
        if self.start_date == self.end_date:
            return f"{label}{self.start_date:%d.%m.%Y}"
        return f"{label}{self.start_date:%d.%m.%Y} - {self.end_date:%d.%m.%Y}"


def to_date(value: date) -> date:
    """
    Normalize a date or datetime to a plain calendar date.

    Time-of-day and zone are dropped so that membership tests in a
    HolidaySet compare by year, month and day only.
    """
    return date(value.year, value.month, value.day)


def expand_holiday_periods(periods: Iterable[HolidayPeriod]) -> HolidaySet:
    """Expand holiday periods into the set of individual non-working dates."""
    dates = set()
    for period in periods:
        dates.update(period.dates())
    return frozenset(dates)
