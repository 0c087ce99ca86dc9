"""
Application service for delivery time and working duration calculations.

The service resolves the holiday set through a resolver (usually cached)
once per calculation and delegates the arithmetic to the domain-level
``DeliveryProjector`` and ``DurationAnalyzer``. Depending on a protocol
keeps the holiday source pluggable: a YAML file, inline config, or a stub
in tests.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from pendulum import DateTime

from ..adapters.holiday_store import InMemoryHolidayStore, YamlHolidayStore
from ..config import AppConfig
from ..domain.business_calendar import BusinessCalendar
from ..domain.delivery_projector import DeliveryProjector
from ..domain.duration_analyzer import DurationAnalyzer
from ..domain.models import BusinessWindow, HolidaySet
from .holiday_resolver import HolidayResolverProtocol, HolidaySetResolver

logger = logging.getLogger(__name__)


class DeliveryCalculator:
    """
    Calculates delivery times and working durations on a business calendar
    with weekends and holidays.
    """

    def __init__(
        self,
        window: BusinessWindow,
        holiday_resolver: Optional[HolidayResolverProtocol] = None,
    ) -> None:
        self._window = window
        self._holiday_resolver = holiday_resolver

    @classmethod
    def from_config(cls, config: AppConfig) -> "DeliveryCalculator":
        """
        Build a calculator from the application configuration.

        Holidays come from ``holidays_file`` when set, otherwise from the
        inline ``holidays`` list.
        """
        if config.holidays_file is not None:
            store = YamlHolidayStore(config.holidays_file)
        else:
            store = InMemoryHolidayStore(config.get_holiday_periods())

        resolver = HolidaySetResolver(store=store, ttl_seconds=config.holiday_cache_ttl_seconds)
        return cls(window=config.business_hours.to_window(), holiday_resolver=resolver)

    @property
    def window(self) -> BusinessWindow:
        return self._window

    def calendar(self) -> BusinessCalendar:
        """Build a business calendar with the currently resolved holidays."""
        return BusinessCalendar(self._window, self._resolve_holidays())

    def is_business_time(self, moment: datetime) -> bool:
        """Check if a timestamp lies inside business hours on a working day."""
        return self.calendar().is_working_instant(moment)

    def get_delivery_time(self, order_time: datetime, duration_hours: float) -> DateTime:
        """
        Calculate the delivery timestamp for an order.

        Args:
            order_time: When the order was placed
            duration_hours: Working hours of processing

        Returns:
            The timestamp when processing is finished
        """
        delivery_time = DeliveryProjector(self.calendar()).project(order_time, duration_hours)
        logger.debug("Delivery for %s + %sh: %s", order_time, duration_hours, delivery_time)
        return delivery_time

    def get_duration_in_working_hours(self, start: datetime, end: datetime) -> float:
        """Calculate working hours between two timestamps."""
        return DurationAnalyzer(self.calendar()).duration_in_working_hours(start, end)

    def get_duration_in_working_days(self, start: datetime, end: datetime) -> float:
        """Calculate working days between two timestamps."""
        return DurationAnalyzer(self.calendar()).duration_in_working_days(start, end)

    def get_workday_duration_in_minutes(self) -> int:
        return self._window.duration_minutes

    def _resolve_holidays(self) -> HolidaySet:
        if self._holiday_resolver is None:
            return frozenset()
        return self._holiday_resolver.resolve_holiday_dates()
