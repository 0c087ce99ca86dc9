"""
Resolution of holiday periods into a cached set of non-working dates.

The resolver sits between a holiday store (file, database, ...) and the
domain core. It expands periods into individual dates and keeps the result
for a bounded time so repeated calculations don't hit the store each time.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional, Protocol

from ..domain.models import HolidayPeriod, HolidaySet, expand_holiday_periods

logger = logging.getLogger(__name__)


DEFAULT_CACHE_TTL_SECONDS = 3600


class HolidayStoreProtocol(Protocol):
    """Protocol describing the holiday store behaviour needed by the resolver."""

    def fetch_periods(self) -> List[HolidayPeriod]:
        """Return all configured holiday periods."""


class HolidayResolverProtocol(Protocol):
    """Anything that can supply the resolved set of holiday dates."""

    def resolve_holiday_dates(self) -> HolidaySet:
        """Return the current set of non-working dates."""


class HolidaySetResolver:
    """
    Fetches holiday periods from a store and caches the expanded date set.

    A cached set is reused while it is younger than ``ttl_seconds``; a TTL
    of zero disables caching. Safe to share between threads.
    """

    def __init__(
        self,
        store: HolidayStoreProtocol,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must not be negative, got {ttl_seconds}")

        self._store = store
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._cached: Optional[HolidaySet] = None
        self._cached_at: float = 0.0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def resolve_holiday_dates(self) -> HolidaySet:
        """
        Return the set of holiday dates, from cache if still fresh.

        Errors from the store propagate unchanged and leave any previously
        cached set untouched.
        """
        with self._lock:
            now = self._clock()

            if self._cached is not None and now - self._cached_at < self._ttl_seconds:
                logger.debug("Using cached holiday set (%d dates)", len(self._cached))
                return self._cached

            periods = self._store.fetch_periods()
            holidays = self._expand(periods)

            self._cached = holidays
            self._cached_at = now
            logger.debug(
                "Resolved %d holiday date(s) from %d period(s)",
                len(holidays),
                len(periods)
            )
            return holidays

    def invalidate(self) -> None:
        """Drop the cached holiday set; the next call fetches again."""
        with self._lock:
            self._cached = None
            self._cached_at = 0.0

    @staticmethod
    def _expand(periods: List[HolidayPeriod]) -> HolidaySet:
        holidays = expand_holiday_periods(periods)

        total_days = sum(period.day_count() for period in periods)
        if total_days != len(holidays):
            # Overlaps are harmless for the calculation but usually a data error
            logger.warning(
                "Holiday periods overlap: %d day(s) listed, %d distinct date(s)",
                total_days,
                len(holidays)
            )

        return holidays
