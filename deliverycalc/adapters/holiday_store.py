"""
Holiday period stores.

A store only knows how to list holiday periods; expanding them into dates
and caching the result is the resolver's job.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable, List

import pendulum
import yaml

from ..domain.exceptions import ConfigurationError, HolidayStoreError
from ..domain.models import HolidayPeriod, to_date

logger = logging.getLogger(__name__)


class InMemoryHolidayStore:
    """Store backed by a fixed list of holiday periods."""

    def __init__(self, periods: Iterable[HolidayPeriod] = ()):
        self._periods: List[HolidayPeriod] = list(periods)

    def fetch_periods(self) -> List[HolidayPeriod]:
        return list(self._periods)


class YamlHolidayStore:
    """
    Store that reads holiday periods from a YAML file.

    Expected layout::

        holidays:
          - name: Christmas
            start: 2024-12-24
            end: 2024-12-26
          - name: New Year
            start: 2025-01-01

    ``end`` defaults to ``start`` for single-day holidays. The file is read
    on every fetch; put a HolidaySetResolver in front of it to cache.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def fetch_periods(self) -> List[HolidayPeriod]:
        """
        Load all holiday periods from the YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            HolidayStoreError: If the file or one of its entries is invalid
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Holiday file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise HolidayStoreError(f"Invalid YAML in {self.path}: {exc}") from exc

        if not isinstance(data, dict):
            raise HolidayStoreError(f"{self.path} must contain a mapping at the root level.")

        entries = data.get("holidays") or []
        if not isinstance(entries, list):
            raise HolidayStoreError(f"'holidays' in {self.path} must be a list.")

        periods = [
            parse_holiday_entry(entry, source=str(self.path))
            for entry in entries
        ]

        logger.info("Loaded %d holiday period(s) from %s", len(periods), self.path)
        return periods


def parse_holiday_entry(entry: Any, source: str = "<memory>") -> HolidayPeriod:
    """
    Build a HolidayPeriod from a mapping with ``start``, optional ``end``
    and optional ``name``.
    """
    if not isinstance(entry, dict):
        raise HolidayStoreError(f"Holiday entry in {source} must be a mapping, got {entry!r}")

    if "start" not in entry:
        raise HolidayStoreError(f"Holiday entry in {source} is missing 'start': {entry!r}")

    start = _parse_date(entry["start"], source)
    end = _parse_date(entry["end"], source) if entry.get("end") is not None else start

    try:
        return HolidayPeriod(start_date=start, end_date=end, name=str(entry.get("name") or ""))
    except ConfigurationError as exc:
        raise HolidayStoreError(f"Invalid holiday entry in {source}: {exc}") from exc


def _parse_date(value: Any, source: str) -> date:
    # PyYAML already turns unquoted ISO dates into date objects
    if isinstance(value, date):
        return to_date(value)

    try:
        return to_date(pendulum.from_format(str(value).strip(), "YYYY-MM-DD"))
    except ValueError as exc:
        raise HolidayStoreError(f"Invalid date {value!r} in {source}: {exc}") from exc
