"""
Adapters layer - Holiday period stores.
"""

from .holiday_store import InMemoryHolidayStore, YamlHolidayStore, parse_holiday_entry

__all__ = ["InMemoryHolidayStore", "YamlHolidayStore", "parse_holiday_entry"]
