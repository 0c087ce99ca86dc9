"""
Domain layer - Pure business calendar arithmetic without external dependencies.
"""

from .business_calendar import BusinessCalendar
from .delivery_projector import DeliveryProjector
from .duration_analyzer import DurationAnalyzer
from .exceptions import (
    ConfigurationError,
    DeliveryCalculatorError,
    HolidayStoreError,
    InvalidArgumentError,
    InvalidRangeError,
)
from .models import BusinessWindow, HolidayPeriod, HolidaySet, expand_holiday_periods

__all__ = [
    "BusinessCalendar",
    "BusinessWindow",
    "ConfigurationError",
    "DeliveryCalculatorError",
    "DeliveryProjector",
    "DurationAnalyzer",
    "HolidayPeriod",
    "HolidaySet",
    "HolidayStoreError",
    "InvalidArgumentError",
    "InvalidRangeError",
    "expand_holiday_periods",
]
