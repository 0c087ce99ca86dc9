"""
Service layer helpers that orchestrate holiday stores and domain logic.
"""

from .delivery_calculator import DeliveryCalculator
from .holiday_resolver import (
    HolidayResolverProtocol,
    HolidaySetResolver,
    HolidayStoreProtocol,
)

__all__ = [
    "DeliveryCalculator",
    "HolidayResolverProtocol",
    "HolidaySetResolver",
    "HolidayStoreProtocol",
]
