"""
Domain-specific exception hierarchy for the delivery calculator.
"""


class DeliveryCalculatorError(Exception):
    """Base class for all application-level errors."""


class ConfigurationError(DeliveryCalculatorError):
    """Raised when the business window or holiday calendar is unusable."""


class InvalidRangeError(DeliveryCalculatorError):
    """Raised when a duration is requested for an end before its start."""


class InvalidArgumentError(DeliveryCalculatorError):
    """Raised when a projection is requested for an unsupported duration."""


class HolidayStoreError(DeliveryCalculatorError):
    """Raised when holiday periods cannot be read or parsed."""
