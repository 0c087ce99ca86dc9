"""
deliverycalc - delivery times and working durations on a business calendar.
"""

__version__ = "1.0.0"
