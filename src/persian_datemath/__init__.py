"""
persian-datemath — календарная арифметика Jalali (Solar Hijri)

Timestamp-in / timestamp-out date math for a Persian datepicker:
month boundaries, navigation, day/month/year arithmetic and range checks.
"""

from persian_datemath.config import CalendarConfig
from persian_datemath.core.converter import (
    CalendarConversionError,
    CalendarConverter,
    JalaliConverter,
)
from persian_datemath.core.domain import CalendarDate, Instant, InvalidInstantError
from persian_datemath.core.math import CalendarMath

__version__ = "0.1.0"

__all__ = [
    "CalendarConfig",
    "CalendarConversionError",
    "CalendarConverter",
    "CalendarDate",
    "CalendarMath",
    "Instant",
    "InvalidInstantError",
    "JalaliConverter",
]
