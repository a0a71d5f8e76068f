"""
Calendar converters.

Converter contract plus the jdatetime-backed Jalali implementation.
"""

from persian_datemath.core.converter.base import CalendarConversionError, CalendarConverter
from persian_datemath.core.converter.jalali import JalaliConverter

__all__ = [
    "CalendarConversionError",
    "CalendarConverter",
    "JalaliConverter",
]
