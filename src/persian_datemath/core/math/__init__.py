"""
Core math modules для persian-datemath

Календарная арифметика Jalali поверх инжектируемого конвертера.
"""

from persian_datemath.core.math.calendar_math import CalendarMath, system_clock

__all__ = [
    "CalendarMath",
    "system_clock",
]
