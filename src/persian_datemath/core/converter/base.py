"""
CalendarConverter — контракт конвертера календаря

Converter is the only component that knows the target calendar: the
Instant ⇄ fields conversion, month lengths and the leap rule. CalendarMath
receives it explicitly (no global singleton), so alternate calendars or
test doubles can be substituted.
"""

from datetime import tzinfo
from typing import Any, Protocol, runtime_checkable

from persian_datemath.core.domain.calendar_date import CalendarDate
from persian_datemath.core.domain.instant import Instant


class CalendarConversionError(ValueError):
    """
    Malformed calendar fields or a year outside the supported table.

    CalendarMath propagates it unchanged: there is no fallback calendar.
    """

    pass


@runtime_checkable
class CalendarConverter(Protocol):
    """Instant ⇄ CalendarDate конвертер."""

    @property
    def tzinfo(self) -> tzinfo:
        """Зона, в которой вычисляются поля и локальная полночь."""
        ...

    def coerce(self, value: Any, name: str = "instant") -> Instant:
        """Привести значение к Instant (InvalidInstantError для невалидных)."""
        ...

    def to_calendar_date(self, instant: Instant) -> CalendarDate:
        ...

    def to_instant(self, year: int, month: int, day: int, millis_of_day: int = 0) -> Instant:
        """Поля (month 0-based) → Instant."""
        ...

    def days_in_month(self, year: int, month: int) -> int:
        ...

    def is_leap_year(self, year: int) -> bool:
        ...

    def start_of_month(self, instant: Instant) -> Instant:
        ...

    def end_of_month(self, instant: Instant) -> Instant:
        """Полночь последнего дня месяца."""
        ...

    def day_of_week(self, instant: Instant) -> int:
        ...

    def add_days(self, date: CalendarDate, days: int) -> CalendarDate:
        """Сдвиг на ``days`` календарных дней, время суток сохраняется."""
        ...
