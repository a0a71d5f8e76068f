"""
JalaliConverter — конвертер на базе jdatetime

Converts between Instant (ms since epoch) and Jalali calendar fields in a
fixed timezone. Gregorian ⇄ Jalali conversion, month lengths and the leap
rule come from jdatetime; this module only sequences them.

Numbering:
- month: 0-based (0 = Farvardin … 11 = Esfand)
- day_of_week: jdatetime numbering (0 = Saturday … 6 = Friday)

Month lengths: Farvardin–Shahrivar 31, Mehr–Bahman 30, Esfand 29 (30 in a
leap year).
"""

import logging
from datetime import datetime, time, timedelta, tzinfo
from typing import Any, Final, Optional

import jdatetime

from persian_datemath.config import CalendarConfig
from persian_datemath.core.converter.base import CalendarConversionError
from persian_datemath.core.domain.calendar_date import MONTHS_PER_YEAR, CalendarDate
from persian_datemath.core.domain.instant import (
    MS_PER_DAY,
    Instant,
    coerce_instant,
    from_local_datetime,
    to_local_datetime,
)

logger = logging.getLogger(__name__)

ESFAND: Final[int] = 11


class JalaliConverter:
    """Instant ⇄ Jalali поля в заданной зоне.

    Stateless: holds only the immutable config, safe to share between threads.
    """

    def __init__(self, config: Optional[CalendarConfig] = None):
        """
        Args:
            config: конфигурация календаря (default: UTC, week starts Saturday)
        """
        self.config = config or CalendarConfig()
        self._tz = self.config.tzinfo

    def __repr__(self) -> str:
        return f"JalaliConverter(timezone={self.config.timezone!r})"

    @property
    def tzinfo(self) -> tzinfo:
        return self._tz

    def coerce(self, value: Any, name: str = "instant") -> Instant:
        return coerce_instant(value, self._tz, name)

    # =========================================================================
    # FIELDS
    # =========================================================================

    def to_calendar_date(self, instant: Instant) -> CalendarDate:
        """
        Instant → CalendarDate.

        Raises:
            CalendarConversionError: дата вне диапазона jdatetime
        """
        try:
            local = to_local_datetime(instant, self._tz)
            jdate = jdatetime.date.fromgregorian(date=local.date())
        except (ValueError, OverflowError) as e:
            raise CalendarConversionError(f"Cannot convert instant {instant}: {e}") from e

        millis_of_day = (
            (local.hour * 60 + local.minute) * 60 + local.second
        ) * 1000 + local.microsecond // 1000

        return CalendarDate(
            year=jdate.year,
            month=jdate.month - 1,
            day=jdate.day,
            day_of_week=jdate.weekday(),
            millis_of_day=millis_of_day,
        )

    def to_instant(self, year: int, month: int, day: int, millis_of_day: int = 0) -> Instant:
        """
        Поля (month 0-based) → Instant.

        Args:
            year: Jalali год
            month: месяц [0, 11]
            day: день [1, days_in_month]
            millis_of_day: локальное время суток [0, MS_PER_DAY)

        Raises:
            CalendarConversionError: некорректные поля
        """
        if not 0 <= millis_of_day < MS_PER_DAY:
            raise CalendarConversionError(
                f"millis_of_day must be in [0, {MS_PER_DAY}), got {millis_of_day}"
            )

        max_day = self.days_in_month(year, month)
        if not 1 <= day <= max_day:
            raise CalendarConversionError(
                f"day must be in [1, {max_day}] for {year}-{month + 1:02d}, got {day}"
            )

        gdate = self._jalali(year, month + 1, day).togregorian()
        try:
            local = datetime.combine(gdate, time()) + timedelta(milliseconds=millis_of_day)
            return from_local_datetime(local, self._tz)
        except (ValueError, OverflowError) as e:
            raise CalendarConversionError(
                f"Cannot convert {year}-{month + 1:02d}-{day:02d} to an instant: {e}"
            ) from e

    def from_calendar_date(self, date: CalendarDate) -> Instant:
        return self.to_instant(date.year, date.month, date.day, date.millis_of_day)

    # =========================================================================
    # MONTH LENGTHS / LEAP RULE
    # =========================================================================

    def is_leap_year(self, year: int) -> bool:
        return self._jalali(year, 1, 1).isleap()

    def days_in_month(self, year: int, month: int) -> int:
        """
        Количество дней в месяце (month 0-based).

        Raises:
            CalendarConversionError: month вне [0, 11] или год вне диапазона
        """
        if not 0 <= month < MONTHS_PER_YEAR:
            raise CalendarConversionError(f"month must be in [0, 11], got {month}")

        length = jdatetime.j_days_in_month[month]
        if month == ESFAND and self.is_leap_year(year):
            length += 1
        return length

    # =========================================================================
    # INSTANT QUERIES
    # =========================================================================

    def start_of_month(self, instant: Instant) -> Instant:
        date = self.to_calendar_date(instant)
        return self.to_instant(date.year, date.month, 1)

    def end_of_month(self, instant: Instant) -> Instant:
        date = self.to_calendar_date(instant)
        return self.to_instant(date.year, date.month, self.days_in_month(date.year, date.month))

    def day_of_week(self, instant: Instant) -> int:
        return self.to_calendar_date(instant).day_of_week

    def add_days(self, date: CalendarDate, days: int) -> CalendarDate:
        """
        Сдвиг на ``days`` календарных дней (может быть отрицательным).

        Arithmetic runs on the Gregorian proleptic day count, so month and
        year boundaries (including Esfand 30 of leap years) are crossed
        correctly.
        """
        gdate = self._jalali(date.year, date.month + 1, date.day).togregorian()
        try:
            shifted = jdatetime.date.fromgregorian(date=gdate + timedelta(days=days))
        except (ValueError, OverflowError) as e:
            raise CalendarConversionError(
                f"Cannot shift {date.ymd} by {days} days: {e}"
            ) from e

        return CalendarDate(
            year=shifted.year,
            month=shifted.month - 1,
            day=shifted.day,
            day_of_week=shifted.weekday(),
            millis_of_day=date.millis_of_day,
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _jalali(year: int, month: int, day: int) -> jdatetime.date:
        """jdatetime.date с month 1-based; ValueError → CalendarConversionError."""
        try:
            return jdatetime.date(year, month, day)
        except ValueError as e:
            logger.debug("Rejected Jalali fields %s-%s-%s: %s", year, month, day, e)
            raise CalendarConversionError(
                f"Invalid Jalali date {year}-{month:02d}-{day:02d}: {e}"
            ) from e
