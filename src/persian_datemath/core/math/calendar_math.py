"""
CalendarMath — календарная арифметика над Instant

Stateless date math for the Jalali calendar, expressed entirely through an
injected CalendarConverter. Timestamp in, timestamp (or bool/int) out.

Операции:
- Границы месяца: first/last date of month, days in month
- Навигация: date in next/previous month, is in next/previous month
- Сравнения: same month and year, same day, validity
- Арифметика: increment days/months/years, month/year distance,
  week of month, midpoint
- Нормализация и диапазоны: at_midnight, clamp, is_within_range,
  is_month_within_range
- Адаптер UI: timestamp_from_node

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. first_date_of_month(d) <= at_midnight(d) <= last_date_of_month(d)
2. increment_months никогда не переполняется в следующий месяц (clamp к
   последнему дню целевого месяца)
3. Невалидная граница диапазона трактуется как отсутствующая
4. Аргументы не мутируются; все результаты — новые int
"""

import logging
import time
from typing import Any, Callable, Optional, Union

from persian_datemath.config import CalendarConfig
from persian_datemath.core.converter.base import CalendarConverter
from persian_datemath.core.converter.jalali import JalaliConverter
from persian_datemath.core.domain.calendar_date import (
    DAYS_PER_WEEK,
    MONTHS_PER_YEAR,
    CalendarDate,
)
from persian_datemath.core.domain.instant import (
    Instant,
    InstantLike,
    is_valid,
    optional_bound,
)
from persian_datemath.core.domain.instant import timestamp_from_node as _timestamp_from_node

logger = logging.getLogger(__name__)


def system_clock() -> Instant:
    """Текущее время в миллисекундах."""
    return time.time_ns() // 1_000_000


class CalendarMath:
    """Календарная арифметика Jalali поверх CalendarConverter.

    Holds only the converter, the config and the clock; every method is a pure
    function of its arguments, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        converter: Optional[CalendarConverter] = None,
        config: Optional[CalendarConfig] = None,
        clock: Optional[Callable[[], Instant]] = None,
    ):
        """
        Args:
            converter: конвертер календаря (default: JalaliConverter(config))
            config: конфигурация (default: config конвертера или CalendarConfig())
            clock: источник "сейчас" в миллисекундах (default: system_clock)

        Raises:
            ValueError: config не совпадает с config переданного конвертера
        """
        converter_config = getattr(converter, "config", None)
        if config is not None and converter_config is not None and config != converter_config:
            raise ValueError(
                f"config {config!r} conflicts with converter config {converter_config!r}"
            )

        self.config = config or converter_config or CalendarConfig()
        self.converter = converter or JalaliConverter(self.config)
        self.clock = clock or system_clock

    def __repr__(self) -> str:
        return f"CalendarMath(converter={self.converter!r})"

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _date(self, value: InstantLike, name: str = "date") -> CalendarDate:
        return self.converter.to_calendar_date(self.converter.coerce(value, name))

    def _first_day_of(self, month_index: int) -> Instant:
        year, month = divmod(month_index, MONTHS_PER_YEAR)
        return self.converter.to_instant(year, month, 1)

    def calendar_date(self, d: InstantLike) -> CalendarDate:
        """CalendarDate для ``d``."""
        return self._date(d)

    def is_valid(self, d: Any) -> bool:
        """
        Проверка валидности Instant. Никогда не бросает исключение.

        Returns:
            True для int, конечного float и datetime
        """
        return is_valid(d)

    # =========================================================================
    # MONTH / YEAR BOUNDARIES
    # =========================================================================

    def first_date_of_month(self, d: InstantLike) -> Instant:
        """Полночь первого дня месяца ``d``."""
        return self.converter.start_of_month(self.converter.coerce(d, "date"))

    def last_date_of_month(self, d: InstantLike) -> Instant:
        """Полночь последнего дня месяца ``d``."""
        return self.converter.end_of_month(self.converter.coerce(d, "date"))

    def days_in_month(self, d: InstantLike) -> int:
        date = self._date(d)
        return self.converter.days_in_month(date.year, date.month)

    def is_leap_year(self, d: InstantLike) -> bool:
        return self.converter.is_leap_year(self._date(d).year)

    def day_of_week(self, d: InstantLike) -> int:
        """
        Индекс дня недели относительно config.first_day_of_week.

        Returns:
            0 для первого дня недели … 6 для последнего
        """
        raw = self.converter.day_of_week(self.converter.coerce(d, "date"))
        return (raw - self.config.first_day_of_week) % DAYS_PER_WEEK

    # =========================================================================
    # MONTH NAVIGATION
    # =========================================================================

    def date_in_next_month(self, d: InstantLike) -> Instant:
        """
        Произвольная дата (1-е число, полночь) в месяце после месяца ``d``.

        Esfand → Farvardin следующего года.
        """
        return self._first_day_of(self._date(d).month_index + 1)

    def date_in_previous_month(self, d: InstantLike) -> Instant:
        """
        Произвольная дата (1-е число, полночь) в месяце перед месяцем ``d``.

        Farvardin → Esfand предыдущего года.
        """
        return self._first_day_of(self._date(d).month_index - 1)

    def is_in_next_month(self, start: InstantLike, end: InstantLike) -> bool:
        """True если ``end`` в месяце сразу после месяца ``start``."""
        return self.is_same_month_and_year(self.date_in_next_month(start), end)

    def is_in_previous_month(self, start: InstantLike, end: InstantLike) -> bool:
        """True если ``end`` в месяце сразу перед месяцем ``start``."""
        return self.is_same_month_and_year(end, self.date_in_previous_month(start))

    # =========================================================================
    # COMPARISON PREDICATES
    # =========================================================================

    def is_same_month_and_year(self, a: InstantLike, b: InstantLike) -> bool:
        da, db = self._date(a, "a"), self._date(b, "b")
        return da.year == db.year and da.month == db.month

    def is_same_day(self, a: InstantLike, b: InstantLike) -> bool:
        """Совпадение года, месяца и дня (время суток игнорируется)."""
        return self._date(a, "a").ymd == self._date(b, "b").ymd

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def increment_days(self, d: InstantLike, days: int) -> Instant:
        """
        Сдвиг на ``days`` календарных дней (может быть отрицательным).

        Time of day is preserved on the local wall clock.
        """
        shifted = self.converter.add_days(self._date(d), days)
        return self.converter.to_instant(
            shifted.year, shifted.month, shifted.day, shifted.millis_of_day
        )

    def increment_months(self, d: InstantLike, months: int) -> Instant:
        """
        Сдвиг на ``months`` месяцев (может быть отрицательным).

        Если в целевом месяце меньше дней, чем день месяца ``d``, результат
        ограничивается последним днём целевого месяца.

        Examples:
            1403-06-31 + 1 month → 1403-07-30 (Mehr has 30 days)
            1403-12-30 + 12 months → 1404-12-29 (1404 is not leap)
        """
        date = self._date(d)
        year, month = divmod(date.month_index + months, MONTHS_PER_YEAR)
        day = min(date.day, self.converter.days_in_month(year, month))
        if day != date.day:
            logger.debug("Clamped day %d to %d in %d-%02d", date.day, day, year, month + 1)
        return self.converter.to_instant(year, month, day, date.millis_of_day)

    def increment_years(self, d: InstantLike, years: int) -> Instant:
        """increment_months(d, years * 12) — та же политика clamp."""
        return self.increment_months(d, years * MONTHS_PER_YEAR)

    def month_distance(self, start: InstantLike, end: InstantLike) -> int:
        """
        Разница в месяцах; учитываются только год и месяц.

        Returns:
            12 * (end.year - start.year) + (end.month - start.month);
            отрицательное значение, если ``end`` раньше ``start``
        """
        return self._date(end, "end").month_index - self._date(start, "start").month_index

    def year_distance(self, start: InstantLike, end: InstantLike) -> int:
        """Разница в годах; месяц и день игнорируются."""
        return self._date(end, "end").year - self._date(start, "start").year

    def week_of_month(self, d: InstantLike) -> int:
        """
        Индекс недели месяца (0-based).

        floor((day_of_week(first_date_of_month(d)) + d.day - 1) / 7)
        """
        date = self._date(d)
        first_day_offset = self.day_of_week(self.first_date_of_month(d))
        return (first_day_offset + date.day - 1) // DAYS_PER_WEEK

    def midpoint(self, a: InstantLike, b: InstantLike) -> Instant:
        """
        Линейная середина между двумя Instant, нормализованная к полночи.

        The midpoint is taken over raw milliseconds, not calendar fields, so it
        always lies between ``a`` and ``b`` chronologically.
        """
        total = self.converter.coerce(a, "a") + self.converter.coerce(b, "b")
        # round half up, as Math.round does
        return self.at_midnight((total + 1) // 2)

    # =========================================================================
    # NORMALIZATION & RANGE CHECKS
    # =========================================================================

    def at_midnight(self, value: Optional[InstantLike] = None) -> Instant:
        """
        Новый Instant с обнулённым временем суток.

        Args:
            value: Instant/datetime; None → текущее время (clock)

        Returns:
            Локальная полночь того же календарного дня
        """
        instant = self.clock() if value is None else self.converter.coerce(value, "value")
        date = self.converter.to_calendar_date(instant)
        return self.converter.to_instant(date.year, date.month, date.day)

    def clamp(
        self,
        d: InstantLike,
        min_date: Optional[InstantLike] = None,
        max_date: Optional[InstantLike] = None,
    ) -> Instant:
        """
        Ограничение даты диапазоном [min_date, max_date].

        Проверки независимы и выполняются по порядку: сначала min, затем max.
        При min_date > max_date и d > max_date результат — max_date.

        Args:
            d: Исходная дата
            min_date: Нижняя граница (None/невалидная → нет границы)
            max_date: Верхняя граница (None/невалидная → нет границы)
        """
        tz = self.converter.tzinfo
        instant = self.converter.coerce(d, "date")
        lower = optional_bound(min_date, tz, "min_date")
        upper = optional_bound(max_date, tz, "max_date")

        result = instant
        if lower is not None and instant < lower:
            result = lower

        if upper is not None and instant > upper:
            result = upper

        return result

    def is_within_range(
        self,
        d: InstantLike,
        min_date: Optional[InstantLike] = None,
        max_date: Optional[InstantLike] = None,
    ) -> bool:
        """
        Проверка попадания в диапазон без учёта времени суток.

        Inclusive on both ends. An invalid bound is treated as absent.
        """
        tz = self.converter.tzinfo
        date = self.at_midnight(d)
        lower = optional_bound(min_date, tz, "min_date")
        upper = optional_bound(max_date, tz, "max_date")

        lower_ok = lower is None or self.at_midnight(lower) <= date
        upper_ok = upper is None or self.at_midnight(upper) >= date
        return lower_ok and upper_ok

    def is_month_within_range(
        self,
        d: InstantLike,
        min_date: Optional[InstantLike] = None,
        max_date: Optional[InstantLike] = None,
        *,
        lexicographic: bool = False,
    ) -> bool:
        """
        Проверка попадания месяца в диапазон (день и время игнорируются).

        По умолчанию границы проверяются OR-логикой:
            lower: нет min, ИЛИ min.year < year, ИЛИ min.month <= month
            upper: нет max, ИЛИ max.year > year, ИЛИ max.month >= month
        The month test is not tied to the year, so a date in an earlier year
        with a later month passes the lower bound.

        Args:
            lexicographic: True → сравнение пар (year, month)
        """
        tz = self.converter.tzinfo
        date = self._date(d)
        lower = optional_bound(min_date, tz, "min_date")
        upper = optional_bound(max_date, tz, "max_date")
        lower_date = None if lower is None else self.converter.to_calendar_date(lower)
        upper_date = None if upper is None else self.converter.to_calendar_date(upper)

        if lexicographic:
            return (lower_date is None or lower_date.month_index <= date.month_index) and (
                upper_date is None or upper_date.month_index >= date.month_index
            )

        lower_ok = (
            lower_date is None
            or lower_date.year < date.year
            or lower_date.month <= date.month
        )
        upper_ok = (
            upper_date is None
            or upper_date.year > date.year
            or upper_date.month >= date.month
        )
        return lower_ok and upper_ok

    # =========================================================================
    # UI ADAPTER
    # =========================================================================

    def timestamp_from_node(self, node: Any) -> Optional[Union[int, float]]:
        """Значение атрибута ``data-timestamp`` или None."""
        return _timestamp_from_node(node)
