"""
CalendarDate — дата в полях календаря Jalali

Immutable Pydantic модель. Создаётся только конвертером из Instant и
используется только для построения нового Instant.
"""

from typing import Final

from pydantic import BaseModel, Field

from persian_datemath.core.domain.instant import MS_PER_DAY

MONTHS_PER_YEAR: Final[int] = 12
DAYS_PER_WEEK: Final[int] = 7


class CalendarDate(BaseModel):
    """
    Поля даты в календаре Jalali.

    month is 0-based (0 = Farvardin … 11 = Esfand), day is 1-based.
    The upper bound of ``day`` against the real month length is enforced by
    the converter, which owns the leap rule.
    """

    year: int = Field(..., description="Jalali год")
    month: int = Field(..., ge=0, le=11, description="Месяц, 0-based")
    day: int = Field(..., ge=1, le=31, description="День месяца, 1-based")
    day_of_week: int = Field(0, ge=0, le=6, description="0 = Saturday … 6 = Friday")
    millis_of_day: int = Field(
        0, ge=0, lt=MS_PER_DAY, description="Локальное время суток (миллисекунды)"
    )

    model_config = {"frozen": True}

    @property
    def month_index(self) -> int:
        """Абсолютный номер месяца: 12 * year + month."""
        return self.year * MONTHS_PER_YEAR + self.month

    @property
    def ymd(self) -> tuple[int, int, int]:
        return (self.year, self.month, self.day)

    def is_at_midnight(self) -> bool:
        return self.millis_of_day == 0
