"""
CalendarConfig — настройки календарной арифметики

Configuration shared by the converter and CalendarMath:
- timezone, in which "local midnight" and calendar fields are computed
- first day of week used by week_of_month / day_of_week
"""

from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Final
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_TIMEZONE: Final[str] = "UTC"

# jdatetime numbering: Saturday = 0 … Friday = 6
SATURDAY: Final[int] = 0
FRIDAY: Final[int] = 6
DEFAULT_FIRST_DAY_OF_WEEK: Final[int] = SATURDAY


def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve an IANA timezone name.

    Raises:
        ValueError: unknown timezone
    """
    if name.upper() == "UTC":
        return timezone.utc

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name!r}") from e


@dataclass(frozen=True)
class CalendarConfig:
    """Конфигурация календаря.

    - timezone: IANA имя зоны (default "UTC")
    - first_day_of_week: 0 = Saturday … 6 = Friday (default Saturday)
    """

    timezone: str = DEFAULT_TIMEZONE
    first_day_of_week: int = DEFAULT_FIRST_DAY_OF_WEEK

    def __post_init__(self):
        if not SATURDAY <= self.first_day_of_week <= FRIDAY:
            raise ValueError(
                f"first_day_of_week must be in [{SATURDAY}, {FRIDAY}], "
                f"got {self.first_day_of_week}"
            )
        # Fail fast on an unknown zone
        resolve_timezone(self.timezone)

    @property
    def tzinfo(self) -> tzinfo:
        return resolve_timezone(self.timezone)
