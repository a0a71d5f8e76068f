"""
Domain models and value objects.

Contains Instant helpers and the CalendarDate value object.
"""

from persian_datemath.core.domain.calendar_date import (
    DAYS_PER_WEEK,
    MONTHS_PER_YEAR,
    CalendarDate,
)
from persian_datemath.core.domain.instant import (
    EPOCH,
    MS_PER_DAY,
    TIMESTAMP_ATTRIBUTE,
    Instant,
    InstantLike,
    InvalidInstantError,
    coerce_instant,
    from_local_datetime,
    is_valid,
    optional_bound,
    timestamp_from_node,
    to_local_datetime,
)

__all__ = [
    # Instant
    "EPOCH",
    "MS_PER_DAY",
    "TIMESTAMP_ATTRIBUTE",
    "Instant",
    "InstantLike",
    "InvalidInstantError",
    "coerce_instant",
    "from_local_datetime",
    "is_valid",
    "optional_bound",
    "timestamp_from_node",
    "to_local_datetime",
    # CalendarDate
    "DAYS_PER_WEEK",
    "MONTHS_PER_YEAR",
    "CalendarDate",
]
