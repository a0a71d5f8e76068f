"""
Instant — абсолютная точка во времени

Instant is an ``int`` count of milliseconds since 1970-01-01T00:00:00Z.

Accepted inputs:
- int                  → as is
- finite float         → rounded to the nearest millisecond
- datetime (aware)     → converted through UTC
- datetime (naive)     → interpreted in the supplied timezone

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. is_valid никогда не бросает исключение
2. Невалидный Instant никогда не передаётся в конвертер (coerce_instant бросает
   InvalidInstantError до конвертации)
3. Все операции возвращают новый int — аргументы не мутируются
"""

import logging
import math
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Final, Optional, Union

logger = logging.getLogger(__name__)

Instant = int
InstantLike = Union[int, float, datetime]

EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MS: Final[timedelta] = timedelta(milliseconds=1)
MS_PER_DAY: Final[int] = 86_400_000

TIMESTAMP_ATTRIBUTE: Final[str] = "data-timestamp"

_DECIMAL_RE: Final = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
_RADIX_RE: Final = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY_RE: Final = re.compile(r"[+-]?Infinity")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidInstantError(ValueError):
    """
    Instant is None, NaN/Inf or of an unsupported type.

    Raised by operations that require a valid primary instant. Predicates and
    range checks never raise it for bounds: an invalid bound is ignored.
    """

    pass


# =============================================================================
# VALIDATION
# =============================================================================


def is_valid(value: Any) -> bool:
    """
    Проверка, является ли значение валидным Instant.

    Args:
        value: Проверяемое значение

    Returns:
        True для int, конечного float и datetime; False иначе

    Examples:
        >>> is_valid(1700000000000)
        True
        >>> is_valid(float("nan"))
        False
        >>> is_valid(None)
        False
    """
    # bool is a subclass of int
    if value is None or isinstance(value, bool):
        return False

    if isinstance(value, int):
        return True

    if isinstance(value, float):
        return math.isfinite(value)

    return isinstance(value, datetime)


def coerce_instant(value: Any, tz: tzinfo = timezone.utc, name: str = "instant") -> Instant:
    """
    Приведение значения к Instant (int миллисекунд).

    Args:
        value: int/float миллисекунд или datetime
        tz: Зона для naive datetime
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Миллисекунды с эпохи

    Raises:
        InvalidInstantError: Если значение не является валидным Instant
    """
    if not is_valid(value):
        raise InvalidInstantError(f"{name} must be a valid instant, got {value!r}")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=tz)
        return (value - EPOCH) // ONE_MS

    if isinstance(value, float):
        return int(round(value))

    return value


def optional_bound(value: Any, tz: tzinfo = timezone.utc, name: str = "bound") -> Optional[Instant]:
    """
    Приведение необязательной границы диапазона.

    None и невалидные значения трактуются как отсутствующая граница.

    Returns:
        Instant или None
    """
    if value is None:
        return None

    if not is_valid(value):
        logger.debug("Ignoring invalid %s: %r", name, value)
        return None

    return coerce_instant(value, tz, name)


# =============================================================================
# LOCAL WALL CLOCK
# =============================================================================


def to_local_datetime(instant: Instant, tz: tzinfo) -> datetime:
    """Instant → aware datetime в зоне ``tz``."""
    return (EPOCH + timedelta(milliseconds=instant)).astimezone(tz)


def from_local_datetime(local: datetime, tz: tzinfo) -> Instant:
    """Wall-clock datetime (naive или aware) → Instant."""
    if local.tzinfo is None:
        local = local.replace(tzinfo=tz)
    return (local - EPOCH) // ONE_MS


# =============================================================================
# NODE ADAPTER
# =============================================================================


def timestamp_from_node(node: Any) -> Optional[Union[int, float]]:
    """
    Извлечение timestamp из атрибута ``data-timestamp`` element-like объекта.

    Node must expose ``get(name)`` returning None for a missing attribute:
    dict, xml.etree Element, lxml element, BeautifulSoup Tag.

    Args:
        node: Element-like объект (или None)

    Returns:
        - None, если node отсутствует или нет атрибута
        - int для целочисленной строки, float для прочих чисел
        - float("nan") для нечисловой строки (is_valid вернёт False)

    The attribute string is read with the browser's ``Number()`` rules:
    surrounding whitespace is ignored, an empty string is 0, ``0x``/``0o``/``0b``
    literals and ``Infinity`` are accepted, and anything Python alone would
    also accept (``1_000``, ``inf``, ``nan``, non-ASCII digits) is NaN.

    Examples:
        >>> timestamp_from_node({"data-timestamp": " 1700000000000 "})
        1700000000000
        >>> timestamp_from_node({"data-timestamp": ""})
        0
    """
    if node is None:
        return None

    raw = node.get(TIMESTAMP_ATTRIBUTE)
    if raw is None:
        return None

    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw

    text = str(raw).strip()
    if not text:
        return 0

    if _RADIX_RE.fullmatch(text):
        return int(text, 0)

    if _INFINITY_RE.fullmatch(text):
        return -math.inf if text.startswith("-") else math.inf

    match = _DECIMAL_RE.fullmatch(text)
    if match is None:
        logger.warning("Unparseable %s attribute: %r", TIMESTAMP_ATTRIBUTE, raw)
        return math.nan

    if "." in text or match.group(2):
        return float(text)
    return int(text)
