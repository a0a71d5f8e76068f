"""
Тесты для модуля Instant

Проверяет:
1. Валидацию Instant (is_valid никогда не бросает исключение)
2. Приведение int/float/datetime к миллисекундам
3. Необязательные границы (None и невалидные → отсутствуют)
4. Извлечение data-timestamp из element-like объектов
"""

import logging
import math
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

import pytest

from persian_datemath.config import resolve_timezone
from persian_datemath.core.domain import (
    EPOCH,
    InvalidInstantError,
    coerce_instant,
    from_local_datetime,
    is_valid,
    optional_bound,
    timestamp_from_node,
    to_local_datetime,
)

TEHRAN = resolve_timezone("Asia/Tehran")


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


class TestIsValid:
    """Тесты для is_valid"""

    @pytest.mark.parametrize(
        "value",
        [0, 1700000000000, -86400000, 1.5, datetime(2024, 3, 20, tzinfo=timezone.utc)],
    )
    def test_valid_values(self, value) -> None:
        assert is_valid(value) is True

    @pytest.mark.parametrize(
        "value",
        [None, float("nan"), float("inf"), float("-inf"), True, "1700000000000", object()],
    )
    def test_invalid_values(self, value) -> None:
        assert is_valid(value) is False


# =============================================================================
# ПРИВЕДЕНИЕ
# =============================================================================


class TestCoerceInstant:
    """Тесты для coerce_instant"""

    def test_int_unchanged(self) -> None:
        assert coerce_instant(1700000000000) == 1700000000000

    def test_float_rounded_to_millisecond(self) -> None:
        assert coerce_instant(1000.4) == 1000
        assert coerce_instant(1000.6) == 1001
        assert isinstance(coerce_instant(1000.0), int)

    def test_aware_datetime(self) -> None:
        value = datetime(2024, 3, 20, 12, 30, tzinfo=timezone.utc)
        assert coerce_instant(value) == int(value.timestamp()) * 1000

    def test_naive_datetime_uses_timezone(self) -> None:
        """Naive datetime интерпретируется в переданной зоне"""
        naive = datetime(2024, 3, 20, 0, 0)
        aware = datetime(2024, 3, 20, 0, 0, tzinfo=TEHRAN)
        assert coerce_instant(naive, TEHRAN) == (aware - EPOCH) // timedelta(milliseconds=1)

    def test_pre_epoch_datetime(self) -> None:
        value = datetime(1969, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)
        assert coerce_instant(value) == -1

    def test_invalid_raises(self) -> None:
        with pytest.raises(InvalidInstantError, match="start must be a valid instant"):
            coerce_instant(float("nan"), name="start")

        with pytest.raises(InvalidInstantError):
            coerce_instant(None)

    def test_invalid_instant_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            coerce_instant("yesterday")


class TestOptionalBound:
    """Тесты для optional_bound"""

    def test_none_is_absent(self) -> None:
        assert optional_bound(None) is None

    def test_invalid_is_absent(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="persian_datemath.core.domain.instant"):
            assert optional_bound(float("nan"), name="min_date") is None
        assert "Ignoring invalid min_date" in caplog.text

    def test_valid_is_coerced(self) -> None:
        assert optional_bound(42.0) == 42


# =============================================================================
# ЛОКАЛЬНОЕ ВРЕМЯ
# =============================================================================


class TestLocalWallClock:
    """Тесты для to_local_datetime / from_local_datetime"""

    def test_round_trip(self) -> None:
        instant = 1700000000123
        local = to_local_datetime(instant, TEHRAN)
        assert from_local_datetime(local, TEHRAN) == instant

    def test_naive_local_datetime(self) -> None:
        assert from_local_datetime(datetime(1970, 1, 1, 0, 0, 1), timezone.utc) == 1000


# =============================================================================
# NODE ADAPTER
# =============================================================================


class TestTimestampFromNode:
    """Тесты для timestamp_from_node"""

    def test_none_node(self) -> None:
        assert timestamp_from_node(None) is None

    def test_missing_attribute(self) -> None:
        assert timestamp_from_node({"class": "md-calendar-date"}) is None

    def test_mapping_node(self) -> None:
        assert timestamp_from_node({"data-timestamp": "1700000000000"}) == 1700000000000

    def test_element_tree_node(self) -> None:
        node = ET.fromstring('<td data-timestamp="1710892800000">1</td>')
        assert timestamp_from_node(node) == 1710892800000

    def test_float_string(self) -> None:
        assert timestamp_from_node({"data-timestamp": "1.5e3"}) == 1500.0

    def test_numeric_attribute_passthrough(self) -> None:
        assert timestamp_from_node({"data-timestamp": 12345}) == 12345

    def test_unparseable_is_nan(self, caplog) -> None:
        """Нечисловая строка → NaN (невалидный Instant) и warning"""
        with caplog.at_level(logging.WARNING):
            result = timestamp_from_node({"data-timestamp": "tomorrow"})

        assert math.isnan(result)
        assert not is_valid(result)
        assert "Unparseable data-timestamp" in caplog.text

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", 0),
            ("   ", 0),
            (" 1700000000000\n", 1700000000000),
            ("+42", 42),
            ("-86400000", -86400000),
            ("0x1A", 26),
            ("0b101", 5),
            (".5", 0.5),
            ("10.", 10.0),
        ],
    )
    def test_number_rules(self, text: str, expected) -> None:
        """Строка атрибута читается по правилам Number()"""
        result = timestamp_from_node({"data-timestamp": text})
        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize("text", ["1_000", "inf", "nan", "-0x1A", "۱۴۰۳", "12px"])
    def test_non_numbers_are_nan(self, text: str) -> None:
        assert math.isnan(timestamp_from_node({"data-timestamp": text}))

    def test_infinity(self) -> None:
        assert timestamp_from_node({"data-timestamp": "-Infinity"}) == -math.inf
        assert not is_valid(timestamp_from_node({"data-timestamp": "Infinity"}))
