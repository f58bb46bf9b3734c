"""Digit-place helpers backing the per-digit number entry fields."""

import math
from decimal import Decimal
from enum import IntEnum


class PlaceValue(IntEnum):
    THOUSANDTHS = -3
    HUNDREDTHS = -2
    TENTHS = -1
    ONES = 0
    TENS = 1
    HUNDREDS = 2
    THOUSANDS = 3
    TEN_THOUSANDS = 4


def _is_empty(value: float | None) -> bool:
    return value is None or math.isnan(value)


def get_digit(value: float | None, place: PlaceValue) -> int:
    """Digit of ``abs(value)`` at ``place``; an empty value reads as 0."""
    if _is_empty(value):
        return 0
    scaled = abs(Decimal(str(value))).scaleb(-int(place))
    return int(scaled) % 10


def set_digit(value: float | None, place: PlaceValue, digit: int) -> float:
    if not 0 <= digit <= 9:
        raise ValueError(f"Digit must be in 0..9, got {digit}")
    step = Decimal(1).scaleb(int(place))
    if _is_empty(value):
        return float(digit * step)
    current = Decimal(str(value))
    sign = -1 if current < 0 else 1
    magnitude = abs(current) + (digit - get_digit(value, place)) * step
    return float(sign * magnitude)
