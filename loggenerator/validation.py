from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from numbers import Real
from typing import Union

from .exceptions import LevelRangeError, RatioError, RatioSumError
from .levels import Level, NUM_LEVELS

RatioValue = Union[Real, Decimal, str]

ZERO = Decimal(0)
ONE_HUNDRED = Decimal(100)


def _to_decimal(value: RatioValue) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # go through str() so that 22.5 stays 22.5 and not its binary expansion
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError):
        raise ValueError(f"invalid percentage value {value!r}") from None


def as_ratio_vector(ratios: Iterable[RatioValue]) -> list[Decimal]:
    """
    Convert an iterable of percentages, ordered FATAL through TRACE, into a new
    list of Decimals. Raises ValueError if there are not exactly 6 values.
    """
    vector = [_to_decimal(r) for r in ratios]
    if len(vector) != NUM_LEVELS:
        raise ValueError(f"expected {NUM_LEVELS} level ratios, got {len(vector)}")
    return vector


def validate_level_ratios(ratios: Iterable[RatioValue]) -> list[RatioError]:
    """
    Check each ratio is within [0, 100], and that the ratios sum to exactly 100.

    Returns a list of all problems found; an empty list means the ratios are valid.
    The sum check adds up the integer part of each ratio.
    """
    vector = as_ratio_vector(ratios)
    errors: list[RatioError] = []

    for level, pct in zip(Level, vector):
        if not ZERO <= pct <= ONE_HUNDRED:
            errors.append(LevelRangeError(level, pct))

    total = sum(int(pct) for pct in vector)
    if total != 100:
        errors.append(RatioSumError(total))

    return errors
