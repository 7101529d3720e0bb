"""
Turn per-level percentages into a partition of the sampling range.

The sampling range is TOTAL_RANGE units wide; each level gets a contiguous
segment whose width is proportional to its percentage. Percentages that the
caller did not pin are filled in so that the total comes to 100.
"""
from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, ROUND_UP
import logging

from .exceptions import DistributionError
from .levels import Level, NUM_LEVELS, RANGE_SCALE
from .validation import ONE_HUNDRED, RatioValue, as_ratio_vector

logger = logging.getLogger(__name__)

_HUNDREDTHS = Decimal("0.01")


def normalize_pinned(pinned: Iterable[int | Level] | None) -> frozenset[Level]:
    if not pinned:
        return frozenset()
    return frozenset(Level(p) for p in pinned)


def redistribute_ratios(
        ratios: Iterable[RatioValue],
        pinned: Iterable[int | Level] | None = None,
) -> list[Decimal]:
    """
    Return a new list of percentages in which the mass missing from 100 is spread
    evenly over the unpinned levels. The input is not modified.

    FATAL is never assigned a share: when FATAL is not pinned, the portion it
    would have received is divided among the other unpinned levels, and FATAL
    keeps its supplied value.

    With no pinned levels the ratios are returned unchanged; they are expected
    to have passed validate_level_ratios already.
    """
    vector = as_ratio_vector(ratios)
    pinned = normalize_pinned(pinned)

    pct_total = sum(vector, Decimal(0))
    # nothing pinned: ratios are used as given
    if not pinned or pct_total == ONE_HUNDRED:
        return vector

    remaining_pct = ONE_HUNDRED - pct_total
    if remaining_pct < 0:
        raise DistributionError(
            f"specified level ratios total {pct_total}, which is more than 100"
        )

    remaining_count = NUM_LEVELS - len(pinned)
    fatal_pinned = Level.FATAL in pinned
    absorbing_levels = remaining_count if fatal_pinned else remaining_count - 1
    if absorbing_levels <= 0:
        raise DistributionError(
            f"level ratios total {pct_total}, but no unpinned level"
            f" (other than fatal) is available to take the remaining {remaining_pct}"
        )

    individual_portion = remaining_pct / remaining_count
    if not fatal_pinned:
        individual_portion += individual_portion / (remaining_count - 1)

    return [
        pct if (level in pinned or level is Level.FATAL) else individual_portion
        for level, pct in zip(Level, vector)
    ]


def ratio_to_units(pct: Decimal) -> int:
    # round up to avoid tiny gaps, then truncate back to an int
    return int((pct * RANGE_SCALE).quantize(_HUNDREDTHS, rounding=ROUND_UP))


def derive_distribution_ranges(
        ratios: Iterable[RatioValue],
        pinned: Iterable[int | Level] | None = None,
) -> list[int]:
    """
    Compute the width of each level's segment of the sampling range, in
    FATAL to TRACE order.

    Widths sum to TOTAL_RANGE, or slightly more, since each width is rounded up.
    Raises DistributionError if the remaining percentage cannot be assigned to
    any level.
    """
    ranges = [ratio_to_units(pct) for pct in redistribute_ratios(ratios, pinned)]
    logger.debug("derived distribution ranges %s", ranges)
    return ranges
