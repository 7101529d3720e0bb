from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
import logging
import random
import time
from typing import Optional

from .distribution import derive_distribution_ranges, normalize_pinned
from .exceptions import RatioError, RatioValidationError
from .levels import Level, NUM_LEVELS, TOTAL_RANGE
from .sinks import LevelSink, make_logging_sink, sink_method
from .validation import RatioValue, as_ratio_vector, validate_level_ratios

logger = logging.getLogger(__name__)


def level_message(level: Level) -> str:
    return f"{level.label} level message"


class LogGenerator:
    """
    Generates log records at random, with each severity level occurring in
    proportion to its configured percentage.

    ``pinned`` holds the levels whose ratios the caller set explicitly. If no
    level is pinned, ``ratios`` must be valid as given (each in [0, 100],
    summing to 100), otherwise RatioValidationError is raised. If any level is
    pinned, the unpinned levels share whatever is left of 100 when ranges are
    derived.
    """
    def __init__(
            self,
            pinned: Optional[Iterable[int | Level]],
            ratios: Iterable[RatioValue],
            *,
            sink: Optional[LevelSink] = None,
            rng: Optional[random.Random] = None,
            seed: Optional[int] = None,
    ):
        self.pinned: frozenset[Level] = normalize_pinned(pinned)
        self.ratios: list[Decimal] = as_ratio_vector(ratios)

        if not self.pinned:
            errors = validate_level_ratios(self.ratios)
            if errors:
                raise RatioValidationError(errors)

        self.sink: LevelSink = sink if sink is not None else make_logging_sink()
        self.rng = rng if rng is not None else random.Random(seed)

    @classmethod
    def new(
            cls,
            pinned: Optional[Iterable[int | Level]],
            ratios: Iterable[RatioValue],
            **kwargs,
    ) -> tuple[Optional[LogGenerator], list[RatioError]]:
        """
        Build a generator, returning (generator, []) on success or
        (None, errors) if the ratios fail validation.
        """
        try:
            return cls(pinned, ratios, **kwargs), []
        except RatioValidationError as rve:
            return None, rve.errors

    def derive_distribution_ranges(self) -> list[int]:
        return derive_distribution_ranges(self.ratios, self.pinned)

    def output(self, ranges: Sequence[int], output_limit: int, delay: float = 0) -> dict[Level, int]:
        """
        Sample the range partition and send one record per sample to the sink.

        Runs output_limit + 1 iterations (the limit is inclusive), sleeping
        ``delay`` milliseconds before each one. Returns the number of records
        generated per level; levels that never came up are not included.

        Raises ValueError if ``ranges`` does not have exactly one width per level.
        """
        if len(ranges) != NUM_LEVELS:
            raise ValueError(f"expected {NUM_LEVELS} ranges, got {len(ranges)}")

        # lower bound of each level's segment, FATAL at the top of the range;
        # TRACE takes everything below DEBUG, so its bound is not needed
        lower_bounds = []
        upper = TOTAL_RANGE
        for width in ranges[:Level.TRACE]:
            upper -= width
            lower_bounds.append(upper)

        logger.debug(
            "generating %d records from ranges %s with %sms delay",
            output_limit + 1, list(ranges), delay
        )

        emitters = [sink_method(self.sink, level) for level in Level]
        messages = [level_message(level) for level in Level]

        output_counts: dict[Level, int] = {}
        for _ in range(output_limit + 1):
            if delay > 0:
                time.sleep(delay / 1000)
            rand_out = self.rng.randrange(TOTAL_RANGE)
            level = next(
                (lvl for lvl, low in zip(Level, lower_bounds) if rand_out >= low),
                Level.TRACE
            )
            output_counts[level] = output_counts.get(level, 0) + 1
            emitters[level](messages[level])

        return output_counts
