"""Generate log records with configurable proportions of each severity level."""
from .distribution import derive_distribution_ranges, redistribute_ratios
from .exceptions import (
    DistributionError,
    LevelRangeError,
    LogGeneratorError,
    RatioError,
    RatioSumError,
    RatioValidationError,
)
from .levels import DEFAULT_RATIOS, Level, NUM_LEVELS, TOTAL_RANGE
from .log_generator import LogGenerator
from .sinks import CapturingSink, DiscardSink, LevelSink, LoggingSink, make_logging_sink
from .validation import validate_level_ratios

__version__ = "0.1.0"
