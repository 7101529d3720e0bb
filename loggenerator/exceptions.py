from decimal import Decimal

from .levels import Level


class LogGeneratorError(Exception):
    """Base class for all loggenerator errors."""


class RatioError(LogGeneratorError, ValueError):
    """A single problem found while validating a ratio vector."""


class LevelRangeError(RatioError):
    def __init__(self, level: Level, value: Decimal):
        self.level = level
        self.value = value
        super().__init__(f"{level.label} level is outside possible range with value {value}")


class RatioSumError(RatioError):
    def __init__(self, total: int):
        self.total = total
        super().__init__(f"log level ratio sum must equal 100, got {total}")


class RatioValidationError(LogGeneratorError, ValueError):
    """
    Raised when a generator is built from unpinned ratios that fail validation.
    All findings are available in ``errors``.
    """
    def __init__(self, errors: list[RatioError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(err) for err in self.errors))


class DistributionError(LogGeneratorError, ValueError):
    """Raised when ratios cannot be turned into a valid range partition."""
