from enum import IntEnum


class Level(IntEnum):
    """
    Severity levels, ordered from most severe (FATAL) to least severe (TRACE).

    The integer value is the index of the level in ratio vectors and range
    partitions.
    """
    FATAL = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> "Level":
        name = name.upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown log level {name!r}") from None


NUM_LEVELS = len(Level)

# every level contributes up to 100 percent, at 2 decimal places of precision
RANGE_SCALE = NUM_LEVELS * 100
TOTAL_RANGE = RANGE_SCALE * 100

DEFAULT_RATIOS = (0, 10, 20, 50, 20, 0)
