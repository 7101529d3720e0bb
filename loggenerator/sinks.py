"""
Destinations for generated log records.

A sink has one method per severity level (fatal, error, warn, info, debug,
trace), each taking the message text. LogGenerator calls the method matching
the level of each sampled record.
"""
from __future__ import annotations

import abc
from datetime import datetime
import json
import logging
import sys
from typing import IO, Protocol

from .levels import Level

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOGGING_LEVELS = {
    Level.FATAL: logging.CRITICAL,
    Level.ERROR: logging.ERROR,
    Level.WARN: logging.WARNING,
    Level.INFO: logging.INFO,
    Level.DEBUG: logging.DEBUG,
    Level.TRACE: TRACE,
}

DEFAULT_LOGGER_NAME = "loggenerator.output"


class LevelSink(Protocol):
    def fatal(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warn(self, message: str) -> None: ...
    def info(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def trace(self, message: str) -> None: ...


def sink_method(sink: LevelSink, level: Level):
    return getattr(sink, level.label)


class BaseLevelSink(abc.ABC):
    """
    Convenience base class that routes all six level methods to emit().
    """
    @abc.abstractmethod
    def emit(self, level: Level, message: str) -> None:
        """Override in subclasses"""

    def fatal(self, message: str) -> None:
        self.emit(Level.FATAL, message)

    def error(self, message: str) -> None:
        self.emit(Level.ERROR, message)

    def warn(self, message: str) -> None:
        self.emit(Level.WARN, message)

    def info(self, message: str) -> None:
        self.emit(Level.INFO, message)

    def debug(self, message: str) -> None:
        self.emit(Level.DEBUG, message)

    def trace(self, message: str) -> None:
        self.emit(Level.TRACE, message)


class DiscardSink(BaseLevelSink):
    def emit(self, level: Level, message: str) -> None:
        pass


class CapturingSink(BaseLevelSink):
    """
    Keeps every record as a (Level, message) tuple, in the order received.
    """
    def __init__(self):
        self.records: list[tuple[Level, str]] = []

    def emit(self, level: Level, message: str) -> None:
        self.records.append((level, message))

    def counts(self) -> dict[Level, int]:
        ret: dict[Level, int] = {}
        for level, _ in self.records:
            ret[level] = ret.get(level, 0) + 1
        return ret


class LoggingSink(BaseLevelSink):
    """
    Sink that writes records through a logging.Logger.

    A fatal record ends the process with exit status 1 once it has been
    logged, unless exit_on_fatal is False.
    """
    def __init__(self, logger: logging.Logger, *, exit_on_fatal: bool = True):
        self.logger = logger
        self.exit_on_fatal = exit_on_fatal

    def emit(self, level: Level, message: str) -> None:
        self.logger.log(LOGGING_LEVELS[level], message, extra={"generator_level": level})

    def fatal(self, message: str) -> None:
        super().fatal(message)
        if self.exit_on_fatal:
            sys.exit(1)


def _level_label(record: logging.LogRecord) -> str:
    level = getattr(record, "generator_level", None)
    if level is not None:
        return level.label
    return record.levelname.lower()


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds")


class TextFormatter(logging.Formatter):
    """Formats records as key=value pairs: time="..." level=info msg="..." """
    def format(self, record: logging.LogRecord) -> str:
        return f'time="{_timestamp(record)}" level={_level_label(record)} msg={json.dumps(record.getMessage())}'


class JsonFormatter(logging.Formatter):
    """Formats each record as a single-line JSON object."""
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "level": _level_label(record),
                "msg": record.getMessage(),
                "time": _timestamp(record),
            }
        )


FORMATTERS = {
    "text": TextFormatter,
    "json": JsonFormatter,
}


def make_logging_sink(
        stream: IO[str] | None = None,
        *,
        level: str | Level = Level.INFO,
        fmt: str = "text",
        exit_on_fatal: bool = True,
        logger_name: str = DEFAULT_LOGGER_NAME,
) -> LoggingSink:
    """
    Build the default sink: a new, non-propagating logger with a single stream
    handler (stderr unless another stream is given). Each call returns a sink
    with its own logger and handler.

    Records below ``level`` are dropped by the logger; the default of INFO
    means debug and trace records are generated but not written.
    """
    if isinstance(level, str):
        level = Level.from_name(level)
    try:
        formatter = FORMATTERS[fmt]()
    except KeyError:
        raise ValueError(f"unknown output format {fmt!r}, expected one of {list(FORMATTERS)}") from None

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    # unregistered, so no other sink shares its handlers
    logger = logging.Logger(logger_name)
    logger.addHandler(handler)
    logger.setLevel(LOGGING_LEVELS[level])
    logger.propagate = False

    return LoggingSink(logger, exit_on_fatal=exit_on_fatal)
