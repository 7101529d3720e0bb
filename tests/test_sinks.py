import io
import json
import logging

import pytest

from loggenerator import CapturingSink, DiscardSink, Level, LoggingSink, make_logging_sink
from loggenerator.sinks import TRACE, sink_method


def _emit_one_of_each(sink):
    for level in Level:
        if level is not Level.FATAL:
            sink_method(sink, level)(f"{level.label} level message")


def test_text_format_default_level_is_info():
    stream = io.StringIO()
    sink = make_logging_sink(stream)

    _emit_one_of_each(sink)

    lines = stream.getvalue().splitlines()
    assert len(lines) == 3
    for line, label in zip(lines, ["error", "warn", "info"]):
        assert line.startswith('time="')
        assert line.endswith(f'level={label} msg="{label} level message"')


def test_trace_level_writes_everything():
    stream = io.StringIO()
    sink = make_logging_sink(stream, level="trace")

    _emit_one_of_each(sink)

    assert len(stream.getvalue().splitlines()) == 5
    assert logging.getLevelName(TRACE) == "TRACE"


def test_json_format():
    stream = io.StringIO()
    sink = make_logging_sink(stream, level=Level.DEBUG, fmt="json")

    sink.debug("debug level message")

    record = json.loads(stream.getvalue())
    assert record["level"] == "debug"
    assert record["msg"] == "debug level message"
    assert "time" in record


def test_unknown_format():
    with pytest.raises(ValueError, match="unknown output format"):
        make_logging_sink(io.StringIO(), fmt="xml")


def test_unknown_level():
    with pytest.raises(ValueError, match="unknown log level"):
        make_logging_sink(io.StringIO(), level="verbose")


def test_warning_is_accepted_for_warn():
    assert Level.from_name("warning") is Level.WARN


def test_fatal_exits_after_logging():
    stream = io.StringIO()
    sink = make_logging_sink(stream)

    with pytest.raises(SystemExit) as exc_info:
        sink.fatal("fatal level message")

    assert exc_info.value.code == 1
    assert 'level=fatal msg="fatal level message"' in stream.getvalue()


def test_fatal_without_exit():
    stream = io.StringIO()
    sink = make_logging_sink(stream, exit_on_fatal=False)

    sink.fatal("fatal level message")
    sink.fatal("fatal level message")

    assert len(stream.getvalue().splitlines()) == 2


def test_sinks_are_independent():
    first_stream, second_stream = io.StringIO(), io.StringIO()
    first = make_logging_sink(first_stream)
    second = make_logging_sink(second_stream, fmt="json")

    first.info("for first")
    second.info("for second")

    assert first_stream.getvalue().endswith('level=info msg="for first"\n')
    assert "for second" not in first_stream.getvalue()
    assert json.loads(second_stream.getvalue())["msg"] == "for second"
    assert first.logger is not second.logger
    assert len(first.logger.handlers) == len(second.logger.handlers) == 1
    assert not first.logger.propagate


def test_logging_sink_with_caller_logger(caplog):
    logger = logging.getLogger("loggenerator.tests.caller")
    sink = LoggingSink(logger, exit_on_fatal=False)

    with caplog.at_level(logging.DEBUG, logger="loggenerator.tests.caller"):
        sink.error("error level message")
        sink.fatal("fatal level message")

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.ERROR, "error level message"),
        (logging.CRITICAL, "fatal level message"),
    ]
    assert caplog.records[-1].generator_level is Level.FATAL


def test_capturing_sink():
    sink = CapturingSink()
    sink.fatal("f")
    sink.trace("t")
    sink.trace("t")

    assert sink.records == [(Level.FATAL, "f"), (Level.TRACE, "t"), (Level.TRACE, "t")]
    assert sink.counts() == {Level.FATAL: 1, Level.TRACE: 2}


def test_discard_sink_fatal_does_not_exit():
    DiscardSink().fatal("fatal level message")
