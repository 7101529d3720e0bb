#
# loggenerator.py
#
# Utility for generating log records at configurable proportions of severity levels.
#

import argparse
import logging
import os
import sys

import littletable as lt

from .exceptions import LogGeneratorError
from .levels import DEFAULT_RATIOS, Level, TOTAL_RANGE
from .log_generator import LogGenerator
from .sinks import FORMATTERS, make_logging_sink


def _env_number(name: str, default, convert=int):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return convert(value)
    except ValueError:
        raise SystemExit(f"invalid value for {name}: {value!r}") from None


def _percentage(s: str) -> float:
    try:
        value = float(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid percentage {s!r}") from None
    if not 0 <= value <= 100:
        raise argparse.ArgumentTypeError(f"percentage must be between 0 and 100, got {s}")
    return value


def make_argument_parser():
    epilog_notes = f"""
    Each level option pins that level at the given percentage. Levels that are not
    given share whatever is left of 100% evenly, except for fatal, which only ever
    gets a share when given explicitly. With no level options, the default ratios
    are used: {', '.join(f'{lvl.label}={pct}' for lvl, pct in zip(Level, DEFAULT_RATIOS))}.

    A fatal record ends the program with exit status 1, unless --no-fatal-exit is given.
    Count and delay defaults may also be set with the LOGGENERATOR_COUNT and
    LOGGENERATOR_DELAY environment variables.
    """

    parser = argparse.ArgumentParser(
        prog="loggenerator",
        description="Generate log records with configurable proportions of each severity level.",
        epilog=epilog_notes,
    )
    for level in Level:
        parser.add_argument(
            f"--{level.label}", f"-{level.label[0].upper()}",
            type=_percentage,
            metavar="PCT",
            help=f"percentage of {level.label} records",
        )
    parser.add_argument(
        "--count", "-n",
        type=int,
        default=_env_number("LOGGENERATOR_COUNT", 1000),
        help="number of records to generate (default: %(default)s)",
    )
    parser.add_argument(
        "--delay", "-d",
        type=float,
        default=_env_number("LOGGENERATOR_DELAY", 0, float),
        help="delay between records, in milliseconds (default: %(default)s)",
    )
    parser.add_argument("--seed", type=int, help="seed the random source, for repeatable output")
    parser.add_argument(
        "--format", "-f",
        choices=list(FORMATTERS),
        default="text",
        help="format of generated records (default: %(default)s)",
    )
    parser.add_argument(
        "--output", "-o",
        default="-",
        help="file to write generated records to ('-' for stderr, the default)",
    )
    parser.add_argument(
        "--level", "-l",
        choices=[lvl.label for lvl in Level],
        default=Level.INFO.label,
        help="minimum level of records to write; lower levels are counted but not written (default: %(default)s)",
    )
    parser.add_argument(
        "--no-fatal-exit",
        action="store_true",
        help="do not exit when a fatal record is generated",
    )
    parser.add_argument("--summary", action="store_true", help="show a table of ranges and counts per level")
    parser.add_argument("--verbose", "-v", action="store_true", help="show diagnostic messages")

    return parser


def ratios_from_args(config: argparse.Namespace) -> tuple[set[Level], list[float]]:
    """
    Return the pinned levels and the ratio vector described by the level options.
    """
    given = {level: getattr(config, level.label) for level in Level}
    pinned = {level for level, pct in given.items() if pct is not None}
    if not pinned:
        return pinned, list(DEFAULT_RATIOS)
    return pinned, [given[level] if level in pinned else 0 for level in Level]


class LogGeneratorApplication:
    def __init__(self, config: argparse.Namespace):
        self.config = config

        if config.count < 0:
            raise ValueError("count must not be negative")
        if config.delay < 0:
            raise ValueError("delay must not be negative")

        self.pinned, self.ratios = ratios_from_args(config)
        self.output_limit = config.count - 1
        self.show_summary = config.summary
        self.output_stream = None

    def run(self) -> dict[Level, int]:
        if self.config.count == 0:
            return {}

        if self.config.output == "-":
            stream = sys.stderr
        else:
            stream = self.output_stream = open(self.config.output, "a", encoding="utf-8")

        try:
            sink = make_logging_sink(
                stream,
                level=self.config.level,
                fmt=self.config.format,
                exit_on_fatal=not self.config.no_fatal_exit,
            )
            generator = LogGenerator(self.pinned, self.ratios, sink=sink, seed=self.config.seed)
            ranges = generator.derive_distribution_ranges()
            counts = generator.output(ranges, self.output_limit, self.config.delay)
        finally:
            if self.output_stream is not None:
                self.output_stream.close()

        if self.show_summary:
            self._summary_table(ranges, counts).present()

        return counts

    @staticmethod
    def _summary_table(ranges: list[int], counts: dict[Level, int]) -> lt.Table:
        total = sum(counts.values())
        summary = lt.Table("Generated log records")
        summary.insert_many(
            {
                "level": level.label,
                "range": width,
                "expected": f"{width / TOTAL_RANGE:.1%}",
                "count": counts.get(level, 0),
                "actual": f"{counts.get(level, 0) / total:.1%}" if total else "-",
            }
            for level, width in zip(Level, ranges)
        )
        return summary


def main():

    parser = make_argument_parser()
    args_ns = parser.parse_args()

    if args_ns.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    try:
        app = LogGeneratorApplication(args_ns)
        app.run()
    except (LogGeneratorError, ValueError) as exc:
        parser.error(str(exc))


if __name__ == '__main__':
    main()
