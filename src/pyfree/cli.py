"""pyfree - command line driver."""

import argparse
import gettext
import logging
import sys
import time
from gettext import gettext as _
from typing import Callable

from pyfree import __version__
from pyfree.counters import CounterReader
from pyfree.errors import ArgumentError, PyfreeError
from pyfree.formatting import UNITS
from pyfree.models import Configuration
from pyfree.reporter import Reporter

PROG = "free"
TEXT_DOMAIN = "free"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

MAX_SECONDS = 60 * 60 * 60
MAX_COUNT = 100

log = logging.getLogger("pyfree")

UNIT_HELP = {
    "bytes": "show the output in bytes",
    "kilo": "show the output in kilobytes",
    "mega": "show the output in megabytes",
    "giga": "show the output in gigabytes",
    "tera": "show the output in terabytes",
    "peta": "show the output in petabytes",
    "kibi": "show the output in kibibytes",
    "mibi": "show the output in mebibytes",
    "gibi": "show the output in gibibytes",
    "tibi": "show the output in tebibytes",
    "pibi": "show the output in pebibytes",
}


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that prints its help to stdout and exits 1 on errors."""

    def error(self, message: str) -> None:  # type: ignore[override]
        log.error(message)
        self.print_help(sys.stdout)
        self.exit(EXIT_FAILURE)


def setup_logging() -> None:
    """Send log records to stderr as ``free: <message>``."""
    if log.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(f"{PROG}: %(message)s"))
    log.addHandler(handler)
    log.setLevel(logging.WARNING)


def setup_locale() -> None:
    gettext.textdomain(TEXT_DOMAIN)


def build_parser() -> UsageParser:
    parser = UsageParser(
        prog=PROG,
        usage="%(prog)s [OPTION]...",
        description=_("Display the amount of space for RAM and swap."),
        add_help=False,
    )
    opts = parser.add_argument_group(_("Options"))
    for name, divisor in UNITS.items():
        opts.add_argument(
            f"--{name}",
            dest="unit",
            action="store_const",
            const=divisor,
            help=_(UNIT_HELP[name]),
        )
    opts.add_argument(
        "--decimal",
        action="store_true",
        help=_("use decimal format, e.g. pow(1000, n)"),
    )
    opts.add_argument(
        "-h",
        "--human",
        action="store_true",
        help=_("show the output in human readable form, e.g. 2.3G"),
    )
    opts.add_argument(
        "-t",
        "--total",
        action="store_true",
        help=_("show the sum of total, free, and used RAM and swap"),
    )
    opts.add_argument(
        "-s",
        "--secs",
        metavar="N",
        help=_("continue printing in every N seconds"),
    )
    opts.add_argument(
        "-c",
        "--count",
        metavar="N",
        help=_("continue printing N times and exit"),
    )
    opts.add_argument("--help", action="help", help=_("print this help section"))
    opts.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s: v{__version__}",
        help=_("print the current version"),
    )
    return parser


def parse_integer(value: str) -> int:
    try:
        return int(value, 10)
    except ValueError:
        raise ArgumentError(
            _("expected an integer but found something else.")
        ) from None


def parse_bounded(value: str | None, upper: int, what: str) -> int | None:
    """Parse an optional integer argument and check it lies in [1, upper]."""
    if value is None:
        return None
    number = parse_integer(value)
    if number < 1:
        raise ArgumentError(_("{} must not be smaller than 1.").format(what))
    if number > upper:
        raise ArgumentError(
            _("{} must not be larger than {}.").format(what, upper)
        )
    return number


def parse_args(argv: list[str]) -> Configuration:
    """
    Turn command line arguments into a Configuration.

    Usage errors exit through the parser; bad --secs/--count values raise
    ArgumentError.
    """
    parser = build_parser()
    if argv and (not argv[0].startswith("-") or argv[0] == "-"):
        parser.error(_("unexpected operand: {}").format(argv[0]))

    ns = parser.parse_args(argv)
    return Configuration(
        unit=ns.unit,
        human=ns.human,
        decimal=ns.decimal,
        show_total=ns.total,
        interval=parse_bounded(ns.secs, MAX_SECONDS, _("seconds")),
        count=parse_bounded(ns.count, MAX_COUNT, _("counting")),
    )


def run(
    config: Configuration,
    reporter: Reporter,
    sleep: Callable[[float], None] | None = None,
) -> int:
    """
    Print reporting cycles until the configured count or forever.

    Without --secs or --count a single cycle is printed. With --count the
    loop stops right after the last cycle, without sleeping or printing a
    separator.
    """
    if sleep is None:
        sleep = time.sleep
    remaining = config.count
    while True:
        reporter.report(config)

        if not config.repeats:
            return EXIT_SUCCESS
        if remaining is not None:
            remaining -= 1
            if remaining <= 0:
                return EXIT_SUCCESS

        if config.interval is not None:
            sleep(config.interval)
            reporter.write("\n")
        if remaining is not None:
            reporter.write("\n")


def main(argv: list[str] | None = None) -> int:
    """Entry point for the free command."""
    setup_logging()
    setup_locale()
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = parse_args(argv)
        return run(config, Reporter(CounterReader()))
    except PyfreeError as exc:
        log.error("%s", exc)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
