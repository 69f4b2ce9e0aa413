"""CLI entry point for grpr."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional, Sequence

from grpr import __version__
from grpr.dispatch import ConsoleReporter, Dispatcher
from grpr.git import RepositoryAction
from grpr.log import setup_logging
from grpr.theme import YELLOW

JOBS_ENV = "GRPR_JOBS"
DEFAULT_COMMAND = ("status",)

EPILOG = """\
If no git command is given, 'status' is used. Options must come before the
git command; everything after it is passed to git unchanged. The first
git token must be the subcommand, so git global options such as --no-pager
or -c key=value are not accepted in front of it.

Example:
    grpr pull --rebase

For a list of available git sub-commands, see:
    https://git-scm.com/docs
"""


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid worker count: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"worker count must be at least 1, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grpr",
        description="Run a git command in every repository under a directory.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=_positive_int,
        metavar="N",
        help=f"Number of repositories to process at once (default: ${JOBS_ENV} or one per CPU)",
    )
    parser.add_argument(
        "-C",
        "--root",
        default=".",
        metavar="DIR",
        help="Directory to search for git repos (default: current directory)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug diagnostics to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"grpr {__version__}",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="git subcommand and its arguments",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.jobs is None and os.environ.get(JOBS_ENV):
        try:
            args.jobs = _positive_int(os.environ[JOBS_ENV])
        except argparse.ArgumentTypeError as exc:
            parser.error(f"${JOBS_ENV}: {exc}")

    args.command = tuple(args.command) or DEFAULT_COMMAND
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the grpr CLI. Returns the process exit status."""
    args = parse_args(argv)
    setup_logging(debug=args.verbose)

    reporter = ConsoleReporter()
    dispatcher = Dispatcher(RepositoryAction(args.command), workers=args.jobs, reporter=reporter)
    try:
        outcomes = dispatcher.dispatch(args.root)
    except KeyboardInterrupt:
        reporter.err.print("\n  Interrupted.", style=YELLOW)
        return 130

    reporter.summary(outcomes)
    return 0 if all(o.ok for o in outcomes) else 1


if __name__ == "__main__":
    sys.exit(main())
