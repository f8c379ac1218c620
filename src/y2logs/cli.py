from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TypeVar

from y2logs import __version__
from y2logs.core.log_service import filter_log
from y2logs.core.models import FieldDecodeError, Level, Pid
from y2logs.core.parser import ParseError
from y2logs.core.time_window import parse_datetime, resolve_time_window

T = TypeVar("T")


def _arg_type(decode: Callable[[str], T]) -> Callable[[str], T]:
    """Adapt a field decoder for argparse so its message reaches the user."""

    def _convert(s: str) -> T:
        try:
            return decode(s)
        except FieldDecodeError as e:
            raise argparse.ArgumentTypeError(str(e)) from e

    _convert.__name__ = decode.__name__
    return _convert


def _configure_logging() -> None:
    level_name = os.getenv("Y2LOGS_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="y2logs", description="Inspect YaST2 log files.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)

    f = sub.add_parser("filter", help="Filter YaST2 log entries")
    f.add_argument("file", help="YaST2 log file path (plain or .gz)")
    f.add_argument(
        "--level",
        type=_arg_type(Level.parse),
        default=None,
        help="Filter by level (debug, info, warn, error, fatal or unknown)",
    )
    f.add_argument("--pid", type=_arg_type(Pid.parse), default=None, help="Filter by process ID")
    f.add_argument("--component", default=None, help="Filter by component name")
    f.add_argument("--hostname", default=None, help="Filter by hostname")

    # Explicit bounds (both inclusive)
    f.add_argument(
        "--from",
        dest="since",
        type=_arg_type(parse_datetime),
        default=None,
        help="Keep entries at or after 'YYYY-MM-DD HH:MM:SS'",
    )
    f.add_argument(
        "--to",
        dest="until",
        type=_arg_type(parse_datetime),
        default=None,
        help="Keep entries at or before 'YYYY-MM-DD HH:MM:SS'",
    )

    # Selectors (override --from/--to)
    window = f.add_mutually_exclusive_group()
    window.add_argument("--date", default=None, help="YYYY-MM-DD (whole day)")
    window.add_argument("--hour", default=None, help="YYYY-MM-DDTHH (whole hour)")
    window.add_argument("--month", default=None, help="YYYY-MM (whole month)")
    return p


def _resolve_window(args: argparse.Namespace) -> tuple[datetime | None, datetime | None]:
    if args.date or args.hour or args.month:
        return resolve_time_window(date_=args.date, hour=args.hour, month=args.month)
    if args.since is not None and args.until is not None and args.since > args.until:
        raise FieldDecodeError("--from must be <= --to")
    return args.since, args.until


def run_filter(args: argparse.Namespace) -> int:
    try:
        since, until = _resolve_window(args)
        log = asyncio.run(
            filter_log(
                args.file,
                level=args.level,
                pid=args.pid,
                component=args.component,
                hostname=args.hostname,
                since=since,
                until=until,
            )
        )
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 2
    except (OSError, EOFError) as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 2
    except (ParseError, FieldDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for entry in log:
        print(entry)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    _configure_logging()
    args = build_parser().parse_args(argv)
    if args.command == "filter":
        raise SystemExit(run_filter(args))


if __name__ == "__main__":
    main()
