from __future__ import annotations

import argparse

from countup.core.dates import DEFAULT_START

VERSION = "0.1.0"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="countup", description="Shows how long it's been since a date")
    p.add_argument(
        "-d",
        "--date",
        required=False,
        default=None,
        help=f"Date to count from, format yyyy-mm-dd (default {DEFAULT_START})",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Also write log output to the console")
    p.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return p


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)
