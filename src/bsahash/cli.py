"""Command line interface for bsahash.

Reads every archive given on the command line, in order, and prints the
groups of file names that share a hash, one group per line on stdout.
Progress and errors go to stderr through the selected reporter.
"""

from __future__ import annotations

import argparse
import codecs
import json
import sys
from pathlib import Path
from typing import Iterable

from .api import scan_archives
from .archive.constants import DEFAULT_NAME_ENCODING
from .archive.errors import BsaError
from .collisions import CollisionAggregator, CollisionBucket
from .logging import configure_logging, get_logger
from .reporting import (
    set_reporter,
    get_reporter,
    PlainReporter,
    SilentReporter,
    RichReporter,
    set_verbosity,
)

USAGE = "Usage: bsahash [path to BSA] [optional additional BSAs]"


def _encoding(value: str) -> str:
    try:
        return codecs.lookup(value).name
    except LookupError:
        raise argparse.ArgumentTypeError(
            f"unknown encoding: {value}"
        ) from None


def format_bucket(bucket: CollisionBucket, *, show_hash: bool = False) -> str:
    line = "[" + ", ".join(bucket.names) + "]"
    if show_hash:
        line = f"0x{bucket.hash:016x}: {line}"
    return line


def _emit(
    buckets: Iterable[CollisionBucket], *, as_json: bool, show_hash: bool
) -> None:
    if as_json:
        doc = {"collisions": [b.to_dict() for b in buckets]}
        print(json.dumps(doc, indent=2, ensure_ascii=False))
        return
    for bucket in buckets:
        print(format_bucket(bucket, show_hash=show_hash))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bsahash",
        description="Report file names sharing a hash inside BSA archives",
    )
    p.add_argument(
        "archives",
        nargs="*",
        type=Path,
        help="BSA archives to scan, processed in the given order",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "silent"],
        default="plain",
        help="Select reporter backend for stderr: plain (default), rich, "
        "silent (errors are still printed)",
    )
    p.add_argument(
        "--encoding",
        type=_encoding,
        default=DEFAULT_NAME_ENCODING,
        help="Single-byte charset of the stored file names (default: latin-1)",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Emit all collision groups as one JSON document",
    )
    p.add_argument(
        "--show-hash",
        dest="show_hash",
        action="store_true",
        help="Prefix each collision group with its hash",
    )
    return p


def _select_reporter(requested: str) -> None:
    if requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        # rich without a TTY falls back to plain
        set_reporter(PlainReporter())


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)
    if not args.archives:
        print(USAGE)
        return 0
    _select_reporter(args.reporter)
    set_verbosity(args.verbose)
    configure_logging(args.verbose)

    aggregator = CollisionAggregator()
    try:
        scan_archives(args.archives, aggregator, encoding=args.encoding)
    except (BsaError, OSError) as e:
        rep = get_reporter()
        rep.flush()
        rep.error(str(e))
        if isinstance(rep, SilentReporter):
            # errors are never silenced
            print(str(e), file=sys.stderr)
        return 1

    get_logger().info(
        f"Scan summary: archives={len(args.archives)} "
        f"names={aggregator.total_names} "
        f"collisions={aggregator.collision_count()}"
    )
    _emit(
        aggregator.collisions(), as_json=args.json, show_hash=args.show_hash
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
