"""High-level API for scanning archives into a collision aggregator."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .archive.constants import DEFAULT_NAME_ENCODING
from .archive.reader import open_archive
from .collisions import CollisionAggregator
from .logging import section
from .reporting import get_reporter, task

__all__ = ["scan_archive", "scan_archives"]


def scan_archive(
    path: str | Path,
    aggregator: CollisionAggregator,
    *,
    encoding: str = DEFAULT_NAME_ENCODING,
) -> int:
    """Read one archive and feed its entries to ``aggregator``.

    The archive file is closed before returning, also on failure. Returns the
    number of entries added.
    """
    p = Path(path)
    with task(f"archive:{p}", p.name) as stats:
        with open_archive(p, encoding=encoding) as reader:
            entries = reader.read_entries()
        added = aggregator.add_entries(entries, archive=str(p))
        stats["entries"] = added
    return added


def scan_archives(
    paths: Iterable[str | Path],
    aggregator: CollisionAggregator | None = None,
    *,
    encoding: str = DEFAULT_NAME_ENCODING,
) -> CollisionAggregator:
    """Scan archives in order into one aggregator.

    Stops at the first failing archive; the error propagates and archives
    after it are never opened.
    """
    agg = aggregator if aggregator is not None else CollisionAggregator()
    paths = [Path(p) for p in paths]
    rep = get_reporter()
    with section("Scanning archives") as logger:
        with task("archives", "archives", total=len(paths)) as stats:
            for p in paths:
                scan_archive(p, agg, encoding=encoding)
                rep.advance("archives", current_item=p.name)
            stats["entries"] = agg.total_names
            stats["collisions"] = agg.collision_count()
        logger.debug(
            f"{len(agg)} distinct hashes across {len(paths)} archive(s)"
        )
    return agg
