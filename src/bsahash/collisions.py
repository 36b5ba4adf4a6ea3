"""Grouping of archive entries by their 64-bit name hash.

One :class:`CollisionAggregator` is created per run and passed to every
archive scan, so buckets span all archives of that run. Buckets keep the
order in which their hash was first seen, and names inside a bucket keep
insertion order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List

from .archive.reader import ArchiveEntry

__all__ = ["BucketEntry", "CollisionBucket", "CollisionAggregator"]


@dataclass(frozen=True, slots=True)
class BucketEntry:
    name: str
    archive: str | None = None


@dataclass(slots=True)
class CollisionBucket:
    hash: int
    entries: List[BucketEntry] = field(default_factory=list)

    @property
    def names(self) -> List[str]:
        return [e.name for e in self.entries]

    @property
    def is_collision(self) -> bool:
        return len(self.entries) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": f"0x{self.hash:016x}",
            "names": self.names,
            "archives": [e.archive for e in self.entries],
        }


class CollisionAggregator:
    def __init__(self) -> None:
        self._buckets: Dict[int, CollisionBucket] = {}

    def add(self, name: str, hash: int, archive: str | None = None) -> None:
        bucket = self._buckets.get(hash)
        if bucket is None:
            bucket = CollisionBucket(hash)
            self._buckets[hash] = bucket
        bucket.entries.append(BucketEntry(name, archive))

    def add_entries(
        self, entries: Iterable[ArchiveEntry], archive: str | None = None
    ) -> int:
        count = 0
        for entry in entries:
            self.add(entry.name, entry.hash, archive)
            count += 1
        return count

    def collisions(self) -> Iterator[CollisionBucket]:
        return (b for b in self._buckets.values() if b.is_collision)

    def collision_count(self) -> int:
        return sum(1 for _ in self.collisions())

    @property
    def total_names(self) -> int:
        return sum(len(b.entries) for b in self._buckets.values())

    def __len__(self) -> int:
        return len(self._buckets)
