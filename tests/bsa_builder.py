"""Helpers that synthesise BSA archives byte by byte for tests."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple
import struct


def build_archive(
    names: Sequence[bytes | str],
    hashes: Sequence[Tuple[int, int]],
    *,
    version: int = 256,
    hash_offset: int | None = None,
) -> bytes:
    """Return archive bytes with consistent offsets unless overridden.

    ``hashes`` holds one (A, B) pair per name; the stored hash is
    ``(A << 32) | B``.
    """
    assert len(names) == len(hashes)
    raw_names = [
        (n.encode("latin-1") if isinstance(n, str) else n) + b"\x00"
        for n in names
    ]
    count = len(raw_names)
    offsets = []
    pos = 0
    for raw in raw_names:
        offsets.append(pos)
        pos += len(raw)
    blob = b"".join(raw_names)
    if hash_offset is None:
        hash_offset = count * 12 + len(blob)

    out = bytearray(struct.pack("<III", version, hash_offset, count))
    for i, raw in enumerate(raw_names):
        # size/offset pair, ignored by the reader
        out += struct.pack("<II", len(raw) * 10, i * 100)
    out += struct.pack(f"<{count}I", *offsets)
    out += blob
    for a, b in hashes:
        out += struct.pack("<II", a, b)
    # file payload area after the hash table
    out += b"\xaa" * 16
    return bytes(out)


def write_archive(path: Path, *args, **kwargs) -> Path:
    path.write_bytes(build_archive(*args, **kwargs))
    return path
