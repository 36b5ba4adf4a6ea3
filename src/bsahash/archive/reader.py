"""Sequential reader for the file-name and hash tables of a BSA archive.

Layout (all integers little-endian u32):

- header: version (256), hash_offset, file_count
- file_count fixed records of 8 bytes (size/offset, not interpreted)
- file_count name offsets into the name blob
- name blob of NUL-terminated single-byte strings
- hash table at ``12 + hash_offset``: file_count pairs (A, B) forming the
  64-bit hash ``(A << 32) | B``

The stages are run in file order by :meth:`ArchiveReader.read_entries`.
Name lengths are derived from consecutive name offsets; the last one uses
``hash_offset - file_count * 12`` as the end of the blob.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, List
import io
import struct

from ..logging import get_logger
from .constants import (
    BSA_VERSION,
    DEFAULT_NAME_ENCODING,
    ENTRY_META_SIZE,
    FIXED_RECORD_SIZE,
    HASH_RECORD_FORMAT,
    HASH_RECORD_SIZE,
    HEADER_FORMAT,
    HEADER_SIZE,
    NAME_OFFSET_SIZE,
)
from .errors import (
    E_BAD_VERSION,
    E_NAME_DECODE,
    E_NAME_LENGTH,
    InvalidFormatError,
    truncated,
)

__all__ = [
    "ArchiveHeader",
    "ArchiveEntry",
    "ArchiveReader",
    "combine_hash",
    "open_archive",
    "read_entries",
]


@dataclass(frozen=True, slots=True)
class ArchiveHeader:
    version: int
    hash_offset: int
    file_count: int

    @property
    def name_blob_size(self) -> int:
        return self.hash_offset - self.file_count * ENTRY_META_SIZE

    @property
    def hash_table_start(self) -> int:
        return HEADER_SIZE + self.hash_offset


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    index: int
    name: str
    hash: int

    @property
    def hash_hex(self) -> str:
        return f"{self.hash:016x}"


def combine_hash(high: int, low: int) -> int:
    """Join two unsigned 32-bit halves into the archive's 64-bit hash."""
    return ((high & 0xFFFFFFFF) << 32) | (low & 0xFFFFFFFF)


class ArchiveReader:
    """Reads (name, hash) entries from one seekable binary stream.

    The reader does not own the stream; use :func:`open_archive` to get a
    reader whose file is closed automatically.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        encoding: str = DEFAULT_NAME_ENCODING,
        label: str | None = None,
    ):
        self.stream = stream
        self.encoding = encoding
        self.label = label or getattr(stream, "name", None) or "<stream>"
        self.header: ArchiveHeader | None = None

    # Internal -----------------------------------------------------------------
    def _read_exact(self, size: int, what: str) -> bytes:
        # sizes come from the header; never ask the stream for more than it has
        left = self._remaining()
        if left < size:
            raise truncated(what, size, left, {"archive": self.label})
        data = self.stream.read(size)
        if len(data) < size:
            raise truncated(what, size, len(data), {"archive": self.label})
        return data

    def _remaining(self) -> int:
        pos = self.stream.tell()
        end = self.stream.seek(0, io.SEEK_END)
        self.stream.seek(pos)
        return max(0, end - pos)

    def _require_header(self) -> ArchiveHeader:
        if self.header is None:
            return self.read_header()
        return self.header

    # Stages -------------------------------------------------------------------
    def read_header(self) -> ArchiveHeader:
        raw = self._read_exact(HEADER_SIZE, "header")
        version, hash_offset, file_count = struct.unpack(HEADER_FORMAT, raw)
        if version != BSA_VERSION:
            raise InvalidFormatError(
                code=E_BAD_VERSION,
                message=f"Invalid BSA version: {version}",
                context={"archive": self.label, "expected": BSA_VERSION},
            )
        self.header = ArchiveHeader(version, hash_offset, file_count)
        get_logger().debug(
            f"{self.label}: version={version} hash_offset={hash_offset} "
            f"files={file_count}"
        )
        return self.header

    def skip_fixed_records(self) -> None:
        header = self._require_header()
        size = header.file_count * FIXED_RECORD_SIZE
        left = self._remaining()
        if left < size:
            raise truncated(
                "fixed records", size, left, {"archive": self.label}
            )
        self.stream.seek(size, io.SEEK_CUR)

    def read_name_offsets(self) -> List[int]:
        header = self._require_header()
        count = header.file_count
        raw = self._read_exact(count * NAME_OFFSET_SIZE, "name offsets")
        return list(struct.unpack(f"<{count}I", raw))

    def read_names(self, offsets: List[int]) -> List[str]:
        header = self._require_header()
        blob_end = header.name_blob_size
        names: List[str] = []
        last = len(offsets) - 1
        for i, start in enumerate(offsets):
            end = offsets[i + 1] if i < last else blob_end
            length = end - start
            if length <= 0:
                raise InvalidFormatError(
                    code=E_NAME_LENGTH,
                    message=f"Non-positive name length {length} for entry {i}",
                    context={
                        "archive": self.label,
                        "index": i,
                        "start": start,
                        "end": end,
                    },
                )
            raw = self._read_exact(length, f"file name {i}")
            # trailing byte is the NUL terminator
            try:
                names.append(raw[:-1].decode(self.encoding))
            except UnicodeDecodeError as e:
                raise InvalidFormatError(
                    code=E_NAME_DECODE,
                    message=f"Cannot decode name {i} as {self.encoding}",
                    context={"archive": self.label, "index": i},
                ) from e
        return names

    def read_hashes(self) -> List[int]:
        header = self._require_header()
        self.stream.seek(header.hash_table_start)
        hashes: List[int] = []
        for i in range(header.file_count):
            raw = self._read_exact(HASH_RECORD_SIZE, f"hash {i}")
            high, low = struct.unpack(HASH_RECORD_FORMAT, raw)
            hashes.append(combine_hash(high, low))
        return hashes

    def read_entries(self) -> List[ArchiveEntry]:
        self.read_header()
        self.skip_fixed_records()
        offsets = self.read_name_offsets()
        names = self.read_names(offsets)
        hashes = self.read_hashes()
        get_logger().debug(f"{self.label}: read {len(names)} entries")
        return [
            ArchiveEntry(i, name, h)
            for i, (name, h) in enumerate(zip(names, hashes))
        ]


@contextmanager
def open_archive(
    path: str | Path, *, encoding: str = DEFAULT_NAME_ENCODING
) -> Iterator[ArchiveReader]:
    p = Path(path)
    with p.open("rb") as fh:
        yield ArchiveReader(fh, encoding=encoding, label=str(p))


def read_entries(
    path: str | Path, *, encoding: str = DEFAULT_NAME_ENCODING
) -> List[ArchiveEntry]:
    with open_archive(path, encoding=encoding) as reader:
        return reader.read_entries()
