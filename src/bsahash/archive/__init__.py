from .errors import BsaError, InvalidFormatError, TruncatedInputError
from .reader import (
    ArchiveEntry,
    ArchiveHeader,
    ArchiveReader,
    open_archive,
    read_entries,
)

__all__ = [
    "BsaError",
    "InvalidFormatError",
    "TruncatedInputError",
    "ArchiveEntry",
    "ArchiveHeader",
    "ArchiveReader",
    "open_archive",
    "read_entries",
]
