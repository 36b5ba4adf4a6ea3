"""Binary layout constants for the BSA archive format."""

BSA_VERSION = 256

HEADER_SIZE = 12
HEADER_FORMAT = "<III"

# size/offset pair per file, skipped by the reader
FIXED_RECORD_SIZE = 8
NAME_OFFSET_SIZE = 4
# fixed record + name offset, used to derive the name blob length
ENTRY_META_SIZE = FIXED_RECORD_SIZE + NAME_OFFSET_SIZE

HASH_RECORD_SIZE = 8
HASH_RECORD_FORMAT = "<II"

DEFAULT_NAME_ENCODING = "latin-1"

__all__ = [
    "BSA_VERSION",
    "HEADER_SIZE",
    "HEADER_FORMAT",
    "FIXED_RECORD_SIZE",
    "NAME_OFFSET_SIZE",
    "ENTRY_META_SIZE",
    "HASH_RECORD_SIZE",
    "HASH_RECORD_FORMAT",
    "DEFAULT_NAME_ENCODING",
]
