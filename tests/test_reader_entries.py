from io import BytesIO
from pathlib import Path

from bsa_builder import build_archive, write_archive
from bsahash.archive import ArchiveReader, open_archive, read_entries
from bsahash.archive.reader import combine_hash


def test_returns_one_entry_per_file_in_order():
    names = ["meshes\\a.nif", "textures\\b.dds", "icons\\c.tga"]
    hashes = [(1, 2), (3, 4), (5, 6)]
    reader = ArchiveReader(BytesIO(build_archive(names, hashes)))
    entries = reader.read_entries()
    assert [e.name for e in entries] == names
    assert [e.index for e in entries] == [0, 1, 2]
    assert [e.hash for e in entries] == [
        (1 << 32) | 2,
        (3 << 32) | 4,
        (5 << 32) | 6,
    ]


def test_hash_combination_is_bit_exact():
    data = build_archive(["x"], [(0x12345678, 0x9ABCDEF0)])
    (entry,) = ArchiveReader(BytesIO(data)).read_entries()
    assert entry.hash == 0x123456789ABCDEF0
    assert entry.hash_hex == "123456789abcdef0"


def test_high_bit_halves_are_not_sign_extended():
    assert combine_hash(0xFFFFFFFF, 0x80000000) == 0xFFFFFFFF80000000
    data = build_archive(["x"], [(0x80000000, 0xFFFFFFFF)])
    (entry,) = ArchiveReader(BytesIO(data)).read_entries()
    assert entry.hash == 0x80000000FFFFFFFF
    assert entry.hash > 0


def test_example_two_entries_sharing_a_hash():
    data = build_archive(["a", "bb"], [(1, 2), (1, 2)])
    reader = ArchiveReader(BytesIO(data))
    entries = reader.read_entries()
    assert reader.header is not None
    assert reader.header.file_count == 2
    assert reader.header.hash_offset == 29
    assert reader.header.name_blob_size == 5
    assert [(e.name, e.hash) for e in entries] == [
        ("a", 0x0000000100000002),
        ("bb", 0x0000000100000002),
    ]


def test_empty_archive_has_no_entries():
    data = build_archive([], [])
    assert ArchiveReader(BytesIO(data)).read_entries() == []


def test_single_byte_names_decode_as_latin1():
    data = build_archive([b"caf\xe9.nif"], [(0, 1)])
    (entry,) = ArchiveReader(BytesIO(data)).read_entries()
    assert entry.name == "café.nif"


def test_alternate_single_byte_encoding():
    data = build_archive([b"\x80.dds"], [(0, 1)])
    (entry,) = ArchiveReader(BytesIO(data), encoding="cp1252").read_entries()
    assert entry.name == "€.dds"


def test_name_of_only_a_terminator_is_empty():
    data = build_archive(["", "b"], [(0, 1), (0, 2)])
    entries = ArchiveReader(BytesIO(data)).read_entries()
    assert [e.name for e in entries] == ["", "b"]


def test_stages_follow_file_layout():
    data = build_archive(["one", "three"], [(7, 8), (9, 10)])
    stream = BytesIO(data)
    reader = ArchiveReader(stream)
    reader.read_header()
    assert stream.tell() == 12
    reader.skip_fixed_records()
    assert stream.tell() == 12 + 2 * 8
    offsets = reader.read_name_offsets()
    assert offsets == [0, 4]
    assert reader.read_names(offsets) == ["one", "three"]
    assert reader.read_hashes() == [(7 << 32) | 8, (9 << 32) | 10]


def test_open_archive_closes_file(tmp_path: Path):
    path = write_archive(tmp_path / "a.bsa", ["a"], [(1, 1)])
    with open_archive(path) as reader:
        reader.read_entries()
        stream = reader.stream
        assert reader.label == str(path)
    assert stream.closed


def test_read_entries_from_path(tmp_path: Path):
    path = write_archive(tmp_path / "a.bsa", ["a", "b"], [(1, 1), (2, 2)])
    assert [e.name for e in read_entries(path)] == ["a", "b"]
