import struct

import pytest

from grayimage.tiff import (
    DATA_OFFSET,
    ENTRY_COUNT,
    IFD_OFFSET,
    SOFTWARE_LENGTH,
    TAG_IMAGE_LENGTH,
    TAG_IMAGE_WIDTH,
    TAG_ROWS_PER_STRIP,
    TAG_SOFTWARE,
    TAG_STRIP_OFFSETS,
    TYPE_LONG,
    TiffHeader,
    build_tiff_file,
)
from grayimage.tiffinfo import describe_tiff, iter_tags


def _sample(length=3, width=4):
    return build_tiff_file(TiffHeader(True, 8, length, width, DATA_OFFSET))


def test_iter_tags_lists_every_entry_in_order():
    entries = list(iter_tags(_sample()))
    assert len(entries) == ENTRY_COUNT
    assert [e.index for e in entries] == list(range(ENTRY_COUNT))
    assert all(e.ifd_offset == IFD_OFFSET for e in entries)
    assert entries[0].tag == 254
    assert entries[-1].tag == TAG_SOFTWARE


def test_iter_tags_values():
    by_tag = {e.tag: e for e in iter_tags(_sample(length=3, width=4))}
    assert by_tag[TAG_IMAGE_WIDTH].value == 4
    assert by_tag[TAG_IMAGE_LENGTH].value == 3
    assert by_tag[TAG_STRIP_OFFSETS].value == DATA_OFFSET
    assert by_tag[TAG_ROWS_PER_STRIP].field_type == TYPE_LONG
    assert by_tag[TAG_ROWS_PER_STRIP].value == 0xFFFFFFFF
    assert by_tag[TAG_SOFTWARE].count == SOFTWARE_LENGTH


def test_big_endian_file():
    entry = struct.pack(">HHIH2x", TAG_IMAGE_WIDTH, 3, 1, 640)
    data = b"MM\x00*" + struct.pack(">I", 8) + struct.pack(">H", 1) + entry
    data += struct.pack(">I", 0)
    (only,) = list(iter_tags(data))
    assert only.tag == TAG_IMAGE_WIDTH
    assert only.value == 640


def test_truncated_data_raises():
    with pytest.raises(ValueError):
        list(iter_tags(_sample()[:40]))


def test_looping_chain_raises():
    data = b"II*\x00" + struct.pack("<I", 8) + struct.pack("<H", 0)
    data += struct.pack("<I", 8)
    with pytest.raises(ValueError):
        list(iter_tags(data))


def test_describe_tiff(tmp_path):
    path = tmp_path / "sample.tif"
    path.write_bytes(_sample(length=3, width=4))
    report = describe_tiff(path)
    assert f"entry count = {ENTRY_COUNT}" in report
    assert "Loop i   0     tag type  254" in report
    assert f"Offset is {IFD_OFFSET}" in report
    assert "image width = 4" in report
    assert "image length = 3" in report


def test_describe_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        describe_tiff(tmp_path / "absent.tif")