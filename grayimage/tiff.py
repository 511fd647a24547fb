"""TIFF header parsing and creation of blank grayscale TIFF files."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

TAG_NEW_SUBFILE_TYPE = 254
TAG_SUBFILE_TYPE = 255
TAG_IMAGE_WIDTH = 256
TAG_IMAGE_LENGTH = 257
TAG_BITS_PER_SAMPLE = 258
TAG_COMPRESSION = 259
TAG_PHOTOMETRIC = 262
TAG_STRIP_OFFSETS = 273
TAG_SAMPLES_PER_PIXEL = 277
TAG_ROWS_PER_STRIP = 278
TAG_STRIP_BYTE_COUNTS = 279
TAG_MIN_SAMPLE_VALUE = 280
TAG_MAX_SAMPLE_VALUE = 281
TAG_X_RESOLUTION = 282
TAG_Y_RESOLUTION = 283
TAG_PLANAR_CONFIGURATION = 284
TAG_RESOLUTION_UNIT = 296
TAG_SOFTWARE = 305

TYPE_ASCII = 2
TYPE_SHORT = 3
TYPE_LONG = 4
TYPE_RATIONAL = 5

#: Layout of the files written by :func:`build_tiff_file`.
IFD_OFFSET = 8
ENTRY_COUNT = 18
X_RESOLUTION_OFFSET = 230
Y_RESOLUTION_OFFSET = 238
SOFTWARE_OFFSET = 246
SOFTWARE_LENGTH = 50
DATA_OFFSET = 296

SOFTWARE_NAME = b"grayimage"

_REQUIRED_TAGS = {
    TAG_IMAGE_WIDTH: "image_width",
    TAG_IMAGE_LENGTH: "image_length",
    TAG_BITS_PER_SAMPLE: "bits_per_pixel",
    TAG_STRIP_OFFSETS: "strip_offset",
}


@dataclass
class TiffHeader:
    """The parts of a TIFF header needed to read and write pixel data."""

    lsb: bool
    bits_per_pixel: int
    image_length: int
    image_width: int
    strip_offset: int


def _unpack(fmt: str, data: bytes, offset: int) -> tuple:
    try:
        return struct.unpack_from(fmt, data, offset)
    except struct.error as exc:
        raise ValueError(f"truncated TIFF data at offset {offset}") from exc


def parse_tiff_header(data: bytes) -> TiffHeader:
    """Parse a TIFF file's bytes, following every IFD, into a TiffHeader."""
    if len(data) < 8:
        raise ValueError("data too short for a TIFF header")
    lsb = data[0] == 0x49
    order = "<" if lsb else ">"
    (offset,) = _unpack(order + "I", data, 4)

    found: dict[int, int] = {}
    seen: set[int] = set()
    while True:
        if offset in seen:
            raise ValueError(f"IFD chain loops back to offset {offset}")
        seen.add(offset)
        (count,) = _unpack(order + "H", data, offset)
        position = offset + 2
        for _ in range(count):
            tag, field_type = _unpack(order + "HH", data, position)
            if tag in _REQUIRED_TAGS:
                if field_type == TYPE_SHORT:
                    (value,) = _unpack(order + "H", data, position + 8)
                else:
                    (value,) = _unpack(order + "I", data, position + 8)
                found[tag] = value
            position += 12
        (offset,) = _unpack(order + "I", data, position)
        if offset == 0:
            break

    missing = [name for tag, name in _REQUIRED_TAGS.items() if tag not in found]
    if missing:
        raise ValueError("TIFF header lacks " + ", ".join(missing))

    return TiffHeader(
        lsb=lsb,
        bits_per_pixel=found[TAG_BITS_PER_SAMPLE],
        image_length=found[TAG_IMAGE_LENGTH],
        image_width=found[TAG_IMAGE_WIDTH],
        strip_offset=found[TAG_STRIP_OFFSETS],
    )


def read_tiff_header(path: PathLike) -> TiffHeader:
    """Read the header of the TIFF file at ``path``."""
    return parse_tiff_header(Path(path).read_bytes())


def _entry(tag: int, field_type: int, count: int, value: int) -> bytes:
    value_format = "<I" if field_type in (TYPE_LONG,) else "<H2x"
    try:
        return struct.pack("<HHI", tag, field_type, count) + struct.pack(
            value_format, value
        )
    except struct.error as exc:
        raise ValueError(f"value {value} does not fit tag {tag}") from exc


def build_tiff_file(header: TiffHeader) -> bytes:
    """Return the bytes of a little-endian TIFF file with a zeroed image."""
    if header.bits_per_pixel not in (4, 8):
        raise ValueError("bits_per_pixel must be 4 or 8")
    if header.image_length < 0 or header.image_width < 0:
        raise ValueError("image dimensions must not be negative")

    max_sample = 255 if header.bits_per_pixel == 8 else 15
    entries = [
        _entry(TAG_NEW_SUBFILE_TYPE, TYPE_SHORT, 1, 0),
        _entry(TAG_SUBFILE_TYPE, TYPE_SHORT, 1, 1),
        _entry(TAG_IMAGE_WIDTH, TYPE_SHORT, 1, header.image_width),
        _entry(TAG_IMAGE_LENGTH, TYPE_SHORT, 1, header.image_length),
        _entry(TAG_BITS_PER_SAMPLE, TYPE_SHORT, 1, header.bits_per_pixel),
        _entry(TAG_COMPRESSION, TYPE_SHORT, 1, 1),
        _entry(TAG_PHOTOMETRIC, TYPE_SHORT, 1, 1),
        _entry(TAG_STRIP_OFFSETS, TYPE_SHORT, 1, DATA_OFFSET),
        _entry(TAG_SAMPLES_PER_PIXEL, TYPE_SHORT, 1, 1),
        _entry(TAG_ROWS_PER_STRIP, TYPE_LONG, 1, 0xFFFFFFFF),
        _entry(
            TAG_STRIP_BYTE_COUNTS,
            TYPE_LONG,
            1,
            header.image_length * header.image_width,
        ),
        _entry(TAG_MIN_SAMPLE_VALUE, TYPE_SHORT, 1, 0),
        _entry(TAG_MAX_SAMPLE_VALUE, TYPE_SHORT, 1, max_sample),
        _entry(TAG_X_RESOLUTION, TYPE_RATIONAL, 1, X_RESOLUTION_OFFSET),
        _entry(TAG_Y_RESOLUTION, TYPE_RATIONAL, 1, Y_RESOLUTION_OFFSET),
        _entry(TAG_PLANAR_CONFIGURATION, TYPE_SHORT, 1, 1),
        _entry(TAG_RESOLUTION_UNIT, TYPE_SHORT, 1, 2),
        _entry(TAG_SOFTWARE, TYPE_ASCII, SOFTWARE_LENGTH, SOFTWARE_OFFSET),
    ]

    parts = [
        b"II*\x00" + struct.pack("<I", IFD_OFFSET),
        struct.pack("<H", len(entries)),
        *entries,
        struct.pack("<I", 0),
        struct.pack("<II", 300, 1),
        struct.pack("<II", 300, 1),
        SOFTWARE_NAME.ljust(SOFTWARE_LENGTH, b"\x00"),
    ]

    row_bytes = header.image_width
    if header.bits_per_pixel == 4:
        row_bytes //= 2
    parts.append(bytes(row_bytes * header.image_length))
    return b"".join(parts)


def create_allocate_tiff_file(path: PathLike, header: TiffHeader) -> None:
    """Write a blank TIFF file at ``path`` sized as ``header`` describes."""
    Path(path).write_bytes(build_tiff_file(header))


def round_off_image_size(
    header: TiffHeader, rows: int, cols: int
) -> tuple[int, int]:
    """Return how many ``rows`` x ``cols`` tiles cover the image, as (down, across)."""
    length = (rows - 10 + header.image_length) // rows
    width = (cols - 10 + header.image_width) // cols
    return length, width


def does_not_exist(path: PathLike) -> bool:
    """Return True if ``path`` cannot be opened for reading."""
    try:
        with open(path, "rb"):
            return False
    except OSError:
        return True