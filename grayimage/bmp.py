"""Reading and writing 8-bit grayscale Windows BMP files."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path

from .tiff import PathLike, does_not_exist

Image = list[list[int]]

BMP_SIGNATURE = 0x4D42
FILE_HEADER_SIZE = 14
BITMAP_HEADER_SIZE = 40
COLOR_TABLE_OFFSET = FILE_HEADER_SIZE + BITMAP_HEADER_SIZE
GRAY_LEVELS = 255

_FILE_HEADER_FORMAT = "<HIhhI"
_BITMAP_HEADER_FORMAT = "<IiiHHIIIIII"


@dataclass
class BmpFileHeader:
    """The 14-byte file header at the start of every BMP file."""

    filetype: int
    filesize: int
    reserved1: int
    reserved2: int
    bitmapoffset: int

    def pack(self) -> bytes:
        return struct.pack(
            _FILE_HEADER_FORMAT,
            self.filetype,
            self.filesize,
            self.reserved1,
            self.reserved2,
            self.bitmapoffset,
        )


@dataclass
class BitmapHeader:
    """The 40-byte bitmap information header that follows the file header."""

    size: int
    width: int
    height: int
    planes: int
    bitsperpixel: int
    compression: int
    sizeofbitmap: int
    horzres: int
    vertres: int
    colorsused: int
    colorsimp: int

    def pack(self) -> bytes:
        return struct.pack(
            _BITMAP_HEADER_FORMAT,
            self.size,
            self.width,
            self.height,
            self.planes,
            self.bitsperpixel,
            self.compression,
            self.sizeofbitmap,
            self.horzres,
            self.vertres,
            self.colorsused,
            self.colorsimp,
        )


def _unpack(fmt: str, data: bytes, offset: int) -> tuple:
    try:
        return struct.unpack_from(fmt, data, offset)
    except struct.error as exc:
        raise ValueError(f"truncated BMP data at offset {offset}") from exc


def _read_prefix(path: PathLike, count: int) -> bytes:
    with open(path, "rb") as bmp_file:
        return bmp_file.read(count)


def read_bmp_file_header(path: PathLike) -> BmpFileHeader:
    """Read the 14-byte file header of the BMP file at ``path``."""
    data = _read_prefix(path, FILE_HEADER_SIZE)
    return BmpFileHeader(*_unpack(_FILE_HEADER_FORMAT, data, 0))


def read_bm_header(path: PathLike) -> BitmapHeader:
    """Read the bitmap information header of the BMP file at ``path``."""
    data = _read_prefix(path, COLOR_TABLE_OFFSET)
    return BitmapHeader(*_unpack(_BITMAP_HEADER_FORMAT, data, FILE_HEADER_SIZE))


def read_color_table(path: PathLike, size: int) -> list[tuple[int, int, int]]:
    """Read ``size`` color table entries as (blue, green, red) tuples."""
    if size < 0:
        raise ValueError("color table size must not be negative")
    data = _read_prefix(path, COLOR_TABLE_OFFSET + 4 * size)
    table = data[COLOR_TABLE_OFFSET:]
    if len(table) < 4 * size:
        raise ValueError("BMP file too short for its color table")
    return [
        (blue, green, red)
        for blue, green, red, _ in struct.iter_unpack("4B", table[: 4 * size])
    ]


def calculate_pad(width: int) -> int:
    """Return the number of bytes padding a row of ``width`` bytes to 4."""
    remainder = width % 4
    return 0 if remainder == 0 else 4 - remainder


def flip_image_array(image: Image) -> Image:
    """Return a copy of ``image`` turned upside down."""
    return [list(row) for row in reversed(image)]


def read_bmp_image(path: PathLike) -> Image:
    """Read the gray values of an 8-bit BMP image, top row first."""
    data = Path(path).read_bytes()
    file_header = BmpFileHeader(*_unpack(_FILE_HEADER_FORMAT, data, 0))
    bmheader = BitmapHeader(
        *_unpack(_BITMAP_HEADER_FORMAT, data, FILE_HEADER_SIZE)
    )
    if bmheader.bitsperpixel != 8:
        raise ValueError("cannot read image when bits per pixel is not 8")
    if bmheader.width < 0:
        raise ValueError("BMP width must not be negative")

    colors = GRAY_LEVELS + 1 if bmheader.colorsused == 0 else bmheader.colorsused
    table = read_color_table(path, colors)
    blues = [blue for blue, _, _ in table]

    width = bmheader.width
    height = abs(bmheader.height)
    stride = width + calculate_pad(width)
    image: Image = []
    for row_index in range(height):
        start = file_header.bitmapoffset + row_index * stride
        raw = data[start : start + width]
        if len(raw) < width:
            raise ValueError("BMP file too short for its pixel data")
        try:
            image.append([blues[value] for value in raw])
        except IndexError as exc:
            raise ValueError("pixel value outside the color table") from exc

    if bmheader.height >= 0:
        image = flip_image_array(image)
    return image


def create_allocate_bmp_file(
    path: PathLike, height: int, width: int
) -> tuple[BmpFileHeader, BitmapHeader]:
    """Write a blank 8-bit BMP of the given size and return its headers.

    A negative ``height`` makes a top-down file.
    """
    if width < 0:
        raise ValueError("BMP width must not be negative")
    pad = calculate_pad(width)
    colors = GRAY_LEVELS + 1
    bmheader = BitmapHeader(
        size=BITMAP_HEADER_SIZE,
        width=width,
        height=height,
        planes=1,
        bitsperpixel=8,
        compression=0,
        sizeofbitmap=abs(height) * (width + pad),
        horzres=300,
        vertres=300,
        colorsused=colors,
        colorsimp=colors,
    )
    bitmapoffset = FILE_HEADER_SIZE + bmheader.size + bmheader.colorsused * 4
    file_header = BmpFileHeader(
        filetype=BMP_SIGNATURE,
        filesize=bitmapoffset + bmheader.sizeofbitmap,
        reserved1=0,
        reserved2=0,
        bitmapoffset=bitmapoffset,
    )
    try:
        contents = b"".join(
            [
                file_header.pack(),
                bmheader.pack(),
                bytes(4 * colors),
                bytes(bmheader.sizeofbitmap),
            ]
        )
    except struct.error as exc:
        raise ValueError("BMP dimensions out of range") from exc
    Path(path).write_bytes(contents)
    return file_header, bmheader


def create_bmp_file_if_needed(in_path: PathLike, out_path: PathLike) -> bool:
    """Create a blank BMP at ``out_path`` shaped like ``in_path`` if it is missing.

    Returns True if a file was created.
    """
    if not does_not_exist(out_path):
        return False
    bmheader = read_bm_header(in_path)
    create_allocate_bmp_file(out_path, bmheader.height, bmheader.width)
    return True


def write_bmp_image(path: PathLike, image: Image) -> None:
    """Write ``image`` and a gray color table into the existing BMP at ``path``."""
    file_header = read_bmp_file_header(path)
    bmheader = read_bm_header(path)
    if bmheader.bitsperpixel != 8:
        raise ValueError("bits per pixel is not 8")
    if bmheader.colorsused > GRAY_LEVELS + 1:
        raise ValueError("color table larger than 256 entries")

    width = bmheader.width
    height = abs(bmheader.height)
    if len(image) < height:
        raise ValueError(f"image has {len(image)} rows, file needs {height}")
    rows = image[:height]
    if any(len(row) < width for row in rows):
        raise ValueError(f"image rows must hold {width} pixels")

    color_table = b"".join(
        bytes((level, level, level, 0)) for level in range(bmheader.colorsused)
    )
    if bmheader.height > 0:
        rows = rows[::-1]
    padding = bytes(calculate_pad(width))
    pixels = b"".join(
        bytes(value & 0xFF for value in row[:width]) + padding for row in rows
    )

    with open(path, "r+b") as bmp_file:
        bmp_file.seek(COLOR_TABLE_OFFSET)
        bmp_file.write(color_table)
        bmp_file.seek(file_header.bitmapoffset)
        bmp_file.write(pixels)