"""Reading and writing whole grayscale images stored in TIFF files."""

from __future__ import annotations

from .tiff import (
    PathLike,
    TiffHeader,
    create_allocate_tiff_file,
    does_not_exist,
    read_tiff_header,
)

Image = list[list[int]]


def allocate_image_array(length: int, width: int) -> Image:
    """Return a ``length`` x ``width`` image filled with zeros."""
    if length < 0 or width < 0:
        raise ValueError("image dimensions must not be negative")
    return [[0] * width for _ in range(length)]


def _pixels_per_byte(bits_per_pixel: int) -> int:
    if bits_per_pixel not in (4, 8):
        raise ValueError("bits_per_pixel must be 4 or 8")
    return 8 // bits_per_pixel


def _line_bytes(header: TiffHeader) -> int:
    return header.image_width // _pixels_per_byte(header.bits_per_pixel)


def decode_line(data: bytes, bits_per_pixel: int, width: int) -> list[int]:
    """Unpack one line of pixel data into ``width`` gray values.

    With 4 bits per pixel the high nibble of each byte is the left pixel.
    Pixels that ``data`` does not cover are left at zero.
    """
    per_byte = _pixels_per_byte(bits_per_pixel)
    data = data[: width // per_byte]
    if per_byte == 1:
        values = list(data)
    else:
        values = [nibble for byte in data for nibble in (byte >> 4, byte & 0x0F)]
    values.extend([0] * (width - len(values)))
    return values


def encode_line(row: list[int], bits_per_pixel: int) -> bytes:
    """Pack a row of gray values into the bytes of one TIFF line."""
    per_byte = _pixels_per_byte(bits_per_pixel)
    if per_byte == 1:
        return bytes(value & 0xFF for value in row)
    count = len(row) // 2
    return bytes(
        ((high & 0x0F) << 4) | (low & 0x0F)
        for high, low in zip(row[0 : 2 * count : 2], row[1 : 2 * count : 2])
    )


def read_tiff_image(path: PathLike) -> Image:
    """Read every pixel of the TIFF image at ``path`` into a list of rows."""
    header = read_tiff_header(path)
    line_bytes = _line_bytes(header)
    with open(path, "rb") as image_file:
        image_file.seek(header.strip_offset)
        return [
            decode_line(
                image_file.read(line_bytes),
                header.bits_per_pixel,
                header.image_width,
            )
            for _ in range(header.image_length)
        ]


def write_tiff_image(path: PathLike, image: Image) -> None:
    """Write ``image`` into the pixel data of the existing TIFF file at ``path``."""
    header = read_tiff_header(path)
    _pixels_per_byte(header.bits_per_pixel)
    if len(image) < header.image_length:
        raise ValueError(
            f"image has {len(image)} rows, file needs {header.image_length}"
        )
    rows = image[: header.image_length]
    if any(len(row) < header.image_width for row in rows):
        raise ValueError(f"image rows must hold {header.image_width} pixels")
    with open(path, "r+b") as image_file:
        image_file.seek(header.strip_offset)
        for row in rows:
            image_file.write(
                encode_line(row[: header.image_width], header.bits_per_pixel)
            )


def create_file_if_needed(in_path: PathLike, out_path: PathLike) -> bool:
    """Create a blank TIFF at ``out_path`` shaped like ``in_path`` if it is missing.

    Returns True if a file was created.
    """
    if not does_not_exist(out_path):
        return False
    create_allocate_tiff_file(out_path, read_tiff_header(in_path))
    return True