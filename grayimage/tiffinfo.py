"""Listing the directory entries of a TIFF file."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .tiff import TYPE_SHORT, PathLike, parse_tiff_header


@dataclass(frozen=True)
class TagEntry:
    """One entry of an image file directory."""

    ifd_offset: int
    index: int
    tag: int
    field_type: int
    count: int
    value: int


def _unpack(fmt: str, data: bytes, offset: int) -> tuple:
    try:
        return struct.unpack_from(fmt, data, offset)
    except struct.error as exc:
        raise ValueError(f"truncated TIFF data at offset {offset}") from exc


def _iter_ifds(data: bytes) -> Iterator[tuple[int, list[TagEntry]]]:
    if len(data) < 8:
        raise ValueError("data too short for a TIFF header")
    order = "<" if data[0] == 0x49 else ">"
    (offset,) = _unpack(order + "I", data, 4)
    seen: set[int] = set()
    while True:
        if offset in seen:
            raise ValueError(f"IFD chain loops back to offset {offset}")
        seen.add(offset)
        (count,) = _unpack(order + "H", data, offset)
        entries = []
        position = offset + 2
        for index in range(count):
            tag, field_type, length = _unpack(order + "HHI", data, position)
            value_format = "H" if field_type == TYPE_SHORT else "I"
            (value,) = _unpack(order + value_format, data, position + 8)
            entries.append(TagEntry(offset, index, tag, field_type, length, value))
            position += 12
        yield offset, entries
        (offset,) = _unpack(order + "I", data, position)
        if offset == 0:
            return


def iter_tags(data: bytes) -> Iterator[TagEntry]:
    """Yield every directory entry of the TIFF bytes, following the IFD chain."""
    for _, entries in _iter_ifds(data):
        yield from entries


def describe_tiff(path: PathLike) -> str:
    """Return a report of the IFDs, tag types and image header of a TIFF file."""
    data = Path(path).read_bytes()
    lines = [f"opened file {path}"]
    for offset, entries in _iter_ifds(data):
        lines.append(f"Offset is {offset}")
        lines.append(f"entry count = {len(entries)}")
        lines.extend(
            f"Loop i {entry.index:3d}     tag type {entry.tag:4d}" for entry in entries
        )
    header = parse_tiff_header(data)
    lines.append(f"lsb = {int(header.lsb)}")
    lines.append(f"bits per pixel = {header.bits_per_pixel}")
    lines.append(f"image length = {header.image_length}")
    lines.append(f"image width = {header.image_width}")
    lines.append(f"strip offset = {header.strip_offset}")
    return "\n".join(lines) + "\n"