"""Text dumps of image arrays and raw file bytes."""

from __future__ import annotations

from collections.abc import Sequence


def _column_header(width: int) -> str:
    return "      " + "".join(f"{column:4d}" for column in range(width)) + "\n"


def _width(image: Sequence[Sequence[int]]) -> int:
    return len(image[0]) if image else 0


def dump_numbers(image: Sequence[Sequence[int]]) -> str:
    """Return the gray values of ``image`` as numbered text lines."""
    lines = [_column_header(_width(image))]
    for index, row in enumerate(image):
        values = "".join(f"-{value:3d}" for value in row)
        lines.append(f"{index:5d}>{values}\n")
    return "".join(lines)


def dump_binary(image: Sequence[Sequence[int]]) -> str:
    """Return ``image`` as text with a space for zero and '*' otherwise."""
    lines = [_column_header(_width(image))]
    for index, row in enumerate(image):
        marks = "".join(" " if value == 0 else "*" for value in row)
        lines.append(f"{index:5d}>{marks}\n")
    return "".join(lines)


def hex_dump(data: bytes) -> str:
    """Return ``data`` as lines of two hex bytes, each led by its offset."""
    lines = []
    for offset in range(0, len(data), 2):
        pair = " ".join(f"{byte:x}" for byte in data[offset : offset + 2])
        lines.append(f"{offset:4d}>>{pair}\n")
    return "".join(lines)