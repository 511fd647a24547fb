"""Whole-image operations: rotation and flipping, overlays, edge marks and histograms."""

from __future__ import annotations

from collections.abc import Sequence

Image = list[list[int]]

GRAY_LEVELS = 255
SPOT = 200

#: Geometry of the histogram picture drawn by :func:`histogram_image`.
HISTOGRAM_LENGTH = 300
HISTOGRAM_WIDTH = 300
UP = 5
LEFT = 5

ROTATE_90 = 1
ROTATE_180 = 2
ROTATE_270 = 3
FLIP_HORIZONTAL = 4
FLIP_VERTICAL = 5


def _rotate_clockwise(image: Sequence[Sequence[int]]) -> Image:
    return [list(column) for column in zip(*reversed(image))]


def flip_image(image: Sequence[Sequence[int]], rotation_type: int) -> Image:
    """Return ``image`` rotated or flipped.

    Types 1, 2 and 3 rotate clockwise by 90, 180 and 270 degrees; 4 mirrors
    each row left to right and 5 turns the image upside down.  Any other
    type is treated as 1.
    """
    if rotation_type not in (
        ROTATE_90,
        ROTATE_180,
        ROTATE_270,
        FLIP_HORIZONTAL,
        FLIP_VERTICAL,
    ):
        rotation_type = ROTATE_90

    if rotation_type == FLIP_HORIZONTAL:
        return [list(reversed(row)) for row in image]
    if rotation_type == FLIP_VERTICAL:
        return [list(row) for row in reversed(image)]

    result = [list(row) for row in image]
    for _ in range(rotation_type):
        result = _rotate_clockwise(result)
    return result


def _check_same_size(
    first: Sequence[Sequence[int]], second: Sequence[Sequence[int]]
) -> None:
    if len(first) != len(second) or any(
        len(a) != len(b) for a, b in zip(first, second)
    ):
        raise ValueError("images are not the same size")


def overlay_text(
    image: Sequence[Sequence[int]], mark: Sequence[Sequence[int]], factor: int
) -> Image:
    """Return ``image`` with ``factor`` added wherever ``mark`` is non-zero.

    Raised values are capped at the top gray level.
    """
    _check_same_size(image, mark)
    return [
        [
            min(value + factor, GRAY_LEVELS) if marked != 0 else value
            for value, marked in zip(row, mark_row)
        ]
        for row, mark_row in zip(image, mark)
    ]


def find_text(image: Sequence[Sequence[int]]) -> Image:
    """Mark interior pixels that exceed a neighbour by at least a tenth of themselves.

    Marked pixels are set to 200; every other pixel, and the border, is zero.
    """
    rows = len(image)
    cols = len(image[0]) if rows else 0
    out = [[0] * cols for _ in range(rows)]
    for i in range(1, rows - 1):
        for j in range(1, cols - 1):
            pixel = float(image[i][j])
            threshold = pixel * 0.1
            if any(
                pixel - image[i + a][j + b] >= threshold
                for a in (-1, 0, 1)
                for b in (-1, 0, 1)
            ):
                out[i][j] = SPOT
    return out


def histogram(image: Sequence[Sequence[int]]) -> list[int]:
    """Return how many pixels of ``image`` hold each gray level 0..255."""
    counts = [0] * (GRAY_LEVELS + 1)
    for row in image:
        for value in row:
            if not 0 <= value <= GRAY_LEVELS:
                raise ValueError(f"gray value {value} outside 0..{GRAY_LEVELS}")
            counts[value] += 1
    return counts


def histogram_image(
    counts: Sequence[int],
    length: int = HISTOGRAM_LENGTH,
    width: int = HISTOGRAM_WIDTH,
) -> Image:
    """Draw a picture of a 256-bin histogram into a new ``length`` x ``width`` image.

    An axis runs along row ``length - 5`` with ticks every 50 levels; each
    bin is a vertical bar rising from the axis, scaled down when the
    tallest bin would not fit.
    """
    if len(counts) != GRAY_LEVELS + 1:
        raise ValueError(f"histogram must have {GRAY_LEVELS + 1} bins")
    if width < LEFT + GRAY_LEVELS + 2:
        raise ValueError(f"width must be at least {LEFT + GRAY_LEVELS + 2}")
    if length <= 5 * UP:
        raise ValueError(f"length must be greater than {5 * UP}")

    picture = [[0] * width for _ in range(length)]
    axis = length - UP
    hline(picture, axis, LEFT, LEFT + GRAY_LEVELS + 1)
    for tick in range(50, 251, 50):
        vline(picture, LEFT + tick, axis + 2, axis)

    largest = max(counts)
    scale = largest // (length - 5 * UP) if largest > length - 2 * UP else 1

    for level, count in enumerate(counts):
        amount = count // scale
        if amount > 0:
            vline(picture, level + LEFT, axis, max(axis - amount, 0))
    return picture


def _check_row(image: Sequence[Sequence[int]], row: int) -> None:
    if not 0 <= row < len(image):
        raise ValueError(f"row {row} outside the image")


def _check_column(image: Sequence[Sequence[int]], row: int, column: int) -> None:
    if not 0 <= column < len(image[row]):
        raise ValueError(f"column {column} outside the image")


def vline(image: Image, ie: int, il: int, ll: int) -> None:
    """Set column ``ie`` from row ``il`` up to row ``ll`` (inclusive) to 200."""
    if il < ll:
        return
    _check_row(image, il)
    _check_row(image, ll)
    for row in range(il, ll - 1, -1):
        _check_column(image, row, ie)
        image[row][ie] = SPOT


def hline(image: Image, il: int, ie: int, le: int) -> None:
    """Set row ``il`` from column ``ie`` to column ``le`` (inclusive) to 200."""
    if le < ie:
        return
    _check_row(image, il)
    _check_column(image, il, ie)
    _check_column(image, il, le)
    image[il][ie : le + 1] = [SPOT] * (le - ie + 1)