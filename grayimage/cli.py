"""Command line tools for copying TIFF images and converting BMP to TIFF."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Optional

from .bmp import read_bmp_image
from .tiff import (
    DATA_OFFSET,
    TiffHeader,
    create_allocate_tiff_file,
    does_not_exist,
)
from .tiffio import create_file_if_needed, read_tiff_image, write_tiff_image

CORNER_SIZE = 15


class _CommandError(Exception):
    """A problem that ends a command with a message and a failure status."""


def _corner(image: Sequence[Sequence[int]], size: int = CORNER_SIZE) -> str:
    return "\n".join(
        "".join(f"{value:4d}" for value in row[:size]) for row in image[:size]
    )


def _require_input(path: str) -> None:
    if does_not_exist(path):
        raise _CommandError(f"input file {path} does not exist")


def _copy(args: argparse.Namespace) -> None:
    _require_input(args.input)
    image = read_tiff_image(args.input)
    print(_corner(image))
    if create_file_if_needed(args.input, args.output):
        print(f"Created {args.output}")
    write_tiff_image(args.output, image)


def _bmp2tif(args: argparse.Namespace) -> None:
    _require_input(args.input)
    if ".bmp" not in args.input:
        raise _CommandError(f"{args.input} must be a bmp file")
    if ".tif" not in args.output:
        raise _CommandError(f"{args.output} must be a tiff file name")
    image = read_bmp_image(args.input)
    length = len(image)
    width = len(image[0]) if image else 0
    header = TiffHeader(
        lsb=True,
        bits_per_pixel=8,
        image_length=length,
        image_width=width,
        strip_offset=DATA_OFFSET,
    )
    create_allocate_tiff_file(args.output, header)
    write_tiff_image(args.output, image)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grayimage", description="Grayscale image file tools."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    copy = commands.add_parser(
        "copy",
        help="copy a TIFF image into another TIFF file, creating it if needed",
    )
    copy.add_argument("input")
    copy.add_argument("output")
    copy.set_defaults(handler=_copy)

    convert = commands.add_parser(
        "bmp2tif", help="create a TIFF file holding the image of a BMP file"
    )
    convert.add_argument("input", help="BMP file to read")
    convert.add_argument("output", help="TIFF file to create")
    convert.set_defaults(handler=_bmp2tif)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line tool and return its exit status."""
    args = _build_parser().parse_args(argv)
    try:
        args.handler(args)
    except (_CommandError, OSError, ValueError) as exc:
        print(f"ERROR {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())