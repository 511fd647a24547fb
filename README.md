# grayimage

A small, dependency-free toolkit for gray-scale images stored as
uncompressed single-strip TIFF files (8 or 4 bits per pixel) or 8-bit BMP
files. Images are handled as plain Python lists of rows of integers.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## TIFF files

```python
from grayimage.tiff import read_tiff_header, create_allocate_tiff_file
from grayimage.tiffio import read_tiff_image, write_tiff_image

header = read_tiff_header("scene.tif")         # TiffHeader
image = read_tiff_image("scene.tif")           # list of rows

create_allocate_tiff_file("copy.tif", header)  # blank file of the same shape
write_tiff_image("copy.tif", image)
```

- `grayimage.tiff.TiffHeader` holds `lsb`, `bits_per_pixel`,
  `image_length`, `image_width` and `strip_offset`.
- `parse_tiff_header(data)` reads these from the bytes of a file in either
  byte order, following every image file directory; it raises `ValueError`
  for truncated data, looping directory chains or missing tags.
- `build_tiff_file(header)` returns the bytes of a little-endian file with
  18 directory entries, the pixel data at offset 296 and every pixel zero;
  `create_allocate_tiff_file(path, header)` writes them to disk. Only 4 and
  8 bits per pixel are accepted.
- `round_off_image_size(header, rows, cols)` returns how many tiles of
  `rows` x `cols` cover the image, and `does_not_exist(path)` tells whether
  a file cannot be opened.
- `grayimage.tiffio` packs and unpacks pixel lines (`decode_line`,
  `encode_line`; with 4 bits per pixel the high nibble is the left pixel),
  allocates zeroed images (`allocate_image_array`) and, with
  `create_file_if_needed(in_path, out_path)`, creates a blank output file
  shaped like an input file only when it is missing (returning `True` if it
  did).
- `grayimage.tiffinfo.iter_tags(data)` yields a `TagEntry` for every
  directory entry, and `describe_tiff(path)` returns a text report of the
  directories, their tag numbers and the parsed header.

## BMP files

```python
from grayimage.bmp import read_bmp_image, create_bmp_file_if_needed, write_bmp_image

image = read_bmp_image("scene.bmp")            # top row first
create_bmp_file_if_needed("scene.bmp", "out.bmp")
write_bmp_image("out.bmp", image)
```

Only 8 bits per pixel are read or written. `read_bmp_image` maps every
pixel through the blue channel of the colour table and turns bottom-up
files the right way up. `create_allocate_bmp_file(path, height, width)`
writes a blank file (a negative height makes a top-down file) and returns
its `BmpFileHeader` and `BitmapHeader`. `write_bmp_image` writes a gray-ramp
colour table and the pixel rows into an existing file, padding each row to a
multiple of four bytes (`calculate_pad`). The headers and colour table can
be read on their own with `read_bmp_file_header`, `read_bm_header` and
`read_color_table`; `flip_image_array` returns an image upside down.

## Transforms

`grayimage.transforms` operates on in-memory images:

- `flip_image(image, rotation_type)`: types 1, 2 and 3 rotate by 90, 180
  and 270 degrees clockwise, 4 mirrors each row left to right, 5 turns the
  image upside down; any other value is treated as 1.
- `overlay_text(image, mark, factor)`: adds `factor` wherever the mark image
  is non-zero, capped at 255; the two images must be the same size.
- `find_text(image)`: sets to 200 every interior pixel that exceeds one of
  its neighbours by at least a tenth of its own value; everything else is 0.
- `histogram(image)`: counts the pixels at each gray level 0..255.
- `histogram_image(counts, length=300, width=300)`: draws the counts as a
  bar chart with an axis and tick marks, scaling bars down to fit.
- `vline` and `hline` draw lines of value 200 into an image in place.

## Text dumps

`grayimage.dump.dump_numbers(image)` returns pixel values as a numbered
table, `dump_binary(image)` shows zero pixels as spaces and others as `*`,
and `hex_dump(data)` lists raw bytes in hexadecimal pairs, each led by its
offset.

## Blocks-world search

`grayimage.blocks.solve(start, goal, max_depth=99)` searches depth first
over states in which entry `i` names what block `i` rests on (another
block's index or `TABLE`). It returns the goal `Node`, whose `path()` gives
the states from the start, or `None` if the search space is exhausted.
`is_uncovered` and `move_block` are the building blocks of the search.

## Command line

```
grayimage copy input.tif output.tif
grayimage bmp2tif input.bmp output.tif
```

- `copy` prints the top-left 15 x 15 pixel values of the input, creates the
  output file if it is missing and writes the input image into it.
- `bmp2tif` creates an 8-bit TIFF file holding the image of a BMP file; the
  input name must contain `.bmp` and the output name `.tif`.

Errors are printed to standard error as `ERROR ...` and the command exits
with status 1.

## What it does not do

There is no edge detection, half-toning or histogram equalisation. The
dump, flip, overlay, histogram and search functions are available only from
Python; the command line offers just `copy` and `bmp2tif`. TIFF files must
be uncompressed and hold their pixels in one strip.