import pytest

from grayimage.bmp import (
    BMP_SIGNATURE,
    calculate_pad,
    create_allocate_bmp_file,
    create_bmp_file_if_needed,
    flip_image_array,
    read_bm_header,
    read_bmp_file_header,
    read_bmp_image,
    read_color_table,
    write_bmp_image,
)


def _sample(height, width):
    return [[(r * 31 + c * 7) % 256 for c in range(width)] for r in range(height)]


@pytest.mark.parametrize("width", range(0, 12))
def test_calculate_pad_aligns_to_four(width):
    pad = calculate_pad(width)
    assert 0 <= pad < 4
    assert (width + pad) % 4 == 0


def test_calculate_pad_zero_for_multiple_of_four():
    assert calculate_pad(8) == 0


def test_flip_image_array_reverses_rows():
    image = [[1, 2], [3, 4], [5, 6]]
    assert flip_image_array(image) == [[5, 6], [3, 4], [1, 2]]
    assert flip_image_array(flip_image_array(image)) == image


def test_create_allocate_writes_consistent_headers(tmp_path):
    path = tmp_path / "blank.bmp"
    file_header, bmheader = create_allocate_bmp_file(path, 3, 5)
    data = path.read_bytes()
    assert data[:2] == b"BM"
    assert file_header.filetype == BMP_SIGNATURE
    assert file_header.filesize == len(data)
    assert read_bmp_file_header(path) == file_header
    assert read_bm_header(path) == bmheader
    assert bmheader.width == 5 and bmheader.height == 3
    assert bmheader.sizeofbitmap == 3 * (5 + calculate_pad(5))


def test_blank_file_reads_as_zero_image(tmp_path):
    path = tmp_path / "blank.bmp"
    create_allocate_bmp_file(path, 2, 3)
    assert read_bmp_image(path) == [[0, 0, 0], [0, 0, 0]]


@pytest.mark.parametrize("height", [4, -4])
def test_write_read_round_trip(tmp_path, height):
    path = tmp_path / "img.bmp"
    create_allocate_bmp_file(path, height, 6)
    image = _sample(4, 6)
    write_bmp_image(path, image)
    assert read_bmp_image(path) == image


def test_bottom_up_file_stores_last_row_first(tmp_path):
    path = tmp_path / "img.bmp"
    file_header, _ = create_allocate_bmp_file(path, 3, 4)
    image = _sample(3, 4)
    write_bmp_image(path, image)
    data = path.read_bytes()
    offset = file_header.bitmapoffset
    assert list(data[offset : offset + 4]) == image[-1]


def test_write_sets_gray_color_table(tmp_path):
    path = tmp_path / "img.bmp"
    create_allocate_bmp_file(path, 1, 1)
    write_bmp_image(path, [[9]])
    table = read_color_table(path, 256)
    assert table == [(level, level, level) for level in range(256)]


def test_read_rejects_non_eight_bit(tmp_path):
    path = tmp_path / "img.bmp"
    create_allocate_bmp_file(path, 2, 2)
    data = bytearray(path.read_bytes())
    data[28] = 24
    path.write_bytes(bytes(data))
    with pytest.raises(ValueError):
        read_bmp_image(path)
    with pytest.raises(ValueError):
        write_bmp_image(path, [[0, 0], [0, 0]])


def test_read_truncated_file_raises(tmp_path):
    path = tmp_path / "short.bmp"
    path.write_bytes(b"BM\x00\x00")
    with pytest.raises(ValueError):
        read_bmp_file_header(path)


def test_write_rejects_too_small_image(tmp_path):
    path = tmp_path / "img.bmp"
    create_allocate_bmp_file(path, 3, 3)
    with pytest.raises(ValueError):
        write_bmp_image(path, [[1, 2, 3]])


def test_create_bmp_file_if_needed(tmp_path):
    source = tmp_path / "in.bmp"
    target = tmp_path / "out.bmp"
    create_allocate_bmp_file(source, 5, 7)
    assert create_bmp_file_if_needed(source, target) is True
    header = read_bm_header(target)
    assert (header.height, header.width) == (5, 7)
    assert create_bmp_file_if_needed(source, target) is False