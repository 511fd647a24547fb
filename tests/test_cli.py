import pytest

from grayimage.bmp import create_allocate_bmp_file, write_bmp_image
from grayimage.cli import main
from grayimage.tiff import TiffHeader, create_allocate_tiff_file, read_tiff_header
from grayimage.tiffio import read_tiff_image, write_tiff_image


def _make_tiff(path, image):
    header = TiffHeader(
        lsb=True,
        bits_per_pixel=8,
        image_length=len(image),
        image_width=len(image[0]),
        strip_offset=296,
    )
    create_allocate_tiff_file(path, header)
    write_tiff_image(path, image)


def _make_bmp(path, image):
    create_allocate_bmp_file(path, len(image), len(image[0]))
    write_bmp_image(path, image)


IMAGE = [[1, 2, 3, 4, 5], [10, 20, 30, 40, 50], [100, 110, 120, 130, 140]]


def test_copy_creates_output_with_same_pixels(tmp_path):
    source = tmp_path / "in.tif"
    target = tmp_path / "out.tif"
    _make_tiff(source, IMAGE)
    assert main(["copy", str(source), str(target)]) == 0
    assert read_tiff_image(target) == IMAGE


def test_copy_prints_top_left_corner(tmp_path, capsys):
    source = tmp_path / "in.tif"
    _make_tiff(source, IMAGE)
    main(["copy", str(source), str(tmp_path / "out.tif")])
    out = capsys.readouterr().out
    assert "   1   2   3   4   5" in out
    assert "Created" in out


def test_copy_into_existing_file_overwrites_pixels(tmp_path, capsys):
    source = tmp_path / "in.tif"
    target = tmp_path / "out.tif"
    _make_tiff(source, IMAGE)
    _make_tiff(target, [[0] * 5 for _ in range(3)])
    assert main(["copy", str(source), str(target)]) == 0
    assert "Created" not in capsys.readouterr().out
    assert read_tiff_image(target) == IMAGE


def test_copy_missing_input_fails(tmp_path, capsys):
    status = main(["copy", str(tmp_path / "nope.tif"), str(tmp_path / "o.tif")])
    assert status == 1
    assert "does not exist" in capsys.readouterr().err
    assert not (tmp_path / "o.tif").exists()


def test_copy_into_smaller_file_fails(tmp_path):
    source = tmp_path / "in.tif"
    target = tmp_path / "out.tif"
    _make_tiff(source, [[1, 2], [3, 4]])
    _make_tiff(target, [[0, 0, 0], [0, 0, 0], [0, 0, 0]])
    assert main(["copy", str(source), str(target)]) == 1


def test_bmp2tif_round_trip(tmp_path):
    source = tmp_path / "picture.bmp"
    target = tmp_path / "picture.tif"
    _make_bmp(source, IMAGE)
    assert main(["bmp2tif", str(source), str(target)]) == 0
    assert read_tiff_image(target) == IMAGE
    header = read_tiff_header(target)
    assert (header.image_length, header.image_width) == (3, 5)
    assert header.bits_per_pixel == 8
    assert header.lsb is True


def test_bmp2tif_requires_bmp_input_name(tmp_path, capsys):
    source = tmp_path / "picture.img"
    _make_bmp(source, IMAGE)
    assert main(["bmp2tif", str(source), str(tmp_path / "p.tif")]) == 1
    assert "must be a bmp file" in capsys.readouterr().err


def test_bmp2tif_requires_tif_output_name(tmp_path, capsys):
    source = tmp_path / "picture.bmp"
    _make_bmp(source, IMAGE)
    assert main(["bmp2tif", str(source), str(tmp_path / "p.png")]) == 1
    assert "must be a tiff file name" in capsys.readouterr().err
    assert not (tmp_path / "p.png").exists()


def test_bmp2tif_missing_input_fails(tmp_path):
    assert main(["bmp2tif", str(tmp_path / "x.bmp"), str(tmp_path / "x.tif")]) == 1


def test_missing_command_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_wrong_argument_count_is_usage_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["bmp2tif", str(tmp_path / "only.bmp")])
    assert excinfo.value.code == 2