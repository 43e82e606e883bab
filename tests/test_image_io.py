import numpy as np
import pytest
from PIL import Image

from palettize.errors import ImageReadError, ImageWriteError, UnsupportedImageError
from palettize.image_io import load_image_rgba, output_format_for, save_image_rgba

from conftest import BLACK, GRAY, WHITE, rgba_image


def test_png_round_trip_keeps_exact_rgba(tmp_path) -> None:
    img = rgba_image([[BLACK, (40, 50, 60, 0)], [GRAY, (1, 2, 3, 128)]])
    path = save_image_rgba(tmp_path / "out.png", img)
    np.testing.assert_array_equal(load_image_rgba(path), img)


def test_rgb_input_becomes_opaque_rgba(tmp_path) -> None:
    path = tmp_path / "rgb.png"
    Image.new("RGB", (3, 2), (10, 20, 30)).save(path)
    arr = load_image_rgba(path)
    assert arr.shape == (2, 3, 4)
    assert arr.dtype == np.uint8
    assert np.all(arr[..., 3] == 255)


def test_missing_file_is_a_read_error(tmp_path) -> None:
    with pytest.raises(ImageReadError):
        load_image_rgba(tmp_path / "nope.png")


def test_garbage_file_is_unsupported(tmp_path) -> None:
    path = tmp_path / "notes.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(UnsupportedImageError, match="unsupported file type"):
        load_image_rgba(path)


def test_unknown_output_suffix_writes_nothing(tmp_path) -> None:
    dst = tmp_path / "out.unknownext"
    with pytest.raises(UnsupportedImageError):
        save_image_rgba(dst, rgba_image([[WHITE]]))
    assert not dst.exists()


def test_output_format_follows_suffix(tmp_path) -> None:
    assert output_format_for(tmp_path / "a.PNG") == "PNG"
    assert output_format_for(tmp_path / "a.jpg") == "JPEG"


def test_jpeg_output_drops_alpha(tmp_path) -> None:
    path = save_image_rgba(tmp_path / "out.jpg", rgba_image([[WHITE, WHITE]]))
    with Image.open(path) as im:
        assert im.format == "JPEG"
        assert im.mode == "RGB"


def test_unwritable_destination_is_a_write_error(tmp_path) -> None:
    with pytest.raises(ImageWriteError):
        save_image_rgba(tmp_path / "missing_dir" / "out.png", rgba_image([[WHITE]]))


def test_sixteen_bit_grey_keeps_distinct_levels(tmp_path) -> None:
    path = tmp_path / "grey16.png"
    Image.fromarray(np.array([[1000, 30000, 60000]], dtype=np.uint16)).save(path)
    arr = load_image_rgba(path)
    assert arr.shape == (1, 3, 4)
    assert arr[0, :, 0].tolist() == [3, 117, 234]
    assert np.array_equal(arr[..., 0], arr[..., 2])
    assert np.all(arr[..., 3] == 255)
