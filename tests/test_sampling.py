import numpy as np
import pytest
from conftest import split_image
from PIL import Image

from asciiramp.errors import ResampleError
from asciiramp.sampling import RESAMPLE_FILTER, filter_margin, mirror_tile, resample_grayscale, to_rgb_array


def test_output_shape():
    img = Image.new("RGB", (64, 48), (10, 20, 30))
    grid = resample_grayscale(img, 7, 5)
    assert grid.shape == (5, 7)
    assert grid.dtype == np.uint8


def test_uniform_image_has_no_edge_seams():
    img = Image.new("RGB", (37, 23), (200, 200, 200))
    grid = resample_grayscale(img, 9, 4)
    np.testing.assert_array_equal(grid, 200)


def test_upscaling_uniform_image():
    img = Image.new("RGB", (3, 2), (90, 90, 90))
    grid = resample_grayscale(img, 12, 8)
    np.testing.assert_array_equal(grid, 90)


def test_grayscale_is_rounded_channel_mean():
    # (255 + 0 + 1) / 3 = 85.33, (255 + 1 + 1) / 3 = 85.67
    assert resample_grayscale(Image.new("RGB", (4, 4), (255, 0, 1)), 2, 2)[0, 0] == 85
    assert resample_grayscale(Image.new("RGB", (4, 4), (255, 1, 1)), 2, 2)[0, 0] == 86


def test_accepts_non_rgb_modes():
    img = Image.new("L", (10, 10), 128)
    np.testing.assert_array_equal(resample_grayscale(img, 2, 2), 128)


def test_split_image_keeps_halves_apart():
    grid = resample_grayscale(split_image(), 2, 1)
    assert grid[0, 0] < 64
    assert grid[0, 1] > 192


def test_identity_size_preserves_pixels():
    img = split_image(width=8, height=2)
    grid = resample_grayscale(img, 8, 2)
    np.testing.assert_array_equal(grid, np.asarray(img))


def test_is_deterministic():
    rng = np.random.default_rng(7)
    img = Image.fromarray(rng.integers(0, 256, (30, 50, 3), dtype=np.uint8))
    np.testing.assert_array_equal(resample_grayscale(img, 11, 6), resample_grayscale(img, 11, 6))


@pytest.mark.parametrize("size", [(0, 5), (5, 0)])
def test_empty_target_raises(size):
    img = Image.new("RGB", (10, 10))
    with pytest.raises(ResampleError):
        resample_grayscale(img, *size)


def test_backend_failure_becomes_resample_error(monkeypatch):
    def broken_resize(self, *args, **kwargs):
        raise ValueError("boom")

    monkeypatch.setattr(Image.Image, "resize", broken_resize)
    with pytest.raises(ResampleError, match="boom"):
        resample_grayscale(Image.new("RGB", (10, 10)), 2, 2)


def test_filter_margin_grows_with_downscale():
    assert filter_margin(10, 10) == 3
    assert filter_margin(10, 20) == 3
    assert filter_margin(100, 10) == 21


def test_mirror_tile_reflects_edges():
    arr = np.arange(3, dtype=np.uint8).reshape(1, 3, 1).repeat(3, axis=2)
    tiled = mirror_tile(arr, 2, 0)
    assert tiled[0, :, 0].tolist() == [1, 0, 0, 1, 2, 2, 1]


def test_mirror_tile_wider_than_image_keeps_tiling():
    arr = np.array([[[0], [9]]], dtype=np.uint8)
    tiled = mirror_tile(arr, 4, 0)
    assert tiled[0, :, 0].tolist() == [0, 9, 9, 0, 0, 9, 9, 0, 0, 9]


def _gradient(width=40):
    return Image.fromarray(np.linspace(0, 255, width).round().astype(np.uint8).reshape(1, width))


def test_edges_sample_mirrored_pixels():
    img = _gradient()
    row = np.asarray(img)
    # Flipped copies on both sides, wider than the filter reaches
    tiled = Image.fromarray(np.hstack([row[:, ::-1], row, row[:, ::-1]]))
    expected = np.asarray(tiled.resize((5, 1), RESAMPLE_FILTER, box=(40, 0, 80, 1)))
    np.testing.assert_array_equal(resample_grayscale(img, 5, 1), expected)


def test_mirrored_edges_differ_from_clamped_resize():
    img = _gradient()
    mirrored = resample_grayscale(img, 5, 1)[0]
    clamped = np.asarray(img.resize((5, 1), RESAMPLE_FILTER))[0]
    assert mirrored[0] < clamped[0]
    assert mirrored[-1] > clamped[-1]
    assert mirrored[2] == clamped[2]


@pytest.mark.parametrize(
    ("img", "expected"),
    [
        (Image.fromarray(np.full((4, 4), 32896, dtype=np.uint16)), 128),
        (Image.new("I", (4, 4), 65535), 255),
        (Image.new("I", (4, 4), 4032), 16),
        (Image.fromarray(np.full((4, 4), 0.5, dtype=np.float32)), 128),
    ],
)
def test_high_bit_depth_scaled_to_8_bits(img, expected):
    arr = to_rgb_array(img)
    assert arr.shape == (4, 4, 3)
    assert arr.dtype == np.uint8
    np.testing.assert_array_equal(arr, expected)
    np.testing.assert_array_equal(resample_grayscale(img, 2, 2), expected)
