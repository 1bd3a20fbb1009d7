import pytest
import numpy as np

import pydehaze  # noqa: F401
from pydehaze.errors import InvalidDimensionsError, InvalidParameterError
from pydehaze.processing.dark_channel import dark_channel, window_anchor


def reference_dark_channel(img, patch_size):
    """Direct windowed minimum that skips out-of-bounds samples."""
    h, w = img.shape[:2]
    half = patch_size // 2
    mins = img[:, :, :3].min(axis=2)
    out = np.empty((h, w), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            m = 255
            for dy in range(-(patch_size - 1 - half), half + 1):
                for dx in range(-(patch_size - 1 - half), half + 1):
                    yy, xx = y + dy, x + dx
                    if 0 <= yy < h and 0 <= xx < w:
                        m = min(m, mins[yy, xx])
            out[y, x] = m
    return out


@pytest.fixture
def random_image():
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(7, 9, 3), dtype=np.uint8)


def test_patch_size_one_is_min_channel(random_image):
    dark = dark_channel(random_image, patch_size=1)
    np.testing.assert_array_equal(dark, random_image.min(axis=2))


@pytest.mark.parametrize("patch_size", [2, 3, 4, 5, 6, 15])
def test_matches_truncated_window(random_image, patch_size):
    dark = dark_channel(random_image, patch_size=patch_size)
    expected = reference_dark_channel(random_image, patch_size)
    np.testing.assert_array_equal(dark, expected)


def test_even_window_extends_forward():
    """For patch_size=2 the window covers offsets 0 and +1 only."""
    img = np.full((1, 3, 3), 200, dtype=np.uint8)
    img[0, 0] = 10
    dark = dark_channel(img, patch_size=2)
    # x=0 sees x=0,1; x=1 sees x=1,2; x=2 sees x=2 only
    np.testing.assert_array_equal(dark, [[10, 200, 200]])


def test_uniform_image():
    img = np.full((6, 5, 3), 77, dtype=np.uint8)
    dark = dark_channel(img)
    assert dark.shape == (6, 5)
    assert dark.dtype == np.uint8
    assert np.all(dark == 77)


def test_alpha_is_ignored():
    img = np.full((4, 4, 4), 120, dtype=np.uint8)
    img[:, :, 3] = 0
    assert np.all(dark_channel(img, 3) == 120)


def test_float_input_is_normalised():
    img = np.full((3, 3, 3), 0.5, dtype=np.float32)
    assert np.all(dark_channel(img, 1) == 128)


def test_input_not_mutated(random_image):
    before = random_image.copy()
    dark_channel(random_image, 5)
    np.testing.assert_array_equal(random_image, before)


def test_single_pixel():
    img = np.array([[[30, 20, 40]]], dtype=np.uint8)
    assert dark_channel(img, 5)[0, 0] == 20


@pytest.mark.parametrize(
    "patch_size,anchor", [(1, 0), (2, 0), (3, 1), (4, 1), (5, 2), (6, 2)]
)
def test_window_anchor(patch_size, anchor):
    assert window_anchor(patch_size) == anchor


def test_zero_size_image():
    with pytest.raises(InvalidDimensionsError):
        dark_channel(np.zeros((0, 5, 3), dtype=np.uint8))


def test_wrong_channel_count():
    with pytest.raises(InvalidDimensionsError):
        dark_channel(np.zeros((4, 4, 2), dtype=np.uint8))


@pytest.mark.parametrize("patch_size", [0, -3, 2.5, True])
def test_invalid_patch_size(random_image, patch_size):
    with pytest.raises(InvalidParameterError):
        dark_channel(random_image, patch_size)
