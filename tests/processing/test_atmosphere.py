import pytest
import numpy as np

import pydehaze  # noqa: F401
from pydehaze.errors import InvalidDimensionsError, InvalidParameterError
from pydehaze.processing.atmosphere import (
    WHITE,
    candidate_count,
    estimate_atmospheric_light,
)


def test_uniform_image():
    img = np.full((10, 10, 3), 90, dtype=np.uint8)
    dark = np.full((10, 10), 90, dtype=np.uint8)
    assert estimate_atmospheric_light(dark, img, 0.1) == (90, 90, 90)


def test_brightest_candidate_wins():
    img = np.array(
        [[[10, 20, 30], [90, 80, 70], [255, 255, 255], [200, 200, 200]]],
        dtype=np.uint8,
    )
    dark = np.array([[200, 100, 50, 10]], dtype=np.uint8)
    # Only the two haziest pixels are candidates; the white pixel is not
    assert estimate_atmospheric_light(dark, img, 0.5) == (90, 80, 70)


def test_first_candidate_wins_ties():
    img = np.array(
        [[[100, 0, 0], [0, 100, 0], [0, 0, 100], [0, 0, 0]]], dtype=np.uint8
    )
    dark = np.full((1, 4), 50, dtype=np.uint8)
    assert estimate_atmospheric_light(dark, img, 0.5) == (100, 0, 0)


def test_empty_candidate_set_returns_white():
    img = np.full((10, 10, 3), 40, dtype=np.uint8)
    dark = np.full((10, 10), 40, dtype=np.uint8)
    # 100 * 0.002 rounds to zero candidates
    assert estimate_atmospheric_light(dark, img, 0.002) == WHITE


def test_black_candidates_return_white():
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    dark = np.zeros((4, 4), dtype=np.uint8)
    assert estimate_atmospheric_light(dark, img, 1.0) == WHITE


def test_returns_python_ints():
    img = np.full((2, 2, 4), 60, dtype=np.uint8)
    dark = np.full((2, 2), 60, dtype=np.uint8)
    light = estimate_atmospheric_light(dark, img, 1.0)
    assert len(light) == 3
    assert all(type(c) is int for c in light)


@pytest.mark.parametrize(
    "num_pixels,fraction,expected",
    [(16, 0.25, 4), (4, 0.125, 1), (100, 0.002, 0), (1000, 0.002, 2), (7, 1.0, 7)],
)
def test_candidate_count(num_pixels, fraction, expected):
    assert candidate_count(num_pixels, fraction) == expected


def test_shape_mismatch():
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    dark = np.zeros((4, 5), dtype=np.uint8)
    with pytest.raises(InvalidDimensionsError):
        estimate_atmospheric_light(dark, img)


def test_zero_size():
    with pytest.raises(InvalidDimensionsError):
        estimate_atmospheric_light(
            np.zeros((0, 0), dtype=np.uint8), np.zeros((0, 0, 3), dtype=np.uint8)
        )


@pytest.mark.parametrize("fraction", [0.0, -0.5, 1.5])
def test_invalid_fraction(fraction):
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    dark = np.zeros((4, 4), dtype=np.uint8)
    with pytest.raises(InvalidParameterError):
        estimate_atmospheric_light(dark, img, fraction)
