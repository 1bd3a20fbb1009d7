"""Validation and normalisation of the pixel grids fed to the pipeline."""

import numpy as np

from ..errors import InvalidDimensionsError, InvalidParameterError
from ..utils.numba_dehaze import float_to_uint8_kernel


def as_pixel_grid(image) -> np.ndarray:
    """Return ``image`` as a C-contiguous uint8 array of shape (H, W, 3|4).

    Integer grids must already hold samples in [0, 255]; floating point grids
    are treated as normalised [0, 1] data and rounded to uint8. The input is
    never modified.
    """
    if image is None:
        raise InvalidDimensionsError("Image is None")

    img = np.asarray(image)
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise InvalidDimensionsError(
            f"Expected an HxWx3 or HxWx4 pixel grid, got shape {img.shape}"
        )
    check_dimensions(img.shape[:2])

    if img.dtype == np.uint8:
        return np.ascontiguousarray(img)

    if np.issubdtype(img.dtype, np.floating):
        if not np.all(np.isfinite(img)):
            raise InvalidParameterError("Pixel grid contains NaN or infinite samples")
        return float_to_uint8_kernel(np.ascontiguousarray(img, dtype=np.float64))

    if np.issubdtype(img.dtype, np.integer):
        if img.min() < 0 or img.max() > 255:
            raise InvalidParameterError(
                "Integer pixel samples must lie in [0, 255]"
            )
        return np.ascontiguousarray(img, dtype=np.uint8)

    raise InvalidParameterError(f"Unsupported pixel dtype: {img.dtype}")


def check_dimensions(shape):
    """Raise InvalidDimensionsError when a (H, W) shape holds no pixels."""
    h, w = shape[:2]
    if h == 0 or w == 0:
        raise InvalidDimensionsError(f"Image has no pixels: {w}x{h}")


def as_single_channel_map(values, name, shape=None) -> np.ndarray:
    """Validate a darkness or transmission map and return it as uint8.

    Integer maps must hold values in [0, 255]. Floating point maps are treated
    as normalised [0, 1] data and rounded to the nearest uint8 step, halves up.
    """
    if values is None:
        raise InvalidDimensionsError(f"{name} is None")

    arr = np.asarray(values)
    if arr.ndim != 2:
        raise InvalidDimensionsError(
            f"{name} must be a 2D array, got shape {arr.shape}"
        )
    check_dimensions(arr.shape)
    if shape is not None and arr.shape != tuple(shape[:2]):
        raise InvalidDimensionsError(
            f"{name} shape {arr.shape} does not match image shape {tuple(shape[:2])}"
        )

    if np.issubdtype(arr.dtype, np.floating):
        if not np.all(np.isfinite(arr)):
            raise InvalidParameterError(f"{name} contains NaN or infinite values")
        if arr.min() < 0.0 or arr.max() > 1.0:
            raise InvalidParameterError(
                f"Normalised {name} values must lie in [0, 1]"
            )
        arr = np.floor(arr.astype(np.float64) * 255.0 + 0.5).astype(np.uint8)
    elif np.issubdtype(arr.dtype, np.integer) or arr.dtype == np.bool_:
        if arr.dtype != np.uint8 and (arr.min() < 0 or arr.max() > 255):
            raise InvalidParameterError(f"{name} values must lie in [0, 255]")
        arr = arr.astype(np.uint8)
    else:
        raise InvalidParameterError(f"Unsupported {name} dtype: {arr.dtype}")
    return np.ascontiguousarray(arr)
