import logging
import time

import cv2
import numpy as np

from ..config import DEFAULT_PATCH_SIZE, validate_patch_size
from ..errors import IndexOutOfRangeError
from ..utils.numba_dehaze import min_channel_kernel
from .grid import as_pixel_grid

logger = logging.getLogger(__name__)


def window_anchor(patch_size):
    """
    Anchor of the erosion kernel for a window of ``patch_size`` samples.

    Sampled offsets run from +floor(p/2) down to -(p - 1 - floor(p/2)), so the
    anchor sits p - 1 - floor(p/2) cells into the kernel. For odd sizes this is
    the usual centre; for even sizes the window extends one cell further in
    the positive direction.
    """
    anchor = patch_size - 1 - patch_size // 2
    if not 0 <= anchor < patch_size:
        raise IndexOutOfRangeError(
            f"Window anchor {anchor} outside kernel of size {patch_size}"
        )
    return anchor


def dark_channel(image, patch_size=DEFAULT_PATCH_SIZE):
    """
    Calculates the dark channel of an image.

    Each output pixel is the minimum of min(R, G, B) over the patch_size x
    patch_size window around it. Samples falling outside the image are
    skipped, so border pixels see a truncated window.

    Returns a uint8 array of shape (H, W).
    """
    img = as_pixel_grid(image)
    patch_size = validate_patch_size(patch_size)

    h, w = img.shape[:2]
    start_time = time.perf_counter()

    dark = min_channel_kernel(img)

    if patch_size > 1:
        anchor = window_anchor(patch_size)
        kernel = np.ones((patch_size, patch_size), dtype=np.uint8)
        # Constant 255 border never lowers a minimum, which is the same as
        # skipping out-of-bounds samples (the centre pixel is always in range)
        dark = cv2.erode(
            dark,
            kernel,
            anchor=(anchor, anchor),
            borderType=cv2.BORDER_CONSTANT,
            borderValue=255,
        )

    elapsed = (time.perf_counter() - start_time) * 1000
    logger.debug(
        f"Dark channel: Patch: {patch_size} | Size: {w}x{h} | Time: {elapsed:.2f}ms"
    )
    return dark
