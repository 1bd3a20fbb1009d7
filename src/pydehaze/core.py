import logging
import time
from typing import NamedTuple

import numpy as np

from .config import DehazeParams
from .processing.atmosphere import estimate_atmospheric_light
from .processing.dark_channel import dark_channel
from .processing.grid import as_pixel_grid
from .processing.radiance import recover_radiance
from .processing.transmission import transmission_map

# Configure logger for this module
logger = logging.getLogger(__name__)


class DehazeResult(NamedTuple):
    radiance: np.ndarray
    transmission: np.ndarray
    atmospheric_light: tuple[int, int, int]
    dark_channel: np.ndarray


def dehaze_image(image, params: DehazeParams | None = None) -> DehazeResult:
    """
    Removes haze from a single image using the Dark Channel Prior.

    Pipeline: dark channel -> atmospheric light and transmission map (both
    from the dark channel) -> radiance recovery. Every stage returns a new
    array; the input grid is left untouched.

    Raises InvalidDimensionsError / InvalidParameterError on malformed input.
    """
    params = params or DehazeParams()
    img = as_pixel_grid(image)

    h, w = img.shape[:2]
    size_str = f" | Size: {w}x{h}"
    start_time = time.perf_counter()

    dark = dark_channel(img, params.patch_size)
    atmospheric_light = estimate_atmospheric_light(dark, img, params.top_fraction)
    logger.debug(f"Dehaze: Atmospheric light: {atmospheric_light}")
    t_map = transmission_map(dark, params.omega)
    radiance = recover_radiance(img, atmospheric_light, t_map, params.t0)

    elapsed = (time.perf_counter() - start_time) * 1000
    logger.debug(
        f"Dehaze: Patch: {params.patch_size} | Omega: {params.omega:.2f}"
        f"{size_str} | Time: {elapsed:.2f}ms"
    )

    return DehazeResult(radiance, t_map, atmospheric_light, dark)
