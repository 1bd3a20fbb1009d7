import logging
import time

import numpy as np

from ..config import DEFAULT_T0, validate_t0
from ..errors import InvalidParameterError
from ..utils.numba_dehaze import dehaze_recovery_kernel
from .grid import as_pixel_grid, as_single_channel_map

logger = logging.getLogger(__name__)


def _atmospheric_array(atmospheric_light):
    try:
        a = np.asarray(atmospheric_light, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            f"Atmospheric light must be an (r, g, b) triple: {e}"
        ) from e
    if a.shape != (3,):
        raise InvalidParameterError(
            f"Atmospheric light must be an (r, g, b) triple, got {atmospheric_light!r}"
        )
    if not np.all(np.isfinite(a)) or a.min() < 0 or a.max() > 255:
        raise InvalidParameterError(
            f"Atmospheric light channels must lie in [0, 255], got {atmospheric_light!r}"
        )
    return a


def recover_radiance(image, atmospheric_light, transmission, t0=DEFAULT_T0):
    """
    Recovers the scene radiance by inverting I = J * t + A * (1 - t).

    J(x) = (I(x) - A) / max(t(x), t0) + A, evaluated on [0, 1] normalised
    data, clamped and rounded back to uint8. Any alpha channel of the source
    is dropped. Returns a uint8 array of shape (H, W, 3).
    """
    img = as_pixel_grid(image)
    t_map = as_single_channel_map(transmission, "Transmission map", img.shape)
    atmospheric = _atmospheric_array(atmospheric_light)
    t0 = validate_t0(t0)

    h, w = img.shape[:2]
    start_time = time.perf_counter()

    result = dehaze_recovery_kernel(img, t_map, atmospheric, t0)

    elapsed = (time.perf_counter() - start_time) * 1000
    logger.debug(f"Recover radiance: t0: {t0:.3f} | Size: {w}x{h} | Time: {elapsed:.2f}ms")
    return result
