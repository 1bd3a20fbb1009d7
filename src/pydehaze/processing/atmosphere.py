import logging
import math

import numpy as np

from ..config import DEFAULT_TOP_FRACTION, validate_top_fraction
from .grid import as_pixel_grid, as_single_channel_map

logger = logging.getLogger(__name__)

# Returned when no candidate pixel is brighter than black
WHITE = (255, 255, 255)


def candidate_count(num_pixels, top_fraction):
    """Number of haze-opaque candidates: round(N * top_fraction), halves up."""
    return int(math.floor(num_pixels * top_fraction + 0.5))


def estimate_atmospheric_light(darkness, image, top_fraction=DEFAULT_TOP_FRACTION):
    """Estimate the atmospheric light from the dark channel.

    The pixels with the highest dark channel values are the most haze-opaque.
    Among the top ``top_fraction`` of them the brightest one, by max(R, G, B),
    is taken as the colour of the ambient light. Ties in the darkness ranking
    keep image order and the first pixel reaching the highest brightness wins.

    When the candidate set is empty (the fraction rounds to zero pixels) or
    every candidate is pure black, ``WHITE`` is returned.

    Returns an (r, g, b) tuple of ints.
    """
    img = as_pixel_grid(image)
    dark = as_single_channel_map(darkness, "Darkness map", img.shape)
    top_fraction = validate_top_fraction(top_fraction)

    num_candidates = candidate_count(dark.size, top_fraction)
    if num_candidates == 0:
        logger.debug(
            f"Atmospheric light: no candidates for {dark.size} pixels at "
            f"fraction {top_fraction}, using {WHITE}"
        )
        return WHITE

    # Stable descending order: negate in a wider type so 0 and 255 don't wrap
    order = np.argsort(-dark.ravel().astype(np.int16), kind="stable")
    candidates = order[:num_candidates]

    rgb = img.reshape(-1, img.shape[2])[candidates, :3]
    intensity = rgb.max(axis=1)

    # Running maximum seeded at 0: a candidate must be strictly brighter
    best = int(np.argmax(intensity))
    if intensity[best] <= 0:
        logger.debug("Atmospheric light: all candidates are black, using white")
        return WHITE

    r, g, b = (int(v) for v in rgb[best])
    return r, g, b
