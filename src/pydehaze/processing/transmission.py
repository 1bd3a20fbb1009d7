import numpy as np

from ..config import DEFAULT_OMEGA, validate_omega
from ..utils.numba_dehaze import transmission_kernel
from .grid import as_single_channel_map


def transmission_map(darkness, omega=DEFAULT_OMEGA):
    """t = 255 - floor(d * omega), as a new uint8 map."""
    dark = as_single_channel_map(darkness, "Darkness map")
    omega = validate_omega(omega)
    return transmission_kernel(dark, omega)


def transmission_to_rgb(transmission):
    """Broadcast a transmission map to three identical channels for display."""
    t_map = as_single_channel_map(transmission, "Transmission map")
    return np.repeat(t_map[:, :, np.newaxis], 3, axis=2)
