import numpy as np
from numba import njit, prange

# Absorbs float error in d * omega (e.g. 90 * 0.7 == 62.99999999999999)
FLOOR_EPSILON = 1e-9


@njit(fastmath=True, cache=True, parallel=True)
def min_channel_kernel(img):
    """
    Per-pixel min(R, G, B) of a uint8 image. Any alpha channel is ignored.
    """
    rows, cols, _ = img.shape
    dark = np.empty((rows, cols), dtype=np.uint8)

    for r in prange(rows):
        for c in range(cols):
            m = img[r, c, 0]
            if img[r, c, 1] < m:
                m = img[r, c, 1]
            if img[r, c, 2] < m:
                m = img[r, c, 2]
            dark[r, c] = m

    return dark


@njit(cache=True, parallel=True)
def transmission_kernel(dark, omega):
    """
    t = 255 - floor(d * omega) for every darkness value d.
    """
    rows, cols = dark.shape
    out = np.empty((rows, cols), dtype=np.uint8)

    for r in prange(rows):
        for c in range(cols):
            # d * omega is non-negative, so truncation is floor
            out[r, c] = 255 - np.int64(dark[r, c] * omega + FLOOR_EPSILON)

    return out


@njit(cache=True, parallel=True)
def dehaze_recovery_kernel(img, transmission, atmospheric_light, t0):
    """
    Radiance recovery on uint8 data: J(x) = (I(x) - A) / max(t(x), t0) + A

    I, A and t are normalised to [0, 1] before inversion; J is clamped and
    rounded back to uint8. Only the first three channels are reconstructed.
    """
    rows, cols, _ = img.shape
    out = np.empty((rows, cols, 3), dtype=np.uint8)
    inv_255 = 1.0 / 255.0

    a_r = atmospheric_light[0] * inv_255
    a_g = atmospheric_light[1] * inv_255
    a_b = atmospheric_light[2] * inv_255

    for r in prange(rows):
        for c in range(cols):
            t = max(transmission[r, c] * inv_255, t0)

            r_val = (img[r, c, 0] * inv_255 - a_r) / t + a_r
            g_val = (img[r, c, 1] * inv_255 - a_g) / t + a_g
            b_val = (img[r, c, 2] * inv_255 - a_b) / t + a_b

            r_val = max(0.0, min(1.0, r_val))
            g_val = max(0.0, min(1.0, g_val))
            b_val = max(0.0, min(1.0, b_val))

            out[r, c, 0] = np.uint8(r_val * 255.0 + 0.5)
            out[r, c, 1] = np.uint8(g_val * 255.0 + 0.5)
            out[r, c, 2] = np.uint8(b_val * 255.0 + 0.5)
    return out


@njit(fastmath=True, cache=True, parallel=True)
def float_to_uint8_kernel(img):
    """
    Fused clip + scale + round: converts a float [0,1] image to uint8 [0,255].
    """
    rows, cols, channels = img.shape
    out = np.empty((rows, cols, channels), dtype=np.uint8)

    for r in prange(rows):
        for c in range(cols):
            for ch in range(channels):
                val = img[r, c, ch]
                if val <= 0.0:
                    out[r, c, ch] = 0
                elif val >= 1.0:
                    out[r, c, ch] = 255
                else:
                    out[r, c, ch] = np.uint8(val * 255.0 + 0.5)

    return out
