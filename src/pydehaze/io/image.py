import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..errors import ImageLoadError, InvalidDimensionsError

logger = logging.getLogger(__name__)


def load_image(path):
    """
    Opens a standard image file as a uint8 pixel grid.
    RGB and RGBA images keep their channels; every other mode is converted
    to RGB. EXIF orientation is applied.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    try:
        with Image.open(path) as img:
            img = ImageOps.exif_transpose(img)
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGB")
            pixels = np.array(img)
            mode = img.mode
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageLoadError(f"Could not decode {path}: {e}") from e

    logger.debug(f"Loaded {path} | Mode: {mode} | Size: {pixels.shape[1]}x{pixels.shape[0]}")
    return pixels


def save_png(pixels, output_path):
    """Writes an HxWx3 uint8 array as a lossless PNG."""
    output_path = Path(output_path)
    fmt = output_path.suffix.lower()
    if fmt != ".png":
        raise ValueError(f"Unsupported format: {fmt}")

    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] != 3 or arr.dtype != np.uint8:
        raise InvalidDimensionsError(
            f"Expected an HxWx3 uint8 array, got {arr.shape} {arr.dtype}"
        )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(arr).save(output_path, format="PNG")
    logger.debug(f"Saved {output_path}")
