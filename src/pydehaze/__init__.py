from importlib.metadata import PackageNotFoundError, version

from .config import DehazeParams, load_params
from .core import DehazeResult, dehaze_image
from .errors import (
    DehazeError,
    ImageLoadError,
    IndexOutOfRangeError,
    InvalidDimensionsError,
    InvalidParameterError,
)
from .io.image import load_image, save_png
from .processing import (
    WHITE,
    dark_channel,
    estimate_atmospheric_light,
    recover_radiance,
    transmission_map,
    transmission_to_rgb,
)

__all__ = [
    "dehaze_image",
    "DehazeResult",
    "DehazeParams",
    "load_params",
    "dark_channel",
    "estimate_atmospheric_light",
    "transmission_map",
    "transmission_to_rgb",
    "recover_radiance",
    "load_image",
    "save_png",
    "WHITE",
    "DehazeError",
    "InvalidDimensionsError",
    "InvalidParameterError",
    "IndexOutOfRangeError",
    "ImageLoadError",
]

try:
    __version__ = version("pydehaze")
except PackageNotFoundError:
    __version__ = "unknown"
