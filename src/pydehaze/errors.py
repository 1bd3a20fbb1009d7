"""Exception types raised by the dehazing pipeline."""


class DehazeError(Exception):
    """Base class for all pydehaze errors."""


class InvalidDimensionsError(DehazeError, ValueError):
    """Image or map has no pixels, the wrong rank, or mismatched shapes."""


class InvalidParameterError(DehazeError, ValueError):
    """A configuration value lies outside its valid domain."""


class IndexOutOfRangeError(DehazeError, IndexError):
    """A computed coordinate escaped the image bounds."""


class ImageLoadError(DehazeError):
    """The image file exists but could not be decoded."""
