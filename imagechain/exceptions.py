class ImageChainError(Exception):
    """Base class for every error raised by imagechain."""


class DecodeError(ImageChainError):
    """Image bytes are malformed or in an unsupported format."""


class ImageIOError(ImageChainError, OSError):
    """Reading or writing a file, or fetching a URL, failed."""


class BoundsError(ImageChainError, IndexError):
    """A sub-rectangle does not fit inside the pixel buffer."""


class InvalidParameterError(ImageChainError, ValueError):
    """An operation was called with arguments it cannot work with."""
