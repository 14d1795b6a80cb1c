"""Immutable, chainable RGBA image transforms."""
from .exceptions import (
    BoundsError,
    DecodeError,
    ImageChainError,
    ImageIOError,
    InvalidParameterError,
)
from .models import AffineTransform, Color, ColorStop, Direction, FontSpec, Image, Point
from .pipeline import ImageProcessor
from .services import RandomSource

__version__ = "1.0.0"

__all__ = [
    "AffineTransform",
    "BoundsError",
    "Color",
    "ColorStop",
    "DecodeError",
    "Direction",
    "FontSpec",
    "Image",
    "ImageChainError",
    "ImageIOError",
    "ImageProcessor",
    "InvalidParameterError",
    "Point",
    "RandomSource",
]
