from .color import Color, ColorStop
from .direction import Direction
from .font import FontSpec
from .geometry import AffineTransform, Point
from .image import Image

__all__ = [
    "AffineTransform",
    "Color",
    "ColorStop",
    "Direction",
    "FontSpec",
    "Image",
    "Point",
]
