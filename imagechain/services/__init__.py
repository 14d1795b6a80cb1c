from .color_service import ColorService
from .geometry_service import GeometryService
from .image_service import ImageService
from .random_service import RandomSource, default_random_source
from .raster_service import RasterService
from .text_service import TextService

__all__ = [
    "ColorService",
    "GeometryService",
    "ImageService",
    "RandomSource",
    "RasterService",
    "TextService",
    "default_random_source",
]
