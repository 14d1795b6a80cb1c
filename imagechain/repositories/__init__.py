from .image_repository import ImageRepository
from .pixel_repository import PixelRepository

__all__ = ["ImageRepository", "PixelRepository"]
