from __future__ import annotations
import math
import logging

import numpy as np

from ..exceptions import BoundsError, InvalidParameterError
from ..models.direction import Direction
from ..models.geometry import AffineTransform, Point
from ..models.image import Image
from .raster_service import RasterService

logger = logging.getLogger(__name__)


class GeometryService:
    """
    Canvas-level transforms: overlay, resize, rotate, mirror and crop.
    Works only with Image objects and always returns a new one.
    """

    def __init__(self, raster_service: RasterService | None = None):
        self.raster_service = raster_service or RasterService()

    @staticmethod
    def overlay_transform(overlay: Image, point: Point, theta: float, scale: float) -> AffineTransform:
        """
        scale -> rotate about the overlay centre -> translate, concatenated in
        that order. The translation is given in pre-scale units, so both the
        offset and the rotation anchor are divided by `scale`.
        """
        dx = point.x / scale
        dy = point.y / scale
        anchor_x = (overlay.width // 2) + dx
        anchor_y = (overlay.height // 2) + dy

        transformation = AffineTransform.scaling(scale, scale)
        transformation = transformation.concatenate(AffineTransform.rotation(theta, anchor_x, anchor_y))
        transformation = transformation.concatenate(AffineTransform.translation(dx, dy))
        return transformation

    def overlay(self, base: Image, overlay: Image, point: Point, theta: float, scale: float, alpha: float) -> Image:
        if scale == 0:
            raise InvalidParameterError("Overlay scale must be non-zero")
        if not 0.0 <= alpha <= 1.0:
            raise InvalidParameterError(f"Overlay alpha must be within [0, 1], got {alpha}")

        transformation = self.overlay_transform(overlay, point, theta, scale)
        return self.raster_service.composite_over(base, overlay, transformation, alpha)

    @staticmethod
    def resize_scales(img: Image, width: int | None, height: int | None) -> tuple[float, float]:
        """
        Scale factors for a resize; a missing side reuses the other side's
        factor so the aspect ratio is kept.
        """
        if width is None and height is None:
            raise InvalidParameterError("Resize needs a width, a height or both")
        for name, value in (("width", width), ("height", height)):
            if value is not None and value <= 0:
                raise InvalidParameterError(f"Resize {name} must be positive, got {value}")
        if img.width == 0 or img.height == 0:
            raise InvalidParameterError("Cannot resize an empty image")

        if width is None:
            scale_y = height / img.height
            scale_x = scale_y
        elif height is None:
            scale_x = width / img.width
            scale_y = scale_x
        else:
            scale_x = width / img.width
            scale_y = height / img.height
        return scale_x, scale_y

    def resize(self, img: Image, width: int | None = None, height: int | None = None) -> Image:
        scale_x, scale_y = self.resize_scales(img, width, height)
        new_width = math.floor(img.width * scale_x)
        new_height = math.floor(img.height * scale_y)
        if new_width < 1 or new_height < 1:
            raise InvalidParameterError(f"Resize would produce an empty {new_width}x{new_height} image")

        logger.debug(f"Resizing {img.width}x{img.height} -> {new_width}x{new_height}")
        scale_operation = AffineTransform.scaling(scale_x, scale_y)
        return self.raster_service.draw_onto_blank(img, scale_operation, new_width, new_height)

    def rotate(self, img: Image, direction: Direction) -> Image:
        """
        Quarter turn. The canvas swaps width and height; clockwise turns about
        (H/2, H/2), counter-clockwise turns -90 degrees about (W/2, W/2).
        """
        if direction is Direction.CLOCKWISE:
            rotation = 90.0
            anchor = img.height / 2
        elif direction is Direction.COUNTER_CLOCKWISE:
            rotation = -90.0
            anchor = img.width / 2
        else:
            raise InvalidParameterError(f"Rotate needs CLOCKWISE or COUNTER_CLOCKWISE, got {direction}")

        tx = AffineTransform.rotation(rotation, anchor, anchor)
        return self.raster_service.draw_onto_blank(img, tx, img.height, img.width)

    @staticmethod
    def mirror(img: Image, direction: Direction) -> Image:
        """Direct remap: result[x, y] = source[W-1-x, y] or source[x, H-1-y]."""
        if direction is Direction.HORIZONTAL:
            pixels = img.pixels[:, ::-1]
        elif direction is Direction.VERTICAL:
            pixels = img.pixels[::-1, :]
        else:
            raise InvalidParameterError(f"Mirror needs HORIZONTAL or VERTICAL, got {direction}")
        return Image(pixels=pixels.copy())

    @staticmethod
    def crop(img: Image, x: int, y: int, w: int, h: int) -> Image:
        if w < 0 or h < 0:
            raise BoundsError(f"Crop size must not be negative, got {w}x{h}")
        if x < 0 or y < 0 or x + w > img.width or y + h > img.height:
            raise BoundsError(
                f"Crop rectangle ({x}, {y}, {w}x{h}) outside {img.width}x{img.height} image"
            )
        return Image(pixels=img.pixels[y:y + h, x:x + w].copy())
