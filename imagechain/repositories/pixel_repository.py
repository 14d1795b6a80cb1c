from pathlib import Path
from typing import Union

import numpy as np

from ..exceptions import BoundsError, InvalidParameterError
from ..models.color import Color
from ..models.image import Image


class PixelRepository:
    """
    Access layer for the RGBA grid held by an Image.
    Every constructor here returns a buffer the caller owns outright.
    """

    @staticmethod
    def create_blank(width: int, height: int) -> Image:
        """Fully transparent (0, 0, 0, 0) buffer."""
        if width < 0 or height < 0:
            raise InvalidParameterError(f"Buffer size must be non-negative, got {width}x{height}")
        return Image(pixels=np.zeros((height, width, 4), dtype=np.uint8))

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        """
        Wrap a copy of `pixels` as RGBA. Accepts (H, W) gray, (H, W, 3) RGB
        or (H, W, 4) RGBA arrays; values are clamped to [0, 255].
        """
        arr = np.asarray(pixels)
        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise InvalidParameterError(f"Expected (H, W), (H, W, 3) or (H, W, 4) pixels, got shape {arr.shape}")

        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)

        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        else:
            arr = arr.copy()

        return Image(pixels=np.ascontiguousarray(arr), path=Path(path) if path is not None else None)

    @staticmethod
    def _check_coordinate(image: Image, x: int, y: int) -> None:
        if not (0 <= x < image.width and 0 <= y < image.height):
            raise BoundsError(f"Pixel ({x}, {y}) outside {image.width}x{image.height} buffer")

    def get_pixel(self, image: Image, x: int, y: int) -> Color:
        self._check_coordinate(image, x, y)
        return Color(*image.pixels[y, x].tolist())

    def set_pixel(self, image: Image, x: int, y: int, color: Color) -> None:
        self._check_coordinate(image, x, y)
        image.pixels[y, x] = color.rgba

    @staticmethod
    def clear(image: Image) -> None:
        image.pixels[...] = 0

    @staticmethod
    def freeze(image: Image) -> Image:
        """Mark the buffer read-only so a pipeline stage cannot be changed in place."""
        image.pixels.setflags(write=False)
        return image
