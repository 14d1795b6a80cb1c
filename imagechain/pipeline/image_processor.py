"""
Chainable, immutable image processing.

Every transform returns a new ImageProcessor wrapping a freshly allocated
buffer, so stages can be kept, branched and reused freely:

    base = ImageProcessor.from_file("photo.png")
    poster = base.grayscale().tint(Color(255, 120, 0), 0.3).resize_to(width=800)
    poster.save_as("poster.png")
"""
from __future__ import annotations
from pathlib import Path
from typing import Union
import logging

import numpy as np

from ..models.color import Color, ColorStop
from ..models.direction import Direction
from ..models.font import FontSpec
from ..models.geometry import AffineTransform, Point
from ..models.image import Image
from ..services.color_service import ColorService
from ..services.geometry_service import GeometryService
from ..services.image_service import ImageService
from ..services.random_service import RandomSource
from ..services.raster_service import RasterService
from ..services.text_service import TextService

logger = logging.getLogger(__name__)

# Shared, stateless services
_image_service = ImageService()
_raster_service = RasterService()
_color_service = ColorService()
_geometry_service = GeometryService(_raster_service)
_text_service = TextService()


class ImageProcessor:
    """
    Immutable pipeline stage holding exactly one RGBA Image.
    The wrapped pixel array is read-only; use `extract()` for a writable copy.
    """

    __slots__ = ("_image",)

    def __init__(self, image: Image):
        owned = _image_service.create_image(image.pixels, image.path)
        self._image = _image_service.freeze(owned)

    # ─── Construction ─────────────────────────────────────────────
    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ImageProcessor":
        """Raises ImageIOError / DecodeError instead of returning an empty stage."""
        return cls._wrap(_image_service.load(path))

    @classmethod
    def from_url(cls, url: str) -> "ImageProcessor":
        return cls._wrap(_image_service.fetch(url))

    @classmethod
    def from_bytes(cls, data: bytes) -> "ImageProcessor":
        return cls._wrap(_image_service.decode(data))

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> "ImageProcessor":
        """(H, W), (H, W, 3) or (H, W, 4) array; the data is copied."""
        return cls._wrap(_image_service.create_image(pixels))

    @classmethod
    def _wrap(cls, image: Image) -> "ImageProcessor":
        # buffers built by the services are fresh and unshared, no copy needed
        stage = cls.__new__(cls)
        stage._image = _image_service.freeze(image)
        return stage

    # ─── Access ───────────────────────────────────────────────────
    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def path(self) -> Path | None:
        return self._image.path

    def extract(self) -> np.ndarray:
        """Writable copy of the current (H, W, 4) RGBA raster."""
        return self._image.pixels.copy()

    def to_image(self) -> Image:
        """The current raster as a standalone (writable) Image."""
        return Image(pixels=self.extract(), path=self._image.path)

    def save_as(self, path: Union[str, Path], fmt: str = None) -> Path:
        return _image_service.save(self._image, path, fmt)

    def to_bytes(self, fmt: str = "PNG") -> bytes:
        return _image_service.encode(self._image, fmt)

    def __eq__(self, other):
        if not isinstance(other, ImageProcessor):
            return NotImplemented
        return np.array_equal(self._image.pixels, other._image.pixels)

    __hash__ = None

    def __repr__(self):
        return f"ImageProcessor({self.width}x{self.height})"

    # ─── Compositing ──────────────────────────────────────────────
    def overlay(
        self,
        image: "ImageProcessor | Image",
        point: Point = Point(0, 0),
        theta: float = 0.0,
        scale: float = 1.0,
        alpha: float = 1.0,
    ) -> "ImageProcessor":
        """
        Paint `image` on top of this one, scaled by `scale`, rotated by `theta`
        degrees about its own centre and moved to `point`, at opacity `alpha`.
        The canvas keeps this image's size.

        Args:
            image: image to overlay onto this one
            point: translation, in output pixels
            theta: degrees to rotate the overlay (clockwise on screen)
            scale: scale factor, non-zero
            alpha: overlay opacity within [0, 1]

        Returns:
            ImageProcessor holding the composited image
        """
        overlay = image._image if isinstance(image, ImageProcessor) else image
        return self._wrap(_geometry_service.overlay(self._image, overlay, Point(*point), theta, scale, alpha))

    def resize_to(self, width: int | None = None, height: int | None = None) -> "ImageProcessor":
        """Give one side to keep the aspect ratio, or both to stretch."""
        return self._wrap(_geometry_service.resize(self._image, width, height))

    def rotate(self, direction: Direction) -> "ImageProcessor":
        """Quarter turn, CLOCKWISE or COUNTER_CLOCKWISE."""
        return self._wrap(_geometry_service.rotate(self._image, direction))

    def mirror(self, direction: Direction) -> "ImageProcessor":
        """Flip HORIZONTAL (left/right) or VERTICAL (top/bottom)."""
        return self._wrap(_geometry_service.mirror(self._image, direction))

    def crop(self, x: int, y: int, w: int, h: int) -> "ImageProcessor":
        return self._wrap(_geometry_service.crop(self._image, x, y, w, h))

    def draw_text(self, text: str, point: Point, font: FontSpec | None = None, color: Color = Color(0, 0, 0)) -> "ImageProcessor":
        """Draw `text` with its baseline at `point`; `font=None` uses the configured default."""
        canvas = _raster_service.draw_onto_blank(self._image, AffineTransform.identity(), self.width, self.height)
        pixels = _text_service.draw_glyphs(canvas.pixels, text, Point(*point), font, color)
        return self._wrap(Image(pixels=pixels))

    # ─── Colour ───────────────────────────────────────────────────
    def tint(self, color: Color, amount: float) -> "ImageProcessor":
        return self._wrap(_color_service.tint(self._image, color, amount))

    def gradient_map(self, amount: float, *stops: ColorStop) -> "ImageProcessor":
        """
        Map each pixel's luminance onto the colour stops and blend the result
        in by `amount`. Needs at least two stops in ascending position order.
        """
        return self._wrap(_color_service.gradient_map(self._image, amount, stops))

    def add_noise(self, monochrome: bool, percentage: float, random_source: RandomSource | None = None) -> "ImageProcessor":
        return self._wrap(_color_service.add_noise(self._image, monochrome, percentage, random_source))

    def negative(self) -> "ImageProcessor":
        return self._wrap(_color_service.negative(self._image))

    def grayscale(self) -> "ImageProcessor":
        return self._wrap(_color_service.grayscale(self._image))

    def scale_samples(self, scale_factor: float, offset: float) -> "ImageProcessor":
        """Alias of per-channel c * scale_factor + offset; alpha is scaled as well."""
        return self._wrap(_color_service.scale_samples(self._image, scale_factor, offset))
