from __future__ import annotations
import logging

import numpy as np

from ..models.geometry import AffineTransform
from ..models.image import Image
from . import color_math

logger = logging.getLogger(__name__)


class RasterService:
    """
    Draws one RGBA buffer onto another through an AffineTransform.

    Sampling is backward and nearest-neighbour: the centre of every destination
    pixel is mapped through the inverse transform and the source pixel that
    contains the mapped point is used. Points landing outside the source are
    transparent, destination pixels outside the canvas are never produced.
    """

    @staticmethod
    def clear(width: int, height: int) -> np.ndarray:
        return np.zeros((height, width, 4), dtype=np.uint8)

    @staticmethod
    def sample(src: np.ndarray, transform: AffineTransform, width: int, height: int) -> np.ndarray:
        """
        Resample `src` through `transform` onto a width x height grid.
        Returns an RGBA array; unmapped pixels are (0, 0, 0, 0).
        """
        out = np.zeros((height, width, 4), dtype=np.uint8)
        src_h, src_w = src.shape[:2]
        if width == 0 or height == 0 or src_w == 0 or src_h == 0:
            return out

        inverse = transform.inverse()
        ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
        sx, sy = inverse.transform_points(xs + 0.5, ys + 0.5)
        sx = np.floor(sx)
        sy = np.floor(sy)

        inside = (sx >= 0) & (sx < src_w) & (sy >= 0) & (sy < src_h)
        out[inside] = src[sy[inside].astype(np.intp), sx[inside].astype(np.intp)]
        return out

    def draw(self, dest: np.ndarray, src: np.ndarray, transform: AffineTransform, alpha: float = 1.0) -> np.ndarray:
        """Source-over `src` through `transform` onto a copy of `dest`."""
        height, width = dest.shape[:2]
        layer = self.sample(src, transform, width, height)
        if alpha == 1.0 and not dest[..., 3].any():
            # source-over onto an empty canvas is the layer itself
            return layer
        return color_math.source_over(dest, layer, alpha)

    def draw_onto_blank(self, src: Image, transform: AffineTransform, width: int, height: int) -> Image:
        """Clear a width x height canvas, then draw `src` through `transform`."""
        canvas = self.clear(width, height)
        canvas = self.draw(canvas, src.pixels, transform)
        return Image(pixels=canvas)

    def composite_over(self, base: Image, src: Image, transform: AffineTransform, alpha: float) -> Image:
        """
        Three strictly ordered passes on a canvas the size of `base`:
            1. clear to transparent
            2. draw `base` untransformed at full opacity
            3. draw `src` through `transform` at opacity `alpha`
        """
        canvas = self.clear(base.width, base.height)
        canvas = self.draw(canvas, base.pixels, AffineTransform.identity())
        canvas = self.draw(canvas, src.pixels, transform, alpha)
        logger.debug(f"Composited {src.width}x{src.height} onto {base.width}x{base.height} at alpha {alpha}")
        return Image(pixels=canvas)
