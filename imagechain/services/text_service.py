from __future__ import annotations
from functools import lru_cache
import logging

import numpy as np
from PIL import Image as PILImage, ImageDraw, ImageFont

from .. import config
from ..exceptions import ImageIOError
from ..models.color import Color
from ..models.font import FontSpec
from ..models.geometry import Point

logger = logging.getLogger(__name__)


@lru_cache(maxsize=32)
def _load_font(path: str | None, size: int):
    if path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(path, size)
    except OSError as err:
        raise ImageIOError(f"Cannot load font {path}: {err}") from err


class TextService:
    """
    Thin wrapper over Pillow's text rasteriser.
    Glyph shaping and metrics are Pillow's business; this class only places
    the baseline and paints in a solid colour.
    """

    def __init__(self, default_font: FontSpec | None = None):
        self.default_font = default_font or FontSpec(
            size=config.DEFAULT_FONT_SIZE,
            path=config.DEFAULT_FONT_PATH,
        )

    def resolve_font(self, font: FontSpec | None):
        font = font or self.default_font
        return _load_font(str(font.path) if font.path is not None else None, font.size)

    def draw_glyphs(self, pixels: np.ndarray, text: str, point: Point, font: FontSpec | None, color: Color) -> np.ndarray:
        """
        Render `text` with its baseline starting at `point` and return the new
        RGBA array. `pixels` itself is not modified.
        """
        base = PILImage.fromarray(np.ascontiguousarray(pixels))
        # glyphs go on their own layer so translucent ink blends source-over
        layer = PILImage.new("RGBA", base.size, color.rgb + (0,))
        draw = ImageDraw.Draw(layer)
        pil_font = self.resolve_font(font)

        if isinstance(pil_font, ImageFont.FreeTypeFont):
            draw.text((point.x, point.y), text, font=pil_font, fill=color.rgba, anchor="ls")
        else:
            # bitmap fonts only anchor at the top-left corner
            ascent = pil_font.getbbox(text)[3]
            draw.text((point.x, point.y - ascent), text, font=pil_font, fill=color.rgba)

        logger.debug(f"Drew {len(text)} glyphs at {tuple(point)}")
        return np.array(PILImage.alpha_composite(base, layer), dtype=np.uint8)
