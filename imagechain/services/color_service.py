from __future__ import annotations
from typing import Sequence
import logging

import cv2
import numpy as np

from ..exceptions import InvalidParameterError
from ..models.color import Color, ColorStop
from ..models.image import Image
from . import color_math
from .random_service import RandomSource, default_random_source

logger = logging.getLogger(__name__)


class ColorService:
    """
    Per-pixel colour transforms.
    *   Every method reads one Image and returns a *new* Image.
    *   Tint, gradient map and noise leave fully transparent pixels untouched.
    """

    @staticmethod
    def _new_image(pixels: np.ndarray) -> Image:
        return Image(pixels=np.ascontiguousarray(pixels))

    @staticmethod
    def _blend_visible(img: Image, target_rgb: np.ndarray, amount) -> Image:
        """
        Interpolate RGB toward `target_rgb` by `amount` for pixels with alpha > 0;
        alpha is kept and transparent pixels are copied through.
        """
        src = img.pixels
        out = src.copy()
        visible = src[..., 3] != 0
        blended = color_math.lerp(src[..., :3], target_rgb, amount)
        out[..., :3] = np.where(visible[..., None], blended, src[..., :3])
        return ColorService._new_image(out)

    # ─── Public API ────────────────────────────────────────────────
    def tint(self, img: Image, color: Color, amount: float) -> Image:
        """
        c' = c + (target - c) * amount per channel. `amount` is not clamped.
        """
        target = np.array(color.rgb, dtype=np.float64)
        return self._blend_visible(img, target, amount)

    @staticmethod
    def validate_stops(stops: Sequence[ColorStop]) -> None:
        if len(stops) < 2:
            raise InvalidParameterError(f"A gradient map needs at least 2 stops, got {len(stops)}")
        positions = [stop.position for stop in stops]
        if any(lo > hi for lo, hi in zip(positions, positions[1:])):
            raise InvalidParameterError(f"Gradient stops must be in ascending order, got positions {positions}")

    def map_colors(self, lum: np.ndarray, stops: Sequence[ColorStop]) -> np.ndarray:
        """
        Gradient colour for each luminance value.

        The first adjacent pair (stops[i], stops[i+1]) whose positions bracket
        the luminance is chosen, and the pair is interpolated using the
        luminance itself as the factor, not its offset inside the pair.
        """
        mapped = np.zeros(lum.shape + (3,), dtype=np.uint8)
        assigned = np.zeros(lum.shape, dtype=bool)
        for lo, hi in zip(stops, stops[1:]):
            match = ~assigned & (lo.position <= lum) & (lum <= hi.position)
            if not match.any():
                continue
            c1 = np.array(lo.color.rgb, dtype=np.float64)
            c2 = np.array(hi.color.rgb, dtype=np.float64)
            l = lum[match][:, None]
            mapped[match] = color_math.truncate(c1 + (c2 - c1) * l)
            assigned |= match

        if not assigned.all():
            missed = lum[~assigned]
            raise InvalidParameterError(
                f"Luminance {missed.min():.4f}..{missed.max():.4f} is outside the gradient stops "
                f"[{stops[0].position}, {stops[-1].position}]"
            )
        return mapped

    def gradient_map(self, img: Image, amount: float, stops: Sequence[ColorStop]) -> Image:
        self.validate_stops(stops)

        visible = img.pixels[..., 3] != 0
        rgb = img.pixels[..., :3]

        # only visible pixels have to be bracketed by the stops
        target = rgb.copy()
        if visible.any():
            target[visible] = self.map_colors(color_math.luminance(rgb[visible]), stops)

        return self._blend_visible(img, target, amount)

    def add_noise(
        self,
        img: Image,
        monochrome: bool,
        percentage: float,
        random_source: RandomSource | None = None,
    ) -> Image:
        """
        Blend every visible pixel toward a random colour.

        The blend factor is 1 / percentage for percentage <= 1 and 1 otherwise,
        so smaller percentages push harder (and overshoot, which is clamped).
        """
        if percentage <= 0:
            raise InvalidParameterError(f"Noise percentage must be positive, got {percentage}")
        noise_factor = (1.0 / percentage) if percentage <= 1 else 1.0
        random_source = random_source or default_random_source()

        height, width = img.pixels.shape[:2]
        if monochrome:
            noise = np.repeat(random_source.uniform_bytes((height, width, 1)), 3, axis=2)
        else:
            noise = random_source.uniform_bytes((height, width, 3))

        logger.debug(f"Adding {'mono' if monochrome else 'colour'} noise with factor {noise_factor:.3f}")
        return self._blend_visible(img, noise.astype(np.float64), noise_factor)

    def negative(self, img: Image) -> Image:
        out = img.pixels.copy()
        out[..., :3] = 255 - img.pixels[..., :3]
        return self._new_image(out)

    @staticmethod
    def _to_grayscale(rgb: np.ndarray) -> np.ndarray:
        if rgb.size == 0:
            return np.zeros(rgb.shape[:2], dtype=np.uint8)
        return cv2.cvtColor(np.ascontiguousarray(rgb), cv2.COLOR_RGB2GRAY)

    def grayscale(self, img: Image) -> Image:
        """Standard RGB -> gray luminance, replicated to R = G = B; alpha kept."""
        gray = self._to_grayscale(img.pixels[..., :3])
        out = img.pixels.copy()
        out[..., :3] = gray[..., None]
        return self._new_image(out)

    def scale_samples(self, img: Image, scale_factor: float, offset: float) -> Image:
        """
        c' = c * scale_factor + offset on all four channels.
        Alpha is scaled too, so transparency changes with it.
        """
        scaled = img.pixels.astype(np.float64) * scale_factor + offset
        return self._new_image(color_math.truncate(scaled))
