"""
Pure colour arithmetic on numpy arrays of 8-bit channels.

Interpolation results are truncated toward zero (int-cast semantics) and then
clamped, so a channel never wraps around.
"""
import numpy as np

# Weights used to place a pixel on a gradient map
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


def clamp_channels(values: np.ndarray) -> np.ndarray:
    """Clamp to [0, 255] and convert to uint8."""
    return np.clip(values, 0, 255).astype(np.uint8)


def truncate(values: np.ndarray) -> np.ndarray:
    """Drop the fractional part toward zero, then clamp."""
    return clamp_channels(np.trunc(values))


def lerp(source: np.ndarray, target: np.ndarray, amount) -> np.ndarray:
    """
    source + (target - source) * amount, truncated and clamped.
    `amount` may be a scalar or an array broadcastable against the channels.
    """
    source = source.astype(np.float64)
    target = np.asarray(target, dtype=np.float64)
    return truncate(source + (target - source) * amount)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """(0.299 r + 0.587 g + 0.114 b) / 255 for (..., 3) arrays; result in [0, 1]."""
    return (rgb.astype(np.float64) @ LUMA_WEIGHTS) / 255.0


def pack_argb(rgba: np.ndarray) -> np.ndarray:
    """(..., 4) RGBA uint8 -> (...) uint32 with alpha in the most significant byte."""
    rgba = rgba.astype(np.uint32)
    return (rgba[..., 3] << 24) | (rgba[..., 0] << 16) | (rgba[..., 1] << 8) | rgba[..., 2]


def unpack_argb(packed: np.ndarray) -> np.ndarray:
    """Inverse of `pack_argb`."""
    packed = np.asarray(packed, dtype=np.uint32)
    return np.stack(
        [
            (packed >> 16) & 0xFF,
            (packed >> 8) & 0xFF,
            packed & 0xFF,
            (packed >> 24) & 0xFF,
        ],
        axis=-1,
    ).astype(np.uint8)


def source_over(dest: np.ndarray, src: np.ndarray, opacity: float = 1.0) -> np.ndarray:
    """
    Porter-Duff source-over of straight-alpha RGBA arrays of equal shape.
    `opacity` is multiplied into the source alpha before blending.
    """
    src_f = src.astype(np.float64) / 255.0
    dst_f = dest.astype(np.float64) / 255.0

    a_s = src_f[..., 3:4] * opacity
    a_d = dst_f[..., 3:4]
    a_o = a_s + a_d * (1.0 - a_s)

    premultiplied = src_f[..., :3] * a_s + dst_f[..., :3] * a_d * (1.0 - a_s)
    with np.errstate(divide="ignore", invalid="ignore"):
        # nothing painted where both are transparent: destination stays
        rgb = np.where(a_o > 0, premultiplied / a_o, dst_f[..., :3])

    out = np.concatenate([rgb, a_o], axis=-1) * 255.0
    return clamp_channels(np.rint(out))
