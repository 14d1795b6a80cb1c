import numpy as np
import pytest

from imagechain import Color, ImageProcessor, RandomSource

from .helper_functions import solid


@pytest.fixture
def red_2x2() -> ImageProcessor:
    return ImageProcessor.from_pixels(solid(2, 2, Color(255, 0, 0)))


@pytest.fixture
def rgba_array() -> np.ndarray:
    """7x5 random RGBA array with a column of fully transparent pixels."""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(5, 7, 4), dtype=np.uint8)
    pixels[..., 3] = np.maximum(pixels[..., 3], 1)
    pixels[:, 2, 3] = 0
    return pixels


@pytest.fixture
def rgba_image(rgba_array) -> ImageProcessor:
    return ImageProcessor.from_pixels(rgba_array)


@pytest.fixture
def opaque_image() -> ImageProcessor:
    """Odd-sized (3x5) opaque image with distinct pixels."""
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(5, 3, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    return ImageProcessor.from_pixels(pixels)


@pytest.fixture
def seeded_source() -> RandomSource:
    return RandomSource(seed=1234)
