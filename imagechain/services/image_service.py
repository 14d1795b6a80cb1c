from __future__ import annotations
from pathlib import Path
from typing import Iterable, Union, Iterator

import numpy as np

from ..models.image import Image
from ..repositories.image_repository import ImageRepository
from ..repositories.pixel_repository import PixelRepository


class ImageService:
    """I/O helpers.  No pixel math here."""
    def __init__(self):
        self.image_repository = ImageRepository()
        self.pixel_repository = PixelRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.pixel_repository.create_image(pixels, path)

    def load(self, path: Union[str, Path]) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def fetch(self, url: str) -> Image:
        """Download and decode a remote image."""
        return self.image_repository.fetch(url)

    def decode(self, data: bytes) -> Image:
        return self.image_repository.decode(data)

    def encode(self, image: Image, fmt: str = "PNG") -> bytes:
        return self.image_repository.encode(image, fmt)

    def save(self, image: Image, path: Union[str, Path] = None, fmt: str = None) -> Path:
        """
        Business-level method to save the image to a specific path.
        """
        return self.image_repository.save(image, path, fmt)

    def stream_gallery(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield images lazily instead of returning a gigantic list.
        """
        return self.image_repository.iter_dir(folder,
                                              recursive=recursive,
                                              exts=exts)

    def freeze(self, img: Image) -> Image:
        return self.pixel_repository.freeze(img)
