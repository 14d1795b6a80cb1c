from io import BytesIO
from pathlib import Path
from typing import Union, Iterable, List, Iterator
import logging

import numpy as np
import requests
from PIL import Image as PILImage, UnidentifiedImageError

from .. import config
from ..exceptions import DecodeError, ImageIOError
from ..models.image import Image

logger = logging.getLogger(__name__)

# Pillow format names keyed by file suffix
_SUFFIX_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
    ".gif": "GIF",
    ".webp": "WEBP",
    ".tif": "TIFF",
    ".tiff": "TIFF",
}

# formats that cannot store an alpha channel
_OPAQUE_FORMATS = {"JPEG", "BMP"}


class ImageRepository:
    """
    Handles file, byte and URL I/O for Image entities.
    """
    def __init__(self):
        self.VALID_EXTS = set(config.VALID_IMAGE_EXTENSIONS)

    # ─── Codec ────────────────────────────────────────────────────────
    @staticmethod
    def decode(data: bytes, path: Union[str, Path] = None) -> Image:
        try:
            with PILImage.open(BytesIO(data)) as pil_img:
                rgba = pil_img.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError) as err:
            raise DecodeError(f"Cannot decode image data{f' from {path}' if path else ''}: {err}") from err

        pixels = np.array(rgba, dtype=np.uint8)
        return Image(pixels=pixels, path=Path(path) if path is not None else None)

    @staticmethod
    def resolve_format(path: Union[str, Path], fmt: str = None) -> str:
        if fmt:
            fmt = fmt.upper()
            return "JPEG" if fmt == "JPG" else fmt
        suffix = Path(path).suffix.lower()
        if suffix not in _SUFFIX_FORMATS:
            raise ImageIOError(f"Cannot infer image format from suffix {suffix!r}: {path}")
        return _SUFFIX_FORMATS[suffix]

    @staticmethod
    def encode(image: Image, fmt: str = "PNG") -> bytes:
        fmt = fmt.upper()
        fmt = "JPEG" if fmt == "JPG" else fmt
        pil_img = PILImage.fromarray(np.ascontiguousarray(image.pixels))
        if fmt in _OPAQUE_FORMATS:
            pil_img = pil_img.convert("RGB")

        buffer = BytesIO()
        try:
            pil_img.save(buffer, format=fmt)
        except (KeyError, OSError, ValueError) as err:
            raise ImageIOError(f"Cannot encode image as {fmt}: {err}") from err
        return buffer.getvalue()

    # ─── Files ────────────────────────────────────────────────────────
    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as err:
            raise ImageIOError(f"Image not found or unreadable: {path}") from err

        image = self.decode(data, path)
        logger.info(f"Loaded {path} ({image.width}x{image.height})")
        return image

    def save(self, image: Image, path: Union[str, Path] = None, fmt: str = None) -> Path:
        path = Path(path) if path is not None else image.path
        if path is None:
            raise ImageIOError("No destination path given and image has no path")

        data = self.encode(image, self.resolve_format(path, fmt))
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as err:
            raise ImageIOError(f"Cannot write image to {path}: {err}") from err

        logger.info(f"Saved {path} ({image.width}x{image.height})")
        return path

    # ─── Network ──────────────────────────────────────────────────────
    def fetch(self, url: str, timeout: float = None) -> Image:
        headers = {"User-Agent": config.HTTP_USER_AGENT}
        timeout = config.HTTP_TIMEOUT if timeout is None else timeout
        try:
            response = requests.get(url, headers=headers, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as err:
            raise ImageIOError(f"Cannot fetch image from {url}: {err}") from err

        image = self.decode(response.content)
        logger.info(f"Fetched {url} ({image.width}x{image.height})")
        return image

    # ─── Directories ──────────────────────────────────────────────────
    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Image]:
        """
        Yield Image objects one at a time.  Nothing accumulates in memory.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            if not p.is_file():
                logger.debug(f"Skipping because not file: {p}")
                continue
            try:
                yield self.load(p)
            except (DecodeError, ImageIOError) as err:
                logger.warning(f"Skipping {p.name}: {err}")

    def load_dir(
        self, folder: Union[str, Path], *, recursive=False, exts=None
    ) -> List[Image]:
        """
        Helper that returns a list, but internally streams.
        """
        return list(self.iter_dir(folder, recursive=recursive, exts=exts))
