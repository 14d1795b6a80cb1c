from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FontSpec:
    """
    Font descriptor handed to the text rasteriser.
    `path` points at a TrueType/OpenType file; None selects Pillow's built-in font.
    """
    size: int = 16
    path: Path | str | None = None
