from __future__ import annotations
from dataclasses import dataclass, field

from ..exceptions import InvalidParameterError


def _clamp_channel(value) -> int:
    value = int(value)
    if value < 0:
        return 0
    if value > 255:
        return 255
    return value


@dataclass(frozen=True)
class Color:
    """
    8-bit RGBA colour. Channels are clamped to [0, 255] on construction.
    """
    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self):
        for name in ("red", "green", "blue", "alpha"):
            object.__setattr__(self, name, _clamp_channel(getattr(self, name)))

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return self.red, self.green, self.blue, self.alpha

    @property
    def packed(self) -> int:
        """ARGB integer: alpha in the most significant byte, then red, green, blue."""
        return (self.alpha << 24) | (self.red << 16) | (self.green << 8) | self.blue

    @classmethod
    def from_packed(cls, value: int) -> "Color":
        return cls(
            red=(value >> 16) & 0xFF,
            green=(value >> 8) & 0xFF,
            blue=value & 0xFF,
            alpha=(value >> 24) & 0xFF,
        )

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """Parse '#rrggbb' or '#rrggbbaa' (leading '#' optional)."""
        digits = text.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise InvalidParameterError(f"Expected 6 or 8 hex digits, got {text!r}")
        try:
            channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError as err:
            raise InvalidParameterError(f"Not a hex colour: {text!r}") from err
        return cls(*channels)


@dataclass(frozen=True)
class ColorStop:
    """
    Anchor colour of a gradient map. Position is clamped into [0, 1].
    """
    color: Color
    position: float = field(default=0.0)

    def __post_init__(self):
        position = float(self.position)
        position = 1.0 if position > 1.0 else 0.0 if position < 0.0 else position
        object.__setattr__(self, "position", position)

    @classmethod
    def of(cls, red: int, green: int, blue: int, position: float, alpha: int = 255) -> "ColorStop":
        return cls(Color(red, green, blue, alpha), position)
