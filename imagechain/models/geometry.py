from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple
import math

import numpy as np

from ..exceptions import InvalidParameterError


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class AffineTransform:
    """
    2x3 affine matrix mapping (x, y) to

        x' = a * x + c * y + tx
        y' = b * x + d * y + ty

    `concatenate` follows the usual graphics convention: the argument is
    applied to points first, so `S.concatenate(R).concatenate(T)` maps a point
    through T, then R, then S.
    """
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    # ── Factories ────────────────────────────────────────────────────
    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls()

    @classmethod
    def scaling(cls, sx: float, sy: float) -> "AffineTransform":
        return cls(a=sx, d=sy)

    @classmethod
    def translation(cls, dx: float, dy: float) -> "AffineTransform":
        return cls(tx=dx, ty=dy)

    @classmethod
    def rotation(cls, theta: float, anchor_x: float = 0.0, anchor_y: float = 0.0) -> "AffineTransform":
        """
        Rotation by `theta` degrees (positive turns +x toward +y, i.e. clockwise
        on screen) about the anchor point.
        """
        radians = math.radians(theta)
        sin = math.sin(radians)
        cos = math.cos(radians)
        # exact values for quadrant angles
        if sin in (1.0, -1.0):
            cos = 0.0
        elif cos in (1.0, -1.0):
            sin = 0.0
        return cls(
            a=cos,
            b=sin,
            c=-sin,
            d=cos,
            tx=anchor_x - cos * anchor_x + sin * anchor_y,
            ty=anchor_y - sin * anchor_x - cos * anchor_y,
        )

    # ── Composition ──────────────────────────────────────────────────
    def concatenate(self, other: "AffineTransform") -> "AffineTransform":
        """Return self x other."""
        return AffineTransform(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            tx=self.a * other.tx + self.c * other.ty + self.tx,
            ty=self.b * other.tx + self.d * other.ty + self.ty,
        )

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverse(self) -> "AffineTransform":
        det = self.determinant
        if det == 0.0 or not math.isfinite(det):
            raise InvalidParameterError(f"Transform is not invertible (determinant={det})")
        return AffineTransform(
            a=self.d / det,
            b=-self.b / det,
            c=-self.c / det,
            d=self.a / det,
            tx=(self.c * self.ty - self.d * self.tx) / det,
            ty=(self.b * self.tx - self.a * self.ty) / det,
        )

    # ── Point mapping ────────────────────────────────────────────────
    def transform_point(self, x: float, y: float) -> tuple[float, float]:
        return (
            self.a * x + self.c * y + self.tx,
            self.b * x + self.d * y + self.ty,
        )

    def transform_points(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Vectorised `transform_point` over coordinate arrays of equal shape."""
        return (
            self.a * xs + self.c * ys + self.tx,
            self.b * xs + self.d * ys + self.ty,
        )

    def as_matrix(self) -> np.ndarray:
        return np.array([[self.a, self.c, self.tx],
                         [self.b, self.d, self.ty]], dtype=np.float64)
