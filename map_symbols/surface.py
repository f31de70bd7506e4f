"""
Offscreen raster target for symbol drawing.

A Surface is a greyscale Pillow image plus a stack of affine matrices, so that
drawers can push/translate/rotate/scale/pop the way a canvas API would. Pillow
only knows device pixels, so every primitive is mapped through the active matrix
before it reaches ImageDraw. Stroke widths are multiplied by the matrix scale.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional

from PIL import Image, ImageDraw

from .errors import SurfaceUnavailable

BACKGROUND = 255
INK = 0

Matrix = tuple[float, float, float, float, float, float]
IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def _multiply(m: Matrix, n: Matrix) -> Matrix:
    a, b, c, d, e, f = m
    a2, b2, c2, d2, e2, f2 = n
    return (
        a * a2 + c * b2,
        b * a2 + d * b2,
        a * c2 + c * d2,
        b * c2 + d * d2,
        a * e2 + c * f2 + e,
        b * e2 + d * f2 + f,
    )


def _apply(m: Matrix, x: float, y: float) -> tuple[float, float]:
    a, b, c, d, e, f = m
    return a * x + c * y + e, b * x + d * y + f


class Surface:
    def __init__(self, size: int) -> None:
        self.size = size
        self._image: Optional[Image.Image] = Image.new("L", (size, size), BACKGROUND)
        self._draw: Optional[ImageDraw.ImageDraw] = ImageDraw.Draw(self._image)
        self._matrix: Matrix = IDENTITY
        self._weight = 1.0
        self._stack: list[tuple[Matrix, float]] = []

    @property
    def image(self) -> Optional[Image.Image]:
        return self._image

    @property
    def matrix(self) -> Matrix:
        return self._matrix

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def scale_factor(self) -> float:
        a, b, c, d, _, _ = self._matrix
        return math.sqrt(abs(a * d - b * c))

    def release(self) -> None:
        self._image = None
        self._draw = None

    # -- state -------------------------------------------------------------

    def push(self) -> None:
        self._stack.append((self._matrix, self._weight))

    def pop(self) -> None:
        if not self._stack:
            raise RuntimeError("Surface.pop() without matching push()")
        self._matrix, self._weight = self._stack.pop()

    def translate(self, x: float, y: float) -> None:
        self._matrix = _multiply(self._matrix, (1.0, 0.0, 0.0, 1.0, x, y))

    def rotate(self, radians: float) -> None:
        cos_t = math.cos(radians)
        sin_t = math.sin(radians)
        self._matrix = _multiply(self._matrix, (cos_t, sin_t, -sin_t, cos_t, 0.0, 0.0))

    def scale(self, factor: float) -> None:
        self._matrix = _multiply(self._matrix, (factor, 0.0, 0.0, factor, 0.0, 0.0))

    def stroke_weight(self, weight: float) -> None:
        self._weight = float(weight)

    # -- primitives --------------------------------------------------------

    def _canvas(self) -> ImageDraw.ImageDraw:
        if self._draw is None:
            raise SurfaceUnavailable("surface has been released")
        return self._draw

    def _device_width(self) -> int:
        return max(1, int(round(self._weight * self.scale_factor)))

    def _device_points(self, points: Iterable[tuple[float, float]]) -> list[tuple[float, float]]:
        return [_apply(self._matrix, x, y) for x, y in points]

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        draw = self._canvas()
        draw.line(self._device_points([(x1, y1), (x2, y2)]), fill=INK, width=self._device_width())

    def circle(self, x: float, y: float, diameter: float) -> None:
        """Outline circle; the stroke is centred on the radius like a canvas arc."""
        draw = self._canvas()
        cx, cy = _apply(self._matrix, x, y)
        width = self._device_width()
        outer = abs(diameter) * 0.5 * self.scale_factor + width / 2
        draw.ellipse((cx - outer, cy - outer, cx + outer, cy + outer), outline=INK, width=width)

    def polyline(self, points: Iterable[tuple[float, float]], closed: bool = False) -> None:
        draw = self._canvas()
        pts = self._device_points(points)
        if len(pts) < 2:
            return
        if closed:
            pts.append(pts[0])
        draw.line(pts, fill=INK, width=self._device_width(), joint="curve")

    def shape(self, points: Iterable[tuple[float, float]]) -> None:
        self.polyline(points, closed=True)
