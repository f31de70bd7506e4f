"""
Randomized placement envelope shared by every symbol.

Drawers always draw "straight" around the origin. render_symbol() wraps the call
in a random rotation, scale and centre offset, and hands the drawer a
TransformContext that knows the active scale so stroke widths can be compensated.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable

from .surface import Surface

ROTATION_DEGREES = (-20.0, 20.0)
SCALE_RANGE = (0.5, 1.0)
OFFSET_RATIO = 0.05
DEFAULT_STROKE_FACTOR = 0.06
NEUTRAL_SCALE = 1.0


@dataclass
class TransformContext:
    rng: random.Random
    scale: float = NEUTRAL_SCALE
    rotation: float = 0.0
    offset: tuple[float, float] = field(default=(0.0, 0.0))

    def stroke(self, size: float, factor: float = DEFAULT_STROKE_FACTOR) -> float:
        return stroke_width(size, factor, self.scale)

    def to_px(self, value: float, size: float) -> float:
        return value * size

    def jitter(self, size: float, amount: float = 0.005) -> float:
        return self.rng.uniform(-size * amount, size * amount)

    def vary(self, value: float, ratio: float = 0.1) -> float:
        return value * self.rng.uniform(1 - ratio, 1 + ratio)


DrawFn = Callable[[Surface, int, TransformContext], None]


def stroke_width(size: float, factor: float, scale: float) -> float:
    """Stroke in local units that renders as size * factor device pixels."""
    return max(1.0, (size * factor) / scale)


def render_symbol(
    surface: Surface,
    size: int,
    draw_fn: DrawFn,
    rng: random.Random | None = None,
) -> TransformContext:
    rng = rng or random.Random()
    ctx = TransformContext(rng=rng)

    surface.push()
    try:
        center = size / 2
        ctx.rotation = math.radians(rng.uniform(*ROTATION_DEGREES))
        ctx.scale = rng.uniform(*SCALE_RANGE)
        ctx.offset = (
            size * rng.uniform(-OFFSET_RATIO, OFFSET_RATIO),
            size * rng.uniform(-OFFSET_RATIO, OFFSET_RATIO),
        )
        surface.translate(center, center)
        surface.rotate(ctx.rotation)
        surface.scale(ctx.scale)
        surface.translate(*ctx.offset)
        draw_fn(surface, size, ctx)
    finally:
        surface.pop()
        ctx.scale = NEUTRAL_SCALE
    return ctx
