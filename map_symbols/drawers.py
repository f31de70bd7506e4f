"""
Per-category symbol geometry.

Every drawer receives the surface already centred and transformed, the canvas
size in pixels, and the TransformContext for the current render. Coordinates are
local units roughly spanning [-0.5, 0.5] * size. All proportions are re-sampled
on every call so repeated icons differ while staying recognisable.

Tuning notes (ranges are fractions of size):
    city-hall     outer circle d 0.70-0.80, inner d 0.50-0.60
    high-school   ring d 0.70-0.80, inner radius r 0.30-0.40
    factory       hub radius 0.20-0.30, spokes reach 1.8 r
    museum        roof apex y -0.30..-0.40, base y 0.30..0.40
"""
from __future__ import annotations

import math

from .surface import Surface
from .transform import DrawFn, TransformContext

STROKE_RANGE = (0.07, 0.10)


def _weight(surface: Surface, size: int, ctx: TransformContext, low: float, high: float) -> None:
    surface.stroke_weight(ctx.stroke(size, ctx.rng.uniform(low, high)))


def _draw_city_hall(surface: Surface, size: int, ctx: TransformContext) -> None:
    rng = ctx.rng
    surface.push()
    _weight(surface, size, ctx, 0.05, 0.08)
    surface.circle(0, 0, size * rng.uniform(0.7, 0.8))
    _weight(surface, size, ctx, 0.04, 0.06)
    surface.circle(0, 0, size * rng.uniform(0.5, 0.6))
    surface.pop()


def _draw_police_box(surface: Surface, size: int, ctx: TransformContext) -> None:
    reach = size * ctx.vary(0.3, 0.05)
    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    surface.line(-reach, -reach, reach, reach)
    surface.line(-reach, reach, reach, -reach)
    surface.pop()


def _draw_high_school(surface: Surface, size: int, ctx: TransformContext) -> None:
    rng = ctx.rng
    r = size * rng.uniform(0.3, 0.4)

    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    surface.circle(0, 0, size * rng.uniform(0.7, 0.8))

    surface.line(0, -r, 0, -r * 0.35)
    surface.line(-r * 0.95, -r * 0.35, r * 0.95, -r * 0.35)
    surface.line(-r * 0.6, -r * 0.35, r * 0.6, r * 0.9)
    surface.line(r * 0.6, -r * 0.35, -r * 0.6, r * 0.9)
    surface.pop()


def _draw_post_office(surface: Surface, size: int, ctx: TransformContext) -> None:
    rng = ctx.rng
    r = size * rng.uniform(0.3, 0.4)

    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    surface.circle(0, 0, size * rng.uniform(0.7, 0.8))

    surface.line(-r * 0.95, -r * 0.15, r * 0.95, -r * 0.15)
    surface.line(-r * 0.95, -r * 0.55, r * 0.95, -r * 0.55)
    surface.line(0, -r * 0.15, 0, r * 0.95)
    surface.pop()


def _draw_hospital(surface: Surface, size: int, ctx: TransformContext) -> None:
    r = size * ctx.rng.uniform(0.3, 0.4)

    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    surface.shape([
        (-r * 0.8, -r * 0.8),
        (-r * 0.8, r * 0.35),
        (0, r * 0.8),
        (r * 0.8, r * 0.35),
        (r * 0.8, -r * 0.8),
    ])
    surface.line(-r * 0.6, 0, r * 0.6, 0)
    surface.line(0, -r * 0.6, 0, r * 0.6)
    surface.pop()


def _draw_shrine(surface: Surface, size: int, ctx: TransformContext) -> None:
    pillar_x = size * ctx.vary(0.3, 0.08)
    top = -size * 0.4
    beam_y = -size * ctx.rng.uniform(0.08, 0.14)

    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    surface.line(-pillar_x, size * 0.4, -pillar_x, top)
    surface.line(pillar_x, size * 0.4, pillar_x, top)
    surface.line(-size * 0.5, top, size * 0.5, top)
    surface.line(-pillar_x, beam_y, pillar_x, beam_y)
    surface.pop()


def _draw_temple(surface: Surface, size: int, ctx: TransformContext) -> None:
    arm = ctx.rng.uniform(0.2, 0.3) * size

    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    for i in range(4):
        surface.push()
        surface.rotate(i * math.pi / 2)
        surface.polyline([(-arm, -arm), (0, -arm), (0, 0)])
        surface.pop()
    surface.pop()


def _draw_museum(surface: Surface, size: int, ctx: TransformContext) -> None:
    rng = ctx.rng
    y1 = -size * rng.uniform(0.3, 0.4)
    y2 = size * rng.uniform(-0.1, 0.1)
    y3 = size * rng.uniform(0.3, 0.4)

    x0 = -size * rng.uniform(0.45, 0.5)
    x1 = -size * rng.uniform(0.35, 0.45)
    x2 = -size * rng.uniform(0.15, 0.25)
    x3, x4, x5 = abs(x2), abs(x1), abs(x0)

    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    surface.line(0, y1, x1, y2)
    surface.line(0, y1, x4, y2)
    surface.line(x0, y2, x5, y2)
    for x in (x1, x2, x3, x4):
        surface.line(x, y2, x, y3)
    surface.line(x0, y3, x5, y3)
    surface.pop()


def _draw_factory(surface: Surface, size: int, ctx: TransformContext) -> None:
    r = size * ctx.rng.uniform(0.2, 0.3)

    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    surface.circle(0, 0, r * 2)
    for i in range(8):
        surface.push()
        surface.rotate(i * math.pi / 4)
        surface.line(r, 0, r * 1.8, 0)
        surface.pop()
    surface.pop()


def _draw_castle_ruins(surface: Surface, size: int, ctx: TransformContext) -> None:
    rng = ctx.rng
    x1 = -size * rng.uniform(0.4, 0.5)
    x2 = -size * rng.uniform(0.15, 0.25)
    x3, x4 = abs(x2), abs(x1)

    y1 = -size * rng.uniform(0.4, 0.5)
    y2 = -size * rng.uniform(0.05, 0.15)
    y3 = size * rng.uniform(0.4, 0.5)

    surface.push()
    _weight(surface, size, ctx, *STROKE_RANGE)
    surface.polyline([
        (x1, y3),
        (x1, y2),
        (x2, y2),
        (x2, y1),
        (x3, y1),
        (x3, y2),
        (x4, y2),
        (x4, y3),
    ])
    surface.pop()


def _draw_placeholder(surface: Surface, size: int, ctx: TransformContext) -> None:
    # Planned symbol without a design yet: the blank background is the icon.
    surface.push()
    surface.pop()


DRAWERS_BY_KEY: dict[str, DrawFn] = {
    "city-hall": _draw_city_hall,
    "police-box": _draw_police_box,
    "high-school": _draw_high_school,
    "post-office": _draw_post_office,
    "hospital": _draw_hospital,
    "shrine": _draw_shrine,
    "temple": _draw_temple,
    "museum": _draw_museum,
    "factory": _draw_factory,
    "castle-ruins": _draw_castle_ruins,
    "hot-spring": _draw_placeholder,
    "fishing-port": _draw_placeholder,
    "orchard": _draw_placeholder,
    "broadleaf-forest": _draw_placeholder,
    "coniferous-forest": _draw_placeholder,
    "library": _draw_placeholder,
    "windmill": _draw_placeholder,
}

PLACEHOLDER_KEYS = frozenset(key for key, fn in DRAWERS_BY_KEY.items() if fn is _draw_placeholder)
