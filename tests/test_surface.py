"""Test the offscreen surface: matrix stack, primitives and release.

Test cases:
    - test_push_pop_restores_matrix_and_weight()
    - test_pop_without_push_raises()
    - test_translate_rotate_maps_points()
    - test_scale_factor()
    - test_line_draws_ink()
    - test_circle_stroke_centred_on_radius()
    - test_released_surface_refuses_drawing()

Run:
    pytest tests/test_surface.py -v
"""

import math

import pytest

from map_symbols.errors import SurfaceUnavailable
from map_symbols.surface import BACKGROUND, IDENTITY, INK, Surface, _apply


def test_new_surface_is_blank():
    surface = Surface(16)
    assert surface.image.size == (16, 16)
    assert surface.image.mode == "L"
    assert surface.image.getextrema() == (BACKGROUND, BACKGROUND)


def test_push_pop_restores_matrix_and_weight():
    surface = Surface(32)
    surface.stroke_weight(3)
    surface.push()
    surface.translate(5, 5)
    surface.rotate(0.3)
    surface.stroke_weight(7)
    assert surface.depth == 1
    surface.pop()
    assert surface.matrix == IDENTITY
    assert surface.depth == 0
    assert surface._weight == 3


def test_pop_without_push_raises():
    with pytest.raises(RuntimeError):
        Surface(8).pop()


def test_translate_rotate_maps_points():
    surface = Surface(100)
    surface.translate(50, 50)
    surface.rotate(math.pi / 2)
    x, y = _apply(surface.matrix, 10, 0)
    assert x == pytest.approx(50)
    assert y == pytest.approx(60)


def test_scale_factor():
    surface = Surface(100)
    surface.rotate(0.4)
    surface.scale(0.5)
    assert surface.scale_factor == pytest.approx(0.5)


def test_line_draws_ink():
    surface = Surface(20)
    surface.line(2, 10, 18, 10)
    assert surface.image.getpixel((10, 10)) == INK
    assert surface.image.getpixel((10, 2)) == BACKGROUND


def test_circle_stroke_centred_on_radius():
    surface = Surface(100)
    surface.translate(50, 50)
    surface.stroke_weight(4)
    surface.circle(0, 0, 60)
    assert surface.image.getpixel((80, 50)) == INK
    assert surface.image.getpixel((50, 50)) == BACKGROUND
    assert surface.image.getpixel((50, 20)) == INK


def test_closed_shape_joins_back_to_start():
    surface = Surface(40)
    surface.shape([(5, 5), (35, 5), (35, 35), (5, 35)])
    # closing edge from (5, 35) back to (5, 5)
    assert surface.image.getpixel((5, 20)) == INK


def test_released_surface_refuses_drawing():
    surface = Surface(8)
    surface.release()
    assert surface.image is None
    with pytest.raises(SurfaceUnavailable):
        surface.line(0, 0, 4, 4)
