"""
Rendering backend and its shared handle.

IconEngine turns (category id, pixel size) into PNG bytes. EngineHandle hands out
exactly one IconEngine per handle: the first acquire() starts initialization and
every caller awaits the same future, including callers that arrive while it is
still in flight. A failed initialization stays failed until reset().
"""
from __future__ import annotations

import asyncio
import io
import logging
import math
import random
from typing import Callable, Optional

from PIL import features

from .categories import DEFAULT_REGISTRY, CategoryRegistry
from .errors import EngineError, InputError, SurfaceUnavailable
from .surface import Surface
from .transform import render_symbol

log = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = 28
MIN_CANVAS_SIZE = 8
IMAGE_FORMAT = "PNG"
IMAGE_EXTENSION = "png"


def encode_surface(surface: Surface) -> bytes:
    image = surface.image
    if image is None:
        raise SurfaceUnavailable("rendering backend could not expose the surface pixel buffer")
    buffer = io.BytesIO()
    try:
        image.save(buffer, format=IMAGE_FORMAT, optimize=False)
    except (OSError, ValueError) as err:
        raise SurfaceUnavailable(f"failed to encode surface: {err}") from err
    return buffer.getvalue()


class IconEngine:
    def __init__(
        self,
        registry: CategoryRegistry = DEFAULT_REGISTRY,
        rng: Optional[random.Random] = None,
        surface_factory: Callable[[int], Surface] = Surface,
    ) -> None:
        self.registry = registry
        self._rng = rng or random.Random()
        self._surface_factory = surface_factory

    def create_surface(self, size: int) -> Surface:
        return self._surface_factory(size)

    def generate_icon(self, category_id: int, size: int = DEFAULT_CANVAS_SIZE) -> bytes:
        drawer = self.registry.drawer_for(category_id)
        canvas_size = _canvas_size(size)

        surface = self.create_surface(canvas_size)
        try:
            render_symbol(surface, canvas_size, drawer, self._rng)
            return encode_surface(surface)
        finally:
            surface.release()


def _canvas_size(size) -> int:
    try:
        value = float(size)
    except (TypeError, ValueError):
        raise InputError(f"pixel size must be numeric, got {size!r}") from None
    if not math.isfinite(value):
        raise InputError(f"pixel size must be finite, got {size!r}")
    return max(MIN_CANVAS_SIZE, math.floor(value))


def _check_backend() -> None:
    if not features.check_codec("zlib"):
        raise EngineError("Pillow was built without zlib; PNG encoding is unavailable")


def create_engine(registry: CategoryRegistry = DEFAULT_REGISTRY) -> IconEngine:
    _check_backend()
    engine = IconEngine(registry)
    # One throwaway render proves the surface/encoder path works end to end.
    encode_surface(engine.create_surface(MIN_CANVAS_SIZE))
    return engine


class EngineHandle:
    """Single-flight, memoized access to one IconEngine."""

    def __init__(self, factory: Optional[Callable[[], IconEngine]] = None) -> None:
        self._factory = factory or create_engine
        self._future: Optional[asyncio.Future] = None

    @property
    def ready(self) -> bool:
        future = self._future
        return (
            future is not None
            and future.done()
            and not future.cancelled()
            and future.exception() is None
        )

    async def acquire(self) -> IconEngine:
        if self._future is None:
            self._future = asyncio.ensure_future(self._initialize())
        return await asyncio.shield(self._future)

    def reset(self) -> None:
        """Forget the cached engine or failure so the next acquire() starts over."""
        if self._future is not None and not self._future.done():
            self._future.cancel()
        self._future = None

    async def _initialize(self) -> IconEngine:
        log.info("initializing rendering engine")
        # Let other callers register on the pending future before the work runs.
        await asyncio.sleep(0)
        try:
            engine = self._factory()
        except EngineError:
            log.exception("rendering engine failed to initialize")
            raise
        except Exception as err:
            log.exception("rendering engine failed to initialize")
            raise EngineError(f"rendering engine failed to initialize: {err}") from err
        log.info("rendering engine ready")
        return engine
