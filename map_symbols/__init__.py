"""Procedural map symbol icons and batch zip export."""

from .categories import (
    DEFAULT_REGISTRY,
    PLANNED_CATEGORIES,
    SYMBOL_CATEGORIES,
    CategoryRegistry,
    SymbolCategory,
    build_registry,
)
from .engine import EngineHandle, IconEngine, encode_surface
from .errors import (
    BusyError,
    ConfigurationError,
    EngineError,
    InputError,
    MapSymbolError,
    SurfaceUnavailable,
)
from .pipeline import (
    BatchGenerationPipeline,
    GenerationResult,
    Outcome,
    PipelineState,
    ProgressEvent,
    render_previews,
)
from .request import GenerationRequest, parse_request

__all__ = [
    "DEFAULT_REGISTRY",
    "PLANNED_CATEGORIES",
    "SYMBOL_CATEGORIES",
    "CategoryRegistry",
    "SymbolCategory",
    "build_registry",
    "EngineHandle",
    "IconEngine",
    "encode_surface",
    "BusyError",
    "ConfigurationError",
    "EngineError",
    "InputError",
    "MapSymbolError",
    "SurfaceUnavailable",
    "BatchGenerationPipeline",
    "GenerationResult",
    "Outcome",
    "PipelineState",
    "ProgressEvent",
    "render_previews",
    "GenerationRequest",
    "parse_request",
]
