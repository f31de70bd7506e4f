from __future__ import annotations


class MapSymbolError(Exception):
    """Base class for every error raised by map_symbols."""


class ConfigurationError(MapSymbolError):
    """Catalog and drawer table disagree; raised once at start-up."""


class InputError(MapSymbolError):
    """Rejected request parameters. Nothing was started or changed."""


class EngineError(MapSymbolError):
    """The rendering backend failed to start or lost its pixel buffer."""


class SurfaceUnavailable(EngineError):
    pass


class BusyError(MapSymbolError):
    """A generation run is already active on this pipeline."""
