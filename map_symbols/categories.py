"""Symbol catalog and the drawer dispatch table built from it."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Sequence

from .drawers import DRAWERS_BY_KEY
from .errors import ConfigurationError, InputError
from .transform import DrawFn


@dataclass(frozen=True)
class SymbolCategory:
    id: int
    key: str
    label: str


SYMBOL_CATEGORIES: tuple[SymbolCategory, ...] = (
    SymbolCategory(0, "city-hall", "City hall"),
    SymbolCategory(1, "police-box", "Police box"),
    SymbolCategory(2, "high-school", "High school"),
    SymbolCategory(3, "post-office", "Post office"),
    SymbolCategory(4, "hospital", "Hospital"),
    SymbolCategory(5, "shrine", "Shrine"),
    SymbolCategory(6, "temple", "Temple"),
    SymbolCategory(7, "museum", "Museum"),
    SymbolCategory(8, "factory", "Factory"),
    SymbolCategory(9, "castle-ruins", "Castle ruins"),
)

# Drawn as blank icons until they get a design.
PLANNED_CATEGORIES: tuple[SymbolCategory, ...] = (
    SymbolCategory(10, "hot-spring", "Hot spring"),
    SymbolCategory(11, "fishing-port", "Fishing port"),
    SymbolCategory(12, "orchard", "Orchard"),
    SymbolCategory(13, "broadleaf-forest", "Broadleaf forest"),
    SymbolCategory(14, "coniferous-forest", "Coniferous forest"),
    SymbolCategory(15, "library", "Library"),
    SymbolCategory(16, "windmill", "Windmill"),
)


class CategoryRegistry:
    """Immutable, ordered catalog. Construction fails fast on a bad drawer table."""

    def __init__(
        self,
        categories: Sequence[SymbolCategory],
        drawers: Optional[Mapping[str, DrawFn]] = None,
    ) -> None:
        drawers = DRAWERS_BY_KEY if drawers is None else drawers
        self._categories = tuple(categories)

        seen_keys: set[str] = set()
        dispatch: list[DrawFn] = []
        for index, category in enumerate(self._categories):
            if category.id != index:
                raise ConfigurationError(
                    f"category ids must be contiguous from 0: {category.key!r} has id {category.id}, expected {index}"
                )
            if category.key in seen_keys:
                raise ConfigurationError(f"duplicate category key: {category.key!r}")
            seen_keys.add(category.key)
            drawer = drawers.get(category.key)
            if drawer is None:
                raise ConfigurationError(f"drawer not found for category key: {category.key!r}")
            dispatch.append(drawer)

        self._by_key = {category.key: category for category in self._categories}
        self._dispatch = tuple(dispatch)

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[SymbolCategory]:
        return iter(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return _is_index(category_id) and 0 <= category_id < len(self._categories)

    @property
    def labels(self) -> list[str]:
        return [category.label for category in self._categories]

    def get(self, category_id: int) -> SymbolCategory:
        if category_id not in self:
            raise InputError(f"unknown category: {category_id!r}")
        return self._categories[category_id]

    def by_key(self, key: str) -> SymbolCategory:
        try:
            return self._by_key[key]
        except KeyError:
            raise InputError(f"unknown category key: {key!r}") from None

    def drawer_for(self, category_id: int) -> DrawFn:
        return self._dispatch[self.get(category_id).id]

    def select(self, category_ids) -> list[SymbolCategory]:
        """Categories in registry order, filtered to ``category_ids``."""
        wanted = set(category_ids)
        return [category for category in self._categories if category.id in wanted]


def _is_index(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def build_registry(include_planned: bool = False) -> CategoryRegistry:
    categories = SYMBOL_CATEGORIES + PLANNED_CATEGORIES if include_planned else SYMBOL_CATEGORIES
    return CategoryRegistry(categories)


DEFAULT_REGISTRY = build_registry()
