"""Generation request: clamped numbers and a validated category selection."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .categories import CategoryRegistry
from .errors import InputError

MAX_PER_CATEGORY = 6000
MIN_PIXEL_SIZE = 8
MAX_PIXEL_SIZE = 512


def _as_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise InputError(f"{field} must be numeric, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise InputError(f"{field} must be numeric, got {value!r}") from None


def clamp_count(value: int) -> int:
    return max(1, min(MAX_PER_CATEGORY, _as_int(value, "count")))


def clamp_pixel_size(value: int) -> int:
    return max(MIN_PIXEL_SIZE, min(MAX_PIXEL_SIZE, _as_int(value, "pixel size")))


@dataclass(frozen=True)
class GenerationRequest:
    category_ids: frozenset[int]
    count_per_category: int
    pixel_size: int

    def __post_init__(self) -> None:
        ids = frozenset(self.category_ids)
        if not ids:
            raise InputError("select at least one category")
        object.__setattr__(self, "category_ids", ids)
        object.__setattr__(self, "count_per_category", clamp_count(self.count_per_category))
        object.__setattr__(self, "pixel_size", clamp_pixel_size(self.pixel_size))

    def total(self) -> int:
        return len(self.category_ids) * self.count_per_category


def _positive_int(value, field: str, valid: str) -> int:
    if isinstance(value, bool):
        raise InputError(f"{field} must be a number ({valid}), got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        try:
            parsed = int(value, 10)
        except ValueError:
            raise InputError(f"{field} must be a number ({valid}), got {value!r}") from None
    elif isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise InputError(f"{field} must be a number ({valid}), got {value!r}")
        parsed = int(value)
    else:
        raise InputError(f"{field} must be a number ({valid}), got {value!r}")
    if parsed <= 0:
        raise InputError(f"{field} must be positive ({valid}), got {parsed}")
    return parsed


def parse_request(
    registry: CategoryRegistry,
    category_ids: Iterable,
    count,
    pixel_size,
) -> GenerationRequest:
    """Validate raw user input. Raises InputError without touching any state."""
    per_category = _positive_int(count, "count", f"1 - {MAX_PER_CATEGORY}")
    size = _positive_int(pixel_size, "pixel size", f"{MIN_PIXEL_SIZE} - {MAX_PIXEL_SIZE}")

    selected: set[int] = set()
    for raw in category_ids:
        if raw not in registry:
            raise InputError(f"unknown category: {raw!r}")
        selected.add(raw)
    if not selected:
        raise InputError("select at least one category")

    return GenerationRequest(frozenset(selected), per_category, size)
