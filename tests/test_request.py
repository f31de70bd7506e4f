"""Test request clamping and user-input parsing.

Test cases:
    - test_clamp_law()
    - test_empty_selection_rejected()
    - test_parse_accepts_strings_and_clamps()
    - test_parse_rejects_bad_numbers()
    - test_parse_rejects_unknown_categories()
    - test_request_rejects_non_numeric()

Run:
    pytest tests/test_request.py -v
"""

import pytest

from map_symbols.errors import InputError
from map_symbols.request import GenerationRequest, clamp_count, clamp_pixel_size, parse_request


def test_clamp_law():
    assert clamp_count(0) == 1
    assert clamp_count(10000) == 6000
    assert clamp_pixel_size(4) == 8
    assert clamp_pixel_size(9999) == 512

    low = GenerationRequest(frozenset({0}), 0, 4)
    assert (low.count_per_category, low.pixel_size) == (1, 8)
    high = GenerationRequest(frozenset({0}), 10000, 9999)
    assert (high.count_per_category, high.pixel_size) == (6000, 512)


def test_request_normalises_selection():
    request = GenerationRequest([2, 2, 5], 10, 28)
    assert request.category_ids == frozenset({2, 5})
    assert request.total() == 20


def test_empty_selection_rejected():
    with pytest.raises(InputError):
        GenerationRequest(frozenset(), 10, 28)


def test_parse_accepts_strings_and_clamps(registry):
    request = parse_request(registry, [0, 3], " 10000 ", "4")
    assert request.category_ids == frozenset({0, 3})
    assert request.count_per_category == 6000
    assert request.pixel_size == 8


@pytest.mark.parametrize("count", ["abc", "", "1.5", "0", "-3", 0, -1, None, True, float("nan")])
def test_parse_rejects_bad_count(registry, count):
    with pytest.raises(InputError):
        parse_request(registry, [0], count, 28)


@pytest.mark.parametrize("size", ["px", "0", -8, None])
def test_parse_rejects_bad_size(registry, size):
    with pytest.raises(InputError):
        parse_request(registry, [0], 10, size)


@pytest.mark.parametrize("ids", [[], [10], [-1], ["1"], [0, 42]])
def test_parse_rejects_unknown_categories(registry, ids):
    with pytest.raises(InputError):
        parse_request(registry, ids, 10, 28)


@pytest.mark.parametrize(
    "count, size",
    [("abc", 8), (None, 8), (True, 8), (float("inf"), 8), (10, "px"), (10, None), (10, float("nan"))],
)
def test_request_rejects_non_numeric(count, size):
    with pytest.raises(InputError):
        GenerationRequest(frozenset({0}), count, size)


def test_clamp_helpers_reject_non_numeric():
    with pytest.raises(InputError):
        clamp_count("abc")
    with pytest.raises(InputError):
        clamp_pixel_size([28])
