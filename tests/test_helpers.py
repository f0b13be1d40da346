"""Numeric coercion and formatting helpers."""

import math

import pytest

from utils.helpers import ensure_number, safe_divide, round_cents, round_up_to


@pytest.mark.parametrize("value, expected", [
    (None, 7.0), ("12.5", 12.5), ("abc", 7.0), (math.nan, 7.0), (math.inf, 7.0), (3, 3.0),
])
def test_ensure_number(value, expected):
    assert ensure_number(value, 7) == expected


def test_safe_divide():
    assert safe_divide(10, 4) == 2.5
    assert safe_divide(10, 0) == 0.0
    assert safe_divide(10, 0, default=-1) == -1


def test_round_cents_half_away_from_zero():
    assert round_cents(0.125) == 0.13
    assert round_cents(-0.125) == -0.13
    assert round_cents(44.928) == 44.93


def test_round_up_to():
    assert round_up_to(1490, 50) == 1500
    assert round_up_to(1500, 50) == 1500
    assert round_up_to(5.2, 2) == 6
    assert round_up_to(7, 0) == 7


def test_rounding_passes_non_finite_values_through():
    assert round_up_to(math.inf, 50) == math.inf
    assert round_cents(math.inf) == math.inf
    assert math.isnan(round_cents(math.nan))
