"""Tests for KES price formatting and parsing."""

import pytest

from src.utils.pricing import (
    format_kes,
    format_price,
    is_tbd,
    normalize_price_input,
    parse_price,
    parse_price_bound,
    round_half_up,
)


@pytest.mark.unit
@pytest.mark.parametrize("raw, formatted", [
    ("1200000", "1,200,000"),
    ("1,200,000", "1,200,000"),
    ("KES 950000", "950,000"),
    ("999", "999"),
    ("1000", "1,000"),
    ("", ""),
    ("abc", ""),
])
def test_format_price(raw, formatted):
    assert format_price(raw) == formatted


@pytest.mark.unit
@pytest.mark.parametrize("digits", ["0", "7", "1000", "1200000", "987654321012"])
def test_format_then_parse_round_trip(digits):
    """Formatting never changes the number."""
    assert parse_price(format_price(digits)) == int(digits)


@pytest.mark.unit
def test_parse_price_without_digits_is_zero():
    assert parse_price("TBD") == 0
    assert parse_price("") == 0


@pytest.mark.unit
def test_tbd_is_kept_while_typing():
    assert is_tbd(" tbd ")
    assert normalize_price_input("tbd") == "TBD"
    assert normalize_price_input("1500000") == "1,500,000"


@pytest.mark.unit
@pytest.mark.parametrize("raw, expected", [
    ("", None),
    ("   ", None),
    (None, None),
    ("abc", None),
    ("1_000", None),
    ("inf", None),
    ("nan", None),
    ("500000", 500000),
    (" 2500 ", 2500),
    ("1e6", 1000000),
    ("1500.5", 1500.5),
])
def test_parse_price_bound(raw, expected):
    assert parse_price_bound(raw) == expected


@pytest.mark.unit
def test_parse_price_bound_integral_values_are_ints():
    assert isinstance(parse_price_bound("2000.0"), int)


@pytest.mark.unit
def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


@pytest.mark.unit
def test_format_kes():
    assert format_kes(1234.5) == "KES 1,235"
    assert format_kes(0) == "KES 0"
