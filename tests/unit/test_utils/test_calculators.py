"""Tests for investment calculators."""

import pytest

from src.utils.calculators import (
    PROJECTION_YEARS,
    convert_kes,
    future_value,
    project_growth,
    project_ventures,
)


@pytest.mark.unit
def test_future_value_without_growth_adds_contributions():
    assert future_value(1000, 100, 0, 1) == 1000 + 12 * 100


@pytest.mark.unit
def test_future_value_compounds_monthly():
    value = future_value(1000, 0, 12, 1)
    assert value == pytest.approx(1000 * 1.01 ** 12)


@pytest.mark.unit
def test_future_value_zero_or_negative_horizon():
    assert future_value(5000, 100, 10, 0) == 5000
    assert future_value(5000, 100, 10, -3) == 5000


@pytest.mark.unit
def test_future_value_rounds_to_whole_months():
    # 0.04 years is 0.48 months, rounded to 0
    assert future_value(5000, 100, 10, 0.04) == 5000


@pytest.mark.unit
def test_projection_points():
    points = project_growth(250_000, 10_000, 12.5)

    assert [point.years for point in points] == list(PROJECTION_YEARS)
    assert points[0].value == 250_000
    values = [point.value for point in points]
    assert values == sorted(values)


@pytest.mark.unit
def test_convert_kes():
    assert convert_kes(156_000) == {"USD": 1000.0, "GBP": 787.88, "EUR": 912.28}


@pytest.mark.unit
def test_convert_kes_clamps_input():
    assert convert_kes(-50) == {"USD": 0.0, "GBP": 0.0, "EUR": 0.0}
    assert convert_kes(5e9)["USD"] == round(1_000_000_000 / 156, 2)


@pytest.mark.unit
def test_ventures_projection():
    projection = project_ventures(250_000)
    assert projection.gain == pytest.approx(75_000)
    assert projection.total == pytest.approx(325_000)
