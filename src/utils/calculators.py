"""Investment planning calculators: compound growth, FX reference rates, ventures."""

from pydantic import BaseModel

PROJECTION_YEARS = (0, 1, 2, 3, 4, 5, 7, 10)

# KES per one unit of the foreign currency
REFERENCE_RATES = {
    "USD": 156,
    "GBP": 198,
    "EUR": 171,
}

MAX_CONVERTIBLE_KES = 1_000_000_000
VENTURES_RETURN_RATE = 0.30


class ProjectionPoint(BaseModel):
    years: int
    value: float


class VenturesProjection(BaseModel):
    amount: float
    gain: float
    total: float


def clamp_number(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def future_value(initial: float, monthly: float, annual_return_pct: float, years: float) -> float:
    """Monthly compounding with a contribution added at the end of every month.

    The horizon is rounded to whole months and never negative.
    """
    rate = annual_return_pct / 100 / 12
    months = max(0, round(years * 12))
    value = initial
    for _ in range(months):
        value = value * (1 + rate) + monthly
    return value


def project_growth(initial: float, monthly: float, annual_return_pct: float) -> list[ProjectionPoint]:
    return [
        ProjectionPoint(years=years, value=future_value(initial, monthly, annual_return_pct, years))
        for years in PROJECTION_YEARS
    ]


def convert_kes(amount_kes: float) -> dict[str, float]:
    """Convert KES to each reference currency, two decimals."""
    amount = clamp_number(amount_kes, 0, MAX_CONVERTIBLE_KES)
    return {code: round(amount / rate, 2) for code, rate in REFERENCE_RATES.items()}


def project_ventures(amount: float) -> VenturesProjection:
    gain = amount * VENTURES_RETURN_RATE
    return VenturesProjection(amount=amount, gain=gain, total=amount + gain)
