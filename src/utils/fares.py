"""Ride fare estimate from distance and duration (standard KES rates)."""

from pydantic import BaseModel

from src.utils.pricing import round_half_up

BASE_FARE_KES = 220
PER_KM_KES = 35
PER_MIN_KES = 5
MIN_FARE_KES = 250
FARE_SPREAD_KES = 50


class RideMetrics(BaseModel):
    distance_km: float
    duration_mins: float


class FareRange(BaseModel):
    low: int
    high: int


def calculate_fare_kes(distance_km: float, duration_mins: float) -> int:
    raw = BASE_FARE_KES + distance_km * PER_KM_KES + duration_mins * PER_MIN_KES
    return max(MIN_FARE_KES, round_half_up(raw))


def calculate_fare_range(distance_km: float, duration_mins: float) -> FareRange:
    fare = calculate_fare_kes(distance_km, duration_mins)
    return FareRange(low=max(MIN_FARE_KES, fare - FARE_SPREAD_KES), high=fare + FARE_SPREAD_KES)
