"""Google Distance Matrix lookups for ride estimates."""

from typing import Optional

import requests

from src.services.supabase_client import run_blocking
from src.utils.config import AppConfig
from src.utils.errors import MapsNotConfiguredError, RideEstimateError
from src.utils.fares import RideMetrics
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"

UNAVAILABLE_MESSAGE = "Unable to estimate distance right now."
NO_ROUTE_MESSAGE = "Distance estimate unavailable for this location."


def parse_distance_matrix(payload: dict) -> RideMetrics:
    """Read the single origin/destination element of a Distance Matrix response."""
    if payload.get("status") != "OK":
        raise RideEstimateError(UNAVAILABLE_MESSAGE)

    rows = payload.get("rows") or []
    elements = (rows[0].get("elements") or []) if rows else []
    if not elements:
        raise RideEstimateError(UNAVAILABLE_MESSAGE)

    element = elements[0]
    distance = (element.get("distance") or {}).get("value")
    duration = (element.get("duration") or {}).get("value")
    if element.get("status") != "OK" or not distance or not duration:
        raise RideEstimateError(NO_ROUTE_MESSAGE)

    return RideMetrics(distance_km=distance / 1000, duration_mins=duration / 60)


def _fetch_distance_matrix(origin: str, destination: str, api_key: str) -> dict:
    response = requests.get(
        DISTANCE_MATRIX_URL,
        params={
            "origins": origin,
            "destinations": destination,
            "mode": "driving",
            "key": api_key,
        },
        timeout=AppConfig.backend_timeout_seconds(),
    )
    response.raise_for_status()
    return response.json()


async def estimate_ride(
    origin: tuple[float, float],
    destination: tuple[float, float],
    api_key: Optional[str] = None,
) -> RideMetrics:
    """Driving distance and duration between two ``(lat, lng)`` points."""
    api_key = api_key or AppConfig.maps_api_key()
    if not api_key:
        raise MapsNotConfiguredError("GOOGLE_MAPS_API_KEY must be set")

    origin_param = f"{origin[0]},{origin[1]}"
    destination_param = f"{destination[0]},{destination[1]}"

    try:
        payload = await run_blocking(
            lambda: _fetch_distance_matrix(origin_param, destination_param, api_key)
        )
    except Exception as e:
        logger.error("Distance matrix request failed", error=str(e))
        raise RideEstimateError(UNAVAILABLE_MESSAGE) from e

    return parse_distance_matrix(payload)
