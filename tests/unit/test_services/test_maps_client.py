"""Tests for Distance Matrix lookups."""

import pytest
import requests
from unittest.mock import MagicMock, patch

from src.services.maps_client import (
    DISTANCE_MATRIX_URL,
    NO_ROUTE_MESSAGE,
    UNAVAILABLE_MESSAGE,
    estimate_ride,
    parse_distance_matrix,
)
from src.utils.errors import MapsNotConfiguredError, RideEstimateError


def matrix_payload(element: dict, status: str = "OK") -> dict:
    return {"status": status, "rows": [{"elements": [element]}]}


@pytest.mark.unit
def test_parse_distance_matrix():
    payload = matrix_payload({
        "status": "OK",
        "distance": {"value": 12_500},
        "duration": {"value": 1_800},
    })

    metrics = parse_distance_matrix(payload)

    assert metrics.distance_km == 12.5
    assert metrics.duration_mins == 30


@pytest.mark.unit
def test_parse_distance_matrix_request_failure():
    with pytest.raises(RideEstimateError, match=UNAVAILABLE_MESSAGE):
        parse_distance_matrix({"status": "REQUEST_DENIED"})


@pytest.mark.unit
@pytest.mark.parametrize("element", [
    {"status": "ZERO_RESULTS"},
    {"status": "OK", "distance": {"value": 0}, "duration": {"value": 60}},
    {"status": "OK", "distance": {"value": 1000}},
])
def test_parse_distance_matrix_no_route(element):
    with pytest.raises(RideEstimateError, match=NO_ROUTE_MESSAGE):
        parse_distance_matrix(matrix_payload(element))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_estimate_ride_requires_key(monkeypatch):
    monkeypatch.delenv("GOOGLE_MAPS_API_KEY", raising=False)
    with pytest.raises(MapsNotConfiguredError):
        await estimate_ride((-1.29, 36.82), (-1.15, 36.96))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_estimate_ride_calls_distance_matrix():
    response = MagicMock()
    response.json.return_value = matrix_payload({
        "status": "OK",
        "distance": {"value": 5_000},
        "duration": {"value": 600},
    })

    with patch("src.services.maps_client.requests.get", return_value=response) as mock_get:
        metrics = await estimate_ride((-1.29, 36.82), (-1.15, 36.96), api_key="maps-key")

    assert mock_get.call_args[0][0] == DISTANCE_MATRIX_URL
    params = mock_get.call_args[1]["params"]
    assert params["origins"] == "-1.29,36.82"
    assert params["destinations"] == "-1.15,36.96"
    assert params["mode"] == "driving"
    assert metrics.distance_km == 5
    assert metrics.duration_mins == 10


@pytest.mark.unit
@pytest.mark.asyncio
async def test_estimate_ride_network_error():
    with patch(
        "src.services.maps_client.requests.get",
        side_effect=requests.ConnectionError("dns failure"),
    ):
        with pytest.raises(RideEstimateError, match=UNAVAILABLE_MESSAGE):
            await estimate_ride((0, 0), (1, 1), api_key="maps-key")
