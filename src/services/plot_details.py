"""Plot details page: one listing, its contact and ride links, and a fare estimate."""

import math
from typing import Awaitable, Callable, Optional, Union

from pydantic import BaseModel

from src.models.listing import Listing
from src.services.maps_client import NO_ROUTE_MESSAGE, estimate_ride
from src.services.supabase_client import PlotId, get_plot
from src.utils.config import AppConfig
from src.utils.errors import ConfigurationError, RideEstimateError
from src.utils.fares import FareRange, RideMetrics, calculate_fare_range
from src.utils.links import bolt_link, uber_link, whatsapp_link, whatsapp_message
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

INVALID_ID_MESSAGE = "Invalid plot id."
NOT_CONFIGURED_MESSAGE = "Supabase is not configured."
NOT_FOUND_MESSAGE = "Plot not found."
LOAD_FAILED_MESSAGE = "Failed to load plot."
MAPS_NOT_CONFIGURED_MESSAGE = "Ride estimates are not available: the maps key is not configured."

PlotFetcher = Callable[[PlotId], Awaitable[Optional[Listing]]]
RideEstimator = Callable[[tuple[float, float], tuple[float, float]], Awaitable[RideMetrics]]


class PlotDetails(BaseModel):
    """Outcome of loading one plot; exactly one of ``plot``/``error`` is set."""
    plot: Optional[Listing] = None
    error: Optional[str] = None
    whatsapp_url: Optional[str] = None
    uber_url: Optional[str] = None
    bolt_url: Optional[str] = None


class RideEstimate(BaseModel):
    metrics: Optional[RideMetrics] = None
    fare: Optional[FareRange] = None
    error: Optional[str] = None


def parse_plot_id(raw: Union[int, str, None]) -> Optional[int]:
    """Route parameter to a numeric id; None when it is not a finite number."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        number = float(str(raw).strip() or "nan")
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def details_for(plot: Listing) -> PlotDetails:
    """Attach outbound links. Details pages have no fallback phone."""
    return PlotDetails(
        plot=plot,
        whatsapp_url=whatsapp_link(plot.seller_phone, whatsapp_message(plot.name)),
        uber_url=uber_link(plot.latitude, plot.longitude, plot.name),
        bolt_url=bolt_link(plot.latitude, plot.longitude),
    )


async def load_plot_details(
    raw_id: Union[int, str, None],
    fetch: PlotFetcher = get_plot,
) -> PlotDetails:
    if not AppConfig.is_backend_configured():
        return PlotDetails(error=NOT_CONFIGURED_MESSAGE)

    plot_id = parse_plot_id(raw_id)
    if plot_id is None:
        return PlotDetails(error=INVALID_ID_MESSAGE)

    try:
        plot = await fetch(plot_id)
    except ConfigurationError:
        return PlotDetails(error=NOT_CONFIGURED_MESSAGE)
    except Exception as e:
        logger.error("Error loading plot details", plot_id=plot_id, error=str(e), exc_info=True)
        return PlotDetails(error=LOAD_FAILED_MESSAGE)

    if plot is None:
        return PlotDetails(error=NOT_FOUND_MESSAGE)
    return details_for(plot)


async def estimate_ride_to_plot(
    plot: Listing,
    origin: tuple[float, float],
    estimate: RideEstimator = estimate_ride,
) -> RideEstimate:
    """Distance, duration and fare range from ``origin`` to the plot."""
    if not plot.has_coordinates:
        return RideEstimate(error=NO_ROUTE_MESSAGE)

    try:
        metrics = await estimate(origin, (plot.latitude, plot.longitude))
    except ConfigurationError:
        return RideEstimate(error=MAPS_NOT_CONFIGURED_MESSAGE)
    except RideEstimateError as e:
        return RideEstimate(error=str(e))

    return RideEstimate(
        metrics=metrics,
        fare=calculate_fare_range(metrics.distance_km, metrics.duration_mins),
    )
