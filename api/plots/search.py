"""Listing search endpoint for Vercel."""

from http.server import BaseHTTPRequestHandler
import asyncio
import json
from urllib.parse import parse_qs, urlparse

from src.models.filters import ALL_CATEGORIES, FilterSet
from src.services.listing_query import LOAD_FAILED_MESSAGE, NOT_CONFIGURED_MESSAGE, build_plot_query
from src.services.supabase_client import search_plots
from src.utils.config import AppConfig
from src.utils.errors import ConfigurationError
from src.utils.logging import correlation_context, get_structured_logger
from src.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)


def filters_from_query(query: dict) -> FilterSet:
    """Build a filter set from ``parse_qs`` output; the first value of each key wins."""
    def first(key: str, default: str = "") -> str:
        values = query.get(key) or [default]
        return values[0]

    return FilterSet(
        location=first("location"),
        min_price=first("min_price"),
        max_price=first("max_price"),
        category=first("category", ALL_CATEGORIES) or ALL_CATEGORIES,
    )


async def run_search(filters: FilterSet) -> tuple[int, dict]:
    """Status code and JSON body for one search."""
    if not AppConfig.is_backend_configured():
        return 503, {"error": NOT_CONFIGURED_MESSAGE}

    with correlation_context() as correlation_id:
        try:
            query = build_plot_query(filters)
            plots = await search_plots(query)
        except ConfigurationError:
            return 503, {"error": NOT_CONFIGURED_MESSAGE}
        except Exception as e:
            logger.error("Error searching plots", error=str(e), exc_info=True)
            return 502, {"error": LOAD_FAILED_MESSAGE, "correlation_id": correlation_id}

    return 200, {
        "plots": [plot.model_dump(mode="json") for plot in plots],
        "count": len(plots),
    }


class handler(BaseHTTPRequestHandler):
    """GET /api/plots/search?location=&min_price=&max_price=&category="""

    def do_GET(self):
        filters = filters_from_query(parse_qs(urlparse(self.path).query))
        status, body = asyncio.run(run_search(filters))
        self._send_json(status, body)

    def _send_json(self, status: int, body: dict):
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(body).encode('utf-8'))
