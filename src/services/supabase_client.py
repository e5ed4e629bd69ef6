"""Supabase client wrapper and the ``plots``/``leads`` gateway operations."""

import asyncio
from typing import Any, Callable, Optional, Union
from supabase import create_client, Client
from supabase.client import ClientOptions

from src.models.filters import PlotQuery
from src.models.lead import Lead
from src.models.listing import Listing, listing_from_row
from src.utils.config import AppConfig
from src.utils.errors import BackendNotConfiguredError, SupabaseError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

PLOTS_TABLE = "plots"
LEADS_TABLE = "leads"

PlotId = Union[int, str]

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create the Supabase client singleton."""
    global _client

    if _client is None:
        url = AppConfig.supabase_url()
        key = AppConfig.supabase_key()

        if not url or not key:
            raise BackendNotConfiguredError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=True,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", supabase_url=url)

    return _client


def reset_supabase_client() -> None:
    """Drop the cached client (configuration changed, tests)."""
    global _client
    _client = None


class SupabaseClient:
    """Async context manager for the Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                error=str(exc_val),
                error_type=exc_type.__name__
            )
        return False


async def run_blocking(call: Callable[[], Any]) -> Any:
    """Run a blocking client call off the event loop under the backend timeout."""
    return await asyncio.wait_for(
        asyncio.to_thread(call),
        timeout=AppConfig.backend_timeout_seconds()
    )


def apply_plot_query(builder: Any, query: PlotQuery) -> Any:
    """Attach the query's predicates to a PostgREST select builder."""
    if query.location_term:
        builder = builder.ilike("location", f"%{query.location_term}%")
    if query.category:
        builder = builder.eq("category", query.category)
    if query.min_price is not None:
        builder = builder.gte("price", query.min_price)
    if query.max_price is not None:
        builder = builder.lte("price", query.max_price)
    return builder.limit(query.limit)


async def search_plots(query: PlotQuery) -> list[Listing]:
    """Filtered read over ``plots``. Verification state is never filtered on."""
    async with SupabaseClient() as client:
        try:
            builder = apply_plot_query(client.table(PLOTS_TABLE).select("*"), query)
            result = await run_blocking(builder.execute)
            return [listing_from_row(row) for row in (result.data or [])]
        except Exception as e:
            raise SupabaseError(f"Failed to search plots: {e}") from e


async def get_plot(plot_id: PlotId) -> Optional[Listing]:
    """Get one plot by id, or None when it does not exist."""
    async with SupabaseClient() as client:
        try:
            builder = client.table(PLOTS_TABLE).select("*").eq("id", plot_id).limit(1)
            result = await run_blocking(builder.execute)
            return listing_from_row(result.data[0]) if result.data else None
        except Exception as e:
            raise SupabaseError(f"Failed to get plot {plot_id}: {e}") from e


async def list_admin_plots() -> list[Listing]:
    """All plots, newest id first."""
    async with SupabaseClient() as client:
        try:
            builder = client.table(PLOTS_TABLE).select("*").order("id", desc=True)
            result = await run_blocking(builder.execute)
            return [listing_from_row(row) for row in (result.data or [])]
        except Exception as e:
            raise SupabaseError(f"Failed to list plots: {e}") from e


async def create_plot(row: dict) -> Listing:
    """Insert a single plot and return it with its generated id."""
    async with SupabaseClient() as client:
        try:
            result = await run_blocking(client.table(PLOTS_TABLE).insert(row).execute)
        except Exception as e:
            raise SupabaseError(f"Failed to create plot: {e}") from e
        if not result.data:
            raise SupabaseError("Failed to create plot: no data returned")
        return listing_from_row(result.data[0])


async def update_plot(plot_id: PlotId, updates: dict) -> Listing:
    """Update a plot by id."""
    async with SupabaseClient() as client:
        try:
            builder = client.table(PLOTS_TABLE).update(updates).eq("id", plot_id)
            result = await run_blocking(builder.execute)
        except Exception as e:
            raise SupabaseError(f"Failed to update plot {plot_id}: {e}") from e
        if not result.data:
            raise SupabaseError(f"Failed to update plot: {plot_id}")
        return listing_from_row(result.data[0])


async def delete_plot(plot_id: PlotId) -> None:
    """Hard delete; there is no tombstone."""
    async with SupabaseClient() as client:
        try:
            builder = client.table(PLOTS_TABLE).delete().eq("id", plot_id)
            await run_blocking(builder.execute)
        except Exception as e:
            raise SupabaseError(f"Failed to delete plot {plot_id}: {e}") from e


async def insert_lead(lead: Lead) -> None:
    """Insert a row into ``leads``."""
    async with SupabaseClient() as client:
        try:
            await run_blocking(client.table(LEADS_TABLE).insert(lead.model_dump()).execute)
        except Exception as e:
            raise SupabaseError(f"Failed to insert lead: {e}") from e

