"""Listing query composer - keep a result set consistent with the filter set.

Location keystrokes are debounced; numeric and category changes query right
away. Every issued query carries a generation number and only the response
for the current generation may replace the displayed results, whatever order
responses arrive in.
"""

import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from src.models.filters import ALL_CATEGORIES, DEFAULT_FILTERS, FilterSet, PlotQuery
from src.models.listing import Listing
from src.services.supabase_client import search_plots
from src.utils.config import AppConfig
from src.utils.errors import ConfigurationError
from src.utils.logging import correlation_context, get_structured_logger, log_timing
from src.utils.pricing import parse_price_bound

logger = get_structured_logger(__name__)

NOT_CONFIGURED_MESSAGE = "Data is not available: the backend is not configured yet."
LOAD_FAILED_MESSAGE = "Unable to load plots right now."

PlotFetcher = Callable[[PlotQuery], Awaitable[list[Listing]]]


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
    NOT_CONFIGURED = "not_configured"


def build_plot_query(filters: FilterSet, limit: Optional[int] = None) -> PlotQuery:
    """Translate a filter set into predicates, dropping anything unset or malformed."""
    location_term = filters.location.strip()
    category = filters.category if filters.category != ALL_CATEGORIES else None

    return PlotQuery(
        location_term=location_term or None,
        category=category or None,
        # Bounds are applied literally; min > max is not swapped
        min_price=parse_price_bound(filters.min_price),
        max_price=parse_price_bound(filters.max_price),
        limit=limit or AppConfig.listing_page_size(),
    )


class ListingQueryComposer:
    """Session-scoped filter state plus the listings it currently selects."""

    def __init__(
        self,
        fetch: PlotFetcher = search_plots,
        debounce_seconds: Optional[float] = None,
        page_size: Optional[int] = None,
    ):
        self.fetch = fetch
        self.debounce_seconds = (
            AppConfig.location_debounce_seconds() if debounce_seconds is None else debounce_seconds
        )
        self.page_size = page_size
        self.filters: FilterSet = DEFAULT_FILTERS.model_copy()
        self.plots: list[Listing] = []
        self.status = QueryStatus.IDLE
        self.error: Optional[str] = None
        self._generation = 0
        self._debounce_timer: Optional[asyncio.Task] = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def loading(self) -> bool:
        return self.status == QueryStatus.LOADING

    def update_filter(self, partial: dict[str, Any]) -> None:
        """Merge a partial change and schedule the re-query it implies.

        Values are not validated here; query construction ignores malformed
        bounds.
        """
        unknown = set(partial) - set(FilterSet.model_fields)
        if unknown:
            raise ValueError(f"Unknown filter fields: {sorted(unknown)}")

        changed = {key for key, value in partial.items() if getattr(self.filters, key) != value}
        if not changed:
            return

        self.filters = self.filters.model_copy(update=partial)
        logger.debug("Filters updated", changed_fields=sorted(changed))

        if changed == {"location"}:
            self._schedule_debounced_query()
        else:
            self.refresh()

    def reset_filters(self) -> None:
        """Restore the unconstrained default and re-query if anything changed."""
        if self.filters == DEFAULT_FILTERS:
            return
        self.filters = DEFAULT_FILTERS.model_copy()
        self.refresh()

    def refresh(self) -> asyncio.Task:
        """Issue a query for the current filters now, superseding earlier ones."""
        self._cancel_debounce_timer()
        self._generation += 1
        self.status = QueryStatus.LOADING
        self.error = None

        task = asyncio.create_task(self._run_query(self._generation, self.filters.model_copy()))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until no debounce timer or query is pending."""
        while True:
            pending = set(self._in_flight)
            if self._debounce_timer is not None and not self._debounce_timer.done():
                pending.add(self._debounce_timer)
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def _schedule_debounced_query(self) -> None:
        self._cancel_debounce_timer()
        self._debounce_timer = asyncio.create_task(self._refresh_after_delay())

    def _cancel_debounce_timer(self) -> None:
        timer = self._debounce_timer
        if timer is not None and not timer.done() and timer is not asyncio.current_task():
            timer.cancel()
            logger.debug("Location debounce timer reset")
        self._debounce_timer = None

    async def _refresh_after_delay(self) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._debounce_timer = None
        self.refresh()

    async def _run_query(self, generation: int, filters: FilterSet) -> None:
        with correlation_context():
            try:
                query = build_plot_query(filters, limit=self.page_size)
                with log_timing("search_plots", logger=logger, generation=generation):
                    plots = await self.fetch(query)
            except ConfigurationError as e:
                if generation != self._generation:
                    return
                logger.warning("Listing search unavailable", error=str(e))
                self.plots = []
                self.status = QueryStatus.NOT_CONFIGURED
                self.error = NOT_CONFIGURED_MESSAGE
                return
            except Exception as e:
                if generation != self._generation:
                    return
                logger.error("Error fetching plots", error=str(e), exc_info=True)
                self.status = QueryStatus.ERROR
                self.error = LOAD_FAILED_MESSAGE
                return

            if generation != self._generation:
                logger.debug(
                    "Discarding stale listing response",
                    generation=generation,
                    current_generation=self._generation
                )
                return

            self.plots = plots
            self.status = QueryStatus.READY
            self.error = None
            logger.info("Listings loaded", generation=generation, result_count=len(plots))
