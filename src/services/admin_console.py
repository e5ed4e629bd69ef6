"""Admin console - moderate listings in place.

Every mutation is applied to the local list first and sent to the backend
afterwards; when the backend rejects it the local change is reverted.
"""

from typing import Awaitable, Callable, Optional

from src.models.auth import AuthContext, is_authenticated
from src.models.listing import Listing
from src.services.supabase_client import PlotId, delete_plot, list_admin_plots, update_plot
from src.utils.errors import ConfigurationError
from src.utils.logging import get_structured_logger
from src.utils.pricing import parse_price

logger = get_structured_logger(__name__)

SIGN_IN_REQUIRED_MESSAGE = "Sign in to manage listings."
NOT_CONFIGURED_MESSAGE = "Supabase is not configured."
LOAD_FAILED_MESSAGE = "Failed to load listings."


class AdminConsole:
    """Listing moderation for one signed-in admin session."""

    def __init__(
        self,
        auth: AuthContext,
        load_plots: Callable[[], Awaitable[list[Listing]]] = list_admin_plots,
        update: Callable[[PlotId, dict], Awaitable[Listing]] = update_plot,
        delete: Callable[[PlotId], Awaitable[None]] = delete_plot,
    ):
        self.auth = auth
        self._load_plots = load_plots
        self._update = update
        self._delete = delete
        self.plots: list[Listing] = []
        self.loading = False
        self.error: Optional[str] = None
        self.editing_price_id: Optional[PlotId] = None
        self.price_draft = ""

    @property
    def authorized(self) -> bool:
        return is_authenticated(self.auth)

    def find(self, plot_id: PlotId) -> Optional[Listing]:
        return next((plot for plot in self.plots if plot.id == plot_id), None)

    def _replace(self, plot: Listing) -> None:
        self.plots = [plot if p.id == plot.id else p for p in self.plots]

    async def load(self) -> bool:
        if not self.authorized:
            self.error = SIGN_IN_REQUIRED_MESSAGE
            return False

        self.loading = True
        self.error = None
        try:
            self.plots = await self._load_plots()
            return True
        except ConfigurationError:
            self.error = NOT_CONFIGURED_MESSAGE
            return False
        except Exception as e:
            logger.error("Error loading admin plots", error=str(e), exc_info=True)
            self.error = LOAD_FAILED_MESSAGE
            return False
        finally:
            self.loading = False

    async def toggle_verified(self, plot_id: PlotId) -> bool:
        original = self.find(plot_id)
        if not self.authorized or original is None:
            return False

        verified = not original.is_verified
        self._replace(original.model_copy(update={"is_verified": verified}))

        try:
            await self._update(plot_id, {"is_verified": verified})
            logger.info("Plot verification changed", plot_id=plot_id, is_verified=verified)
            return True
        except Exception as e:
            logger.warning("Verification update failed, reverting", plot_id=plot_id, error=str(e))
            self._replace(original)
            return False

    def start_editing_price(self, plot_id: PlotId) -> None:
        plot = self.find(plot_id)
        if plot is None:
            return
        self.editing_price_id = plot_id
        self.price_draft = str(plot.price)

    def cancel_editing_price(self) -> None:
        self.editing_price_id = None
        self.price_draft = ""

    async def save_price(self, draft: Optional[str] = None) -> bool:
        """Commit the price being edited. An empty draft keeps the current price."""
        text = (self.price_draft if draft is None else draft).strip()
        plot_id = self.editing_price_id
        original = self.find(plot_id) if plot_id is not None else None
        self.cancel_editing_price()
        if not self.authorized or original is None:
            return False

        price = parse_price(text) if text else original.price
        self._replace(original.model_copy(update={"price": price}))

        try:
            await self._update(plot_id, {"price": price})
            return True
        except Exception as e:
            logger.warning("Price update failed, reverting", plot_id=plot_id, error=str(e))
            self._replace(original)
            return False

    @staticmethod
    def delete_prompt(plot: Listing) -> str:
        """Confirmation text shown before :meth:`delete`."""
        return f'Delete listing "{plot.name}"? This action cannot be undone.'

    async def delete(self, plot_id: PlotId) -> bool:
        """Remove a confirmed listing; the whole list is restored on failure."""
        if not self.authorized or self.find(plot_id) is None:
            return False

        original = list(self.plots)
        self.plots = [plot for plot in self.plots if plot.id != plot_id]

        try:
            await self._delete(plot_id)
            logger.info("Plot deleted", plot_id=plot_id)
            return True
        except Exception as e:
            logger.warning("Delete failed, restoring listing", plot_id=plot_id, error=str(e))
            self.plots = original
            return False
