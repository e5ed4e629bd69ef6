"""Lead logging for contact clicks.

A lead is written when a visitor opens a WhatsApp chat for a plot. The write is
best effort: the chat link is returned immediately and a failed insert is only
logged, never surfaced to the visitor.
"""

import asyncio
from typing import Awaitable, Callable, Optional

from src.models.lead import Lead
from src.models.listing import Listing
from src.services.supabase_client import insert_lead
from src.utils.logging import get_structured_logger
from src.utils.links import DEFAULT_WHATSAPP_PHONE, whatsapp_link, whatsapp_message

logger = get_structured_logger(__name__)

LeadWriter = Callable[[Lead], Awaitable[None]]

# Strong references so pending lead writes are not garbage collected
_pending: set[asyncio.Task] = set()


async def record_lead(lead: Lead, write: LeadWriter = insert_lead) -> bool:
    """
    Insert a lead.

    Returns:
        True if the lead was stored, False if the insert failed
    """
    try:
        await write(lead)
        logger.info("Lead recorded", plot_id=lead.plot_id, seller_id=lead.seller_id)
        return True
    except Exception as e:
        # Non-fatal: the visitor already has the contact link
        logger.warning("Failed to record lead", plot_id=lead.plot_id, error=str(e))
        return False


def log_lead_in_background(lead: Lead, write: LeadWriter = insert_lead) -> asyncio.Task:
    task = asyncio.create_task(record_lead(lead, write))
    _pending.add(task)
    task.add_done_callback(_pending.discard)
    return task


async def wait_for_pending_leads() -> None:
    """Wait for in-flight lead writes (shutdown, tests)."""
    if _pending:
        await asyncio.gather(*list(_pending))


def contact_link(listing: Listing, fallback_phone: Optional[str] = None) -> Optional[str]:
    phone = listing.seller_phone or fallback_phone
    return whatsapp_link(phone, whatsapp_message(listing.name))


def start_whatsapp_contact(
    listing: Listing,
    fallback_phone: Optional[str] = DEFAULT_WHATSAPP_PHONE,
    write: LeadWriter = insert_lead,
) -> Optional[str]:
    """Return the chat link now and log the lead in the background.

    Must be called with a running event loop. No lead is logged when the
    listing has no usable phone number or has not been assigned an id.
    """
    link = contact_link(listing, fallback_phone)
    if link is None:
        logger.debug("No contact phone for plot", plot_id=listing.id)
        return None

    if listing.id is None:
        logger.warning("Plot has no id, lead not recorded", plot_name=listing.name)
        return link

    log_lead_in_background(Lead(plot_id=listing.id, seller_id=listing.seller_id), write)
    return link
