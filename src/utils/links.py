"""Outbound deep links: WhatsApp chat and ride-hailing pickups."""

import re
from typing import Optional
from urllib.parse import quote

DEFAULT_WHATSAPP_PHONE = "+254700000000"

# encodeURIComponent leaves these unescaped in addition to quote()'s defaults
_URI_COMPONENT_SAFE = "!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def whatsapp_message(plot_name: str) -> str:
    return f"I_am_interested_in_[{plot_name}]"


def whatsapp_link(phone: Optional[str], message: str) -> Optional[str]:
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return None
    return f"https://wa.me/{digits}?text={encode_uri_component(message)}"


def uber_link(latitude: Optional[float], longitude: Optional[float], nickname: str) -> Optional[str]:
    if latitude is None or longitude is None:
        return None
    return (
        "https://m.uber.com/ul/?action=setPickup"
        f"&dropoff[latitude]={latitude}"
        f"&dropoff[longitude]={longitude}"
        f"&dropoff[nickname]={encode_uri_component(nickname)}"
    )


def bolt_link(latitude: Optional[float], longitude: Optional[float]) -> Optional[str]:
    if latitude is None or longitude is None:
        return None
    return f"https://bolt.eu/ride/?lat={latitude}&lng={longitude}"
