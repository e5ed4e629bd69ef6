"""KES price formatting and parsing."""

import math
import re
from typing import Optional

PRICE_TBD = "TBD"

_NON_DIGITS = re.compile(r"\D")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def format_price(value: str) -> str:
    """Strip non-digits and insert thousands separators: ``"1200000"`` -> ``"1,200,000"``."""
    digits = _NON_DIGITS.sub("", value or "")
    return _THOUSANDS.sub(",", digits)


def parse_price(value: str) -> int:
    """Inverse of :func:`format_price`; anything without digits (``TBD`` included) is 0."""
    digits = _NON_DIGITS.sub("", str(value or ""))
    return int(digits) if digits else 0


def is_tbd(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == PRICE_TBD.lower()


def normalize_price_input(value: str) -> str:
    """What the price field displays after a keystroke."""
    if is_tbd(value):
        return PRICE_TBD
    return format_price(value)


def parse_price_bound(raw: Optional[str]) -> Optional[float]:
    """Parse a min/max filter value; unset, non-numeric or non-finite input yields None."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text or "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_kes(amount: float) -> str:
    """``KES 1,234`` with whole-shilling rounding."""
    return f"KES {round_half_up(amount):,}"
