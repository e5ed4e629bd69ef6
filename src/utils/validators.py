"""Seller wizard validation rules.

Each ``check_*`` function returns the message for the first failing rule, in
the order the fields appear on the form, or ``None`` when the step is valid.
"""

import re
from typing import Optional

from src.models.submission import SellerType, SubmissionDraft
from src.utils.pricing import is_tbd, parse_price

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[0-9\s-]{10,15}$")


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.fullmatch(email or ""))


def validate_phone(phone: str) -> bool:
    return bool(PHONE_PATTERN.fullmatch(phone or ""))


def check_seller_info(draft: SubmissionDraft) -> Optional[str]:
    if not draft.owner_name.strip():
        return "Owner name is required"
    if not draft.owner_email.strip():
        return "Email is required"
    if not validate_email(draft.owner_email):
        return "Please enter a valid email address"
    if not draft.owner_phone.strip():
        return "Phone number is required"
    if not validate_phone(draft.owner_phone):
        return "Please enter a valid phone number"
    if draft.seller_type == SellerType.broker and not draft.agency_name.strip():
        return "Agency name is required for brokers"
    return None


def check_property_details(draft: SubmissionDraft) -> Optional[str]:
    if not draft.parcel_name.strip():
        return "Parcel name is required"
    if not draft.location.strip():
        return "Please select a location on the map"
    if not draft.size.strip():
        return "Size is required"
    if not draft.price.strip():
        return "Price is required"
    # TBD is an accepted "price unset" sentinel and is stored as 0
    if not is_tbd(draft.price) and parse_price(draft.price) <= 0:
        return "Please enter a valid price"
    if not draft.description.strip():
        return "Description is required"
    return None


def check_media(draft: SubmissionDraft) -> Optional[str]:
    if not draft.image_files and draft.video_file is None and not draft.aerial_view_url.strip():
        return "Please upload at least one photo or provide an aerial view URL"
    return None
