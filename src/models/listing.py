"""Listing (plot) models and the backend-row translation."""

from enum import Enum
from typing import Any, Optional, Union
from pydantic import BaseModel, Field

from src.utils.pricing import parse_price


class PlotCategory(str, Enum):
    """Listing categories offered in search."""
    RESIDENTIAL = "Residential"
    AGRICULTURAL = "Agricultural"
    COMMERCIAL = "Commercial"
    INVESTMENT = "Investment"


class Listing(BaseModel):
    """A land parcel offered for sale or investment."""
    id: Optional[Union[int, str]] = Field(None, description="Assigned by the data gateway")
    name: str = Field(..., description="Listing title")
    location: str = Field("", description="Free-text, searchable location")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    size: str = Field("", description="Free text, e.g. '2.5 acres'")
    price: int = Field(0, ge=0, description="KES; 0 means price unset")
    category: Optional[PlotCategory] = None
    tag: Optional[str] = None
    description: Optional[str] = None
    media_urls: list[str] = Field(default_factory=list)
    image_url: Optional[str] = Field(None, description="Hero image for card views")
    aerial_view_url: Optional[str] = None
    seller_id: Optional[str] = Field(None, description="Submitting user (weak reference)")
    seller_phone: Optional[str] = None
    is_verified: bool = Field(default=False, description="Moderation badge, not a visibility gate")
    created_at: Optional[str] = None

    @property
    def gallery(self) -> list[str]:
        if self.media_urls:
            return [url for url in self.media_urls if url]
        return [self.image_url] if self.image_url else []

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


def _coerce_category(value: Any) -> Optional[PlotCategory]:
    try:
        return PlotCategory(value)
    except ValueError:
        return None


def _coerce_price(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return max(0, int(value))
    return parse_price(str(value))


def listing_from_row(row: dict) -> Listing:
    """Translate a ``plots`` row into a :class:`Listing`.

    All nullable/legacy column handling lives here: ``lat``/``lng`` aliases,
    string prices ("1,200,000", "TBD"), null media arrays and unknown
    categories.
    """
    media_urls = [url for url in (row.get("media_urls") or []) if url]
    latitude = row.get("latitude") if row.get("latitude") is not None else row.get("lat")
    longitude = row.get("longitude") if row.get("longitude") is not None else row.get("lng")

    return Listing(
        id=row.get("id"),
        name=row.get("name") or "",
        location=row.get("location") or "",
        latitude=latitude,
        longitude=longitude,
        size=row.get("size") or "",
        price=_coerce_price(row.get("price")),
        category=_coerce_category(row.get("category")),
        tag=row.get("tag"),
        description=row.get("description"),
        media_urls=media_urls,
        image_url=row.get("image_url") or (media_urls[0] if media_urls else None),
        aerial_view_url=row.get("aerial_view_url"),
        seller_id=row.get("seller_id"),
        seller_phone=row.get("seller_phone"),
        is_verified=bool(row.get("is_verified")),
        created_at=row.get("created_at"),
    )
