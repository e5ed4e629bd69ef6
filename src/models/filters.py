"""Search filter models."""

from typing import Optional
from pydantic import BaseModel, Field

ALL_CATEGORIES = "All"


class FilterSet(BaseModel):
    """User-editable search constraints. Raw strings; never persisted."""
    location: str = Field("", description="Case-insensitive substring of the listing location")
    min_price: str = Field("", description="Inclusive lower bound (KES), blank when unset")
    max_price: str = Field("", description="Inclusive upper bound (KES), blank when unset")
    category: str = Field(ALL_CATEGORIES, description="Category name or 'All'")


DEFAULT_FILTERS = FilterSet()


class PlotQuery(BaseModel):
    """Declarative predicates for one ``plots`` read, composed conjunctively."""
    location_term: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    limit: int = Field(24, ge=1)
