"""Lead model - a recorded expression of buyer interest."""

from typing import Optional, Union
from pydantic import BaseModel, Field


class Lead(BaseModel):
    """Written when a buyer opens an outbound contact link."""
    plot_id: Union[int, str] = Field(..., description="Listing the buyer contacted about")
    seller_id: Optional[str] = Field(None, description="Seller of that listing, if known")
