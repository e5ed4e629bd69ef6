"""Seller submission draft, wizard steps and wizard events."""

import mimetypes
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from src.models.listing import PlotCategory

MAX_IMAGE_FILES = 10


class SellerType(str, Enum):
    owner = "owner"
    broker = "broker"


class WizardStep(str, Enum):
    """Wizard states; the first three are the editable steps."""
    SELLER_INFO = "seller_info"
    PROPERTY_DETAILS = "property_details"
    MEDIA = "media"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class MediaKind(str, Enum):
    image = "image"
    video = "video"


class MediaFile(BaseModel):
    """A locally selected file, not yet uploaded."""
    filename: str
    content: bytes = Field(repr=False)
    content_type: Optional[str] = None

    @property
    def resolved_content_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or "application/octet-stream"

    @property
    def kind(self) -> Optional[MediaKind]:
        """Image or video by content type; None for anything else (PDFs, archives)."""
        content_type = self.resolved_content_type
        if content_type.startswith("video/"):
            return MediaKind.video
        if content_type.startswith("image/"):
            return MediaKind.image
        return None

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return "jpg"
        return self.filename.rsplit(".", 1)[-1].lower() or "jpg"


class SubmissionDraft(BaseModel):
    """Client-held wizard state until the final commit."""
    model_config = ConfigDict(validate_assignment=True)

    # Seller
    seller_type: SellerType = SellerType.owner
    agency_name: str = ""
    owner_name: str = ""
    owner_email: str = ""
    owner_phone: str = ""
    # Property
    parcel_name: str = ""
    location: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    size: str = ""
    price: str = Field("", description="Display string, e.g. '1,200,000' or 'TBD'")
    category: PlotCategory = PlotCategory.RESIDENTIAL
    description: str = ""
    neighborhood_score: int = Field(7, ge=0, le=10)
    # Media (transient, never persisted)
    image_files: list[MediaFile] = Field(default_factory=list)
    video_file: Optional[MediaFile] = None
    aerial_view_url: str = ""


class LocationPicked(BaseModel):
    """A click on the map surface."""
    lat: float
    lng: float


class FilesSelected(BaseModel):
    """Files chosen in the media picker, in selection order."""
    files: list[MediaFile]
