"""Seller submission wizard - collect a listing across three validated steps.

The draft lives entirely in memory until ``submit()``, which uploads every
selected file and then creates one ``plots`` row. Uploads and the insert are
sequenced; a failure anywhere leaves the draft untouched for a retry.
"""

from typing import Awaitable, Callable, Optional, Union

from src.models.auth import ANONYMOUS, AuthContext, is_authenticated
from src.models.listing import Listing
from src.models.submission import (
    MAX_IMAGE_FILES,
    FilesSelected,
    LocationPicked,
    MediaFile,
    MediaKind,
    SellerType,
    SubmissionDraft,
    WizardStep,
)
from src.services.media_store import upload_media_batch
from src.services.supabase_client import create_plot
from src.utils.errors import SubmissionValidationError
from src.utils.logging import correlation_context, get_structured_logger, log_timing
from src.utils.pricing import is_tbd, normalize_price_input, parse_price
from src.utils.validators import check_media, check_property_details, check_seller_info

logger = get_structured_logger(__name__)

SUBMIT_SUCCESS_MESSAGE = "Your listing has been submitted successfully and is pending verification!"
SUBMIT_FAILED_MESSAGE = "We couldn't submit your listing. Please try again."
SUBMISSION_TAG = "New submission"

MediaUploader = Callable[[list[MediaFile]], Awaitable[list[str]]]
PlotCreator = Callable[[dict], Awaitable[Listing]]

_STEP_CHECKS = {
    WizardStep.SELLER_INFO: check_seller_info,
    WizardStep.PROPERTY_DETAILS: check_property_details,
    WizardStep.MEDIA: check_media,
}

_NEXT_STEP = {
    WizardStep.SELLER_INFO: WizardStep.PROPERTY_DETAILS,
    WizardStep.PROPERTY_DETAILS: WizardStep.MEDIA,
}

_PREVIOUS_STEP = {
    WizardStep.PROPERTY_DETAILS: WizardStep.SELLER_INFO,
    WizardStep.MEDIA: WizardStep.PROPERTY_DETAILS,
    WizardStep.FAILED: WizardStep.MEDIA,
}


def validate_step(step: WizardStep, draft: SubmissionDraft) -> None:
    """Raise SubmissionValidationError with the first failing rule for ``step``."""
    check = _STEP_CHECKS.get(step)
    if check is None:
        return
    message = check(draft)
    if message:
        raise SubmissionValidationError(message)


def submission_price(draft: SubmissionDraft) -> int:
    """Stored price: digits of the display string, TBD and non-numeric input as 0."""
    if is_tbd(draft.price):
        return 0
    return parse_price(draft.price)


def build_plot_row(
    draft: SubmissionDraft,
    image_urls: list[str],
    video_urls: list[str],
    seller_id: Optional[str] = None,
) -> dict:
    """The single ``plots`` insert for a finished draft."""
    media_urls = image_urls + video_urls
    return {
        "name": draft.parcel_name.strip(),
        "location": draft.location.strip(),
        "size": draft.size.strip(),
        "price": submission_price(draft),
        "category": draft.category.value,
        "tag": SUBMISSION_TAG,
        "description": draft.description.strip(),
        "neighborhood_score": draft.neighborhood_score,
        "owner_name": draft.owner_name.strip(),
        "owner_email": draft.owner_email.strip(),
        "owner_phone": draft.owner_phone.strip(),
        "seller_type": draft.seller_type.value,
        "agency_name": draft.agency_name.strip() if draft.seller_type == SellerType.broker else None,
        "latitude": draft.latitude,
        "longitude": draft.longitude,
        "media_urls": media_urls,
        # Hero is the first image in selection order, never "first upload to finish"
        "image_url": image_urls[0] if image_urls else None,
        "aerial_view_url": draft.aerial_view_url.strip() or None,
        "seller_id": seller_id,
        "seller_phone": draft.owner_phone.strip(),
        "is_verified": False,
    }


class SellerSubmissionWizard:
    """Step state machine plus the draft it edits."""

    def __init__(
        self,
        auth: AuthContext = ANONYMOUS,
        upload: MediaUploader = upload_media_batch,
        create: PlotCreator = create_plot,
    ):
        self.auth = auth
        self.upload = upload
        self.create = create
        self.draft = SubmissionDraft()
        self.step = WizardStep.SELLER_INFO
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        self.created_listing: Optional[Listing] = None

    @property
    def submitting(self) -> bool:
        return self.step == WizardStep.SUBMITTING

    def update_fields(self, **changes) -> None:
        """Apply form input. The price field is reformatted as it is typed."""
        for name, value in changes.items():
            if name not in SubmissionDraft.model_fields:
                raise ValueError(f"Unknown draft field: {name}")
            if name == "price":
                value = normalize_price_input(value)
            setattr(self.draft, name, value)

    def handle_event(self, event: Union[LocationPicked, FilesSelected]) -> None:
        if isinstance(event, LocationPicked):
            self.pick_location(event)
        elif isinstance(event, FilesSelected):
            self.select_files(event)
        else:
            raise TypeError(f"Unsupported wizard event: {type(event).__name__}")

    def pick_location(self, event: LocationPicked) -> None:
        """A map click sets the coordinates and overwrites the searchable location text."""
        self.draft.latitude = event.lat
        self.draft.longitude = event.lng
        self.draft.location = f"{event.lat:.4f}, {event.lng:.4f}"

    def select_files(self, event: FilesSelected) -> None:
        images = [media for media in event.files if media.kind == MediaKind.image]
        videos = [media for media in event.files if media.kind == MediaKind.video]

        self.draft.image_files = (self.draft.image_files + images)[:MAX_IMAGE_FILES]
        if videos:
            self.draft.video_file = videos[-1]

        logger.debug(
            "Media selected",
            images_selected=len(images),
            unsupported_skipped=len(event.files) - len(images) - len(videos),
            images_kept=len(self.draft.image_files),
            has_video=self.draft.video_file is not None
        )

    def remove_image(self, index: int) -> None:
        files = list(self.draft.image_files)
        if 0 <= index < len(files):
            del files[index]
            self.draft.image_files = files

    def remove_video(self) -> None:
        self.draft.video_file = None

    def next_step(self) -> bool:
        """Advance if the current step validates; otherwise keep one error message."""
        if self.step not in _NEXT_STEP:
            return False
        try:
            validate_step(self.step, self.draft)
        except SubmissionValidationError as e:
            self.error = e.message
            return False

        self.error = None
        self.step = _NEXT_STEP[self.step]
        return True

    def previous_step(self) -> None:
        """Always allowed from an editable or failed step; clears the error."""
        self.step = _PREVIOUS_STEP.get(self.step, self.step)
        self.error = None

    def start_over(self) -> None:
        """Discard the draft and return to the first step."""
        self.draft = SubmissionDraft()
        self.step = WizardStep.SELLER_INFO
        self.error = None
        self.success = None

    async def submit(self) -> bool:
        """Upload media, then create the listing. True on success."""
        if self.step not in (WizardStep.MEDIA, WizardStep.FAILED):
            return False

        try:
            validate_step(WizardStep.MEDIA, self.draft)
        except SubmissionValidationError as e:
            self.step = WizardStep.MEDIA
            self.error = e.message
            return False

        draft = self.draft
        self.step = WizardStep.SUBMITTING
        self.error = None
        self.success = None
        seller_id = self.auth.user_id if is_authenticated(self.auth) else None
        urls: list[str] = []

        with correlation_context():
            try:
                with log_timing(
                    "submit_listing",
                    logger=logger,
                    image_count=len(draft.image_files),
                    has_video=draft.video_file is not None
                ):
                    files = list(draft.image_files)
                    if draft.video_file is not None:
                        files.append(draft.video_file)

                    urls = await self.upload(files) if files else []
                    image_count = len(draft.image_files)
                    row = build_plot_row(
                        draft,
                        image_urls=urls[:image_count],
                        video_urls=urls[image_count:],
                        seller_id=seller_id,
                    )
                    listing = await self.create(row)
            except Exception as e:
                logger.error("Error submitting listing", error=str(e), exc_info=True)
                if urls:
                    logger.warning(
                        "Orphaned media left in storage after failed insert",
                        orphaned_urls=urls,
                        orphaned_count=len(urls)
                    )
                self.step = WizardStep.FAILED
                self.error = SUBMIT_FAILED_MESSAGE
                return False

        logger.info("Listing submitted", plot_id=listing.id, media_count=len(urls))
        self.created_listing = listing
        self.success = SUBMIT_SUCCESS_MESSAGE
        self.draft = SubmissionDraft()
        self.step = WizardStep.SUCCESS
        return True
