"""Media store - upload listing photos and videos to Supabase storage."""

import asyncio
import time
from typing import Optional

from ulid import ULID

from src.models.submission import MediaFile
from src.services.supabase_client import SupabaseClient, run_blocking
from src.utils.config import AppConfig
from src.utils.errors import ConfigurationError, MediaUploadError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

OBJECT_PREFIX = "plots"


def build_object_path(filename: str, prefix: str = OBJECT_PREFIX) -> str:
    """``plots/<epoch-ms>-<random>.<ext>``; the ULID tail keeps same-millisecond uploads apart."""
    extension = MediaFile(filename=filename, content=b"").extension
    random_suffix = str(ULID())[-10:].lower()
    return f"{prefix}/{int(time.time() * 1000)}-{random_suffix}.{extension}"


async def upload_media(media: MediaFile, bucket: Optional[str] = None) -> str:
    """Upload one file and return its public URL."""
    bucket = bucket or AppConfig.media_bucket()
    path = build_object_path(media.filename)

    async with SupabaseClient() as client:
        storage = client.storage.from_(bucket)
        try:
            await run_blocking(
                lambda: storage.upload(
                    path,
                    media.content,
                    {"content-type": media.resolved_content_type}
                )
            )
            public_url = storage.get_public_url(path)
        except Exception as e:
            raise MediaUploadError(f"Failed to upload {media.filename}: {e}") from e

    if not public_url:
        raise MediaUploadError(f"No public URL returned for {media.filename}")

    logger.debug("Media uploaded", bucket=bucket, object_path=path)
    return public_url


async def upload_media_batch(files: list[MediaFile], bucket: Optional[str] = None) -> list[str]:
    """Upload every file concurrently; URLs come back in input order.

    If any upload fails nothing is returned. Files that did upload are left
    in the bucket and logged as orphans for manual cleanup.
    """
    if not files:
        return []

    results = await asyncio.gather(
        *(upload_media(media, bucket=bucket) for media in files),
        return_exceptions=True
    )

    failures = [result for result in results if isinstance(result, BaseException)]
    if failures:
        orphaned = [result for result in results if isinstance(result, str)]
        if orphaned:
            logger.warning(
                "Orphaned media left in storage after failed batch upload",
                orphaned_urls=orphaned,
                orphaned_count=len(orphaned),
                failed_count=len(failures)
            )
        first = failures[0]
        if isinstance(first, (MediaUploadError, ConfigurationError)):
            raise first
        raise MediaUploadError(f"Media upload failed: {first}") from first

    return list(results)
