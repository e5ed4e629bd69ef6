"""Environment-driven configuration and feature availability."""

import os
from typing import Optional


class AppConfig:
    """Reads settings from the environment on every access."""

    DEFAULT_MEDIA_BUCKET = "plots-media"
    DEFAULT_PAGE_SIZE = 24
    DEFAULT_LOCATION_DEBOUNCE_MS = 300
    DEFAULT_TIMEOUT_SECONDS = 15.0

    @staticmethod
    def supabase_url() -> Optional[str]:
        return os.environ.get("SUPABASE_URL") or None

    @staticmethod
    def supabase_key() -> Optional[str]:
        return os.environ.get("SUPABASE_ANON_KEY") or None

    @staticmethod
    def maps_api_key() -> Optional[str]:
        return os.environ.get("GOOGLE_MAPS_API_KEY") or None

    @classmethod
    def media_bucket(cls) -> str:
        return os.environ.get("SUPABASE_MEDIA_BUCKET") or cls.DEFAULT_MEDIA_BUCKET

    @classmethod
    def listing_page_size(cls) -> int:
        size = _int_env("LISTING_PAGE_SIZE", cls.DEFAULT_PAGE_SIZE)
        return size if size >= 1 else cls.DEFAULT_PAGE_SIZE

    @classmethod
    def location_debounce_seconds(cls) -> float:
        return _int_env("LOCATION_DEBOUNCE_MS", cls.DEFAULT_LOCATION_DEBOUNCE_MS) / 1000

    @classmethod
    def backend_timeout_seconds(cls) -> float:
        raw = os.environ.get("BACKEND_TIMEOUT_SECONDS")
        if not raw:
            return cls.DEFAULT_TIMEOUT_SECONDS
        try:
            return float(raw)
        except ValueError:
            return cls.DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def is_backend_configured(cls) -> bool:
        return bool(cls.supabase_url() and cls.supabase_key())

    @classmethod
    def is_maps_configured(cls) -> bool:
        return bool(cls.maps_api_key())

    @classmethod
    def feature_flags(cls) -> dict[str, bool]:
        """Feature availability as exposed to the UI and the health endpoint."""
        return {
            "backend": cls.is_backend_configured(),
            "maps": cls.is_maps_configured(),
        }


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default
