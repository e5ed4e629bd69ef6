"""Error handling utilities."""


class LandLeverageError(Exception):
    """Base exception for the Land Leverage marketplace."""
    pass


class ConfigurationError(LandLeverageError):
    """Required external-service configuration is missing."""
    pass


class BackendNotConfiguredError(ConfigurationError):
    """Supabase URL or key is not set."""
    pass


class MapsNotConfiguredError(ConfigurationError):
    """Mapping provider key is not set."""
    pass


class SubmissionValidationError(LandLeverageError):
    """A wizard step failed validation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SupabaseError(LandLeverageError):
    """Supabase operation error."""
    pass


class MediaUploadError(LandLeverageError):
    """Media store upload error."""
    pass


class RideEstimateError(LandLeverageError):
    """Distance/duration lookup error."""
    pass


class AuthError(LandLeverageError):
    """Sign-in or sign-up failed."""
    pass
