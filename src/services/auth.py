"""Email/password authentication through Supabase Auth."""

from src.models.auth import ANONYMOUS, AuthContext, auth_context_from_session
from src.services.supabase_client import SupabaseClient, run_blocking
from src.utils.errors import AuthError, ConfigurationError
from src.utils.logging import get_structured_logger, mask_sensitive_data

logger = get_structured_logger(__name__)

PASSWORD_MISMATCH_MESSAGE = "Passwords do not match"


async def sign_in(email: str, password: str) -> AuthContext:
    async with SupabaseClient() as client:
        try:
            response = await run_blocking(
                lambda: client.auth.sign_in_with_password({"email": email, "password": password})
            )
        except Exception as e:
            logger.warning("Sign in failed", email=mask_sensitive_data(email), error=str(e))
            raise AuthError(str(e)) from e

    context = auth_context_from_session(response.session)
    if context == ANONYMOUS:
        raise AuthError("Sign in did not return a session")

    logger.info("User signed in", user_id=context.user_id)
    return context


async def sign_up(email: str, password: str, confirm_password: str) -> AuthContext:
    """
    Register a new account.

    Returns the anonymous context when the project requires email confirmation
    before a session is issued.
    """
    if password != confirm_password:
        raise AuthError(PASSWORD_MISMATCH_MESSAGE)

    async with SupabaseClient() as client:
        try:
            response = await run_blocking(
                lambda: client.auth.sign_up({"email": email, "password": password})
            )
        except Exception as e:
            logger.warning("Sign up failed", email=mask_sensitive_data(email), error=str(e))
            raise AuthError(str(e)) from e

    context = auth_context_from_session(response.session)
    logger.info("User signed up", email=mask_sensitive_data(email), session_issued=context != ANONYMOUS)
    return context


async def sign_out() -> None:
    async with SupabaseClient() as client:
        try:
            await run_blocking(client.auth.sign_out)
        except Exception as e:
            raise AuthError(str(e)) from e


async def current_auth_context() -> AuthContext:
    """Context for the stored session; anonymous when signed out or unconfigured."""
    try:
        async with SupabaseClient() as client:
            session = await run_blocking(client.auth.get_session)
    except ConfigurationError:
        return ANONYMOUS
    except Exception as e:
        logger.warning("Failed to read auth session", error=str(e))
        return ANONYMOUS
    return auth_context_from_session(session)
