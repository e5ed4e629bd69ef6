"""Authentication context passed explicitly to write-capable services."""

from typing import Any, Optional
from pydantic import BaseModel


class AuthContext(BaseModel):
    """Session presence plus identity of the signed-in user."""
    user_id: Optional[str] = None
    email: Optional[str] = None
    access_token: Optional[str] = None


ANONYMOUS = AuthContext()


def is_authenticated(context: Optional[AuthContext]) -> bool:
    return context is not None and bool(context.user_id)


def auth_context_from_session(session: Any) -> AuthContext:
    """Build a context from a Supabase ``Session`` (or ``None``)."""
    if session is None or getattr(session, "user", None) is None:
        return ANONYMOUS
    user = session.user
    return AuthContext(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=getattr(session, "access_token", None),
    )
