"""Tests for the auth service."""

import pytest
from unittest.mock import MagicMock

from src.models.auth import ANONYMOUS
from src.services.auth import (
    PASSWORD_MISMATCH_MESSAGE,
    current_auth_context,
    sign_in,
    sign_out,
    sign_up,
)
from src.utils.errors import AuthError


def make_session(user_id: str = "user-1", email: str = "admin@example.com") -> MagicMock:
    session = MagicMock()
    session.user.id = user_id
    session.user.email = email
    session.access_token = "jwt-token"
    return session


@pytest.mark.unit
@pytest.mark.asyncio
async def test_sign_in(mock_supabase_client):
    mock_supabase_client.auth.sign_in_with_password.return_value = MagicMock(session=make_session())

    context = await sign_in("admin@example.com", "secret")

    mock_supabase_client.auth.sign_in_with_password.assert_called_once_with(
        {"email": "admin@example.com", "password": "secret"}
    )
    assert context.user_id == "user-1"
    assert context.access_token == "jwt-token"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_sign_in_failure(mock_supabase_client):
    mock_supabase_client.auth.sign_in_with_password.side_effect = RuntimeError("Invalid login credentials")

    with pytest.raises(AuthError, match="Invalid login credentials"):
        await sign_in("admin@example.com", "wrong")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_sign_up_password_mismatch(mock_supabase_client):
    with pytest.raises(AuthError, match=PASSWORD_MISMATCH_MESSAGE):
        await sign_up("new@example.com", "one", "two")

    mock_supabase_client.auth.sign_up.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_sign_up_pending_confirmation(mock_supabase_client):
    mock_supabase_client.auth.sign_up.return_value = MagicMock(session=None)

    context = await sign_up("new@example.com", "pw123456", "pw123456")

    assert context == ANONYMOUS


@pytest.mark.unit
@pytest.mark.asyncio
async def test_sign_out(mock_supabase_client):
    await sign_out()
    mock_supabase_client.auth.sign_out.assert_called_once()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_current_auth_context(mock_supabase_client):
    mock_supabase_client.auth.get_session.return_value = make_session(user_id="user-7")

    context = await current_auth_context()

    assert context.user_id == "user-7"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_current_auth_context_unconfigured(unconfigured_backend):
    assert await current_auth_context() == ANONYMOUS
