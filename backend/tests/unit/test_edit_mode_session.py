"""Unit tests for EditModeSession and PasswordAuthProvider."""

from datetime import datetime, timedelta, timezone

import pytest

from portfolio_cms.application.services import EditModeSession
from portfolio_cms.application.services.edit_mode_session import EDIT_MODE_KEY
from portfolio_cms.domain.exceptions import AuthenticationError, EditModeDisabledError
from portfolio_cms.infrastructure.auth.password_auth_provider import PasswordAuthProvider


class WallClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def wall_clock() -> WallClock:
    return WallClock()


@pytest.fixture
def auth(wall_clock) -> PasswordAuthProvider:
    return PasswordAuthProvider("owner@example.com", "s3cret", ttl_seconds=3600, clock=wall_clock)


@pytest.fixture
def session(local_store, auth) -> EditModeSession:
    return EditModeSession(local_store, auth)


@pytest.mark.asyncio
async def test_sign_in_with_wrong_password_fails(auth):
    with pytest.raises(AuthenticationError):
        await auth.sign_in("owner@example.com", "wrong")


@pytest.mark.asyncio
async def test_sign_in_refused_without_configured_password():
    auth = PasswordAuthProvider("owner@example.com", "")
    with pytest.raises(AuthenticationError):
        await auth.sign_in("owner@example.com", "")


@pytest.mark.asyncio
async def test_verify_matches_only_the_active_token(auth):
    session = await auth.sign_in("Owner@Example.com ", "s3cret")
    assert auth.verify(session.token) is session
    assert auth.verify("forged") is None
    assert auth.verify(None) is None


def test_toggle_requires_authentication(session, local_store):
    with pytest.raises(AuthenticationError):
        session.toggle()
    assert session.flag is False
    assert local_store.get(EDIT_MODE_KEY) is None


def test_persisted_flag_alone_does_not_unlock(local_store, auth):
    local_store.set(EDIT_MODE_KEY, "true")
    session = EditModeSession(local_store, auth)
    assert session.flag is False
    assert local_store.get(EDIT_MODE_KEY) == "false"
    assert session.can_edit() is False
    with pytest.raises(EditModeDisabledError):
        session.require_edit()


@pytest.mark.asyncio
async def test_toggle_enables_and_persists(session, auth, local_store):
    await auth.sign_in("owner@example.com", "s3cret")
    assert session.toggle() is True
    assert session.can_edit() is True
    assert local_store.get(EDIT_MODE_KEY) == "true"


@pytest.mark.asyncio
async def test_sign_out_forces_edit_mode_off(session, auth, local_store):
    await auth.sign_in("owner@example.com", "s3cret")
    session.toggle()

    await auth.sign_out()

    assert session.can_edit() is False
    assert session.flag is False
    assert local_store.get(EDIT_MODE_KEY) == "false"


@pytest.mark.asyncio
async def test_signing_back_in_does_not_reenable(session, auth):
    await auth.sign_in("owner@example.com", "s3cret")
    session.toggle()
    await auth.sign_out()
    await auth.sign_in("owner@example.com", "s3cret")
    assert session.can_edit() is False


@pytest.mark.asyncio
async def test_stale_flag_from_previous_process_needs_toggle(local_store, auth):
    local_store.set(EDIT_MODE_KEY, "true")
    session = EditModeSession(local_store, auth)

    await auth.sign_in("owner@example.com", "s3cret")

    assert session.can_edit() is False
    assert session.toggle() is True
    assert session.can_edit() is True


@pytest.mark.asyncio
async def test_new_session_while_signed_in_forces_edit_mode_off(session, auth):
    await auth.sign_in("owner@example.com", "s3cret")
    session.toggle()

    await auth.sign_in("owner@example.com", "s3cret")

    assert session.can_edit() is False


@pytest.mark.asyncio
async def test_passive_expiry_forces_edit_mode_off(session, auth, wall_clock):
    await auth.sign_in("owner@example.com", "s3cret")
    session.toggle()

    wall_clock.now += timedelta(hours=2)

    assert session.can_edit() is False
    assert session.flag is False


@pytest.mark.asyncio
async def test_close_stops_listening(session, auth):
    await auth.sign_in("owner@example.com", "s3cret")
    session.toggle()
    session.close()
    await auth.sign_out()
    assert session.flag is True
