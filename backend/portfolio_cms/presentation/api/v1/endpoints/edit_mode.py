"""Edit-mode endpoints — read and flip the persisted edit flag."""

from fastapi import APIRouter, Depends

from portfolio_cms.application.schemas import EditModeResponse
from portfolio_cms.application.services import EditModeSession
from portfolio_cms.infrastructure.auth.password_auth_provider import PasswordAuthProvider
from portfolio_cms.infrastructure.dependencies import (
    get_auth_provider,
    get_bearer_token,
    get_edit_session,
    require_owner,
)

router = APIRouter(prefix="/edit-mode", tags=["Edit Mode"])


def _state(session: EditModeSession, is_owner: bool) -> EditModeResponse:
    return EditModeResponse(
        enabled=session.flag,
        authenticated=is_owner,
        can_edit=is_owner and session.can_edit(),
    )


@router.get("", response_model=EditModeResponse)
async def get_edit_mode(
    token: str | None = Depends(get_bearer_token),
    auth: PasswordAuthProvider = Depends(get_auth_provider),
    session: EditModeSession = Depends(get_edit_session),
) -> EditModeResponse:
    return _state(session, auth.verify(token) is not None)


@router.post("/toggle", response_model=EditModeResponse, dependencies=[Depends(require_owner)])
async def toggle_edit_mode(
    session: EditModeSession = Depends(get_edit_session),
) -> EditModeResponse:
    """Flip the flag for the signed-in owner."""
    session.toggle()
    return _state(session, True)
