"""Owner sign-in endpoints."""

from fastapi import APIRouter, Depends, status

from portfolio_cms.application.schemas import LoginRequest, LoginResponse, SessionResponse
from portfolio_cms.infrastructure.auth.password_auth_provider import PasswordAuthProvider
from portfolio_cms.infrastructure.dependencies import (
    get_auth_provider,
    get_bearer_token,
    require_owner,
)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    auth: PasswordAuthProvider = Depends(get_auth_provider),
) -> LoginResponse:
    session = await auth.sign_in(data.email, data.password)
    return LoginResponse(token=session.token, email=session.email, expires_at=session.expires_at)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_owner)],
)
async def logout(auth: PasswordAuthProvider = Depends(get_auth_provider)) -> None:
    """End the owner session; edit mode switches off with it."""
    await auth.sign_out()


@router.get("/session", response_model=SessionResponse)
async def get_session(
    token: str | None = Depends(get_bearer_token),
    auth: PasswordAuthProvider = Depends(get_auth_provider),
) -> SessionResponse:
    session = auth.verify(token)
    if session is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, email=session.email, expires_at=session.expires_at)
