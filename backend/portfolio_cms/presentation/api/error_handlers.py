"""Map domain exceptions onto HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from portfolio_cms.domain.exceptions import (
    AuthenticationError,
    EditModeDisabledError,
    EntityNotFoundError,
    InputValidationError,
    RateLimitExceededError,
    RecordStoreError,
)

logger = logging.getLogger(__name__)


async def _input_validation(request: Request, exc: InputValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "field": exc.field},
    )


async def _rate_limited(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": str(exc)},
        headers={"Retry-After": str(int(exc.window_seconds))},
    )


async def _unauthenticated(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc) or "Authentication required"},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _edit_disabled(request: Request, exc: EditModeDisabledError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _store_failed(request: Request, exc: RecordStoreError) -> JSONResponse:
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InputValidationError, _input_validation)
    app.add_exception_handler(RateLimitExceededError, _rate_limited)
    app.add_exception_handler(AuthenticationError, _unauthenticated)
    app.add_exception_handler(EditModeDisabledError, _edit_disabled)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(RecordStoreError, _store_failed)
