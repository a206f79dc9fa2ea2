"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from portfolio_cms.presentation.api.v1.endpoints.health import router as health_router
from portfolio_cms.presentation.api.v1.endpoints.records import router as records_router
from portfolio_cms.presentation.api.v1.endpoints.files import router as files_router
from portfolio_cms.presentation.api.v1.endpoints.auth import router as auth_router
from portfolio_cms.presentation.api.v1.endpoints.edit_mode import router as edit_mode_router
from portfolio_cms.presentation.api.v1.endpoints.pages import router as pages_router
from portfolio_cms.presentation.api.v1.endpoints.migrations import router as migrations_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(records_router)
router.include_router(files_router)
router.include_router(auth_router)
router.include_router(edit_mode_router)
router.include_router(pages_router)
router.include_router(migrations_router)
