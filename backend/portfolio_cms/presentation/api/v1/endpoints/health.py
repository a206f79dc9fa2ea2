"""Liveness endpoint for load balancers and the HTTP record store's peers."""

from fastapi import APIRouter

from portfolio_cms.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "record_store": settings.record_store_backend,
    }
