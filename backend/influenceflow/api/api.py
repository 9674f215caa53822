from fastapi import APIRouter

from .routes import auth_router, health_router


def build_api_router(prefix: str = "/api") -> APIRouter:
    """Create the main API router with all route modules included"""
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(health_router)
    api_router.include_router(auth_router)
    return api_router
