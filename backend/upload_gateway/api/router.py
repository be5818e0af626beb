"""
API router aggregator.
Includes all route modules.
"""
from fastapi import APIRouter

from upload_gateway.api import health, uploads
from upload_gateway.config import Settings


def build_api_router(settings: Settings) -> APIRouter:
    """Assemble routes, mounting the configured upload variant at /upload."""
    api_router = APIRouter()
    
    upload_router = uploads.batch_router if settings.upload_variant == "batch" else uploads.single_router
    
    api_router.include_router(health.router, prefix="/health", tags=["health"])
    api_router.include_router(upload_router, prefix="/upload", tags=["uploads"])
    
    return api_router
