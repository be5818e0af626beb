"""
FastAPI application entry point.

``create_app`` builds the app from an explicit Settings value; the module-level
``app`` is what uvicorn serves (``uvicorn upload_gateway.main:app``).
"""
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException

from upload_gateway import __version__
from upload_gateway.api.router import build_api_router
from upload_gateway.config import Settings, load_settings
from upload_gateway.exceptions import (
    StorageBackendError,
    UploadValidationError,
    general_exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
    storage_backend_exception_handler,
    upload_validation_exception_handler,
)
from upload_gateway.middleware.metrics_middleware import MetricsMiddleware
from upload_gateway.storage.s3_client import S3Client
from upload_gateway.utils.logging import configure_logging

SERVICE_NAME = "upload-gateway"


def create_app(settings: Optional[Settings] = None, storage: Optional[S3Client] = None) -> FastAPI:
    """
    Build the application.
    
    Args:
        settings: Configuration; loaded from the environment if None
        storage: Storage client; built from settings if None
    """
    settings = settings or load_settings()
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for startup/shutdown events.
        - Startup: configure structured JSON logging
        """
        configure_logging(SERVICE_NAME, settings.log_level)
        yield
    
    app = FastAPI(
        title="Upload Gateway",
        description="Accepts file uploads and stores them in S3",
        version=__version__,
        lifespan=lifespan
    )
    
    app.state.settings = settings
    app.state.storage = storage or S3Client(settings)
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Metrics middleware (must be after CORS to track all requests)
    app.add_middleware(MetricsMiddleware)
    
    app.add_exception_handler(UploadValidationError, upload_validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(StorageBackendError, storage_backend_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    
    app.include_router(build_api_router(settings))
    
    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Upload Gateway",
            "version": __version__,
            "environment": settings.environment,
            "upload_variant": settings.upload_variant
        }
    
    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )
    
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
