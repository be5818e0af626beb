"""
Custom exception types and their HTTP handlers.

Every error leaves the service as ``{"error": "<message>"}``. Details of
backend failures are logged, never returned to the caller.
"""
import logging
from typing import Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal server error occurred"


class UploadValidationError(Exception):
    """Raised when required form fields or files are missing."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class StorageBackendError(Exception):
    """Raised when a put call fails or returns a non-success status.

    Args:
        message: Server-side description of the failure
        key: Object key that was being written (if known)
        status_code: HTTP status reported by the backend (if any)
    """

    public_message = "Error uploading to S3"

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.key = key
        self.status_code = status_code


async def upload_validation_exception_handler(request: Request, exc: UploadValidationError):
    """Handle missing fields/files."""
    logger.warning(f"Upload rejected: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report framework form validation errors in the same envelope as ours."""
    logger.warning(f"Validation error: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid upload request"})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handle framework HTTP errors.

    A 400 here only comes from parsing the request body (our own validation
    raises UploadValidationError), so it is treated as an unhandled error
    and the parser text is not returned. Routing errors keep their status.
    """
    if exc.status_code == 400:
        logger.error(f"Unreadable request body: {exc.detail}")
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def storage_backend_exception_handler(request: Request, exc: StorageBackendError):
    """Handle storage failures. The cause stays in the logs."""
    logger.error(f"Storage backend error: {exc} (key: {exc.key})")
    return JSONResponse(status_code=500, content={"error": exc.public_message})


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.error(f"Unexpected error: {type(exc).__name__}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )
