"""
Pydantic schemas for API request/response validation.
"""
from upload_gateway.schemas.upload import (
    StorageMetadata,
    UploadResult,
    SingleUploadResponse,
    BatchUploadResponse,
    ErrorResponse,
)

__all__ = [
    "StorageMetadata",
    "UploadResult",
    "SingleUploadResponse",
    "BatchUploadResponse",
    "ErrorResponse",
]
