"""
Business logic services.
"""
from upload_gateway.services.upload_service import FilePayload, UploadService

__all__ = [
    "FilePayload",
    "UploadService",
]
