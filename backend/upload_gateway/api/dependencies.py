"""
FastAPI dependencies.

Settings and the storage client are created once in ``create_app`` and kept
on ``app.state``; these helpers hand them to route functions.
"""
from fastapi import Request

from upload_gateway.config import Settings
from upload_gateway.storage.s3_client import S3Client


def get_settings(request: Request) -> Settings:
    """Usage: settings: Settings = Depends(get_settings)"""
    return request.app.state.settings


def get_storage_client(request: Request) -> S3Client:
    """Usage: storage: S3Client = Depends(get_storage_client)"""
    return request.app.state.storage
