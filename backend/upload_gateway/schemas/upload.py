"""
Pydantic schemas for upload endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class StorageMetadata(BaseModel):
    """Provider metadata returned by the put call."""
    http_status_code: int
    request_id: Optional[str] = None
    attempts: int = 1


class UploadResult(BaseModel):
    """Outcome of one successful put call."""
    key: str = Field(..., description="Object key in the bucket")
    etag: Optional[str] = Field(None, description="ETag returned by storage")
    version_id: Optional[str] = Field(None, description="Object version (versioned buckets only)")
    metadata: StorageMetadata
    url: str = Field(..., description="Location of the stored object")
    
    class Config:
        json_schema_extra = {
            "example": {
                "key": "avatars/1729300000000_profile.png",
                "etag": "\"9b2cf535f27731c974343645a3985328\"",
                "version_id": None,
                "metadata": {
                    "http_status_code": 200,
                    "request_id": "4442587FB7D0A2F9",
                    "attempts": 1
                },
                "url": "https://s3.us-east-1.amazonaws.com/my-bucket/avatars/1729300000000_profile.png"
            }
        }


class SingleUploadResponse(BaseModel):
    """Response schema for the single-file variant."""
    message: str
    data: UploadResult


class BatchUploadResponse(BaseModel):
    """Response schema for the batch variant: object keys in input order."""
    message: str
    data: List[str]
    
    class Config:
        json_schema_extra = {
            "example": {
                "message": "Files uploaded successfully",
                "data": ["uploads/a.png", "uploads/b.jpeg"]
            }
        }


class ErrorResponse(BaseModel):
    """Error envelope shared by every failure."""
    error: str
