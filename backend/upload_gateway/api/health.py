"""
Health check endpoint.
Verifies the storage bucket is reachable.
"""
import asyncio

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from upload_gateway.api.dependencies import get_storage_client
from upload_gateway.storage.s3_client import S3Client

router = APIRouter()


@router.get("")
async def health_check(storage: S3Client = Depends(get_storage_client)):
    """
    Health check endpoint.
    Returns status of the storage connection.
    """
    health_status = {
        "status": "healthy",
        "storage": "unknown"
    }
    
    if not storage.is_configured:
        health_status["storage"] = "not configured"
        health_status["status"] = "unhealthy"
    elif await asyncio.to_thread(storage.check_bucket):
        health_status["storage"] = "connected"
    else:
        health_status["storage"] = "unreachable"
        health_status["status"] = "unhealthy"
    
    if health_status["status"] == "unhealthy":
        return JSONResponse(status_code=503, content=health_status)
    
    return health_status
