"""
Upload endpoints.

Two request shapes exist for POST /upload; the active one is chosen by
the UPLOAD_VARIANT setting:

- single: one file under `file`, plus `directoryName` and `fileName`.
  Key is {directoryName}/{timestamp}_{fileName}.{ext}; the response carries
  the object's external URL.
- batch: up to MAX_FILES_PER_REQUEST files under `files`, plus
  `directoryName`. Key is {directoryName}/{original base name}.{ext}; the
  response lists the keys in upload order.

Files are buffered in memory before any storage call is made.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from upload_gateway.api.dependencies import get_settings, get_storage_client
from upload_gateway.config import Settings
from upload_gateway.schemas.upload import BatchUploadResponse, ErrorResponse, SingleUploadResponse
from upload_gateway.services.upload_service import FilePayload, UploadService
from upload_gateway.storage.s3_client import S3Client

single_router = APIRouter()
batch_router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing file(s) or required fields"},
    500: {"model": ErrorResponse, "description": "Storage backend error"},
}


async def _read_payload(upload: UploadFile) -> FilePayload:
    """Buffer an uploaded file into memory."""
    try:
        body = await upload.read()
    finally:
        await upload.close()
    return FilePayload(filename=upload.filename, content_type=upload.content_type, body=body)


@single_router.post("", response_model=SingleUploadResponse, responses=ERROR_RESPONSES)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    directory_name: Optional[str] = Form(None, alias="directoryName"),
    file_name: Optional[str] = Form(None, alias="fileName"),
    storage: S3Client = Depends(get_storage_client)
):
    """
    Upload one file to S3 under a caller-chosen name.
    
    The extension is derived from the file's content type.
    """
    payload = await _read_payload(file) if file is not None else None
    
    result = await UploadService.upload_single(
        storage,
        payload,
        directory_name=directory_name,
        file_name=file_name
    )
    
    return SingleUploadResponse(message="File uploaded successfully", data=result)


@batch_router.post("", response_model=BatchUploadResponse, responses=ERROR_RESPONSES)
async def upload_files(
    files: Optional[List[UploadFile]] = File(None),
    directory_name: Optional[str] = Form(None, alias="directoryName"),
    storage: S3Client = Depends(get_storage_client),
    settings: Settings = Depends(get_settings)
):
    """
    Upload several files to S3 concurrently.
    
    Succeeds only if every file is stored; otherwise a single 500 is
    returned with no per-file detail.
    """
    payloads = [await _read_payload(f) for f in files or []]
    
    keys = await UploadService.upload_batch(
        storage,
        payloads,
        directory_name=directory_name,
        max_files=settings.max_files_per_request
    )
    
    return BatchUploadResponse(message="Files uploaded successfully", data=keys)
