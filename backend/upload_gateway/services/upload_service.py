"""
Upload orchestration.

Turns validated upload requests into put calls against the storage client
and shapes the results for the API layer.

Flow (per file):
1. Derive the base name (caller-supplied, or the original name up to its first '.')
2. Map the declared content type to an extension
3. Build the object key
4. Issue one put call in a worker thread (boto3 is blocking)

Batch uploads fan out every put concurrently and join all outcomes before
answering. A single failure fails the whole request; nothing is rolled back
and sibling uploads are allowed to finish.
"""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from upload_gateway.exceptions import StorageBackendError, UploadValidationError
from upload_gateway.schemas.upload import UploadResult
from upload_gateway.storage.keys import (
    base_name_from_filename,
    build_object_key,
    current_timestamp_ms,
)
from upload_gateway.storage.s3_client import S3Client
from upload_gateway.utils.logging import (
    log_request_rejected,
    log_upload_completed,
    log_upload_failed,
    log_upload_started,
)
from upload_gateway.utils.metrics import (
    upload_bytes_total,
    upload_duration_seconds,
    uploads_total,
)

logger = logging.getLogger(__name__)

SINGLE = "single"
BATCH = "batch"


@dataclass(frozen=True)
class FilePayload:
    """One uploaded file, fully buffered."""
    filename: Optional[str]
    content_type: Optional[str]
    body: bytes


class UploadService:
    """
    Service for handling uploads to object storage.
    
    Responsibilities:
    - Validate upload requests
    - Generate object keys
    - Issue put calls and join their outcomes
    """
    
    @staticmethod
    def validate_single(
        file: Optional[FilePayload],
        directory_name: Optional[str],
        file_name: Optional[str]
    ) -> None:
        """
        Reject a single-file request missing its file or required fields.
        
        Raises:
            UploadValidationError: if anything required is absent or empty
        """
        if file is None or not directory_name or not file_name:
            log_request_rejected(logger, variant=SINGLE, reason="missing file or fields")
            raise UploadValidationError("File, directoryName, and fileName are required")
    
    @staticmethod
    def validate_batch(
        files: Sequence[FilePayload],
        directory_name: Optional[str],
        max_files: int
    ) -> None:
        """
        Reject a batch request with no files, no directory, or too many files.
        
        Raises:
            UploadValidationError: on any violation
        """
        if not files or not directory_name:
            log_request_rejected(logger, variant=BATCH, reason="missing files or fields")
            raise UploadValidationError("Files and directoryName are required")
        
        if len(files) > max_files:
            log_request_rejected(
                logger, variant=BATCH, reason="too many files", file_count=len(files)
            )
            raise UploadValidationError(f"At most {max_files} files can be uploaded at once")
    
    @staticmethod
    async def upload_single(
        storage: S3Client,
        file: Optional[FilePayload],
        directory_name: Optional[str],
        file_name: Optional[str],
        timestamp: Optional[int] = None
    ) -> UploadResult:
        """
        Upload one file under a caller-chosen name.
        
        The key carries a millisecond timestamp so repeated uploads of the
        same name never collide.
        
        Args:
            storage: Storage client
            file: Uploaded file (None if the request had none)
            directory_name: Key prefix
            file_name: Desired base name
            timestamp: Override for the key timestamp (defaults to now)
            
        Returns:
            UploadResult with the external URL of the object
            
        Raises:
            UploadValidationError: if the request is incomplete
            StorageBackendError: if the put call fails
        """
        UploadService.validate_single(file, directory_name, file_name)
        
        if timestamp is None:
            timestamp = current_timestamp_ms()
        object_key = build_object_key(directory_name, file_name, file.content_type, timestamp)
        
        log_upload_started(logger, variant=SINGLE, directory=directory_name, file_count=1)
        start_time = time.perf_counter()
        
        try:
            stored = await asyncio.to_thread(
                storage.put_object, object_key, file.body, file.content_type
            )
        except Exception as e:
            uploads_total.labels(variant=SINGLE, status="failed").inc()
            log_upload_failed(
                logger,
                variant=SINGLE,
                directory=directory_name,
                key=object_key,
                error=f"{type(e).__name__}: {e}",
                duration_ms=(time.perf_counter() - start_time) * 1000
            )
            if isinstance(e, StorageBackendError):
                raise
            raise StorageBackendError(f"Failed to upload {object_key}: {e}", key=object_key) from e
        
        duration = time.perf_counter() - start_time
        uploads_total.labels(variant=SINGLE, status="succeeded").inc()
        upload_bytes_total.labels(variant=SINGLE).inc(len(file.body))
        upload_duration_seconds.labels(variant=SINGLE).observe(duration)
        log_upload_completed(
            logger,
            variant=SINGLE,
            directory=directory_name,
            file_count=1,
            duration_ms=duration * 1000,
            keys=[object_key]
        )
        
        return UploadResult(**stored, url=storage.object_url(object_key))
    
    @staticmethod
    async def upload_batch(
        storage: S3Client,
        files: Sequence[FilePayload],
        directory_name: Optional[str],
        max_files: int = 30
    ) -> List[str]:
        """
        Upload several files concurrently, keyed by their original names.
        
        Keys carry no timestamp: uploading the same name twice overwrites
        the earlier object.
        
        Args:
            storage: Storage client
            files: Uploaded files, in request order
            directory_name: Key prefix
            max_files: Upper bound on files per request
            
        Returns:
            Object keys in the same order as ``files``
            
        Raises:
            UploadValidationError: if the request is incomplete or too large
            StorageBackendError: if any put call fails
        """
        UploadService.validate_batch(files, directory_name, max_files)
        
        object_keys = [
            build_object_key(directory_name, base_name_from_filename(f.filename), f.content_type)
            for f in files
        ]
        
        log_upload_started(logger, variant=BATCH, directory=directory_name, file_count=len(files))
        start_time = time.perf_counter()
        
        # Join every outcome; no put is left running unobserved
        outcomes = await asyncio.gather(
            *[
                asyncio.to_thread(storage.put_object, key, f.body, f.content_type)
                for key, f in zip(object_keys, files)
            ],
            return_exceptions=True
        )
        duration = time.perf_counter() - start_time
        
        failures = [
            (key, outcome)
            for key, outcome in zip(object_keys, outcomes)
            if isinstance(outcome, BaseException)
        ]
        
        if failures:
            uploads_total.labels(variant=BATCH, status="failed").inc()
            for key, error in failures:
                log_upload_failed(
                    logger,
                    variant=BATCH,
                    directory=directory_name,
                    key=key,
                    error=f"{type(error).__name__}: {error}",
                    duration_ms=duration * 1000
                )
            first_key, first_error = failures[0]
            raise StorageBackendError(
                f"{len(failures)} of {len(files)} uploads failed",
                key=first_key
            ) from first_error
        
        uploads_total.labels(variant=BATCH, status="succeeded").inc()
        upload_bytes_total.labels(variant=BATCH).inc(sum(len(f.body) for f in files))
        upload_duration_seconds.labels(variant=BATCH).observe(duration)
        log_upload_completed(
            logger,
            variant=BATCH,
            directory=directory_name,
            file_count=len(files),
            duration_ms=duration * 1000,
            keys=object_keys
        )
        
        return object_keys
