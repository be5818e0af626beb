"""
Production logging utility for structured JSON logging.

Provides event-specific logging functions with mandatory fields:
- timestamp (ISO8601)
- level
- service
- event

Optional fields (included when applicable):
- directory
- key
- file_count
- duration_ms

Usage:
    from upload_gateway.utils.logging import configure_logging, log_upload_completed
    
    configure_logging('upload-gateway', 'INFO')
    log_upload_completed(logger, variant='single', directory='docs', file_count=1, duration_ms=45.2)
"""
import logging
import sys
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger


class ServiceFilter(logging.Filter):
    """Stamps every record with the service name."""
    
    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name
    
    def filter(self, record):
        record.service = self.service_name
        return True


def configure_logging(service_name: str, log_level: str = "INFO") -> logging.Handler:
    """
    Send JSON log lines to stdout for the whole process.
    
    Safe to call more than once (one app per test, for instance): the
    handler installed by an earlier call is replaced, not duplicated.
    
    Args:
        service_name: Value of the `service` field on every line
        log_level: Root logging level (DEBUG, INFO, WARNING, ERROR)
        
    Returns:
        The installed handler
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        timestamp=True,
        json_ensure_ascii=False
    ))
    handler.addFilter(ServiceFilter(service_name))
    
    root_logger = logging.getLogger()
    root_logger.handlers = [
        h for h in root_logger.handlers
        if not any(isinstance(f, ServiceFilter) for f in h.filters)
    ]
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    
    return handler


def _build_log_extra(
    event: str,
    variant: Optional[str] = None,
    directory: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
) -> Dict[str, Any]:
    """
    Build extra fields for structured logging.
    
    Args:
        event: Event name (mandatory)
        variant: Optional upload variant (single or batch)
        directory: Optional target directory
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
        
    Returns:
        Dictionary of extra fields
    """
    extra = {
        "event": event,
        **kwargs
    }
    
    if variant:
        extra["variant"] = variant
    if directory:
        extra["directory"] = directory
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)
    
    return extra


def log_upload_started(
    logger: logging.Logger,
    variant: str,
    directory: str,
    file_count: int,
    **kwargs
):
    """Log the start of an upload request."""
    extra = _build_log_extra(
        event="upload_started",
        variant=variant,
        directory=directory,
        file_count=file_count,
        **kwargs
    )
    
    logger.info(f"Upload started: {file_count} file(s) to {directory}", extra=extra)


def log_upload_completed(
    logger: logging.Logger,
    variant: str,
    directory: str,
    file_count: int,
    duration_ms: Optional[float] = None,
    keys: Optional[list] = None,
    **kwargs
):
    """
    Log upload completion event.
    
    Args:
        logger: Logger instance
        variant: Upload variant (required)
        directory: Target directory (required)
        file_count: Number of stored files (required)
        duration_ms: Optional duration in milliseconds
        keys: Optional list of stored object keys
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_completed",
        variant=variant,
        directory=directory,
        duration_ms=duration_ms,
        file_count=file_count,
        **kwargs
    )
    if keys:
        extra["keys"] = keys
    
    logger.info(f"Upload completed: {file_count} file(s) to {directory}", extra=extra)


def log_upload_failed(
    logger: logging.Logger,
    variant: str,
    directory: str,
    error: str,
    key: Optional[str] = None,
    duration_ms: Optional[float] = None,
    **kwargs
):
    """
    Log a failed put call.
    
    The error text only ever reaches the logs; callers get a generic message.
    
    Args:
        logger: Logger instance
        variant: Upload variant (required)
        directory: Target directory (required)
        error: Error message (required)
        key: Optional object key that failed
        duration_ms: Optional duration in milliseconds
        **kwargs: Additional fields
    """
    extra = _build_log_extra(
        event="upload_failed",
        variant=variant,
        directory=directory,
        duration_ms=duration_ms,
        error=str(error),
        **kwargs
    )
    if key:
        extra["key"] = key
    
    message = f"Upload failed: {key or directory} - {error}"
    
    logger.error(message, extra=extra)


def log_request_rejected(
    logger: logging.Logger,
    variant: str,
    reason: str,
    **kwargs
):
    """Log an upload request rejected before any storage call."""
    extra = _build_log_extra(
        event="request_rejected",
        variant=variant,
        reason=reason,
        **kwargs
    )
    
    logger.warning(f"Upload request rejected: {reason}", extra=extra)
