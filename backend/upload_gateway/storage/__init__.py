"""
Storage module for S3-compatible object storage.

The gateway receives file bytes and writes each file with one put call.
"""
from upload_gateway.storage.s3_client import S3Client
from upload_gateway.storage.keys import build_object_key, get_extension, base_name_from_filename

__all__ = ["S3Client", "build_object_key", "get_extension", "base_name_from_filename"]
