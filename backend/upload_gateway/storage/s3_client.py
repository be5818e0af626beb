"""
AWS S3 / S3-compatible storage client.

Uses boto3 to write uploaded objects into the configured bucket. One client
is created at startup and shared by every request; boto3 clients are safe
for concurrent use from worker threads.
"""
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from upload_gateway.config import Settings
from upload_gateway.exceptions import StorageBackendError

logger = logging.getLogger(__name__)


class S3Client:
    """
    Thin wrapper around a boto3 S3 client.
    
    Provides the single put operation the gateway needs, the public URL
    convention for stored objects, and a bucket reachability probe.
    """
    
    def __init__(self, settings: Settings, client: Optional[Any] = None):
        """
        Initialize the S3 client.
        
        Args:
            settings: Application settings (region, credentials, bucket)
            client: Pre-built boto3 client (tests); built from settings if None
        """
        self._settings = settings
        
        if client is not None:
            self._client = client
            return
        
        # Explicit keys are optional; boto3 falls back to its credential chain
        self._client = boto3.client(
            's3',
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            config=Config(
                signature_version='s3v4',
                # No application-level retries
                retries={'max_attempts': 1, 'mode': 'standard'}
            )
        )
        
        if self.is_configured:
            logger.info(f"S3 client initialized for bucket: {self.bucket}")
        else:
            logger.warning(
                "S3 storage not configured. "
                "Set AWS_REGION and AWS_BUCKET_NAME."
            )
    
    @property
    def is_configured(self) -> bool:
        """Check if a bucket and region are configured."""
        return bool(self._settings.aws_bucket_name and self._settings.aws_region)
    
    @property
    def bucket(self) -> Optional[str]:
        """Get configured bucket name."""
        return self._settings.aws_bucket_name
    
    def object_url(self, object_key: str) -> str:
        """
        Build the external URL of a stored object.
        
        Path-style URL on the regional AWS endpoint, or on the custom
        endpoint when one is configured.
        """
        endpoint = self._settings.s3_endpoint_url
        if endpoint:
            return f"{endpoint.rstrip('/')}/{self.bucket}/{object_key}"
        return f"https://s3.{self._settings.aws_region}.amazonaws.com/{self.bucket}/{object_key}"
    
    def put_object(
        self,
        object_key: str,
        body: bytes,
        content_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Store a payload under the given key.
        
        Args:
            object_key: The S3 object key (path in bucket)
            body: Raw file bytes
            content_type: MIME type stored with the object
            
        Returns:
            Dict with key, etag, version_id and provider metadata
            
        Raises:
            StorageBackendError: on any client error or non-200 status
        """
        if not self.is_configured:
            raise StorageBackendError("S3 storage not configured", key=object_key)
        
        params: Dict[str, Any] = {
            'Bucket': self.bucket,
            'Key': object_key,
            'Body': body,
        }
        if content_type:
            params['ContentType'] = content_type
        
        try:
            response = self._client.put_object(**params)
        except ClientError as e:
            status_code = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
            raise StorageBackendError(
                f"Failed to upload {object_key}: {e}",
                key=object_key,
                status_code=status_code
            ) from e
        except BotoCoreError as e:
            raise StorageBackendError(f"Failed to upload {object_key}: {e}", key=object_key) from e
        
        response_metadata = response.get('ResponseMetadata', {})
        status_code = response_metadata.get('HTTPStatusCode')
        if status_code != 200:
            raise StorageBackendError(
                f"Unexpected status {status_code} uploading {object_key}",
                key=object_key,
                status_code=status_code
            )
        
        logger.debug(f"Uploaded {object_key} ({len(body)} bytes)")
        
        return {
            'key': object_key,
            'etag': response.get('ETag'),
            'version_id': response.get('VersionId'),
            'metadata': {
                'http_status_code': status_code,
                'request_id': response_metadata.get('RequestId'),
                'attempts': response_metadata.get('RetryAttempts', 0) + 1,
            },
        }
    
    def check_bucket(self) -> bool:
        """
        Check that the bucket exists and is reachable.
        
        Returns:
            True if head_bucket succeeds, False otherwise
        """
        if not self.is_configured:
            return False
        
        try:
            self._client.head_bucket(Bucket=self.bucket)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error checking bucket {self.bucket}: {e}")
            return False
