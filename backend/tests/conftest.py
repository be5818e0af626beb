"""
Test configuration and fixtures.
Storage is a MagicMock standing in for the boto3 S3 client, so no AWS
access is needed.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_BUCKET_NAME"] = "test-bucket"
os.environ["UPLOAD_VARIANT"] = "single"

import pytest
from typing import AsyncGenerator
from unittest.mock import MagicMock

from httpx import AsyncClient, ASGITransport

from upload_gateway.config import Settings
from upload_gateway.main import create_app
from upload_gateway.storage.s3_client import S3Client


def put_object_response(status_code: int = 200, etag: str = '"etag-123"', version_id=None) -> dict:
    """Shape of a boto3 put_object response."""
    response = {
        "ResponseMetadata": {
            "HTTPStatusCode": status_code,
            "RequestId": "REQ-123",
            "RetryAttempts": 0,
        },
        "ETag": etag,
    }
    if version_id:
        response["VersionId"] = version_id
    return response


def make_settings(**overrides) -> Settings:
    """Settings isolated from any local .env file."""
    values = {
        "aws_region": "us-east-1",
        "aws_bucket_name": "test-bucket",
        "environment": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def mock_s3() -> MagicMock:
    """boto3 S3 client whose put_object always succeeds."""
    client = MagicMock()
    client.put_object.return_value = put_object_response()
    return client


@pytest.fixture
def storage(settings: Settings, mock_s3: MagicMock) -> S3Client:
    return S3Client(settings, client=mock_s3)


async def _client_for(settings: Settings, mock_s3: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(settings, storage=S3Client(settings, client=mock_s3))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(scope="function")
async def single_client(mock_s3: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an app serving the single-file variant."""
    async for ac in _client_for(make_settings(upload_variant="single"), mock_s3):
        yield ac


@pytest.fixture(scope="function")
async def batch_client(mock_s3: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an app serving the batch variant."""
    async for ac in _client_for(make_settings(upload_variant="batch"), mock_s3):
        yield ac


@pytest.fixture
def s3_response():
    """Factory for boto3 put_object responses."""
    return put_object_response
