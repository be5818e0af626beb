"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.

Settings are built once at startup (see ``main.create_app``) and handed to the
app; nothing else reads the process environment.
"""
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    
    # Environment
    environment: str = "dev"
    log_level: str = "INFO"
    
    # AWS S3 / S3-compatible storage
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None  # Falls back to boto3 credential chain
    aws_secret_access_key: Optional[str] = None
    aws_bucket_name: Optional[str] = None
    s3_endpoint_url: Optional[str] = None  # e.g. MinIO or R2 endpoint
    
    # Uploads
    # "single": one file under `file`, caller picks the name, response has the URL
    # "batch": up to max_files_per_request files under `files`, response has keys
    upload_variant: Literal["single", "batch"] = "single"
    max_files_per_request: int = 30
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


def load_settings() -> Settings:
    """Build settings from the process environment (and .env, if present)."""
    return Settings()
