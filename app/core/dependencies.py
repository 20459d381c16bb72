"""
Shared dependencies for FastAPI endpoints.
Client handles are created once at startup and kept on app.state.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
import httpx

from app.clients.gemini_client import GeminiVisionClient
from app.core.config import Settings, get_settings
from app.s3.client import S3Client

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the HTTP client used for the classification service."""
    return httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        follow_redirects=True
    )


def create_s3_client(settings: Settings) -> S3Client:
    """Create the S3 client and make sure credentials resolve."""
    s3_client = S3Client(
        region=settings.AWS_REGION,
        bucket=settings.S3_BUCKET_NAME,
        unique_keys=settings.UNIQUE_OBJECT_KEYS
    )
    s3_client.verify_credentials()
    return s3_client


def create_vision_client(settings: Settings) -> GeminiVisionClient:
    return GeminiVisionClient(
        api_key=settings.GEMINI_API_KEY,
        model_name=settings.GEMINI_MODEL,
        locale=settings.RECYCLING_LOCALE,
        platforms=settings.RESALE_PLATFORMS
    )


async def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


async def get_s3_client(request: Request) -> S3Client:
    return request.app.state.s3_client


async def get_vision_client(request: Request) -> GeminiVisionClient:
    return request.app.state.vision_client


# Dependency annotations
AppSettings = Annotated[Settings, Depends(get_settings)]
HTTPClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]
S3 = Annotated[S3Client, Depends(get_s3_client)]
VisionClient = Annotated[GeminiVisionClient, Depends(get_vision_client)]
