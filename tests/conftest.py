"""Pytest fixtures for sustainability scanner tests."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

# Settings are read from the environment; keep tests away from real accounts
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from app.clients.gemini_client import GeminiVisionClient  # noqa: E402
from app.core.config import Settings  # noqa: E402
from app.core.dependencies import get_http_client, get_s3_client, get_vision_client  # noqa: E402
from app.main import create_app  # noqa: E402
from app.s3.client import S3Client  # noqa: E402

BUCKET = "eco-uploads"
REGION = "ap-south-1"
FIXED_TIME = datetime(2024, 3, 15, 9, 30, 45, tzinfo=timezone.utc)
FIXED_TIMESTAMP = "20240315093045"


def make_settings(**overrides) -> Settings:
    """Settings with test defaults, ignoring any local .env file."""
    values = {
        "GEMINI_API_KEY": "test-gemini-key",
        "AWS_REGION": REGION,
        "S3_BUCKET_NAME": BUCKET,
        "UNIQUE_OBJECT_KEYS": False,
        "CLASSIFIER_SERVICE_URL": "http://classifier.test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def gemini_response(text: str) -> SimpleNamespace:
    """Shape of a google-generativeai response with one text part."""
    part = SimpleNamespace(text=text)
    candidate = SimpleNamespace(content=SimpleNamespace(parts=[part]))
    return SimpleNamespace(candidates=[candidate])


def make_vision_client(model: Optional[MagicMock] = None) -> GeminiVisionClient:
    return GeminiVisionClient(
        api_key="test-gemini-key",
        model_name="gemini-1.5-flash",
        locale="Chaithanya Layout, 8th Phase, J. P. Nagar, Bengaluru",
        platforms=["OLX", "Quickr", "Cashify"],
        model=model or MagicMock()
    )


@pytest.fixture
def fixed_s3_client() -> S3Client:
    """S3 client with a frozen clock and legacy key format."""
    return S3Client(
        region=REGION,
        bucket=BUCKET,
        unique_keys=False,
        clock=lambda: FIXED_TIME
    )


@pytest.fixture
def gemini_model() -> MagicMock:
    model = MagicMock()
    model.generate_content_async = AsyncMock()
    return model


@pytest.fixture
def build_client() -> Callable[..., TestClient]:
    """
    Factory returning a TestClient for an app built from test settings.

    Client handles are injected through dependency overrides, so the
    lifespan (which talks to AWS and Gemini) is not run.
    """
    def _build(
        s3_client: Optional[S3Client] = None,
        vision_client: Optional[GeminiVisionClient] = None,
        transport: Optional[httpx.MockTransport] = None,
        **setting_overrides
    ) -> TestClient:
        settings = make_settings(**setting_overrides)
        app = create_app(settings)

        s3 = s3_client or MagicMock(spec=S3Client)
        vision = vision_client or make_vision_client()
        http_client = httpx.AsyncClient(
            transport=transport or httpx.MockTransport(lambda request: httpx.Response(500))
        )

        app.dependency_overrides[get_s3_client] = lambda: s3
        app.dependency_overrides[get_vision_client] = lambda: vision
        app.dependency_overrides[get_http_client] = lambda: http_client
        return TestClient(app)

    return _build
