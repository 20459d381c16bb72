"""Tests for the classification service client."""

from __future__ import annotations

import httpx
import pytest

from app.clients.classifier_client import classify_image
from app.core.errors import DecodeError, TransportError, UpstreamError

BASE_URL = "http://classifier.test/"


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_classify_returns_categories_in_order():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"categories": ["plastic", "bottle", "plastic"]})

    async with client_for(handler) as client:
        categories = await classify_image(client, BASE_URL, b"jpeg-bytes")

    assert categories == ["plastic", "bottle", "plastic"]

    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "http://classifier.test/analyze"
    assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
    assert b'name="image"; filename="image.jpg"' in request.content
    assert b"Content-Type: image/jpeg" in request.content
    assert b"jpeg-bytes" in request.content


@pytest.mark.asyncio
async def test_classify_empty_category_list():
    async with client_for(lambda request: httpx.Response(200, json={"categories": []})) as client:
        assert await classify_image(client, BASE_URL, b"x") == []


@pytest.mark.asyncio
async def test_classify_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    async with client_for(handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await classify_image(client, BASE_URL, b"x")

    assert exc_info.value.error_code == "transport_error"
    assert isinstance(exc_info.value, UpstreamError)


@pytest.mark.asyncio
async def test_classify_error_status():
    async with client_for(lambda request: httpx.Response(502, text="bad gateway")) as client:
        with pytest.raises(UpstreamError, match="HTTP 502"):
            await classify_image(client, BASE_URL, b"x")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"labels": ["plastic"]}),
        httpx.Response(200, json={"categories": "plastic"}),
        httpx.Response(200, json=["plastic"]),
    ],
)
async def test_classify_decode_failure(response: httpx.Response):
    async with client_for(lambda request: response) as client:
        with pytest.raises(DecodeError):
            await classify_image(client, BASE_URL, b"x")
