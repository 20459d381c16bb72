"""
Classification service client.
Sends images to the category classification microservice.
"""

import logging
from typing import List

import httpx
from pydantic import ValidationError as SchemaError

from app.core.errors import DecodeError, TransportError, UpstreamError
from shared_schemas.scanner import ClassifierResponse

logger = logging.getLogger(__name__)

# The classification service only reads the part's bytes; name and type are fixed.
IMAGE_FIELD = "image"
IMAGE_FILENAME = "image.jpg"
IMAGE_CONTENT_TYPE = "image/jpeg"


async def classify_image(
    client: httpx.AsyncClient,
    base_url: str,
    image_data: bytes
) -> List[str]:
    """
    Send image to the classification service and return its categories.

    Args:
        client: HTTP client
        base_url: Classification service base URL
        image_data: Raw image bytes

    Returns:
        Category labels in the order the service returned them

    Raises:
        TransportError: If the service cannot be reached
        UpstreamError: If the service returns an error status
        DecodeError: If the body is not {"categories": [...]}
    """
    url = f"{base_url.rstrip('/')}/analyze"
    files = {IMAGE_FIELD: (IMAGE_FILENAME, image_data, IMAGE_CONTENT_TYPE)}

    try:
        response = await client.post(url, files=files)
    except httpx.HTTPError as e:
        logger.error(f"Classification service unreachable at {url}: {e}")
        raise TransportError("Failed to reach classification service", e) from e

    if response.is_error:
        logger.error(f"Classification service returned {response.status_code}")
        raise UpstreamError(
            "Classification service returned an error",
            f"HTTP {response.status_code}"
        )

    try:
        payload = ClassifierResponse.model_validate(response.json())
    except (ValueError, SchemaError) as e:
        logger.error(f"Invalid classification response: {e}")
        raise DecodeError("Failed to decode classification response", e) from e

    logger.info(f"Classification service returned {len(payload.categories)} categories")
    return payload.categories
