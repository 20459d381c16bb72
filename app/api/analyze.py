"""
Sustainability analysis endpoint.
"""

import logging

from fastapi import APIRouter, Request

from app.clients import classifier_client
from app.core.dependencies import AppSettings, HTTPClient, VisionClient
from app.core.translator import build_analyze_response, build_stub_analyze_response
from app.utils.content_type import detect_content_type
from app.utils.multipart import read_image_upload
from shared_schemas.scanner import AnalyzeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analyze"])


@router.post("/analyze", response_model=AnalyzeResponse, response_model_exclude_none=True)
async def analyze_image(
    request: Request,
    settings: AppSettings,
    client: HTTPClient,
    vision_client: VisionClient
):
    """
    Analyze an uploaded image for resale, recycling, reuse and biodegradability.

    With ANALYZE_PIPELINE_ENABLED off (default) this only acknowledges the
    image and echoes its metadata. With it on, the image goes through the
    classification service and then the vision model.

    Returns:
        Image details, plus categories and analysis in pipeline mode
    """
    upload = await read_image_upload(request)
    logger.info(f"Received image: {upload.filename} ({upload.size} bytes)")

    if not settings.ANALYZE_PIPELINE_ENABLED:
        return build_stub_analyze_response(upload.filename, upload.size)

    categories = await classifier_client.classify_image(
        client,
        settings.CLASSIFIER_SERVICE_URL,
        upload.data
    )
    logger.info(f"Categories for {upload.filename}: {categories}")

    outcome = await vision_client.analyze(
        categories,
        upload.data,
        mime_type=detect_content_type(upload.filename, upload.content_type)
    )

    return build_analyze_response(upload.filename, upload.size, categories, outcome)
