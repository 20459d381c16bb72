"""
Image upload endpoint.
"""

import logging

from fastapi import APIRouter, Request

from app.core.dependencies import S3
from app.core.translator import build_upload_response
from app.utils.content_type import detect_content_type
from app.utils.multipart import read_image_upload
from shared_schemas.scanner import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post("/upload", response_model=UploadResponse)
async def upload_image(request: Request, s3_client: S3):
    """
    Store an uploaded image in S3.

    Expects multipart form data with the file in the `image` field.

    Returns:
        Message and the public URL of the stored object
    """
    # Missing bucket is a 500 even when the body is invalid
    s3_client.ensure_configured()

    upload = await read_image_upload(request)
    logger.info(f"Upload received: {upload.filename} ({upload.size} bytes)")

    locator = await s3_client.store(
        upload.data,
        upload.filename,
        content_type=detect_content_type(upload.filename, upload.content_type)
    )

    return build_upload_response(locator)
