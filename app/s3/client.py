"""
AWS S3 Client wrapper.
Stores uploaded images under generated keys and builds their public URLs.
"""

import asyncio
import logging
import uuid
from urllib.parse import quote
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.errors import ConfigurationError, UpstreamError
from app.s3.config import KEY_TIMESTAMP_FORMAT, KEY_TOKEN_LENGTH, OBJECT_URL_TEMPLATE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredObjectLocator:
    """Where an uploaded object lives."""
    bucket: str
    key: str
    url: str


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class S3Client:
    """Wrapper for S3 image storage."""

    def __init__(
        self,
        region: str,
        bucket: str,
        unique_keys: bool = True,
        clock: Callable[[], datetime] = _utc_now,
        max_workers: int = 4
    ):
        """
        Initialize S3 client for the configured region.

        Args:
            region: AWS region (also used in the object URL)
            bucket: Target bucket name, may be empty (checked per upload)
            unique_keys: Insert a random token into generated keys
            clock: Source of the key timestamp
            max_workers: Threads available for blocking uploads
        """
        self.region = region
        self.bucket = bucket
        self.unique_keys = unique_keys
        self.clock = clock

        self.session = boto3.session.Session(region_name=region or None)
        self.client = self.session.client('s3')

        # boto3 is blocking; uploads run off the event loop
        self.upload_executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="s3-upload"
        )

        logger.info(f"S3 client initialized for region: {region}")

    def verify_credentials(self) -> None:
        """
        Fail fast when the region or credentials cannot be resolved.

        Raises:
            ConfigurationError: If region or credentials are missing
        """
        if not self.region:
            raise ConfigurationError("AWS_REGION not set in environment")

        if self.session.get_credentials() is None:
            raise ConfigurationError("AWS credentials could not be resolved")

    def ensure_configured(self) -> None:
        """
        Raises:
            ConfigurationError: If no bucket is configured
        """
        if not self.bucket:
            raise ConfigurationError("S3_BUCKET_NAME not set in environment")

    def build_key(self, original_filename: str) -> str:
        """
        Generate the object key for an upload.

        Format is `<timestamp>-<filename>`, or `<timestamp>-<token>-<filename>`
        when unique keys are enabled so that same-named uploads within one
        second do not overwrite each other.
        """
        timestamp = self.clock().strftime(KEY_TIMESTAMP_FORMAT)
        if self.unique_keys:
            token = uuid.uuid4().hex[:KEY_TOKEN_LENGTH]
            return f"{timestamp}-{token}-{original_filename}"
        return f"{timestamp}-{original_filename}"

    def get_object_url(self, key: str) -> str:
        """Construct direct URL to an object (key percent-encoded)."""
        return OBJECT_URL_TEMPLATE.format(bucket=self.bucket, region=self.region, key=quote(key))

    async def store(
        self,
        data: bytes,
        original_filename: str,
        content_type: Optional[str] = None
    ) -> StoredObjectLocator:
        """
        Upload image bytes to the configured bucket.

        Args:
            data: Object body
            original_filename: Client filename, used in the key
            content_type: MIME type of the object

        Returns:
            Locator with bucket, key and public URL

        Raises:
            ConfigurationError: If no bucket is configured
            UpstreamError: If S3 rejects or cannot receive the upload
        """
        self.ensure_configured()

        key = self.build_key(original_filename)

        extra_args = {}
        if content_type:
            extra_args['ContentType'] = content_type

        def _put():
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                **extra_args
            )

        try:
            await asyncio.get_running_loop().run_in_executor(self.upload_executor, _put)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload {self.bucket}/{key}: {e}")
            raise UpstreamError("Failed to upload to S3", e) from e

        logger.info(f"Uploaded file: {self.bucket}/{key} ({len(data)} bytes)")

        return StoredObjectLocator(
            bucket=self.bucket,
            key=key,
            url=self.get_object_url(key)
        )

    def close(self) -> None:
        """Release upload threads."""
        self.upload_executor.shutdown(wait=False)
