import asyncio
import logging
import threading
import time
from typing import Final

import boto3
from botocore.client import Config

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

RESULT_CONTENT_TYPE: Final[str] = "image/png"
RESULT_CACHE_CONTROL: Final[str] = "public, max-age=31536000"

_stamp_lock = threading.Lock()
_last_stamp = 0


def unique_timestamp() -> int:
    """Milliseconds since the epoch, strictly increasing within the process."""
    global _last_stamp
    with _stamp_lock:
        stamp = max(time.time_ns() // 1_000_000, _last_stamp + 1)
        _last_stamp = stamp
    return stamp


class StorageService:
    """S3 bucket fronted by a CDN domain."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        session = boto3.session.Session()
        self.client = session.client(
            "s3",
            endpoint_url=str(self.settings.s3_endpoint) if self.settings.s3_endpoint else None,
            aws_access_key_id=self.settings.aws_access_key_id,
            aws_secret_access_key=self.settings.aws_secret_access_key,
            region_name=self.settings.aws_region,
            config=Config(signature_version="s3v4"),
        )
        self.bucket = self.settings.s3_bucket

    def generate_upload_key(self, filename: str) -> str:
        return f"uploads/{unique_timestamp()}-{filename}"

    def generate_result_key(self) -> str:
        return f"transformed/{unique_timestamp()}-transformed.png"

    def create_presigned_put(
        self,
        key: str,
        content_type: str,
        expires_in: int | None = None,
    ) -> str:
        return self.client.generate_presigned_url(
            "put_object",
            Params={
                "Bucket": self.bucket,
                "Key": key,
                "ContentType": content_type,
            },
            ExpiresIn=expires_in or self.settings.upload_url_ttl,
        )

    async def upload_bytes(
        self,
        key: str,
        data: bytes,
        content_type: str = RESULT_CONTENT_TYPE,
        cache_control: str = RESULT_CACHE_CONTROL,
    ) -> None:
        def _upload() -> None:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                CacheControl=cache_control,
            )

        await asyncio.to_thread(_upload)
        logger.info("Stored %d bytes at s3://%s/%s", len(data), self.bucket, key)

    def public_url(self, key: str) -> str:
        return f"https://{self.settings.cdn_domain}/{key}"
