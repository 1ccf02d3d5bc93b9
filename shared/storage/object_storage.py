import asyncio
import io
import json

import structlog
from fastapi import Request
from minio import Minio

logger = structlog.get_logger(__name__)


def _public_read_policy(bucket: str) -> str:
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"AWS": ["*"]},
                "Action": ["s3:GetObject"],
                "Resource": [f"arn:aws:s3:::{bucket}/*"],
            }
        ],
    })


class ObjectStorage:
    """Thin async wrapper over the blocking MinIO SDK."""

    def __init__(self, client: Minio, bucket: str, public_url: str):
        self._client = client
        self.bucket = bucket
        self.public_url = public_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings) -> "ObjectStorage":
        client = Minio(
            settings.minio_endpoint,
            access_key=settings.minio_access_key,
            secret_key=settings.minio_secret_key,
            secure=settings.minio_secure,
        )
        return cls(client, settings.minio_bucket, settings.minio_public_url)

    async def ensure_bucket(self) -> None:
        """Create the bucket with a public-read policy if it does not exist yet."""
        exists = await asyncio.to_thread(self._client.bucket_exists, self.bucket)
        if exists:
            return
        await asyncio.to_thread(self._client.make_bucket, self.bucket)
        await asyncio.to_thread(self._client.set_bucket_policy, self.bucket, _public_read_policy(self.bucket))
        logger.info("bucket_created", bucket=self.bucket)

    def url_for(self, key: str) -> str:
        return f"{self.public_url}/{self.bucket}/{key}"

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        await asyncio.to_thread(
            self._client.put_object,
            self.bucket,
            key,
            io.BytesIO(data),
            len(data),
            content_type=content_type,
        )
        logger.info("object_stored", bucket=self.bucket, key=key, size=len(data))
        return self.url_for(key)


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage
