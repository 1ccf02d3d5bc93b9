import os
import time

import structlog

from shared.errors import ChecksumMismatchError, InvalidPayloadError
from shared.observability.metrics import shop_checksum_failures_total, shop_uploads_total
from shared.storage import ObjectStorage

from .integrity import compute_checksum, encode_payload, verify_payload
from .schemas import EncodedFileResponse, EncodedUpload, UploadResponse, VerifiedUploadResponse

logger = structlog.get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def generate_object_key(filename: str) -> str:
    """``<epoch-millis>-<basename>``; directory parts of the client filename are dropped."""
    basename = os.path.basename(filename.replace("\\", "/")) or "upload"
    return f"{int(time.time() * 1000)}-{basename}"


class UploadService:

    @staticmethod
    async def store_file(
        storage: ObjectStorage, filename: str, data: bytes, content_type: str | None
    ) -> UploadResponse:
        key = generate_object_key(filename)
        url = await storage.put(key, data, content_type or DEFAULT_CONTENT_TYPE)
        shop_uploads_total.labels(source="multipart").inc()
        logger.info("image_uploaded", key=key, size=len(data), checksum=compute_checksum(data))
        return UploadResponse(imageUrl=url, filename=key)

    @staticmethod
    def encode_file(filename: str, data: bytes, content_type: str | None) -> EncodedFileResponse:
        checksum = compute_checksum(data)
        logger.info("image_encoded", filename=filename, size=len(data), checksum=checksum)
        return EncodedFileResponse(
            base64=encode_payload(data),
            checksum=checksum,
            filename=filename,
            size=len(data),
            mimetype=content_type,
        )

    @staticmethod
    async def store_encoded(storage: ObjectStorage, upload: EncodedUpload) -> VerifiedUploadResponse:
        try:
            data, checksum = verify_payload(upload.base64, upload.checksum)
        except ChecksumMismatchError as e:
            shop_checksum_failures_total.inc()
            logger.warning("checksum_mismatch", expected=e.expected, calculated=e.calculated)
            raise
        except InvalidPayloadError:
            shop_checksum_failures_total.inc()
            raise

        key = generate_object_key(upload.filename)
        url = await storage.put(key, data, upload.mimetype or DEFAULT_CONTENT_TYPE)
        shop_uploads_total.labels(source="base64").inc()
        logger.info("encoded_image_uploaded", key=key, size=len(data), checksum=checksum)
        return VerifiedUploadResponse(imageUrl=url, checksum=checksum, verified=True, filename=key)
