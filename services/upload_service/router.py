from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from shared.errors import ChecksumMismatchError, InvalidPayloadError, server_error
from shared.storage import ObjectStorage, get_storage

from .schemas import EncodedFileResponse, EncodedUpload, UploadResponse, VerifiedUploadResponse
from .service import UploadService

router = APIRouter(prefix="/upload", tags=["Upload"])


def _require_file(image: Optional[UploadFile]) -> UploadFile:
    if image is None or not image.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file was uploaded")
    return image


@router.post("", response_model=UploadResponse)
async def upload_image(
    image: Optional[UploadFile] = File(default=None),
    storage: ObjectStorage = Depends(get_storage),
):
    image = _require_file(image)
    data = await image.read()
    try:
        return await UploadService.store_file(storage, image.filename, data, image.content_type)
    except Exception as e:
        raise server_error("File upload failed", e)


@router.post("/to-base64", response_model=EncodedFileResponse)
async def upload_to_base64(image: Optional[UploadFile] = File(default=None)):
    image = _require_file(image)
    data = await image.read()
    return UploadService.encode_file(image.filename, data, image.content_type)


@router.post("/from-base64", response_model=VerifiedUploadResponse)
async def upload_from_base64(
    payload: EncodedUpload,
    storage: ObjectStorage = Depends(get_storage),
):
    try:
        return await UploadService.store_encoded(storage, payload)
    except ChecksumMismatchError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Checksum mismatch", "expected": e.expected, "calculated": e.calculated},
        )
    except InvalidPayloadError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        raise server_error("Base64 upload failed", e)
