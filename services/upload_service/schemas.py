from typing import Optional

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    imageUrl: str
    filename: str


class EncodedFileResponse(BaseModel):
    base64: str
    checksum: str
    filename: str
    size: int
    mimetype: Optional[str]


class EncodedUpload(BaseModel):
    base64: str = Field(..., min_length=1)
    checksum: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1)
    mimetype: Optional[str] = None


class VerifiedUploadResponse(BaseModel):
    imageUrl: str
    checksum: str
    verified: bool
    filename: str
