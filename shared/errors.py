"""
Domain exceptions raised by the services, and the helpers routers use to
turn them into JSON error responses.

Every error body carries a human-readable ``message``. Server errors also
echo the underlying exception text under ``error``.
"""
from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class StorefrontError(Exception):
    """Base class for expected, client-facing failures."""


class NotFoundError(StorefrontError):
    pass


class ConflictError(StorefrontError):
    pass


class InvalidCredentialsError(StorefrontError):
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class InvalidPayloadError(StorefrontError):
    pass


class ChecksumMismatchError(StorefrontError):
    def __init__(self, expected: str, calculated: str):
        super().__init__("Checksum mismatch")
        self.expected = expected
        self.calculated = calculated


def server_error(message: str, exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": message, "error": str(exc)},
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        body = exc.detail
    else:
        body = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )
