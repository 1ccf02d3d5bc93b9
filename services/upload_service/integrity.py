"""
Checksum helpers for the encoded-upload path.

The client hashes the raw image bytes with MD5 and sends the hex digest
next to the base64 payload. The server decodes, re-hashes and compares the
two strings exactly; the algorithm is fixed, never negotiated.
"""
import base64
import binascii
import hashlib

from shared.errors import ChecksumMismatchError, InvalidPayloadError


def compute_checksum(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


def encode_payload(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_payload(payload: str) -> bytes:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidPayloadError(f"Invalid base64 payload: {e}")


def verify_payload(payload: str, expected_checksum: str) -> tuple[bytes, str]:
    """Decode ``payload`` and check it against ``expected_checksum``.

    Returns the decoded bytes and the computed checksum. Raises
    ``ChecksumMismatchError`` carrying both digests when they differ.
    """
    data = decode_payload(payload)
    calculated = compute_checksum(data)
    if calculated != expected_checksum:
        raise ChecksumMismatchError(expected=expected_checksum, calculated=calculated)
    return data, calculated
