import base64
import hashlib

import pytest

from shared.errors import ChecksumMismatchError, InvalidPayloadError
from services.upload_service.integrity import compute_checksum, decode_payload, encode_payload, verify_payload
from services.upload_service.service import generate_object_key

PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c63f8ffff3f0005fe02fea7d6a4ba0000000049454e44ae426082"
)


def test_checksum_survives_encode_decode():
    for data in (b"", b"hello", PNG_BYTES, bytes(range(256)) * 4):
        assert compute_checksum(decode_payload(encode_payload(data))) == compute_checksum(data)


def test_verify_payload_reports_both_digests():
    payload = encode_payload(PNG_BYTES)
    with pytest.raises(ChecksumMismatchError) as excinfo:
        verify_payload(payload, "0" * 32)
    assert excinfo.value.expected == "0" * 32
    assert excinfo.value.calculated == hashlib.md5(PNG_BYTES).hexdigest()


def test_checksum_comparison_is_exact():
    payload = encode_payload(b"hello")
    with pytest.raises(ChecksumMismatchError):
        verify_payload(payload, hashlib.md5(b"hello").hexdigest().upper())


def test_invalid_base64_is_rejected():
    with pytest.raises(InvalidPayloadError):
        decode_payload("not base64!!")


def test_object_key_keeps_only_the_basename():
    key = generate_object_key("../../etc/shirt.png")
    timestamp, _, name = key.partition("-")
    assert timestamp.isdigit()
    assert name == "shirt.png"


def test_to_base64_returns_payload_and_checksum(client):
    response = client.post("/api/upload/to-base64", files={"image": ("shirt.png", PNG_BYTES, "image/png")})
    assert response.status_code == 200
    body = response.json()
    assert base64.b64decode(body["base64"]) == PNG_BYTES
    assert body["checksum"] == hashlib.md5(PNG_BYTES).hexdigest()
    assert body["filename"] == "shirt.png"
    assert body["size"] == len(PNG_BYTES)
    assert body["mimetype"] == "image/png"


def test_encoded_roundtrip_is_verified_and_stored(client, storage):
    encoded = client.post(
        "/api/upload/to-base64", files={"image": ("shirt.png", PNG_BYTES, "image/png")}
    ).json()

    response = client.post(
        "/api/upload/from-base64",
        json={
            "base64": encoded["base64"],
            "checksum": encoded["checksum"],
            "filename": "shirt.png",
            "mimetype": "image/png",
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["verified"] is True
    assert body["checksum"] == encoded["checksum"]
    assert body["filename"].endswith("-shirt.png")
    assert body["imageUrl"] == f"http://storage.test/shopquanao/{body['filename']}"
    assert storage.objects[body["filename"]] == (PNG_BYTES, "image/png")


def test_checksum_mismatch_stores_nothing(client, storage):
    response = client.post(
        "/api/upload/from-base64",
        json={
            "base64": base64.b64encode(PNG_BYTES).decode(),
            "checksum": hashlib.md5(b"something else").hexdigest(),
            "filename": "shirt.png",
        },
    )
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Checksum mismatch"
    assert body["expected"] == hashlib.md5(b"something else").hexdigest()
    assert body["calculated"] == hashlib.md5(PNG_BYTES).hexdigest()
    assert storage.objects == {}


def test_from_base64_requires_all_fields(client, storage):
    response = client.post("/api/upload/from-base64", json={"base64": "aGVsbG8="})
    assert response.status_code == 400
    assert storage.objects == {}


def test_from_base64_rejects_garbage_payload(client, storage):
    response = client.post(
        "/api/upload/from-base64",
        json={"base64": "%%%", "checksum": "abc", "filename": "x.png"},
    )
    assert response.status_code == 400
    assert storage.objects == {}


def test_from_base64_defaults_content_type(client, storage):
    response = client.post(
        "/api/upload/from-base64",
        json={
            "base64": base64.b64encode(b"raw").decode(),
            "checksum": hashlib.md5(b"raw").hexdigest(),
            "filename": "blob.bin",
        },
    )
    assert response.status_code == 200
    assert storage.objects[response.json()["filename"]][1] == "application/octet-stream"


def test_multipart_upload_stores_file(client, storage):
    response = client.post("/api/upload", files={"image": ("shirt.png", PNG_BYTES, "image/png")})
    assert response.status_code == 200
    body = response.json()
    assert body["imageUrl"].endswith("-shirt.png")
    assert storage.objects[body["filename"]] == (PNG_BYTES, "image/png")


def test_multipart_upload_without_file(client):
    response = client.post("/api/upload")
    assert response.status_code == 400
    assert response.json() == {"message": "No file was uploaded"}


def test_storage_failure_is_a_server_error(client, storage):
    storage.fail = True
    response = client.post("/api/upload", files={"image": ("shirt.png", PNG_BYTES, "image/png")})
    assert response.status_code == 500
    assert response.json() == {"message": "File upload failed", "error": "object store unreachable"}
