import asyncio
import base64
import io

import pytest
from fastapi import UploadFile

from ocr_api.services.inputs import (
    decode_base64_image,
    read_upload,
    too_large_message,
    validate_image_url,
    validate_upload,
)


@pytest.mark.parametrize("url", [
    "http://example.com/a.png",
    "https://cdn.example.com:8443/img?id=3",
    "  https://example.com/padded.jpg  ",
])
def test_valid_urls(url):
    assert validate_image_url(url) == url.strip()


@pytest.mark.parametrize("url", [
    "not a url",
    "example.com/image.png",
    "ftp://example.com/image.png",
    "http://",
    "http://[::1",
    "http://exa mple.com/a.png",
    "http://exa<mple>.com/a.png",
    "http://:8080/a.png",
])
def test_invalid_urls(url):
    with pytest.raises(ValueError, match="^Invalid URL format$"):
        validate_image_url(url)


def test_plain_base64_is_decoded_directly():
    raw = b"\x89PNG fake image bytes"
    assert decode_base64_image(base64.b64encode(raw).decode()) == raw


def test_data_url_prefix_is_stripped():
    raw = b"\xff\xd8\xff jpeg bytes"
    data = "data:image/jpeg;base64," + base64.b64encode(raw).decode()
    assert decode_base64_image(data) == raw


def test_line_breaks_are_ignored():
    raw = bytes(range(200))
    encoded = base64.encodebytes(raw).decode()
    assert "\n" in encoded
    assert decode_base64_image(encoded) == raw


def test_non_image_data_url_prefix_is_not_stripped():
    data = "data:text/plain;base64," + base64.b64encode(b"hello").decode()
    with pytest.raises(ValueError, match="Invalid base64 image data"):
        decode_base64_image(data)


@pytest.mark.parametrize("data", ["", "   ", None])
def test_missing_base64(data):
    with pytest.raises(ValueError, match="No image data provided"):
        decode_base64_image(data)


def test_garbage_base64():
    with pytest.raises(ValueError, match="Invalid base64 image data"):
        decode_base64_image("this is !!! not base64")


def test_base64_over_limit():
    data = base64.b64encode(b"x" * 11).decode()
    with pytest.raises(ValueError, match="File too large"):
        decode_base64_image(data, max_size=10)


def test_too_large_message():
    assert too_large_message(10 * 1024 * 1024) == "File too large. Maximum size is 10MB."


@pytest.mark.parametrize("limit, shown", [
    (512 * 1024, "524288 bytes"),
    (1, "1 bytes"),
    (1024 * 1024, "1MB"),
    (3 * 1024 * 1024 // 2, "1.5MB"),
])
def test_too_large_message_never_rounds_down_to_zero(limit, shown):
    assert too_large_message(limit) == f"File too large. Maximum size is {shown}."


def test_upload_type_is_checked_before_size():
    with pytest.raises(ValueError, match="Only image files are allowed"):
        validate_upload("application/pdf", b"x" * 100, max_size=10)


@pytest.mark.parametrize("content_type", ["", None, "text/plain", "application/octet-stream"])
def test_upload_non_image_types(content_type):
    with pytest.raises(ValueError, match="Only image files are allowed"):
        validate_upload(content_type, b"data")


def test_upload_over_limit():
    with pytest.raises(ValueError, match="File too large"):
        validate_upload("image/png", b"x" * 11, max_size=10)


def test_empty_upload():
    with pytest.raises(ValueError, match="Uploaded image is empty"):
        validate_upload("image/png", b"")


def test_upload_accepted():
    assert validate_upload("IMAGE/PNG", b"data") == b"data"


def test_read_upload_stops_after_limit(monkeypatch):
    import ocr_api.services.inputs as inputs

    monkeypatch.setattr(inputs, "UPLOAD_CHUNK_SIZE", 4)
    upload = UploadFile(file=io.BytesIO(b"a" * 100), filename="big.png")

    data = asyncio.run(read_upload(upload, max_size=10))

    assert len(data) == 12


def test_read_upload_reads_small_file_whole():
    upload = UploadFile(file=io.BytesIO(b"small"), filename="small.png")
    assert asyncio.run(read_upload(upload, max_size=10)) == b"small"
