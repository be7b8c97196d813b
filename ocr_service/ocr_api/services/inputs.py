"""
inputs.py

Validation helpers for the three ways an image can reach the OCR API:
- a remote URL
- a base64 string (optionally a data URL)
- a multipart file upload

Every helper either returns clean input or raises ValueError
with the message that is shown to the caller.
"""

import base64
import binascii
import re
from urllib.parse import urlparse

import requests
from fastapi import UploadFile

from ocr_api.config import MAX_IMAGE_SIZE

# "data:image/png;base64," style prefix sent by browsers (FileReader.readAsDataURL)
DATA_URL_PREFIX = re.compile(r"^data:image/[A-Za-z0-9.+-]+;base64,", re.IGNORECASE)

ALLOWED_URL_SCHEMES = ("http", "https")

# Whitespace, control and other characters no hostname may contain
INVALID_HOST_CHARS = re.compile(r"[\s\x00-\x1f\x7f<>\"{}|\\^`]")

UPLOAD_CHUNK_SIZE = 1024 * 1024


def too_large_message(limit: int = MAX_IMAGE_SIZE) -> str:
    mib = 1024 * 1024

    if limit < mib:
        return f"File too large. Maximum size is {limit} bytes."

    if limit % mib == 0:
        return f"File too large. Maximum size is {limit // mib}MB."

    return f"File too large. Maximum size is {limit / mib:.1f}MB."


def validate_image_url(url: str) -> str:
    """
    Check that the URL is absolute http(s) with a host that
    requests can parse.

    Raises:
    - ValueError("Invalid URL format") otherwise
    """

    url = url.strip()

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as error:
        raise ValueError("Invalid URL format") from error

    # ftp://, file://, ... are refused here instead of failing later
    # in the download with a 500
    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES or not hostname:
        raise ValueError("Invalid URL format")

    if INVALID_HOST_CHARS.search(hostname):
        raise ValueError("Invalid URL format")

    try:
        requests.Request("GET", url).prepare()
    except (requests.exceptions.RequestException, ValueError) as error:
        raise ValueError("Invalid URL format") from error

    return url


def decode_base64_image(data: str, max_size: int = MAX_IMAGE_SIZE) -> bytes:
    """
    Decode a base64 image string into bytes.

    A "data:image/...;base64," prefix is removed first when present;
    plain base64 is decoded as-is. Line breaks and spaces are ignored.
    """

    if not data or not data.strip():
        raise ValueError(
            'No image data provided. Please include a base64 string in the "image" field.'
        )

    payload = DATA_URL_PREFIX.sub("", data.strip(), count=1)
    payload = "".join(payload.split())

    try:
        image_bytes = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as error:
        raise ValueError("Invalid base64 image data") from error

    if not image_bytes:
        raise ValueError("Invalid base64 image data")

    if len(image_bytes) > max_size:
        raise ValueError(too_large_message(max_size))

    return image_bytes


def validate_upload(content_type: str, data: bytes, max_size: int = MAX_IMAGE_SIZE) -> bytes:
    """
    Check type and size of an uploaded file.

    The type check comes first, so a large non-image is reported
    as a type error.
    """

    if not (content_type or "").lower().startswith("image/"):
        raise ValueError("Only image files are allowed. Please upload a valid image.")

    if len(data) > max_size:
        raise ValueError(too_large_message(max_size))

    if not data:
        raise ValueError("Uploaded image is empty")

    return data


async def read_upload(upload: UploadFile, max_size: int = MAX_IMAGE_SIZE) -> bytes:
    """
    Read an upload into memory, stopping as soon as it exceeds max_size.

    The returned bytes run at most one chunk past max_size, which is
    enough for validate_upload to reject them.
    """

    chunks = []
    total = 0

    while True:
        chunk = await upload.read(UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
        total += len(chunk)
        if total > max_size:
            break

    return b"".join(chunks)
