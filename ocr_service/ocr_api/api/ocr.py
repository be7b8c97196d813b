"""
ocr.py (API Route)

This file defines the OCR API endpoints.

Endpoints:
- GET  /?url=<image_url>  - OCR an image downloaded from a URL
                            (serves the HTML page when no URL is given)
- POST /                  - OCR an uploaded file (multipart field "image")
- POST /base64            - OCR a base64 string sent as JSON {"image": ...}

What this file does NOT do:
- Save files to disk (everything stays in memory)
- Process images directly (delegates to OCRService)

Flow:
Input → validate → raw bytes → OCRService → JSON
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from fastapi import APIRouter, File, HTTPException, Query, UploadFile, status
from fastapi.responses import FileResponse

from ocr_api.config import MAX_IMAGE_SIZE
from ocr_api.schemas.ocr import (
    Base64OCRRequest,
    Base64OCRResponse,
    ErrorResponse,
    UploadOCRResponse,
    URLOCRResponse,
)
from ocr_api.services.downloader import ImageDownloader
from ocr_api.services.inputs import (
    decode_base64_image,
    read_upload,
    validate_image_url,
    validate_upload,
)
from ocr_api.services.ocr import OCRService

logger = logging.getLogger(__name__)

INDEX_PAGE = Path(__file__).resolve().parent.parent / "pages" / "index.html"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    500: {"model": ErrorResponse, "description": "Download or OCR failure"},
}

# Create a router for OCR-related endpoints
# This router will be registered in main.py
router = APIRouter()


async def _run_ocr(image_bytes: bytes) -> str:
    # Tesseract blocks, keep it off the event loop
    try:
        return await asyncio.to_thread(OCRService().extract_text, image_bytes)
    except RuntimeError as error:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(error)
        )


@router.get(
    "/",
    response_model=URLOCRResponse,
    responses={
        **ERROR_RESPONSES,
        200: {"content": {"text/html": {}}, "description": "OCR result, or the HTML page when no URL is given"},
    },
    summary="Extract text from an image URL",
    description=(
        "Download the image at `url` and extract its text. "
        "Without `url` the HTML front page is returned instead."
    )
)
async def ocr_from_url(url: Optional[str] = Query(None, description="Image URL to download")):
    # No URL: behave like a normal web page
    if not url:
        return FileResponse(INDEX_PAGE, media_type="text/html")

    try:
        url = validate_image_url(url)
    except ValueError as error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error)
        )

    logger.info("Processing image from URL: %s", url)

    try:
        image_bytes = await asyncio.to_thread(ImageDownloader().download, url)
    except RuntimeError as error:
        logger.error("OCR Error (URL): %s", error)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(error)
        )

    text = await _run_ocr(image_bytes)

    return URLOCRResponse(text=text, url=url)


@router.post(
    "/",
    response_model=UploadOCRResponse,
    responses=ERROR_RESPONSES,
    summary="Extract text from an uploaded image",
    description="Upload an image as multipart/form-data in the `image` field."
)
async def ocr_from_upload(image: Union[UploadFile, str, None] = File(None)):
    """
    Upload endpoint.

    Errors:
    - 400: no file, not an image, or larger than the size limit
    - 500: OCR failed
    """

    # A plain text field named "image" carries no file
    if image is None or isinstance(image, str):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='No image file uploaded. Please include an image in the "image" field.'
        )

    try:
        data = await read_upload(image, MAX_IMAGE_SIZE)
        data = validate_upload(image.content_type, data, MAX_IMAGE_SIZE)
    except ValueError as error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error)
        )
    finally:
        await image.close()

    logger.info("Processing uploaded file: %s (%d bytes)", image.filename, len(data))

    text = await _run_ocr(data)

    return UploadOCRResponse(text=text, filename=image.filename, size=len(data))


@router.post(
    "/base64",
    response_model=Base64OCRResponse,
    responses=ERROR_RESPONSES,
    summary="Extract text from a base64 image",
    description=(
        'Send JSON {"image": "<base64>"}. '
        "A data URL prefix such as `data:image/png;base64,` is accepted."
    )
)
async def ocr_from_base64(payload: Base64OCRRequest):
    try:
        image_bytes = decode_base64_image(payload.image or "", MAX_IMAGE_SIZE)
    except ValueError as error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error)
        )

    logger.info("Processing base64 image (%d bytes)", len(image_bytes))

    text = await _run_ocr(image_bytes)

    return Base64OCRResponse(text=text, size=len(image_bytes))
