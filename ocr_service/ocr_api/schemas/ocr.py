"""
ocr.py (Schemas)

This file defines the data structure (schemas) used for OCR-related APIs.

Purpose of this file:
- Clearly define what data each OCR endpoint accepts and returns
- Help FastAPI generate clean and user-friendly API documentation
- Validate response data automatically

This file does NOT:
- Perform OCR
- Handle file uploads or downloads
- Call any services
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class OCRResponse(BaseModel):
    """
    Fields shared by every successful OCR response.
    """

    text: str = Field(
        ...,
        description="Text recognized in the image, with surrounding whitespace removed.",
        examples=["Paracetamol 500mg twice daily after food"]
    )


class URLOCRResponse(OCRResponse):
    source: Literal["url"] = "url"
    url: str = Field(..., description="The image URL that was downloaded.")


class Base64OCRResponse(OCRResponse):
    source: Literal["base64"] = "base64"
    size: int = Field(..., description="Size of the decoded image in bytes.")


class UploadOCRResponse(OCRResponse):
    source: Literal["upload"] = "upload"
    filename: Optional[str] = Field(None, description="Original name of the uploaded file.")
    size: int = Field(..., description="Size of the uploaded file in bytes.")


class Base64OCRRequest(BaseModel):
    """
    Body of POST /base64.

    `image` may be plain base64 or a data URL such as
    "data:image/png;base64,iVBORw0KGgo...".
    """

    image: Optional[str] = Field(
        None,
        description="Base64-encoded image, optionally with a data:image/...;base64, prefix."
    )


class ErrorResponse(BaseModel):
    """
    Body returned for every failed request.
    """

    error: str = Field(..., examples=["Invalid URL format"])
