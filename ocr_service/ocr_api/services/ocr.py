"""
ocr.py

This file is used to read image bytes and extract readable text from them.

Every image goes through the same two steps:
1. Normalize: re-encode whatever format arrived into PNG (Pillow)
2. Recognize: run Tesseract OCR on the PNG (pytesseract)

This file:
- Only returns extracted text
- Does NOT save files anywhere
- Does NOT contain FastAPI routes
- Does NOT download anything
"""

import io
import logging
from typing import Optional

from PIL import Image  # Used for image handling
import pytesseract  # OCR engine to read text from images

from ocr_api.config import OCR_LANGUAGE, TESSERACT_CMD, TESSERACT_CONFIG

logger = logging.getLogger(__name__)

# Point pytesseract at a specific binary when one is configured
if TESSERACT_CMD:
    pytesseract.pytesseract.tesseract_cmd = TESSERACT_CMD

# Pillow modes that PNG can store as-is
PNG_MODES = {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}


class OCRService:
    """
    OCRService is responsible for one job only:
    turning image bytes into text.
    """

    def __init__(self, language: Optional[str] = None, config: Optional[str] = None):
        """
        Initialize OCR service.

        Parameters:
        - language: Tesseract language code (defaults to OCR_LANGUAGE)
        - config: extra Tesseract flags (defaults to TESSERACT_CONFIG)
        """

        self.language = language or OCR_LANGUAGE
        self.config = TESSERACT_CONFIG if config is None else config

    def extract_text(self, image_bytes: bytes) -> str:
        """
        Main entry point used by the application.

        What happens here:
        1. Convert the image to PNG for better OCR compatibility
        2. Run Tesseract on the PNG
        3. Return the text with surrounding whitespace removed

        Parameters:
        - image_bytes: raw image data in any format Pillow can read

        Returns:
        - extracted text as a single string

        Raises:
        - RuntimeError if normalization or recognition fails

        Called by:
        - API routes in ocr_api/api/ocr.py
        """

        try:
            png_bytes = self.normalize_image(image_bytes)
            text = self._recognize(png_bytes)
        except Exception as error:
            logger.exception("OCR processing failed")
            raise RuntimeError(f"OCR processing failed: {error}") from error

        return text.strip()

    def normalize_image(self, image_bytes: bytes) -> bytes:
        """
        Re-encode an arbitrary image into PNG bytes.

        Modes PNG cannot hold (CMYK, YCbCr, LAB, HSV, F...) are converted
        to RGB first.
        """

        with Image.open(io.BytesIO(image_bytes)) as image:
            logger.debug(
                "Normalizing %s image (%sx%s, mode %s)",
                image.format, image.width, image.height, image.mode
            )

            if image.mode not in PNG_MODES:
                image = image.convert("RGB")

            output = io.BytesIO()
            image.save(output, format="PNG")

        return output.getvalue()

    def _recognize(self, png_bytes: bytes) -> str:
        with Image.open(io.BytesIO(png_bytes)) as image:
            logger.info(
                "Recognizing text (lang=%s, %sx%s)",
                self.language, image.width, image.height
            )
            text = pytesseract.image_to_string(
                image,
                lang=self.language,
                config=self.config
            )

        logger.debug("Recognized %d characters", len(text))
        return text
