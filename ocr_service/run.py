"""
run.py

This file is a simple entry point to run the FastAPI application
using Uvicorn.

It allows developers to start the server using:
    python run.py

No business logic should be written here.
"""

import logging

import uvicorn

from ocr_api.config import HOST, LOG_LEVEL, PORT

logger = logging.getLogger("ocr_api")


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)

    logger.info("OCR API server listening at http://localhost:%s", PORT)
    logger.info("Usage:")
    logger.info("  GET  /?url=<image_url>       - OCR from image URL")
    logger.info("  POST / (with image file)     - OCR from uploaded file")
    logger.info('  POST /base64 {"image": ...}  - OCR from base64 string')

    # Start the FastAPI application
    # host="0.0.0.0" allows access from other devices if needed
    uvicorn.run(
        "ocr_api.main:app",
        host=HOST,
        port=PORT
    )
