"""
config.py

Central place to load environment variables.
"""

from dotenv import load_dotenv
import os

# Load variables from .env file into environment
load_dotenv()

# Server settings used by run.py
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3010"))

# Upper bound for an image from any channel (URL, base64, upload)
MAX_IMAGE_SIZE = int(os.getenv("MAX_IMAGE_SIZE", str(10 * 1024 * 1024)))

# Seconds to wait for a remote image download
DOWNLOAD_TIMEOUT = float(os.getenv("DOWNLOAD_TIMEOUT", "30"))

# Tesseract settings
OCR_LANGUAGE = os.getenv("OCR_LANGUAGE", "eng")
TESSERACT_CONFIG = os.getenv("TESSERACT_CONFIG", "")
TESSERACT_CMD = os.getenv("TESSERACT_CMD")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
