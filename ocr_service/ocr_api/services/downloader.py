"""
downloader.py

This module fetches images from remote URLs for the OCR API.

Responsibilities:
- Download image bytes over HTTP(S)
- Enforce the download timeout and the image size limit
- Turn network failures into short, human-readable messages

No retries are made: a failed download fails the request.
"""

import logging
from typing import Optional

import requests

from ocr_api.config import DOWNLOAD_TIMEOUT, MAX_IMAGE_SIZE

logger = logging.getLogger(__name__)


class ImageDownloader:
    """
    ImageDownloader is a thin wrapper over requests.get
    that returns the response body as bytes.
    """

    def __init__(
        self,
        timeout: float = DOWNLOAD_TIMEOUT,
        max_size: int = MAX_IMAGE_SIZE,
        chunk_size: int = 64 * 1024
    ):
        """
        Parameters:
        - timeout: Request timeout in seconds
        - max_size: Largest accepted body in bytes
        - chunk_size: Size of each streamed read
        """

        self.timeout = timeout
        self.max_size = max_size
        self.chunk_size = chunk_size

    def download(self, url: str) -> bytes:
        """
        Download an image and return its raw bytes.

        Raises:
        - RuntimeError with a user-facing message on any failure
        """

        try:
            with requests.get(url, timeout=self.timeout, stream=True) as response:
                response.raise_for_status()
                return self._read_body(response)

        except requests.exceptions.Timeout as error:
            logger.warning("Download timed out for %s: %s", url, error)
            raise RuntimeError(
                "Request timeout - image download took too long"
            ) from error

        except requests.exceptions.ConnectionError as error:
            logger.warning("Connection failed for %s: %s", url, error)
            raise RuntimeError("Invalid URL or network error") from error

        except requests.exceptions.HTTPError as error:
            status_code = error.response.status_code if error.response is not None else None

            if status_code == 404:
                raise RuntimeError("Image not found at the provided URL") from error

            raise RuntimeError(
                f"Failed to download image: Request failed with status code {status_code}"
            ) from error

        except requests.exceptions.RequestException as error:
            # Invalid schema, too many redirects, body too large, ...
            raise RuntimeError(f"Failed to download image: {error}") from error

    def _read_body(self, response: requests.Response) -> bytes:
        declared = _content_length(response)
        if declared is not None and declared > self.max_size:
            raise _TooLarge(self.max_size)

        body = bytearray()
        for chunk in response.iter_content(chunk_size=self.chunk_size):
            body.extend(chunk)
            if len(body) > self.max_size:
                raise _TooLarge(self.max_size)

        return bytes(body)


class _TooLarge(requests.exceptions.RequestException):
    def __init__(self, limit: int):
        super().__init__(f"maxContentLength size of {limit} exceeded")


def _content_length(response: requests.Response) -> Optional[int]:
    value = response.headers.get("Content-Length")
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None
