import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from ocr_api.main import app
from ocr_api.services import ocr as ocr_module


def make_image(fmt: str = "PNG", mode: str = "RGB", size=(64, 32)) -> bytes:
    image = Image.new(mode, size, "white")
    output = io.BytesIO()
    image.save(output, format=fmt)
    return output.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image("PNG")


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fake_tesseract(monkeypatch):
    """Replace the Tesseract call and record what it was given."""
    calls = []

    def image_to_string(image, lang=None, config=None):
        calls.append({"format": image.format, "mode": image.mode, "lang": lang, "config": config})
        return "  Hello OCR\n\n"

    monkeypatch.setattr(ocr_module.pytesseract, "image_to_string", image_to_string)
    return calls
