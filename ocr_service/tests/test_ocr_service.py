import io

import pytest
from PIL import Image

from ocr_api.services.ocr import OCRService

from conftest import make_image


def test_extract_text_strips_whitespace(fake_tesseract, png_bytes):
    text = OCRService(language="eng").extract_text(png_bytes)

    assert text == "Hello OCR"
    assert fake_tesseract[0]["lang"] == "eng"


def test_every_input_format_reaches_tesseract_as_png(fake_tesseract):
    service = OCRService()
    for fmt in ("JPEG", "BMP", "GIF", "TIFF"):
        service.extract_text(make_image(fmt))

    assert [call["format"] for call in fake_tesseract] == ["PNG"] * 4


def test_normalize_converts_cmyk_to_rgb():
    png = OCRService().normalize_image(make_image("JPEG", mode="CMYK"))

    with Image.open(io.BytesIO(png)) as image:
        assert image.format == "PNG"
        assert image.mode == "RGB"


def test_normalize_keeps_alpha():
    png = OCRService().normalize_image(make_image("PNG", mode="RGBA"))

    with Image.open(io.BytesIO(png)) as image:
        assert image.mode == "RGBA"


def test_undecodable_image_is_an_ocr_failure(fake_tesseract):
    with pytest.raises(RuntimeError, match="^OCR processing failed: "):
        OCRService().extract_text(b"definitely not an image")

    assert fake_tesseract == []


def test_tesseract_error_is_wrapped(monkeypatch, png_bytes):
    from ocr_api.services import ocr as ocr_module

    def broken(*args, **kwargs):
        raise OSError("tesseract is not installed")

    monkeypatch.setattr(ocr_module.pytesseract, "image_to_string", broken)

    with pytest.raises(RuntimeError, match="OCR processing failed: tesseract is not installed"):
        OCRService().extract_text(png_bytes)
