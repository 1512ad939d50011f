"""Tests for receipt image preparation."""

from io import BytesIO

import pytest
from PIL import Image, ImageDraw

from spendwise.config import AppSettings
from spendwise.services.image import (
    ImageError,
    assess_image_quality,
    crop_box_from_fractions,
    prepare_receipt_image,
)


def receipt_bytes(size=(600, 800), fmt="PNG", color=(190, 190, 190)):
    img = Image.new("RGB", size, color)
    draw = ImageDraw.Draw(img)
    for y in range(40, size[1] - 40, 40):
        draw.rectangle([30, y, size[0] - 30, y + 12], fill="black")
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


class TestPrepareReceiptImage:
    """Tests for validation and normalization."""

    def test_png_is_reencoded_as_jpeg(self):
        prepared = prepare_receipt_image(receipt_bytes())

        assert prepared.mime_type == "image/jpeg"
        assert (prepared.width, prepared.height) == (600, 800)
        assert Image.open(BytesIO(prepared.data)).format == "JPEG"

    def test_crop_is_applied_and_clamped(self):
        prepared = prepare_receipt_image(receipt_bytes(), crop_box=(100, 200, 5000, 600))
        assert (prepared.width, prepared.height) == (500, 400)

    def test_empty_crop(self):
        with pytest.raises(ImageError, match="crop area is empty"):
            prepare_receipt_image(receipt_bytes(), crop_box=(300, 300, 300, 500))

    def test_large_image_is_downscaled(self):
        settings = AppSettings(max_image_edge_px=400)
        prepared = prepare_receipt_image(receipt_bytes(), settings=settings)
        assert (prepared.width, prepared.height) == (300, 400)

    def test_empty_bytes(self):
        with pytest.raises(ImageError, match="No image data received."):
            prepare_receipt_image(b"")

    def test_not_an_image(self):
        with pytest.raises(ImageError, match="could not be read"):
            prepare_receipt_image(b"%PDF-1.4 not really an image")

    def test_too_large(self):
        settings = AppSettings(max_upload_size_mb=1)
        with pytest.raises(ImageError, match="Maximum size is 1 MB"):
            prepare_receipt_image(b"x" * (1024 * 1024 + 1), settings=settings)

    def test_unsupported_format(self):
        with pytest.raises(ImageError, match="Unsupported image format 'gif'"):
            prepare_receipt_image(receipt_bytes(fmt="GIF"))


class TestQualityHints:

    def test_clean_receipt_has_no_hints(self):
        assert assess_image_quality(Image.open(BytesIO(receipt_bytes()))) == []

    def test_dark_image(self):
        img = Image.new("RGB", (600, 800), (10, 10, 10))
        assert "Image is very dark, try better lighting" in assess_image_quality(img)

    def test_small_image(self):
        img = Image.open(BytesIO(receipt_bytes(size=(200, 250))))
        assert "Image resolution is low, text may be hard to read" in assess_image_quality(img)


class TestCropFractions:

    def test_fractions_to_pixels(self):
        box = crop_box_from_fractions(receipt_bytes(), 0.1, 0.25, 0.9, 0.75)
        assert box == (60, 200, 540, 600)

    def test_out_of_order(self):
        with pytest.raises(ImageError):
            crop_box_from_fractions(receipt_bytes(), 0.5, 0.0, 0.5, 1.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
