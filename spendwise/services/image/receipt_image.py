"""
Receipt Image Preparation using Pillow

Images arrive from a file upload or a camera capture, optionally with a
crop rectangle chosen by the user. Before anything is sent to the AI
service the image is:
1. Checked against the upload size limit and supported formats
2. Rotated according to its EXIF orientation
3. Cropped to the selected rectangle
4. Downscaled so the longest edge fits the configured maximum
5. Re-encoded as JPEG

Quality heuristics only produce hints for the user. A dark or low-contrast
photo is still sent; the AI service decides whether it can read it.
"""

from io import BytesIO
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError
from pydantic import BaseModel, Field

from spendwise.audit import get_logger
from spendwise.config import AppSettings, get_settings


logger = get_logger(__name__)

CropBox = tuple[int, int, int, int]

OUTPUT_MIME_TYPE = "image/jpeg"


class ImageError(Exception):
    """The uploaded image cannot be used."""
    pass


class PreparedImage(BaseModel):
    """An image ready to be sent for extraction."""

    data: bytes = Field(..., description="Encoded image bytes")
    mime_type: str = Field(default=OUTPUT_MIME_TYPE)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    quality_hints: list[str] = Field(
        default_factory=list,
        description="Advice shown to the user, never blocking"
    )


def assess_image_quality(img: Image.Image) -> list[str]:
    """
    Simple histogram heuristics on a receipt photo.

    Returns:
        Human-readable hints; empty when nothing looks wrong.
    """
    hints = []
    width, height = img.size

    if min(width, height) < 300:
        hints.append("Image resolution is low, text may be hard to read")

    gray = img.convert("L") if img.mode != "L" else img
    histogram = gray.histogram()
    total_pixels = sum(histogram)
    if not total_pixels:
        return hints

    if sum(histogram[:50]) / total_pixels > 0.7:
        hints.append("Image is very dark, try better lighting")
    if sum(histogram[200:]) / total_pixels > 0.7:
        hints.append("Image is overexposed, try reducing glare")

    # Range holding the middle 90% of pixels
    cumsum = 0
    low = None
    high = 255
    for value, count in enumerate(histogram):
        cumsum += count
        if low is None and cumsum >= total_pixels * 0.05:
            low = value
        if cumsum >= total_pixels * 0.95:
            high = value
            break
    if high - (low or 0) < 50:
        hints.append("Image has very low contrast, text may be hard to read")

    return hints


def _validate_crop(box: CropBox, size: tuple[int, int]) -> CropBox:
    left, top, right, bottom = (int(v) for v in box)
    width, height = size
    left, top = max(left, 0), max(top, 0)
    right, bottom = min(right, width), min(bottom, height)
    if right <= left or bottom <= top:
        raise ImageError("The selected crop area is empty.")
    return left, top, right, bottom


def crop_box_from_fractions(
    image_bytes: bytes,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> CropBox:
    """
    Convert a selection given as fractions (0..1) of the upright image
    into a pixel crop box.

    Raises:
        ImageError: If the bytes are not an image or the fractions are out of order
    """
    if not (0 <= left < right <= 1 and 0 <= top < bottom <= 1):
        raise ImageError("The selected crop area is empty.")
    try:
        img = ImageOps.exif_transpose(Image.open(BytesIO(image_bytes)))
    except (UnidentifiedImageError, OSError) as e:
        raise ImageError("The file could not be read as an image.") from e
    width, height = img.size
    return (
        round(left * width),
        round(top * height),
        round(right * width),
        round(bottom * height),
    )


def prepare_receipt_image(
    image_bytes: bytes,
    crop_box: Optional[CropBox] = None,
    settings: Optional[AppSettings] = None,
) -> PreparedImage:
    """
    Validate and normalize a receipt image.

    Args:
        image_bytes: Raw uploaded or captured bytes
        crop_box: Optional (left, top, right, bottom) in pixels of the
            upright image; clamped to the image bounds
        settings: App settings (defaults to the loaded settings)

    Returns:
        PreparedImage holding JPEG bytes

    Raises:
        ImageError: Empty, oversized, unreadable or unsupported image,
            or an empty crop area
    """
    settings = settings or get_settings().app

    if not image_bytes:
        raise ImageError("No image data received.")
    if len(image_bytes) > settings.max_upload_size_bytes:
        raise ImageError(
            f"The image is too large. Maximum size is {settings.max_upload_size_mb} MB."
        )

    try:
        img = Image.open(BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageError("The file could not be read as an image.") from e

    image_format = (img.format or "").lower()
    allowed = settings.supported_formats_list
    if "jpeg" in allowed:
        allowed = allowed + ["jpg", "mpo"]
    if image_format not in allowed:
        raise ImageError(
            f"Unsupported image format '{image_format or 'unknown'}'. "
            f"Supported: {settings.supported_image_formats}"
        )

    img = ImageOps.exif_transpose(img)

    if crop_box is not None:
        img = img.crop(_validate_crop(crop_box, img.size))

    edge = settings.max_image_edge_px
    if max(img.size) > edge:
        img.thumbnail((edge, edge))

    if img.mode != "RGB":
        img = img.convert("RGB")

    hints = assess_image_quality(img)

    buffer = BytesIO()
    img.save(buffer, format="JPEG", quality=90)

    logger.info(
        "receipt_image_prepared",
        source_format=image_format,
        width=img.width,
        height=img.height,
        hint_count=len(hints),
    )

    return PreparedImage(
        data=buffer.getvalue(),
        width=img.width,
        height=img.height,
        quality_hints=hints,
    )
