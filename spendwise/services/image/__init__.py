"""Image processing services package."""

from spendwise.services.image.receipt_image import (
    CropBox,
    ImageError,
    PreparedImage,
    assess_image_quality,
    crop_box_from_fractions,
    prepare_receipt_image,
)

__all__ = [
    "CropBox",
    "ImageError",
    "PreparedImage",
    "assess_image_quality",
    "crop_box_from_fractions",
    "prepare_receipt_image",
]
