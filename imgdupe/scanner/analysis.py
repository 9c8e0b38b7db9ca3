"""
Image analysis module for the scanner package.

Decodes a single image, extracts its dimensions and computes its fingerprint
under the active family.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import ImageDecodeError
from ..fingerprint import FingerprintFamily
from ..models import ObservedImage
from .dependencies import Image, HAS_HEIF_SUPPORT, _logger


def decode_image(filepath: str | Path, family: FingerprintFamily) -> ObservedImage:
    """
    Decode an image file and fingerprint it.

    Args:
        filepath: Path to the image file
        family: Active fingerprint family

    Returns:
        ObservedImage with dimensions and fingerprint

    Raises:
        ImageDecodeError: If the file is missing, unreadable, not an image,
            truncated, or cannot be hashed
    """
    filepath = str(filepath)

    if not os.path.isfile(filepath):
        raise ImageDecodeError(filepath, "File not found")

    if not os.access(filepath, os.R_OK):
        raise ImageDecodeError(filepath, "File not readable (permission denied)")

    ext = os.path.splitext(filepath)[1].lower()
    if ext in {'.heic', '.heif'} and not HAS_HEIF_SUPPORT:
        raise ImageDecodeError(filepath, "HEIC/HEIF support not installed (pip install pillow-heif)")

    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated images early
            img.load()
            width, height = img.size
            fingerprint = family.compute(img)
    except Image.UnidentifiedImageError as e:
        raise ImageDecodeError(filepath, f"Not a valid image file: {e}") from e
    except Exception as e:
        raise ImageDecodeError(filepath, f"Failed to decode image: {e}") from e

    _logger.debug(f"Decoded {filepath} ({width}x{height})")

    return ObservedImage(
        path=filepath,
        width=width,
        height=height,
        fingerprint=fingerprint,
    )


__all__ = ['decode_image']
