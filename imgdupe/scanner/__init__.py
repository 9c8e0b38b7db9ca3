"""
Scanner package for imgdupe.

Feeds the resolution engine: finds candidate files, decodes them and
computes fingerprints, in parallel ahead of a single resolving consumer.

Public API:
- find_image_files: Discover image files under the run root
- decode_image: Decode and fingerprint a single image
- iter_observations: Parallel decode/hash, yielded in enumeration order
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .file_discovery import find_image_files
from .analysis import decode_image
from .parallel import iter_observations, Observation

from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    'find_image_files',
    'decode_image',
    'iter_observations',
    'Observation',
    'has_heif_support',
]
