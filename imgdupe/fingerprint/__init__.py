"""
Fingerprint families for imgdupe.

Public API:
- get_family: Look up a family by name or alias
- compute_fingerprint: Hash a decoded image under a family
- hamming_distance / scored_distance: Distance helpers for ImageHash values
"""

from __future__ import annotations

from .families import (
    EXACT,
    DISTANCE,
    FingerprintFamily,
    FAMILIES,
    ALIASES,
    get_family,
    family_names,
    compute_fingerprint,
    hamming_distance,
    scored_distance,
)

__all__ = [
    'EXACT',
    'DISTANCE',
    'FingerprintFamily',
    'FAMILIES',
    'ALIASES',
    'get_family',
    'family_names',
    'compute_fingerprint',
    'hamming_distance',
    'scored_distance',
]
