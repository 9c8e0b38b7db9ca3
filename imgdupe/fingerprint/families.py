"""
Fingerprint families.

Each family turns a decoded Pillow image into an ``imagehash.ImageHash``.
Exact-bucket families are compared by equality only; distance-scored
families expose a score (Hamming distance shifted by SENSITIVITY_OFFSET)
that the similarity index compares against the run threshold.

Fingerprints from different families are never comparable.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable

import imagehash
import numpy as np
from PIL import Image

from ..config import DISTANCE_HASH_SIZE, SENSITIVITY_OFFSET

EXACT = 'exact'
DISTANCE = 'distance'


def hamming_distance(first: imagehash.ImageHash, second: imagehash.ImageHash) -> int:
    """
    Count differing bits between two fingerprints.

    Raises:
        ValueError: If the fingerprints have different sizes
    """
    a = np.asarray(first.hash).flatten()
    b = np.asarray(second.hash).flatten()
    if a.shape != b.shape:
        raise ValueError(
            f"Fingerprints are not comparable: {a.size} bits vs {b.size} bits"
        )
    return int(np.count_nonzero(a != b))


def scored_distance(first: imagehash.ImageHash, second: imagehash.ImageHash) -> int:
    """Hamming distance on the shifted score scale (0 bits -> -100)."""
    return hamming_distance(first, second) - SENSITIVITY_OFFSET


@dataclass(frozen=True)
class FingerprintFamily:
    """
    A perceptual hashing algorithm with its comparison semantics.

    Attributes:
        name: Family name used on the command line
        kind: EXACT or DISTANCE
        hasher: imagehash function producing the fingerprint
        description: One line shown in --help
    """
    name: str
    kind: str
    hasher: Callable[[Image.Image], imagehash.ImageHash]
    description: str = ""

    @property
    def is_exact(self) -> bool:
        return self.kind == EXACT

    def compute(self, image: Image.Image) -> imagehash.ImageHash:
        # Same normalisation the rest of the scanner applies before hashing
        if image.mode not in ('RGB', 'L'):
            image = image.convert('RGB')
        return self.hasher(image)

    def distance(self, first: imagehash.ImageHash, second: imagehash.ImageHash) -> int:
        if self.is_exact:
            return hamming_distance(first, second)
        return scored_distance(first, second)


FAMILIES = {
    'avg': FingerprintFamily(
        name='avg',
        kind=EXACT,
        hasher=imagehash.average_hash,
        description='average hash, exact bucket match',
    ),
    'diff': FingerprintFamily(
        name='diff',
        kind=EXACT,
        hasher=imagehash.dhash,
        description='difference hash, exact bucket match',
    ),
    'phash': FingerprintFamily(
        name='phash',
        kind=DISTANCE,
        hasher=partial(imagehash.phash, hash_size=DISTANCE_HASH_SIZE),
        description='DCT perceptual hash, scored by sensitivity',
    ),
    'whash': FingerprintFamily(
        name='whash',
        kind=DISTANCE,
        hasher=partial(imagehash.whash, hash_size=DISTANCE_HASH_SIZE),
        description='Haar wavelet hash, scored by sensitivity',
    ),
}

ALIASES = {
    'fmiq': 'whash',
    'ahash': 'avg',
    'dhash': 'diff',
}


def get_family(name: str) -> FingerprintFamily:
    """
    Look up a fingerprint family by name or alias.

    Raises:
        ValueError: If the name is unknown
    """
    key = name.lower()
    key = ALIASES.get(key, key)
    try:
        return FAMILIES[key]
    except KeyError:
        choices = ', '.join(sorted(set(FAMILIES) | set(ALIASES)))
        raise ValueError(f"Unknown algorithm '{name}'. Choose one of: {choices}") from None


def family_names() -> list[str]:
    """All accepted names, aliases included."""
    return sorted(set(FAMILIES) | set(ALIASES))


def compute_fingerprint(image: Image.Image, family: FingerprintFamily | str) -> imagehash.ImageHash:
    """Compute the fingerprint of a decoded image under the selected family."""
    if isinstance(family, str):
        family = get_family(family)
    return family.compute(image)


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
