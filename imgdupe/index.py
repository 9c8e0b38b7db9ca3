"""
Similarity index for fingerprint lookups.

The index holds one record per surviving image and answers nearest-match
queries for a new fingerprint. Two variants share the same three
operations (add, delete, query):

- ExactBucketIndex: fingerprints are dict keys, O(1) lookup, zero tolerance.
- DistanceIndex: fingerprints are scanned with a scoring function, O(n),
  and the best candidate is accepted only under a threshold.

The variant is chosen once per run by create_index(). Neither variant
locks; callers that hash in parallel must serialize query/add/delete.

Usage:
    index = create_index(config)

    match = index.query(fingerprint)
    if not match:
        index.add(record, fingerprint)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, Iterator

from .fingerprint import FingerprintFamily, get_family
from .models import EngineConfig, ImageRecord, MatchResult

logger = logging.getLogger(__name__)


class SimilarityIndex(ABC):
    """Add/delete/query over opaque fingerprints of one family."""

    @abstractmethod
    def add(self, record: ImageRecord, fingerprint: Any) -> None:
        """Insert a record under a fingerprint."""

    @abstractmethod
    def delete(self, record: ImageRecord | str, fingerprint: Any) -> None:
        """Remove an indexed entry. No-op if absent."""

    @abstractmethod
    def query(self, fingerprint: Any) -> MatchResult:
        """Return the accepted best match for a fingerprint, if any."""

    @abstractmethod
    def records(self) -> Iterator[ImageRecord]:
        """Iterate over indexed records."""

    def __len__(self) -> int:
        return sum(1 for _ in self.records())

    def __iter__(self) -> Iterator[ImageRecord]:
        return self.records()


class ExactBucketIndex(SimilarityIndex):
    """
    Index for exact-bucket families.

    Adding a second record under an existing fingerprint replaces the first
    (last write wins). A hit is always accepted.
    """

    def __init__(self):
        self._buckets: dict[Hashable, ImageRecord] = {}

    def add(self, record: ImageRecord, fingerprint: Hashable) -> None:
        self._buckets[fingerprint] = record

    def delete(self, record: ImageRecord | str, fingerprint: Hashable) -> None:
        # The bucket is addressed by fingerprint alone
        self._buckets.pop(fingerprint, None)

    def query(self, fingerprint: Hashable) -> MatchResult:
        record = self._buckets.get(fingerprint)
        if record is None:
            return MatchResult.no_match()
        return MatchResult(record=record, distance=0)

    def records(self) -> Iterator[ImageRecord]:
        return iter(list(self._buckets.values()))

    def __len__(self) -> int:
        return len(self._buckets)


class DistanceIndex(SimilarityIndex):
    """
    Index for distance-scored families.

    Every query scores the fingerprint against all indexed entries and keeps
    the minimum. When several entries share the minimum score the one added
    first wins, so the winner of an exact tie depends on insertion order.
    The minimum is accepted only if ``score <= threshold``; a threshold below
    the lowest possible score disables matching entirely.
    """

    def __init__(self, distance: Callable[[Any, Any], int], threshold: int):
        """
        Initialize the index.

        Args:
            distance: Scoring function, lower is more similar
            threshold: Maximum accepted score (may be negative)
        """
        self.distance = distance
        self.threshold = threshold
        self._entries: list[tuple[ImageRecord, Any]] = []

    def add(self, record: ImageRecord, fingerprint: Any) -> None:
        self._entries.append((record, fingerprint))

    def delete(self, record: ImageRecord | str, fingerprint: Any = None) -> None:
        path = record if isinstance(record, str) else record.path
        self._entries = [
            (rec, fp) for rec, fp in self._entries if rec.path != path
        ]

    def query(self, fingerprint: Any) -> MatchResult:
        best_record = None
        best_score = None

        for record, candidate in self._entries:
            score = self.distance(fingerprint, candidate)
            # Strict comparison keeps the first entry on ties
            if best_score is None or score < best_score:
                best_record, best_score = record, score

        if best_record is None:
            return MatchResult.no_match()

        if best_score <= self.threshold:
            return MatchResult(record=best_record, distance=best_score)

        logger.debug(
            f"Closest candidate {best_record.path} scored {best_score} "
            f"(threshold {self.threshold}), not a match"
        )
        return MatchResult.no_match()

    def records(self) -> Iterator[ImageRecord]:
        return iter([rec for rec, _ in self._entries])

    def __len__(self) -> int:
        return len(self._entries)


def create_index(config: EngineConfig, family: FingerprintFamily | None = None) -> SimilarityIndex:
    """
    Build the index variant matching the configured fingerprint family.

    Args:
        config: Engine configuration (algorithm and sensitivity)
        family: Pre-resolved family, looked up from config if omitted

    Returns:
        ExactBucketIndex or DistanceIndex
    """
    family = family or get_family(config.algorithm)
    if family.is_exact:
        logger.debug(f"Using exact bucket index for '{family.name}'")
        return ExactBucketIndex()

    logger.debug(
        f"Using distance index for '{family.name}' "
        f"(sensitivity {config.sensitivity}, threshold {config.threshold})"
    )
    return DistanceIndex(distance=family.distance, threshold=config.threshold)


__all__ = [
    'SimilarityIndex',
    'ExactBucketIndex',
    'DistanceIndex',
    'create_index',
]
