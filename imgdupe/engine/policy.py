"""
Keep-versus-discard policy for duplicate pairs.

The resolver queries the similarity index for every observed image, keeps
the copy with the larger pixel area, hands the pair to the quarantine and
leaves the index holding only the survivor.
"""

from __future__ import annotations

import logging

from ..errors import RelocationError
from ..index import SimilarityIndex
from ..models import (
    EngineConfig,
    ImageRecord,
    ObservedImage,
    Outcome,
    Resolution,
)
from .relocation import Quarantine

logger = logging.getLogger(__name__)


def new_file_wins(new_area: int, existing_area: int) -> bool:
    """
    Decide whether a newly observed file replaces the indexed one.

    Only a strictly larger area wins; equal areas keep the file that was
    indexed first.
    """
    return new_area > existing_area


class DuplicateResolver:
    """
    Resolves each observed image against the images seen before it.

    Not thread-safe: query and update of the index happen without locking,
    so resolve() must be called from a single consumer.
    """

    def __init__(self, index: SimilarityIndex, quarantine: Quarantine, config: EngineConfig):
        """
        Initialize the resolver.

        Args:
            index: Similarity index for the active fingerprint family
            quarantine: Relocation target for resolved pairs
            config: Engine configuration (dry_run is read from here)
        """
        self.index = index
        self.quarantine = quarantine
        self.config = config

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def resolve(self, observed: ObservedImage) -> Resolution:
        """
        Resolve one observed image.

        Args:
            observed: Decoded and fingerprinted image

        Returns:
            Resolution describing what happened. Relocation failures are
            reported with Outcome.FAILED instead of being raised.

        Raises:
            QuarantineUnavailableError: If the quarantine directory cannot be
                created; the run cannot continue
        """
        new_record = observed.to_record()
        match = self.index.query(observed.fingerprint)

        if not match:
            self.index.add(new_record, observed.fingerprint)
            return Resolution(path=observed.path, outcome=Outcome.UNIQUE, keeper=new_record)

        existing = match.record
        logger.info(f"{observed.path} matches: {existing.path}")

        if new_file_wins(new_record.area, existing.area):
            keeper, discarded = new_record, existing
        else:
            keeper, discarded = existing, new_record

        resolution = Resolution(
            path=observed.path,
            outcome=Outcome.DUPLICATE,
            keeper=keeper,
            discarded=discarded,
            distance=match.distance,
        )

        try:
            if self.dry_run:
                resolution.relocation = self.quarantine.plan(keeper.path, discarded.path)
            else:
                resolution.relocation = self.quarantine.relocate(keeper.path, discarded.path)
                resolution.outcome = Outcome.RESOLVED
        except RelocationError as e:
            logger.error(f"Resolution of {observed.path} incomplete: {e}")
            resolution.relocation = e.relocation
            resolution.outcome = Outcome.FAILED
            resolution.error = str(e)
        finally:
            if self.dry_run:
                # Layer the observation so later files compare against it too
                self.index.add(new_record, observed.fingerprint)
            else:
                self._retain_keeper(keeper, existing, new_record, observed.fingerprint)

        return resolution

    def _retain_keeper(
        self,
        keeper: ImageRecord,
        existing: ImageRecord,
        new_record: ImageRecord,
        fingerprint,
    ) -> None:
        """Leave only the keeper indexed for this equivalence class."""
        if keeper is new_record:
            self.index.delete(existing, fingerprint)
            self.index.add(new_record, fingerprint)


__all__ = ['DuplicateResolver', 'new_file_wins']
