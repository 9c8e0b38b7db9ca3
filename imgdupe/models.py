"""
Data models for imgdupe.

Contains dataclasses for indexed image records, query results, resolution
outcomes and run reports, plus the engine configuration value.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from .config import (
    DEFAULT_ALGORITHM,
    DEFAULT_SENSITIVITY,
    DEFAULT_WORKERS,
    QUARANTINE_DIR_NAME,
    SENSITIVITY_OFFSET,
)


@dataclass
class ImageRecord:
    """
    A surviving (non-quarantined) file held by the similarity index.

    Attributes:
        path: Path to the image file (its identity)
        area: Pixel area (width * height), the quality proxy
    """
    path: str
    area: int = 0


@dataclass
class ObservedImage:
    """
    A decoded and fingerprinted image on its way into the resolver.

    Attributes:
        path: Path to the image file
        width: Image width in pixels
        height: Image height in pixels
        fingerprint: Fingerprint from the active family
    """
    path: str
    width: int
    height: int
    fingerprint: Any

    @property
    def area(self) -> int:
        """Return pixel area (width * height)."""
        return self.width * self.height

    def to_record(self) -> ImageRecord:
        return ImageRecord(path=self.path, area=self.area)


@dataclass
class MatchResult:
    """
    Result of a similarity index query.

    A result without a record means "no match". When a record is present the
    family's acceptance rule has already been applied.
    """
    record: Optional[ImageRecord] = None
    distance: Optional[int] = None

    @property
    def matched(self) -> bool:
        return self.record is not None

    def __bool__(self) -> bool:
        return self.matched

    @classmethod
    def no_match(cls) -> 'MatchResult':
        return cls()


class Outcome(str, Enum):
    """How a single observed file was handled."""
    UNIQUE = "unique"        # No acceptable match, indexed as new
    DUPLICATE = "duplicate"  # Match reported, nothing touched (dry run)
    RESOLVED = "resolved"    # Match relocated into quarantine
    FAILED = "failed"        # Match found but relocation failed part way


@dataclass
class Relocation:
    """
    Filesystem actions for one resolved pair.

    Attributes:
        pair_tag: Short digest shared by both quarantined names
        keeper: Path of the kept file (stays in place)
        discarded: Original path of the discarded file
        kept_copy: Quarantine path of the keeper's copy
        discarded_dest: Quarantine path the discarded file moved to
        dry_run: True if nothing was touched
    """
    pair_tag: str
    keeper: str
    discarded: str
    kept_copy: str
    discarded_dest: str
    dry_run: bool = False


@dataclass
class Resolution:
    """
    The decision taken for one observed file.

    Attributes:
        path: Path of the observed file
        outcome: One of the Outcome values
        keeper: Surviving record (None for unique files)
        discarded: Losing record (None for unique files)
        distance: Score reported by the index for the match
        relocation: Filesystem actions (None when unique)
        error: Error message if relocation failed
    """
    path: str
    outcome: Outcome
    keeper: Optional[ImageRecord] = None
    discarded: Optional[ImageRecord] = None
    distance: Optional[int] = None
    relocation: Optional[Relocation] = None
    error: Optional[str] = None


@dataclass
class UndoReport:
    """Result of restoring a quarantine directory."""
    removed: list = field(default_factory=list)
    restored: list = field(default_factory=list)  # (quarantined, original) pairs
    skipped: list = field(default_factory=list)
    errors: list = field(default_factory=list)
    directory_removed: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class RunReport:
    """
    Summary of one resolve run.

    Attributes:
        files_found: Number of candidate files enumerated
        unique: Number of files indexed without a match
        resolutions: Resolution objects for every matched file
        decode_errors: (path, reason) tuples for skipped files
        aborted: Reason the run stopped early, if it did
    """
    files_found: int = 0
    unique: int = 0
    resolutions: list = field(default_factory=list)
    decode_errors: list = field(default_factory=list)
    aborted: Optional[str] = None

    @property
    def resolved(self) -> list:
        return [r for r in self.resolutions if r.outcome is Outcome.RESOLVED]

    @property
    def failed(self) -> list:
        return [r for r in self.resolutions if r.outcome is Outcome.FAILED]

    @property
    def duplicates_found(self) -> int:
        return len(self.resolutions)


@dataclass
class EngineConfig:
    """
    Run configuration threaded explicitly into the engine.

    Attributes:
        root: Directory being deduplicated (also the undo restore target)
        algorithm: Fingerprint family name
        sensitivity: Operator-facing sensitivity (distance families only)
        dry_run: Report matches without touching the filesystem
        recursive: Descend into subdirectories
        workers: Number of parallel decode/hash workers
        quarantine_dir_name: Name of the quarantine directory under root
    """
    root: Path = field(default_factory=lambda: Path('.'))
    algorithm: str = DEFAULT_ALGORITHM
    sensitivity: int = DEFAULT_SENSITIVITY
    dry_run: bool = False
    recursive: bool = False
    workers: int = DEFAULT_WORKERS
    quarantine_dir_name: str = QUARANTINE_DIR_NAME

    def __post_init__(self):
        self.root = Path(self.root)

    @property
    def threshold(self) -> int:
        """Sensitivity shifted onto the distance-family score scale."""
        return self.sensitivity - SENSITIVITY_OFFSET

    @property
    def quarantine_dir(self) -> Path:
        return self.root / self.quarantine_dir_name
