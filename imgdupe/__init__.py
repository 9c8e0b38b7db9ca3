"""
imgdupe
=======
Near-duplicate image resolution with a reversible quarantine.

Features:
- Exact-bucket (average/difference hash) and distance-scored
  (perceptual/wavelet hash) fingerprint families
- Keeps the larger image of every duplicate pair
- Moves the other copy into a quarantine folder whose file names are the
  undo log
- Dry-run preview and one-command undo
- Parallel decoding with serialized resolution
"""

__version__ = "1.0.0"
__author__ = "imgdupe contributors"

from .models import (
    EngineConfig,
    ImageRecord,
    MatchResult,
    ObservedImage,
    Outcome,
    Relocation,
    Resolution,
    RunReport,
    UndoReport,
)
from .config import IMAGE_EXTENSIONS, QUARANTINE_DIR_NAME, KEEP_MARKER, DISCARD_MARKER
from .errors import (
    ImgDupeError,
    ImageDecodeError,
    RelocationError,
    QuarantineUnavailableError,
    UndoError,
)
from .fingerprint import FingerprintFamily, get_family, compute_fingerprint
from .index import SimilarityIndex, ExactBucketIndex, DistanceIndex, create_index
from .engine import DuplicateResolver, Quarantine, create_resolver
from .pipeline import run_resolution, run_undo

__all__ = [
    "EngineConfig",
    "ImageRecord",
    "MatchResult",
    "ObservedImage",
    "Outcome",
    "Relocation",
    "Resolution",
    "RunReport",
    "UndoReport",
    "IMAGE_EXTENSIONS",
    "QUARANTINE_DIR_NAME",
    "KEEP_MARKER",
    "DISCARD_MARKER",
    "ImgDupeError",
    "ImageDecodeError",
    "RelocationError",
    "QuarantineUnavailableError",
    "UndoError",
    "FingerprintFamily",
    "get_family",
    "compute_fingerprint",
    "SimilarityIndex",
    "ExactBucketIndex",
    "DistanceIndex",
    "create_index",
    "DuplicateResolver",
    "Quarantine",
    "create_resolver",
    "run_resolution",
    "run_undo",
]
