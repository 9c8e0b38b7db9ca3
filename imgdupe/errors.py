"""
Exception hierarchy for imgdupe.

Decode and relocation errors are per-file and never end a run.
QuarantineUnavailableError is the one fatal condition.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ImgDupeError(Exception):
    """Base class for all imgdupe errors."""


class ImageDecodeError(ImgDupeError):
    """A file could not be decoded or fingerprinted as an image."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class RelocationError(ImgDupeError):
    """
    A filesystem operation failed while quarantining a duplicate pair.

    Attributes:
        stage: 'copy' (keeper copy failed) or 'move' (discarded move failed)
        keeper: Path of the file that was being kept
        discarded: Path of the file that was being discarded
        keeper_copied: True if the keeper copy already exists in quarantine
        cause: Underlying OSError, if any
        relocation: Planned quarantine destinations, if they were computed
    """

    def __init__(
        self,
        stage: str,
        keeper: str | Path,
        discarded: str | Path,
        keeper_copied: bool = False,
        cause: Optional[BaseException] = None,
        relocation=None,
    ):
        self.stage = stage
        self.keeper = str(keeper)
        self.discarded = str(discarded)
        self.keeper_copied = keeper_copied
        self.cause = cause
        self.relocation = relocation
        if stage == 'copy':
            message = f"error copying kept file {self.keeper}"
        else:
            message = f"error moving discarded file {self.discarded}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class QuarantineUnavailableError(ImgDupeError):
    """The quarantine directory cannot be created or read."""


class UndoError(ImgDupeError):
    """A single quarantined entry could not be restored or removed."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")
