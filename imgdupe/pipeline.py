"""
Run pipeline for imgdupe.

Ties file discovery, parallel decoding and the resolution engine together
for one pass over a directory, and exposes undo of a previous pass.

Decoding fans out across worker threads; resolution fans back in to the
calling thread, which is the only one touching the similarity index.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .engine import Quarantine, create_resolver
from .errors import ImageDecodeError, QuarantineUnavailableError
from .fingerprint import get_family
from .models import EngineConfig, Outcome, RunReport, UndoReport
from .scanner import find_image_files, iter_observations

_logger = logging.getLogger(__name__)


def run_resolution(
    config: EngineConfig,
    files: Optional[list[str]] = None,
    show_progress: bool = False,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> RunReport:
    """
    Find and resolve duplicates under config.root.

    Args:
        config: Engine configuration for this run
        files: Candidate files in processing order (discovered if omitted)
        show_progress: Whether to show a tqdm progress bar
        progress_callback: Optional callback(current, total)

    Returns:
        RunReport. Per-file decode and relocation failures are recorded in
        it; a quarantine directory failure stops the run and sets
        report.aborted.
    """
    family = get_family(config.algorithm)
    resolver = create_resolver(config, family)

    if files is None:
        files = find_image_files(
            config.root,
            recursive=config.recursive,
            exclude_dir=config.quarantine_dir,
        )

    report = RunReport(files_found=len(files))
    _logger.info(f"Found {len(files):,} candidate files")

    observations = iter_observations(
        files,
        family,
        max_workers=config.workers,
        progress_callback=progress_callback,
        show_progress=show_progress,
    )

    try:
        for observation in observations:
            if isinstance(observation, ImageDecodeError):
                _logger.warning(f"Skipping {observation.path}: {observation.reason}")
                report.decode_errors.append((observation.path, observation.reason))
                continue

            try:
                resolution = resolver.resolve(observation)
            except QuarantineUnavailableError as e:
                _logger.error(str(e))
                report.aborted = str(e)
                break

            if resolution.outcome is Outcome.UNIQUE:
                report.unique += 1
            else:
                report.resolutions.append(resolution)
    finally:
        observations.close()

    _logger.info(
        f"Processed {report.files_found:,} files: {report.duplicates_found:,} duplicates, "
        f"{len(report.failed):,} failed, {len(report.decode_errors):,} skipped"
    )
    return report


def run_undo(config: EngineConfig) -> UndoReport:
    """
    Restore everything quarantined under config.root.

    Raises:
        QuarantineUnavailableError: If there is no readable quarantine directory
    """
    quarantine = Quarantine(
        config.root,
        dir_name=config.quarantine_dir_name,
        dry_run=config.dry_run,
    )
    report = quarantine.undo()
    _logger.info(
        f"Undo: {len(report.restored):,} restored, {len(report.removed):,} kept copies removed, "
        f"{len(report.errors):,} errors"
    )
    return report


__all__ = ['run_resolution', 'run_undo']
