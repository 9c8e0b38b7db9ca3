"""
CLI workflow orchestration for imgdupe.

Provides the CLIOrchestrator class that coordinates a CLI run from argument
parsing through resolution (or undo) and final reporting.
"""

from __future__ import annotations

import logging

from ..errors import QuarantineUnavailableError
from ..models import EngineConfig
from ..pipeline import run_resolution, run_undo
from ..scanner import find_image_files
from ..scanner.dependencies import Image
from ..user_config import get_user_config
from ..utils.exporters import export_results
from ..utils.validators import (
    validate_algorithm,
    validate_directory,
    validate_quarantine_name,
    validate_workers,
)
from .arg_parser import parse_arguments
from .reporting import print_run_report, print_undo_report

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Manages the complete lifecycle from argument parsing through duplicate
    resolution or undo, reporting and exit code.
    """

    def __init__(self, argv=None):
        """
        Initialize the orchestrator.

        Args:
            argv: Argument list (default: sys.argv)
        """
        self.argv = argv
        self.logger = logging.getLogger(__name__)
        self.args = None
        self.config = None
        self.image_files = []
        self.report = None

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error, 2 if some pairs could not
            be relocated or restored)

        Workflow phases:
        1. Setup & argument parsing
        2. Validation
        3. Configuration
        4. Undo (when requested, then stop)
        5. File scanning
        6. Resolution
        7. Reporting & export
        """
        self._setup_phase()

        exit_code = self._validate_phase()
        if exit_code != EXIT_OK:
            return exit_code

        self._configure_phase()

        if self.args.undo:
            return self._undo_phase()

        exit_code = self._scan_phase()
        if exit_code != EXIT_OK:
            return exit_code

        self._resolve_phase()
        self._report_phase()

        if self.report.aborted:
            return EXIT_ERROR
        if self.report.failed:
            return EXIT_PARTIAL
        return EXIT_OK

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _validate_phase(self) -> int:
        """
        Phase 2: Validate arguments.

        Returns:
            0 for success, 1 for validation error
        """
        checks = [
            validate_directory(self.args.directory),
            validate_algorithm(self.args.algo),
            validate_workers(self.args.workers),
            validate_quarantine_name(self.args.quarantine_dir),
        ]
        for is_valid, error in checks:
            if not is_valid:
                self.logger.error(error)
                return EXIT_ERROR
        return EXIT_OK

    def _configure_phase(self) -> None:
        """Phase 3: Build the engine configuration."""
        Image.MAX_IMAGE_PIXELS = get_user_config().max_image_pixels

        self.config = EngineConfig(
            root=self.args.directory,
            algorithm=self.args.algo,
            sensitivity=self.args.sensitivity,
            dry_run=self.args.dry_run,
            recursive=self.args.recursive,
            workers=self.args.workers,
            quarantine_dir_name=self.args.quarantine_dir,
        )
        self.show_progress = not self.args.no_progress

        if self.config.dry_run:
            self.logger.info("[DRY RUN MODE - No files will be modified]")

    def _undo_phase(self) -> int:
        """
        Phase 4: Restore a previous run.

        Returns:
            0 if everything was restored, 2 if some entries failed,
            1 if there is no quarantine directory to restore from
        """
        self.logger.info(f"Restoring files from {self.config.quarantine_dir}")
        try:
            undo_report = run_undo(self.config)
        except QuarantineUnavailableError as e:
            self.logger.error(str(e))
            return EXIT_ERROR

        print_undo_report(undo_report, dry_run=self.config.dry_run)
        return EXIT_OK if undo_report.ok else EXIT_PARTIAL

    def _scan_phase(self) -> int:
        """
        Phase 5: Scan for image files.

        Returns:
            0 for success, non-zero if no images found
        """
        self.logger.info(f"Scanning {self.config.root} for images...")
        self.image_files = find_image_files(
            self.config.root,
            recursive=self.config.recursive,
            exclude_dir=self.config.quarantine_dir,
        )

        if not self.image_files:
            self.logger.info("No images found. Exiting.")
            return EXIT_ERROR

        return EXIT_OK

    def _resolve_phase(self) -> None:
        """Phase 6: Decode, fingerprint and resolve every image."""
        self.logger.info(
            f"Resolving duplicates with '{self.config.algorithm}' "
            f"(sensitivity={self.config.sensitivity})..."
        )
        self.report = run_resolution(
            self.config,
            files=self.image_files,
            show_progress=self.show_progress,
        )

    def _report_phase(self) -> None:
        """Phase 7: Display report and handle exports."""
        print_run_report(self.report, dry_run=self.config.dry_run)

        if self.args.export:
            try:
                export_results(self.report, self.args.export, self.args.export_format)
                self.logger.info(f"Results exported to: {self.args.export}")
            except OSError as e:
                self.logger.error(f"Could not export results: {e}")


__all__ = ['CLIOrchestrator', 'setup_logging']
