"""
Report formatting and display for the CLI interface.

Prints the outcome of a resolve or undo run in a human-readable format.
"""

from __future__ import annotations

from ..models import Outcome, Resolution, RunReport, UndoReport
from ..utils.formatters import format_area, format_number

_MARKERS = {
    Outcome.DUPLICATE: "[MATCH]",
    Outcome.RESOLVED: "[MOVED]",
    Outcome.FAILED: "[ERROR]",
}


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def _print_resolution(number: int, resolution: Resolution) -> None:
    """
    Print one resolved pair.

    Args:
        number: Pair number (1-indexed)
        resolution: The resolution to print
    """
    marker = _MARKERS.get(resolution.outcome, "")
    print(f"\n{marker} Pair {number}")
    print(f"  [KEEP] {resolution.keeper.path}  ({format_area(resolution.keeper.area)})")
    print(f"  [GONE] {resolution.discarded.path}  ({format_area(resolution.discarded.area)})")
    if resolution.relocation is not None and resolution.outcome is not Outcome.FAILED:
        print(f"         -> {resolution.relocation.discarded_dest}")
    if resolution.error:
        print(f"         {resolution.error}")


def print_run_report(report: RunReport, dry_run: bool = False) -> None:
    """
    Print a report of a resolve run.

    Args:
        report: Completed run report
        dry_run: Whether the run was a dry run (changes wording only)

    Notes:
        - Failed relocations are listed separately from resolved ones
        - Skipped (undecodable) files are listed at the end
    """
    print("\n" + "=" * 70)
    print("DUPLICATE RESOLUTION REPORT" + (" (DRY RUN)" if dry_run else ""))
    print("=" * 70)

    print(f"\nFiles examined: {format_number(report.files_found)}")
    print(f"Unique images: {format_number(report.unique)}")
    print(f"Duplicates found: {format_number(report.duplicates_found)}")
    if not dry_run:
        print(f"Resolved: {format_number(len(report.resolved))}")
        print(f"Failed: {format_number(len(report.failed))}")
    print(f"Skipped: {format_number(len(report.decode_errors))}")

    if report.resolutions:
        _print_section_header("MATCHES")
        for i, resolution in enumerate(report.resolutions, 1):
            _print_resolution(i, resolution)

    if report.decode_errors:
        _print_section_header("SKIPPED FILES")
        for path, reason in report.decode_errors:
            print(f"  {path}: {reason}")

    if report.aborted:
        print("\n" + "=" * 70)
        print(f"RUN ABORTED: {report.aborted}")

    print("\n" + "=" * 70)


def print_undo_report(report: UndoReport, dry_run: bool = False) -> None:
    """Print a report of an undo run."""
    print("\n" + "=" * 70)
    print("UNDO REPORT" + (" (DRY RUN)" if dry_run else ""))
    print("=" * 70)

    print(f"\nRestored: {format_number(len(report.restored))}")
    print(f"Kept copies removed: {format_number(len(report.removed))}")
    print(f"Left untouched: {format_number(len(report.skipped))}")
    print(f"Errors: {format_number(len(report.errors))}")

    if report.errors:
        _print_section_header("ERRORS")
        for error in report.errors:
            print(f"  {error}")

    if not dry_run and not report.directory_removed:
        print("\nQuarantine directory was not removed (not empty or not writable)")

    print("\n" + "=" * 70)


__all__ = ['print_run_report', 'print_undo_report']
