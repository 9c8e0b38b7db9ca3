"""
Export functionality for imgdupe.

Writes the matches of a run to TXT or CSV so an operator can review them
after the fact.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import TextIO

from ..models import RunReport


def _export_txt(report: RunReport, file_handle: TextIO) -> None:
    """
    Export run results to TXT format.

    Args:
        report: Completed run report
        file_handle: Open file handle to write to
    """
    file_handle.write("DUPLICATE RESOLUTION REPORT\n")
    file_handle.write("=" * 70 + "\n\n")

    for i, resolution in enumerate(report.resolutions, 1):
        file_handle.write(f"Pair {i} ({resolution.outcome.value}):\n")
        file_handle.write(f"  [KEEP] {resolution.keeper.path}\n")
        file_handle.write(f"  [GONE] {resolution.discarded.path}\n")
        if resolution.error:
            file_handle.write(f"  [FAIL] {resolution.error}\n")
        file_handle.write("\n")

    if report.decode_errors:
        file_handle.write("SKIPPED FILES\n")
        file_handle.write("-" * 70 + "\n")
        for path, reason in report.decode_errors:
            file_handle.write(f"  {path}: {reason}\n")


def _export_csv(report: RunReport, file_handle: TextIO) -> None:
    """
    Export run results to CSV format.

    Notes:
        CSV includes: pair_id, outcome, status, path, area, pair_tag, error
    """
    writer = csv.writer(file_handle)
    writer.writerow(['pair_id', 'outcome', 'status', 'path', 'area', 'pair_tag', 'error'])

    for i, resolution in enumerate(report.resolutions, 1):
        tag = resolution.relocation.pair_tag if resolution.relocation else ''
        for status, record in (('keep', resolution.keeper), ('discard', resolution.discarded)):
            writer.writerow([
                i,
                resolution.outcome.value,
                status,
                record.path,
                record.area,
                tag,
                resolution.error or '',
            ])


def export_results(
    report: RunReport,
    output_path: Path,
    export_format: str = 'txt'
) -> None:
    """
    Export run results to a file.

    Args:
        report: Completed run report
        output_path: Path to output file
        export_format: Export format ('txt' or 'csv'). Default: 'txt'

    Raises:
        ValueError: If export_format is not 'txt' or 'csv'
        OSError: If file cannot be written
    """
    if export_format not in ('txt', 'csv'):
        raise ValueError(f"Unsupported export format: {export_format}. Use 'txt' or 'csv'.")

    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        if export_format == 'txt':
            _export_txt(report, f)
        else:
            _export_csv(report, f)


__all__ = ['export_results']
