"""
Input validation for imgdupe.

Validators return (is_valid, error_message) tuples so callers can report
problems without raising.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..fingerprint import get_family


def validate_directory(directory: str | Path) -> tuple[bool, str]:
    """
    Validate that a directory exists and is accessible.

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, 'Directory not found: /nonexistent/directory')
    """
    if not str(directory):
        return False, "Directory path is required"

    if not os.path.exists(directory):
        return False, f"Directory not found: {directory}"

    if not os.path.isdir(directory):
        return False, f"Path is not a directory: {directory}"

    if not os.access(directory, os.R_OK):
        return False, f"Cannot read directory (permission denied): {directory}"

    return True, ""


def validate_algorithm(name: str) -> tuple[bool, str]:
    """Validate that a fingerprint family name is known."""
    try:
        get_family(name)
    except ValueError as e:
        return False, str(e)
    return True, ""


def validate_workers(workers) -> tuple[bool, str]:
    """
    Validate the number of worker threads.

    Examples:
        >>> validate_workers(4)
        (True, '')
        >>> validate_workers(0)
        (False, 'Workers must be between 1 and 32')
    """
    try:
        workers = int(workers)
    except (ValueError, TypeError):
        return False, "Workers must be an integer"
    if not 1 <= workers <= 32:
        return False, "Workers must be between 1 and 32"
    return True, ""


def validate_quarantine_name(name: str) -> tuple[bool, str]:
    """The quarantine directory must be a single path component."""
    if not name or name in ('.', '..'):
        return False, "Quarantine directory name is required"
    if os.sep in name or (os.altsep and os.altsep in name):
        return False, "Quarantine directory must be a plain name, not a path"
    return True, ""


__all__ = [
    'validate_directory',
    'validate_algorithm',
    'validate_workers',
    'validate_quarantine_name',
]
