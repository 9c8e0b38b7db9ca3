"""
Utilities package for imgdupe.

Provides:
- formatters: Human-readable formatting for counts and pixel areas
- validators: Input validation for CLI arguments
- exporters: Export run results to files
"""

from __future__ import annotations

from . import formatters
from . import validators
from . import exporters

from .formatters import format_number, format_area
from .validators import (
    validate_directory,
    validate_algorithm,
    validate_workers,
    validate_quarantine_name,
)
from .exporters import export_results

__all__ = [
    'formatters',
    'validators',
    'exporters',
    'format_number',
    'format_area',
    'validate_directory',
    'validate_algorithm',
    'validate_workers',
    'validate_quarantine_name',
    'export_results',
]
