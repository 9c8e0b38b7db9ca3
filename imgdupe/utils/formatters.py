"""
Formatting utilities for imgdupe.

Provides human-readable formatting for counts in reports.
"""

from __future__ import annotations


def format_number(n: int) -> str:
    """
    Format large numbers with commas for readability.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
    """
    return f"{n:,}"


def format_area(area: int) -> str:
    """
    Format a pixel area, switching to megapixels above one million.

    Examples:
        >>> format_area(307200)
        '307,200 px'
        >>> format_area(12000000)
        '12.0 MP'
    """
    if area >= 1_000_000:
        return f"{area / 1_000_000:.1f} MP"
    return f"{format_number(area)} px"


__all__ = ['format_number', 'format_area']
