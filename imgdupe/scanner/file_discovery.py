"""
File discovery module for the scanner package.

Enumerates candidate image files under the run root in a stable order,
never descending into the quarantine directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import IMAGE_EXTENSIONS
from .dependencies import HAS_HEIF_SUPPORT


def find_image_files(
    root_path: str | Path,
    recursive: bool = False,
    exclude_dir: Optional[str | Path] = None,
) -> list[str]:
    """
    Find all image files in the given directory.

    Args:
        root_path: Directory path to search for images
        recursive: If True, search subdirectories recursively
        exclude_dir: Directory to skip entirely (the quarantine directory)

    Returns:
        Sorted list of absolute file paths as strings

    Notes:
        - Filters out HEIC/HEIF files if pillow-heif is not installed
        - Symlinks are skipped so relocation only ever renames real files
    """
    root = Path(root_path)

    extensions_to_scan = IMAGE_EXTENSIONS
    if not HAS_HEIF_SUPPORT:
        extensions_to_scan = {ext for ext in IMAGE_EXTENSIONS if ext not in {'.heic', '.heif'}}

    excluded = Path(exclude_dir).resolve() if exclude_dir is not None else None

    images = []
    seen = set()

    iterator = root.rglob('*') if recursive else root.glob('*')

    for filepath in iterator:
        if filepath.is_symlink() or not filepath.is_file():
            continue
        if filepath.suffix.lower() not in extensions_to_scan:
            continue

        resolved = filepath.resolve()
        if excluded is not None and excluded in resolved.parents:
            continue

        key = str(resolved)
        if key not in seen:
            seen.add(key)
            images.append(key)

    return sorted(images)


__all__ = ['find_image_files']
