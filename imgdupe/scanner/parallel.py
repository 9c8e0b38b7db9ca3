"""
Parallel decoding module for the scanner package.

Decoding and hashing run on a thread pool while results are handed back in
enumeration order to a single consumer, which owns the similarity index.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, Optional, Any, Union

from ..config import DEFAULT_WORKERS
from ..errors import ImageDecodeError
from ..fingerprint import FingerprintFamily
from ..models import ObservedImage
from .analysis import decode_image
from .dependencies import HAS_TQDM, _tqdm_class

Observation = Union[ObservedImage, ImageDecodeError]


def _observe(filepath: str, family: FingerprintFamily) -> Observation:
    """Decode one file, returning the error instead of raising it."""
    try:
        return decode_image(filepath, family)
    except ImageDecodeError as e:
        return e


def iter_observations(
    filepaths: list[str],
    family: FingerprintFamily,
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
) -> Iterator[Observation]:
    """
    Decode and fingerprint images in parallel, yielding them in input order.

    Args:
        filepaths: Image paths in enumeration order
        family: Active fingerprint family
        max_workers: Number of decode/hash threads
        progress_callback: Optional callback(current, total) per yielded item
        show_progress: Whether to show a tqdm progress bar

    Yields:
        ObservedImage for decoded files, ImageDecodeError for skipped ones
    """
    total = len(filepaths)
    if not total:
        return

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(total=total, desc="Processed images", unit="img", ncols=80)

    executor = ThreadPoolExecutor(max_workers=max(1, max_workers))
    try:
        results = executor.map(lambda path: _observe(path, family), filepaths)
        for i, observation in enumerate(results, 1):
            yield observation
            if pbar is not None:
                pbar.update(1)
            if progress_callback:
                progress_callback(i, total)
    finally:
        # Pending decodes are dropped if the consumer stops early
        executor.shutdown(wait=True, cancel_futures=True)
        if pbar is not None:
            pbar.close()


__all__ = ['iter_observations', 'Observation']
