"""
Reversible relocation of duplicate pairs into a quarantine directory.

For every resolved pair the kept file is copied (hard link when possible)
and the discarded file is moved into ``<root>/duplicates``. File names carry
everything needed to undo the operation:

    <pair tag>_<marker>_<original name>
    3f2a1__KEPT__beach.jpg
    3f2a1__GONE__beach_small.jpg

The directory itself is the undo log; nothing else is written.
"""

from __future__ import annotations

import errno
import hashlib
import logging
import os
import re
import shutil
import stat
from pathlib import Path
from typing import Optional

from ..config import (
    DISCARD_MARKER,
    KEEP_MARKER,
    PAIR_TAG_ATTEMPTS,
    PAIR_TAG_LENGTH,
    QUARANTINE_DIR_NAME,
)
from ..errors import QuarantineUnavailableError, RelocationError, UndoError
from ..models import Relocation, UndoReport

logger = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(
    rf"^(?P<tag>[0-9a-f]{{{PAIR_TAG_LENGTH}}})_"
    rf"(?P<marker>{re.escape(KEEP_MARKER)}|{re.escape(DISCARD_MARKER)})_"
    rf"(?P<name>.+)$"
)


def pair_tag(first: str | Path, second: str | Path, attempt: int = 0) -> str:
    """
    Short digest identifying a pair of files.

    Base names are sorted before hashing so the tag does not depend on the
    order the pair is given in. Pairs from different directories can share
    base names; a non-zero attempt salts the digest to get another tag.

    Examples:
        >>> pair_tag('/photos/a.jpg', '/photos/b.jpg') == pair_tag('b.jpg', 'a.jpg')
        True
    """
    names = sorted([os.path.basename(str(first)), os.path.basename(str(second))])
    key = ''.join(names)
    if attempt:
        key = f"{key}#{attempt}"
    digest = hashlib.md5(key.encode('utf-8')).hexdigest()
    return digest[:PAIR_TAG_LENGTH]


def quarantine_name(tag: str, marker: str, original: str | Path) -> str:
    """Build the quarantined file name for a file of a pair."""
    return f"{tag}_{marker}_{os.path.basename(str(original))}"


def parse_quarantine_name(name: str) -> Optional[tuple[str, str, str]]:
    """
    Split a quarantined file name into (tag, marker, original name).

    Returns:
        The three parts, or None if the name was not produced by quarantine_name
    """
    match = _NAME_PATTERN.match(name)
    if not match:
        return None
    return match.group('tag'), match.group('marker'), match.group('name')


def _copy_contents(src: Path, dst: Path) -> None:
    """Copy file contents into a new file and flush them to disk."""
    with open(src, 'rb') as fin, open(dst, 'xb') as fout:
        shutil.copyfileobj(fin, fout)
        fout.flush()
        os.fsync(fout.fileno())


def safe_copy(src: str | Path, dst: str | Path) -> None:
    """
    Copy a regular file, preferring a hard link.

    If dst already is the same file as src nothing happens. An existing dst
    that is a different file is never replaced. Otherwise a hard link is
    attempted; when linking is not possible (different filesystem,
    unsupported platform) the contents are copied into a new file and synced.

    Raises:
        FileExistsError: If dst exists and is not src
        OSError: If src is missing or either side is not a regular file
    """
    src = Path(src)
    dst = Path(dst)

    src_stat = os.stat(src)
    if not stat.S_ISREG(src_stat.st_mode):
        raise OSError(f"non-regular source file {src}")

    try:
        dst_stat = os.stat(dst)
    except FileNotFoundError:
        dst_stat = None

    if dst_stat is not None:
        if not stat.S_ISREG(dst_stat.st_mode):
            raise OSError(f"non-regular destination file {dst}")
        if os.path.samestat(src_stat, dst_stat):
            return
        raise FileExistsError(errno.EEXIST, "destination already exists", str(dst))

    try:
        os.link(src, dst)
        return
    except FileExistsError:
        raise
    except OSError as e:
        logger.debug(f"Hard link {src} -> {dst} not possible ({e}), copying contents")

    _copy_contents(src, dst)


class Quarantine:
    """
    Physical file operations for duplicate resolution and their undo.

    The quarantine directory is created lazily on the first real relocation.
    In dry-run mode names are computed and logged but the filesystem is not
    touched.
    """

    def __init__(
        self,
        root: str | Path,
        dir_name: str = QUARANTINE_DIR_NAME,
        dry_run: bool = False,
    ):
        """
        Initialize the quarantine.

        Args:
            root: Run root; the quarantine lives directly beneath it and
                  undo restores files into it
            dir_name: Name of the quarantine directory
            dry_run: Only log what would happen
        """
        self.root = Path(root)
        self.directory = self.root / dir_name
        self.dry_run = dry_run
        self._ready = False

    def ensure_directory(self) -> Path:
        """
        Create the quarantine directory if it does not exist yet.

        Returns:
            The quarantine directory path

        Raises:
            QuarantineUnavailableError: If the directory cannot be created
        """
        if self._ready:
            return self.directory

        try:
            self.directory.mkdir(parents=False, exist_ok=True)
        except OSError as e:
            raise QuarantineUnavailableError(
                f"Could not create quarantine directory {self.directory}: {e}"
            ) from e

        if not self.directory.is_dir():
            raise QuarantineUnavailableError(
                f"Quarantine path exists but is not a directory: {self.directory}"
            )

        logger.debug(f"Quarantine directory ready: {self.directory}")
        self._ready = True
        return self.directory

    def _destinations(self, keeper: str | Path, discarded: str | Path, tag: str) -> Relocation:
        return Relocation(
            pair_tag=tag,
            keeper=str(keeper),
            discarded=str(discarded),
            kept_copy=str(self.directory / quarantine_name(tag, KEEP_MARKER, keeper)),
            discarded_dest=str(self.directory / quarantine_name(tag, DISCARD_MARKER, discarded)),
            dry_run=self.dry_run,
        )

    def plan(self, keeper: str | Path, discarded: str | Path) -> Relocation:
        """
        Compute quarantine destinations for a pair without touching anything.

        The first pair tag whose two names are both unused in the quarantine
        directory is chosen, so a pair never lands on the names of an earlier
        pair with the same base names.

        Raises:
            RelocationError: If no free pair tag is found
        """
        for attempt in range(PAIR_TAG_ATTEMPTS):
            relocation = self._destinations(keeper, discarded, pair_tag(keeper, discarded, attempt))
            if not (os.path.lexists(relocation.kept_copy) or os.path.lexists(relocation.discarded_dest)):
                if attempt:
                    logger.debug(f"Pair tag collision for {discarded}, using tag {relocation.pair_tag}")
                return relocation

        raise RelocationError(
            'copy', keeper, discarded,
            cause=FileExistsError(
                errno.EEXIST,
                f"no free quarantine name after {PAIR_TAG_ATTEMPTS} pair tags",
                str(self.directory),
            ),
        )

    def relocate(self, keeper: str | Path, discarded: str | Path) -> Relocation:
        """
        Quarantine a resolved pair.

        The keeper is copied first, then the discarded file is renamed into
        quarantine. A failure after the copy therefore never loses the keeper,
        at worst it leaves an extra copy of it in quarantine. Neither step
        replaces a file already in quarantine.

        Args:
            keeper: File that stays in place
            discarded: File that leaves its original location

        Returns:
            Relocation describing the performed (or planned) actions

        Raises:
            QuarantineUnavailableError: If the directory cannot be created
            RelocationError: If the copy or the move fails, or a destination
                name is already taken
        """
        relocation = self.plan(keeper, discarded)

        if self.dry_run:
            logger.info(f"[DRY RUN] Would keep {keeper} and quarantine {discarded}")
            return relocation

        self.ensure_directory()

        try:
            safe_copy(keeper, relocation.kept_copy)
        except OSError as e:
            raise RelocationError(
                'copy', keeper, discarded, keeper_copied=False, cause=e, relocation=relocation
            ) from e

        try:
            # os.rename replaces an existing target on POSIX
            if os.path.lexists(relocation.discarded_dest):
                raise FileExistsError(
                    errno.EEXIST, "destination already exists", relocation.discarded_dest
                )
            os.rename(discarded, relocation.discarded_dest)
        except OSError as e:
            raise RelocationError(
                'move', keeper, discarded, keeper_copied=True, cause=e, relocation=relocation
            ) from e

        logger.info(f"Kept {keeper}, quarantined {discarded} as {relocation.discarded_dest}")
        return relocation

    def undo(self) -> UndoReport:
        """
        Reverse every relocation recorded in the quarantine directory.

        Kept copies are deleted (their originals never moved) and discarded
        files are renamed back into the root directory. Restores are flat:
        files that came from subdirectories land in the root. Failures are
        collected and the remaining entries are still processed.

        Returns:
            UndoReport with removed, restored, skipped and failed entries

        Raises:
            QuarantineUnavailableError: If the quarantine directory cannot be read
        """
        report = UndoReport()

        try:
            entries = sorted(self.directory.iterdir())
        except OSError as e:
            raise QuarantineUnavailableError(
                f"Cannot read quarantine directory {self.directory}: {e}"
            ) from e

        for entry in entries:
            parsed = parse_quarantine_name(entry.name)
            if parsed is None:
                logger.warning(f"Leaving unrecognised file in quarantine: {entry.name}")
                report.skipped.append(str(entry))
                continue

            _, marker, original_name = parsed
            try:
                if marker == KEEP_MARKER:
                    self._remove_kept_copy(entry)
                    report.removed.append(str(entry))
                else:
                    target = self._restore_discarded(entry, original_name)
                    report.restored.append((str(entry), str(target)))
            except UndoError as e:
                logger.error(f"Undo failed for {e}")
                report.errors.append(e)

        if self.dry_run:
            logger.info(f"[DRY RUN] Would remove directory {self.directory}")
            return report

        try:
            self.directory.rmdir()
            report.directory_removed = True
        except OSError as e:
            logger.warning(f"Could not remove quarantine directory {self.directory}: {e}")

        return report

    def _remove_kept_copy(self, entry: Path) -> None:
        if self.dry_run:
            logger.info(f"[DRY RUN] Would remove {entry.name}")
            return
        try:
            entry.unlink()
        except OSError as e:
            raise UndoError(entry.name, f"could not remove: {e}") from e
        logger.debug(f"Removed kept copy {entry.name}")

    def _restore_discarded(self, entry: Path, original_name: str) -> Path:
        target = self.root / original_name
        if target.exists():
            raise UndoError(entry.name, f"original location occupied: {target}")
        if self.dry_run:
            logger.info(f"[DRY RUN] Would move {entry} to {target}")
            return target
        try:
            os.rename(entry, target)
        except OSError as e:
            raise UndoError(entry.name, f"could not restore to {target}: {e}") from e
        logger.debug(f"Restored {entry.name} -> {target}")
        return target


__all__ = [
    'Quarantine',
    'pair_tag',
    'quarantine_name',
    'parse_quarantine_name',
    'safe_copy',
]
