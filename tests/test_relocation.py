"""
Unit tests for quarantine relocation and undo.
"""

import os
from pathlib import Path

import pytest

from imgdupe.config import DISCARD_MARKER, KEEP_MARKER
from imgdupe.engine.relocation import (
    Quarantine,
    pair_tag,
    parse_quarantine_name,
    quarantine_name,
    safe_copy,
)
from imgdupe.errors import QuarantineUnavailableError, RelocationError


class TestNaming:
    """Test pair tags and quarantine file names."""

    def test_pair_tag_is_short_hex(self):
        """Tags are five lowercase hex digits."""
        tag = pair_tag('/photos/a.jpg', '/photos/b.jpg')
        assert len(tag) == 5
        int(tag, 16)

    def test_pair_tag_is_order_independent(self):
        """Swapping the pair gives the same tag."""
        assert pair_tag('a.jpg', 'b.jpg') == pair_tag('b.jpg', 'a.jpg')

    def test_pair_tag_uses_base_names(self):
        """Directories do not take part in the tag."""
        assert pair_tag('/x/a.jpg', '/y/b.jpg') == pair_tag('a.jpg', 'b.jpg')

    def test_pair_tag_differs_between_pairs(self):
        """Different pairs get different tags."""
        assert pair_tag('a.jpg', 'b.jpg') != pair_tag('a.jpg', 'c.jpg')

    def test_pair_tag_attempts_differ(self):
        """Each attempt yields a new tag for the same pair."""
        tags = {pair_tag('a.jpg', 'b.jpg', attempt) for attempt in range(5)}
        assert len(tags) == 5
        assert pair_tag('a.jpg', 'b.jpg', 0) == pair_tag('a.jpg', 'b.jpg')

    def test_quarantine_name_layout(self):
        """Names are tag, marker and base name joined by underscores."""
        assert quarantine_name('3f2a1', KEEP_MARKER, '/photos/beach.jpg') == '3f2a1__KEPT__beach.jpg'
        assert quarantine_name('3f2a1', DISCARD_MARKER, 'beach.jpg') == '3f2a1__GONE__beach.jpg'

    def test_parse_round_trip(self):
        """Markers inside the original name survive parsing."""
        name = quarantine_name('0a1b2', DISCARD_MARKER, 'my_photo_GONE_.jpg')
        assert parse_quarantine_name(name) == ('0a1b2', DISCARD_MARKER, 'my_photo_GONE_.jpg')

    def test_parse_requarantined_name(self):
        """A file that already looks quarantined keeps its whole name."""
        name = quarantine_name('12345', DISCARD_MARKER, 'abcde__KEPT__x.jpg')
        assert name == '12345__GONE__abcde__KEPT__x.jpg'
        assert parse_quarantine_name(name) == ('12345', DISCARD_MARKER, 'abcde__KEPT__x.jpg')

    def test_parse_rejects_foreign_names(self):
        """Names not built by quarantine_name are not recognised."""
        assert parse_quarantine_name('holiday.jpg') is None
        assert parse_quarantine_name('zzzzz__KEPT__a.jpg') is None


class TestSafeCopy:
    """Test safe_copy."""

    def test_hard_link_or_copy(self, make_file, temp_dir):
        """The destination gets the source contents, the source stays."""
        src = make_file("src.jpg", b"pixels")
        dst = temp_dir / "dst.jpg"
        safe_copy(src, dst)
        assert dst.read_bytes() == b"pixels"
        assert Path(src).exists()

    def test_same_file_is_noop(self, make_file):
        """Copying a file onto itself leaves it intact."""
        src = make_file("src.jpg", b"pixels")
        safe_copy(src, src)
        assert Path(src).read_bytes() == b"pixels"

    def test_existing_link_to_source_is_noop(self, make_file, temp_dir):
        """A destination hard-linked to the source counts as already copied."""
        src = make_file("src.jpg", b"pixels")
        dst = temp_dir / "dst.jpg"
        os.link(src, dst)
        safe_copy(src, dst)
        assert dst.read_bytes() == b"pixels"

    def test_missing_source(self, temp_dir):
        """A missing source raises OSError."""
        with pytest.raises(OSError):
            safe_copy(temp_dir / "missing.jpg", temp_dir / "dst.jpg")

    def test_directory_source_rejected(self, temp_dir):
        """Only regular files are copied."""
        (temp_dir / "folder").mkdir()
        with pytest.raises(OSError, match="non-regular"):
            safe_copy(temp_dir / "folder", temp_dir / "dst.jpg")

    def test_existing_destination_is_refused(self, make_file):
        """A different file at the destination is never replaced."""
        src = make_file("src.jpg", b"new")
        dst = make_file("dst.jpg", b"old")
        with pytest.raises(FileExistsError):
            safe_copy(src, dst)
        assert Path(dst).read_bytes() == b"old"

    def test_linked_destination_is_not_written_through(self, make_file, temp_dir):
        """A destination linked to another file leaves that file untouched."""
        other = make_file("other.jpg", b"other keeper")
        src = make_file("src.jpg", b"new keeper")
        dst = temp_dir / "dst.jpg"
        os.link(other, dst)

        with pytest.raises(FileExistsError):
            safe_copy(src, dst)

        assert Path(other).read_bytes() == b"other keeper"


class TestRelocate:
    """Test Quarantine.relocate."""

    def test_directory_created_lazily(self, temp_dir):
        """Constructing a quarantine creates nothing."""
        Quarantine(temp_dir)
        assert not (temp_dir / "duplicates").exists()

    def test_relocate_pair(self, make_file, temp_dir):
        """The keeper is copied and the discarded file moved under tagged names."""
        keeper = make_file("a.jpg", b"keeper")
        discarded = make_file("b.jpg", b"discarded")
        quarantine = Quarantine(temp_dir)

        relocation = quarantine.relocate(keeper, discarded)

        tag = pair_tag(keeper, discarded)
        assert relocation.pair_tag == tag
        assert Path(keeper).exists()
        assert not Path(discarded).exists()
        assert Path(relocation.kept_copy).name == f"{tag}__KEPT__a.jpg"
        assert Path(relocation.kept_copy).read_bytes() == b"keeper"
        assert Path(relocation.discarded_dest).name == f"{tag}__GONE__b.jpg"
        assert Path(relocation.discarded_dest).read_bytes() == b"discarded"

    def test_dry_run_touches_nothing(self, make_file, temp_dir):
        """A dry run plans names but leaves the filesystem alone."""
        keeper = make_file("a.jpg")
        discarded = make_file("b.jpg")
        quarantine = Quarantine(temp_dir, dry_run=True)

        relocation = quarantine.relocate(keeper, discarded)

        assert relocation.dry_run
        assert Path(keeper).exists()
        assert Path(discarded).exists()
        assert not quarantine.directory.exists()

    def test_existing_directory_is_reused(self, make_file, temp_dir):
        """Leftovers from an aborted run do not stop a new run."""
        leftover = make_file("duplicates/abcde__GONE__old.jpg", b"old")
        keeper = make_file("a.jpg")
        discarded = make_file("b.jpg")

        Quarantine(temp_dir).relocate(keeper, discarded)

        assert Path(leftover).read_bytes() == b"old"
        assert not Path(discarded).exists()

    def test_custom_directory_name(self, make_file, temp_dir):
        """The quarantine directory name is configurable."""
        keeper = make_file("a.jpg")
        discarded = make_file("b.jpg")
        Quarantine(temp_dir, dir_name="quarantine").relocate(keeper, discarded)
        assert (temp_dir / "quarantine").is_dir()

    def test_same_base_names_get_distinct_tags(self, make_file, temp_dir):
        """Pairs from different folders with equal names never share quarantine names."""
        keeper_one = make_file("sub1/x.jpg", b"KEEPER-ONE")
        discarded_one = make_file("sub1/y.jpg", b"DISCARD-ONE")
        keeper_two = make_file("sub2/x.jpg", b"KEEPER-TWO")
        discarded_two = make_file("sub2/y.jpg", b"DISCARD-TWO")
        quarantine = Quarantine(temp_dir)

        first = quarantine.relocate(keeper_one, discarded_one)
        second = quarantine.relocate(keeper_two, discarded_two)

        assert first.pair_tag != second.pair_tag
        assert Path(keeper_one).read_bytes() == b"KEEPER-ONE"
        assert Path(keeper_two).read_bytes() == b"KEEPER-TWO"
        assert Path(first.kept_copy).read_bytes() == b"KEEPER-ONE"
        assert Path(second.kept_copy).read_bytes() == b"KEEPER-TWO"
        assert Path(first.discarded_dest).read_bytes() == b"DISCARD-ONE"
        assert Path(second.discarded_dest).read_bytes() == b"DISCARD-TWO"
        assert len(os.listdir(quarantine.directory)) == 4

    def test_taken_name_is_skipped(self, make_file, temp_dir):
        """A foreign file holding the first tag's name is left alone."""
        keeper = make_file("a.jpg")
        discarded = make_file("b.jpg", b"discarded")
        squatter = make_file(
            "duplicates/" + quarantine_name(pair_tag(keeper, discarded), DISCARD_MARKER, discarded),
            b"squatter",
        )

        relocation = Quarantine(temp_dir).relocate(keeper, discarded)

        assert relocation.pair_tag == pair_tag(keeper, discarded, 1)
        assert Path(squatter).read_bytes() == b"squatter"
        assert Path(relocation.discarded_dest).read_bytes() == b"discarded"

    def test_move_failure_after_copy(self, make_file, temp_dir):
        """The keeper copy survives when the discarded file cannot be moved."""
        keeper = make_file("a.jpg", b"keeper")
        missing = str(temp_dir / "gone-already.jpg")
        quarantine = Quarantine(temp_dir)

        with pytest.raises(RelocationError) as excinfo:
            quarantine.relocate(keeper, missing)

        error = excinfo.value
        assert error.stage == 'move'
        assert error.keeper_copied
        assert Path(keeper).exists()
        assert Path(error.relocation.kept_copy).exists()

    def test_copy_failure_leaves_discarded_in_place(self, make_file, temp_dir):
        """A missing keeper stops the relocation before anything moves."""
        discarded = make_file("b.jpg")
        quarantine = Quarantine(temp_dir)

        with pytest.raises(RelocationError) as excinfo:
            quarantine.relocate(str(temp_dir / "missing.jpg"), discarded)

        assert excinfo.value.stage == 'copy'
        assert not excinfo.value.keeper_copied
        assert Path(discarded).exists()

    def test_directory_creation_failure_is_fatal(self, make_file, temp_dir):
        """A file in place of the quarantine directory aborts the relocation."""
        make_file("duplicates", b"a file where the folder should be")
        keeper = make_file("a.jpg")
        discarded = make_file("b.jpg")

        with pytest.raises(QuarantineUnavailableError):
            Quarantine(temp_dir).relocate(keeper, discarded)
        assert Path(discarded).exists()


class TestUndo:
    """Test Quarantine.undo."""

    def test_round_trip(self, make_file, temp_dir):
        """Undo removes kept copies, restores discarded files and the directory goes."""
        keeper = make_file("a.jpg", b"keeper")
        discarded = make_file("b.jpg", b"discarded")
        Quarantine(temp_dir).relocate(keeper, discarded)

        report = Quarantine(temp_dir).undo()

        assert report.ok
        assert report.directory_removed
        assert len(report.removed) == 1
        assert len(report.restored) == 1
        assert Path(keeper).read_bytes() == b"keeper"
        assert Path(discarded).read_bytes() == b"discarded"
        assert not (temp_dir / "duplicates").exists()

    def test_restore_is_flat(self, make_file, temp_dir):
        """Files from subdirectories are restored into the root."""
        keeper = make_file("a.jpg")
        discarded = make_file("sub/b.jpg")
        Quarantine(temp_dir).relocate(keeper, discarded)

        Quarantine(temp_dir).undo()

        assert (temp_dir / "b.jpg").exists()
        assert not Path(discarded).exists()

    def test_colliding_names_are_not_lost(self, make_file, temp_dir):
        """Two quarantined files with one base name: one restores, one stays and is reported."""
        Quarantine(temp_dir).relocate(make_file("sub1/x.jpg"), make_file("sub1/y.jpg", b"ONE"))
        Quarantine(temp_dir).relocate(make_file("sub2/x.jpg"), make_file("sub2/y.jpg", b"TWO"))

        report = Quarantine(temp_dir).undo()

        assert len(report.restored) == 1
        assert len(report.errors) == 1
        assert (temp_dir / "y.jpg").read_bytes() in (b"ONE", b"TWO")
        remaining = os.listdir(temp_dir / "duplicates")
        assert len(remaining) == 1
        assert "__GONE__y.jpg" in remaining[0]

    def test_missing_directory(self, temp_dir):
        """There is nothing to undo without a quarantine directory."""
        with pytest.raises(QuarantineUnavailableError):
            Quarantine(temp_dir).undo()

    def test_occupied_target_is_reported(self, make_file, temp_dir):
        """A file that reappeared at the original location is not overwritten."""
        keeper = make_file("a.jpg")
        discarded = make_file("b.jpg", b"original")
        Quarantine(temp_dir).relocate(keeper, discarded)
        make_file("b.jpg", b"newcomer")

        report = Quarantine(temp_dir).undo()

        assert not report.ok
        assert len(report.errors) == 1
        assert len(report.removed) == 1
        assert Path(discarded).read_bytes() == b"newcomer"
        assert not report.directory_removed
        assert (temp_dir / "duplicates").exists()

    def test_unknown_files_left_alone(self, make_file, temp_dir):
        """Files undo did not create stay, and so does the directory."""
        stray = make_file("duplicates/notes.txt")

        report = Quarantine(temp_dir).undo()

        assert report.skipped == [stray]
        assert Path(stray).exists()
        assert not report.directory_removed

    def test_dry_run_undo(self, make_file, temp_dir):
        """A dry-run undo reports restores without performing them."""
        keeper = make_file("a.jpg")
        discarded = make_file("b.jpg")
        Quarantine(temp_dir).relocate(keeper, discarded)

        report = Quarantine(temp_dir, dry_run=True).undo()

        assert len(report.restored) == 1
        assert not Path(discarded).exists()
        assert len(os.listdir(temp_dir / "duplicates")) == 2
