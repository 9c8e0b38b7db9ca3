"""
Unit tests for data models.
"""

from pathlib import Path

from imgdupe.models import (
    EngineConfig,
    ImageRecord,
    MatchResult,
    ObservedImage,
    Outcome,
    Resolution,
    RunReport,
    UndoReport,
)
from imgdupe.utils.formatters import format_area, format_number


class TestObservedImage:
    """Test ObservedImage dataclass."""

    def test_area(self):
        """Area is width times height."""
        observed = ObservedImage(path="/a/b.jpg", width=640, height=480, fingerprint="fp")
        assert observed.area == 307200

    def test_to_record(self):
        """The record carries path and area."""
        record = ObservedImage(path="/a/b.jpg", width=10, height=20, fingerprint="fp").to_record()
        assert record == ImageRecord(path="/a/b.jpg", area=200)


class TestMatchResult:
    """Test MatchResult truthiness."""

    def test_no_match_is_falsy(self):
        """No match is falsy."""
        assert not MatchResult.no_match()

    def test_match_is_truthy(self):
        """A match is truthy."""
        result = MatchResult(record=ImageRecord("/a.jpg", 1), distance=0)
        assert result
        assert result.matched


class TestReports:
    """Test report aggregation."""

    def test_run_report_partitions(self):
        """Resolutions are split into resolved and failed."""
        resolved = Resolution(path="/a", outcome=Outcome.RESOLVED)
        failed = Resolution(path="/b", outcome=Outcome.FAILED, error="boom")
        report = RunReport(files_found=3, unique=1, resolutions=[resolved, failed])
        assert report.resolved == [resolved]
        assert report.failed == [failed]
        assert report.duplicates_found == 2

    def test_undo_report_ok(self):
        """Undo is ok only without errors."""
        assert UndoReport().ok
        assert not UndoReport(errors=[RuntimeError("x")]).ok


class TestEngineConfig:
    """Test EngineConfig."""

    def test_defaults(self):
        """Default configuration values."""
        config = EngineConfig()
        assert config.root == Path('.')
        assert config.algorithm == 'avg'
        assert not config.dry_run

    def test_threshold_shift(self):
        """Threshold is sensitivity minus 100."""
        assert EngineConfig(sensitivity=5).threshold == -95
        assert EngineConfig(sensitivity=0).threshold == -100

    def test_root_coerced_to_path(self):
        """String roots become paths."""
        config = EngineConfig(root="/photos", quarantine_dir_name="trash")
        assert config.quarantine_dir == Path("/photos/trash")


class TestFormatters:
    """Test report formatters."""

    def test_format_number(self):
        """Counts get thousands separators."""
        assert format_number(1234567) == "1,234,567"

    def test_format_area(self):
        """Large areas are shown in megapixels."""
        assert format_area(307200) == "307,200 px"
        assert format_area(12_000_000) == "12.0 MP"
