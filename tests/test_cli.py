"""
Tests for the command-line interface.
"""

import csv
import os
from pathlib import Path

import pytest

from imgdupe.cli import main, parse_arguments
from imgdupe.cli.orchestrator import EXIT_ERROR, EXIT_OK, EXIT_PARTIAL
from imgdupe.user_config import get_user_config


@pytest.fixture(autouse=True)
def isolated_user_config(temp_dir, monkeypatch):
    """Point the user configuration at an empty directory."""
    monkeypatch.setenv('IMGDUPE_CONFIG_DIR', str(temp_dir / ".config"))
    for var in ('IMGDUPE_ALGORITHM', 'IMGDUPE_SENSITIVITY', 'IMGDUPE_WORKERS',
                'IMGDUPE_QUARANTINE_DIR', 'IMGDUPE_MAX_PIXELS'):
        monkeypatch.delenv(var, raising=False)
    get_user_config().reload()
    yield
    get_user_config().reload()


class TestParseArguments:
    """Test argument parsing."""

    def test_defaults(self):
        """Defaults come from the built-in configuration."""
        args = parse_arguments([])
        assert args.directory == Path('.')
        assert args.algo == 'avg'
        assert args.sensitivity == 0
        assert not args.recursive
        assert not args.dry_run
        assert not args.undo
        assert args.quarantine_dir == 'duplicates'

    def test_flags(self):
        """Short flags and algorithm aliases are accepted."""
        args = parse_arguments(['/photos', '-r', '-n', '--algo', 'fmiq', '-s', '5'])
        assert args.directory == Path('/photos')
        assert args.recursive
        assert args.dry_run
        assert args.algo == 'fmiq'
        assert args.sensitivity == 5

    def test_negative_sensitivity(self):
        """Negative sensitivity parses as an integer."""
        assert parse_arguments(['-s', '-3']).sensitivity == -3

    def test_unknown_algorithm_rejected(self):
        """Unknown algorithm names exit with a usage error."""
        with pytest.raises(SystemExit):
            parse_arguments(['--algo', 'md5'])

    def test_defaults_from_environment(self, monkeypatch):
        """Environment variables change the defaults."""
        monkeypatch.setenv('IMGDUPE_ALGORITHM', 'whash')
        monkeypatch.setenv('IMGDUPE_SENSITIVITY', '7')
        args = parse_arguments([])
        assert args.algo == 'whash'
        assert args.sensitivity == 7


class TestMain:
    """Test complete CLI runs."""

    def test_invalid_directory(self, temp_dir):
        """A missing directory is an error."""
        assert main([str(temp_dir / "missing"), '--no-progress']) == EXIT_ERROR

    def test_invalid_workers(self, sample_images, temp_dir):
        """Zero workers is rejected."""
        assert main([str(temp_dir), '-w', '0', '--no-progress']) == EXIT_ERROR

    def test_no_images(self, temp_dir):
        """An empty directory exits with an error."""
        assert main([str(temp_dir), '--no-progress']) == EXIT_ERROR

    def test_dry_run(self, sample_images, temp_dir, capsys):
        """Dry run reports matches and leaves the directory unchanged."""
        before = sorted(os.listdir(temp_dir))

        exit_code = main([str(temp_dir), '--dry-run', '--no-progress'])

        assert exit_code == EXIT_OK
        assert sorted(os.listdir(temp_dir)) == before
        output = capsys.readouterr().out
        assert "DRY RUN" in output
        assert "Duplicates found: 2" in output

    def test_resolve_then_undo(self, sample_images, temp_dir, capsys):
        """A resolve run followed by undo restores the original listing."""
        before = sorted(os.listdir(temp_dir))

        assert main([str(temp_dir), '--no-progress']) == EXIT_OK
        assert (temp_dir / "duplicates").is_dir()
        assert not Path(sample_images['small']).exists()

        assert main([str(temp_dir), '--undo']) == EXIT_OK
        assert sorted(os.listdir(temp_dir)) == before
        assert "UNDO REPORT" in capsys.readouterr().out

    def test_undo_without_quarantine(self, temp_dir):
        """Undo without a quarantine directory is an error."""
        assert main([str(temp_dir), '--undo']) == EXIT_ERROR

    def test_undo_with_conflict(self, sample_images, temp_dir):
        """An occupied restore target makes undo a partial success."""
        main([str(temp_dir), '--no-progress'])
        Path(sample_images['small']).write_bytes(b"newcomer")

        assert main([str(temp_dir), '--undo']) == EXIT_PARTIAL
        assert (temp_dir / "duplicates").exists()

    def test_custom_quarantine_dir(self, sample_images, temp_dir):
        """--quarantine-dir changes the directory name."""
        assert main([str(temp_dir), '--quarantine-dir', 'trash', '--no-progress']) == EXIT_OK
        assert (temp_dir / "trash").is_dir()
        assert not (temp_dir / "duplicates").exists()

    def test_quarantine_dir_must_be_plain_name(self, sample_images, temp_dir):
        """Paths are not accepted as quarantine names."""
        assert main([str(temp_dir), '--quarantine-dir', 'a/b', '--no-progress']) == EXIT_ERROR

    def test_csv_export(self, sample_images, temp_dir):
        """Matches are exported as keep/discard CSV rows."""
        export = temp_dir / "report.csv"

        exit_code = main([
            str(temp_dir), '--dry-run', '--no-progress',
            '--export', str(export), '--export-format', 'csv',
        ])

        assert exit_code == EXIT_OK
        with open(export, newline='', encoding='utf-8') as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 4
        assert {row['status'] for row in rows} == {'keep', 'discard'}
        assert all(row['outcome'] == 'duplicate' for row in rows)
