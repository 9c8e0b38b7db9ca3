"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
imgdupe command-line interface. Defaults come from the user configuration
(file and environment) so flags always take priority.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..fingerprint import family_names
from ..user_config import get_user_config


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    user_config = get_user_config()

    parser = argparse.ArgumentParser(
        prog='imgdupe',
        description='Find near-duplicate images, keep the best copy and quarantine the rest',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /path/to/photos --dry-run
      Report matches without touching any file

  %(prog)s /path/to/photos
      Keep the larger image of every duplicate pair and move the other
      one into /path/to/photos/duplicates

  %(prog)s /path/to/photos --algo whash --sensitivity 8
      Fuzzy matching with the wavelet hash (lower sensitivity = stricter)

  %(prog)s /path/to/photos --undo
      Put every quarantined file back and remove the duplicates folder

Notes:
  Undo restores files into the scanned directory itself, also for files
  that were found in subdirectories with -r.
        """
    )

    parser.add_argument(
        'directory',
        type=Path,
        nargs='?',
        default=Path('.'),
        help='Directory to scan for duplicate images. Default: current directory'
    )

    parser.add_argument(
        '-a', '--algo',
        choices=family_names(),
        default=user_config.default_algorithm,
        help=f'Fingerprint algorithm. Default: {user_config.default_algorithm}'
    )

    parser.add_argument(
        '-s', '--sensitivity',
        type=int,
        default=user_config.default_sensitivity,
        help='Match sensitivity for phash/whash (lower = stricter, negative disables '
             f'fuzzy matching). Default: {user_config.default_sensitivity}'
    )

    parser.add_argument(
        '-r', '--recursive',
        action='store_true',
        help='Go through subdirectories as well'
    )

    parser.add_argument(
        '-n', '--dry-run',
        action='store_true',
        help='Only report found matches, do not move or copy files'
    )

    parser.add_argument(
        '--undo',
        action='store_true',
        help='Restore files quarantined by a previous run'
    )

    parser.add_argument(
        '--quarantine-dir',
        default=user_config.quarantine_dir_name,
        help=f'Name of the quarantine folder inside the scanned directory. '
             f'Default: {user_config.quarantine_dir_name}'
    )

    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=user_config.default_workers,
        help=f'Number of parallel decoding workers. Default: {user_config.default_workers}'
    )

    parser.add_argument(
        '-e', '--export',
        type=Path,
        help='Export results to file'
    )

    parser.add_argument(
        '--export-format',
        choices=['txt', 'csv'],
        default='txt',
        help='Export format. Default: txt'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '--sensitivity', '5'])
        >>> args.sensitivity
        5
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
