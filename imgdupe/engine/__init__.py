"""
Duplicate-resolution engine.

Public API:
- DuplicateResolver: keep/discard decision and index maintenance
- Quarantine: reversible relocation of resolved pairs and undo
- create_resolver: wire index, quarantine and resolver from an EngineConfig
"""

from __future__ import annotations

from ..fingerprint import FingerprintFamily, get_family
from ..index import create_index
from ..models import EngineConfig
from .policy import DuplicateResolver, new_file_wins
from .relocation import (
    Quarantine,
    pair_tag,
    quarantine_name,
    parse_quarantine_name,
    safe_copy,
)


def create_resolver(config: EngineConfig, family: FingerprintFamily | None = None) -> DuplicateResolver:
    """
    Build a resolver with a fresh index and quarantine for one run.

    Args:
        config: Engine configuration
        family: Pre-resolved fingerprint family, looked up from config if omitted

    Returns:
        DuplicateResolver ready to receive observed images
    """
    family = family or get_family(config.algorithm)
    index = create_index(config, family)
    quarantine = Quarantine(
        config.root,
        dir_name=config.quarantine_dir_name,
        dry_run=config.dry_run,
    )
    return DuplicateResolver(index, quarantine, config)


__all__ = [
    'DuplicateResolver',
    'Quarantine',
    'create_resolver',
    'new_file_wins',
    'pair_tag',
    'quarantine_name',
    'parse_quarantine_name',
    'safe_copy',
]
