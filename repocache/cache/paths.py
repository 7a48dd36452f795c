"""Snapshot file path utilities for repocache.

Contains functions for getting paths to snapshot files:
- get_cache_dir: Get the cache directory under a snapshot root
- get_snapshot_file: Get path to the snapshot of one cache domain
- get_snapshot_files: Get paths to every snapshot, in validation order
"""

from pathlib import Path

from repocache.config import VALIDATION_ORDER
from repocache.exceptions import UnknownCacheTypeError
from repocache.models import CacheType

# One YAML snapshot per domain
SNAPSHOT_FILE_NAMES = {
    CacheType.BRANCH: "branches.yaml",
    CacheType.GIT_LOG: "gitlog.yaml",
    CacheType.REPOSITORY_INFO: "repository_info.yaml",
    CacheType.GIT_STATUS: "status.yaml",
    CacheType.GIT_LOCKS: "locks.yaml",
    CacheType.GIT_USER: "user.yaml",
}


def get_cache_dir(snapshot_root: Path) -> Path:
    """Return the cache directory.

    Args:
        snapshot_root: Directory holding repocache state for a repository.

    Returns:
        Path to the cache/ directory (not created).
    """
    return snapshot_root / "cache"


def get_snapshot_file(snapshot_root: Path, cache_type: CacheType) -> Path:
    """Return path to the snapshot file of a cache domain.

    Args:
        snapshot_root: Directory holding repocache state for a repository.
        cache_type: The cache domain.

    Returns:
        Path to cache/<name>.yaml.

    Raises:
        UnknownCacheTypeError: If cache_type is not a CacheType.
    """
    try:
        file_name = SNAPSHOT_FILE_NAMES[cache_type]
    except (KeyError, TypeError):
        raise UnknownCacheTypeError(f"Unknown cache type: {cache_type!r}")
    return get_cache_dir(snapshot_root) / file_name


def get_snapshot_files(snapshot_root: Path) -> dict[CacheType, Path]:
    """Return every snapshot path keyed by cache type, in validation order."""
    return {
        cache_type: get_snapshot_file(snapshot_root, cache_type)
        for cache_type in VALIDATION_ORDER
    }
