"""Cache module for repocache.

This package provides the managed caches that mirror repository state:
- base: ManagedCache, the TTL-validated change-detecting holder
- branch, log, status, locks, user, repository_info: the six domain caches
- container: CacheContainer and create_cache_container wiring
- paths: Functions for getting snapshot file paths
- snapshots: CacheSnapshot model and the YAML SnapshotStore
"""

# Base
from repocache.cache.base import ManagedCache

# Domain caches
from repocache.cache.branch import BranchCache, BranchPayload
from repocache.cache.log import GitLogCache, GitLogPayload
from repocache.cache.status import GitStatusCache, GitStatusPayload
from repocache.cache.locks import GitLocksCache, GitLocksPayload
from repocache.cache.user import GitUserCache, GitUserPayload
from repocache.cache.repository_info import RepositoryInfoCache, RepositoryInfoPayload

# Container
from repocache.cache.container import (
    CACHE_CLASSES,
    CacheContainer,
    create_cache_container,
)

# Path utilities
from repocache.cache.paths import (
    SNAPSHOT_FILE_NAMES,
    get_cache_dir,
    get_snapshot_file,
    get_snapshot_files,
)

# Snapshot persistence
from repocache.cache.snapshots import (
    CacheSnapshot,
    SnapshotStore,
)


__all__ = [
    # Base
    "ManagedCache",
    # Domain caches
    "BranchCache",
    "BranchPayload",
    "GitLogCache",
    "GitLogPayload",
    "GitStatusCache",
    "GitStatusPayload",
    "GitLocksCache",
    "GitLocksPayload",
    "GitUserCache",
    "GitUserPayload",
    "RepositoryInfoCache",
    "RepositoryInfoPayload",
    # Container
    "CACHE_CLASSES",
    "CacheContainer",
    "create_cache_container",
    # Path utilities
    "SNAPSHOT_FILE_NAMES",
    "get_cache_dir",
    "get_snapshot_file",
    "get_snapshot_files",
    # Snapshot persistence
    "CacheSnapshot",
    "SnapshotStore",
]
