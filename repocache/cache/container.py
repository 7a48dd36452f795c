"""Cache container.

Groups the six domain caches behind one handle and relays their events as
type-tagged container events:
- cache_invalidated(cache_type)
- cache_updated(cache_type, timestamp)

Each slot can be bound exactly once.
"""

from functools import partial
from typing import Any, Optional

from repocache.cache.base import Clock, ManagedCache
from repocache.cache.branch import BranchCache
from repocache.cache.locks import GitLocksCache
from repocache.cache.log import GitLogCache
from repocache.cache.repository_info import RepositoryInfoCache
from repocache.cache.snapshots import SnapshotStore
from repocache.cache.status import GitStatusCache
from repocache.cache.user import GitUserCache
from repocache.config import VALIDATION_ORDER, CacheSettings
from repocache.events import EventHook
from repocache.exceptions import (
    CacheBindingError,
    CacheNotBoundError,
    SnapshotError,
    UnknownCacheTypeError,
)
from repocache.logs import get_logger
from repocache.models import CacheType

CACHE_CLASSES: dict[CacheType, type[ManagedCache[Any]]] = {
    CacheType.BRANCH: BranchCache,
    CacheType.GIT_LOG: GitLogCache,
    CacheType.REPOSITORY_INFO: RepositoryInfoCache,
    CacheType.GIT_STATUS: GitStatusCache,
    CacheType.GIT_LOCKS: GitLocksCache,
    CacheType.GIT_USER: GitUserCache,
}


def _check_cache_type(cache_type: Any) -> CacheType:
    if not isinstance(cache_type, CacheType):
        raise UnknownCacheTypeError(f"Unknown cache type: {cache_type!r}")
    return cache_type


class CacheContainer:
    """The six domain caches and their relayed events."""

    def __init__(self, logger: Any = None):
        self._caches: dict[CacheType, Optional[ManagedCache[Any]]] = dict.fromkeys(VALIDATION_ORDER)
        self._log = logger or get_logger(__name__)
        self.cache_invalidated = EventHook("container.cache_invalidated")
        self.cache_updated = EventHook("container.cache_updated")

    def bind(self, cache_type: CacheType, cache: Optional[ManagedCache[Any]]) -> bool:
        """Bind a cache to its slot.

        Binding None, or binding to a slot that is already filled, is
        ignored.

        Returns:
            True if the cache was bound, False if the call was ignored.

        Raises:
            UnknownCacheTypeError: If cache_type is not a CacheType.
            CacheBindingError: If the cache belongs to another slot.
        """
        _check_cache_type(cache_type)
        if cache is None:
            return False
        if cache.cache_type is not cache_type:
            raise CacheBindingError(
                f"Cannot bind {type(cache).__name__} to the {cache_type.value} slot"
            )
        if self._caches[cache_type] is not None:
            self._log.debug("cache_bind_ignored", cache=cache_type.value)
            return False

        self._caches[cache_type] = cache
        cache.cache_invalidated.subscribe(partial(self.cache_invalidated.fire, cache_type))
        cache.cache_updated.subscribe(partial(self.cache_updated.fire, cache_type))
        self._log.debug("cache_bound", cache=cache_type.value)
        return True

    def get(self, cache_type: CacheType) -> Optional[ManagedCache[Any]]:
        """Return the cache bound to a slot, or None."""
        return self._caches[_check_cache_type(cache_type)]

    def is_bound(self, cache_type: CacheType) -> bool:
        return self.get(cache_type) is not None

    def validate(self, cache_type: CacheType) -> None:
        self._require(cache_type).validate()

    def invalidate(self, cache_type: CacheType) -> None:
        self._require(cache_type).invalidate()

    def validate_all(self) -> None:
        """Validate every cache in VALIDATION_ORDER."""
        for cache_type in VALIDATION_ORDER:
            self._require(cache_type).validate()

    def invalidate_all(self) -> None:
        """Invalidate every cache in VALIDATION_ORDER."""
        for cache_type in VALIDATION_ORDER:
            self._require(cache_type).invalidate()

    def _require(self, cache_type: CacheType) -> ManagedCache[Any]:
        """Return the cache bound to a slot.

        Raises:
            CacheNotBoundError: If the slot is empty.
        """
        cache = self.get(cache_type)
        if cache is None:
            raise CacheNotBoundError(f"No cache bound for {cache_type.value}")
        return cache

    @property
    def branch_cache(self) -> BranchCache:
        return self._require(CacheType.BRANCH)  # type: ignore[return-value]

    @property
    def git_log_cache(self) -> GitLogCache:
        return self._require(CacheType.GIT_LOG)  # type: ignore[return-value]

    @property
    def repository_info_cache(self) -> RepositoryInfoCache:
        return self._require(CacheType.REPOSITORY_INFO)  # type: ignore[return-value]

    @property
    def git_status_cache(self) -> GitStatusCache:
        return self._require(CacheType.GIT_STATUS)  # type: ignore[return-value]

    @property
    def git_locks_cache(self) -> GitLocksCache:
        return self._require(CacheType.GIT_LOCKS)  # type: ignore[return-value]

    @property
    def git_user_cache(self) -> GitUserCache:
        return self._require(CacheType.GIT_USER)  # type: ignore[return-value]


def create_cache_container(
    settings: Optional[CacheSettings] = None,
    store: Optional[SnapshotStore] = None,
    clock: Optional[Clock] = None,
    logger: Any = None,
) -> CacheContainer:
    """Create the six caches, restore them from snapshots and bind them.

    Args:
        settings: Provides the TTL. Defaults to CacheSettings().
        store: Snapshot store used for restoring and as the save callback.
            Without a store the caches are memory-only.
        clock: Clock shared by all caches.
        logger: structlog logger passed to the container and every cache.

    Returns:
        A fully bound CacheContainer.
    """
    settings = settings or CacheSettings()
    log = logger or get_logger(__name__)
    container = CacheContainer(logger=log)

    for cache_type in VALIDATION_ORDER:
        cache = CACHE_CLASSES[cache_type](
            ttl=settings.ttl,
            clock=clock,
            on_save=store.save if store is not None else None,
            logger=log,
        )
        if store is not None:
            try:
                store.load(cache)
            except SnapshotError as e:
                log.warning("snapshot_load_failed", cache=cache_type.value, error=str(e))
        container.bind(cache_type, cache)

    return container
