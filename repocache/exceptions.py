"""Exception classes for repocache.

Contains:
- RepoCacheError: Base exception for all repocache errors
- CacheError: Misuse of a cache or the cache container
- UnknownCacheTypeError: Dispatch on a value that is not a CacheType
- CacheNotBoundError: Dispatch to a container slot that has no cache
- CacheBindingError: Binding a cache to a slot of a different type
- SnapshotError: Snapshot could not be read or written
- ConfigError: Configuration could not be loaded
- RepositoryError: Base exception for repository facade errors
- RepositoryNotInitializedError: Facade used before a manager was attached
- NoRemoteConfiguredError: Remote operation without a current remote
"""


class RepoCacheError(Exception):
    """Base exception for repocache."""

    pass


class CacheError(RepoCacheError):
    """Raised when a cache or the cache container is misused."""

    pass


class UnknownCacheTypeError(CacheError, ValueError):
    """Raised when a value outside the CacheType enumeration is dispatched."""

    pass


class CacheNotBoundError(CacheError):
    """Raised when dispatching to a container slot that was never bound."""

    pass


class CacheBindingError(CacheError):
    """Raised when a cache is bound to a slot of another type."""

    pass


class SnapshotError(RepoCacheError):
    """Raised when a snapshot cannot be read or written."""

    pass


class ConfigError(RepoCacheError):
    """Raised when there's an error with the repocache configuration."""

    pass


class RepositoryError(RepoCacheError):
    """Base exception for repository facade errors."""

    pass


class RepositoryNotInitializedError(RepositoryError):
    """Raised when the repository is used before initialize() was called."""

    pass


class NoRemoteConfiguredError(RepositoryError):
    """Raised when a remote operation is requested without a current remote."""

    pass
