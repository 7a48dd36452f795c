"""Managed cache base class.

A ManagedCache holds one payload (a frozen pydantic model) together with
the time it last changed and the time it was last verified. Reads are
guarded by a TTL: a read that finds the payload older than the TTL
invalidates the cache first, resetting it to the empty payload.

Two events are exposed:
- cache_invalidated(): fired at the start of every invalidation
- cache_updated(timestamp): fired only when an update changed the payload
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, ClassVar, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from repocache.cache.snapshots import CacheSnapshot
from repocache.config import DEFAULT_TTL_SECONDS, NEVER
from repocache.events import EventHook
from repocache.exceptions import SnapshotError
from repocache.logs import get_logger
from repocache.models import CacheType

PayloadT = TypeVar("PayloadT", bound=BaseModel)

Clock = Callable[[], datetime]
SaveCallback = Callable[["ManagedCache[Any]"], None]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ManagedCache(Generic[PayloadT]):
    """TTL-validated, change-detecting holder for one payload.

    Subclasses set ``cache_type`` and ``payload_model`` and expose a
    domain-specific ``update`` that builds a payload and passes it to
    ``_update_payload``. The payload model built with no arguments is the
    domain's empty value.
    """

    cache_type: ClassVar[CacheType]
    payload_model: ClassVar[type[BaseModel]]

    def __init__(
        self,
        ttl: Optional[timedelta] = None,
        clock: Optional[Clock] = None,
        on_save: Optional[SaveCallback] = None,
        logger: Any = None,
    ):
        """Create an empty cache.

        Args:
            ttl: Staleness window. Defaults to DEFAULT_TTL_SECONDS.
            clock: Returns the current time. Defaults to UTC wall clock.
            on_save: Called with the cache after every update.
            logger: structlog logger; bound with this cache's type.
        """
        self.ttl = ttl if ttl is not None else timedelta(seconds=DEFAULT_TTL_SECONDS)
        self._clock = clock or utcnow
        self._on_save = on_save
        self._log = (logger or get_logger(__name__)).bind(cache=self.cache_type.value)

        self._payload: PayloadT = self.payload_model()
        self._last_updated_at = NEVER
        self._last_verified_at = NEVER
        self._invalidating = False

        self.cache_invalidated = EventHook(f"{self.cache_type.value}.cache_invalidated")
        self.cache_updated = EventHook(f"{self.cache_type.value}.cache_updated")

    @property
    def last_updated_at(self) -> datetime:
        return self._last_updated_at

    @property
    def last_verified_at(self) -> datetime:
        return self._last_verified_at

    @property
    def payload(self) -> PayloadT:
        """The current payload, validated against the TTL first."""
        return self._read()

    def validate(self) -> None:
        """Invalidate the cache if its payload is older than the TTL.

        Does nothing while an invalidation of this cache is in progress, so
        handlers that read the cache from within its own events cannot
        recurse.
        """
        if self._invalidating:
            return
        if self._clock() - self._last_updated_at > self.ttl:
            self.invalidate()

    def invalidate(self) -> None:
        """Fire cache_invalidated, then reset the payload to empty."""
        self._invalidating = True
        try:
            self._log.debug("cache_invalidated")
            self.cache_invalidated.fire()
            self._update_payload(self.payload_model())
        finally:
            self._invalidating = False

    def snapshot(self) -> CacheSnapshot:
        """Capture payload and timestamps without validating."""
        return CacheSnapshot(
            cache_type=self.cache_type,
            last_updated_at=self._last_updated_at,
            last_verified_at=self._last_verified_at,
            payload=self._payload.model_dump(mode="json"),
        )

    def restore(self, snapshot: CacheSnapshot) -> None:
        """Load a previously captured snapshot.

        No events fire and nothing is saved.

        Raises:
            SnapshotError: If the snapshot belongs to another cache type or
                its payload does not match this cache's payload model.
        """
        if snapshot.cache_type is not self.cache_type:
            raise SnapshotError(
                f"Cannot restore {snapshot.cache_type.value} snapshot "
                f"into {self.cache_type.value} cache"
            )
        try:
            payload = self.payload_model.model_validate(snapshot.payload)
        except ValidationError as e:
            raise SnapshotError(f"Invalid {self.cache_type.value} snapshot payload: {e}")

        self._payload = payload
        self._last_updated_at = snapshot.last_updated_at
        self._last_verified_at = max(snapshot.last_verified_at, snapshot.last_updated_at)
        self._log.debug("cache_restored", last_updated_at=self._last_updated_at.isoformat())

    def _read(self) -> PayloadT:
        self.validate()
        return self._payload

    def _update_payload(self, payload: PayloadT) -> None:
        """Store a payload if it differs from the current one.

        State is written and saved before any subscriber runs.
        """
        now = self._clock()
        is_updated = payload != self._payload

        if is_updated:
            self._payload = payload
            self._last_updated_at = now

        self._last_verified_at = now
        self._save()

        if is_updated:
            self._log.debug("cache_updated", updated_at=now.isoformat())
            self.cache_updated.fire(now)

    def _save(self) -> None:
        if self._on_save is None:
            return
        try:
            self._on_save(self)
        except SnapshotError as e:
            self._log.warning("cache_save_failed", error=str(e))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(last_updated_at={self._last_updated_at.isoformat()}, "
            f"last_verified_at={self._last_verified_at.isoformat()})"
        )
