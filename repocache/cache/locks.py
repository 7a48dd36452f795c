"""Git locks cache."""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from repocache.cache.base import ManagedCache
from repocache.models import CacheType, GitLock


class GitLocksPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    locks: tuple[GitLock, ...] = ()


class GitLocksCache(ManagedCache[GitLocksPayload]):
    """Cache of the file locks currently held."""

    cache_type = CacheType.GIT_LOCKS
    payload_model = GitLocksPayload

    def update(self, locks: Optional[Iterable[GitLock]]) -> None:
        self._update_payload(GitLocksPayload(locks=tuple(locks or ())))

    @property
    def git_locks(self) -> list[GitLock]:
        return list(self._read().locks)
