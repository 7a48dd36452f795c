"""Git log cache."""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from repocache.cache.base import ManagedCache
from repocache.models import CacheType, GitLogEntry


class GitLogPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    log: tuple[GitLogEntry, ...] = ()


class GitLogCache(ManagedCache[GitLogPayload]):
    """Cache of the commit log, newest first as supplied by the manager."""

    cache_type = CacheType.GIT_LOG
    payload_model = GitLogPayload

    def update(self, log: Optional[Iterable[GitLogEntry]]) -> None:
        self._update_payload(GitLogPayload(log=tuple(log or ())))

    @property
    def log(self) -> list[GitLogEntry]:
        return list(self._read().log)
