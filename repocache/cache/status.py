"""Git status cache.

The status is a single record compared by value. An empty GitStatus is
the cache's empty payload.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from repocache.cache.base import ManagedCache
from repocache.models import CacheType, GitStatus


class GitStatusPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: GitStatus = GitStatus()


class GitStatusCache(ManagedCache[GitStatusPayload]):
    """Cache of the working tree status."""

    cache_type = CacheType.GIT_STATUS
    payload_model = GitStatusPayload

    def update(self, status: Optional[GitStatus]) -> None:
        self._update_payload(GitStatusPayload(status=status or GitStatus()))

    @property
    def git_status(self) -> GitStatus:
        return self._read().status
