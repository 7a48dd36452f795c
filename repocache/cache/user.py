"""Git user cache."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from repocache.cache.base import ManagedCache
from repocache.models import CacheType, User


class GitUserPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: Optional[User] = None


class GitUserCache(ManagedCache[GitUserPayload]):
    """Cache of the configured git user. None means no user is known."""

    cache_type = CacheType.GIT_USER
    payload_model = GitUserPayload

    def update(self, user: Optional[User]) -> None:
        self._update_payload(GitUserPayload(user=user))

    @property
    def user(self) -> Optional[User]:
        return self._read().user
