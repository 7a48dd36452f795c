"""Repository info cache.

Holds the repository name, the current remote and the current branch.
Fields are compared one by one; any difference marks the whole record
updated, and one update call fires at most one cache_updated event.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from repocache.cache.base import ManagedCache
from repocache.models import CacheType, GitBranch, GitRemote


class RepositoryInfoPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    current_remote: Optional[GitRemote] = None
    current_branch: Optional[GitBranch] = None


class RepositoryInfoCache(ManagedCache[RepositoryInfoPayload]):
    """Cache of the repository's name, current remote and current branch."""

    cache_type = CacheType.REPOSITORY_INFO
    payload_model = RepositoryInfoPayload

    def update(
        self,
        name: Optional[str],
        current_remote: Optional[GitRemote],
        current_branch: Optional[GitBranch],
    ) -> None:
        self._update_payload(
            RepositoryInfoPayload(
                name=name or "",
                current_remote=current_remote,
                current_branch=current_branch,
            )
        )

    @property
    def repository_name(self) -> str:
        return self._read().name

    @property
    def current_remote(self) -> Optional[GitRemote]:
        return self._read().current_remote

    @property
    def current_branch(self) -> Optional[GitBranch]:
        return self._read().current_branch
