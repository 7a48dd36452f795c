"""Branch cache.

Holds the local and remote branch lists. Both lists are compared as
ordered sequences; a change in either one is a single update.
"""

from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from repocache.cache.base import ManagedCache
from repocache.models import CacheType, GitBranch


class BranchPayload(BaseModel):
    """Local and remote branches."""

    model_config = ConfigDict(frozen=True)

    local_branches: tuple[GitBranch, ...] = ()
    remote_branches: tuple[GitBranch, ...] = ()


class BranchCache(ManagedCache[BranchPayload]):
    """Cache of the repository's branch lists."""

    cache_type = CacheType.BRANCH
    payload_model = BranchPayload

    def update(
        self,
        local_branches: Optional[Iterable[GitBranch]],
        remote_branches: Optional[Iterable[GitBranch]],
    ) -> None:
        """Replace both branch lists. None is treated as an empty list."""
        self._update_payload(
            BranchPayload(
                local_branches=tuple(local_branches or ()),
                remote_branches=tuple(remote_branches or ()),
            )
        )

    @property
    def local_branches(self) -> list[GitBranch]:
        return list(self._read().local_branches)

    @property
    def remote_branches(self) -> list[GitBranch]:
        return list(self._read().remote_branches)
