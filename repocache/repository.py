"""Repository facade.

Repository exposes the cached state of one local repository and forwards
mutating commands to a repository manager. It holds no cached data of its
own: every data property reads through the manager's CacheContainer.

Identity is the local path alone. The clone URL follows the current remote
and can change while the repository is open, so it takes no part in
equality or hashing.
"""

import re
from pathlib import Path
from typing import Any, Optional, Protocol, Union
from urllib.parse import urlsplit

from repocache.cache.container import CacheContainer
from repocache.events import EventHook
from repocache.exceptions import NoRemoteConfiguredError, RepositoryNotInitializedError
from repocache.logs import get_logger
from repocache.models import CacheType, GitBranch, GitLock, GitLogEntry, GitRemote, GitStatus, User

logger = get_logger(__name__)

GITHUB_HOST = "github.com"

# scp-like remote: user@host:owner/repo.git
_SCP_REMOTE_RE = re.compile(r"^[\w.-]+@(?P<host>[\w.-]+):")


class RepositoryManager(Protocol):
    """Runs git for a repository and pushes results into the caches.

    Command methods return a handle to work the manager owns; Repository
    passes it back untouched.
    """

    cache_container: CacheContainer

    def refresh(self) -> Any: ...

    def commit_all_files(self, message: str, body: str) -> Any: ...

    def commit_files(self, files: list[str], message: str, body: str) -> Any: ...

    def remote_add(self, remote: str, url: str) -> Any: ...

    def remote_change(self, remote: str, url: str) -> Any: ...

    def pull(self, remote: str, branch: Optional[str]) -> Any: ...

    def push(self, remote: str, branch: Optional[str]) -> Any: ...

    def fetch(self, remote: str) -> Any: ...

    def revert(self, changeset: str) -> Any: ...

    def lock_file(self, file: str) -> Any: ...

    def unlock_file(self, file: str, force: bool) -> Any: ...


def get_host(url: Optional[str]) -> Optional[str]:
    """Extract the host name from a clone URL.

    Handles both URL forms (https://host/owner/repo) and scp-like remotes
    (git@host:owner/repo).
    """
    if not url:
        return None
    match = _SCP_REMOTE_RE.match(url)
    if match:
        return match.group("host").lower()
    host = urlsplit(url).hostname
    return host.lower() if host else None


class Repository:
    """Read-through view of one repository's cached state."""

    def __init__(self, local_path: Union[str, Path], clone_url: Optional[str] = None):
        if local_path is None or str(local_path) == "":
            raise ValueError("local_path is required")
        self.local_path = Path(local_path)
        self._clone_url = clone_url
        self._manager: Optional[RepositoryManager] = None

        self.status_changed = EventHook("repository.status_changed")
        self.locks_changed = EventHook("repository.locks_changed")
        self.branch_lists_changed = EventHook("repository.branch_lists_changed")
        self.repository_info_changed = EventHook("repository.repository_info_changed")
        self.log_changed = EventHook("repository.log_changed")
        self.user_changed = EventHook("repository.user_changed")

    def initialize(self, manager: RepositoryManager) -> None:
        """Attach the repository manager and follow its cache events."""
        if manager is None:
            raise ValueError("manager is required")
        if self._manager is not None:
            self._manager.cache_container.cache_updated.unsubscribe(self._on_cache_updated)
        self._manager = manager
        manager.cache_container.cache_updated.subscribe(self._on_cache_updated)
        logger.debug("repository_initialized", local_path=str(self.local_path))

    @property
    def manager(self) -> RepositoryManager:
        if self._manager is None:
            raise RepositoryNotInitializedError(
                f"Repository {self.local_path} has no repository manager"
            )
        return self._manager

    @property
    def _caches(self) -> CacheContainer:
        return self.manager.cache_container

    # ------------------------------------------------------------------
    # Cached state
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._caches.repository_info_cache.repository_name

    @property
    def current_remote(self) -> Optional[GitRemote]:
        return self._caches.repository_info_cache.current_remote

    @property
    def current_branch(self) -> Optional[GitBranch]:
        return self._caches.repository_info_cache.current_branch

    @property
    def clone_url(self) -> Optional[str]:
        """URL of the current remote, or the URL given at construction."""
        if self._manager is not None:
            remote = self.current_remote
            if remote is not None and remote.url:
                return remote.url
        return self._clone_url

    @property
    def is_github(self) -> bool:
        return get_host(self.clone_url) == GITHUB_HOST

    @property
    def local_branches(self) -> list[GitBranch]:
        return self._caches.branch_cache.local_branches

    @property
    def remote_branches(self) -> list[GitBranch]:
        return self._caches.branch_cache.remote_branches

    @property
    def current_status(self) -> GitStatus:
        return self._caches.git_status_cache.git_status

    @property
    def current_locks(self) -> list[GitLock]:
        return self._caches.git_locks_cache.git_locks

    @property
    def log(self) -> list[GitLogEntry]:
        return self._caches.git_log_cache.log

    @property
    def user(self) -> Optional[User]:
        return self._caches.git_user_cache.user

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def refresh(self) -> Any:
        if self._manager is None:
            return None
        return self._manager.refresh()

    def commit_all_files(self, message: str, body: str) -> Any:
        return self.manager.commit_all_files(message, body)

    def commit_files(self, files: list[str], message: str, body: str) -> Any:
        return self.manager.commit_files(files, message, body)

    def setup_remote(self, remote: str, remote_url: str) -> Any:
        """Add the remote if none is configured, otherwise change it."""
        if not remote or not remote.strip():
            raise ValueError("remote must not be blank")
        if not remote_url or not remote_url.strip():
            raise ValueError("remote_url must not be blank")

        current = self.current_remote
        if current is None or not current.name:
            return self.manager.remote_add(remote, remote_url)
        return self.manager.remote_change(remote, remote_url)

    def pull(self) -> Any:
        return self.manager.pull(self._require_remote().name, self._current_branch_name())

    def push(self) -> Any:
        return self.manager.push(self._require_remote().name, self._current_branch_name())

    def fetch(self) -> Any:
        return self.manager.fetch(self._require_remote().name)

    def revert(self, changeset: str) -> Any:
        return self.manager.revert(changeset)

    def request_lock(self, file: str) -> Any:
        return self.manager.lock_file(file)

    def release_lock(self, file: str, force: bool = False) -> Any:
        return self.manager.unlock_file(file, force)

    def _require_remote(self) -> GitRemote:
        remote = self.current_remote
        if remote is None or not remote.name:
            raise NoRemoteConfiguredError(f"Repository {self.local_path} has no current remote")
        return remote

    def _current_branch_name(self) -> Optional[str]:
        branch = self.current_branch
        return branch.name if branch is not None else None

    # ------------------------------------------------------------------
    # Change hooks
    # ------------------------------------------------------------------

    def _on_cache_updated(self, cache_type: CacheType, timestamp: Any) -> None:
        if cache_type is CacheType.GIT_STATUS:
            self.status_changed.fire(self.current_status)
        elif cache_type is CacheType.GIT_LOCKS:
            self.locks_changed.fire(self.current_locks)
        elif cache_type is CacheType.BRANCH:
            self.branch_lists_changed.fire()
        elif cache_type is CacheType.REPOSITORY_INFO:
            self.repository_info_changed.fire()
        elif cache_type is CacheType.GIT_LOG:
            self.log_changed.fire()
        elif cache_type is CacheType.GIT_USER:
            self.user_changed.fire()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Repository):
            return NotImplemented
        return self.local_path == other.local_path

    def __hash__(self) -> int:
        return hash(self.local_path)

    def __repr__(self) -> str:
        return f"Repository(local_path={str(self.local_path)!r}, clone_url={self._clone_url!r})"
