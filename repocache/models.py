"""Data models for repocache.

Contains:
- CacheType: Tag identifying one of the six cache domains
- GitBranch, GitRemote: Branch and remote records
- GitLogEntry: A single commit in the log
- GitStatusEntry, GitStatus: Working tree status
- GitLock: A file lock held on the remote
- User: Configured git user identity

All records are frozen so that values handed out by a cache cannot be
mutated behind its back.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class CacheType(Enum):
    """The six cache domains."""

    BRANCH = "branch"
    GIT_LOG = "git_log"
    REPOSITORY_INFO = "repository_info"
    GIT_STATUS = "git_status"
    GIT_LOCKS = "git_locks"
    GIT_USER = "git_user"


class GitBranch(BaseModel):
    """A local or remote branch."""

    model_config = ConfigDict(frozen=True)

    name: str
    tracking: str = ""  # Upstream branch, e.g. "origin/main"
    is_active: bool = False


class GitRemote(BaseModel):
    """A configured remote."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = ""
    fetch_url: str = ""
    push_url: str = ""
    user: str = ""
    host: str = ""


class GitLogEntry(BaseModel):
    """A single commit in the repository log."""

    model_config = ConfigDict(frozen=True)

    commit_id: str
    author_name: str = ""
    author_email: str = ""
    summary: str = ""
    description: str = ""
    time: Optional[datetime] = None
    changes: tuple[str, ...] = ()  # Paths touched by the commit


class GitStatusEntry(BaseModel):
    """Status of a single path in the working tree."""

    model_config = ConfigDict(frozen=True)

    path: str
    status: str  # Porcelain status code, e.g. "M", "A", "??"
    staged: bool = False
    original_path: Optional[str] = None  # For renames


class GitStatus(BaseModel):
    """Working tree status relative to the tracked branch."""

    model_config = ConfigDict(frozen=True)

    local_branch: str = ""
    remote_branch: str = ""
    ahead: int = 0
    behind: int = 0
    entries: tuple[GitStatusEntry, ...] = ()


class GitLock(BaseModel):
    """A file lock (git-lfs style)."""

    model_config = ConfigDict(frozen=True)

    path: str
    owner: str = ""
    locked_at: Optional[datetime] = None
    id: str = ""


class User(BaseModel):
    """The configured git user."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""

    def __str__(self) -> str:
        return f"Name: {self.name} Email: {self.email}"
