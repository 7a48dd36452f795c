"""Snapshot persistence for managed caches.

Contains:
- CacheSnapshot: Payload and timestamps of one cache
- SnapshotStore: Reads and writes snapshots as YAML files

The store is the save callback handed to each cache; caches never touch
the file system themselves.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml
from pydantic import AwareDatetime, BaseModel, ValidationError

from repocache.cache.paths import get_snapshot_file, get_snapshot_files
from repocache.config import VALIDATION_ORDER
from repocache.exceptions import SnapshotError
from repocache.models import CacheType

if TYPE_CHECKING:
    from repocache.cache.base import ManagedCache


class CacheSnapshot(BaseModel):
    """Durable record of one cache.

    Timestamps must carry a timezone; naive values fail validation.
    """

    cache_type: CacheType
    last_updated_at: AwareDatetime
    last_verified_at: AwareDatetime
    payload: dict[str, Any]


class SnapshotStore:
    """YAML snapshot files under <snapshot_root>/cache/."""

    def __init__(self, snapshot_root: Path):
        self.snapshot_root = Path(snapshot_root)

    def path_for(self, cache_type: CacheType) -> Path:
        return get_snapshot_file(self.snapshot_root, cache_type)

    def save(self, cache: "ManagedCache[Any]") -> None:
        """Write the cache's current snapshot. Used as a cache save callback."""
        self.write(cache.snapshot())

    def write(self, snapshot: CacheSnapshot) -> Path:
        """Write a snapshot to its file.

        Returns:
            Path of the written file.

        Raises:
            SnapshotError: If the file cannot be written.
        """
        path = self.path_for(snapshot.cache_type)
        data = snapshot.model_dump(mode="json")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
        except (OSError, yaml.YAMLError) as e:
            raise SnapshotError(f"Failed to write snapshot {path}: {e}")
        return path

    def read(self, cache_type: CacheType) -> Optional[CacheSnapshot]:
        """Read the snapshot of a cache domain.

        Returns:
            The snapshot, or None if no snapshot file exists.

        Raises:
            SnapshotError: If the file exists but cannot be parsed.
        """
        path = self.path_for(cache_type)
        if not path.exists():
            return None

        try:
            data = yaml.safe_load(path.read_text())
        except (OSError, yaml.YAMLError) as e:
            raise SnapshotError(f"Failed to read snapshot {path}: {e}")

        try:
            snapshot = CacheSnapshot.model_validate(data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid snapshot {path}: {e}")

        if snapshot.cache_type is not cache_type:
            raise SnapshotError(
                f"Snapshot {path} holds {snapshot.cache_type.value}, expected {cache_type.value}"
            )
        return snapshot

    def load(self, cache: "ManagedCache[Any]") -> bool:
        """Restore a cache from its snapshot, if one exists.

        Returns:
            True if a snapshot was restored, False if none was found.
        """
        snapshot = self.read(cache.cache_type)
        if snapshot is None:
            return False
        cache.restore(snapshot)
        return True

    def clear(self, cache_type: Optional[CacheType] = None) -> list[Path]:
        """Remove snapshot files.

        Args:
            cache_type: Only remove this domain's snapshot. All if None.

        Returns:
            Paths that were removed.
        """
        cache_types = [cache_type] if cache_type is not None else list(VALIDATION_ORDER)
        removed = []
        for current in cache_types:
            path = self.path_for(current)
            if path.exists():
                try:
                    path.unlink()
                except OSError as e:
                    raise SnapshotError(f"Failed to remove snapshot {path}: {e}")
                removed.append(path)
        return removed

    def existing(self) -> dict[CacheType, Path]:
        """Return snapshot files that exist, in validation order."""
        return {
            cache_type: path
            for cache_type, path in get_snapshot_files(self.snapshot_root).items()
            if path.exists()
        }
