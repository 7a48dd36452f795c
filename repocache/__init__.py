"""Cached, disk-persisted mirror of git repository state."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("repocache")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
