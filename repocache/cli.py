"""CLI entry point for repocache.

Inspects and clears the cache snapshots persisted for a repository, and
manages its settings.
"""

from pathlib import Path
from typing import Optional

import typer
import yaml

from repocache import __version__
from repocache.cache.snapshots import SnapshotStore
from repocache.config import DEFAULT_CONFIG, get_config_file, load_settings, set_config_value
from repocache.exceptions import ConfigError, SnapshotError
from repocache.logs import configure_logging
from repocache.models import CacheType

app = typer.Typer(
    name="repocache",
    help="repocache: inspect cached git repository state",
    add_completion=False,
)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage repocache settings in .repocache/config.yaml",
    add_completion=False,
)
app.add_typer(config_app, name="config")

CACHE_NAMES = ", ".join(cache_type.value for cache_type in CacheType)

RootOption = typer.Option(
    Path("."),
    "--root",
    "-r",
    help="Repository root directory.",
    file_okay=False,
    resolve_path=True,
)


def _open_store(root: Path) -> SnapshotStore:
    """Load settings for a repository and return its snapshot store."""
    try:
        settings = load_settings(root)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    configure_logging(settings.log_level, settings.log_format)
    return SnapshotStore(settings.snapshot_root(root))


def _parse_cache_type(name: Optional[str]) -> Optional[CacheType]:
    if name is None:
        return None
    try:
        return CacheType(name.lower())
    except ValueError:
        typer.echo(f"Unknown cache: {name}. Choose from: {CACHE_NAMES}", err=True)
        raise typer.Exit(1)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"repocache {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Inspect cached git repository state."""


@app.command("show")
def show_command(
    cache: Optional[str] = typer.Argument(None, help=f"Cache to show ({CACHE_NAMES})."),
    root: Path = RootOption,
) -> None:
    """Show persisted cache snapshots."""
    cache_type = _parse_cache_type(cache)
    store = _open_store(root)
    cache_types = [cache_type] if cache_type else list(store.existing())

    if not cache_types:
        typer.echo("No cache snapshots found.")
        return

    shown = 0
    for current in cache_types:
        try:
            snapshot = store.read(current)
        except SnapshotError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

        if snapshot is None:
            typer.echo(f"No snapshot for {current.value}.")
            continue

        typer.echo(f"[{current.value}]")
        typer.echo(f"  Last updated:  {snapshot.last_updated_at.isoformat()}")
        typer.echo(f"  Last verified: {snapshot.last_verified_at.isoformat()}")
        payload = yaml.safe_dump(snapshot.payload, default_flow_style=False, sort_keys=False)
        for line in payload.rstrip().splitlines():
            typer.echo(f"  {line}")
        typer.echo()
        shown += 1

    if cache_type is None:
        typer.echo(f"{shown} snapshot(s) shown.")


@app.command("clear")
def clear_command(
    cache: Optional[str] = typer.Argument(None, help=f"Cache to clear ({CACHE_NAMES})."),
    root: Path = RootOption,
) -> None:
    """Delete persisted cache snapshots."""
    cache_type = _parse_cache_type(cache)
    store = _open_store(root)

    try:
        removed = store.clear(cache_type)
    except SnapshotError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not removed:
        typer.echo("No cache snapshots to clear.")
        return

    for path in removed:
        typer.echo(f"Removed {path}")
    typer.echo(f"Cleared {len(removed)} snapshot(s).")


@app.command("paths")
def paths_command(root: Path = RootOption) -> None:
    """List snapshot file locations."""
    store = _open_store(root)
    for cache_type in CacheType:
        path = store.path_for(cache_type)
        marker = "x" if path.exists() else " "
        typer.echo(f"[{marker}] {cache_type.value}: {path}")


@config_app.command("show")
def config_show(root: Path = RootOption) -> None:
    """Show effective settings, including environment overrides."""
    try:
        settings = load_settings(root)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    config_file = get_config_file(root)
    source = config_file if config_file.exists() else "defaults"
    typer.echo(f"Current repocache configuration ({source}):")
    typer.echo()
    for key in DEFAULT_CONFIG:
        typer.echo(f"  {key}: {getattr(settings, key)}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help=f"Setting name ({', '.join(DEFAULT_CONFIG)})."),
    value: str = typer.Argument(..., help="New value."),
    root: Path = RootOption,
) -> None:
    """Set one value in config.yaml."""
    try:
        settings = set_config_value(root, key, value)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {key} set to: {getattr(settings, key)}")
