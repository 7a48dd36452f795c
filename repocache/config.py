"""Configuration for repocache.

Settings are read from <repo_root>/.repocache/config.yaml, merged with
defaults for any missing keys, and finally overridden by environment
variables (a .env file is honoured):

- REPOCACHE_TTL_SECONDS: staleness window for every cache
- REPOCACHE_LOG_LEVEL: structlog level name
- REPOCACHE_LOG_FORMAT: "console" or "json"

The .env file is read when settings are loaded, not on import.
"""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from repocache.exceptions import ConfigError
from repocache.models import CacheType

# Staleness window shared by all six domains
DEFAULT_TTL_SECONDS = 0.5

# Timestamp of a cache that has never been updated
NEVER = datetime.min.replace(tzinfo=timezone.utc)

# Order used by validate_all / invalidate_all
VALIDATION_ORDER = (
    CacheType.BRANCH,
    CacheType.GIT_LOG,
    CacheType.REPOSITORY_INFO,
    CacheType.GIT_STATUS,
    CacheType.GIT_LOCKS,
    CacheType.GIT_USER,
)

CONFIG_DIR_NAME = ".repocache"

# Environment variable -> settings field
ENV_OVERRIDES = {
    "REPOCACHE_TTL_SECONDS": "ttl_seconds",
    "REPOCACHE_LOG_LEVEL": "log_level",
    "REPOCACHE_LOG_FORMAT": "log_format",
}

DEFAULT_CONFIG: dict[str, Any] = {
    "ttl_seconds": DEFAULT_TTL_SECONDS,
    "snapshot_dir": CONFIG_DIR_NAME,
    "log_level": "INFO",
    "log_format": "console",
}


class CacheSettings(BaseModel):
    """Validated repocache settings."""

    ttl_seconds: float = Field(default=DEFAULT_TTL_SECONDS, ge=0)
    snapshot_dir: str = CONFIG_DIR_NAME  # Relative to the repository root
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self.ttl_seconds)

    def snapshot_root(self, repo_root: Path) -> Path:
        """Resolve the snapshot directory against a repository root."""
        path = Path(self.snapshot_dir)
        if path.is_absolute():
            return path
        return repo_root / path


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .repocache/config.yaml.
    """
    return repo_root / CONFIG_DIR_NAME / "config.yaml"


def load_config(repo_root: Path) -> dict[str, Any]:
    """Load the raw configuration dictionary.

    Missing keys are filled from DEFAULT_CONFIG. A missing file yields the
    defaults; it is not created.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Configuration dictionary.

    Raises:
        ConfigError: If the file exists but cannot be parsed.
    """
    config = DEFAULT_CONFIG.copy()
    config_file = get_config_file(repo_root)

    if not config_file.exists():
        return config

    try:
        with open(config_file, "r") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config in {config_file} must be a mapping")

    config.update(loaded)
    return config


def save_config(repo_root: Path, config: dict[str, Any]) -> None:
    """Save the configuration dictionary to config.yaml.

    Args:
        repo_root: The root directory of the git repository.
        config: Configuration dictionary to save.
    """
    config_file = get_config_file(repo_root)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Failed to save config to {config_file}: {e}")


def load_settings(repo_root: Path) -> CacheSettings:
    """Load settings from config.yaml and the environment.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        CacheSettings with environment overrides applied.

    Raises:
        ConfigError: If the file cannot be parsed or a value is invalid.
    """
    load_dotenv()
    config = load_config(repo_root)

    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            config[key] = value

    try:
        return CacheSettings(**config)
    except ValidationError as e:
        raise ConfigError(f"Invalid repocache configuration: {e}")


def set_config_value(repo_root: Path, key: str, value: Any) -> CacheSettings:
    """Validate and persist a single configuration value.

    Environment overrides are not applied; only the file is changed.

    Args:
        repo_root: The root directory of the git repository.
        key: A key of DEFAULT_CONFIG.
        value: New value, coerced by CacheSettings.

    Returns:
        The settings as written to config.yaml.

    Raises:
        ConfigError: If the key is unknown, the value is invalid, or the
            file cannot be read or written.
    """
    if key not in DEFAULT_CONFIG:
        raise ConfigError(f"Unknown config key: {key}. Choose from: {', '.join(DEFAULT_CONFIG)}")

    config = load_config(repo_root)
    config[key] = value
    try:
        settings = CacheSettings(**config)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {e}")

    save_config(repo_root, {name: getattr(settings, name) for name in DEFAULT_CONFIG})
    return settings
